TARGET = "income"
POSITIVE_LABEL = ">50K"
NEGATIVE_LABEL = "<=50K"
TARGET_ENCODING = {NEGATIVE_LABEL: 0, POSITIVE_LABEL: 1}

INDEX_COL = "X"

NUMERIC_FEATURES = [
    "age",
    "fnlwgt",
    "education_num",
    "capital_gain",
    "capital_loss",
    "hr_per_week",
]

CATEGORICAL_FEATURES = [
    "type_employer",
    "education",
    "marital",
    "occupation",
    "relationship",
    "race",
    "sex",
    "region",
]

RAW_COLUMNS = [INDEX_COL] + [
    "age",
    "type_employer",
    "fnlwgt",
    "education",
    "education_num",
    "marital",
    "occupation",
    "relationship",
    "race",
    "sex",
    "capital_gain",
    "capital_loss",
    "hr_per_week",
    "country",
    TARGET,
]
