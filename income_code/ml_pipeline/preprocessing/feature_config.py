__ALL__ = ['GROUP_MAPPINGS', 'COLUMN_RENAMES', 'DROP_COLS', 'MISSING_MARKERS', 'ROW_FILTERS']

from notebooks.constants import INDEX_COL


EMPLOYER_GROUPS = {
    "SL-gov": ["Local-gov", "State-gov"],
    "self-emp": ["Self-emp-inc", "Self-emp-not-inc"],
    "Unemployed": ["Never-worked", "Without-pay"],
}

MARITAL_GROUPS = {
    "Married": ["Married-AF-spouse", "Married-civ-spouse", "Married-spouse-absent"],
    "Not-Married": ["Divorced", "Separated", "Widowed"],
    "Never-Married": ["Never-married"],
}

OCCUPATION_GROUPS = {
    "White-Collar": ["Adm-clerical", "Exec-managerial", "Prof-specialty", "Sales", "Tech-support"],
    "Blue-Collar": ["Craft-repair", "Farming-fishing", "Handlers-cleaners", "Machine-op-inspct", "Transport-moving"],
    "Service": ["Other-service", "Priv-house-serv", "Protective-serv"],
    "Military": ["Armed-Forces"],
}

REGION_GROUPS = {
    "Asia": [
        "China", "Hong", "India", "Iran", "Cambodia", "Japan",
        "Laos", "Philippines", "Vietnam", "Taiwan", "Thailand",
    ],
    "North.America": ["Canada", "United-States", "Puerto-Rico"],
    "Europe": [
        "England", "France", "Germany", "Greece", "Holand-Netherlands", "Hungary",
        "Ireland", "Italy", "Poland", "Portugal", "Scotland", "Yugoslavia",
    ],
    "Latin.and.South.America": [
        "Columbia", "Cuba", "Dominican-Republic", "Ecuador", "El-Salvador",
        "Guatemala", "Haiti", "Honduras", "Mexico", "Nicaragua",
        "Outlying-US(Guam-USVI-etc)", "Peru", "Jamaica", "Trinadad&Tobago",
    ],
    "Other": ["South"],
}

GROUP_MAPPINGS = {
    "type_employer": EMPLOYER_GROUPS,
    "marital": MARITAL_GROUPS,
    "occupation": OCCUPATION_GROUPS,
    "country": REGION_GROUPS,
}

COLUMN_RENAMES = {"country": "region"}

DROP_COLS = [
    INDEX_COL,
]

MISSING_MARKERS = ["?"]

ROW_FILTERS = {
    "age": lambda s: s > 0,
    "hr_per_week": lambda s: s > 0,
}
