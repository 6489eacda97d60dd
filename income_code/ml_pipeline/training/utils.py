import pandas as pd

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER


def analyze_features(
    df: pd.DataFrame, target: str, logger: MyLogger = DEF_NOTEBOOK_LOGGER
):
    logger.log_check("Starting df feature analysis...")

    numeric_features = df.select_dtypes(include=["number", "bool"]).columns.tolist()
    if target in numeric_features:
        numeric_features.remove(target)
    logger.log_result(f"Numeric features: {numeric_features}", print_to_console=True)

    categorical_features = df.select_dtypes(include=["category", "object"]).columns.tolist()
    logger.log_result(
        f"Categorical features: {categorical_features}", print_to_console=True
    )

    logger.log_result("Analysis completed.")
    return numeric_features, categorical_features
