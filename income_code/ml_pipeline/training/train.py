import pandas as pd
from sklearn.model_selection import train_test_split

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.models import ModelWrapperBase, ProbabilityScorer


def split_train_test(
    df: pd.DataFrame,
    target: str,
    random_state: int,
    test_size: float,
    stratify: bool = True,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
):
    logger.log_check("Splitting df into train & test subsets...")
    n_rows = len(df)
    n_features = df.shape[1] - 1  # excluding target

    logger.log_result(f"Total rows before split: {n_rows}")
    logger.log_result(f"Feature count (X): {n_features}")
    logger.log_result(f"Target column: '{target}'")
    logger.log_result(f"Test size: {test_size:.2%}")

    X = df.drop(columns=[target])
    y = df[target]

    X_train, X_test, y_train, y_test = train_test_split(
        X,
        y,
        test_size=test_size,
        # keeps the >50K share equal in both subsets
        stratify=y if stratify else None,
        random_state=random_state,
    )

    logger.log_result(f"Train rows: {len(X_train)} | Test rows: {len(X_test)}")

    logger.log_result("Splitting completed.")
    return X_train, X_test, y_train, y_test


def fit_model(
    model_wrapper: ModelWrapperBase,
    X_train,
    y_train,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> ProbabilityScorer:
    logger.log_check(f"Fitting {type(model_wrapper).__name__} on {len(X_train)} rows...")
    scorer = model_wrapper.fit(X_train, y_train)
    logger.log_result("Model fit finished.")
    return scorer
