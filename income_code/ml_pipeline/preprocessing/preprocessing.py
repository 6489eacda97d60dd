import pandas as pd
from typing import Callable, Dict, Iterable, Mapping

import numpy as np
from pandas import DataFrame, Series

from notebooks.constants import TARGET, TARGET_ENCODING
from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER


def drop_invalid_rows(
    df: DataFrame,
    row_filters: Dict[str, Callable[[Series], Series]],
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
    print_to_console: bool = True,
    sanity_check: bool = False,
) -> DataFrame:
    logger.log_check(
        "Applying row-level filters on numeric features...",
        print_to_console=print_to_console,
    )

    for col in row_filters:
        if col not in df.columns.to_list():
            err_msg = f"Filter column '{col}' is not present in the dataframe."
            logger.logger.error(err_msg)
            raise ValueError(err_msg)

    # Build combined mask (AND across all filters)
    valid_mask = Series(True, index=df.index)

    for col, predicate in row_filters.items():
        col_mask = predicate(df[col])
        valid_mask &= col_mask

        n_dropped = (~col_mask).sum()
        logger.log_result(f"Dropping {n_dropped} rows due to filter on '{col}'", print_to_console=print_to_console)

    df = df[valid_mask].reset_index(drop=True)

    if sanity_check:
        for col, predicate in row_filters.items():
            if not predicate(df[col]).all():
                raise AssertionError(
                    f"Filtering failed: column '{col}' still contains invalid rows."
                )

    return df


def drop_cols(
    df: pd.DataFrame, cols: Iterable[str], logger: MyLogger = DEF_NOTEBOOK_LOGGER
):
    logger.log_check("Dropping the specified columns...")

    start_cols = set(df.columns)

    df = df.drop(columns=cols, errors="ignore")

    end_cols = set(df.columns)

    logger.log_result("Dropping completed.")
    logger.log_result(f"Columns dropped: {len(start_cols - end_cols)}")
    logger.log_result(f"Columns remaining: {len(end_cols)}")
    return df


def strip_categories(df: pd.DataFrame, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> pd.DataFrame:
    """Trims surrounding whitespace in every text column (the raw census file pads its values)."""
    logger.log_check("Stripping whitespace in text columns...")
    df = df.copy()

    text_cols = df.select_dtypes(include=["object", "string"]).columns
    for col in text_cols:
        df[col] = df[col].str.strip()

    logger.log_result(f"Stripped {len(text_cols)} text columns.")
    return df


def mark_missing(
    df: pd.DataFrame,
    markers: Iterable[str] = ("?",),
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> pd.DataFrame:
    logger.log_check(f"Replacing missing-value markers {list(markers)} with NaN...")
    df = df.replace(list(markers), np.nan)
    logger.log_result("Replacement completed.")
    return df


def report_missing(df: pd.DataFrame, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> pd.Series:
    missing = df.isna().sum()
    missing = missing[missing > 0].sort_values(ascending=False)

    if missing.empty:
        logger.log_result("No missing values found.")
    else:
        logger.log_result(f"Missing values per column:\n{missing}")

    return missing


def drop_missing_rows(df: pd.DataFrame, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> pd.DataFrame:
    logger.log_check("Dropping rows with missing values...")
    n_before = len(df)

    df = df.dropna().reset_index(drop=True)

    logger.log_result(f"Dropped {n_before - len(df)} rows. Rows remaining: {len(df)}")
    return df


def rename_cols(
    df: pd.DataFrame, renames: Mapping[str, str], logger: MyLogger = DEF_NOTEBOOK_LOGGER
) -> pd.DataFrame:
    missing = [col for col in renames if col not in df.columns]
    if missing:
        err_msg = f"Cannot rename missing columns: {missing}"
        logger.logger.error(err_msg)
        raise KeyError(err_msg)

    df = df.rename(columns=dict(renames))
    logger.log_result(f"Renamed columns: {dict(renames)}")
    return df


def encode_target(
    df: pd.DataFrame,
    target: str = TARGET,
    encoding: Mapping[str, int] = TARGET_ENCODING,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> pd.DataFrame:
    logger.log_check(f"Encoding target column '{target}'...")

    unknown = set(df[target].dropna().unique()) - set(encoding)
    if unknown:
        err_msg = f"Unexpected target values {sorted(map(str, unknown))}; expected one of {list(encoding)}"
        logger.logger.error(err_msg)
        raise ValueError(err_msg)

    df = df.copy()
    df[target] = df[target].map(encoding).astype(int)

    logger.log_result(f"Target encoded with {dict(encoding)}")
    logger.log_result(f"Positive class share: {df[target].mean():.2%}")
    return df


def to_categorical(
    df: pd.DataFrame, cols: Iterable[str], logger: MyLogger = DEF_NOTEBOOK_LOGGER
) -> pd.DataFrame:
    df = df.copy()
    cols = [col for col in cols if col in df.columns]

    for col in cols:
        df[col] = df[col].astype("category")

    logger.log_result(f"Converted to category dtype: {cols}")
    return df
