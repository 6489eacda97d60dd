from pathlib import Path
from typing import Dict, Iterable, Mapping

import pandas as pd
import yaml

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER

# column -> target group -> source categories
GroupMappings = Dict[str, Dict[str, Iterable[str]]]


def invert_groups(groups: Mapping[str, Iterable[str]]) -> Dict[str, str]:
    """
    Turns {group: [categories]} into a {category: group} lookup table.

    A category listed under two groups is ambiguous and rejected.
    """
    lookup: Dict[str, str] = {}

    for group, categories in groups.items():
        for category in categories:
            if category in lookup and lookup[category] != group:
                raise ValueError(
                    f"Category '{category}' is mapped to both '{lookup[category]}' and '{group}'."
                )
            lookup[category] = group

    return lookup


def regroup_categories(
    df: pd.DataFrame,
    mappings: GroupMappings,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> pd.DataFrame:
    logger.log_check("Re-bucketing categorical levels...")

    missing = [col for col in mappings if col not in df.columns]
    if missing:
        err_msg = f"Mapped columns not present in the dataframe: {missing}"
        logger.logger.error(err_msg)
        raise KeyError(err_msg)

    df = df.copy()
    for col, groups in mappings.items():
        lookup = invert_groups(groups)
        n_levels_before = df[col].nunique()

        # unmapped levels keep their original value
        df[col] = df[col].map(lambda value: lookup.get(value, value))

        logger.log_result(
            f"Regrouped '{col}': {n_levels_before} -> {df[col].nunique()} levels"
        )

    logger.log_result("Re-bucketing completed.")
    return df


def load_group_mappings(path: Path, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> GroupMappings:
    logger.log_check(f"Loading category groups from {path}...")

    with open(path, "r", encoding="utf-8") as f:
        mappings = yaml.safe_load(f) or {}

    if not isinstance(mappings, dict) or not all(
        isinstance(groups, dict)
        and all(isinstance(categories, list) for categories in groups.values())
        for groups in mappings.values()
    ):
        err_msg = f"Category groups in {path} must have the shape {{column: {{group: [categories]}}}}"
        logger.logger.error(err_msg)
        raise TypeError(err_msg)

    logger.log_result(f"Loaded groups for columns: {list(mappings)}")
    return mappings
