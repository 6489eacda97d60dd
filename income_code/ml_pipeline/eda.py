from pathlib import Path
from typing import List

from matplotlib import pyplot as plt
import pandas as pd
import seaborn as sns

from notebooks.constants import TARGET
from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.evaluation.reporting import finish_plot


def _plot_path(save_dir: Path, filename: str):
    return None if save_dir is None else Path(save_dir) / filename


def summarize(df: pd.DataFrame, target: str = TARGET, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    logger.log_check("Summarizing the dataset...")
    logger.log_result(f"Shape: {df.shape}")
    logger.log_result(f"Dtypes:\n{df.dtypes}")
    logger.log_result(f"Numeric summary:\n{df.describe().T}")

    if target in df.columns:
        logger.log_result(f"Target balance:\n{df[target].value_counts(normalize=True)}")

    logger.log_result("Summary completed.")


def plot_age_by_income(df: pd.DataFrame, target: str = TARGET, save_dir: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.histplot(data=df, x="age", hue=target, binwidth=1, multiple="stack", palette="coolwarm", ax=ax)
    ax.set_title("Age Distribution by Income")
    ax.set_xlabel("Age")
    ax.set_ylabel("Count")
    finish_plot(fig, save_path=_plot_path(save_dir, "age_by_income.png"), logger=logger)
    return fig


def plot_hours_per_week(df: pd.DataFrame, save_dir: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.histplot(data=df, x="hr_per_week", bins=30, ax=ax)
    ax.set_title("Hours Worked per Week")
    ax.set_xlabel("Hours per week")
    ax.set_ylabel("Count")
    finish_plot(fig, save_path=_plot_path(save_dir, "hours_per_week.png"), logger=logger)
    return fig


def plot_region_by_income(df: pd.DataFrame, target: str = TARGET, save_dir: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.countplot(data=df, x="region", hue=target, order=df["region"].value_counts().index, palette="viridis", ax=ax)
    ax.set_title("Income Class by Region")
    ax.set_xlabel("Region")
    ax.set_ylabel("Count")
    ax.tick_params(axis="x", rotation=45)
    finish_plot(fig, save_path=_plot_path(save_dir, "region_by_income.png"), logger=logger)
    return fig


def plot_capital_gain(df: pd.DataFrame, target: str = TARGET, save_dir: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.boxplot(data=df, x=target, y="capital_gain", ax=ax)
    ax.set_title("Capital Gain by Income")
    ax.set_xlabel("Income")
    ax.set_ylabel("Capital gain")
    finish_plot(fig, save_path=_plot_path(save_dir, "capital_gain_by_income.png"), logger=logger)
    return fig


def run_eda(df: pd.DataFrame, target: str = TARGET, save_dir: Path = None, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> List:
    logger.log_check("Starting exploratory analysis...")
    summarize(df, target=target, logger=logger)

    figures = [
        plot_age_by_income(df, target=target, save_dir=save_dir, logger=logger),
        plot_hours_per_week(df, save_dir=save_dir, logger=logger),
        plot_region_by_income(df, target=target, save_dir=save_dir, logger=logger),
        plot_capital_gain(df, target=target, save_dir=save_dir, logger=logger),
    ]

    logger.log_result(f"Exploratory analysis finished ({len(figures)} plots).")
    return figures
