from argparse import ArgumentParser
from pathlib import Path
import time

import pandas as pd

from main_config import DEF_THRESHOLD, RANDOM_STATE, TEST_SPLIT
from notebooks.config import setup
from notebooks.constants import CATEGORICAL_FEATURES, NUMERIC_FEATURES, TARGET
from notebooks.logging_config import MyLogger
from income_code.config import LOG_DIR, PLOTS_DIR, RAW_DATA_FILE
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.data_utils import load_df
from income_code.ml_pipeline.eda import run_eda
from income_code.ml_pipeline.evaluation.evaluate import evaluate, infer
from income_code.ml_pipeline.evaluation.objects import EvaluationResult
from income_code.ml_pipeline.evaluation.reporting import display_confusion_matrix, display_ROC_curve
from income_code.ml_pipeline.models import LogisticRegressionWrapper, ModelWrapperBase
from income_code.ml_pipeline.training.train import fit_model, split_train_test
from income_code.ml_pipeline.training.utils import analyze_features
import income_code.ml_pipeline.preprocessing.data_engineering as de
import income_code.ml_pipeline.preprocessing.feature_config as ftr_cfg
import income_code.ml_pipeline.preprocessing.preprocessing as prep


def prepare_df(
    df: pd.DataFrame,
    group_mappings: dict = None,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> pd.DataFrame:
    """Cleans the raw census frame and re-buckets its categorical levels. The target stays textual."""
    logger.log_check("Starting data preparation...")

    df = prep.drop_cols(df=df, cols=ftr_cfg.DROP_COLS, logger=logger)
    df = prep.strip_categories(df=df, logger=logger)
    df = prep.drop_invalid_rows(df=df, row_filters=ftr_cfg.ROW_FILTERS, logger=logger)

    # [STAGE 1] Re-bucketing
    df = de.regroup_categories(
        df=df,
        mappings=group_mappings if group_mappings is not None else ftr_cfg.GROUP_MAPPINGS,
        logger=logger,
    )
    df = prep.rename_cols(df=df, renames=ftr_cfg.COLUMN_RENAMES, logger=logger)

    # [STAGE 2] Missing values
    df = prep.mark_missing(df=df, markers=ftr_cfg.MISSING_MARKERS, logger=logger)
    prep.report_missing(df=df, logger=logger)
    df = prep.drop_missing_rows(df=df, logger=logger)

    # [STAGE 3] Dtypes
    df = prep.to_categorical(df=df, cols=CATEGORICAL_FEATURES, logger=logger)

    logger.log_result(f"Data preparation finished. Final shape: {df.shape}")
    return df


def run_pipeline(
    df: pd.DataFrame,
    model_wrapper: ModelWrapperBase = None,
    threshold: float = DEF_THRESHOLD,
    random_state: int = RANDOM_STATE,
    test_size: float = TEST_SPLIT,
    group_mappings: dict = None,
    skip_eda: bool = False,
    skip_plots: bool = False,
    plots_dir: Path = None,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> EvaluationResult:
    # =============================================================================
    # PREPARATION & EDA
    # =============================================================================
    df = prepare_df(df=df, group_mappings=group_mappings, logger=logger)

    if not skip_eda and not skip_plots:
        run_eda(df=df, save_dir=plots_dir, logger=logger)
    else:
        logger.log_result("Skipping exploratory plots...")

    df = prep.encode_target(df=df, logger=logger)

    # =============================================================================
    # TRAINING
    # =============================================================================
    analyze_features(df=df, target=TARGET, logger=logger)

    X_train, X_test, y_train, y_test = split_train_test(
        df=df, target=TARGET, random_state=random_state, test_size=test_size, logger=logger
    )

    if model_wrapper is None:
        model_wrapper = LogisticRegressionWrapper(
            random_state=random_state,
            logger=logger,
            numeric_features=[col for col in NUMERIC_FEATURES if col in X_train.columns],
            categorical_features=[col for col in CATEGORICAL_FEATURES if col in X_train.columns],
        )

    scorer = fit_model(model_wrapper=model_wrapper, X_train=X_train, y_train=y_train, logger=logger)

    if isinstance(model_wrapper, LogisticRegressionWrapper):
        logger.log_result(f"Fitted coefficients:\n{model_wrapper.coefficients()}")

    # =============================================================================
    # EVALUATION
    # =============================================================================
    records = infer(scorer=scorer, X_test=X_test, y_test=y_test, logger=logger)
    result = evaluate(records=records, threshold=threshold, logger=logger)

    if not skip_plots:
        display_confusion_matrix(
            result.confusion_matrix,
            save_path=None if plots_dir is None else Path(plots_dir) / "confusion_matrix.png",
            logger=logger,
        )
        display_ROC_curve(
            result.roc_points,
            roc_auc=result.roc_auc,
            save_path=None if plots_dir is None else Path(plots_dir) / "roc_curve.png",
            logger=logger,
        )

    return result


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Census income EDA and logistic regression evaluation.")
    parser.add_argument(
        "--data",
        type=Path,
        required=False,
        default=RAW_DATA_FILE,
        help="Path to the raw census CSV file.",
    )
    parser.add_argument(
        "--groups-file",
        type=Path,
        required=False,
        default=None,
        help="YAML file overriding the categorical re-bucketing ({column: {group: [categories]}}).",
    )
    parser.add_argument(
        "--threshold",
        type=float,
        required=False,
        default=DEF_THRESHOLD,
        help="Decision threshold; scores strictly above it are classified as >50K.",
    )
    parser.add_argument(
        "--test-size",
        type=float,
        required=False,
        default=TEST_SPLIT,
        help="Share of rows held out for evaluation.",
    )
    parser.add_argument(
        "--random-state",
        type=int,
        required=False,
        default=RANDOM_STATE,
        help="Seed of the train/test split.",
    )
    parser.add_argument(
        "--skip-eda",
        action="store_true",
        required=False,
        default=False,
        help="Exploratory plots are skipped.",
    )
    parser.add_argument(
        "--skip-plots",
        action="store_true",
        required=False,
        default=False,
        help="No plots are drawn at all.",
    )
    parser.add_argument(
        "--plots-dir",
        type=Path,
        required=False,
        default=None,
        help=f"Save plots into this directory instead of showing them (e.g. {PLOTS_DIR}).",
    )
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    script_logger = MyLogger(label="PIPELINE", section_name="INCOME PIPELINE SCRIPT", file_log_path=LOG_DIR / "pipeline_log.log")
    script_logger.start_session()

    if not 0.0 <= args.threshold <= 1.0:
        err_msg = f"Invalid argument (threshold) value: {args.threshold}"
        script_logger.logger.error(err_msg)
        raise ValueError(err_msg)

    setup()
    start = time.time()

    group_mappings = None
    if args.groups_file is not None:
        group_mappings = de.load_group_mappings(args.groups_file, logger=script_logger)

    df = load_df(args.data, logger=script_logger)
    result = run_pipeline(
        df=df,
        threshold=args.threshold,
        random_state=args.random_state,
        test_size=args.test_size,
        group_mappings=group_mappings,
        skip_eda=args.skip_eda,
        skip_plots=args.skip_plots,
        plots_dir=args.plots_dir,
        logger=script_logger,
    )

    end = time.time()
    script_logger.log_result(f"Pipeline time: {end - start:.2f} seconds.")
    script_logger.log_result(f"Summary: {result.to_dict()['metrics']} | AUC: {result.roc_auc:.4f}")
    return result


if __name__ == "__main__":
    main()
