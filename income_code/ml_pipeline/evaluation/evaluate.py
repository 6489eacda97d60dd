from typing import Iterable, List

import numpy as np

from main_config import DEF_THRESHOLD
from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.evaluation.metrics import compute_metrics, confusion_matrix_at
from income_code.ml_pipeline.evaluation.objects import EvaluationResult, ScoredRecord
from income_code.ml_pipeline.evaluation.roc import RocCurve, auc
from income_code.ml_pipeline.models import ProbabilityScorer


def scored_records(labels: Iterable[int], scores: Iterable[float]) -> List[ScoredRecord]:
    """Pairs actual labels with predicted scores, one record per test row."""
    labels = np.asarray(labels).tolist()
    scores = np.asarray(scores, dtype=float).tolist()

    if len(labels) != len(scores):
        raise ValueError(
            f"Got {len(labels)} labels but {len(scores)} scores; they must be paired per row."
        )

    return [ScoredRecord(actual_label=label, predicted_score=score) for label, score in zip(labels, scores)]


def infer(scorer: ProbabilityScorer, X_test, y_test, logger: MyLogger = DEF_NOTEBOOK_LOGGER) -> List[ScoredRecord]:
    logger.log_check("Scoring the test subset...")
    records = scored_records(labels=y_test, scores=scorer.score(X_test))
    logger.log_result(f"Scored {len(records)} test rows.")
    return records


def evaluate(
    records: Iterable[ScoredRecord],
    threshold: float = DEF_THRESHOLD,
    logger: MyLogger = DEF_NOTEBOOK_LOGGER,
) -> EvaluationResult:
    logger.log_check(f"Evaluating model predictions at threshold {threshold}...")
    records = list(records)

    cm = confusion_matrix_at(records, threshold=threshold)
    logger.log_result(f"Confusion matrix:\n{cm.to_frame(margins=True)}")

    metrics = compute_metrics(cm)
    logger.log_result(f"Accuracy: {metrics.accuracy:.4f}")
    logger.log_result(f"Error rate: {metrics.error_rate:.4f}")
    logger.log_result(f"Prevalence: {metrics.prevalence:.4f}")
    logger.log_result(f"Precision: {metrics.precision:.4f}")
    logger.log_result(f"Recall: {metrics.recall:.4f}")

    logger.log_check("Sweeping thresholds for the ROC curve...")
    roc_points = list(RocCurve(records))
    roc_auc = auc(roc_points)
    logger.log_result(f"ROC curve built from {len(roc_points)} points.")
    logger.log_result(f"ROC-AUC Score: {roc_auc:.4f}")

    logger.log_result("Evaluation complete.")
    return EvaluationResult(
        threshold=threshold,
        n_records=len(records),
        confusion_matrix=cm,
        metrics=metrics,
        roc_points=roc_points,
        roc_auc=roc_auc,
    )
