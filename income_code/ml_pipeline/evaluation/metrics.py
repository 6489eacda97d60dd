from typing import Iterable, List, Tuple

from main_config import DEF_THRESHOLD
from income_code.ml_pipeline.evaluation.errors import UndefinedMetric
from income_code.ml_pipeline.evaluation.objects import (
    ClassificationMetrics,
    ConfusionMatrix,
    ScoredRecord,
    check_label,
    check_score,
)


# -----------------------------------------------------------------------------
# Binary classifier
# -----------------------------------------------------------------------------


def classify(score: float, threshold: float = DEF_THRESHOLD) -> int:
    """Returns 1 when the score is strictly above the threshold, ties go to 0."""
    return 1 if check_score(score) > threshold else 0


def classify_all(scores: Iterable[float], threshold: float = DEF_THRESHOLD) -> List[int]:
    return [classify(score, threshold) for score in scores]


# -----------------------------------------------------------------------------
# Confusion matrix
# -----------------------------------------------------------------------------


def build_confusion_matrix(pairs: Iterable[Tuple[int, int]]) -> ConfusionMatrix:
    """
    Cross-tabulates (actual, predicted) label pairs in a single pass.

    Returns an all-zero matrix for empty input.
    """
    counts = {(0, 0): 0, (0, 1): 0, (1, 0): 0, (1, 1): 0}

    for actual, predicted in pairs:
        counts[(check_label(actual), check_label(predicted))] += 1

    return ConfusionMatrix(
        tn=counts[(0, 0)],
        fp=counts[(0, 1)],
        fn=counts[(1, 0)],
        tp=counts[(1, 1)],
    )


def confusion_matrix_at(
    records: Iterable[ScoredRecord], threshold: float = DEF_THRESHOLD
) -> ConfusionMatrix:
    return build_confusion_matrix(
        (record.actual_label, classify(record.predicted_score, threshold))
        for record in records
    )


# -----------------------------------------------------------------------------
# Metrics
# -----------------------------------------------------------------------------


def _ratio(numerator: int, denominator: int, metric: str) -> float:
    if denominator == 0:
        raise UndefinedMetric(f"{metric} is undefined: denominator is zero.")
    return numerator / denominator


def accuracy(cm: ConfusionMatrix) -> float:
    return _ratio(cm.tp + cm.tn, cm.total, "accuracy")


def error_rate(cm: ConfusionMatrix) -> float:
    # (fp + fn) / total, derived from accuracy so the two always sum to 1
    return 1.0 - accuracy(cm)


def prevalence(cm: ConfusionMatrix) -> float:
    return _ratio(cm.actual_positives, cm.total, "prevalence")


def precision(cm: ConfusionMatrix) -> float:
    return _ratio(cm.tp, cm.predicted_positives, "precision")


def true_positive_rate(cm: ConfusionMatrix) -> float:
    return _ratio(cm.tp, cm.actual_positives, "true positive rate")


def false_positive_rate(cm: ConfusionMatrix) -> float:
    return _ratio(cm.fp, cm.actual_negatives, "false positive rate")


recall = sensitivity = true_positive_rate


def compute_metrics(cm: ConfusionMatrix) -> ClassificationMetrics:
    acc = accuracy(cm)
    return ClassificationMetrics(
        accuracy=acc,
        error_rate=1.0 - acc,
        prevalence=prevalence(cm),
        precision=precision(cm),
        recall=recall(cm),
    )
