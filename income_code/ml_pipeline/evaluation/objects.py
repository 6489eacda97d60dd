import math
from dataclasses import asdict, dataclass, field
from typing import List, Tuple

import pandas as pd

from income_code.ml_pipeline.evaluation.errors import InvalidScore

LABELS = (0, 1)


def check_score(score: float) -> float:
    # NaN fails both comparisons, so it is rejected as well
    if not (0.0 <= score <= 1.0):
        raise InvalidScore(f"Score {score!r} is outside [0, 1].")
    return score


def check_label(label: int) -> int:
    if label not in LABELS:
        raise ValueError(f"Label {label!r} is not one of {LABELS}.")
    return int(label)


@dataclass(frozen=True)
class ScoredRecord:
    actual_label: int
    predicted_score: float

    def __post_init__(self):
        object.__setattr__(self, "actual_label", check_label(self.actual_label))
        object.__setattr__(self, "predicted_score", float(check_score(self.predicted_score)))


@dataclass(frozen=True)
class ConfusionMatrix:
    """
    2x2 counts keyed by (actual, predicted).

    tn: actual 0, predicted 0
    fp: actual 0, predicted 1
    fn: actual 1, predicted 0
    tp: actual 1, predicted 1
    """

    tn: int = 0
    fp: int = 0
    fn: int = 0
    tp: int = 0

    def __post_init__(self):
        for name in ("tn", "fp", "fn", "tp"):
            if getattr(self, name) < 0:
                raise ValueError(f"Confusion matrix cell '{name}' must be non-negative.")

    @property
    def total(self) -> int:
        return self.tn + self.fp + self.fn + self.tp

    @property
    def actual_positives(self) -> int:
        return self.tp + self.fn

    @property
    def actual_negatives(self) -> int:
        return self.tn + self.fp

    @property
    def predicted_positives(self) -> int:
        return self.tp + self.fp

    def count(self, actual: int, predicted: int) -> int:
        cells = {(0, 0): self.tn, (0, 1): self.fp, (1, 0): self.fn, (1, 1): self.tp}
        return cells[(check_label(actual), check_label(predicted))]

    def to_frame(self, margins: bool = True) -> pd.DataFrame:
        """Labelled table with actual labels as rows and predictions as columns."""
        table = pd.DataFrame(
            [[self.tn, self.fp], [self.fn, self.tp]],
            index=pd.Index(LABELS, name="actual"),
            columns=pd.Index(LABELS, name="predicted"),
        )

        if margins:
            table["All"] = table.sum(axis=1)
            table.loc["All"] = table.sum(axis=0)

        return table

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ClassificationMetrics:
    accuracy: float
    error_rate: float
    prevalence: float
    precision: float
    recall: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RocPoint:
    false_positive_rate: float
    true_positive_rate: float
    threshold: float = math.nan

    def as_tuple(self) -> Tuple[float, float]:
        return self.false_positive_rate, self.true_positive_rate


@dataclass(frozen=True)
class EvaluationResult:
    threshold: float
    n_records: int
    confusion_matrix: ConfusionMatrix
    metrics: ClassificationMetrics
    roc_points: List[RocPoint] = field(default_factory=list)
    roc_auc: float = math.nan

    def to_dict(self) -> dict:
        return {
            "threshold": self.threshold,
            "n_records": self.n_records,
            "confusion_matrix": self.confusion_matrix.to_dict(),
            "metrics": self.metrics.to_dict(),
            "roc_curve": {
                "fpr": [p.false_positive_rate for p in self.roc_points],
                "tpr": [p.true_positive_rate for p in self.roc_points],
            },
            "roc_auc": self.roc_auc,
        }
