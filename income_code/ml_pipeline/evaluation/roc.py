import math
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from income_code.ml_pipeline.evaluation.errors import UndefinedMetric
from income_code.ml_pipeline.evaluation.objects import RocPoint, ScoredRecord


class RocCurve:
    """
    Threshold sweep over a fixed set of scored records.

    Candidate thresholds are +inf, every distinct score in descending order and
    -inf. At each threshold a record counts as predicted positive when its score
    is strictly above the threshold, so the first point is (0, 0) and the last
    one is (1, 1). Iterating twice yields the same points.
    """

    def __init__(self, records: Iterable[ScoredRecord]):
        # score -> [negatives, positives]
        counts: Dict[float, List[int]] = defaultdict(lambda: [0, 0])
        for record in records:
            counts[record.predicted_score][record.actual_label] += 1

        self._groups: Tuple[Tuple[float, int, int], ...] = tuple(
            (score, neg, pos)
            for score, (neg, pos) in sorted(counts.items(), key=lambda item: item[0], reverse=True)
        )
        self.n_negatives = sum(neg for _, neg, _ in self._groups)
        self.n_positives = sum(pos for _, _, pos in self._groups)

        if self.n_positives == 0:
            raise UndefinedMetric("ROC curve is undefined: no actual positives (TP + FN = 0).")
        if self.n_negatives == 0:
            raise UndefinedMetric("ROC curve is undefined: no actual negatives (FP + TN = 0).")

    @property
    def thresholds(self) -> List[float]:
        return [math.inf] + [score for score, _, _ in self._groups] + [-math.inf]

    def _point(self, fp: int, tp: int, threshold: float) -> RocPoint:
        return RocPoint(
            false_positive_rate=fp / self.n_negatives,
            true_positive_rate=tp / self.n_positives,
            threshold=threshold,
        )

    def __iter__(self) -> Iterator[RocPoint]:
        fp = tp = 0
        yield self._point(fp, tp, math.inf)

        # at threshold s only the groups scored above s are positive
        for score, neg, pos in self._groups:
            yield self._point(fp, tp, score)
            fp += neg
            tp += pos

        yield self._point(fp, tp, -math.inf)

    def __len__(self) -> int:
        return len(self._groups) + 2


def roc_curve(records: Iterable[ScoredRecord]) -> List[RocPoint]:
    return list(RocCurve(records))


def auc(points: Iterable[RocPoint]) -> float:
    """
    Trapezoidal area under ROC points ordered by ascending false positive rate.
    """
    points: Sequence[RocPoint] = list(points)
    if len(points) < 2:
        raise UndefinedMetric(f"AUC is undefined for {len(points)} ROC point(s); at least 2 are required.")

    area = 0.0
    for p1, p2 in zip(points, points[1:]):
        x1, y1 = p1.as_tuple()
        x2, y2 = p2.as_tuple()
        area += (x2 - x1) * (y1 + y2) / 2

    return area


def roc_auc(records: Iterable[ScoredRecord]) -> float:
    return auc(RocCurve(records))
