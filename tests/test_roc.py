import math
import random

import numpy as np
import pytest
from sklearn.metrics import roc_auc_score
from sklearn.metrics import roc_curve as sk_roc_curve

from income_code.ml_pipeline.evaluation.errors import UndefinedMetric
from income_code.ml_pipeline.evaluation.metrics import (
    confusion_matrix_at,
    false_positive_rate,
    true_positive_rate,
)
from income_code.ml_pipeline.evaluation.objects import RocPoint, ScoredRecord
from income_code.ml_pipeline.evaluation.roc import RocCurve, auc, roc_auc, roc_curve


def test_curve_starts_at_origin_and_ends_at_one(noisy_records):
    points = roc_curve(noisy_records)

    assert points[0].as_tuple() == (0.0, 0.0)
    assert points[-1].as_tuple() == (1.0, 1.0)


def test_curve_is_monotone(noisy_records):
    points = roc_curve(noisy_records)

    for p1, p2 in zip(points, points[1:]):
        assert p2.false_positive_rate >= p1.false_positive_rate
        assert p2.true_positive_rate >= p1.true_positive_rate
        assert p2.threshold < p1.threshold


def test_points_match_classifying_every_record(noisy_records):
    curve = RocCurve(noisy_records)

    for point in curve:
        cm = confusion_matrix_at(noisy_records, threshold=point.threshold) if math.isfinite(point.threshold) else None
        if cm is None:
            continue
        assert point.false_positive_rate == false_positive_rate(cm)
        assert point.true_positive_rate == true_positive_rate(cm)


def test_one_point_per_candidate_threshold(four_records):
    curve = RocCurve(four_records)

    assert curve.thresholds == [math.inf, 0.9, 0.4, 0.3, 0.2, -math.inf]
    assert len(curve) == len(list(curve)) == 6


def test_curve_is_restartable(noisy_records):
    curve = RocCurve(noisy_records)
    assert list(curve) == list(curve)


def test_perfect_separation_gives_auc_of_one(four_records):
    assert roc_auc(four_records) == 1.0


def test_reversed_scores_give_auc_of_zero(four_records):
    reversed_records = [
        ScoredRecord(actual_label=r.actual_label, predicted_score=1 - r.predicted_score)
        for r in four_records
    ]
    assert roc_auc(reversed_records) == 0.0


def test_constant_scores_give_chance_auc():
    records = [ScoredRecord(label, 0.5) for label in (0, 1, 0, 1)]
    assert roc_auc(records) == 0.5


def test_auc_is_permutation_invariant(noisy_records):
    shuffled = list(noisy_records)
    random.Random(3).shuffle(shuffled)

    assert roc_auc(shuffled) == roc_auc(noisy_records)
    assert roc_curve(shuffled) == roc_curve(noisy_records)


def test_auc_changes_with_scores(noisy_records):
    changed = list(noisy_records)
    first = changed[0]
    changed[0] = ScoredRecord(first.actual_label, 1.0 if first.actual_label == 0 else 0.0)

    assert roc_auc(changed) != roc_auc(noisy_records)


def test_matches_sklearn(noisy_records):
    labels = [r.actual_label for r in noisy_records]
    scores = [r.predicted_score for r in noisy_records]

    assert roc_auc(noisy_records) == pytest.approx(roc_auc_score(labels, scores))

    fpr, tpr, _ = sk_roc_curve(labels, scores, drop_intermediate=False)
    points = {p.as_tuple() for p in roc_curve(noisy_records)}
    assert points == {(float(x), float(y)) for x, y in zip(fpr, tpr)}


@pytest.mark.parametrize("labels", [[1, 1, 1], [0, 0], []])
def test_single_class_curve_is_undefined(labels):
    records = [ScoredRecord(label, 0.5) for label in labels]

    with pytest.raises(UndefinedMetric):
        RocCurve(records)
    with pytest.raises(UndefinedMetric):
        roc_auc(records)


def test_auc_needs_two_points():
    with pytest.raises(UndefinedMetric):
        auc([])
    with pytest.raises(UndefinedMetric):
        auc([RocPoint(0.0, 0.0)])


def test_trapezoid_area():
    points = [RocPoint(0.0, 0.0), RocPoint(0.5, 0.5), RocPoint(0.5, 1.0), RocPoint(1.0, 1.0)]
    assert auc(points) == pytest.approx(0.125 + 0.5)


def test_accepts_numpy_scores():
    labels = np.array([0, 1, 1, 0])
    scores = np.array([0.1, 0.8, 0.6, 0.7])
    records = [ScoredRecord(l, s) for l, s in zip(labels, scores)]

    assert roc_auc(records) == pytest.approx(0.75)
