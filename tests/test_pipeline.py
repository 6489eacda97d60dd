import numpy as np
import pytest

from notebooks.constants import TARGET
from income_code.ml_pipeline.evaluation.errors import InvalidScore
from income_code.ml_pipeline.evaluation.evaluate import evaluate, scored_records
from income_code.ml_pipeline.models import LogisticRegressionWrapper, ProbabilityScorer
from income_code.ml_pipeline.pipeline import main, prepare_df, run_pipeline
import income_code.ml_pipeline.preprocessing.preprocessing as prep
from income_code.ml_pipeline.training.train import fit_model, split_train_test


class ConstantModel:
    def __init__(self, value):
        self.value = value

    def predict_proba(self, X):
        return np.column_stack([1 - np.full(len(X), self.value), np.full(len(X), self.value)])


@pytest.fixture
def prepared_df(census_df, logger):
    return prep.encode_target(prepare_df(census_df, logger=logger), logger=logger)


def test_split_is_seeded_and_stratified(prepared_df, logger):
    first = split_train_test(prepared_df, target=TARGET, random_state=5, test_size=0.3, logger=logger)
    second = split_train_test(prepared_df, target=TARGET, random_state=5, test_size=0.3, logger=logger)

    assert first[1].index.equals(second[1].index)
    assert first[3].mean() == pytest.approx(prepared_df[TARGET].mean(), abs=0.02)


def test_logistic_regression_scores_probabilities(prepared_df, logger):
    X_train, X_test, y_train, y_test = split_train_test(
        prepared_df, target=TARGET, random_state=101, test_size=0.3, logger=logger
    )
    wrapper = LogisticRegressionWrapper(random_state=101, logger=logger)

    scorer = fit_model(wrapper, X_train, y_train, logger=logger)
    scores = scorer.score(X_test)

    assert scores.shape == (len(X_test),)
    assert ((scores >= 0) & (scores <= 1)).all()

    coefs = wrapper.coefficients()
    assert coefs.index[0] == "(Intercept)"
    assert "age" in coefs.index


def test_scorer_rejects_out_of_range_scores(logger):
    scorer = ProbabilityScorer(model=ConstantModel(1.2), logger=logger)

    with pytest.raises(InvalidScore):
        scorer.score(np.zeros((3, 1)))


def test_scored_records_must_be_paired():
    with pytest.raises(ValueError):
        scored_records([0, 1], [0.3])


def test_evaluate_four_records(four_records, logger):
    result = evaluate(four_records, threshold=0.5, logger=logger)

    assert result.n_records == 4
    assert (result.confusion_matrix.tp, result.confusion_matrix.fn) == (1, 1)
    assert (result.confusion_matrix.fp, result.confusion_matrix.tn) == (0, 2)
    assert result.metrics.accuracy == 0.75
    assert result.roc_auc == 1.0

    payload = result.to_dict()
    assert payload["confusion_matrix"] == {"tn": 2, "fp": 0, "fn": 1, "tp": 1}
    assert payload["roc_curve"]["fpr"][0] == 0.0
    assert payload["roc_curve"]["tpr"][-1] == 1.0


def test_run_pipeline(census_df, logger):
    result = run_pipeline(census_df, skip_plots=True, logger=logger)

    assert result.n_records == result.confusion_matrix.total
    assert result.metrics.accuracy + result.metrics.error_rate == 1.0
    # the synthetic income depends on age, education and hours
    assert result.roc_auc > 0.6


def test_run_pipeline_is_idempotent(census_df, logger):
    first = run_pipeline(census_df, skip_plots=True, logger=logger)
    second = run_pipeline(census_df, skip_plots=True, logger=logger)

    assert first.to_dict() == second.to_dict()


def test_run_pipeline_saves_plots(census_df, tmp_path, logger):
    run_pipeline(census_df, plots_dir=tmp_path, logger=logger)

    saved = {path.name for path in tmp_path.glob("*.png")}
    assert {"roc_curve.png", "confusion_matrix.png", "age_by_income.png", "region_by_income.png"} <= saved


def test_main(census_df, tmp_path):
    data_path = tmp_path / "adult_sal.csv"
    census_df.to_csv(data_path, index=False)
    groups_path = tmp_path / "groups.yaml"
    groups_path.write_text("marital:\n  Married: [Married-civ-spouse, Married-spouse-absent]\n", encoding="utf-8")

    result = main(
        [
            "--data", str(data_path),
            "--groups-file", str(groups_path),
            "--threshold", "0.4",
            "--skip-plots",
        ]
    )

    assert result.threshold == 0.4
    assert 0.0 <= result.roc_auc <= 1.0


def test_main_rejects_threshold_outside_unit_interval(tmp_path):
    with pytest.raises(ValueError):
        main(["--data", str(tmp_path / "unused.csv"), "--threshold", "1.5", "--skip-plots"])
