import os
import tempfile

# must be set before any project module builds its default logger
os.environ.setdefault("INCOME_EDA_LOG_DIR", tempfile.mkdtemp(prefix="income_eda_logs_"))

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from notebooks.constants import RAW_COLUMNS
from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.evaluation.objects import ScoredRecord


@pytest.fixture
def logger(tmp_path):
    return MyLogger(label="TEST", section_name="TEST LOGGER", file_log_path=tmp_path / "test.log")


@pytest.fixture
def four_records():
    return [
        ScoredRecord(actual_label=1, predicted_score=0.9),
        ScoredRecord(actual_label=1, predicted_score=0.4),
        ScoredRecord(actual_label=0, predicted_score=0.3),
        ScoredRecord(actual_label=0, predicted_score=0.2),
    ]


@pytest.fixture
def noisy_records():
    rng = np.random.default_rng(7)
    labels = rng.integers(0, 2, size=200)
    # rounded so that several records share a score
    scores = np.clip(np.round(0.35 * labels + rng.uniform(0, 0.65, size=200), 2), 0, 1)
    return [ScoredRecord(actual_label=int(l), predicted_score=float(s)) for l, s in zip(labels, scores)]


def make_census_df(n_rows: int = 600, seed: int = 0) -> pd.DataFrame:
    rng = np.random.default_rng(seed)

    education = rng.choice(["HS-grad", "Some-college", "Bachelors", "Masters"], size=n_rows, p=[0.4, 0.3, 0.2, 0.1])
    education_num = pd.Series(education).map({"HS-grad": 9, "Some-college": 10, "Bachelors": 13, "Masters": 14}).to_numpy()
    age = rng.integers(18, 75, size=n_rows)
    hours = rng.integers(10, 70, size=n_rows)
    sex = rng.choice(["Male", "Female"], size=n_rows)

    logit = -9.0 + 0.05 * age + 0.45 * education_num + 0.03 * hours + 0.5 * (sex == "Male")
    prob = 1 / (1 + np.exp(-logit))
    income = np.where(rng.uniform(size=n_rows) < prob, ">50K", "<=50K")

    df = pd.DataFrame(
        {
            "X": np.arange(1, n_rows + 1),
            "age": age,
            "type_employer": rng.choice(
                ["Private", "Self-emp-inc", "Self-emp-not-inc", "State-gov", "Local-gov", "Federal-gov", "?"],
                size=n_rows,
                p=[0.55, 0.07, 0.08, 0.1, 0.1, 0.08, 0.02],
            ),
            "fnlwgt": rng.integers(20_000, 400_000, size=n_rows),
            "education": education,
            "education_num": education_num,
            "marital": rng.choice(
                ["Married-civ-spouse", "Never-married", "Divorced", "Widowed", "Married-spouse-absent"],
                size=n_rows,
            ),
            "occupation": rng.choice(
                ["Adm-clerical", "Exec-managerial", "Craft-repair", "Sales", "Other-service", "Machine-op-inspct"],
                size=n_rows,
            ),
            "relationship": rng.choice(["Husband", "Not-in-family", "Own-child", "Wife"], size=n_rows),
            "race": rng.choice(["White", "Black"], size=n_rows, p=[0.8, 0.2]),
            "sex": sex,
            "capital_gain": np.where(rng.uniform(size=n_rows) < 0.1, rng.integers(1_000, 20_000, size=n_rows), 0),
            "capital_loss": np.where(rng.uniform(size=n_rows) < 0.05, rng.integers(500, 2_000, size=n_rows), 0),
            "hr_per_week": hours,
            "country": rng.choice(
                ["United-States", "Mexico", "Germany", "India", "Canada", "?"],
                size=n_rows,
                p=[0.75, 0.07, 0.05, 0.05, 0.06, 0.02],
            ),
            "income": income,
        }
    )
    return df[RAW_COLUMNS]


@pytest.fixture
def census_df():
    return make_census_df()
