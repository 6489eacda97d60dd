from abc import ABC, abstractmethod
import time

import numpy as np
import pandas as pd
from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from notebooks.logging_config import MyLogger
from income_code.ml_pipeline.config import DEF_NOTEBOOK_LOGGER
from income_code.ml_pipeline.evaluation.errors import InvalidScore
from income_code.ml_pipeline.preprocessing.transform import build_transformer

DEF_MAX_ITER = 1000


class ProbabilityScorer:
    """Scores feature rows with the probability of the positive class."""

    def __init__(self, model, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
        self.model = model
        self.logger = logger

    def score(self, X) -> np.ndarray:
        # column 1 holds the probability of class 1
        scores = np.asarray(self.model.predict_proba(X)[:, 1], dtype=float)

        invalid = ~((scores >= 0.0) & (scores <= 1.0))
        if invalid.any():
            err_msg = f"Model produced {int(invalid.sum())} score(s) outside [0, 1]."
            self.logger.logger.error(err_msg)
            raise InvalidScore(err_msg)

        return scores


class ModelWrapperBase(ABC):
    def __init__(self, random_state: int, logger: MyLogger = DEF_NOTEBOOK_LOGGER):
        self.random_state = random_state
        self.logger = logger

    @abstractmethod
    def get_model(self):
        pass

    @abstractmethod
    def fit(self, X_train, y_train) -> ProbabilityScorer:
        pass


class LogisticRegressionWrapper(ModelWrapperBase):
    """Binomial GLM with a logit link: unpenalised logistic regression over all features."""

    def __init__(
        self,
        random_state: int,
        logger: MyLogger = DEF_NOTEBOOK_LOGGER,
        numeric_features=None,
        categorical_features=None,
    ):
        super().__init__(random_state, logger)
        self.logger.log_check("Defining Logistic Regression...")

        transformer_kwargs = {}
        if numeric_features is not None:
            transformer_kwargs["numeric_features"] = numeric_features
        if categorical_features is not None:
            transformer_kwargs["categorical_features"] = categorical_features

        self.pipeline = Pipeline(
            steps=[
                ("preprocess", build_transformer(**transformer_kwargs)),
                (
                    "logreg",
                    LogisticRegression(
                        C=np.inf,
                        solver="lbfgs",
                        max_iter=DEF_MAX_ITER,
                        random_state=random_state,
                    ),
                ),
            ]
        )

        self.logger.log_result("Model definition done.")

    def get_model(self) -> Pipeline:
        return self.pipeline

    def fit(self, X_train, y_train) -> ProbabilityScorer:
        self.logger.log_check("Starting Logistic Regression fit...")
        start = time.time()
        self.pipeline.fit(X_train, y_train)
        end = time.time()
        self.logger.log_result(f"Logistic Regression fit completed. Time: {end - start:.2f}s")

        return ProbabilityScorer(model=self.pipeline, logger=self.logger)

    def coefficients(self) -> pd.Series:
        """Fitted coefficients indexed by feature name, intercept first."""
        logreg: LogisticRegression = self.pipeline.named_steps["logreg"]
        feature_names = self.pipeline.named_steps["preprocess"].get_feature_names_out()

        coefs = pd.Series(logreg.coef_[0], index=feature_names)
        intercept = pd.Series([logreg.intercept_[0]], index=["(Intercept)"])
        return pd.concat([intercept, coefs])
