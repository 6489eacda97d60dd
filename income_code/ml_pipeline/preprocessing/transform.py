from typing import Iterable

from sklearn.compose import ColumnTransformer
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder, StandardScaler

from notebooks.constants import CATEGORICAL_FEATURES, NUMERIC_FEATURES


def build_transformer(
    numeric_features: Iterable[str] = NUMERIC_FEATURES,
    categorical_features: Iterable[str] = CATEGORICAL_FEATURES,
) -> ColumnTransformer:
    # Scaling only helps the solver converge, the unpenalised fit is scale-invariant
    numeric_pipe = Pipeline([("scale", StandardScaler())])

    # First level of every categorical acts as the reference level
    categorical_pipe = Pipeline(
        [
            (
                "onehot",
                OneHotEncoder(drop="first", handle_unknown="ignore", sparse_output=False),
            ),
        ]
    )

    transformer = ColumnTransformer(
        transformers=[
            ("num", numeric_pipe, list(numeric_features)),
            ("cat", categorical_pipe, list(categorical_features)),
        ],
        remainder="drop",
        verbose_feature_names_out=False,
    )

    return transformer
