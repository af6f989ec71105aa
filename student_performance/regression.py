"""
student_performance/regression.py

Ordinary least squares over a selectable subset of predictors.

    performance_index = b0 + b1*x1 + ... + bk*xk

fit() builds the design matrix [1 | X] and solves the least-squares problem
with an SVD-based solver. Rank deficiency (too few rows, or collinear
columns) is detected up front and reported as DegenerateInputError instead
of returning one of infinitely many minimizers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
import pandas as pd

from student_performance.dataset import Observation
from student_performance.errors import DegenerateInputError, InvalidInputError
from student_performance.features import FeatureSpec, design_matrix, response


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FittedModel:
    """
    Result of one fit() call. Immutable; used only for prediction.

    Attributes
    ----------
    spec : FeatureSpec
        Predictors, in coefficient order.
    intercept : float
    coefficients : tuple of float
        One per feature in `spec`.
    n_train : int
        Number of training rows.
    train_response_mean : float
        Mean performance index of the training rows; the R^2 baseline.
    """
    spec: FeatureSpec
    intercept: float
    coefficients: Tuple[float, ...]
    n_train: int
    train_response_mean: float

    def predict(self, vector: Sequence[float]) -> float:
        """b0 + sum(bi * xi) for one feature vector in spec order."""
        x = np.asarray(vector, dtype=float)
        if x.ndim != 1 or x.shape[0] != len(self.coefficients):
            raise InvalidInputError(
                "predict",
                "feature vector length does not match fitted features",
                expected=len(self.coefficients),
                got=int(x.size),
            )
        return float(self.intercept + np.dot(np.asarray(self.coefficients), x))

    def predict_observations(self, observations: Sequence[Observation]) -> np.ndarray:
        X = design_matrix(observations, self.spec)
        return self.intercept + X @ np.asarray(self.coefficients)

    def coefficients_by_name(self) -> pd.Series:
        return pd.Series(
            [self.intercept, *self.coefficients],
            index=["intercept", *self.spec.names],
            name="coef",
        )


def fit(train_observations: Sequence[Observation], spec: FeatureSpec) -> FittedModel:
    """
    Fit performance_index on the features in `spec`.

    Parameters
    ----------
    train_observations : sequence of Observation
        Read only.
    spec : FeatureSpec
        Predictors; their order is the coefficient order.

    Returns
    -------
    FittedModel

    Raises
    ------
    InvalidInputError
        If any predictor or response value is NaN/inf. Filter with
        dataset.drop_missing() first.
    DegenerateInputError
        If the design matrix is rank-deficient.
    """
    X = design_matrix(train_observations, spec)
    y = response(train_observations)
    n_rows, n_features = X.shape
    n_params = n_features + 1

    if not (np.isfinite(X).all() and np.isfinite(y).all()):
        raise InvalidInputError("fit", "training data contains missing or non-finite values", features=spec.names)

    if n_rows < n_params:
        raise DegenerateInputError(
            "fit",
            "fewer training rows than parameters",
            rows=n_rows,
            parameters=n_params,
            features=spec.names,
        )

    A = np.column_stack([np.ones(n_rows), X])
    rank = int(np.linalg.matrix_rank(A))
    if rank < n_params:
        raise DegenerateInputError(
            "fit",
            "design matrix is rank-deficient (collinear columns)",
            rank=rank,
            parameters=n_params,
            features=spec.names,
        )

    beta, _, _, _ = np.linalg.lstsq(A, y, rcond=None)
    logger.debug(f"Fitted {spec.names}: intercept={beta[0]:.6f} coefficients={beta[1:].tolist()}")

    return FittedModel(
        spec=spec,
        intercept=float(beta[0]),
        coefficients=tuple(float(b) for b in beta[1:]),
        n_train=n_rows,
        train_response_mean=float(y.mean()),
    )
