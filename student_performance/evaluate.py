"""
student_performance/evaluate.py

Accuracy of a fitted model on held-out observations.

R^2 is computed against the mean of the *training* response:

    SS_res = sum((actual - predicted)^2)
    SS_tot = sum((actual - mean(train_response))^2)
    R^2    = 1 - SS_res / SS_tot

This reproduces the legacy reports. It is not the textbook eval-set
baseline, and switching baselines changes what the reported R^2 means, so
leave it as is unless the reports are meant to change too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from student_performance.dataset import Observation
from student_performance.errors import DegenerateInputError, InvalidInputError
from student_performance.features import response
from student_performance.regression import FittedModel


@dataclass(frozen=True)
class Evaluation:
    mse: float
    r_squared: float
    model: FittedModel
    n_eval: int

    def to_dict(self) -> dict:
        return {
            "mse": self.mse,
            "r_squared": self.r_squared,
            "n_train": self.model.n_train,
            "n_eval": self.n_eval,
            "features": self.model.spec.names,
            "intercept": self.model.intercept,
            "coefficients": dict(zip(self.model.spec.names, self.model.coefficients)),
        }


def _paired(actual: Sequence[float], predicted: Sequence[float], operation: str) -> Tuple[np.ndarray, np.ndarray]:
    a = np.array(actual, dtype=float)
    p = np.array(predicted, dtype=float)
    if a.ndim != 1 or p.ndim != 1 or a.shape != p.shape:
        raise InvalidInputError(operation, "actual and predicted must be 1-D and equal length", actual=a.size, predicted=p.size)
    if a.size == 0:
        raise InvalidInputError(operation, "at least one value is required")
    return a, p


def mean_squared_error(actual: Sequence[float], predicted: Sequence[float]) -> float:
    a, p = _paired(actual, predicted, "mean_squared_error")
    return float(((a - p) ** 2).sum() / a.size)


def r_squared(actual: Sequence[float], predicted: Sequence[float], reference_mean: float) -> float:
    """
    1 - SS_res / SS_tot, with SS_tot taken around `reference_mean`.

    Raises
    ------
    DegenerateInputError
        If SS_tot is zero (R^2 undefined).
    """
    a, p = _paired(actual, predicted, "r_squared")
    ss_residual = float(((a - p) ** 2).sum())
    ss_total = float(((a - reference_mean) ** 2).sum())
    if ss_total == 0:
        raise DegenerateInputError("r_squared", "total sum of squares is zero", reference_mean=reference_mean)
    return 1.0 - ss_residual / ss_total


def evaluate(
    model: FittedModel,
    eval_observations: Sequence[Observation],
) -> Evaluation:
    """
    Predict every evaluation observation and score the predictions.

    The R^2 baseline is `model.train_response_mean`, captured at fit time.
    """
    actual = response(eval_observations)
    predicted = model.predict_observations(eval_observations)
    return Evaluation(
        mse=mean_squared_error(actual, predicted),
        r_squared=r_squared(actual, predicted, model.train_response_mean),
        model=model,
        n_eval=len(actual),
    )
