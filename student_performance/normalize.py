"""
student_performance/normalize.py

Min-max rescaling to [0, 1].
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

import numpy as np

from student_performance.dataset import NUMERIC_FIELDS, Observation, column
from student_performance.errors import DegenerateInputError, InvalidInputError
from student_performance.stats import min_max


def min_max_normalize(values: Iterable[float]) -> np.ndarray:
    """
    Map each value v to (v - min) / (max - min).

    The minimum maps to exactly 0.0 and the maximum to exactly 1.0. A NaN in
    the input makes every output NaN.

    Raises
    ------
    InvalidInputError
        If `values` is empty.
    DegenerateInputError
        If every value is equal; a constant column carries no signal.
    """
    arr = np.array(list(values), dtype=float)
    if arr.size == 0:
        raise InvalidInputError("normalize", "input must contain at least one value")

    lo, hi = min_max(arr)
    if lo == hi:
        raise DegenerateInputError("normalize", "column has zero range", min=lo, max=hi)
    return (arr - lo) / (hi - lo)


def normalize_observations(
    observations: Sequence[Observation],
    fields: Iterable[str],
) -> List[Observation]:
    """
    Return new Observations with each named numeric field rescaled over `observations`.

    The extracurricular flag is already 0/1 and cannot be named here.
    """
    fields = list(fields)
    unknown = [f for f in fields if f not in NUMERIC_FIELDS]
    if unknown:
        raise InvalidInputError("normalize_observations", "fields are not normalizable", fields=unknown)

    scaled: Dict[str, np.ndarray] = {f: min_max_normalize(column(observations, f)) for f in fields}
    return [
        replace(o, **{f: float(scaled[f][i]) for f in fields})
        for i, o in enumerate(observations)
    ]
