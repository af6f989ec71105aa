"""
student_performance/stats.py

Descriptive statistics for a single numeric column.

Conventions
-----------
- Standard deviation is the population form (divide by n, not n - 1).
- Quantiles interpolate linearly between order statistics:
      idx = q * (n - 1), lo = floor(idx), hi = ceil(idx)
  which matches numpy's default "linear" method.
- NaN is never filtered out here. A NaN anywhere in the input makes the
  mean, std_dev, min, max and every quantile NaN.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from student_performance.dataset import NUMERIC_FIELDS, Observation, column
from student_performance.errors import InvalidInputError


QUANTILES = {"p25": 0.25, "p50": 0.50, "p75": 0.75}


def _as_array(values: Iterable[float], operation: str) -> np.ndarray:
    # np.array copies, so nothing below can touch the caller's data.
    arr = np.array(list(values), dtype=float)
    if arr.size == 0:
        raise InvalidInputError(operation, "input must contain at least one value")
    return arr


def mean(values: Iterable[float]) -> float:
    arr = _as_array(values, "mean")
    return float(arr.sum() / arr.size)


def std_dev(values: Iterable[float]) -> float:
    """Population standard deviation, accumulated as a sum of squared deviations."""
    arr = _as_array(values, "std_dev")
    centre = arr.sum() / arr.size
    return float(math.sqrt(((arr - centre) ** 2).sum() / arr.size))


def min_max(values: Iterable[float]) -> Tuple[float, float]:
    arr = _as_array(values, "min_max")
    if np.isnan(arr).any():
        return math.nan, math.nan
    return float(arr.min()), float(arr.max())


def _sorted_quantile(ordered: np.ndarray, q: float) -> float:
    idx = q * (ordered.size - 1)
    lo = math.floor(idx)
    hi = math.ceil(idx)
    if lo == hi:
        return float(ordered[lo])
    return float(ordered[lo] + (ordered[hi] - ordered[lo]) * (idx - lo))


def quantile(values: Iterable[float], q: float) -> float:
    """
    Linear-interpolated quantile of `values`.

    Parameters
    ----------
    values : iterable of float
        Non-empty data. It is copied before sorting.
    q : float
        Quantile in [0, 1].
    """
    if not 0.0 <= q <= 1.0:
        raise InvalidInputError("quantile", "q must lie in [0, 1]", q=q)
    arr = _as_array(values, "quantile")
    if np.isnan(arr).any():
        return math.nan
    return _sorted_quantile(np.sort(arr, kind="stable"), q)


def summarize(values: Iterable[float]) -> Dict[str, float]:
    """
    Compute count, mean, std_dev, min, max, p25, p50 and p75.

    Each statistic works on its own private copy; `values` is never mutated.

    Returns
    -------
    dict
        StatResult mapping statistic name -> value.

    Raises
    ------
    InvalidInputError
        If `values` is empty.
    """
    arr = _as_array(values, "summarize")
    has_nan = bool(np.isnan(arr).any())
    ordered = np.sort(arr, kind="stable")

    result: Dict[str, float] = {
        "count": int(arr.size),
        "mean": mean(arr),
        "std_dev": std_dev(arr),
    }
    lo, hi = min_max(arr)
    result["min"] = lo
    result["max"] = hi
    for name, q in QUANTILES.items():
        result[name] = math.nan if has_nan else _sorted_quantile(ordered, q)
    return result


def summarize_columns(
    observations: Sequence[Observation],
    fields: Optional[List[str]] = None,
) -> pd.DataFrame:
    """
    Per-column StatResults for a set of observations.

    The boolean extracurricular flag is not summarized; it is not a
    continuous measure.
    """
    if fields is None:
        fields = NUMERIC_FIELDS
    rows = {field: summarize(column(observations, field)) for field in fields}
    return pd.DataFrame.from_dict(rows, orient="index")
