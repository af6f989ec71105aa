"""Tests for per-column descriptive statistics."""

import math

import numpy as np
import pytest

from student_performance.dataset import NUMERIC_FIELDS, Observation
from student_performance.errors import InvalidInputError
from student_performance.stats import mean, min_max, quantile, std_dev, summarize, summarize_columns


def test_summarize_small_sequence():
    result = summarize([4.0, 1.0, 3.0, 2.0])

    assert result["count"] == 4
    assert result["mean"] == pytest.approx(2.5)
    assert result["std_dev"] == pytest.approx(math.sqrt(1.25))
    assert result["min"] == 1.0
    assert result["max"] == 4.0
    assert result["p25"] == pytest.approx(1.75)
    assert result["p50"] == pytest.approx(2.5)
    assert result["p75"] == pytest.approx(3.25)


def test_std_dev_uses_population_divisor():
    values = [2, 4, 4, 4, 5, 5, 7, 9]
    assert std_dev(values) == pytest.approx(2.0)
    assert std_dev(values) == pytest.approx(np.std(values, ddof=0))


def test_quantile_matches_numpy_linear_method():
    rng = np.random.default_rng(0)
    values = rng.normal(50, 10, size=137)
    for q in [0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0]:
        assert quantile(values, q) == pytest.approx(np.percentile(values, q * 100))


def test_quantile_exact_order_statistic():
    # idx = 0.5 * (5 - 1) = 2 lands exactly on the middle element
    assert quantile([10, 30, 20, 50, 40], 0.5) == 30


def test_ordering_property_holds():
    rng = np.random.default_rng(1)
    for n in [1, 2, 3, 10, 51]:
        values = rng.exponential(3.0, size=n).tolist()
        s = summarize(values)
        assert s["min"] <= s["p25"] <= s["p50"] <= s["p75"] <= s["max"]


def test_single_value():
    s = summarize([7.5])
    assert s["std_dev"] == 0.0
    assert s["min"] == s["p25"] == s["p50"] == s["p75"] == s["max"] == 7.5


def test_caller_data_not_mutated():
    values = [3.0, 1.0, 2.0]
    summarize(values)
    quantile(values, 0.5)
    assert values == [3.0, 1.0, 2.0]


def test_nan_propagates():
    s = summarize([1.0, float("nan"), 3.0])
    assert s["count"] == 3
    for key in ["mean", "std_dev", "min", "max", "p25", "p50", "p75"]:
        assert math.isnan(s[key]), key


@pytest.mark.parametrize("fn", [mean, std_dev, min_max, summarize])
def test_empty_input_rejected(fn):
    with pytest.raises(InvalidInputError):
        fn([])


def test_quantile_out_of_range():
    with pytest.raises(InvalidInputError) as exc:
        quantile([1, 2, 3], 1.5)
    assert exc.value.operation == "quantile"
    assert exc.value.params["q"] == 1.5


def test_summarize_columns_indexes_numeric_fields():
    obs = [
        Observation(1, 10, False, 8, 1, 55),
        Observation(2, 20, True, 7, 2, 60),
        Observation(3, 30, False, 6, 3, 65),
    ]
    table = summarize_columns(obs)

    assert list(table.index) == NUMERIC_FIELDS
    assert table.loc["hours_studied", "mean"] == pytest.approx(2.0)
    assert table.loc["performance_index", "p50"] == pytest.approx(60.0)
    assert table.loc["sleep_hours", "max"] == 8


def test_summarize_columns_respects_explicit_fields():
    obs = [Observation(1, 10, False, 8, 1, 55), Observation(2, 20, True, 7, 2, 60)]

    assert list(summarize_columns(obs, fields=["sleep_hours"]).index) == ["sleep_hours"]
    assert summarize_columns(obs, fields=[]).empty
