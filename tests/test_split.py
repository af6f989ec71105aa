import math
from collections import Counter

import pytest

from student_performance.dataset import Observation
from student_performance.errors import DegenerateInputError, InvalidInputError
from student_performance.features import FeatureSpec
from student_performance.regression import fit
from student_performance.split import shuffle, shuffle_split, split, train_size


def _scenario():
    """hours, prevScore, extracurricular, sleep, papers, performanceIndex"""
    return [
        Observation(1, 10, False, 8, 1, 55),
        Observation(2, 20, True, 7, 2, 60),
        Observation(3, 30, False, 6, 3, 65),
        Observation(4, 40, True, 5, 4, 70),
    ]


@pytest.mark.parametrize("ratio", [0.1, 0.25, 0.33, 0.5, 0.8, 0.9])
@pytest.mark.parametrize("n", [1, 2, 3, 7, 10, 101])
def test_split_sizes(ratio, n):
    data = list(range(n))
    train, evaluation = split(data, ratio)

    assert len(train) == math.floor(ratio * n + 0.5)
    assert len(train) + len(evaluation) == n
    assert train + evaluation == data


def test_halves_round_away_from_zero():
    assert train_size(5, 0.5) == 3
    assert train_size(3, 0.5) == 2


@pytest.mark.parametrize("ratio", [0.0, 1.0, -0.2, 1.5])
def test_ratio_outside_open_interval(ratio):
    with pytest.raises(InvalidInputError) as exc:
        split([1, 2, 3], ratio)
    assert exc.value.params["train_ratio"] == ratio


def test_shuffle_is_reproducible_and_a_permutation():
    data = list(range(50))
    a = shuffle(data, seed=123)
    b = shuffle(data, seed=123)

    assert a == b
    assert sorted(a) == data
    assert data == list(range(50))
    assert shuffle(data, seed=124) != a


def test_scenario_split_is_deterministic():
    data = _scenario()
    train_a, eval_a = shuffle_split(data, 0.5, seed=2024)
    train_b, eval_b = shuffle_split(data, 0.5, seed=2024)

    assert train_a == train_b
    assert eval_a == eval_b
    assert len(train_a) == len(eval_a) == 2
    assert Counter(train_a + eval_a) == Counter(data)


def test_scenario_fit_on_two_rows_is_rank_deficient():
    # 2 rows cannot determine intercept + 2 coefficients (and prevScore = 10 * hours)
    train, _ = shuffle_split(_scenario(), 0.5, seed=2024)
    with pytest.raises(DegenerateInputError):
        fit(train, FeatureSpec(["hours_studied", "previous_scores"]))
