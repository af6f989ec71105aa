import pytest

from student_performance.dataset import Observation
from student_performance.errors import DegenerateInputError, InvalidInputError
from student_performance.evaluate import evaluate, mean_squared_error, r_squared
from student_performance.features import FeatureSpec
from student_performance.regression import fit


def test_perfect_predictions():
    actual = [1.0, 2.0, 3.0, 4.0]
    assert mean_squared_error(actual, actual) == 0.0
    assert r_squared(actual, actual, reference_mean=2.5) == 1.0


def test_mse_value():
    assert mean_squared_error([1, 2, 3], [2, 2, 5]) == pytest.approx(5 / 3)


def test_r_squared_uses_given_reference_mean():
    # around 0: SS_tot = 4 + 16 = 20, SS_res = 1 + 1 = 2
    assert r_squared([2, 4], [3, 3], reference_mean=0.0) == pytest.approx(0.9)
    # around the evaluation mean (3) the same predictions score 0
    assert r_squared([2, 4], [3, 3], reference_mean=3.0) == pytest.approx(0.0)


def test_zero_total_variance_is_degenerate():
    with pytest.raises(DegenerateInputError) as exc:
        r_squared([5, 5], [5, 5], reference_mean=5.0)
    assert exc.value.operation == "r_squared"


@pytest.mark.parametrize("actual,predicted", [([1, 2], [1]), ([], [])])
def test_bad_lengths(actual, predicted):
    with pytest.raises(InvalidInputError):
        mean_squared_error(actual, predicted)
    with pytest.raises(InvalidInputError):
        r_squared(actual, predicted, reference_mean=0.0)


def test_evaluate_baseline_is_training_mean():
    # y = 10 + 2*hours + small wiggle so the fit is not exact
    train = [
        Observation(1, 0, False, 0, 0, 12.5),
        Observation(2, 0, False, 0, 0, 13.5),
        Observation(3, 0, False, 0, 0, 16.5),
        Observation(4, 0, False, 0, 0, 17.5),
    ]
    held_out = [
        Observation(8, 0, False, 0, 0, 26.0),
        Observation(9, 0, False, 0, 0, 27.0),
    ]
    model = fit(train, FeatureSpec(["hours_studied"]))
    result = evaluate(model, held_out)

    predicted = model.predict_observations(held_out)
    actual = [26.0, 27.0]
    ss_res = sum((a - p) ** 2 for a, p in zip(actual, predicted))
    ss_tot = sum((a - 15.0) ** 2 for a in actual)

    assert model.train_response_mean == pytest.approx(15.0)
    assert result.r_squared == pytest.approx(1 - ss_res / ss_tot)
    assert result.mse == pytest.approx(ss_res / 2)
    assert result.n_eval == 2
    assert result.to_dict()["features"] == ["hours_studied"]
