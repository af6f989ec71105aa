import numpy as np
import pytest

from student_performance.dataset import Observation
from student_performance.errors import InvalidInputError
from student_performance.features import Feature, FeatureSpec, design_matrix, extract, response


def _obs():
    return [
        Observation(7, 99, True, 9, 1, 91),
        Observation(4, 82, False, 4, 2, 65),
    ]


def test_spec_accepts_members_names_and_ids():
    spec = FeatureSpec([Feature.SLEEP_HOURS, "hours_studied", 2, "PREVIOUS_SCORES"])
    assert spec.names == [
        "sleep_hours",
        "hours_studied",
        "extracurricular_activities",
        "previous_scores",
    ]
    assert len(spec) == 4
    assert spec[0] is Feature.SLEEP_HOURS


def test_spec_equality_is_order_sensitive():
    assert FeatureSpec([0, 1]) == FeatureSpec(["hours_studied", "previous_scores"])
    assert FeatureSpec([0, 1]) != FeatureSpec([1, 0])


@pytest.mark.parametrize("bad", ["gpa", 5, -1, True, 1.5, None])
def test_unknown_feature_rejected_at_construction(bad):
    with pytest.raises(InvalidInputError) as exc:
        FeatureSpec([0, bad])
    assert exc.value.operation == "FeatureSpec"


def test_duplicates_and_empty_rejected():
    with pytest.raises(InvalidInputError):
        FeatureSpec([0, "hours_studied"])
    with pytest.raises(InvalidInputError):
        FeatureSpec([])


def test_extract_coerces_flag():
    spec = FeatureSpec(["extracurricular_activities", "hours_studied", "sample_question_papers_practiced"])
    yes, no = _obs()
    np.testing.assert_array_equal(extract(yes, spec), [1.0, 7.0, 1.0])
    np.testing.assert_array_equal(extract(no, spec), [0.0, 4.0, 2.0])


def test_design_matrix_and_response():
    spec = FeatureSpec([1, 3])
    X = design_matrix(_obs(), spec)

    assert X.shape == (2, 2)
    np.testing.assert_array_equal(X, [[99.0, 9.0], [82.0, 4.0]])
    np.testing.assert_array_equal(response(_obs()), [91.0, 65.0])
