import math

import pandas as pd
import pytest

from student_performance.dataset import (
    Observation,
    column,
    drop_missing,
    drop_zero_response,
    load_observations,
    observations_from_frame,
    observations_to_frame,
)
from student_performance.errors import InvalidInputError


CSV_TEXT = """Hours Studied,Previous Scores,Extracurricular Activities,Sleep Hours,Sample Question Papers Practiced,Performance Index
7,99,Yes,9,1,91
4,,No,4,2,65
8,51,Yes,7,2,0
"""


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "Student_Performance.csv"
    path.write_text(CSV_TEXT)
    return path


def test_load_parses_types_and_blanks(csv_path):
    obs = load_observations(csv_path)

    assert len(obs) == 3
    assert obs[0] == Observation(7.0, 99.0, True, 9.0, 1.0, 91.0)
    assert obs[1].extracurricular_activities is False
    assert math.isnan(obs[1].previous_scores)
    assert obs[1].has_missing()
    assert not obs[0].has_missing()


def test_filters(csv_path):
    obs = load_observations(csv_path)

    assert len(drop_missing(obs)) == 2
    assert [o.performance_index for o in drop_zero_response(obs)] == [91.0, 65.0]
    assert len(obs) == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_observations(tmp_path / "nope.csv")


def test_missing_column():
    df = pd.DataFrame({"Hours Studied": [1.0], "Previous Scores": [50.0]})
    with pytest.raises(ValueError, match="Missing required columns"):
        observations_from_frame(df)


def test_frame_round_trip(csv_path):
    obs = drop_missing(load_observations(csv_path))
    df = observations_to_frame(obs)

    assert list(df["Extracurricular Activities"]) == ["Yes", "Yes"]
    assert observations_from_frame(df) == obs


def test_column():
    obs = [Observation(1, 10, False, 8, 1, 55), Observation(2, 20, True, 7, 2, 60)]
    assert column(obs, "sleep_hours") == [8, 7]
    with pytest.raises(InvalidInputError):
        column(obs, "extracurricular_activities")
