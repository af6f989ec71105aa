"""
student_performance/dataset.py

Observation records and the CSV ingestion that produces them.

The CSV layout is the public "Student Performance" dataset:

    Hours Studied, Previous Scores, Extracurricular Activities,
    Sleep Hours, Sample Question Papers Practiced, Performance Index

Blank numeric cells become NaN and are kept as NaN. Nothing here imputes;
rows with missing values are removed only when the caller asks for it via
drop_missing().
"""

from __future__ import annotations

import logging
import math
from dataclasses import astuple, dataclass
from pathlib import Path
from typing import Iterable, List, Union

import pandas as pd

from student_performance.errors import InvalidInputError


logger = logging.getLogger(__name__)

# CSV header -> Observation attribute, in file order.
CSV_COLUMNS = {
    "Hours Studied": "hours_studied",
    "Previous Scores": "previous_scores",
    "Extracurricular Activities": "extracurricular_activities",
    "Sleep Hours": "sleep_hours",
    "Sample Question Papers Practiced": "sample_question_papers_practiced",
    "Performance Index": "performance_index",
}

NUMERIC_FIELDS = [
    "hours_studied",
    "previous_scores",
    "sleep_hours",
    "sample_question_papers_practiced",
    "performance_index",
]

RESPONSE_FIELD = "performance_index"


@dataclass(frozen=True)
class Observation:
    """One student record. Numeric fields may be NaN when the source cell was blank."""
    hours_studied: float
    previous_scores: float
    extracurricular_activities: bool
    sleep_hours: float
    sample_question_papers_practiced: float
    performance_index: float

    def has_missing(self) -> bool:
        return any(math.isnan(getattr(self, name)) for name in NUMERIC_FIELDS)


def _parse_flag(value: object) -> bool:
    return isinstance(value, str) and value.strip() == "Yes"


def observations_from_frame(df: pd.DataFrame) -> List[Observation]:
    """
    Convert a dataframe with the CSV header names into Observations.

    Raises
    ------
    ValueError
        If any of the six expected columns is missing.
    """
    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    numeric = {
        CSV_COLUMNS[c]: pd.to_numeric(df[c], errors="coerce").astype(float).tolist()
        for c in CSV_COLUMNS
        if c != "Extracurricular Activities"
    }
    flags = [_parse_flag(v) for v in df["Extracurricular Activities"]]

    return [
        Observation(
            hours_studied=numeric["hours_studied"][i],
            previous_scores=numeric["previous_scores"][i],
            extracurricular_activities=flags[i],
            sleep_hours=numeric["sleep_hours"][i],
            sample_question_papers_practiced=numeric["sample_question_papers_practiced"][i],
            performance_index=numeric["performance_index"][i],
        )
        for i in range(len(df))
    ]


def observations_to_frame(observations: Iterable[Observation]) -> pd.DataFrame:
    """Inverse of observations_from_frame (flag written back as Yes/No)."""
    rows = [astuple(o) for o in observations]
    df = pd.DataFrame(rows, columns=list(CSV_COLUMNS.values()))
    df["extracurricular_activities"] = df["extracurricular_activities"].map({True: "Yes", False: "No"})
    return df.rename(columns={v: k for k, v in CSV_COLUMNS.items()})


def load_observations(path: Union[str, Path]) -> List[Observation]:
    """
    Read the student performance CSV.

    Blank numeric fields become NaN; "Yes" in the extracurricular column is
    True and any other token is False.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Dataset not found at {path}. "
            f"Generate one first: python -m student_performance.make_synthetic_data"
        )

    # keep_default_na=False so "No"/"NA"-like tokens in the flag column stay strings;
    # numeric blanks are coerced to NaN in observations_from_frame.
    df = pd.read_csv(path, keep_default_na=False)
    observations = observations_from_frame(df)
    logger.info(f"Loaded {len(observations)} observations from {path}")
    return observations


def drop_missing(observations: Iterable[Observation]) -> List[Observation]:
    """Keep only observations without NaN fields."""
    observations = list(observations)
    kept = [o for o in observations if not o.has_missing()]
    if len(kept) != len(observations):
        logger.warning(f"Dropped {len(observations) - len(kept)} observations with missing values")
    return kept


def drop_zero_response(observations: Iterable[Observation]) -> List[Observation]:
    """Keep only observations whose performance index is non-zero."""
    observations = list(observations)
    kept = [o for o in observations if o.performance_index != 0]
    if len(kept) != len(observations):
        logger.info(f"Dropped {len(observations) - len(kept)} observations with zero performance index")
    return kept


def column(observations: Iterable[Observation], field: str) -> List[float]:
    """Pull one numeric attribute out of every observation, in order."""
    if field not in NUMERIC_FIELDS:
        raise InvalidInputError("column", "unknown numeric field", field=field, allowed=NUMERIC_FIELDS)
    return [getattr(o, field) for o in observations]
