"""
student_performance/features.py

Feature selection: which Observation columns feed a regression, and in what order.

A FeatureSpec is validated when it is built, so a typo in a model
configuration fails before any data is touched.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np

from student_performance.dataset import RESPONSE_FIELD, Observation
from student_performance.errors import InvalidInputError


class Feature(Enum):
    """Predictor columns. Values are the legacy integer ids used in model configs."""
    HOURS_STUDIED = 0
    PREVIOUS_SCORES = 1
    EXTRACURRICULAR_ACTIVITIES = 2
    SLEEP_HOURS = 3
    SAMPLE_QUESTION_PAPERS_PRACTICED = 4

    @property
    def field(self) -> str:
        return self.name.lower()

    def value_of(self, observation: Observation) -> float:
        raw = getattr(observation, self.field)
        if self is Feature.EXTRACURRICULAR_ACTIVITIES:
            return 1.0 if raw else 0.0
        return float(raw)


FeatureLike = Union[Feature, str, int]


def _resolve(item: FeatureLike) -> Feature:
    if isinstance(item, Feature):
        return item
    if isinstance(item, bool):
        raise InvalidInputError("FeatureSpec", "unknown feature id", feature=item)
    if isinstance(item, int):
        try:
            return Feature(item)
        except ValueError:
            raise InvalidInputError("FeatureSpec", "unknown feature id", feature=item) from None
    if isinstance(item, str):
        try:
            return Feature[item.strip().upper()]
        except KeyError:
            raise InvalidInputError("FeatureSpec", "unknown feature id", feature=item) from None
    raise InvalidInputError("FeatureSpec", "unknown feature id", feature=item)


class FeatureSpec(Sequence):
    """
    Ordered, duplicate-free selection of predictors.

    Accepts Feature members, their lower/upper-case names
    ("hours_studied") or the integer ids 0-4, in any mix.
    """

    def __init__(self, features: Iterable[FeatureLike]) -> None:
        resolved = tuple(_resolve(f) for f in features)
        if not resolved:
            raise InvalidInputError("FeatureSpec", "at least one feature is required")
        dupes = sorted({f.field for f in resolved if resolved.count(f) > 1})
        if dupes:
            raise InvalidInputError("FeatureSpec", "features must be distinct", duplicates=dupes)
        self._features: Tuple[Feature, ...] = resolved

    def __getitem__(self, index):
        return self._features[index]

    def __len__(self) -> int:
        return len(self._features)

    def __eq__(self, other) -> bool:
        return isinstance(other, FeatureSpec) and self._features == other._features

    def __hash__(self) -> int:
        return hash(self._features)

    def __repr__(self) -> str:
        return f"FeatureSpec({self.names})"

    @property
    def names(self) -> List[str]:
        return [f.field for f in self._features]


def extract(observation: Observation, spec: FeatureSpec) -> np.ndarray:
    """Feature vector for one observation, in spec order. The flag becomes 1.0/0.0."""
    return np.array([f.value_of(observation) for f in spec], dtype=float)


def design_matrix(observations: Sequence[Observation], spec: FeatureSpec) -> np.ndarray:
    """Stack feature vectors into an (n_rows, len(spec)) array. No intercept column."""
    X = np.empty((len(observations), len(spec)), dtype=float)
    for i, o in enumerate(observations):
        X[i] = extract(o, spec)
    return X


def response(observations: Sequence[Observation]) -> np.ndarray:
    return np.array([getattr(o, RESPONSE_FIELD) for o in observations], dtype=float)
