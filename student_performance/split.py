"""
student_performance/split.py

Seeded shuffling and train/evaluation partitioning.

The randomness source is always an explicit seed; nothing reads the clock or a
module-level generator, so the same seed reproduces the same split and the
same downstream metrics.
"""

from __future__ import annotations

import logging
import math
from typing import List, Sequence, Tuple, TypeVar

import numpy as np

from student_performance.errors import InvalidInputError


logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle(dataset: Sequence[T], seed: int) -> List[T]:
    """Return a uniformly random permutation of `dataset` (a new list) driven by `seed`."""
    rng = np.random.default_rng(seed)
    order = rng.permutation(len(dataset))
    return [dataset[i] for i in order]


def train_size(n: int, train_ratio: float) -> int:
    """round(train_ratio * n), with halves rounded away from zero."""
    return int(math.floor(train_ratio * n + 0.5))


def split(dataset: Sequence[T], train_ratio: float) -> Tuple[List[T], List[T]]:
    """
    Cut `dataset` into a training prefix and an evaluation suffix.

    Parameters
    ----------
    dataset : sequence
        Usually already shuffled. Not modified.
    train_ratio : float
        Fraction for the training prefix, strictly between 0 and 1.

    Returns
    -------
    (train, eval)
        len(train) == round(train_ratio * len(dataset)).
    """
    if not 0.0 < train_ratio < 1.0:
        raise InvalidInputError("split", "train_ratio must lie strictly between 0 and 1", train_ratio=train_ratio)

    cut = train_size(len(dataset), train_ratio)
    train, evaluation = list(dataset[:cut]), list(dataset[cut:])
    logger.debug(f"Split {len(dataset)} rows into train={len(train)} eval={len(evaluation)}")
    return train, evaluation


def shuffle_split(dataset: Sequence[T], train_ratio: float, seed: int) -> Tuple[List[T], List[T]]:
    return split(shuffle(dataset, seed), train_ratio)
