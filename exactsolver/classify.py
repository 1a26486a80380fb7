"""Rank-based classification of an augmented system."""

import logging
from enum import Enum
from typing import Optional, Sequence, Tuple

from exactsolver import config
from exactsolver.elimination import reduced_form
from exactsolver.matrix import RationalMatrix, shape
from exactsolver.rational import Number

logger = logging.getLogger(__name__)


class SystemClassification(str, Enum):
    UNIQUE = "unique"
    INFINITE = "infinite"
    NONE = "none"


def count_ranks(matrix: RationalMatrix, epsilon: float) -> Tuple[int, int]:
    """``(rank(A), rank([A|b]))`` read off an echelon-form matrix.

    ``rank(A)`` counts rows with a nonzero coefficient; ``rank([A|b])``
    counts rows with any nonzero entry, right-hand side included.
    """
    rows, cols = shape(matrix)
    rank_a = 0
    rank_augmented = 0
    for row in matrix:
        if any(not v.is_near_zero(epsilon) for v in row[:cols - 1]):
            rank_a += 1
        if any(not v.is_near_zero(epsilon) for v in row):
            rank_augmented += 1
    return rank_a, rank_augmented


def classify_augmented_system(matrix: Sequence[Sequence[Number]],
                              epsilon: Optional[float] = None) -> SystemClassification:
    """Classify ``[A|b]`` as having a unique, infinite or no solution.

    The matrix is brought to canonical reduced row-echelon form first
    (``reduced_form``), so raw input and echelon forms classify the same
    way.  A row ``0 ... 0 | c`` with ``c != 0`` makes the augmented rank
    larger: no solution.  Otherwise fewer pivots than unknowns means
    infinitely many solutions.
    """
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    reduced = reduced_form(matrix, eps)
    rows, cols = shape(reduced)
    rank_a, rank_augmented = count_ranks(reduced, eps)

    if rank_a < rank_augmented:
        outcome = SystemClassification.NONE
    elif rank_a < cols - 1:
        outcome = SystemClassification.INFINITE
    else:
        outcome = SystemClassification.UNIQUE

    logger.debug("rank(A)=%d rank([A|b])=%d unknowns=%d -> %s",
                 rank_a, rank_augmented, cols - 1, outcome.value)
    return outcome
