"""Reading solutions off a reduced matrix."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from exactsolver import config
from exactsolver.classify import SystemClassification, classify_augmented_system
from exactsolver.elimination import EliminationResult, eliminate, reduced_form
from exactsolver.matrix import RationalMatrix, shape
from exactsolver.rational import Number, Rational

logger = logging.getLogger(__name__)


def solution_from_rref(rref: RationalMatrix) -> List[Rational]:
    """Last column of each row.

    Only correct when the coefficient block is the identity; nothing checks
    that.  Use ``solve_system`` when the system may be singular.
    """
    return [row[-1] for row in rref]


def solution_from_ref(ref: RationalMatrix,
                      epsilon: Optional[float] = None) -> List[Rational]:
    """Back substitution on a row-echelon matrix.

    Rows past the coefficient block, and rows whose diagonal entry is near
    zero, leave their unknown at 0 without any warning.
    """
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    rows, cols = shape(ref)
    unknowns = cols - 1
    solution = [Rational(0) for _ in range(rows)]

    for i in range(rows - 1, -1, -1):
        if i >= unknowns:
            continue
        total = ref[i][-1]
        for j in range(i + 1, min(rows, unknowns)):
            total = total.subtract(ref[i][j].multiply(solution[j]))
        if not ref[i][i].is_near_zero(eps):
            solution[i] = total.divide(ref[i][i])

    return solution


def _leading_column(row: List[Rational], eps: float) -> Optional[int]:
    for j in range(len(row) - 1):
        if not row[j].is_near_zero(eps):
            return j
    return None


def pivot_columns(rref: RationalMatrix,
                  epsilon: Optional[float] = None) -> List[int]:
    """0-based coefficient column of each row's leading entry."""
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    leads = (_leading_column(row, eps) for row in rref)
    return [j for j in leads if j is not None]


@dataclass
class SystemSolution:
    """Outcome of ``solve_system``.

    ``values`` is set only for a unique solution.  For infinitely many
    solutions ``particular`` holds the solution with every free variable set
    to 0 and ``free_variables`` lists their column indices.  ``rref`` is the
    canonical reduced form the pivots were read from.
    """
    classification: SystemClassification
    elimination: EliminationResult
    rref: RationalMatrix
    values: Optional[List[Rational]] = None
    particular: Optional[List[Rational]] = None
    free_variables: List[int] = field(default_factory=list)

    @property
    def is_underdetermined(self) -> bool:
        return self.classification is SystemClassification.INFINITE

    @property
    def is_consistent(self) -> bool:
        return self.classification is not SystemClassification.NONE


def _particular_solution(rref: RationalMatrix, unknowns: int,
                         eps: float) -> List[Rational]:
    values = [Rational(0) for _ in range(unknowns)]
    for row in rref:
        col = _leading_column(row, eps)
        if col is not None:
            values[col] = row[-1]
    return values


def solve_system(matrix: Sequence[Sequence[Number]], method: Optional[str] = None,
                 epsilon: Optional[float] = None) -> SystemSolution:
    """Eliminate, classify, and extract a solution without guessing.

    Unlike ``solution_from_ref``/``solution_from_rref`` this never fills a
    free variable silently: singular systems come back classified as
    ``INFINITE`` (with the free columns named) or ``NONE``.
    """
    method = method or config.get_setting("default_method")
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    elimination = eliminate(matrix, method, epsilon=eps)

    # Pivots are read from the canonical form; a column skipped by either
    # traced algorithm can leave rows that are not fully reduced.
    rref = reduced_form(elimination.result, eps)

    classification = classify_augmented_system(rref, eps)
    rows, cols = shape(rref)
    unknowns = max(cols - 1, 0)

    if classification is SystemClassification.NONE:
        return SystemSolution(classification, elimination, rref)

    pivots = set(pivot_columns(rref, eps))
    free = [j for j in range(unknowns) if j not in pivots]
    particular = _particular_solution(rref, unknowns, eps)

    if classification is SystemClassification.INFINITE:
        logger.debug("Underdetermined system, free columns %s", free)
        return SystemSolution(classification, elimination, rref,
                              particular=particular, free_variables=free)

    return SystemSolution(classification, elimination, rref,
                          values=particular, particular=particular)
