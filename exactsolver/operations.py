"""Exact matrix utilities built on the elimination core.

Determinant, inverse, LU factorisation, Cramer's rule and rank, all in
``Rational`` arithmetic.  Inputs are copied, never modified.  Square-only
operations raise ``NonSquareMatrix``; singular inputs raise
``SingularMatrix`` (the determinant simply returns 0).
"""

import logging
from typing import List, Optional, Sequence, Tuple

from exactsolver import config
from exactsolver.elimination import (
    EliminationResult, _select_pivot, reduced_form, reduced_row_echelon,
)
from exactsolver.errors import NonSquareMatrix, SingularMatrix, ZeroPivot
from exactsolver.matrix import (
    RationalMatrix, augment, identity, is_square, to_rational_matrix,
)
from exactsolver.rational import Number, Rational

logger = logging.getLogger(__name__)


def _square(matrix: Sequence[Sequence[Number]], action: str) -> RationalMatrix:
    m = to_rational_matrix(matrix)
    if not is_square(m):
        raise NonSquareMatrix(f"Matrix must be square {action}.")
    return m


def determinant(matrix: Sequence[Sequence[Number]],
                epsilon: Optional[float] = None) -> Rational:
    """Determinant via elimination with partial pivoting."""
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    m = _square(matrix, "to compute determinant")
    n = len(m)
    det = Rational(1)
    swaps = 0

    for k in range(n):
        pivot_row = _select_pivot(m, k, k)
        if m[pivot_row][k].is_near_zero(eps):
            return Rational(0)
        if pivot_row != k:
            m[k], m[pivot_row] = m[pivot_row], m[k]
            swaps += 1

        pivot = m[k][k]
        det = det.multiply(pivot)
        for i in range(k + 1, n):
            factor = m[i][k].divide(pivot)
            for j in range(k, n):
                m[i][j] = m[i][j].subtract(factor.multiply(m[k][j]))

    return det if swaps % 2 == 0 else det.negate()


def inverse(matrix: Sequence[Sequence[Number]],
            epsilon: Optional[float] = None) -> EliminationResult:
    """Invert by Gauss-Jordan on ``[A|I]``.

    ``result`` is the inverse; ``steps`` is the full trace on the
    ``n x 2n`` working matrix.
    """
    m = _square(matrix, "to compute inverse")
    n = len(m)
    reduction = reduced_row_echelon(
        augment(m, identity(n)), epsilon,
        description="Starting augmented matrix [A|I]",
    )

    left = [row[:n] for row in reduction.result]
    if left != identity(n):
        raise SingularMatrix("Matrix is singular or nearly singular.")

    return EliminationResult([row[n:] for row in reduction.result],
                             reduction.steps)


def lu_factorization(matrix: Sequence[Sequence[Number]],
                     epsilon: Optional[float] = None
                     ) -> Tuple[RationalMatrix, RationalMatrix]:
    """Doolittle factorisation ``A = LU`` (unit lower L, no pivoting)."""
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    a = _square(matrix, "for LU factorization")
    n = len(a)
    lower = identity(n)
    upper = [[Rational(0)] * n for _ in range(n)]

    for i in range(n):
        for k in range(i, n):
            total = Rational(0)
            for j in range(i):
                total = total.add(lower[i][j].multiply(upper[j][k]))
            upper[i][k] = a[i][k].subtract(total)

        for k in range(i + 1, n):
            if upper[i][i].is_near_zero(eps):
                raise ZeroPivot("Zero pivot encountered in LU factorization.")
            total = Rational(0)
            for j in range(i):
                total = total.add(lower[k][j].multiply(upper[j][i]))
            lower[k][i] = a[k][i].subtract(total).divide(upper[i][i])

    return lower, upper


def cramers_rule(matrix: Sequence[Sequence[Number]], rhs: Sequence[Number],
                 epsilon: Optional[float] = None) -> List[Rational]:
    """Solve ``Ax = b`` as ``x_i = det(A_i) / det(A)``."""
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    a = _square(matrix, "for Cramer's Rule")
    b = to_rational_matrix([rhs])[0]
    if len(b) != len(a):
        raise ValueError(
            f"Right-hand side has {len(b)} entries, matrix has {len(a)} rows."
        )

    det_a = determinant(a, eps)
    if det_a.is_near_zero(eps):
        raise SingularMatrix("det(A) = 0, no unique solution.")

    solution = []
    for col in range(len(a)):
        replaced = [row[:col] + [b[i]] + row[col + 1:] for i, row in enumerate(a)]
        solution.append(determinant(replaced, eps).divide(det_a))
    logger.debug("Cramer's rule: det(A) = %s", det_a)
    return solution


def matrix_rank(matrix: Sequence[Sequence[Number]],
                epsilon: Optional[float] = None) -> int:
    """Rank of a plain (non-augmented) matrix."""
    eps = config.get_setting("epsilon") if epsilon is None else epsilon
    padded = [list(row) + [0] for row in matrix]
    reduced = reduced_form(padded, eps)
    return sum(1 for row in reduced if any(not v.is_near_zero(eps) for v in row))
