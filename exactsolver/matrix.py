"""Structural helpers for matrices of ``Rational``.

A matrix is a plain list of rows, each a list of ``Rational``.  Keeping all
rows the same length is up to the caller.
"""

from typing import List, Sequence

import numpy as np
import sympy

from exactsolver.rational import Number, Rational, to_rational

RationalMatrix = List[List[Rational]]


def to_rational_matrix(grid: Sequence[Sequence[Number]]) -> RationalMatrix:
    """Coerce every entry of *grid* to ``Rational`` (always a new matrix)."""
    return [[to_rational(value) for value in row] for row in grid]


def clone_matrix(matrix: RationalMatrix) -> RationalMatrix:
    """Copy the row structure.  Entries are immutable, so they are shared."""
    return [list(row) for row in matrix]


def identity(n: int) -> RationalMatrix:
    return [[Rational(1 if i == j else 0) for j in range(n)] for i in range(n)]


def augment(coefficients: Sequence[Sequence[Number]],
            rhs: Sequence) -> RationalMatrix:
    """Build ``[A|b]``.

    *rhs* is either a vector (one entry per row) or a matrix with the same
    number of rows, whose columns are appended in order.
    """
    if len(coefficients) != len(rhs):
        raise ValueError(
            f"Right-hand side has {len(rhs)} rows, "
            f"coefficient matrix has {len(coefficients)}."
        )
    out = []
    for row, extra in zip(coefficients, rhs):
        if isinstance(extra, (list, tuple)):
            out.append([to_rational(v) for v in row] + [to_rational(v) for v in extra])
        else:
            out.append([to_rational(v) for v in row] + [to_rational(extra)])
    return out


def shape(matrix: RationalMatrix) -> tuple:
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    return rows, cols


def is_square(matrix: RationalMatrix) -> bool:
    return len(matrix) > 0 and all(len(row) == len(matrix) for row in matrix)


def format_matrix(matrix: RationalMatrix) -> List[List[str]]:
    """Entries as ``"n"`` / ``"n/d"`` strings, ready for display."""
    return [[str(to_rational(value)) for value in row] for row in matrix]


def matrix_to_text(matrix: RationalMatrix) -> str:
    """Single-line bracketed form, e.g. ``[[1, 1/2], [0, 3]]``."""
    rows = ["[" + ", ".join(cells) + "]" for cells in format_matrix(matrix)]
    return "[" + ", ".join(rows) + "]"


def to_decimal_matrix(matrix: RationalMatrix) -> np.ndarray:
    """Float approximation of *matrix* as a 2-D NumPy array."""
    rows, cols = shape(matrix)
    out = np.zeros((rows, cols), dtype=np.float64)
    for i, row in enumerate(matrix):
        for j, value in enumerate(row):
            out[i, j] = value.to_decimal()
    return out


def to_sympy_matrix(matrix: RationalMatrix) -> sympy.Matrix:
    """Exact SymPy copy of *matrix* (entries become ``sympy.Rational``)."""
    return sympy.Matrix([
        [sympy.Rational(value.numerator, value.denominator) for value in row]
        for row in matrix
    ])


def from_sympy_matrix(matrix: sympy.Matrix) -> RationalMatrix:
    out = []
    for i in range(matrix.rows):
        row = []
        for j in range(matrix.cols):
            entry = sympy.Rational(matrix[i, j])
            row.append(Rational(int(entry.p), int(entry.q)))
        out.append(row)
    return out
