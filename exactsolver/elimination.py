"""Row reduction with a step-by-step trace.

Two algorithms work on an augmented matrix ``[A|b]``:

- ``row_echelon``: Gaussian elimination with partial pivoting, stopping at
  row-echelon form (pivots are not normalised).
- ``reduced_row_echelon``: Gauss-Jordan elimination, producing reduced
  row-echelon form.

``reduced_form`` is the untraced canonical RREF used to read off ranks and
pivot columns.

Arithmetic is exact, but the pivot row is chosen by comparing decimal
magnitudes, and an entry counts as zero when its decimal value is below
``epsilon``.  Both functions work on a copy of the input and record every
row operation as an ``EliminationStep``; the first step is always the
untouched input, labelled ``"Initial"``.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from exactsolver import config
from exactsolver.matrix import (
    RationalMatrix, clone_matrix, format_matrix, shape, to_rational_matrix,
)
from exactsolver.rational import Number

logger = logging.getLogger(__name__)

INITIAL_OPERATION = "Initial"
INITIAL_DESCRIPTION = "Starting augmented matrix [A|b]"


@dataclass(frozen=True)
class EliminationStep:
    """Snapshot of the working matrix right after one row operation."""
    matrix: RationalMatrix
    operation: str
    description: str

    def to_dict(self) -> dict:
        return {
            "matrix": format_matrix(self.matrix),
            "operation": self.operation,
            "description": self.description,
        }


@dataclass
class EliminationResult:
    result: RationalMatrix
    steps: List[EliminationStep] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "result": format_matrix(self.result),
            "steps": [step.to_dict() for step in self.steps],
        }


def _resolve_epsilon(epsilon: Optional[float]) -> float:
    return config.get_setting("epsilon") if epsilon is None else epsilon


def _record(steps: list, m: RationalMatrix, operation: str,
            description: str) -> None:
    steps.append(EliminationStep(clone_matrix(m), operation, description))
    logger.debug("%s: %s", operation, description)


def _select_pivot(m: RationalMatrix, col: int, start: int) -> int:
    """Row (>= *start*) with the largest decimal magnitude in *col*.

    Ties go to the first row, so an already-good pivot is never swapped out.
    """
    max_row = start
    for row in range(start + 1, len(m)):
        if abs(m[row][col].to_decimal()) > abs(m[max_row][col].to_decimal()):
            max_row = row
    return max_row


def _swap(steps: list, m: RationalMatrix, target: int, source: int) -> None:
    m[target], m[source] = m[source], m[target]
    _record(
        steps, m,
        f"R{target + 1} ↔ R{source + 1}",
        f"Swap row {target + 1} and row {source + 1} (partial pivoting)",
    )


def row_echelon(matrix: Sequence[Sequence[Number]],
                epsilon: Optional[float] = None) -> EliminationResult:
    """Reduce an augmented matrix to row-echelon form.

    For each column ``c`` below ``min(rows, cols - 1)`` the largest-magnitude
    entry at or below the diagonal is swapped onto the diagonal.  A near-zero
    pivot leaves the column as is; otherwise every row below with a nonzero
    entry gets ``R_row - factor * R_c`` where ``factor = entry / pivot``.
    """
    eps = _resolve_epsilon(epsilon)
    m = to_rational_matrix(matrix)
    rows, cols = shape(m)

    steps: List[EliminationStep] = []
    _record(steps, m, INITIAL_OPERATION, INITIAL_DESCRIPTION)

    for col in range(min(rows, cols - 1)):
        max_row = _select_pivot(m, col, col)
        if max_row != col:
            _swap(steps, m, col, max_row)

        pivot = m[col][col]
        if pivot.is_near_zero(eps):
            logger.debug("No usable pivot in column %d, skipping", col + 1)
            continue

        for row in range(col + 1, rows):
            if m[row][col].is_near_zero(eps):
                continue

            factor = m[row][col].divide(pivot)
            for j in range(col, cols):
                m[row][j] = m[row][j].subtract(factor.multiply(m[col][j]))

            _record(
                steps, m,
                f"R{row + 1} - {factor}R{col + 1}",
                f"Eliminate below pivot: R{row + 1} = R{row + 1} - {factor}R{col + 1}",
            )

    return EliminationResult(m, steps)


def reduced_row_echelon(matrix: Sequence[Sequence[Number]],
                        epsilon: Optional[float] = None,
                        description: str = INITIAL_DESCRIPTION) -> EliminationResult:
    """Reduce an augmented matrix with Gauss-Jordan elimination.

    ``current_row`` tracks where the next pivot goes, separately from the
    column being processed.  Columns ``0 .. min(rows, cols - 1) - 1`` are
    visited in order.  When every candidate in a column is near zero the
    column contributes no pivot: ``current_row`` advances, nothing is
    recorded, and the next column is tried.  Otherwise the pivot is scaled
    to exactly 1 and cleared from all other rows.

    For singular or wide input the skip can leave rows that are not fully
    reduced; ``reduced_form`` gives the canonical RREF for analysis.
    """
    eps = _resolve_epsilon(epsilon)
    m = to_rational_matrix(matrix)
    rows, cols = shape(m)

    steps: List[EliminationStep] = []
    _record(steps, m, INITIAL_OPERATION, description)

    current_row = 0
    for col in range(min(rows, cols - 1)):
        if current_row >= rows:
            break

        max_row = _select_pivot(m, col, current_row)
        if max_row != current_row:
            _swap(steps, m, current_row, max_row)

        pivot = m[current_row][col]
        if pivot.is_near_zero(eps):
            logger.debug("Column %d has no pivot; its variable is free", col + 1)
            current_row += 1
            continue

        if not pivot.is_one():
            scale = pivot.reciprocal()
            m[current_row] = [scale.multiply(value) for value in m[current_row]]
            _record(
                steps, m,
                f"{scale}R{current_row + 1}",
                f"Scale row {current_row + 1} by {scale} to make pivot = 1",
            )

        for row in range(rows):
            if row == current_row or m[row][col].is_near_zero(eps):
                continue

            factor = m[row][col]
            m[row] = [value.subtract(factor.multiply(p))
                      for value, p in zip(m[row], m[current_row])]
            _record(
                steps, m,
                f"R{row + 1} - {factor}R{current_row + 1}",
                f"Eliminate in column {col + 1}: "
                f"R{row + 1} = R{row + 1} - {factor}R{current_row + 1}",
            )

        current_row += 1

    return EliminationResult(m, steps)


def reduced_form(matrix: Sequence[Sequence[Number]],
                 epsilon: Optional[float] = None) -> RationalMatrix:
    """Canonical reduced row-echelon form of ``[A|b]``, without a trace.

    Every coefficient column is visited, and a column with no usable pivot
    keeps the row cursor where it is.  Each nonzero coefficient row then
    starts with a 1 that is the only nonzero entry of its column, so ranks
    and pivot columns can be read straight off the result.
    """
    eps = _resolve_epsilon(epsilon)
    m = to_rational_matrix(matrix)
    rows, cols = shape(m)

    current_row = 0
    for col in range(cols - 1):
        if current_row >= rows:
            break
        max_row = _select_pivot(m, col, current_row)
        pivot = m[max_row][col]
        if pivot.is_near_zero(eps):
            continue
        m[current_row], m[max_row] = m[max_row], m[current_row]

        scale = pivot.reciprocal()
        m[current_row] = [scale.multiply(value) for value in m[current_row]]
        for row in range(rows):
            if row == current_row or m[row][col].is_zero():
                continue
            factor = m[row][col]
            m[row] = [value.subtract(factor.multiply(p))
                      for value, p in zip(m[row], m[current_row])]
        current_row += 1

    return m


METHODS: Dict[str, Callable[..., EliminationResult]] = {
    "gaussian": row_echelon,
    "gauss-jordan": reduced_row_echelon,
}


def eliminate(matrix: Sequence[Sequence[Number]], method: Optional[str] = None,
              epsilon: Optional[float] = None) -> EliminationResult:
    """Run the elimination named by *method* (``"gaussian"`` / ``"gauss-jordan"``)."""
    method = method or config.get_setting("default_method")
    try:
        algorithm = METHODS[method]
    except KeyError:
        raise ValueError(
            f"Unknown elimination method '{method}'. "
            f"Choose one of: {', '.join(METHODS)}."
        ) from None
    return algorithm(matrix, epsilon=epsilon)
