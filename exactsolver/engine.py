"""Step-by-step linear system solver using exact rational arithmetic."""

"""
Takes an augmented matrix [A|b] (numbers or Rationals), reduces it with
Gaussian or Gauss-Jordan elimination, and returns a trail-format result dict:
given, method, steps (one per row operation, with a matrix snapshot),
final_answer, verification_steps and summary.  The dict holds only strings
and plain numbers so a presentation layer can render it directly.
"""

import logging
import time
from datetime import datetime
from typing import List, Optional, Sequence

from exactsolver import __version__, config
from exactsolver.classify import SystemClassification
from exactsolver.elimination import INITIAL_OPERATION, METHODS, EliminationStep
from exactsolver.extract import (
    SystemSolution, _leading_column, solution_from_ref, solution_from_rref,
    solve_system,
)
from exactsolver.matrix import (
    RationalMatrix, format_matrix, matrix_to_text, shape, to_rational_matrix,
)
from exactsolver.rational import Number, Rational

logger = logging.getLogger(__name__)

_METHOD_INFO = {
    "gaussian": {
        "name": "Gaussian Elimination (Row-Echelon Form)",
        "description": (
            "Use partial pivoting and row operations to zero out every "
            "entry below the pivots, then back-substitute."
        ),
        "approach": "Pivot → Eliminate below → Back-substitute",
    },
    "gauss-jordan": {
        "name": "Gauss-Jordan Elimination (Reduced Row-Echelon Form)",
        "description": (
            "Use partial pivoting, scale every pivot to 1 and clear the "
            "pivot columns above and below, then read off the solution."
        ),
        "approach": "Pivot → Scale → Eliminate above and below → Read off",
    },
}


# ── Formatting helpers ──────────────────────────────────────────────────

def _default_var_names(n: int) -> List[str]:
    return [f"x{j + 1}" for j in range(n)]


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'s' if n != 1 else ''}"


def _linear_combination(constant: Rational, terms) -> str:
    """Render ``constant + Σ coeff·name`` with clean signs, e.g. ``3 - 2·x3``."""
    parts = [] if constant.is_zero() else [str(constant)]
    for coeff, name in terms:
        if coeff.is_zero():
            continue
        magnitude = coeff.abs()
        text = name if magnitude.is_one() else f"{magnitude}·{name}"
        negative = coeff < 0
        if not parts:
            parts.append(f"-{text}" if negative else text)
        else:
            parts.append(f"{'-' if negative else '+'} {text}")
    return " ".join(parts) if parts else "0"


def _explain(step: EliminationStep, rows: int, unknowns: int) -> str:
    op = step.operation
    if op == INITIAL_OPERATION:
        return (
            f"We write the system of {_plural(rows, 'equation')} in "
            f"{_plural(unknowns, 'unknown')} as an augmented matrix. "
            f"The last column holds the constants."
        )
    if "↔" in op:
        return (
            "We move the row with the largest entry (in absolute value) "
            "into the pivot position. Swapping rows does not change the "
            "solutions of the system."
        )
    if op.startswith("R"):
        return (
            f"We subtract a multiple of the pivot row so the entry in the "
            f"pivot column becomes 0: {step.description.split(': ', 1)[-1]}."
        )
    return (
        "We multiply the pivot row by the reciprocal of its pivot so the "
        "pivot becomes exactly 1."
    )


def _step_dicts(steps: Sequence[EliminationStep], rows: int,
                unknowns: int) -> List[dict]:
    return [
        {
            "description": step.description,
            "expression": step.operation,
            "explanation": _explain(step, rows, unknowns),
            "matrix": format_matrix(step.matrix),
        }
        for step in steps
    ]


def _parametric_lines(solution: SystemSolution, var_names: List[str],
                      eps: float) -> List[str]:
    """One line per unknown, pivots expressed through the free variables."""
    rref = solution.rref
    free = solution.free_variables
    lines = {}
    for row in rref:
        lead = _leading_column(row, eps)
        if lead is None:
            continue
        terms = [(row[f].negate(), var_names[f]) for f in free]
        lines[lead] = f"{var_names[lead]} = {_linear_combination(row[-1], terms)}"
    for f in free:
        lines[f] = f"{var_names[f]} is a free variable"
    return [lines[j] for j in sorted(lines)]


def _contradiction_row(rref: RationalMatrix, eps: float) -> Optional[int]:
    for i, row in enumerate(rref):
        if (all(v.is_near_zero(eps) for v in row[:-1])
                and not row[-1].is_near_zero(eps)):
            return i
    return None


def _extract_unique(solution: SystemSolution, method: str,
                    unknowns: int) -> List[Rational]:
    reduced = solution.elimination.result
    if method == "gaussian":
        return solution_from_ref(reduced)[:unknowns]
    return solution_from_rref(reduced)[:unknowns]


def _build_verification(original: RationalMatrix, values: List[Rational],
                        var_names: List[str]) -> tuple:
    """Substitute *values* into every original equation, exactly."""
    assignment = ", ".join(f"{n} = {v}" for n, v in zip(var_names, values))
    verification_steps = [{
        "description": "Substitute into every equation",
        "expression": assignment,
        "explanation": "We plug the solution back into each original equation.",
    }]
    all_ok = True
    for i, row in enumerate(original):
        lhs = Rational(0)
        for coeff, value in zip(row[:-1], values):
            lhs = lhs.add(coeff.multiply(value))
        rhs = row[-1]
        ok = lhs == rhs
        all_ok = all_ok and ok
        equation = _linear_combination(
            Rational(0), list(zip(row[:-1], var_names))
        )
        verification_steps.append({
            "description": f"Equation ({i + 1}): {equation} = {rhs}",
            "expression": f"LHS = {lhs},  RHS = {rhs}  →  {'✓' if ok else '✗'}",
            "explanation": (
                f"Both sides equal {lhs}." if ok
                else "Sides differ — please check the input."
            ),
        })
    verification_steps.append({
        "description": "All equations verified" if all_ok else "Verification failed",
        "expression": ("All equations satisfied  ✓" if all_ok
                       else "Some equations are not satisfied  ✗"),
        "explanation": ("The solution is correct." if all_ok
                        else "The computed values do not satisfy every equation."),
    })
    return verification_steps, all_ok


# ── Main public entry point ─────────────────────────────────────────────

def solve_linear_system(matrix: Sequence[Sequence[Number]],
                        method: Optional[str] = None,
                        var_names: Optional[Sequence[str]] = None,
                        epsilon: Optional[float] = None) -> dict:
    """
    Solve an augmented system ``[A|b]`` step by step.

    *method* is ``"gaussian"`` (row-echelon form + back substitution) or
    ``"gauss-jordan"`` (reduced row-echelon form); the default comes from
    the ``default_method`` setting.  *var_names* defaults to x1, x2, ...

    Returns a dict with trail-format sections:
      - equation, given, method, steps, final_answer,
        verification_steps, summary
    """
    t_start = time.perf_counter()

    method = method or config.get_setting("default_method")
    if method not in METHODS:
        raise ValueError(
            f"Unknown method '{method}'. Choose one of: {', '.join(METHODS)}."
        )

    # ── Validate shape ───────────────────────────────────────────────
    original = to_rational_matrix(matrix)
    if not original:
        raise ValueError("The matrix must have at least one row.")
    rows, cols = shape(original)
    if any(len(row) != cols for row in original):
        raise ValueError("All rows must have the same number of entries.")
    if cols < 2:
        raise ValueError(
            "An augmented matrix needs at least one coefficient column "
            "and a right-hand side column."
        )
    unknowns = cols - 1
    eps = config.get_setting("epsilon") if epsilon is None else epsilon

    var_names = list(var_names) if var_names else _default_var_names(unknowns)
    if len(var_names) != unknowns:
        raise ValueError(
            f"Expected {unknowns} variable names, got {len(var_names)}."
        )

    # ── Eliminate and classify ───────────────────────────────────────
    solution = solve_system(original, method, eps)
    classification = solution.classification
    steps = _step_dicts(solution.elimination.steps, rows, unknowns)
    verification_steps = []
    validation_status = "pass"

    if classification is SystemClassification.UNIQUE:
        values = _extract_unique(solution, method, unknowns)
        lines = [f"{n} = {v}" for n, v in zip(var_names, values)]
        steps.append({
            "description": ("Back substitution" if method == "gaussian"
                            else "Read off the solution"),
            "expression": "\n".join(lines),
            "explanation": (
                "Starting from the last row, solve each equation for its "
                "pivot variable and substitute the values already found."
                if method == "gaussian" else
                "Each row now reads 'variable = constant', so the last "
                "column is the solution."
            ),
        })
        final_answer = "\n".join(lines)
        verification_steps, ok = _build_verification(original, values, var_names)
        validation_status = "pass" if ok else "fail"

    elif classification is SystemClassification.INFINITE:
        free_names = [var_names[j] for j in solution.free_variables]
        lines = _parametric_lines(solution, var_names, eps)
        steps.append({
            "description": "Parametric solution",
            "expression": "\n".join(lines),
            "explanation": (
                f"There are fewer pivots than unknowns, so the system is "
                f"underdetermined — {', '.join(free_names)} can take any value."
            ),
        })
        final_answer = (
            "Infinite solutions — the system is underdetermined.\n"
            + "\n".join(lines)
        )
        verification_steps, ok = _build_verification(
            original, solution.particular, var_names,
        )
        validation_status = "pass" if ok else "fail"

    else:
        bad_row = _contradiction_row(solution.rref, eps)
        contradiction = (f"0 = {solution.rref[bad_row][-1]}"
                         if bad_row is not None else "0 = c")
        steps.append({
            "description": "Contradiction — No Solution",
            "expression": contradiction,
            "explanation": (
                f"A row reduces to {contradiction}: every coefficient "
                f"cancelled but the constant did not. That is never true, "
                f"so the system has no solution."
            ),
        })
        final_answer = (
            "No solution — the system is inconsistent.\n"
            f"A row reduces to {contradiction}, which is impossible."
        )

    # ── Number the steps ─────────────────────────────────────────────
    for i, s in enumerate(steps, start=1):
        s["step_number"] = i
    for i, s in enumerate(verification_steps, start=1):
        s["step_number"] = i

    t_end = time.perf_counter()
    runtime_ms = round((t_end - t_start) * 1000, 2)
    info = _METHOD_INFO[method]
    logger.debug("Solved %dx%d system with %s: %s",
                 rows, cols, method, classification.value)

    return {
        "equation": matrix_to_text(original),
        "given": {
            "problem": "Solve the system of linear equations",
            "inputs": {
                "matrix": format_matrix(original),
                "rows": str(rows),
                "columns": str(cols),
                "unknowns": str(unknowns),
                "variables": ", ".join(var_names),
            },
        },
        "method": {
            "name": info["name"],
            "description": info["description"],
            "parameters": {
                "equation_type": (
                    f"System of {_plural(rows, 'linear equation')}"
                ),
                "variables": ", ".join(var_names),
                "approach": info["approach"],
                "pivoting": "Partial (largest absolute value)",
                "epsilon": str(eps),
            },
        },
        "steps": steps,
        "final_answer": final_answer,
        "verification_steps": verification_steps,
        "summary": {
            "runtime_ms": runtime_ms,
            "total_steps": len(steps),
            "verification_steps": len(verification_steps),
            "validation_status": validation_status,
            "classification": classification.value,
            "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            "library": f"ExactSolver {__version__} (rational arithmetic)",
            "python": None,
        },
    }


if __name__ == "__main__":
    config.configure_logging()
    test_systems = [
        [[2, 1, 3, 1], [3, 2, 1, 4], [1, -1, 2, 3]],
        [[1, 1, 2], [1, 1, 2]],
        [[1, 1, 2], [0, 0, 5]],
        [[0.5, 0.25, 1], [1, -1, 0]],
    ]
    for system in test_systems:
        for method in METHODS:
            print(f"\n{'=' * 50}")
            print(f"Solving ({method}): {system}")
            print('=' * 50)
            result = solve_linear_system(system, method=method)
            for step in result["steps"]:
                print(f"  {step['expression']:<16} {step['description']}")
            print(f"\n  => {result['final_answer']}")
