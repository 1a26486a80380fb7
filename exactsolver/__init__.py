"""
ExactSolver — exact rational row reduction with a step-by-step trace.
"""

__version__ = "1.0.0"

from exactsolver.errors import (
    DivisionByZero, ExactSolverError, NonSquareMatrix, SingularMatrix, ZeroPivot,
)
from exactsolver.rational import Rational, gcd, lcm, to_rational
from exactsolver.matrix import (
    RationalMatrix, augment, clone_matrix, format_matrix, to_decimal_matrix,
    to_rational_matrix, to_sympy_matrix,
)
from exactsolver.elimination import (
    EliminationResult, EliminationStep, eliminate, reduced_form,
    reduced_row_echelon, row_echelon,
)
from exactsolver.classify import SystemClassification, classify_augmented_system
from exactsolver.extract import (
    SystemSolution, pivot_columns, solution_from_ref, solution_from_rref,
    solve_system,
)
from exactsolver.operations import (
    cramers_rule, determinant, inverse, lu_factorization, matrix_rank,
)
from exactsolver.engine import solve_linear_system

__all__ = [
    "DivisionByZero", "ExactSolverError", "NonSquareMatrix", "SingularMatrix",
    "ZeroPivot",
    "Rational", "gcd", "lcm", "to_rational",
    "RationalMatrix", "augment", "clone_matrix", "format_matrix",
    "to_decimal_matrix", "to_rational_matrix", "to_sympy_matrix",
    "EliminationResult", "EliminationStep", "eliminate", "reduced_form",
    "reduced_row_echelon", "row_echelon",
    "SystemClassification", "classify_augmented_system",
    "SystemSolution", "pivot_columns", "solution_from_ref", "solution_from_rref",
    "solve_system",
    "cramers_rule", "determinant", "inverse", "lu_factorization", "matrix_rank",
    "solve_linear_system",
]
