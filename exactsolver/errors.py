"""Error types raised by the exact solver.

Every error derives from ``ValueError`` so callers that already catch
``ValueError`` around a solve keep working.
"""


class ExactSolverError(ValueError):
    """Base class for all solver errors."""


class DivisionByZero(ExactSolverError, ZeroDivisionError):
    """Zero denominator, or division by a zero-valued Rational."""


class SingularMatrix(ExactSolverError):
    pass


class NonSquareMatrix(ExactSolverError):
    pass


class ZeroPivot(ExactSolverError):
    pass
