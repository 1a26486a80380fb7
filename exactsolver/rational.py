"""Exact rational arithmetic.

``Rational`` keeps every value in canonical form: the denominator is
positive, numerator and denominator share no common factor, and zero is
always stored as ``0/1``.  Values are immutable; every operation returns a
new ``Rational``.  The arithmetic itself is done by ``fractions.Fraction``.
"""

import math
import numbers
from decimal import Decimal
from fractions import Fraction
from typing import Union

from exactsolver.errors import DivisionByZero

# Anything accepted where a matrix entry is expected.
Number = Union["Rational", int, float, numbers.Rational]

DEFAULT_EPSILON = 1e-10


def gcd(a: int, b: int) -> int:
    """Greatest common divisor of two integers (always non-negative)."""
    return math.gcd(a, b)


def lcm(a: int, b: int) -> int:
    """Least common multiple of two integers (0 if either is 0)."""
    if a == 0 or b == 0:
        return 0
    return abs(a * b) // gcd(a, b)


class Rational:
    """An exact fraction ``numerator/denominator`` in lowest terms."""

    __slots__ = ("_numerator", "_denominator")

    def __init__(self, numerator: int = 0, denominator: int = 1):
        if not _is_int(numerator) or not _is_int(denominator):
            raise TypeError(
                "Rational() takes integers; use to_rational() for other values, "
                f"got {numerator!r}/{denominator!r}"
            )
        numerator, denominator = int(numerator), int(denominator)
        if denominator == 0:
            raise DivisionByZero("Denominator cannot be zero")

        if denominator < 0:
            numerator, denominator = -numerator, -denominator

        if numerator == 0:
            denominator = 1
        else:
            g = gcd(abs(numerator), denominator)
            numerator //= g
            denominator //= g

        object.__setattr__(self, "_numerator", numerator)
        object.__setattr__(self, "_denominator", denominator)

    def __setattr__(self, name, value):
        raise AttributeError("Rational values are immutable")

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    # ── Arithmetic ───────────────────────────────────────────────────────

    def as_fraction(self) -> Fraction:
        return Fraction(self._numerator, self._denominator)

    def add(self, other: Number) -> "Rational":
        return _from_fraction(self.as_fraction() + to_rational(other).as_fraction())

    def subtract(self, other: Number) -> "Rational":
        return _from_fraction(self.as_fraction() - to_rational(other).as_fraction())

    def multiply(self, other: Number) -> "Rational":
        return _from_fraction(self.as_fraction() * to_rational(other).as_fraction())

    def divide(self, other: Number) -> "Rational":
        b = to_rational(other)
        if b._numerator == 0:
            raise DivisionByZero("Division by zero")
        return _from_fraction(self.as_fraction() / b.as_fraction())

    def negate(self) -> "Rational":
        return Rational(-self._numerator, self._denominator)

    def abs(self) -> "Rational":
        return Rational(abs(self._numerator), self._denominator)

    def reciprocal(self) -> "Rational":
        return Rational(1).divide(self)

    # ── Tests and conversions ────────────────────────────────────────────

    def to_decimal(self) -> float:
        """Best-effort float approximation, for magnitude comparisons only."""
        return self._numerator / self._denominator

    def is_zero(self) -> bool:
        return self._numerator == 0

    def is_one(self) -> bool:
        return self._numerator == 1 and self._denominator == 1

    def is_near_zero(self, epsilon: float = DEFAULT_EPSILON) -> bool:
        """Decimal-approximate zero test used for pivot admissibility."""
        return abs(self.to_decimal()) < epsilon

    def is_integer(self) -> bool:
        return self._denominator == 1

    def equals(self, other: Number) -> bool:
        b = to_rational(other)
        return (self._numerator == b._numerator
                and self._denominator == b._denominator)

    def compare(self, other: Number) -> int:
        """Exact comparison: -1, 0 or 1."""
        a, b = self.as_fraction(), to_rational(other).as_fraction()
        return (a > b) - (a < b)

    def __str__(self) -> str:
        if self._denominator == 1:
            return str(self._numerator)
        return f"{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Rational({self._numerator}, {self._denominator})"

    def __float__(self) -> float:
        return self.to_decimal()

    def __bool__(self) -> bool:
        return self._numerator != 0

    def __hash__(self) -> int:
        return hash(self.as_fraction())

    def __eq__(self, other) -> bool:
        # Exact numbers only, so equal values always hash alike.
        if isinstance(other, bool) or not isinstance(other, (Rational, numbers.Rational)):
            return NotImplemented
        return self.equals(other)

    def __lt__(self, other) -> bool:
        return self.compare(other) < 0

    def __le__(self, other) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other) -> bool:
        return self.compare(other) >= 0

    def __add__(self, other):
        return self.add(other)

    def __radd__(self, other):
        return to_rational(other).add(self)

    def __sub__(self, other):
        return self.subtract(other)

    def __rsub__(self, other):
        return to_rational(other).subtract(self)

    def __mul__(self, other):
        return self.multiply(other)

    def __rmul__(self, other):
        return to_rational(other).multiply(self)

    def __truediv__(self, other):
        return self.divide(other)

    def __rtruediv__(self, other):
        return to_rational(other).divide(self)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def to_rational(value: Number) -> Rational:
    """Coerce a matrix entry to ``Rational``.

    This is the only place where plain numbers become exact values:

    - ``Rational`` is returned unchanged.
    - Integers wrap directly.
    - Other exact rationals (``fractions.Fraction``, SymPy ``Rational``)
      keep their numerator and denominator.
    - Floats go through their shortest decimal representation, so ``0.1``
      becomes ``1/10`` rather than the binary expansion.

    Raises TypeError for booleans and non-numeric values, ValueError for
    NaN or infinity.
    """
    if isinstance(value, Rational):
        return value
    if isinstance(value, bool):
        raise TypeError("Booleans are not valid matrix entries.")
    if isinstance(value, numbers.Integral):
        return Rational(int(value))
    if isinstance(value, numbers.Rational):
        return Rational(int(value.numerator), int(value.denominator))
    if isinstance(value, numbers.Real):
        as_float = float(value)
        if math.isnan(as_float) or math.isinf(as_float):
            raise ValueError(f"Cannot convert {value!r} to an exact rational.")
        num, den = Decimal(repr(as_float)).as_integer_ratio()
        return Rational(num, den)
    raise TypeError(f"Cannot convert {type(value).__name__} to Rational: {value!r}")


def _from_fraction(value: Fraction) -> Rational:
    return Rational(value.numerator, value.denominator)
