"""Tests for the exact Rational type."""

import math
from fractions import Fraction

import pytest
import sympy

from exactsolver.errors import DivisionByZero, ExactSolverError
from exactsolver.rational import Rational, gcd, lcm, to_rational


# ── Canonical form ──────────────────────────────────────────────────────

class TestCanonicalForm:
    @pytest.mark.parametrize(
        "num,den,expected",
        [
            (2, 4, (1, 2)),
            (-2, 4, (-1, 2)),
            (2, -4, (-1, 2)),
            (-2, -4, (1, 2)),
            (0, 7, (0, 1)),
            (0, -3, (0, 1)),
            (6, 3, (2, 1)),
            (-9, 12, (-3, 4)),
        ],
    )
    def test_normalised(self, num, den, expected):
        r = Rational(num, den)
        assert (r.numerator, r.denominator) == expected

    def test_invariant_holds_for_many_values(self):
        for num in range(-12, 13):
            for den in range(-12, 13):
                if den == 0:
                    continue
                r = Rational(num, den)
                assert r.denominator > 0
                if r.numerator == 0:
                    assert r.denominator == 1
                else:
                    assert math.gcd(abs(r.numerator), r.denominator) == 1

    def test_default_denominator(self):
        assert Rational(5) == Rational(5, 1)
        assert Rational().is_zero()

    def test_zero_denominator_raises(self):
        with pytest.raises(DivisionByZero):
            Rational(1, 0)
        with pytest.raises(DivisionByZero):
            Rational(0, 0)

    def test_division_by_zero_is_a_solver_and_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            Rational(3, 0)
        with pytest.raises(ExactSolverError):
            Rational(3, 0)

    def test_non_integer_components_rejected(self):
        with pytest.raises(TypeError):
            Rational(1.5, 2)

    def test_immutable(self):
        r = Rational(1, 2)
        with pytest.raises(AttributeError):
            r.numerator = 3
        with pytest.raises(AttributeError):
            r.foo = 1


# ── Arithmetic ──────────────────────────────────────────────────────────

class TestArithmetic:
    def test_add_subtract(self):
        assert Rational(1, 2).add(Rational(1, 3)) == Rational(5, 6)
        assert Rational(1, 2).subtract(Rational(1, 3)) == Rational(1, 6)
        assert Rational(1, 6).add(Rational(-1, 6)) == Rational(0)

    def test_multiply_divide(self):
        assert Rational(2, 3).multiply(Rational(3, 4)) == Rational(1, 2)
        assert Rational(2, 3).divide(Rational(4, 9)) == Rational(3, 2)

    def test_plain_operands_on_either_side(self):
        half = Rational(1, 2)
        assert half + 1 == Rational(3, 2)
        assert 1 + half == Rational(3, 2)
        assert 1 - half == Rational(1, 2)
        assert 3 * half == Rational(3, 2)
        assert 1 / half == Rational(2)
        assert half * 0.5 == Rational(1, 4)
        assert half.add(Fraction(1, 4)) == Rational(3, 4)

    def test_divide_by_zero_rational(self):
        with pytest.raises(DivisionByZero):
            Rational(1, 2).divide(Rational(0))
        with pytest.raises(DivisionByZero):
            Rational(1, 2) / 0
        with pytest.raises(DivisionByZero):
            Rational(0).reciprocal()

    def test_negate_abs_reciprocal(self):
        assert -Rational(2, 3) == Rational(-2, 3)
        assert Rational(-2, 3).abs() == Rational(2, 3)
        assert abs(Rational(-2, 3)) == Rational(2, 3)
        assert Rational(-2, 3).reciprocal() == Rational(-3, 2)

    def test_results_are_canonical(self):
        r = Rational(1, 6).add(Rational(1, 3))
        assert (r.numerator, r.denominator) == (1, 2)
        r = Rational(3, 4).subtract(Rational(3, 4))
        assert (r.numerator, r.denominator) == (0, 1)

    @pytest.mark.parametrize(
        "a,b",
        [
            (Rational(1, 2), Rational(1, 3)),
            (Rational(-7, 5), Rational(2, 9)),
            (Rational(4), Rational(-3, 8)),
            (Rational(0), Rational(11, 13)),
        ],
    )
    def test_arithmetic_round_trip(self, a, b):
        assert a.add(b).subtract(b) == a
        assert a.divide(b).multiply(b) == a

    def test_operations_do_not_mutate(self):
        a = Rational(1, 2)
        a.add(Rational(1, 2))
        a.multiply(5)
        assert a == Rational(1, 2)


# ── Comparisons and conversions ─────────────────────────────────────────

class TestComparisons:
    def test_to_string(self):
        assert str(Rational(3)) == "3"
        assert str(Rational(-3, 4)) == "-3/4"
        assert str(Rational(0, 5)) == "0"

    def test_to_decimal(self):
        assert Rational(1, 4).to_decimal() == 0.25
        assert float(Rational(-1, 2)) == -0.5

    def test_equality_is_structural(self):
        assert Rational(2, 4).equals(Rational(1, 2))
        assert Rational(1, 3) != Rational(333333, 1000000)
        assert Rational(2) == 2

    def test_hash_consistent_with_equality(self):
        assert hash(Rational(2, 4)) == hash(Rational(1, 2))
        assert hash(Rational(3)) == hash(3)
        assert len({Rational(1, 2), Rational(2, 4), Rational(3)}) == 2

    def test_floats_never_compare_equal(self):
        assert Rational(1, 10) != 0.1
        assert Rational(1, 2) != 0.5
        assert Rational(1, 10).equals(0.1)
        table = {Rational(1, 2): "half"}
        assert table[Fraction(1, 2)] == "half"
        assert Fraction(1, 2) == Rational(1, 2)
        assert 0.1 not in {Rational(1, 10)}

    @pytest.mark.parametrize(
        "a,b",
        [
            (Fraction(1, 3), Fraction(-2, 7)),
            (Fraction(10 ** 20, 3), Fraction(7, 10 ** 15)),
            (Fraction(-5, 6), Fraction(5, 6)),
        ],
    )
    def test_arithmetic_agrees_with_fraction(self, a, b):
        x, y = to_rational(a), to_rational(b)
        assert (x + y).as_fraction() == a + b
        assert (x - y).as_fraction() == a - b
        assert (x * y).as_fraction() == a * b
        assert (x / y).as_fraction() == a / b
        assert x.compare(y) == (a > b) - (a < b)

    def test_zero_tests(self):
        assert Rational(0).is_zero()
        assert not Rational(1, 10 ** 12).is_zero()
        assert Rational(1, 10 ** 12).is_near_zero()
        assert not Rational(1, 1000).is_near_zero()
        assert Rational(1, 1000).is_near_zero(epsilon=0.01)

    def test_ordering(self):
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(-1, 2) <= Rational(-1, 2)
        assert Rational(3, 2) > 1
        assert Rational(1, 2).compare(Rational(2, 4)) == 0

    def test_is_one_and_integer(self):
        assert Rational(3, 3).is_one()
        assert not Rational(-1).is_one()
        assert Rational(4, 2).is_integer()


# ── Coercion ────────────────────────────────────────────────────────────

class TestCoercion:
    def test_passthrough(self):
        r = Rational(1, 2)
        assert to_rational(r) is r

    def test_ints_and_fractions(self):
        assert to_rational(7) == Rational(7)
        assert to_rational(Fraction(-3, 6)) == Rational(-1, 2)
        assert to_rational(sympy.Rational(5, 10)) == Rational(1, 2)
        assert to_rational(sympy.Integer(4)) == Rational(4)

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0.5, Rational(1, 2)),
            (0.1, Rational(1, 10)),
            (-2.25, Rational(-9, 4)),
            (3.0, Rational(3)),
        ],
    )
    def test_floats_use_decimal_representation(self, value, expected):
        assert to_rational(value) == expected

    def test_rejects_bad_values(self):
        with pytest.raises(TypeError):
            to_rational(True)
        with pytest.raises(TypeError):
            to_rational("1/2")
        with pytest.raises(ValueError):
            to_rational(float("nan"))
        with pytest.raises(ValueError):
            to_rational(float("inf"))


def test_gcd_and_lcm() -> None:
    assert gcd(12, 18) == 6
    assert gcd(0, 5) == 5
    assert lcm(4, 6) == 12
    assert lcm(0, 6) == 0
    assert lcm(-4, 6) == 12
