# tests/test_properties.py
"""
Property-based tests for the arithmetic engine.

Uses Hypothesis to check algebraic laws across bases and strategies.

Covers:
- Agreement with Python ints and fractions
- Inverse operations (add/subtract, doubling/halving, rebase)
- Agreement of alternative multiplication and division strategies
- Notation round trips
- Operands are never modified and results are new objects
- Rational exponents of large powers keep every fraction digit
"""

import math
from fractions import Fraction as NativeFraction

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st

import radix_math
from common.constants import BASE_MAX, BASE_MIN
from component_3_number import Number
from component_5_fraction import Fraction
from component_12_operation_registry import (
    DIVISION_ALGORITHMS,
    MULTIPLICATION_ALGORITHMS,
)
from component_13_processing_details import ProcessingDetails

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

base_st = st.integers(min_value=BASE_MIN, max_value=BASE_MAX)

int_st = st.integers(min_value=-(10**9), max_value=10**9)

small_int_st = st.integers(min_value=-300, max_value=300)

decimal_st = st.builds(
    Number.from_scaled,
    st.just(10),
    st.booleans(),
    st.lists(st.integers(min_value=0, max_value=9), min_size=1, max_size=8),
    st.integers(min_value=0, max_value=4),
)


def num(value, base=10):
    return Number.from_native(value, base)


# ---------------------------------------------------------------------------
# Integer properties
# ---------------------------------------------------------------------------


class TestIntegerProperties:
    @given(a=int_st, b=int_st, base=base_st)
    @settings(max_examples=60)
    def test_addition_matches_int(self, a: int, b: int, base: int):
        """add() agrees with int addition in every base."""
        assert (num(a, base) + num(b, base)).to_native_int() == a + b

    @given(a=int_st, b=int_st, base=base_st)
    @settings(max_examples=60)
    def test_multiplication_matches_int(self, a: int, b: int, base: int):
        """multiply() agrees with int multiplication in every base."""
        assert (num(a, base) * num(b, base)).to_native_int() == a * b

    @given(a=int_st, b=int_st)
    @settings(max_examples=60)
    def test_comparison_matches_int(self, a: int, b: int):
        """Ordering agrees with int ordering."""
        assert (num(a) < num(b)) == (a < b)
        assert (num(a) == num(b)) == (a == b)

    @given(a=int_st, b=int_st)
    @settings(max_examples=60)
    def test_divmod_law(self, a: int, b: int):
        """quotient * divisor + remainder == dividend, |remainder| < |divisor|."""
        assume(b != 0)
        result = num(a).divide_with_remainder(num(b))

        assert result.result * num(b) + result.remainder == num(a)
        assert result.remainder.absolute_value() < num(b).absolute_value()
        assert result.remainder.is_zero() or result.remainder.is_negative() == (a < 0)

    @given(a=int_st, b=int_st)
    @settings(max_examples=40)
    def test_gcd_matches_math(self, a: int, b: int):
        """gcd() agrees with math.gcd."""
        assert num(a).gcd(num(b)).to_native_int() == math.gcd(a, b)

    @given(a=int_st, base=base_st)
    @settings(max_examples=60)
    def test_rebase_round_trip(self, a: int, base: int):
        """Integers survive a rebase there and back."""
        assert num(a).rebase(base).rebase(10) == num(a)
        assert num(a).rebase(base) == num(a, base)


# ---------------------------------------------------------------------------
# Decimal properties
# ---------------------------------------------------------------------------


class TestDecimalProperties:
    @given(a=decimal_st, b=decimal_st)
    @settings(max_examples=60)
    def test_subtract_inverts_add(self, a: Number, b: Number):
        """(a + b) - b == a."""
        assert (a + b) - b == a

    @given(a=decimal_st, b=decimal_st)
    @settings(max_examples=60)
    def test_addition_commutes(self, a: Number, b: Number):
        """a + b == b + a."""
        assert a + b == b + a

    @given(a=decimal_st, b=decimal_st)
    @settings(max_examples=60)
    def test_multiplication_commutes(self, a: Number, b: Number):
        """a * b == b * a."""
        assert a * b == b * a

    @given(a=decimal_st)
    @settings(max_examples=60)
    def test_halving_inverts_doubling(self, a: Number):
        """halving(doubling(a)) == a."""
        assert a.doubling().halving() == a

    @given(a=decimal_st)
    @settings(max_examples=60)
    def test_notation_round_trip(self, a: Number):
        """Standard and scientific notation parse back to the same value."""
        assert Number.parse(str(a)) == a
        assert Number.parse(a.to_scientific_notation()) == a

    @given(a=decimal_st, places=st.integers(min_value=0, max_value=4))
    @settings(max_examples=60)
    def test_rounding_bounds(self, a: Number, places: int):
        """Rounded values keep at most `places` fraction digits and stay within half a unit."""
        rounded = a.round(places)
        half_unit = NativeFraction(1, 2 * 10**places)

        assert len(rounded.fraction_ordinals) <= places
        difference = abs(
            NativeFraction(str(rounded)) - NativeFraction(str(a))
        )
        assert difference <= half_unit

    @given(a=decimal_st)
    @settings(max_examples=40)
    def test_hash_matches_fraction(self, a: Number):
        """Equal Numbers and Fractions hash equally."""
        assert hash(a) == hash(a.to_fraction())


# ---------------------------------------------------------------------------
# Strategy agreement
# ---------------------------------------------------------------------------


class TestStrategyProperties:
    @given(a=small_int_st, b=small_int_st)
    @settings(max_examples=30)
    def test_multiplication_algorithms_agree(self, a: int, b: int):
        """Every multiplication algorithm yields the same product."""
        products = {
            num(a).multiply(num(b), ProcessingDetails(algorithm=algorithm))
            for algorithm in MULTIPLICATION_ALGORITHMS
        }
        assert products == {num(a * b)}

    @given(a=small_int_st, b=small_int_st)
    @settings(max_examples=30)
    def test_division_algorithms_agree(self, a: int, b: int):
        """Every division algorithm yields the same truncated quotient."""
        assume(b != 0)
        quotients = {
            str(num(a).divide(num(b), ProcessingDetails(algorithm=algorithm, precision=6)))
            for algorithm in DIVISION_ALGORITHMS
        }
        assert len(quotients) == 1

    @given(a=small_int_st, b=small_int_st)
    @settings(max_examples=30)
    def test_integer_quotient_truncates(self, a: int, b: int):
        """Precision 0 gives the quotient truncated toward zero."""
        assume(b != 0)
        expected = abs(a) // abs(b) * (1 if (a < 0) == (b < 0) else -1)

        quotient = num(a).divide(num(b), ProcessingDetails(precision=0))
        assert quotient.to_native_int() == expected


# ---------------------------------------------------------------------------
# Fraction properties
# ---------------------------------------------------------------------------

nonzero_st = st.integers(min_value=-500, max_value=500).filter(lambda value: value != 0)


class TestFractionProperties:
    @given(a=small_int_st, b=nonzero_st, c=small_int_st, d=nonzero_st)
    @settings(max_examples=50)
    def test_addition_matches_native(self, a: int, b: int, c: int, d: int):
        """Fraction addition agrees with fractions.Fraction."""
        expected = NativeFraction(a, b) + NativeFraction(c, d)

        assert Fraction(a, b) + Fraction(c, d) == Fraction(expected.numerator, expected.denominator)

    @given(a=small_int_st, b=nonzero_st, c=small_int_st, d=nonzero_st)
    @settings(max_examples=50)
    def test_multiplication_matches_native(self, a: int, b: int, c: int, d: int):
        """Fraction multiplication agrees with fractions.Fraction."""
        expected = NativeFraction(a, b) * NativeFraction(c, d)

        assert Fraction(a, b) * Fraction(c, d) == Fraction(expected.numerator, expected.denominator)

    @given(a=small_int_st, b=nonzero_st)
    @settings(max_examples=50)
    def test_unreduced_fractions_hash_equally(self, a: int, b: int):
        """a/b and 3a/3b are equal and hash equally."""
        assert Fraction(a, b) == Fraction(3 * a, 3 * b)
        assert hash(Fraction(a, b)) == hash(Fraction(3 * a, 3 * b))

    @given(a=small_int_st, b=nonzero_st, base=base_st)
    @settings(max_examples=40)
    def test_rebase_is_exact(self, a: int, b: int, base: int):
        """Rebasing a Fraction keeps its value."""
        assert Fraction(a, b).rebase(base).rebase(10) == Fraction(a, b)


# ---------------------------------------------------------------------------
# Operand immutability
# ---------------------------------------------------------------------------

UNARY_OPERATIONS = [
    radix_math.negate,
    radix_math.absolute_value,
    radix_math.inc,
    radix_math.dec,
    radix_math.doubling,
    radix_math.halving,
    radix_math.shift_left,
    radix_math.shift_right,
    radix_math.remove_fraction_part,
    radix_math.remove_integer_part,
    radix_math.square,
    radix_math.round_up,
    radix_math.round_down,
    radix_math.evaluate,
    radix_math.to_fraction,
    lambda number: radix_math.round(number, 2),
    lambda number: radix_math.rebase(number, 16),
    lambda number: radix_math.exponentiate(number, 3),
    lambda number: radix_math.square_root(radix_math.absolute_value(number)),
]

BINARY_OPERATIONS = [
    radix_math.add,
    radix_math.subtract,
    radix_math.multiply,
    radix_math.divide,
    radix_math.min,
    radix_math.max,
]

INTEGER_OPERATIONS = [
    radix_math.diviso,
    radix_math.modulo,
    radix_math.gcd,
    radix_math.lcm,
]


class TestOperandProperties:
    @pytest.mark.parametrize("operation", UNARY_OPERATIONS)
    @given(a=decimal_st)
    @settings(max_examples=20)
    def test_unary_operations_keep_operand(self, operation, a: Number):
        """The operand keeps its value and is never returned itself."""
        text = str(a)
        result = operation(a)

        assert str(a) == text
        assert result is not a

    @pytest.mark.parametrize("operation", BINARY_OPERATIONS)
    @given(a=decimal_st, b=decimal_st)
    @settings(max_examples=20)
    def test_binary_operations_keep_operands(self, operation, a: Number, b: Number):
        """Both operands keep their values and neither is returned itself."""
        assume(not b.is_zero())
        texts = (str(a), str(b))
        result = operation(a, b)

        assert (str(a), str(b)) == texts
        assert result is not a
        assert result is not b

    @pytest.mark.parametrize("operation", INTEGER_OPERATIONS)
    @given(a=small_int_st, b=small_int_st)
    @settings(max_examples=20)
    def test_integer_operations_keep_operands(self, operation, a: int, b: int):
        """Integer-only operations leave their operands alone as well."""
        assume(b != 0)
        x, y = num(a), num(b)
        result = operation(x, y)

        assert (str(x), str(y)) == (str(num(a)), str(num(b)))
        assert result is not x
        assert result is not y

    @given(a=small_int_st, b=nonzero_st)
    @settings(max_examples=30)
    def test_fraction_operations_keep_operand(self, a: int, b: int):
        """Fraction copies and conversions never return the operand."""
        fraction = Fraction(a, b)
        text = str(fraction)

        for result in (
            radix_math.to_fraction(fraction),
            radix_math.add(fraction, num(0)),
            radix_math.rebase(fraction, 10),
        ):
            assert result is not fraction
            assert str(fraction) == text


# ---------------------------------------------------------------------------
# Rational exponents
# ---------------------------------------------------------------------------


def within_one_unit(root: Number, power: NativeFraction, q: int) -> bool:
    """root is within one unit of the 10th fraction digit of power^(1/q)."""
    unit = NativeFraction(1, 10**10)
    value = NativeFraction(str(root))
    low = max(value - unit, NativeFraction(0))
    return low**q <= power <= (value + unit) ** q


class TestRationalExponentProperties:
    @given(
        x=st.integers(min_value=2, max_value=60),
        p=st.integers(min_value=1, max_value=45),
        q=st.integers(min_value=2, max_value=3),
    )
    @settings(max_examples=40, deadline=None)
    def test_large_powers(self, x: int, p: int, q: int):
        """x^(p/q) is the q-th root of x^p to the last kept digit."""
        root = num(x) ** Fraction(p, q)

        assert within_one_unit(root, NativeFraction(x) ** p, q)

    @given(
        x=st.integers(min_value=2, max_value=60),
        p=st.integers(min_value=1, max_value=45),
    )
    @settings(max_examples=30, deadline=None)
    def test_large_negative_powers(self, x: int, p: int):
        """x^(-p/2) is the square root of 1 / x^p to the last kept digit."""
        root = num(x) ** Fraction(-p, 2)

        assert within_one_unit(root, NativeFraction(1, x**p), 2)
