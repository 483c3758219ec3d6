# tests/test_number.py
"""
Tests for the Number value type (component_3).

Covers:
- Construction from ordinals, host values and scaled digits
- Immutability and normalization
- Comparison, equality and hashing
- Operator overloads delegating to radix_math
"""

import sys

import pytest

from component_1_numeral_systems import ordinal_to_digit
from component_3_number import Number, Sign
from component_5_fraction import Fraction
from radix_exceptions import (
    BaseMismatchError,
    BaseRangeError,
    DigitRangeError,
    NumberParsingError,
    UnsupportedOperationError,
)


def n(text, base=10):
    return Number.parse(text, base)


class TestConstruction:
    """Tests for the constructors"""

    def test_from_ordinals(self):
        """Test: Direct construction from digit ordinals"""
        number = Number(10, Sign.NEGATIVE, (1, 2), (5,))

        assert str(number) == "-12.5"
        assert number.base == 10

    def test_from_digits(self):
        """Test: Digit objects and ordinals may be mixed"""
        digits = (ordinal_to_digit(16, 15), 15)

        assert Number(16, Sign.POSITIVE, digits).to_native_int() == 255

    def test_digit_of_other_base(self):
        """Test: Digits must belong to the number's base"""
        with pytest.raises(DigitRangeError):
            Number(16, Sign.POSITIVE, (ordinal_to_digit(10, 1),))

    def test_normalization(self):
        """Test: Leading and trailing zeros are dropped"""
        number = Number(10, Sign.POSITIVE, (0, 0, 3), (1, 0, 0))

        assert number.integer_ordinals == (3,)
        assert number.fraction_ordinals == (1,)

    def test_zero_is_positive(self):
        """Test: A negative sign on zero is normalized away"""
        assert Number(10, Sign.NEGATIVE, (0,)).is_positive()

    def test_invalid_digit(self):
        """Test: Ordinals outside the base are rejected"""
        with pytest.raises(DigitRangeError):
            Number(2, Sign.POSITIVE, (1, 2))

    def test_invalid_base(self):
        """Test: Bases outside [2, 62] are rejected"""
        with pytest.raises(BaseRangeError):
            Number(63)
        with pytest.raises(BaseRangeError):
            n("1", 1)

    def test_invalid_sign(self):
        """Test: The sign must be a Sign"""
        with pytest.raises(TypeError):
            Number(10, "-", (1,))

    def test_constants(self):
        """Test: zero, one and infinity"""
        assert Number.zero().is_zero()
        assert Number.one(2).is_one()
        assert Number.infinity().is_infinity()
        assert Number.infinity(10, Sign.NEGATIVE).is_negative()

    def test_from_scaled(self):
        """Test: digits * base^-scale"""
        assert str(Number.from_scaled(10, False, [1, 2, 5], 1)) == "12.5"
        assert str(Number.from_scaled(10, True, [5], 3)) == "-0.005"
        assert str(Number.from_scaled(10, False, [4, 2], 0)) == "42"

    def test_scaled(self):
        """Test: scaled() pads the fraction to the requested scale"""
        assert n("12.5").scaled(3) == [1, 2, 5, 0, 0]

    def test_digit_accessors(self):
        """Test: Digit views of the ordinals"""
        number = n("1A.F", 16)

        assert [digit.symbol for digit in number.integer_digits] == ["1", "A"]
        assert [digit.symbol for digit in number.fraction_digits] == ["F"]


class TestFromNative:
    """Tests for conversion of host ints and floats"""

    def test_int(self):
        """Test: ints convert exactly"""
        assert str(Number.from_native(255, 16)) == "FF"
        assert str(Number.from_native(-10, 2)) == "-1010"
        assert str(Number.from_native(0)) == "0"

    def test_extreme_ints(self):
        """Test: ints of any size"""
        assert str(Number.from_native(-(2**63))) == "-9223372036854775808"
        assert Number.from_native(10**40).to_native_int() == 10**40

    def test_float(self):
        """Test: floats convert through their shortest representation"""
        assert str(Number.from_native(-0.5)) == "-0.5"
        assert str(Number.from_native(0.1)) == "0.1"
        assert str(Number.from_native(2.0)) == "2"

    def test_large_float(self):
        """Test: Scientific float representations"""
        assert str(Number.from_native(1e300)) == "1" + "0" * 300
        assert len(str(Number.from_native(sys.float_info.max))) == 309

    def test_small_float(self):
        """Test: Subnormal float representation"""
        number = Number.from_native(5e-324)

        assert number.integer_ordinals == (0,)
        assert len(number.fraction_ordinals) == 324

    def test_float_other_base(self):
        """Test: floats are rebased for other bases"""
        assert str(Number.from_native(0.5, 2)) == "0.1"

    def test_infinite_float(self):
        """Test: +-inf become signed infinity"""
        assert Number.from_native(float("inf")).is_infinity()
        assert Number.from_native(float("-inf")).is_negative()

    @pytest.mark.parametrize("value", [float("nan"), True, "1", None, 1j])
    def test_rejected_values(self, value):
        """Test: NaN, bool and other types are not numbers"""
        with pytest.raises(NumberParsingError):
            Number.from_native(value)

    def test_to_native_int(self):
        """Test: Integers convert back"""
        assert n("-1010", 2).to_native_int() == -10

    def test_to_native_int_rejects_fractions(self):
        """Test: Fractions and infinity have no int value"""
        with pytest.raises(UnsupportedOperationError):
            n("1.5").to_native_int()
        with pytest.raises(UnsupportedOperationError):
            Number.infinity().to_native_int()


class TestImmutability:
    """Tests for the immutable value semantics"""

    def test_setattr(self):
        """Test: Attributes cannot be set"""
        number = n("1")
        with pytest.raises(AttributeError):
            number._sign = Sign.NEGATIVE

    def test_delattr(self):
        """Test: Attributes cannot be deleted"""
        number = n("1")
        with pytest.raises(AttributeError):
            del number._base

    def test_operations_return_new_numbers(self):
        """Test: Operations never change their operands"""
        a = n("5")
        b = a.inc()

        assert str(a) == "5"
        assert str(b) == "6"

    def test_copy(self):
        """Test: copy() is equal but not identical"""
        a = n("-3.25")
        b = a.copy()

        assert a == b
        assert a is not b


class TestPredicates:
    """Tests for the predicates"""

    def test_integer_predicates(self):
        """Test: is_integer / has_fraction_part"""
        assert n("3").is_integer()
        assert not n("3.5").is_integer()
        assert n("3.5").has_fraction_part()
        assert not Number.infinity().is_integer()

    def test_single_digit(self):
        """Test: Exactly one integer digit and no fraction"""
        assert n("9").is_single_digit()
        assert n("Z", 36).is_single_digit()
        assert not n("10").is_single_digit()
        assert not n("0.5").is_single_digit()

    def test_is_one(self):
        """Test: Only +1 is one"""
        assert n("1").is_one()
        assert not n("-1").is_one()
        assert not n("1.1").is_one()

    def test_even_odd(self):
        """Test: Parity in the number's base"""
        assert n("4").is_even()
        assert n("7").is_odd()
        # 11 in base 3 is 4
        assert n("11", 3).is_even()
        assert n("2.5").is_even() is False
        assert n("2.5").is_odd() is False

    def test_interval(self):
        """Test: Inclusive interval bounds"""
        assert n("5").is_within_interval(n("1"), n("5"))
        assert n("1").is_within_interval(n("1"), n("5"))
        assert not n("5.01").is_within_interval(n("1"), n("5"))


class TestComparison:
    """Tests for ordering and equality"""

    def test_sign_first(self):
        """Test: Negative numbers are smaller"""
        assert n("-5") < n("3")
        assert n("-0.1") < n("0")

    def test_integer_length(self):
        """Test: More integer digits means larger magnitude"""
        assert n("10") > n("9.99")
        assert n("-10") < n("-9.99")

    def test_fraction_digits(self):
        """Test: Shorter fractions count as zero padded"""
        assert n("1.5") > n("1.49")
        assert n("1.5").compare(n("1.50")) == 0

    def test_infinity_order(self):
        """Test: -inf < any finite number < inf"""
        assert Number.infinity() > n("1" + "0" * 50)
        assert Number.infinity(10, Sign.NEGATIVE) < n("-1" + "0" * 50)
        assert Number.infinity().compare(Number.infinity()) == 0

    def test_int_operands(self):
        """Test: ints are coerced for ordering"""
        assert n("1.5") < 2
        assert n("3") >= 3

    def test_base_mismatch(self):
        """Test: Numbers of different bases are not comparable"""
        with pytest.raises(BaseMismatchError) as exc_info:
            n("1").compare(n("1", 2))

        assert exc_info.value.context["bases"] == (10, 2)

    def test_equality_requires_same_base(self):
        """Test: Equal values in different bases are not equal"""
        assert n("1") != n("1", 2)

    def test_equality_ignores_redundant_zeros(self):
        """Test: '1.10' equals '1.1'"""
        assert n("1.10") == n("1.1")
        assert n("-0") == n("0")

    def test_min_max(self):
        """Test: min/max return copies of the operands"""
        a, b = n("2"), n("-3")

        assert a.min(b) == b
        assert a.max(b) == a
        assert a.max(b) is not a


class TestHashing:
    """Tests for hashing consistent with Fraction equality"""

    def test_equal_numbers_hash_equal(self):
        """Test: Equal numbers share a hash"""
        assert hash(n("1.10")) == hash(n("1.1"))

    def test_number_and_fraction(self):
        """Test: 0.5 equals 1/2 and hashes the same"""
        half = n("0.5")
        fraction = Fraction(1, 2)

        assert half == fraction
        assert hash(half) == hash(fraction)

    def test_integer_and_fraction(self):
        """Test: 2 equals 4/2"""
        assert n("2") == Fraction(4, 2)
        assert hash(n("2")) == hash(Fraction(4, 2))

    def test_usable_as_dict_key(self):
        """Test: Numbers work as dict keys"""
        table = {n("1.5"): "a", n("2"): "b"}

        assert table[n("1.50")] == "a"


class TestOperators:
    """Tests for the Python operator overloads"""

    def test_arithmetic_operators(self):
        """Test: + - * with Numbers and ints"""
        assert n("1.5") + n("2.25") == n("3.75")
        assert n("5") - 7 == n("-2")
        assert 3 * n("0.5") == n("1.5")
        assert 10 - n("0.5") == n("9.5")
        assert -n("3") == n("-3")
        assert abs(n("-3")) == n("3")

    def test_true_division_is_exact(self):
        """Test: / returns a Fraction"""
        third = n("1") / n("3")

        assert isinstance(third, Fraction)
        assert third * 3 == n("1")

    def test_integer_division_and_modulo(self):
        """Test: // and % truncate towards zero"""
        assert n("-100") // n("24") == n("-4")
        assert n("-100") % n("24") == n("-4")
        assert divmod(n("100"), n("7")) == (n("14"), n("2"))

    def test_power(self):
        """Test: ** with int exponents"""
        assert n("2") ** 10 == n("1024")
        assert n("2") ** -2 == n("0.25")

    def test_shift_operators(self):
        """Test: << divides, >> multiplies by powers of the base"""
        assert n("123.45") << 2 == n("1.2345")
        assert n("1.2345") >> 3 == n("1234.5")

    def test_unsupported_operand(self):
        """Test: Floats are not coerced"""
        with pytest.raises(TypeError):
            n("1") + 1.5
