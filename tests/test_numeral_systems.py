# tests/test_numeral_systems.py
"""
Tests for digits and positional numeral systems (component_1).

Covers:
- Base validation
- Ordinal <-> symbol mapping (0-9, A-Z, a-z)
- Shared numeral system instances
"""

import pytest

from common.constants import BASE_MAX, BASE_MIN, DIGIT_SYMBOLS
from component_1_numeral_systems import (
    Digit,
    check_base,
    digit_to_ordinal,
    get_numeral_system,
    ordinal_to_digit,
)
from radix_exceptions import BaseRangeError, DigitRangeError, NumberFormatException


class TestCheckBase:
    """Tests for the supported base range"""

    @pytest.mark.parametrize("base", [BASE_MIN, 10, 16, 36, BASE_MAX])
    def test_supported_bases(self, base):
        """Test: Bases within [2, 62] are accepted"""
        assert check_base(base) == base

    @pytest.mark.parametrize("base", [-10, 0, 1, BASE_MAX + 1, 100])
    def test_unsupported_bases(self, base):
        """Test: Bases outside [2, 62] raise BaseRangeError"""
        with pytest.raises(BaseRangeError) as exc_info:
            check_base(base)

        assert exc_info.value.context["base"] == base

    @pytest.mark.parametrize("base", [10.0, "10", True, None])
    def test_non_integer_base(self, base):
        """Test: Only real ints are bases"""
        with pytest.raises(BaseRangeError):
            check_base(base)

    def test_base_range_error_is_format_exception(self):
        """Test: BaseRangeError belongs to the format exceptions"""
        assert issubclass(BaseRangeError, NumberFormatException)


class TestDigits:
    """Tests for the ordinal/symbol mapping"""

    def test_symbol_order(self):
        """Test: Decimal numerals, then upper case, then lower case letters"""
        assert len(DIGIT_SYMBOLS) == BASE_MAX
        assert ordinal_to_digit(62, 9).symbol == "9"
        assert ordinal_to_digit(62, 10).symbol == "A"
        assert ordinal_to_digit(62, 35).symbol == "Z"
        assert ordinal_to_digit(62, 36).symbol == "a"
        assert ordinal_to_digit(62, 61).symbol == "z"

    def test_hexadecimal_digits(self):
        """Test: Base 16 uses 0-9 and A-F"""
        assert get_numeral_system(16).symbols == "0123456789ABCDEF"
        assert digit_to_ordinal(16, "F") == 15

    def test_symbols_are_case_sensitive(self):
        """Test: 'a' and 'A' are different digits"""
        assert digit_to_ordinal(62, "A") == 10
        assert digit_to_ordinal(62, "a") == 36

    def test_ordinal_out_of_range(self):
        """Test: Ordinals >= base are not digits"""
        with pytest.raises(DigitRangeError) as exc_info:
            ordinal_to_digit(10, 10)

        assert exc_info.value.context["digit"] == 10
        assert exc_info.value.context["base"] == 10

    def test_negative_ordinal(self):
        """Test: Negative ordinals are not digits"""
        with pytest.raises(DigitRangeError):
            ordinal_to_digit(10, -1)

    def test_symbol_not_in_base(self):
        """Test: 'A' is not a decimal digit"""
        with pytest.raises(DigitRangeError):
            digit_to_ordinal(10, "A")

    def test_lower_case_not_in_base_36(self):
        """Test: Lower case letters start at base 37"""
        with pytest.raises(DigitRangeError):
            digit_to_ordinal(36, "a")
        assert digit_to_ordinal(37, "a") == 36

    def test_digit_validation(self):
        """Test: Digit() validates its ordinal"""
        assert Digit(2, 1).symbol == "1"
        with pytest.raises(DigitRangeError):
            Digit(2, 2)

    def test_digit_is_zero(self):
        """Test: Only ordinal 0 is the zero digit"""
        assert Digit(10, 0).is_zero()
        assert not Digit(10, 1).is_zero()
        assert str(Digit(16, 11)) == "B"


class TestNumeralSystem:
    """Tests for the shared numeral system instances"""

    def test_numeral_system_is_shared(self):
        """Test: One instance per base"""
        assert get_numeral_system(16) is get_numeral_system(16)
        assert get_numeral_system(16) is not get_numeral_system(8)

    def test_invalid_base(self):
        """Test: Numeral systems exist only for supported bases"""
        with pytest.raises(BaseRangeError):
            get_numeral_system(63)

    def test_is_valid_symbol(self):
        """Test: Symbol validity depends on the base"""
        binary = get_numeral_system(2)

        assert binary.is_valid_symbol("1")
        assert not binary.is_valid_symbol("2")
        assert not binary.is_valid_symbol(".")

    def test_round_trip_all_digits(self):
        """Test: Every ordinal of base 62 maps back to itself"""
        system = get_numeral_system(62)
        for ordinal in range(62):
            assert system.ordinal(system.digit(ordinal).symbol) == ordinal
