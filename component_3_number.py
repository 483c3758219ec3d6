"""
component_3_number.py

Immutable signed positional numbers of arbitrary precision and base.

A Number consists of a sign, a base, the integer digits and the fraction
digits (both most significant first) and an infinity flag. Numbers are
normalized on construction:

- no leading zeros in the integer part (a lone zero digit stays)
- no trailing zeros in the fraction part
- zero is always positive
- infinity carries a sign but no digits

Every operation returns a new Number; operands are never modified. The
instance methods are thin delegates to the stateless facade in radix_math,
so both entry points behave identically.

Usage:
    from component_3_number import Number

    a = Number.parse("899.999")
    b = Number.parse("0.555")
    print(a + b)  # 900.554
    print(Number.parse("1010", base=2).rebase(10))  # 10
"""

import math
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from common.constants import DEFAULT_NUMBER_BASE
from component_1_numeral_systems import Digit, check_base, get_numeral_system
from component_4_notations import (
    parse_notation,
    to_scientific_notation,
    to_standard_notation,
)
from radix_exceptions import (
    BaseMismatchError,
    DigitRangeError,
    NumberParsingError,
    UnsupportedOperationError,
)


def _facade():
    # Import here to avoid circular dependency
    import radix_math

    return radix_math


class Sign(Enum):
    """Sign of a number"""

    POSITIVE = "+"
    NEGATIVE = "-"

    def negate(self) -> "Sign":
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE

    def multiply(self, other: "Sign") -> "Sign":
        """Sign of a product or quotient (XOR of both signs)."""
        return Sign.POSITIVE if self is other else Sign.NEGATIVE

    @classmethod
    def of(cls, negative: bool) -> "Sign":
        return cls.NEGATIVE if negative else cls.POSITIVE


def _ordinals(base: int, digits: Sequence[Any]) -> List[int]:
    result = []
    for digit in digits:
        if isinstance(digit, Digit):
            if digit.base != base:
                raise DigitRangeError(
                    f"Digit of base {digit.base} used in a number of base {base}",
                    base=base,
                    digit=digit,
                )
            result.append(digit.ordinal)
        elif isinstance(digit, int) and not isinstance(digit, bool) and 0 <= digit < base:
            result.append(digit)
        else:
            raise DigitRangeError(
                f"{digit!r} is not a digit of base {base}", base=base, digit=digit
            )
    return result


class Number:
    """
    Immutable signed number in a positional numeral system.

    Construct numbers with Number.parse(), Number.infinity(),
    Number.from_native() or directly from digit ordinals:

        Number(10, Sign.NEGATIVE, (1, 2), (5,))  # -12.5
    """

    __slots__ = ("_base", "_sign", "_integer", "_fraction", "_infinite", "_hash")

    def __init__(
        self,
        base: int = DEFAULT_NUMBER_BASE,
        sign: Sign = Sign.POSITIVE,
        integer: Sequence[Any] = (0,),
        fraction: Sequence[Any] = (),
        infinite: bool = False,
    ):
        check_base(base)
        if not isinstance(sign, Sign):
            raise TypeError(f"sign must be a Sign, got {type(sign).__name__}")

        if infinite:
            integer_ordinals: Tuple[int, ...] = ()
            fraction_ordinals: Tuple[int, ...] = ()
        else:
            int_list = _ordinals(base, integer)
            frac_list = _ordinals(base, fraction)

            start = 0
            while start < len(int_list) - 1 and int_list[start] == 0:
                start += 1
            integer_ordinals = tuple(int_list[start:]) or (0,)

            end = len(frac_list)
            while end > 0 and frac_list[end - 1] == 0:
                end -= 1
            fraction_ordinals = tuple(frac_list[:end])

            if integer_ordinals == (0,) and not fraction_ordinals:
                sign = Sign.POSITIVE

        object.__setattr__(self, "_base", base)
        object.__setattr__(self, "_sign", sign)
        object.__setattr__(self, "_integer", integer_ordinals)
        object.__setattr__(self, "_fraction", fraction_ordinals)
        object.__setattr__(self, "_infinite", bool(infinite))
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Number is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Number is immutable")

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, base: int = DEFAULT_NUMBER_BASE) -> "Number":
        """
        Parses standard ("-12.5") or scientific ("1.25E1") notation.

        Raises:
            BaseRangeError: If base is not supported
            NumberParsingError: If text is not a number of this base
        """
        check_base(base)
        parsed = parse_notation(text, base)
        return cls(base, Sign.of(parsed.negative), parsed.integer, parsed.fraction)

    @classmethod
    def infinity(
        cls, base: int = DEFAULT_NUMBER_BASE, sign: Sign = Sign.POSITIVE
    ) -> "Number":
        return cls(base, sign, infinite=True)

    @classmethod
    def zero(cls, base: int = DEFAULT_NUMBER_BASE) -> "Number":
        return cls(base)

    @classmethod
    def one(cls, base: int = DEFAULT_NUMBER_BASE) -> "Number":
        return cls(base, Sign.POSITIVE, (1,))

    @classmethod
    def from_native(cls, value: Any, base: int = DEFAULT_NUMBER_BASE) -> "Number":
        """
        Converts a host int or float.

        ints convert exactly. floats convert through their shortest
        round-trip representation; +-inf becomes a signed infinity.

        Raises:
            NumberParsingError: For NaN, bool and unsupported types
        """
        check_base(base)
        if isinstance(value, bool):
            raise NumberParsingError("bool is not a number", text=repr(value))

        if isinstance(value, int):
            magnitude = abs(value)
            ordinals: List[int] = []
            while magnitude:
                magnitude, ordinal = divmod(magnitude, base)
                ordinals.append(ordinal)
            ordinals.reverse()
            return cls(base, Sign.of(value < 0), ordinals or (0,))

        if isinstance(value, float):
            if math.isnan(value):
                raise NumberParsingError("NaN is not a number", text=repr(value))
            if math.isinf(value):
                return cls.infinity(base, Sign.of(value < 0))
            decimal = cls.parse(repr(value), DEFAULT_NUMBER_BASE)
            if base == DEFAULT_NUMBER_BASE:
                return decimal
            return decimal.rebase(base)

        raise NumberParsingError(
            f"Cannot convert {type(value).__name__} to a number", text=repr(value)
        )

    @classmethod
    def from_scaled(
        cls, base: int, negative: bool, digits: Sequence[int], scale: int
    ) -> "Number":
        """
        Builds a number from a scaled digit sequence.

        The value is digits * base^-scale, e.g. digits (1, 2, 5) with
        scale 1 is 12.5.
        """
        digits = list(digits)
        if len(digits) <= scale:
            digits = [0] * (scale - len(digits) + 1) + digits
        if scale == 0:
            return cls(base, Sign.of(negative), digits)
        return cls(base, Sign.of(negative), digits[:-scale], digits[-scale:])

    def copy(self) -> "Number":
        return Number(
            self._base, self._sign, self._integer, self._fraction, self._infinite
        )

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def base(self) -> int:
        return self._base

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def integer_ordinals(self) -> Tuple[int, ...]:
        return self._integer

    @property
    def fraction_ordinals(self) -> Tuple[int, ...]:
        return self._fraction

    @property
    def integer_digits(self) -> Tuple[Digit, ...]:
        system = get_numeral_system(self._base)
        return tuple(system.digit(ordinal) for ordinal in self._integer)

    @property
    def fraction_digits(self) -> Tuple[Digit, ...]:
        system = get_numeral_system(self._base)
        return tuple(system.digit(ordinal) for ordinal in self._fraction)

    def scaled(self, scale: int) -> List[int]:
        """
        Integer and fraction digits as one sequence, with the fraction
        padded to ``scale`` digits (value = result * base^-scale).
        """
        if self._infinite:
            raise UnsupportedOperationError("Infinity has no digit sequence")
        if scale < len(self._fraction):
            raise ValueError(
                f"Scale {scale} is shorter than the fraction ({len(self._fraction)})"
            )
        return (
            list(self._integer)
            + list(self._fraction)
            + [0] * (scale - len(self._fraction))
        )

    def to_native_int(self) -> int:
        """Converts an integer number to a host int."""
        if self._infinite or self._fraction:
            raise UnsupportedOperationError(
                "Only finite integers convert to int", context={"number": str(self)}
            )
        value = 0
        for ordinal in self._integer:
            value = value * self._base + ordinal
        return -value if self.is_negative() else value

    # ------------------------------------------------------------------
    # Predicates
    # ------------------------------------------------------------------

    def is_infinity(self) -> bool:
        return self._infinite

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def is_positive(self) -> bool:
        return self._sign is Sign.POSITIVE

    def is_zero(self) -> bool:
        return not self._infinite and self._integer == (0,) and not self._fraction

    def is_one(self) -> bool:
        return (
            not self._infinite
            and self.is_positive()
            and self._integer == (1,)
            and not self._fraction
        )

    def is_integer(self) -> bool:
        return not self._infinite and not self._fraction

    def has_fraction_part(self) -> bool:
        return bool(self._fraction)

    def is_single_digit(self) -> bool:
        return not self._infinite and len(self._integer) == 1 and not self._fraction

    def is_even(self) -> bool:
        return _facade().is_even(self)

    def is_odd(self) -> bool:
        return _facade().is_odd(self)

    def is_within_interval(self, low: "Number", high: "Number") -> bool:
        return _facade().is_within_interval(self, low, high)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def to_standard_notation(self) -> str:
        return to_standard_notation(self)

    def to_scientific_notation(self) -> str:
        return to_scientific_notation(self)

    def __str__(self) -> str:
        return to_standard_notation(self)

    def __repr__(self) -> str:
        return f"Number('{to_standard_notation(self)}', base={self._base})"

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def _check_same_base(self, other: "Number") -> None:
        if self._base != other._base:
            raise BaseMismatchError(
                "Numbers of different bases must be rebased first",
                bases=(self._base, other._base),
            )

    def _infinity_rank(self) -> int:
        if not self._infinite:
            return 0
        return -1 if self.is_negative() else 1

    def compare(self, other: "Number") -> int:
        """
        Returns -1, 0 or 1.

        Order: sign, integer length, integer digits, then fraction digits
        (a shorter fraction counts as zero padded).
        """
        self._check_same_base(other)

        if self._infinite or other._infinite:
            left, right = self._infinity_rank(), other._infinity_rank()
            return (left > right) - (left < right)

        if self._sign is not other._sign:
            return -1 if self.is_negative() else 1

        magnitude = _compare_magnitudes(self, other)
        return -magnitude if self.is_negative() else magnitude

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Number):
            return NotImplemented
        return (
            self._base == other._base
            and self._sign is other._sign
            and self._infinite == other._infinite
            and self._integer == other._integer
            and self._fraction == other._fraction
        )

    def __lt__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: object) -> bool:
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(self, "_hash", hash(self.rational_key()))
        return self._hash

    def rational_key(self) -> Tuple[Any, ...]:
        """
        Canonical key shared with equal Fractions (used for hashing).
        """
        if self._infinite:
            return (self._base, self.is_negative(), "infinity")
        if not self._fraction:
            return (self._base, self.is_negative(), self._integer, (1,))
        return self.to_fraction().rational_key()

    def min(self, other: "Number") -> "Number":
        return _facade().min(self, other)

    def max(self, other: "Number") -> "Number":
        return _facade().max(self, other)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _coerce(self, other: Any) -> Any:
        if isinstance(other, Number):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Number.from_native(other, self._base)
        return NotImplemented

    def __neg__(self) -> "Number":
        return self.negate()

    def __pos__(self) -> "Number":
        return self.copy()

    def __abs__(self) -> "Number":
        return self.absolute_value()

    def __add__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.add(self)

    def __sub__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> "Number":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.multiply(self)

    def __truediv__(self, other: Any):
        """Exact division, returns a Fraction."""
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divide_exact(other)

    def __rtruediv__(self, other: Any):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.divide_exact(self)

    def __floordiv__(self, other: Any) -> "Number":
        """Truncating integer quotient (sign is the XOR of both signs)."""
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divide_with_remainder(other).result

    def __mod__(self, other: Any) -> "Number":
        """Truncating remainder (sign of the dividend)."""
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.modulo(other)

    def __divmod__(self, other: Any):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        result = self.divide_with_remainder(other)
        return result.result, result.remainder

    def __pow__(self, exponent: Any):
        if isinstance(exponent, int) and not isinstance(exponent, bool):
            exponent = Number.from_native(exponent, self._base)
        return self.exponentiate(exponent)

    def __lshift__(self, places: int) -> "Number":
        return self.shift_left(places)

    def __rshift__(self, places: int) -> "Number":
        return self.shift_right(places)

    # ------------------------------------------------------------------
    # Exact arithmetic
    # ------------------------------------------------------------------

    def add(self, other: "Number") -> "Number":
        return _facade().add(self, other)

    def subtract(self, other: "Number") -> "Number":
        return _facade().subtract(self, other)

    def inc(self) -> "Number":
        return _facade().inc(self)

    def dec(self) -> "Number":
        return _facade().dec(self)

    def doubling(self) -> "Number":
        return _facade().doubling(self)

    def halving(self, details=None) -> "Number":
        return _facade().halving(self, details)

    def shift_left(self, places: Any = 1) -> "Number":
        """Moves the radix point ``places`` positions to the left."""
        return _facade().shift_left(self, places)

    def shift_right(self, places: Any = 1) -> "Number":
        """Moves the radix point ``places`` positions to the right."""
        return _facade().shift_right(self, places)

    def negate(self) -> "Number":
        return _facade().negate(self)

    def absolute_value(self) -> "Number":
        return _facade().absolute_value(self)

    def complement(self) -> "Number":
        return _facade().complement(self)

    def remove_fraction_part(self) -> "Number":
        return _facade().remove_fraction_part(self)

    def remove_integer_part(self) -> "Number":
        return _facade().remove_integer_part(self)

    def multiply(self, other: Any, details=None):
        return _facade().multiply(self, other, details)

    def square(self) -> "Number":
        return _facade().square(self)

    # ------------------------------------------------------------------
    # Division
    # ------------------------------------------------------------------

    def divide(self, other: "Number", details=None) -> "Number":
        return _facade().divide(self, other, details)

    def divide_exact(self, other: Any):
        return _facade().divide_exact(self, other)

    def divide_with_remainder(self, other: "Number"):
        return _facade().divide_with_remainder(self, other)

    def diviso(self, other: "Number") -> "Number":
        return _facade().diviso(self, other)

    def modulo(self, other: "Number") -> "Number":
        return _facade().modulo(self, other)

    def reciprocal(self, details=None) -> "Number":
        return _facade().reciprocal(self, details)

    def is_multiple_of(self, other: "Number") -> bool:
        return _facade().is_multiple_of(self, other)

    def to_fraction(self):
        return _facade().to_fraction(self)

    # ------------------------------------------------------------------
    # Exponentiation and roots
    # ------------------------------------------------------------------

    def exponentiate(self, exponent: Any, details=None) -> "Number":
        return _facade().exponentiate(self, exponent, details)

    def root(self, degree: Any, details=None) -> "Number":
        return _facade().root(self, degree, details)

    def square_root(self, details=None) -> "Number":
        return _facade().square_root(self, details)

    # ------------------------------------------------------------------
    # Rounding and rebasing
    # ------------------------------------------------------------------

    def round(self, places: Optional[Any] = None, details=None) -> "Number":
        return _facade().round(self, places, details)

    def round_up(self, places: Any = 0) -> "Number":
        return _facade().round_up(self, places)

    def round_down(self, places: Any = 0) -> "Number":
        return _facade().round_down(self, places)

    def rebase(self, base: int, details=None) -> "Number":
        return _facade().rebase(self, base, details)

    # ------------------------------------------------------------------
    # Number theory
    # ------------------------------------------------------------------

    def divisors(self) -> Tuple["Number", ...]:
        return _facade().divisors(self)

    def common_divisors(self, other: "Number") -> Tuple["Number", ...]:
        return _facade().common_divisors(self, other)

    def gcd(self, other: "Number") -> "Number":
        return _facade().gcd(self, other)

    def lcm(self, other: "Number") -> "Number":
        return _facade().lcm(self, other)

    def prime_factors(self) -> Tuple["Number", ...]:
        return _facade().prime_factors(self)

    def common_prime_factors(self, other: "Number") -> Tuple["Number", ...]:
        return _facade().common_prime_factors(self, other)

    def is_prime(self) -> bool:
        return _facade().is_prime(self)

    def next_prime_number(self) -> "Number":
        """Treats this number as an ordinal: 0 -> 2, 1 -> 3, 2 -> 5, ..."""
        return _facade().next_prime_number(self)

    def factorial(self) -> "Number":
        return _facade().factorial(self)

    def digit_sum(self) -> "Number":
        return _facade().digit_sum(self)

    # ------------------------------------------------------------------
    # Approximations
    # ------------------------------------------------------------------

    def sine(self, details=None) -> "Number":
        return _facade().sine(self, details)


def _compare_magnitudes(a: Number, b: Number) -> int:
    ia, ib = a.integer_ordinals, b.integer_ordinals
    if len(ia) != len(ib):
        return -1 if len(ia) < len(ib) else 1
    if ia != ib:
        return -1 if ia < ib else 1

    fa, fb = a.fraction_ordinals, b.fraction_ordinals
    width = max(len(fa), len(fb))
    fa = fa + (0,) * (width - len(fa))
    fb = fb + (0,) * (width - len(fb))
    if fa != fb:
        return -1 if fa < fb else 1
    return 0
