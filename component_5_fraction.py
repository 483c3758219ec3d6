"""
component_5_fraction.py

Exact rational numbers built from two Numbers.

A Fraction stores its sign once and keeps numerator and denominator as
non-negative integer Numbers of the same base. Non-integer parts are scaled
by a common power of the base on construction (1.5/2 becomes 15/20), and a
mixed fraction (integer part plus numerator/denominator) is normalized into
the improper form.

Fractions are not reduced on construction; reduce() does that explicitly.
Results of fraction arithmetic are returned reduced. Equality and ordering
compare values, so 2/4 == 1/2 == Number("0.5").
"""

from typing import Any, Optional, Tuple

from component_3_number import Number, Sign
from component_6_arithmetic_core import (
    add_naturals,
    as_integers,
    compare_naturals,
    divmod_naturals,
    gcd_naturals,
    halve_natural,
    is_zero_natural,
    multiply_naturals,
    subtract_naturals,
    trim,
)
from radix_exceptions import (
    BaseMismatchError,
    UndefinedOperationException,
    UnsupportedOperationError,
)


def _facade():
    # Import here to avoid circular dependency
    import radix_math

    return radix_math


def _as_number(value: Any, base: Optional[int] = None) -> Number:
    if isinstance(value, Number):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Number.from_native(value, base) if base else Number.from_native(value)
    raise TypeError(f"Expected a Number or int, got {type(value).__name__}")


def _signed_sum(
    base: int, negative_a: bool, a: list, negative_b: bool, b: list
) -> Tuple[bool, list]:
    if negative_a == negative_b:
        return negative_a, add_naturals(base, a, b)
    order = compare_naturals(a, b)
    if order == 0:
        return False, [0]
    if order > 0:
        return negative_a, subtract_naturals(base, a, b)
    return negative_b, subtract_naturals(base, b, a)


class Fraction:
    """
    Immutable exact rational number.

        Fraction(Number.parse("1"), Number.parse("3"))   # 1/3
        Fraction(1, 3, integer_part=-2)                  # -7/3
    """

    __slots__ = ("_sign", "_numerator", "_denominator", "_hash")

    def __init__(
        self,
        numerator: Any,
        denominator: Any = None,
        integer_part: Any = None,
    ):
        base = next(
            (
                part.base
                for part in (numerator, denominator, integer_part)
                if isinstance(part, Number)
            ),
            None,
        )
        numerator = _as_number(numerator, base)
        base = numerator.base
        denominator = (
            Number.one(base) if denominator is None else _as_number(denominator, base)
        )
        integer = None if integer_part is None else _as_number(integer_part, base)

        parts = [numerator, denominator] + ([integer] if integer is not None else [])
        if len({part.base for part in parts}) > 1:
            raise BaseMismatchError(
                "Fraction parts must share one base",
                bases=sorted({part.base for part in parts}),
            )
        if any(part.is_infinity() for part in parts):
            raise UnsupportedOperationError("Fractions cannot contain infinity")
        if denominator.is_zero():
            raise UndefinedOperationException(
                "Denominator must not be zero", operation="fraction"
            )

        num_digits, den_digits = as_integers(numerator, denominator)
        negative = numerator.sign is not denominator.sign

        if integer is not None and not integer.is_zero():
            if numerator.is_negative() or denominator.is_negative():
                raise UnsupportedOperationError(
                    "A mixed fraction carries its sign on the integer part"
                )
            if integer.has_fraction_part():
                raise UnsupportedOperationError(
                    "The integer part of a mixed fraction must be an integer"
                )
            whole = multiply_naturals(base, list(integer.integer_ordinals), den_digits)
            num_digits = add_naturals(base, whole, num_digits)
            negative = integer.is_negative()

        if is_zero_natural(num_digits):
            negative = False

        object.__setattr__(self, "_sign", Sign.of(negative))
        object.__setattr__(self, "_numerator", Number(base, Sign.POSITIVE, num_digits))
        object.__setattr__(
            self, "_denominator", Number(base, Sign.POSITIVE, den_digits)
        )
        object.__setattr__(self, "_hash", None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Fraction is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Fraction is immutable")

    @classmethod
    def _of(cls, base: int, negative: bool, numerator: list, denominator: list) -> "Fraction":
        return cls(
            Number(base, Sign.of(negative), numerator),
            Number(base, Sign.POSITIVE, denominator),
        )

    @classmethod
    def from_number(cls, number: Number) -> "Fraction":
        """Exact fraction of a finite number, e.g. 1.25 -> 125/100."""
        if number.is_infinity():
            raise UnsupportedOperationError("Fractions cannot contain infinity")
        return cls(number, Number.one(number.base))

    # ------------------------------------------------------------------
    # Accessors and predicates
    # ------------------------------------------------------------------

    @property
    def base(self) -> int:
        return self._numerator.base

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def numerator(self) -> Number:
        """Non-negative numerator"""
        return self._numerator

    @property
    def denominator(self) -> Number:
        """Positive denominator"""
        return self._denominator

    @property
    def signed_numerator(self) -> Number:
        return Number(self.base, self._sign, self._numerator.integer_ordinals)

    def _parts(self) -> Tuple[bool, list, list]:
        return (
            self.is_negative(),
            list(self._numerator.integer_ordinals),
            list(self._denominator.integer_ordinals),
        )

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def is_zero(self) -> bool:
        return self._numerator.is_zero()

    def is_infinity(self) -> bool:
        return False

    def is_proper(self) -> bool:
        return self._numerator < self._denominator

    def is_integer(self) -> bool:
        _, remainder = divmod_naturals(
            self.base,
            self._numerator.integer_ordinals,
            self._denominator.integer_ordinals,
        )
        return is_zero_natural(remainder)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def reduce(self) -> "Fraction":
        """Divides numerator and denominator by their greatest common divisor."""
        return reduce_fraction(self)

    def to_mixed(self) -> Tuple[Number, Number, Number]:
        """
        Returns (integer part, numerator, denominator) of the mixed form.

        The integer part carries the sign (zero integer part: sign lost,
        use is_negative()).
        """
        base = self.base
        quotient, remainder = divmod_naturals(
            base, self._numerator.integer_ordinals, self._denominator.integer_ordinals
        )
        return (
            Number(base, self._sign, quotient),
            Number(base, Sign.POSITIVE, remainder),
            self._denominator.copy(),
        )

    def evaluate(self, details=None) -> Number:
        """Positional value, bounded by the precision of ``details``."""
        return _facade().evaluate(self, details)

    def rebase(self, base: int) -> "Fraction":
        """Exact conversion (numerator and denominator are integers)."""
        return _facade().rebase(self, base)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: Any) -> int:
        return compare_fractions(self, to_fraction(other))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Fraction, Number)):
            return NotImplemented
        if other.base != self.base or other.is_infinity():
            return False
        return compare_fractions(self, to_fraction(other)) == 0

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, (Fraction, Number)):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, (Fraction, Number)):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, (Fraction, Number)):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, (Fraction, Number)):
            return NotImplemented
        return self.compare(other) >= 0

    def rational_key(self) -> Tuple[Any, ...]:
        reduced = reduce_fraction(self)
        return (
            self.base,
            self.is_negative(),
            reduced._numerator.integer_ordinals,
            reduced._denominator.integer_ordinals,
        )

    def __hash__(self) -> int:
        if self._hash is None:
            object.__setattr__(self, "_hash", hash(self.rational_key()))
        return self._hash

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def negate(self) -> "Fraction":
        return self._of(self.base, not self.is_negative(), *self._parts()[1:])

    def absolute_value(self) -> "Fraction":
        return self._of(self.base, False, *self._parts()[1:])

    def reciprocal(self) -> "Fraction":
        if self.is_zero():
            raise UndefinedOperationException(
                "Reciprocal of zero is undefined", operation="reciprocal"
            )
        negative, numerator, denominator = self._parts()
        return self._of(self.base, negative, denominator, numerator)

    def add(self, other: Any) -> "Fraction":
        return add_fractions(self, to_fraction(other))

    def subtract(self, other: Any) -> "Fraction":
        return add_fractions(self, to_fraction(other).negate())

    def multiply(self, other: Any) -> "Fraction":
        return multiply_fractions(self, to_fraction(other))

    def divide(self, other: Any) -> "Fraction":
        return multiply_fractions(self, to_fraction(other).reciprocal())

    def inc(self) -> "Fraction":
        return self.add(Number.one(self.base))

    def dec(self) -> "Fraction":
        return self.subtract(Number.one(self.base))

    def exponentiate(self, exponent: Any) -> "Fraction":
        return exponentiate_fraction(self, _as_number(exponent, self.base))

    def _coerce(self, other: Any) -> Any:
        if isinstance(other, (Fraction, Number)):
            return other
        if isinstance(other, int) and not isinstance(other, bool):
            return Number.from_native(other, self.base)
        return NotImplemented

    def __neg__(self) -> "Fraction":
        return self.negate()

    def __abs__(self) -> "Fraction":
        return self.absolute_value()

    def __add__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.add(other)

    def __radd__(self, other: Any) -> "Fraction":
        return self.__add__(other)

    def __sub__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return to_fraction(other).subtract(self)

    def __mul__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other: Any) -> "Fraction":
        return self.__mul__(other)

    def __truediv__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self.divide(other)

    def __rtruediv__(self, other: Any) -> "Fraction":
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return to_fraction(other).divide(self)

    def __pow__(self, exponent: Any) -> "Fraction":
        return self.exponentiate(exponent)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        sign = "-" if self.is_negative() else ""
        return f"{sign}{self._numerator}/{self._denominator}"

    def __repr__(self) -> str:
        return f"Fraction('{self}', base={self.base})"


# ============================================================================
# Fraction functions (shared by Fraction methods and radix_math)
# ============================================================================


def to_fraction(value: Any) -> Fraction:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, Number):
        return Fraction.from_number(value)
    raise TypeError(f"Expected a Number or Fraction, got {type(value).__name__}")


def _check_bases(a: Fraction, b: Fraction) -> int:
    if a.base != b.base:
        raise BaseMismatchError(
            "Fractions of different bases must be rebased first", bases=(a.base, b.base)
        )
    return a.base


def reduce_fraction(fraction: Fraction) -> Fraction:
    base = fraction.base
    negative, numerator, denominator = fraction._parts()
    divisor = gcd_naturals(base, numerator, denominator)
    if divisor == [1] or is_zero_natural(numerator):
        if is_zero_natural(numerator):
            return Fraction._of(base, False, [0], [1])
        return Fraction._of(base, negative, numerator, denominator)
    reduced_numerator, _ = divmod_naturals(base, numerator, divisor)
    reduced_denominator, _ = divmod_naturals(base, denominator, divisor)
    return Fraction._of(base, negative, reduced_numerator, reduced_denominator)


def compare_fractions(a: Fraction, b: Fraction) -> int:
    base = _check_bases(a, b)
    if a.is_negative() != b.is_negative():
        return -1 if a.is_negative() else 1
    negative, numerator_a, denominator_a = a._parts()
    _, numerator_b, denominator_b = b._parts()
    order = compare_naturals(
        multiply_naturals(base, numerator_a, denominator_b),
        multiply_naturals(base, numerator_b, denominator_a),
    )
    return -order if negative else order


def add_fractions(a: Fraction, b: Fraction) -> Fraction:
    base = _check_bases(a, b)
    negative_a, numerator_a, denominator_a = a._parts()
    negative_b, numerator_b, denominator_b = b._parts()
    negative, numerator = _signed_sum(
        base,
        negative_a,
        multiply_naturals(base, numerator_a, denominator_b),
        negative_b,
        multiply_naturals(base, numerator_b, denominator_a),
    )
    denominator = multiply_naturals(base, denominator_a, denominator_b)
    return reduce_fraction(Fraction._of(base, negative, numerator, denominator))


def multiply_fractions(a: Fraction, b: Fraction) -> Fraction:
    base = _check_bases(a, b)
    negative_a, numerator_a, denominator_a = a._parts()
    negative_b, numerator_b, denominator_b = b._parts()
    return reduce_fraction(
        Fraction._of(
            base,
            negative_a != negative_b,
            multiply_naturals(base, numerator_a, numerator_b),
            multiply_naturals(base, denominator_a, denominator_b),
        )
    )


def exponentiate_fraction(fraction: Fraction, exponent: Number) -> Fraction:
    """
    Raises a fraction to an integer exponent (exact).

    Raises:
        UndefinedOperationException: For 0^0 and 0^negative
        UnsupportedOperationError: For non-integer or infinite exponents
    """
    if not exponent.is_integer():
        raise UnsupportedOperationError(
            "Fractions can only be raised to integer exponents",
            context={"exponent": str(exponent)},
        )
    if fraction.is_zero():
        if exponent.is_zero() or exponent.is_negative():
            raise UndefinedOperationException(
                f"0^{exponent} is undefined", operation="exponentiation"
            )
        return Fraction._of(fraction.base, False, [0], [1])

    base = fraction.base
    if exponent.is_negative():
        fraction = fraction.reciprocal()

    negative, numerator, denominator = fraction._parts()
    result_numerator, result_denominator = [1], [1]
    remaining = trim(list(exponent.integer_ordinals))
    odd_exponent = False

    # Repeated squaring on numerator and denominator
    first = True
    while not is_zero_natural(remaining):
        remaining, bit = halve_natural(base, remaining)
        if first:
            odd_exponent = bit == 1
            first = False
        if bit:
            result_numerator = multiply_naturals(base, result_numerator, numerator)
            result_denominator = multiply_naturals(base, result_denominator, denominator)
        if not is_zero_natural(remaining):
            numerator = multiply_naturals(base, numerator, numerator)
            denominator = multiply_naturals(base, denominator, denominator)

    return Fraction._of(
        base, negative and odd_exponent, result_numerator, result_denominator
    )
