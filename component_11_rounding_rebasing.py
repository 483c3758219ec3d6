"""
component_11_rounding_rebasing.py

Rounding to a number of fraction digits and conversion between bases.

Rounding compares the discarded digits with half a unit of the last kept
place. Below half truncates, above half rounds the magnitude up. Exactly
half rounds to an even last digit (RoundToEven, the default) or to an odd
one (RoundToOdd). RoundUp and RoundDown ignore the half and round toward
positive or negative infinity; at 0 places they are ceiling and floor.

Rebasing converts the integer part exactly (Horner's scheme in the target
base). Fraction digits are produced by multiplying the remaining fraction
with the target base and extracting the integer part. At least
``precision`` digits are produced and, past that, digits until one is
nonzero or the remainder vanishes:

    "10.1" (base 10) -> "1010.000110011001" (base 2)
"""

from typing import List, Tuple

from component_1_numeral_systems import check_base
from component_2_logging_config import PerformanceLogger, get_logger
from component_3_number import Number, Sign
from component_5_fraction import Fraction
from component_6_arithmetic_core import (
    add_naturals,
    compare_naturals,
    divmod_naturals,
    increment_natural,
    int_to_natural,
    is_zero_natural,
    multiply_naturals,
    natural_to_int,
    places_to_int,
    trim,
)
from component_13_processing_details import processing_details
from infrastructure.interfaces import BaseOperation, Result, validate_numbers

logger = get_logger(__name__)

Digits = List[int]


class _RoundingStrategy(BaseOperation):
    """Rounds to ``places`` fraction digits; subclasses break ties."""

    def __init__(self, name: str):
        super().__init__("round", name, 2)

    def validate(self, *operands):
        if len(operands) != self.arity:
            return False, f"expects {self.arity} operands, {len(operands)} given"
        return validate_numbers(operands[:1], 1)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, places = operands
        places = places_to_int(places)
        if places < 0:
            raise ValueError(f"Cannot round to {places} places")

        if number.is_infinity() or len(number.fraction_ordinals) <= places:
            return self.result(number.copy())

        base = number.base
        kept = list(number.integer_ordinals) + list(number.fraction_ordinals[:places])
        discarded = trim(number.fraction_ordinals[places:])
        half_unit = [1] + [0] * len(number.fraction_ordinals[places:])

        order = compare_naturals(add_naturals(base, discarded, discarded), half_unit)
        if self.increments(number.is_negative(), order, kept[-1]):
            kept = increment_natural(base, kept)

        return self.result(
            Number.from_scaled(base, number.is_negative(), kept, places),
            places=places,
        )

    def increments(self, negative: bool, order: int, last_digit: int) -> bool:
        """
        Whether the kept magnitude grows by one unit of the last place.

        ``order`` compares the (nonzero) discarded part with half a unit.
        """
        return order > 0 or (order == 0 and self.rounds_up(last_digit))

    def rounds_up(self, last_digit: int) -> bool:
        """Tie breaking on the last kept digit"""
        raise NotImplementedError


class RoundToEven(_RoundingStrategy):
    """Banker's rounding: ties go to an even last digit"""

    def __init__(self):
        super().__init__("round_to_even")

    def rounds_up(self, last_digit: int) -> bool:
        return last_digit % 2 == 1


class RoundToOdd(_RoundingStrategy):
    """Ties go to an odd last digit"""

    def __init__(self):
        super().__init__("round_to_odd")

    def rounds_up(self, last_digit: int) -> bool:
        return last_digit % 2 == 0


class RoundUp(_RoundingStrategy):
    """Toward positive infinity (ceiling at 0 places)"""

    def __init__(self):
        super().__init__("round_up")

    def increments(self, negative: bool, order: int, last_digit: int) -> bool:
        return not negative


class RoundDown(_RoundingStrategy):
    """Toward negative infinity (floor at 0 places)"""

    def __init__(self):
        super().__init__("round_down")

    def increments(self, negative: bool, order: int, last_digit: int) -> bool:
        return negative


def convert_natural(digits: Digits, source: int, target: int) -> Digits:
    """Exact conversion of a natural number between bases (Horner's scheme)."""
    radix = int_to_natural(target, source)
    result: Digits = [0]
    for digit in digits:
        result = add_naturals(
            target, multiply_naturals(target, result, radix), int_to_natural(target, digit)
        )
    return result


def convert_fraction_digits(
    digits: Tuple[int, ...], source: int, target: int, precision: int
) -> Digits:
    """
    Fraction digits in the target base by multiply-and-extract.

    The fraction is F / source^m with F = digits; every step multiplies the
    remainder by the target base and extracts the integer part.
    """
    unit = [1] + [0] * len(digits)
    radix = int_to_natural(source, target)
    remainder = trim(digits)
    result: Digits = []

    while not is_zero_natural(remainder):
        quotient, remainder = divmod_naturals(
            source, multiply_naturals(source, remainder, radix), unit
        )
        digit = natural_to_int(source, quotient)
        result.append(digit)
        if len(result) >= precision and digit != 0:
            break

    return result


class Rebase(BaseOperation):
    """Converts a Number or Fraction to another base"""

    def __init__(self):
        super().__init__("rebase", "rebase", 2)

    def validate(self, *operands):
        if len(operands) != self.arity:
            return False, f"expects {self.arity} operands, {len(operands)} given"
        target = operands[1]
        if isinstance(target, bool) or not isinstance(target, (int, Number)):
            return False, f"target base is not a number: {type(target).__name__}"
        return validate_numbers(operands[:1], 1, allow_fraction=True)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, target = operands
        target = places_to_int(target)
        check_base(target)
        source = number.base

        if isinstance(number, Fraction):
            return self.result(self._rebase_fraction(number, target))
        if target == source:
            return self.result(number.copy())
        if number.is_infinity():
            return self.result(Number.infinity(target, number.sign))

        precision = processing_details(details).resolve_precision()
        with PerformanceLogger(
            logger, "Rebase", source=source, target=target, precision=precision
        ):
            integer = convert_natural(list(number.integer_ordinals), source, target)
            fraction = convert_fraction_digits(
                number.fraction_ordinals, source, target, precision
            )

        return self.result(
            Number(target, number.sign, integer, fraction), precision=precision
        )

    def _rebase_fraction(self, fraction: Fraction, target: int) -> Fraction:
        source = fraction.base
        if target == source:
            return Fraction(fraction.signed_numerator, fraction.denominator)
        numerator = convert_natural(
            list(fraction.numerator.integer_ordinals), source, target
        )
        denominator = convert_natural(
            list(fraction.denominator.integer_ordinals), source, target
        )
        return Fraction(
            Number(target, fraction.sign, numerator),
            Number(target, Sign.POSITIVE, denominator),
        )