"""
component_8_division.py

Division, remainder division, diviso, modulo and exact division.

Approximated division strategies (interchangeable, identical quotients):
- LongDivision: one quotient digit per step, picked from a table of the
  divisor's multiples
- DivisionBySubtraction: repeated subtraction of the divisor
- RussianDivision: subtraction of doubled divisors (peasant division)

All three scale dividend and divisor by the same power of the base until
both are integers, then divide digit sequences. The quotient is truncated
after ``precision`` fraction digits (ProcessingDetails, default 10).

Special values:
    x / 0       UndefinedOperationException (also 0 / 0)
    x / inf     NoResultButLimitException, limit 0
    inf / inf   NoResultButLimitException, limit 1
    inf / x     signed infinity

Remainder division (integers only) truncates toward zero; the remainder
has the dividend's sign: -100 / 24 -> quotient -4, remainder -4. There 0 / 0
raises NoResultButLimitException with limit 1.
"""

from typing import Callable, List, Tuple

from component_2_logging_config import get_logger
from component_3_number import Number
from component_5_fraction import Fraction, multiply_fractions, to_fraction
from component_6_arithmetic_core import (
    add_naturals,
    as_integers,
    compare_naturals,
    divmod_naturals,
    increment_natural,
    is_zero_natural,
    subtract_naturals,
    trim,
)
from component_12_operation_registry import OperationIdentifier, get_operation
from component_13_processing_details import processing_details
from infrastructure.interfaces import (
    BaseOperation,
    Result,
    ResultWithRemainder,
    validate_numbers,
)
from radix_exceptions import (
    InexactDivisionError,
    NoResultButLimitException,
    UndefinedOperationException,
    UnsupportedOperationError,
)

logger = get_logger(__name__)

Digits = List[int]
DigitStep = Callable[[Digits], Tuple[int, Digits]]


def _limit(value: Number, operation: str) -> NoResultButLimitException:
    return NoResultButLimitException(
        f"{operation} has no result, only the limit {value}", limit=value
    )


def check_division_special_values(dividend, divisor, operation: str):
    """
    Applies the special value rules shared by all approximated divisions.

    Returns:
        The result for infinite or zero dividends, else None
    """
    base = dividend.base
    if divisor.is_zero():
        raise UndefinedOperationException("Division by zero", operation=operation)
    if divisor.is_infinity():
        if dividend.is_infinity():
            raise _limit(Number.one(base), operation)
        raise _limit(Number.zero(base), operation)
    if dividend.is_infinity():
        return Number.infinity(base, dividend.sign.multiply(divisor.sign))
    if dividend.is_zero():
        return Number.zero(base)
    return None


def _fraction_digits(remainder: Digits, precision: int, step: DigitStep) -> Digits:
    digits: Digits = []
    while len(digits) < precision and not is_zero_natural(remainder):
        digit, remainder = step(trim(remainder + [0]))
        digits.append(digit)
    return digits


class _DivisionStrategy(BaseOperation):
    """Approximated division; subclasses divide integer digit sequences"""

    def __init__(self, name: str):
        super().__init__("/", name, 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        dividend, divisor = operands

        special = check_division_special_values(dividend, divisor, self.name)
        if special is not None:
            return self.result(special)

        precision = processing_details(details).resolve_precision()
        a, b = as_integers(dividend, divisor)
        integer, fraction = self.divide_naturals(dividend.base, a, b, precision)

        logger.debug(
            "Division finished",
            extra={
                "algorithm": self.name,
                "base": dividend.base,
                "precision": precision,
                "fraction_digits": len(fraction),
            },
        )
        return self.result(
            Number(
                dividend.base,
                dividend.sign.multiply(divisor.sign),
                integer,
                fraction,
            ),
            precision=precision,
        )

    def divide_naturals(
        self, base: int, a: Digits, b: Digits, precision: int
    ) -> Tuple[Digits, Digits]:
        raise NotImplementedError


class LongDivision(_DivisionStrategy):
    """Schoolbook long division"""

    def __init__(self):
        super().__init__("long_division")

    def divide_naturals(self, base, a, b, precision):
        multiples = [[0]]
        for _ in range(1, base):
            multiples.append(add_naturals(base, multiples[-1], b))

        def step(remainder: Digits) -> Tuple[int, Digits]:
            # Largest k with k * b <= remainder
            low, high = 0, base - 1
            while low < high:
                middle = (low + high + 1) // 2
                if compare_naturals(multiples[middle], remainder) <= 0:
                    low = middle
                else:
                    high = middle - 1
            return low, subtract_naturals(base, remainder, multiples[low])

        quotient: Digits = []
        remainder: Digits = [0]
        for digit in a:
            ordinal, remainder = step(trim(remainder + [digit]))
            quotient.append(ordinal)

        return trim(quotient), _fraction_digits(remainder, precision, step)


class DivisionBySubtraction(_DivisionStrategy):
    """
    Repeated subtraction.

    The integer part counts how often the divisor can be subtracted from
    the dividend. Each fraction digit counts the subtractions from the
    remainder shifted by one place (at most base - 1).
    """

    def __init__(self):
        super().__init__("division_by_subtraction")

    def divide_naturals(self, base, a, b, precision):
        def step(remainder: Digits) -> Tuple[int, Digits]:
            count = 0
            while compare_naturals(remainder, b) >= 0:
                remainder = subtract_naturals(base, remainder, b)
                count += 1
            return count, remainder

        quotient: Digits = [0]
        remainder = trim(a)
        while compare_naturals(remainder, b) >= 0:
            remainder = subtract_naturals(base, remainder, b)
            quotient = increment_natural(base, quotient)

        return quotient, _fraction_digits(remainder, precision, step)


class RussianDivision(_DivisionStrategy):
    """
    Russian (peasant) division.

    Doubles the divisor until it would exceed the remainder, then walks the
    doublings back, subtracting each one that fits and adding the matching
    power of two to the quotient.
    """

    def __init__(self):
        super().__init__("russian_division")

    def divide_naturals(self, base, a, b, precision):
        def step(remainder: Digits) -> Tuple[int, Digits]:
            doublings = [(b, 1)]
            while True:
                doubled = add_naturals(base, doublings[-1][0], doublings[-1][0])
                if compare_naturals(doubled, remainder) > 0:
                    break
                doublings.append((doubled, doublings[-1][1] * 2))
            digit = 0
            for multiple, power in reversed(doublings):
                if compare_naturals(multiple, remainder) <= 0:
                    remainder = subtract_naturals(base, remainder, multiple)
                    digit += power
            return digit, remainder

        remainder = trim(a)
        doublings = [(b, [1])]
        while True:
            doubled = add_naturals(base, doublings[-1][0], doublings[-1][0])
            if compare_naturals(doubled, remainder) > 0:
                break
            power = doublings[-1][1]
            doublings.append((doubled, add_naturals(base, power, power)))

        quotient: Digits = [0]
        for multiple, power in reversed(doublings):
            if compare_naturals(multiple, remainder) <= 0:
                remainder = subtract_naturals(base, remainder, multiple)
                quotient = add_naturals(base, quotient, power)

        return quotient, _fraction_digits(remainder, precision, step)


class DivisionWithRemainder(BaseOperation):
    """Truncating integer division returning quotient and remainder"""

    def __init__(self):
        super().__init__("divmod", "division_with_remainder", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> ResultWithRemainder:
        self.check_operands(*operands)
        dividend, divisor = operands
        base = dividend.base

        for operand in operands:
            if operand.has_fraction_part():
                raise UnsupportedOperationError(
                    "Remainder division requires integers",
                    context={"operand": str(operand)},
                )

        if divisor.is_zero():
            if dividend.is_zero():
                raise _limit(Number.one(base), self.name)
            raise UndefinedOperationException("Division by zero", operation=self.name)
        if divisor.is_infinity():
            if dividend.is_infinity():
                raise _limit(Number.one(base), self.name)
            raise _limit(Number.zero(base), self.name)
        if dividend.is_infinity():
            return ResultWithRemainder(
                Number.infinity(base, dividend.sign.multiply(divisor.sign)),
                Number.zero(base),
                {"operation": self.name},
            )

        quotient, remainder = divmod_naturals(
            base, dividend.integer_ordinals, divisor.integer_ordinals
        )
        return ResultWithRemainder(
            Number(base, dividend.sign.multiply(divisor.sign), quotient),
            Number(base, dividend.sign, remainder),
            {"operation": self.name},
        )


class Diviso(BaseOperation):
    """
    Strict integer division: succeeds only if the divisor divides the
    dividend without remainder. A zero divisor is undefined (also for a
    zero dividend).
    """

    def __init__(self):
        super().__init__("div", "diviso", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        dividend, divisor = operands
        if divisor.is_zero():
            raise UndefinedOperationException("Division by zero", operation=self.name)
        division = get_operation(OperationIdentifier.DIVISION_WITH_REMAINDER).execute(
            dividend, divisor
        )
        if not division.remainder.is_zero():
            raise InexactDivisionError(
                f"{divisor} does not divide {dividend}",
                dividend=str(dividend),
                divisor=str(divisor),
            )
        return self.result(division.result)


class Modulo(BaseOperation):
    """Truncating remainder (sign of the dividend): -100 % 7 = -2"""

    def __init__(self):
        super().__init__("%", "modulo", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        division = get_operation(OperationIdentifier.DIVISION_WITH_REMAINDER).execute(
            *operands
        )
        return self.result(division.remainder)


class ExactDivision(BaseOperation):
    """
    Exact rational division, returns a Fraction.

    An infinite dividend (with a finite nonzero divisor) returns the
    signed infinity as a Number.
    """

    def __init__(self):
        super().__init__("//", "exact_division", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity, allow_fraction=True)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        dividend, divisor = operands

        if divisor.is_zero():
            raise UndefinedOperationException("Division by zero", operation=self.name)

        if isinstance(dividend, Number) and isinstance(divisor, Number):
            special = check_division_special_values(dividend, divisor, self.name)
            if special is not None and special.is_infinity():
                return self.result(special)
            return self.result(Fraction(dividend, divisor))

        if dividend.is_infinity() or divisor.is_infinity():
            raise UnsupportedOperationError(
                "Fractions cannot be divided with infinity",
                context={"dividend": str(dividend), "divisor": str(divisor)},
            )
        return self.result(
            multiply_fractions(to_fraction(dividend), to_fraction(divisor).reciprocal())
        )


def evaluate_fraction(
    fraction: Fraction,
    details=None,
    algorithm: OperationIdentifier = OperationIdentifier.LONG_DIVISION,
) -> Number:
    """Positional value of a fraction, truncated to the precision of ``details``."""
    return (
        get_operation(algorithm)
        .execute(fraction.signed_numerator, fraction.denominator, details=details)
        .result
    )
