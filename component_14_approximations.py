"""
component_14_approximations.py

Bounded approximations of pi and the sine, and random numbers.

Pi:
- ArchimedesPi (default): 22/7, evaluated at ``precision``
- LeibnizPi: 4 * sum((-1)^k / (2k + 1)) over ``iteration_depth`` terms

Sine is the Taylor series sum((-1)^n * x^(2n+1) / (2n+1)!) over
``iteration_depth`` terms. Both series evaluate every term with guard digits
and round the sum half-even to ``precision``. The result is the value of the
truncated series, not of the function: 32 Leibniz terms give 3.11, and the
sine series needs more terms as |x| grows.

Random numbers draw one digit at a time from the ``random`` module, so
``random.seed`` makes them reproducible.
"""

import random
from typing import List

from common.constants import ROOT_GUARD_DIGITS
from component_1_numeral_systems import check_base
from component_2_logging_config import PerformanceLogger, get_logger
from component_3_number import Number, Sign
from component_6_arithmetic_core import add_numbers, int_to_natural, negated
from component_12_operation_registry import OperationIdentifier, get_operation
from component_13_processing_details import ProcessingDetails, processing_details
from infrastructure.interfaces import BaseOperation, Result, validate_numbers
from radix_exceptions import UndefinedOperationException, UnsupportedOperationError

logger = get_logger(__name__)

Digits = List[int]


def _guard_digits(base: int, terms: int) -> int:
    """Extra fraction digits that absorb the truncation of ``terms`` summands"""
    return ROOT_GUARD_DIGITS + len(int_to_natural(base, 8 * terms))


def _round(number: Number, places: int) -> Number:
    return get_operation(OperationIdentifier.ROUND_TO_EVEN).execute(number, places).result


class _BaseArgumentOperation(BaseOperation):
    """Strategies whose only operand is a number base (a host int)"""

    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 1)

    def validate(self, *operands):
        if len(operands) != self.arity:
            return False, f"expects {self.arity} operand, {len(operands)} given"
        if isinstance(operands[0], bool) or not isinstance(operands[0], int):
            return False, f"operand 1 is not a base: {type(operands[0]).__name__}"
        return True, None

    def check_operands(self, *operands) -> None:
        super().check_operands(*operands)
        check_base(operands[0])


class ArchimedesPi(_BaseArgumentOperation):
    """pi ~ 22/7, truncated to ``precision`` fraction digits"""

    def __init__(self):
        super().__init__("pi", "archimedes_pi")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (base,) = operands
        precision = processing_details(details).resolve_precision()

        quotient = get_operation(OperationIdentifier.LONG_DIVISION).execute(
            Number.from_native(22, base),
            Number.from_native(7, base),
            details=ProcessingDetails(precision=precision),
        )
        return self.result(quotient.result, precision=precision)


class LeibnizPi(_BaseArgumentOperation):
    """pi ~ 4 * (1 - 1/3 + 1/5 - 1/7 + ...)"""

    def __init__(self):
        super().__init__("pi", "leibniz_pi")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (base,) = operands
        details = processing_details(details)
        precision = details.resolve_precision()
        terms = details.resolve_iteration_depth()
        working = ProcessingDetails(precision=precision + _guard_digits(base, terms))

        division = get_operation(OperationIdentifier.LONG_DIVISION)
        one = Number.one(base)
        two = Number.from_native(2, base)

        with PerformanceLogger(logger, "Leibniz series", base=base, terms=terms):
            total = Number.zero(base)
            denominator = one
            for k in range(terms):
                term = division.execute(one, denominator, details=working).result
                total = add_numbers(total, negated(term) if k % 2 else term)
                denominator = add_numbers(denominator, two)

        total = total.doubling().doubling()
        return self.result(_round(total, precision), precision=precision, terms=terms)


class Sine(BaseOperation):
    """Taylor series of sin(x) around 0"""

    def __init__(self):
        super().__init__("sin", "sine", 1)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            raise UndefinedOperationException(
                "Sine of infinity", operation=self.name
            )

        base = number.base
        if number.is_zero():
            return self.result(Number.zero(base))

        details = processing_details(details)
        precision = details.resolve_precision()
        terms = details.resolve_iteration_depth()
        working = ProcessingDetails(precision=precision + _guard_digits(base, terms))

        division = get_operation(OperationIdentifier.LONG_DIVISION)
        multiplication = get_operation(OperationIdentifier.LONG_MULTIPLICATION)
        square = multiplication.execute(number, number).result

        with PerformanceLogger(logger, "Sine series", base=base, terms=terms):
            power = number.copy()
            factorial = Number.one(base)
            odd = Number.one(base)
            total = Number.zero(base)
            for n in range(terms):
                term = division.execute(power, factorial, details=working).result
                total = add_numbers(total, negated(term) if n % 2 else term)

                power = multiplication.execute(power, square).result
                odd = odd.inc()
                factorial = multiplication.execute(factorial, odd).result
                odd = odd.inc()
                factorial = multiplication.execute(factorial, odd).result

        logger.debug(
            "Sine series finished", extra={"terms": terms, "precision": precision}
        )
        return self.result(_round(total, precision), precision=precision, terms=terms)


class RandomNumber(_BaseArgumentOperation):
    """Uniform random number in [0, 1) with ``precision`` fraction digits"""

    def __init__(self):
        super().__init__("random", "random_number")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (base,) = operands
        digits = processing_details(details).resolve_precision()
        if digits < 1:
            raise UnsupportedOperationError(
                "A random number needs at least one fraction digit",
                context={"precision": digits},
            )
        fraction: Digits = [random.randrange(base) for _ in range(digits)]
        return self.result(Number(base, Sign.POSITIVE, (0,), fraction))


class RandomNumberWithinInterval(BaseOperation):
    """
    Uniform random number between two bounds.

    Integer bounds give integers in [low, high], both bounds included.
    Otherwise the result lies in [low, high) and carries up to
    ``precision`` fraction digits more than the interval width.
    """

    def __init__(self):
        super().__init__("random", "random_number_within_interval", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        low, high = operands
        if low.is_infinity() or high.is_infinity():
            raise UnsupportedOperationError(
                "Interval bounds must be finite",
                context={"low": str(low), "high": str(high)},
            )
        if low > high:
            raise ValueError(f"Invalid interval [{low}, {high}]")

        base = low.base
        integer = low.is_integer() and high.is_integer()
        width = add_numbers(high, negated(low))
        if integer:
            width = width.inc()

        sample = (
            get_operation(OperationIdentifier.RANDOM_NUMBER)
            .execute(base, details=details)
            .result
        )
        offset = get_operation(OperationIdentifier.LONG_MULTIPLICATION).execute(
            sample, width
        ).result
        if integer:
            offset = offset.remove_fraction_part()
        return self.result(add_numbers(low, offset))
