"""
component_9_exponentiation.py

Exponentiation, nth roots and square roots.

Integer exponents:
- ExponentiationBySquaring (default): binary exponentiation on digit
  sequences, the exponent is halved digit by digit
- ConcurrentExponentiation: splits the exponent into up to
  CONCURRENT_EXPONENTIATION_WORKERS parts, computes the partial powers on a
  thread pool and multiplies them together

Both are exact for non-negative exponents. A negative exponent inverts the
base as an exact Fraction, which is then evaluated at ``precision``.

Roots are approximated by Newton's method (Heron's method for square
roots). The iteration starts at an upper bound, runs with ROOT_GUARD_DIGITS
extra fraction digits and stops as soon as an update no longer decreases
the iterate, or when the iteration depth is exhausted. The last iterate is
rounded half-even to ``precision``.

Fraction exponents x^(p/q) are evaluated as the q-th root of the exact
power x^p, so the rounding of the root is the only approximation.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List

from common.constants import CONCURRENT_EXPONENTIATION_WORKERS, ROOT_GUARD_DIGITS
from component_2_logging_config import PerformanceLogger, get_logger
from component_3_number import Number, Sign
from component_5_fraction import Fraction, reduce_fraction, to_fraction
from component_6_arithmetic_core import (
    add_numbers,
    compare_naturals,
    divmod_naturals,
    halve_natural,
    increment_natural,
    int_to_natural,
    is_zero_natural,
    multiply_naturals,
    natural_to_int,
    scaled_magnitude,
    shift,
    trim,
    with_sign,
)
from component_8_division import evaluate_fraction
from component_12_operation_registry import OperationIdentifier, get_operation
from component_13_processing_details import ProcessingDetails, processing_details
from infrastructure.interfaces import BaseOperation, Result, validate_numbers
from radix_exceptions import UndefinedOperationException, UnsupportedOperationError

logger = get_logger(__name__)

Digits = List[int]


def power_naturals(base: int, digits: Digits, exponent: Digits) -> Digits:
    """digits ** exponent by repeated squaring."""
    result: Digits = [1]
    remaining = trim(exponent)
    while not is_zero_natural(remaining):
        remaining, bit = halve_natural(base, remaining)
        if bit:
            result = multiply_naturals(base, result, digits)
        if not is_zero_natural(remaining):
            digits = multiply_naturals(base, digits, digits)
    return result


def is_odd_natural(base: int, digits: Digits) -> bool:
    return halve_natural(base, digits)[1] == 1


def _round(number: Number, places: int) -> Number:
    return get_operation(OperationIdentifier.ROUND_TO_EVEN).execute(number, places).result


class _ExponentiationStrategy(BaseOperation):
    """
    Special values and negative exponents; subclasses raise a natural
    magnitude to a positive natural exponent.
    """

    def __init__(self, name: str):
        super().__init__("^", name, 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, exponent = operands
        base = number.base

        if number.is_one():
            return self.result(Number.one(base))
        if exponent.is_infinity():
            raise UnsupportedOperationError(
                "Infinite exponents are not supported",
                context={"number": str(number)},
            )
        if exponent.has_fraction_part():
            raise UnsupportedOperationError(
                f"{self.name} needs an integer exponent",
                context={"exponent": str(exponent)},
            )

        if number.is_infinity():
            if exponent.is_zero():
                raise UndefinedOperationException(
                    "Infinity to the power of zero is undefined", operation=self.name
                )
            if exponent.is_negative():
                return self.result(Number.zero(base))
            negative = number.is_negative() and is_odd_natural(
                base, list(exponent.integer_ordinals)
            )
            return self.result(Number.infinity(base, Sign.of(negative)))

        if number.is_zero():
            if exponent.is_zero() or exponent.is_negative():
                raise UndefinedOperationException(
                    f"0^{exponent} is undefined", operation=self.name
                )
            return self.result(Number.zero(base))

        if exponent.is_zero():
            return self.result(Number.one(base))

        power = self.power(number, list(exponent.integer_ordinals))
        if exponent.is_positive():
            return self.result(power)

        precision = processing_details(details).resolve_precision()
        return self.result(
            evaluate_fraction(Fraction(Number.one(base), power), details),
            precision=precision,
        )

    def power(self, number: Number, exponent: Digits) -> Number:
        """Exact power of a finite nonzero number to a positive exponent."""
        base = number.base
        digits, scale = scaled_magnitude(number)
        product = self.power_naturals(base, digits, exponent)
        negative = number.is_negative() and is_odd_natural(base, exponent)
        return Number.from_scaled(
            base, negative, product, scale * natural_to_int(base, exponent)
        )

    def power_naturals(self, base: int, digits: Digits, exponent: Digits) -> Digits:
        raise NotImplementedError


class ExponentiationBySquaring(_ExponentiationStrategy):
    """Sequential binary exponentiation"""

    def __init__(self):
        super().__init__("exponentiation_by_squaring")

    def power_naturals(self, base, digits, exponent):
        return power_naturals(base, digits, exponent)


class ConcurrentExponentiation(_ExponentiationStrategy):
    """
    Parallel exponentiation.

    x^e is split into x^e1 * x^e2 * ... with e1 + e2 + ... = e and at most
    ``workers`` parts of nearly equal size. The partial powers run on a
    ThreadPoolExecutor; the first failing part cancels the pending ones and
    its exception propagates unchanged.
    """

    def __init__(self, workers: int = CONCURRENT_EXPONENTIATION_WORKERS):
        super().__init__("concurrent_exponentiation")
        self.workers = workers

    def split_exponent(self, base: int, exponent: Digits) -> List[Digits]:
        workers = int_to_natural(base, self.workers)
        parts = trim(exponent) if compare_naturals(exponent, workers) < 0 else workers
        share, rest = divmod_naturals(base, exponent, parts)
        larger = natural_to_int(base, rest)
        count = natural_to_int(base, parts)
        return [increment_natural(base, share)] * larger + [share] * (count - larger)

    def power_naturals(self, base, digits, exponent):
        parts = self.split_exponent(base, exponent)
        partials: List[Digits] = []

        with PerformanceLogger(
            logger, "Concurrent exponentiation", base=base, parts=len(parts)
        ):
            with ThreadPoolExecutor(max_workers=len(parts)) as executor:
                futures = {
                    executor.submit(power_naturals, base, digits, part): index
                    for index, part in enumerate(parts)
                }
                for future in as_completed(futures):
                    try:
                        partials.append(future.result())
                    except Exception as e:
                        for pending in futures:
                            pending.cancel()
                        logger.log_exception(
                            e, "Partial power failed", part=futures[future]
                        )
                        raise

            result: Digits = [1]
            for partial in partials:
                result = multiply_naturals(base, result, partial)

        return result


class NthRoot(BaseOperation):
    """
    n-th root by Newton's method:

        x' = ((n - 1) * x + s / x^(n - 1)) / n

    The start value base^ceil(k / n) (k = integer digits of s), or
    base^-floor(z / n) below one (z = leading zero fraction digits), bounds
    the root from above. Odd roots of negative numbers are negated roots of
    the magnitude.
    """

    def __init__(self):
        super().__init__("root", "nth_root", 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, degree = operands
        base = number.base

        if degree.is_infinity() or degree.has_fraction_part() or degree.is_negative():
            raise UnsupportedOperationError(
                "The root degree must be a positive integer",
                context={"degree": str(degree)},
            )
        if degree.is_zero():
            raise UndefinedOperationException(
                "The zeroth root is undefined", operation=self.name
            )

        n = degree.to_native_int()
        even = n % 2 == 0
        if number.is_negative() and even:
            raise UndefinedOperationException(
                f"Even root of the negative number {number}", operation=self.name
            )
        if n == 1 or number.is_infinity():
            return self.result(number.copy())
        if number.is_zero():
            return self.result(Number.zero(base))

        details = processing_details(details)
        precision = details.resolve_precision()
        depth = details.resolve_iteration_depth()

        with PerformanceLogger(
            logger, "Nth root", base=base, degree=n, precision=precision
        ):
            magnitude = with_sign(number, Sign.POSITIVE)
            root = self.newton(magnitude, n, precision + ROOT_GUARD_DIGITS, depth)

        return self.result(
            with_sign(_round(root, precision), number.sign), precision=precision
        )

    def newton(self, radicand: Number, n: int, working_precision: int, depth: int) -> Number:
        base = radicand.base
        division = get_operation(OperationIdentifier.LONG_DIVISION)
        squaring = get_operation(OperationIdentifier.EXPONENTIATION_BY_SQUARING)
        multiplication = get_operation(OperationIdentifier.LONG_MULTIPLICATION)
        working = ProcessingDetails(precision=working_precision)

        degree = Number.from_native(n, base)
        degree_minus_one = Number.from_native(n - 1, base)

        estimate = upper_bound(radicand, n)
        for iteration in range(1, depth + 1):
            power = squaring.execute(estimate, degree_minus_one).result
            quotient = division.execute(radicand, power, details=working).result
            weighted = multiplication.execute(degree_minus_one, estimate).result
            following = division.execute(
                add_numbers(weighted, quotient), degree, details=working
            ).result
            if following.is_zero():
                # The root is below two units of the working precision
                estimate = following
                break
            if following >= estimate:
                break
            estimate = following

        logger.debug(
            "Newton iteration finished",
            extra={"degree": n, "iterations": iteration, "depth": depth},
        )
        return estimate


class SquareRoot(BaseOperation):
    """Heron's method: x' = (x + s / x) / 2"""

    def __init__(self):
        super().__init__("sqrt", "square_root", 1)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands

        if number.is_negative():
            raise UndefinedOperationException(
                f"Square root of the negative number {number}", operation=self.name
            )
        if number.is_infinity():
            return self.result(number.copy())
        if number.is_zero():
            return self.result(Number.zero(number.base))

        details = processing_details(details)
        precision = details.resolve_precision()
        depth = details.resolve_iteration_depth()
        working = ProcessingDetails(precision=precision + ROOT_GUARD_DIGITS)

        division = get_operation(OperationIdentifier.LONG_DIVISION)
        halving = get_operation(OperationIdentifier.HALVING)

        with PerformanceLogger(
            logger, "Square root", base=number.base, precision=precision
        ):
            estimate = upper_bound(number, 2)
            for iteration in range(1, depth + 1):
                quotient = division.execute(number, estimate, details=working).result
                following = halving.execute(
                    add_numbers(estimate, quotient), details=working
                ).result
                following = _truncate(following, working.precision)
                if following.is_zero():
                    estimate = following
                    break
                if following >= estimate:
                    break
                estimate = following

        logger.debug(
            "Heron iteration finished",
            extra={"iterations": iteration, "depth": depth},
        )
        return self.result(_round(estimate, precision), precision=precision)


class FractionExponentiation(BaseOperation):
    """
    Rational exponents x^(p/q).

    Even denominators of negative bases are undefined. A negative exponent
    evaluates the reciprocal at working precision before rounding.
    """

    def __init__(self):
        super().__init__("^", "fraction_exponentiation", 2)

    def validate(self, *operands):
        if len(operands) != self.arity:
            return False, f"expects {self.arity} operands, {len(operands)} given"
        if not isinstance(operands[0], Number):
            return False, f"operand 1 is not a number: {type(operands[0]).__name__}"
        return validate_numbers(operands, self.arity, allow_fraction=True)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, exponent = operands
        base = number.base

        if exponent.is_infinity():
            raise UnsupportedOperationError(
                "Infinite exponents are not supported",
                context={"number": str(number)},
            )

        exponent = reduce_fraction(to_fraction(exponent))
        negative_exponent = exponent.is_negative()
        p = list(exponent.numerator.integer_ordinals)
        q = list(exponent.denominator.integer_ordinals)
        if q == [1]:
            whole = Number(base, exponent.sign, p)
            return get_operation(OperationIdentifier.EXPONENTIATION_BY_SQUARING).execute(
                number, whole, details=details
            )

        if number.is_one():
            return self.result(Number.one(base))
        even_root = not is_odd_natural(base, q)
        if number.is_negative() and even_root:
            raise UndefinedOperationException(
                f"Even root of the negative number {number}", operation=self.name
            )
        if number.is_infinity():
            if negative_exponent:
                return self.result(Number.zero(base))
            negative = number.is_negative() and is_odd_natural(base, p)
            return self.result(Number.infinity(base, Sign.of(negative)))
        if number.is_zero():
            if negative_exponent:
                raise UndefinedOperationException(
                    f"0^{exponent} is undefined", operation=self.name
                )
            return self.result(Number.zero(base))

        details = processing_details(details)
        precision = details.resolve_precision()
        squaring = get_operation(OperationIdentifier.EXPONENTIATION_BY_SQUARING)

        radicand = squaring.execute(number, Number(base, Sign.POSITIVE, p)).result
        if negative_exponent:
            # The truncation error of 1 / x^p reaches the root scaled by up to x^p
            guard = ROOT_GUARD_DIGITS + len(radicand.integer_ordinals)
            radicand = get_operation(OperationIdentifier.LONG_DIVISION).execute(
                Number.one(base),
                radicand,
                details=ProcessingDetails(precision=precision + guard),
            ).result

        root = get_operation(OperationIdentifier.NTH_ROOT).execute(
            radicand,
            Number(base, Sign.POSITIVE, q),
            details=ProcessingDetails(
                precision=precision,
                iteration_depth=details.resolve_iteration_depth(),
            ),
        ).result
        return self.result(root, precision=precision)


def upper_bound(radicand: Number, n: int) -> Number:
    """
    base^ceil(k / n) for k integer digits.

    Below one, base^-floor(z / n) for z leading zero fraction digits.
    """
    base = radicand.base
    if radicand.integer_ordinals == (0,):
        zeros = 0
        while radicand.fraction_ordinals[zeros] == 0:
            zeros += 1
        return shift(Number.one(base), -(zeros // n))
    digits = len(radicand.integer_ordinals)
    return shift(Number.one(base), -(-digits // n))


def _truncate(number: Number, places: int) -> Number:
    if len(number.fraction_ordinals) <= places:
        return number
    return Number(
        number.base,
        number.sign,
        number.integer_ordinals,
        number.fraction_ordinals[:places],
    )
