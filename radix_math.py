"""
radix_math.py

Stateless facade over all operation strategies.

Every Number and Fraction method delegates here, so the method form and
the function form behave identically:

    radix_math.divide(a, b, details)  ==  a.divide(b, details)

Functions resolve the algorithm from ProcessingDetails (default first),
fetch the singleton strategy from the operation registry and unwrap the
Result. Fractions are accepted wherever an exact rational result is
defined (add, subtract, multiply, divide_exact, exponentiate, rebase).

Usage:
    import radix_math
    from component_3_number import Number
    from component_12_operation_registry import OperationIdentifier
    from component_13_processing_details import ProcessingDetails

    details = ProcessingDetails(OperationIdentifier.RUSSIAN_DIVISION, precision=20)
    radix_math.divide(Number.parse("70"), Number.parse("6"), details)
"""

from typing import Any, Optional, Tuple, Union

from common.constants import DEFAULT_NUMBER_BASE
from component_3_number import Number
from component_5_fraction import (
    Fraction,
    add_fractions,
    exponentiate_fraction,
)
from component_5_fraction import to_fraction as fraction_of
from component_6_arithmetic_core import halve_natural
from component_8_division import evaluate_fraction
from component_12_operation_registry import (
    DIVISION_ALGORITHMS,
    EXPONENTIATION_ALGORITHMS,
    MULTIPLICATION_ALGORITHMS,
    PI_ALGORITHMS,
    ROUNDING_ALGORITHMS,
    OperationIdentifier,
    get_operation,
)
from component_13_processing_details import ProcessingDetails, processing_details
from infrastructure.interfaces import ResultWithRemainder

Rational = Union[Number, Fraction]


def _run(identifier: OperationIdentifier, *operands, details=None) -> Any:
    return get_operation(identifier).execute(*operands, details=details).result


def _as_number(value: Any, base: int) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return Number.from_native(value, base)
    return value


def _is_fraction(*values: Any) -> bool:
    return any(isinstance(value, Fraction) for value in values)


# ============================================================================
# Comparison and predicates
# ============================================================================


def compare(a: Rational, b: Rational) -> int:
    if _is_fraction(a, b):
        return fraction_of(a).compare(b)
    return a.compare(b)


def min(a: Number, b: Number) -> Number:  # noqa: A001
    return (a if compare(a, b) <= 0 else b).copy()


def max(a: Number, b: Number) -> Number:  # noqa: A001
    return (a if compare(a, b) >= 0 else b).copy()


def is_within_interval(number: Number, low: Number, high: Number) -> bool:
    """Inclusive: low <= number <= high"""
    return compare(low, number) <= 0 <= compare(high, number)


def is_even(number: Number) -> bool:
    """Integers only; fractions and infinity are neither even nor odd."""
    if not number.is_integer():
        return False
    return halve_natural(number.base, list(number.integer_ordinals))[1] == 0


def is_odd(number: Number) -> bool:
    if not number.is_integer():
        return False
    return not is_even(number)


# ============================================================================
# Exact core
# ============================================================================


def add(a: Rational, b: Rational) -> Rational:
    if _is_fraction(a, b):
        return add_fractions(fraction_of(a), fraction_of(b))
    return _run(OperationIdentifier.ADDITION, a, b)


def subtract(a: Rational, b: Rational) -> Rational:
    if _is_fraction(a, b):
        return add_fractions(fraction_of(a), fraction_of(b).negate())
    return _run(OperationIdentifier.SUBTRACTION, a, b)


def inc(number: Number) -> Number:
    return _run(OperationIdentifier.INCREMENT, number)


def dec(number: Number) -> Number:
    return _run(OperationIdentifier.DECREMENT, number)


def doubling(number: Number) -> Number:
    return _run(OperationIdentifier.DOUBLING, number)


def halving(number: Number, details: Optional[ProcessingDetails] = None) -> Number:
    return _run(
        OperationIdentifier.HALVING, number, details=processing_details(details)
    )


def shift_left(number: Number, places: Any = 1) -> Number:
    """Moves the radix point left, dividing by base^places."""
    return _run(OperationIdentifier.SHIFT_LEFT, number, places)


def shift_right(number: Number, places: Any = 1) -> Number:
    """Moves the radix point right, multiplying by base^places."""
    return _run(OperationIdentifier.SHIFT_RIGHT, number, places)


def negate(number: Number) -> Number:
    return _run(OperationIdentifier.NEGATION, number)


def absolute_value(number: Number) -> Number:
    return _run(OperationIdentifier.ABSOLUTE_VALUE, number)


def complement(number: Number) -> Number:
    return _run(OperationIdentifier.COMPLEMENT, number)


def remove_fraction_part(number: Number) -> Number:
    return _run(OperationIdentifier.REMOVE_FRACTION_PART, number)


def remove_integer_part(number: Number) -> Number:
    return _run(OperationIdentifier.REMOVE_INTEGER_PART, number)


# ============================================================================
# Multiplication and division
# ============================================================================


def multiply(
    a: Rational, b: Rational, details: Optional[ProcessingDetails] = None
) -> Rational:
    algorithm = processing_details(details).resolve_algorithm(MULTIPLICATION_ALGORITHMS)
    return _run(algorithm, a, b, details=details)


def square(number: Number) -> Number:
    return multiply(number, number)


def divide(
    a: Number, b: Number, details: Optional[ProcessingDetails] = None
) -> Number:
    """Approximated quotient, truncated to the precision of ``details``."""
    algorithm = processing_details(details).resolve_algorithm(DIVISION_ALGORITHMS)
    return _run(algorithm, a, b, details=details)


def divide_exact(a: Rational, b: Rational) -> Rational:
    return _run(OperationIdentifier.EXACT_DIVISION, a, b)


def divide_with_remainder(a: Number, b: Number) -> ResultWithRemainder:
    return get_operation(OperationIdentifier.DIVISION_WITH_REMAINDER).execute(a, b)


def diviso(a: Number, b: Number) -> Number:
    return _run(OperationIdentifier.DIVISO, a, b)


def modulo(a: Number, b: Number) -> Number:
    return _run(OperationIdentifier.MODULO, a, b)


def reciprocal(number: Number, details: Optional[ProcessingDetails] = None) -> Number:
    return divide(Number.one(number.base), number, details)


def is_multiple_of(a: Number, b: Number) -> bool:
    return modulo(a, b).is_zero()


def to_fraction(number: Rational) -> Fraction:
    """Exact Fraction of a finite Number (Fractions are returned as copies)."""
    if isinstance(number, Fraction):
        return Fraction(number.signed_numerator, number.denominator)
    return fraction_of(number)


def evaluate(value: Rational, details: Optional[ProcessingDetails] = None) -> Number:
    """Positional value of a Fraction (Numbers are returned as copies)."""
    if isinstance(value, Number):
        return value.copy()
    algorithm = processing_details(details).resolve_algorithm(DIVISION_ALGORITHMS)
    return evaluate_fraction(value, details, algorithm)


# ============================================================================
# Exponentiation and roots
# ============================================================================


def exponentiate(
    number: Rational, exponent: Any, details: Optional[ProcessingDetails] = None
) -> Rational:
    """
    Integer exponents use the configured algorithm, rational exponents
    (Fractions or Numbers with fraction digits) FRACTION_EXPONENTIATION.
    A Fraction base with an integer exponent gives an exact Fraction.
    """
    exponent = _as_number(exponent, number.base)
    algorithm = processing_details(details).resolve_algorithm(
        EXPONENTIATION_ALGORITHMS + (OperationIdentifier.FRACTION_EXPONENTIATION,)
    )

    if isinstance(number, Fraction):
        if isinstance(exponent, Fraction) and exponent.is_integer():
            exponent = exponent.to_mixed()[0]
        return exponentiate_fraction(number, exponent)
    if isinstance(exponent, Fraction) or exponent.has_fraction_part():
        algorithm = OperationIdentifier.FRACTION_EXPONENTIATION
    return _run(algorithm, number, exponent, details=details)


def root(
    number: Number, degree: Any, details: Optional[ProcessingDetails] = None
) -> Number:
    return _run(
        OperationIdentifier.NTH_ROOT,
        number,
        _as_number(degree, number.base),
        details=details,
    )


def square_root(number: Number, details: Optional[ProcessingDetails] = None) -> Number:
    return _run(OperationIdentifier.SQUARE_ROOT, number, details=details)


# ============================================================================
# Rounding and rebasing
# ============================================================================


def round(  # noqa: A001
    number: Number,
    places: Optional[Any] = None,
    details: Optional[ProcessingDetails] = None,
) -> Number:
    """Rounds to ``places`` fraction digits (default: the precision of ``details``)."""
    details = processing_details(details)
    algorithm = details.resolve_algorithm(ROUNDING_ALGORITHMS)
    if places is None:
        places = details.resolve_precision()
    return _run(algorithm, number, places, details=details)


def round_up(number: Number, places: Any = 0) -> Number:
    """Rounds toward positive infinity (the ceiling at 0 places)."""
    return _run(OperationIdentifier.ROUND_UP, number, places)


def round_down(number: Number, places: Any = 0) -> Number:
    """Rounds toward negative infinity (the floor at 0 places)."""
    return _run(OperationIdentifier.ROUND_DOWN, number, places)


def rebase(
    number: Rational, base: Any, details: Optional[ProcessingDetails] = None
) -> Rational:
    return _run(OperationIdentifier.REBASE, number, base, details=details)


# ============================================================================
# Number theory
# ============================================================================


def divisors(number: Number) -> Tuple[Number, ...]:
    return _run(OperationIdentifier.DIVISORS, number)


def common_divisors(a: Number, b: Number) -> Tuple[Number, ...]:
    return _run(OperationIdentifier.COMMON_DIVISORS, a, b)


def gcd(a: Number, b: Number) -> Number:
    return _run(OperationIdentifier.GREATEST_COMMON_DIVISOR, a, b)


def lcm(a: Number, b: Number) -> Number:
    return _run(OperationIdentifier.LEAST_COMMON_MULTIPLE, a, b)


def prime_factors(number: Number) -> Tuple[Number, ...]:
    return _run(OperationIdentifier.PRIME_FACTORS, number)


def common_prime_factors(a: Number, b: Number) -> Tuple[Number, ...]:
    return _run(OperationIdentifier.COMMON_PRIME_FACTORS, a, b)


def is_prime(number: Number) -> bool:
    return _run(OperationIdentifier.IS_PRIME, number)


def next_prime_number(ordinal: Any, base: int = DEFAULT_NUMBER_BASE) -> Number:
    """The prime with the given ordinal (0 -> 2)."""
    if isinstance(ordinal, Number):
        base = ordinal.base
    return _run(OperationIdentifier.NEXT_PRIME_NUMBER, _as_number(ordinal, base))


def factorial(number: Number) -> Number:
    return _run(OperationIdentifier.FACTORIAL, number)


def digit_sum(number: Number) -> Number:
    return _run(OperationIdentifier.DIGIT_SUM, number)


# ============================================================================
# Approximations and random numbers
# ============================================================================


def pi(base: int = DEFAULT_NUMBER_BASE, details: Optional[ProcessingDetails] = None) -> Number:
    """
    Bounded approximation of pi.

    ArchimedesPi (default) evaluates 22/7; LeibnizPi sums
    ``iteration_depth`` terms of the Leibniz series.
    """
    algorithm = processing_details(details).resolve_algorithm(PI_ALGORITHMS)
    return _run(algorithm, base, details=details)


def sine(number: Number, details: Optional[ProcessingDetails] = None) -> Number:
    """Taylor series of sin(x) over ``iteration_depth`` terms."""
    return _run(OperationIdentifier.SINE, number, details=details)


def random_number(
    base: int = DEFAULT_NUMBER_BASE, details: Optional[ProcessingDetails] = None
) -> Number:
    """Random number in [0, 1) with ``precision`` fraction digits."""
    return _run(OperationIdentifier.RANDOM_NUMBER, base, details=details)


def random_within_interval(
    low: Number, high: Number, details: Optional[ProcessingDetails] = None
) -> Number:
    """Random integer in [low, high] for integer bounds, else a number in [low, high)."""
    return _run(
        OperationIdentifier.RANDOM_NUMBER_WITHIN_INTERVAL, low, high, details=details
    )
