"""
component_10_number_theory.py

Number theoretic operations on integer Numbers, computed with digit
arithmetic in the number's own base.

- Divisors: trial division up to the integer square root
- GreatestCommonDivisor / LeastCommonMultiple: Euclid's algorithm
- CommonDivisors: divisors of the greatest common divisor
- PrimeFactors: repeatedly extracts the smallest divisor > 1
  (2139 -> 3, 23, 31)
- CommonPrimeFactors: multiset intersection of two factorizations
- IsPrime: trial division by 2 and odd candidates
- NextPrimeNumber: the prime with a given ordinal (0 -> 2, 1 -> 3, 2 -> 5)
- Factorial, DigitSum

Signs are ignored (divisors of -12 are the divisors of 12). Fractions and
infinity raise UnsupportedOperationError.
"""

import threading
from typing import List, Tuple

from common.constants import PRIME_CACHE_MAXSIZE, PRIME_CACHE_NAME
from component_2_logging_config import PerformanceLogger, get_logger
from component_3_number import Number, Sign
from component_6_arithmetic_core import (
    add_naturals,
    compare_naturals,
    divmod_naturals,
    gcd_naturals,
    halve_natural,
    increment_natural,
    int_to_natural,
    is_zero_natural,
    multiply_naturals,
)
from infrastructure.cache_manager import get_cache_manager
from infrastructure.interfaces import BaseOperation, Result, validate_numbers
from radix_exceptions import UnsupportedOperationError

logger = get_logger(__name__)

Digits = List[int]


def _natural(number: Number, operation: str) -> Digits:
    if number.is_infinity() or number.has_fraction_part():
        raise UnsupportedOperationError(
            f"{operation} requires a finite integer", context={"number": str(number)}
        )
    return list(number.integer_ordinals)


def _number(base: int, digits: Digits) -> Number:
    return Number(base, Sign.POSITIVE, digits)


def _divides(base: int, divisor: Digits, dividend: Digits) -> bool:
    return is_zero_natural(divmod_naturals(base, dividend, divisor)[1])


def _square_at_most(base: int, candidate: Digits, limit: Digits) -> bool:
    return compare_naturals(multiply_naturals(base, candidate, candidate), limit) <= 0


def divisors_natural(base: int, n: Digits) -> List[Digits]:
    """All positive divisors of n > 0, ascending."""
    small: List[Digits] = []
    large: List[Digits] = []
    candidate = [1]
    while _square_at_most(base, candidate, n):
        quotient, remainder = divmod_naturals(base, n, candidate)
        if is_zero_natural(remainder):
            small.append(candidate)
            if compare_naturals(quotient, candidate) != 0:
                large.append(quotient)
        candidate = increment_natural(base, candidate)
    return small + large[::-1]


def smallest_factor(base: int, n: Digits) -> Digits:
    """Smallest divisor > 1 of n > 1 (n itself if n is prime)."""
    two = int_to_natural(base, 2)
    if halve_natural(base, n)[1] == 0:
        return two
    candidate = int_to_natural(base, 3)
    while _square_at_most(base, candidate, n):
        if _divides(base, candidate, n):
            return candidate
        candidate = add_naturals(base, candidate, two)
    return list(n)


def is_prime_natural(base: int, n: Digits) -> bool:
    if compare_naturals(n, int_to_natural(base, 2)) < 0:
        return False
    return compare_naturals(smallest_factor(base, n), n) == 0


def prime_factors_natural(base: int, n: Digits) -> List[Digits]:
    factors: List[Digits] = []
    one = [1]
    while compare_naturals(n, one) > 0:
        factor = smallest_factor(base, n)
        factors.append(factor)
        n, _ = divmod_naturals(base, n, factor)
    return factors


class _UnaryNumberTheoryOperation(BaseOperation):
    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 1)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)


class _BinaryNumberTheoryOperation(BaseOperation):
    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)


class GreatestCommonDivisor(_BinaryNumberTheoryOperation):
    """Euclid's algorithm; gcd(0, 0) is 0"""

    def __init__(self):
        super().__init__("gcd", "greatest_common_divisor")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands
        base = a.base
        return self.result(
            _number(base, gcd_naturals(base, _natural(a, self.name), _natural(b, self.name)))
        )


class LeastCommonMultiple(_BinaryNumberTheoryOperation):
    """|a * b| / gcd(a, b); zero if either operand is zero"""

    def __init__(self):
        super().__init__("lcm", "least_common_multiple")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands
        base = a.base
        x, y = _natural(a, self.name), _natural(b, self.name)
        if is_zero_natural(x) or is_zero_natural(y):
            return self.result(Number.zero(base))
        quotient, _ = divmod_naturals(base, x, gcd_naturals(base, x, y))
        return self.result(_number(base, multiply_naturals(base, quotient, y)))


class Divisors(_UnaryNumberTheoryOperation):
    """Positive divisors in ascending order"""

    def __init__(self):
        super().__init__("divisors", "divisors")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        n = _natural(number, self.name)
        if is_zero_natural(n):
            raise UnsupportedOperationError("Every number divides zero")
        base = number.base
        return self.result(
            tuple(_number(base, divisor) for divisor in divisors_natural(base, n))
        )


class CommonDivisors(_BinaryNumberTheoryOperation):
    """Positive common divisors in ascending order"""

    def __init__(self):
        super().__init__("common_divisors", "common_divisors")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands
        base = a.base
        divisor = gcd_naturals(base, _natural(a, self.name), _natural(b, self.name))
        if is_zero_natural(divisor):
            raise UnsupportedOperationError("Every number divides zero")
        return self.result(
            tuple(_number(base, digits) for digits in divisors_natural(base, divisor))
        )


class PrimeFactors(_UnaryNumberTheoryOperation):
    """Prime factorization in ascending order; 1 has no prime factors"""

    def __init__(self):
        super().__init__("prime_factors", "prime_factors")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        n = _natural(number, self.name)
        if is_zero_natural(n):
            raise UnsupportedOperationError("Zero has no prime factorization")
        base = number.base
        return self.result(
            tuple(_number(base, factor) for factor in prime_factors_natural(base, n))
        )


class CommonPrimeFactors(_BinaryNumberTheoryOperation):
    """Prime factors shared by both numbers, with multiplicity"""

    def __init__(self):
        super().__init__("common_prime_factors", "common_prime_factors")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands
        base = a.base
        x, y = _natural(a, self.name), _natural(b, self.name)
        if is_zero_natural(x) or is_zero_natural(y):
            raise UnsupportedOperationError("Zero has no prime factorization")

        remaining = prime_factors_natural(base, y)
        common: List[Digits] = []
        for factor in prime_factors_natural(base, x):
            if factor in remaining:
                remaining.remove(factor)
                common.append(factor)
        return self.result(tuple(_number(base, factor) for factor in common))


class IsPrime(_UnaryNumberTheoryOperation):
    """Trial division; numbers below 2 (and negative numbers) are not prime"""

    def __init__(self):
        super().__init__("is_prime", "is_prime")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_negative():
            return self.result(False)
        return self.result(is_prime_natural(number.base, _natural(number, self.name)))


class NextPrimeNumber(_UnaryNumberTheoryOperation):
    """
    The prime with the given ordinal, counting from 0.

    Primes found so far are kept per base in the cache manager's
    PRIME_CACHE_NAME cache, so later lookups of smaller ordinals are
    answered from the list.
    """

    def __init__(self):
        super().__init__("next_prime", "next_prime_number")
        self._lock = threading.Lock()

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (ordinal,) = operands
        if ordinal.is_negative():
            raise UnsupportedOperationError(
                "Prime ordinals are not negative", context={"ordinal": str(ordinal)}
            )
        _natural(ordinal, self.name)
        index = ordinal.to_native_int()
        base = ordinal.base

        cache_mgr = get_cache_manager()
        cache_mgr.ensure_cache(PRIME_CACHE_NAME, maxsize=PRIME_CACHE_MAXSIZE)

        with self._lock:
            primes: Tuple[Tuple[int, ...], ...] = (
                cache_mgr.get(PRIME_CACHE_NAME, base) or ()
            )
            if index >= len(primes):
                with PerformanceLogger(
                    logger, "Prime search", base=base, known=len(primes), ordinal=index
                ):
                    primes = self._extend(base, primes, index)
                cache_mgr.set(PRIME_CACHE_NAME, base, primes)

        return self.result(_number(base, list(primes[index])))

    def _extend(
        self, base: int, primes: Tuple[Tuple[int, ...], ...], index: int
    ) -> Tuple[Tuple[int, ...], ...]:
        found = list(primes)
        candidate = (
            increment_natural(base, list(found[-1])) if found else int_to_natural(base, 2)
        )
        while len(found) <= index:
            if is_prime_natural(base, candidate):
                found.append(tuple(candidate))
            candidate = increment_natural(base, candidate)
        return tuple(found)


class Factorial(_UnaryNumberTheoryOperation):
    """n! for non-negative integers; 0! is 1"""

    def __init__(self):
        super().__init__("!", "factorial")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_negative():
            raise UnsupportedOperationError(
                "Factorial of a negative number", context={"number": str(number)}
            )
        n = _natural(number, self.name)
        base = number.base

        product = [1]
        factor = [1]
        while compare_naturals(factor, n) < 0:
            factor = increment_natural(base, factor)
            product = multiply_naturals(base, product, factor)
        return self.result(_number(base, product))


class DigitSum(_UnaryNumberTheoryOperation):
    """Sum of all digit values (integer and fraction part), sign ignored"""

    def __init__(self):
        super().__init__("digit_sum", "digit_sum")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            raise UnsupportedOperationError("Infinity has no digits")
        base = number.base
        total: Digits = [0]
        for digit in number.integer_ordinals + number.fraction_ordinals:
            total = add_naturals(base, total, [digit])
        return self.result(_number(base, total))
