"""
component_7_multiplication.py

Multiplication strategies. All of them produce identical exact products:

- LongMultiplication: grade-school, one shifted partial product per digit
- MultiplicationByAddition: adds one operand as often as the other says
- RussianPeasantMultiplication: halving one operand, doubling the other

Shared rules: the product's sign is the XOR of the operand signs, a zero
operand gives zero, infinity times zero is undefined and infinity times
anything else is a signed infinity. Multiplying by a Fraction gives a
Fraction.
"""

from typing import List

from component_2_logging_config import get_logger
from component_3_number import Number, Sign
from component_5_fraction import Fraction, multiply_fractions, to_fraction
from component_6_arithmetic_core import (
    add_naturals,
    compare_naturals,
    decrement_natural,
    halve_natural,
    is_zero_natural,
    multiply_naturals,
    scaled_magnitude,
)
from infrastructure.interfaces import BaseOperation, Result, validate_numbers
from radix_exceptions import UndefinedOperationException

logger = get_logger(__name__)


class _MultiplicationStrategy(BaseOperation):
    """
    Handles signs, zeros, infinities and fractions; subclasses multiply
    two scaled natural magnitudes.
    """

    def __init__(self, name: str):
        super().__init__("*", name, 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity, allow_fraction=True)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands

        if isinstance(a, Fraction) or isinstance(b, Fraction):
            if a.is_infinity() or b.is_infinity():
                raise UndefinedOperationException(
                    "Fractions cannot be multiplied with infinity",
                    operation=self.name,
                )
            return self.result(multiply_fractions(to_fraction(a), to_fraction(b)))

        sign = a.sign.multiply(b.sign)

        if a.is_infinity() or b.is_infinity():
            if a.is_zero() or b.is_zero():
                raise UndefinedOperationException(
                    "Infinity times zero is undefined", operation=self.name
                )
            return self.result(Number.infinity(a.base, sign))

        if a.is_zero() or b.is_zero():
            return self.result(Number.zero(a.base))

        digits_a, scale_a = scaled_magnitude(a)
        digits_b, scale_b = scaled_magnitude(b)
        product = self.multiply_naturals(a.base, digits_a, digits_b)

        return self.result(
            Number.from_scaled(
                a.base, sign is Sign.NEGATIVE, product, scale_a + scale_b
            )
        )

    def multiply_naturals(self, base: int, a: List[int], b: List[int]) -> List[int]:
        raise NotImplementedError


class LongMultiplication(_MultiplicationStrategy):
    """Grade-school multiplication with carry"""

    def __init__(self):
        super().__init__("long_multiplication")

    def multiply_naturals(self, base: int, a: List[int], b: List[int]) -> List[int]:
        return multiply_naturals(base, a, b)


class MultiplicationByAddition(_MultiplicationStrategy):
    """
    Repeated addition.

    The smaller magnitude counts down to zero while the larger one is
    added to the running total. Cost grows with the operand value, so
    this strategy is meant for cross-checking and small operands.
    """

    def __init__(self):
        super().__init__("multiplication_by_addition")

    def multiply_naturals(self, base: int, a: List[int], b: List[int]) -> List[int]:
        if compare_naturals(a, b) < 0:
            counter, addend = a, b
        else:
            counter, addend = b, a

        total: List[int] = [0]
        while not is_zero_natural(counter):
            total = add_naturals(base, total, addend)
            counter = decrement_natural(base, counter)
        return total


class RussianPeasantMultiplication(_MultiplicationStrategy):
    """
    Peasant multiplication: halve the first operand, double the second and
    add the doubled value whenever the halved one was odd.
    """

    def __init__(self):
        super().__init__("russian_peasant_multiplication")

    def multiply_naturals(self, base: int, a: List[int], b: List[int]) -> List[int]:
        total: List[int] = [0]
        while not is_zero_natural(a):
            a, odd = halve_natural(base, a)
            if odd:
                total = add_naturals(base, total, b)
            b = add_naturals(base, b, b)
        return total
