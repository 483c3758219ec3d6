"""
component_6_arithmetic_core.py

Exact arithmetic on positional digit sequences.

Two layers:
1. Digit-sequence primitives on natural numbers, represented as lists of
   ordinals (most significant first, no leading zeros, zero is [0]). All
   carries and borrows happen digit by digit in the operand's base.
2. Operation strategies on Numbers: addition, subtraction, increment,
   decrement, doubling, halving, radix point shifting, negation, absolute
   value, complement and integer/fraction part removal.

Signed numbers are handled as scaled magnitudes: both operands are padded
to a common number of fraction digits, the magnitudes are combined, and the
result is rebuilt with Number.from_scaled().
"""

from typing import Any, List, Sequence, Tuple

from common.constants import DEFAULT_DECIMAL_PLACES
from component_2_logging_config import get_logger
from component_3_number import Number, Sign
from infrastructure.interfaces import BaseOperation, Result, validate_numbers
from radix_exceptions import (
    UndefinedOperationException,
    UnsupportedOperationError,
)

logger = get_logger(__name__)

Digits = List[int]


# ============================================================================
# Digit-sequence primitives (natural numbers)
# ============================================================================


def trim(digits: Sequence[int]) -> Digits:
    """Removes leading zeros; an empty or all-zero sequence becomes [0]."""
    start = 0
    while start < len(digits) - 1 and digits[start] == 0:
        start += 1
    return list(digits[start:]) or [0]


def is_zero_natural(digits: Sequence[int]) -> bool:
    return all(digit == 0 for digit in digits)


def compare_naturals(a: Sequence[int], b: Sequence[int]) -> int:
    a, b = trim(a), trim(b)
    if len(a) != len(b):
        return -1 if len(a) < len(b) else 1
    for x, y in zip(a, b):
        if x != y:
            return -1 if x < y else 1
    return 0


def _pad(a: Sequence[int], b: Sequence[int]) -> Tuple[Digits, Digits]:
    width = max(len(a), len(b))
    return [0] * (width - len(a)) + list(a), [0] * (width - len(b)) + list(b)


def add_naturals(base: int, a: Sequence[int], b: Sequence[int]) -> Digits:
    """Schoolbook addition with carry, least significant digit first."""
    a, b = _pad(a, b)
    result = [0] * len(a)
    carry = 0
    for i in range(len(a) - 1, -1, -1):
        total = a[i] + b[i] + carry
        if total >= base:
            total -= base
            carry = 1
        else:
            carry = 0
        result[i] = total
    if carry:
        result.insert(0, carry)
    return trim(result)


def subtract_naturals(base: int, a: Sequence[int], b: Sequence[int]) -> Digits:
    """Schoolbook subtraction with borrow; requires a >= b."""
    if compare_naturals(a, b) < 0:
        raise ValueError("Minuend must not be smaller than the subtrahend")
    a, b = _pad(a, b)
    result = [0] * len(a)
    borrow = 0
    for i in range(len(a) - 1, -1, -1):
        difference = a[i] - b[i] - borrow
        if difference < 0:
            difference += base
            borrow = 1
        else:
            borrow = 0
        result[i] = difference
    return trim(result)


def increment_natural(base: int, a: Sequence[int]) -> Digits:
    return add_naturals(base, a, [1])


def decrement_natural(base: int, a: Sequence[int]) -> Digits:
    return subtract_naturals(base, a, [1])


def multiply_natural_by_digit(base: int, a: Sequence[int], digit: int) -> Digits:
    if digit == 0:
        return [0]
    result = [0] * len(a)
    carry = 0
    for i in range(len(a) - 1, -1, -1):
        carry, result[i] = divmod(a[i] * digit + carry, base)
    while carry:
        carry, ordinal = divmod(carry, base)
        result.insert(0, ordinal)
    return trim(result)


def multiply_naturals(base: int, a: Sequence[int], b: Sequence[int]) -> Digits:
    """Long multiplication: one shifted partial product per digit of b."""
    total: Digits = [0]
    for position, digit in enumerate(reversed(b)):
        if digit == 0:
            continue
        partial = multiply_natural_by_digit(base, a, digit)
        total = add_naturals(base, total, partial + [0] * position)
    return total


def halve_natural(base: int, a: Sequence[int]) -> Tuple[Digits, int]:
    """Returns (a // 2, a % 2), digit by digit from the most significant."""
    result = []
    carry = 0
    for digit in a:
        total = carry * base + digit
        result.append(total // 2)
        carry = total % 2
    return trim(result), carry


def divmod_naturals(
    base: int, a: Sequence[int], b: Sequence[int]
) -> Tuple[Digits, Digits]:
    """
    Integer long division of naturals.

    Raises:
        UndefinedOperationException: If b is zero
    """
    if is_zero_natural(b):
        raise UndefinedOperationException(
            "Division by zero", operation="divmod_naturals"
        )
    b = trim(b)
    quotient = []
    remainder: Digits = [0]
    for digit in a:
        remainder = trim(remainder + [digit])
        count = 0
        while compare_naturals(remainder, b) >= 0:
            remainder = subtract_naturals(base, remainder, b)
            count += 1
        quotient.append(count)
    return trim(quotient), remainder


def gcd_naturals(base: int, a: Sequence[int], b: Sequence[int]) -> Digits:
    """Euclid's algorithm; gcd(0, 0) is 0."""
    a, b = trim(a), trim(b)
    while not is_zero_natural(b):
        _, remainder = divmod_naturals(base, a, b)
        a, b = b, remainder
    return a


def int_to_natural(base: int, value: int) -> Digits:
    """Digits of a small host int (bases, counts, ordinals)."""
    if value == 0:
        return [0]
    digits = []
    while value:
        value, ordinal = divmod(value, base)
        digits.append(ordinal)
    digits.reverse()
    return digits


def natural_to_int(base: int, digits: Sequence[int]) -> int:
    value = 0
    for digit in digits:
        value = value * base + digit
    return value


# ============================================================================
# Scaled magnitudes of Numbers
# ============================================================================


def align(a: Number, b: Number) -> Tuple[Digits, Digits, int]:
    """Scaled digit sequences of both numbers with a common scale."""
    scale = max(len(a.fraction_ordinals), len(b.fraction_ordinals))
    return a.scaled(scale), b.scaled(scale), scale


def scaled_magnitude(number: Number) -> Tuple[Digits, int]:
    scale = len(number.fraction_ordinals)
    return trim(number.scaled(scale)), scale


def as_integers(a: Number, b: Number) -> Tuple[Digits, Digits]:
    """Both magnitudes multiplied by the same power of the base so that
    neither has fraction digits (the ratio is unchanged)."""
    digits_a, digits_b, _ = align(a, b)
    return trim(digits_a), trim(digits_b)


def places_to_int(places: Any) -> int:
    """Accepts a host int or an integer Number for digit counts."""
    if isinstance(places, Number):
        return places.to_native_int()
    if isinstance(places, bool) or not isinstance(places, int):
        raise TypeError(f"Expected an int or Number, got {type(places).__name__}")
    return places


def add_numbers(a: Number, b: Number) -> Number:
    """Signed addition of two finite numbers of the same base."""
    digits_a, digits_b, scale = align(a, b)
    base = a.base

    if a.sign is b.sign:
        return Number.from_scaled(
            base, a.is_negative(), add_naturals(base, digits_a, digits_b), scale
        )

    order = compare_naturals(digits_a, digits_b)
    if order == 0:
        return Number.zero(base)
    if order > 0:
        return Number.from_scaled(
            base, a.is_negative(), subtract_naturals(base, digits_a, digits_b), scale
        )
    return Number.from_scaled(
        base, b.is_negative(), subtract_naturals(base, digits_b, digits_a), scale
    )


def negated(number: Number) -> Number:
    return Number(
        number.base,
        number.sign.negate(),
        number.integer_ordinals,
        number.fraction_ordinals,
        number.is_infinity(),
    )


def with_sign(number: Number, sign: Sign) -> Number:
    return Number(
        number.base,
        sign,
        number.integer_ordinals,
        number.fraction_ordinals,
        number.is_infinity(),
    )


# ============================================================================
# Operation strategies
# ============================================================================


class _UnaryNumberOperation(BaseOperation):
    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 1)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)


class _BinaryNumberOperation(BaseOperation):
    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 2)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)


class Addition(_BinaryNumberOperation):
    """Addition of two numbers"""

    def __init__(self):
        super().__init__("+", "addition")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands

        if a.is_infinity() and b.is_infinity():
            if a.sign is not b.sign:
                raise UndefinedOperationException(
                    "Sum of infinities with opposite signs is undefined",
                    operation=self.name,
                )
            return self.result(a.copy())
        if a.is_infinity():
            return self.result(a.copy())
        if b.is_infinity():
            return self.result(b.copy())

        return self.result(add_numbers(a, b))


class Subtraction(_BinaryNumberOperation):
    """Subtraction (addition of the negated subtrahend)"""

    def __init__(self):
        super().__init__("-", "subtraction")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        a, b = operands

        if a.is_infinity() and b.is_infinity():
            if a.sign is b.sign:
                raise UndefinedOperationException(
                    "Difference of equal infinities is undefined",
                    operation=self.name,
                )
            return self.result(a.copy())
        if a.is_infinity():
            return self.result(a.copy())
        if b.is_infinity():
            return self.result(negated(b))

        return self.result(add_numbers(a, negated(b)))


class Increment(_UnaryNumberOperation):
    """Adds one"""

    def __init__(self):
        super().__init__("++", "increment")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            return self.result(number.copy())
        return self.result(add_numbers(number, Number.one(number.base)))


class Decrement(_UnaryNumberOperation):
    """Subtracts one"""

    def __init__(self):
        super().__init__("--", "decrement")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            return self.result(number.copy())
        return self.result(
            add_numbers(number, Number(number.base, Sign.NEGATIVE, (1,)))
        )


class Doubling(_UnaryNumberOperation):
    """Adds a number to itself"""

    def __init__(self):
        super().__init__("*2", "doubling")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            return self.result(number.copy())
        return self.result(add_numbers(number, number))


class Halving(_UnaryNumberOperation):
    """
    Halves a number digit by digit.

    An odd remainder after the last digit becomes one more fraction digit
    (half of the base). In odd bases the expansion does not terminate and
    stops after ``precision`` additional digits (truncated).
    """

    def __init__(self):
        super().__init__("/2", "halving")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            return self.result(number.copy())

        base = number.base
        precision = (
            details.resolve_precision() if details is not None else DEFAULT_DECIMAL_PLACES
        )
        scale = len(number.fraction_ordinals)

        result = []
        carry = 0
        for digit in number.scaled(scale):
            total = carry * base + digit
            result.append(total // 2)
            carry = total % 2

        extra_digits = 0
        while carry and extra_digits < max(precision, 1):
            total = carry * base
            result.append(total // 2)
            carry = total % 2
            scale += 1
            extra_digits += 1

        if carry:
            logger.debug(
                "Halving truncated (odd base)",
                extra={"base": base, "precision": precision},
            )

        return self.result(
            Number.from_scaled(base, number.is_negative(), result, scale)
        )


class _RadixPointShift(BaseOperation):
    direction = 1

    def __init__(self, symbol: str, name: str):
        super().__init__(symbol, name, 2)

    def validate(self, *operands):
        if len(operands) != self.arity:
            return False, f"expects {self.arity} operands, {len(operands)} given"
        return validate_numbers(operands[:1], 1)

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        number, places = operands
        return self.result(shift(number, self.direction * places_to_int(places)))


class ShiftLeft(_RadixPointShift):
    """Moves the radix point to the left (division by a power of the base)"""

    direction = -1

    def __init__(self):
        super().__init__("<<", "shift_left")


class ShiftRight(_RadixPointShift):
    """Moves the radix point to the right (multiplication by a power of the base)"""

    def __init__(self):
        super().__init__(">>", "shift_right")


def shift(number: Number, places: int) -> Number:
    """Moves the radix point; positive places move it to the right."""
    if number.is_infinity():
        return number.copy()

    digits = list(number.integer_ordinals) + list(number.fraction_ordinals)
    scale = len(number.fraction_ordinals)

    if places <= scale:
        return Number.from_scaled(
            number.base, number.is_negative(), digits, scale - places
        )
    return Number.from_scaled(
        number.base, number.is_negative(), digits + [0] * (places - scale), 0
    )


class Negation(_UnaryNumberOperation):
    """Flips the sign"""

    def __init__(self):
        super().__init__("neg", "negation")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        return self.result(negated(operands[0]))


class AbsoluteValue(_UnaryNumberOperation):
    """Drops the sign"""

    def __init__(self):
        super().__init__("abs", "absolute_value")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        return self.result(with_sign(operands[0], Sign.POSITIVE))


class Complement(_UnaryNumberOperation):
    """
    Digit-wise complement (base - 1 - digit) over integer and fraction digits.

    The result is positive and normalized, e.g. base 10 "9" -> "0",
    base 9 "0.123456781" -> "8.765432107".
    """

    def __init__(self):
        super().__init__("~", "complement")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            raise UndefinedOperationException(
                "Complement of infinity is undefined", operation=self.name
            )

        highest = number.base - 1
        return self.result(
            Number(
                number.base,
                Sign.POSITIVE,
                [highest - digit for digit in number.integer_ordinals],
                [highest - digit for digit in number.fraction_ordinals],
            )
        )


class RemoveFractionPart(_UnaryNumberOperation):
    """Truncates toward zero"""

    def __init__(self):
        super().__init__("trunc", "remove_fraction_part")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            return self.result(number.copy())
        return self.result(
            Number(number.base, number.sign, number.integer_ordinals)
        )


class RemoveIntegerPart(_UnaryNumberOperation):
    """Keeps only the (signed) fraction part"""

    def __init__(self):
        super().__init__("frac", "remove_integer_part")

    def execute(self, *operands, details=None) -> Result:
        self.check_operands(*operands)
        (number,) = operands
        if number.is_infinity():
            raise UnsupportedOperationError(
                "Infinity has no fraction part", context={"number": str(number)}
            )
        return self.result(
            Number(number.base, number.sign, (0,), number.fraction_ordinals)
        )
