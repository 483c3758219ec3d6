"""
component_4_notations.py

Parsing and printing of numbers in standard and scientific notation.

Standard notation:   [+-]digits[.digits]         e.g. "-12.5", "+7", "0,25"
Scientific notation: [+-]mantissa E [+-]exponent e.g. "2.112E1", "1.1E-2"

The exponent is written in the number's own base. From base 15 on the
exponent marker "E" is itself a digit (ordinal 14), so the exponent sign is
mandatory there: "1E+1" is scientific notation, "1E1" is a plain number.
"""

import re
from dataclasses import dataclass
from typing import List, Pattern, Sequence, Tuple

from common.constants import (
    DECIMAL_POINT,
    EXPLICIT_EXPONENT_SIGN_BASE,
    EXPONENT_MARKER,
    INFINITY_REPRESENTATION,
)
from component_1_numeral_systems import get_numeral_system
from radix_exceptions import DigitRangeError, NumberParsingError

_SYMBOL = "[0-9A-Za-z]"

STANDARD_NOTATION: Pattern = re.compile(
    rf"^(?P<sign>[+-]?)(?P<integer>{_SYMBOL}+)(?:[.,](?P<fraction>{_SYMBOL}+))?$"
)

# Exponent sign optional (marker may also be lower case)
SCIENTIFIC_NOTATION: Pattern = re.compile(
    rf"^(?P<sign>[+-]?)(?P<integer>{_SYMBOL}+?)(?:[.,](?P<fraction>{_SYMBOL}+))?"
    rf"[Ee](?P<exponent_sign>[+-]?)(?P<exponent>{_SYMBOL}+)$"
)

# Exponent sign mandatory, for bases whose digits include the marker
SCIENTIFIC_NOTATION_SIGNED: Pattern = re.compile(
    rf"^(?P<sign>[+-]?)(?P<integer>{_SYMBOL}+?)(?:[.,](?P<fraction>{_SYMBOL}+))?"
    rf"{EXPONENT_MARKER}(?P<exponent_sign>[+-])(?P<exponent>{_SYMBOL}+)$"
)


@dataclass(frozen=True)
class ParsedNumber:
    """Raw digit ordinals of a parsed number (not yet normalized)."""

    negative: bool
    integer: Tuple[int, ...]
    fraction: Tuple[int, ...]


def requires_explicit_exponent_sign(base: int) -> bool:
    return base >= EXPLICIT_EXPONENT_SIGN_BASE


def _to_ordinals(base: int, symbols: str, text: str) -> Tuple[int, ...]:
    system = get_numeral_system(base)
    try:
        return tuple(system.ordinal(symbol) for symbol in symbols)
    except DigitRangeError as e:
        raise NumberParsingError(
            f"Invalid digit in number string for base {base}",
            text=text,
            original_exception=e,
        ) from e


def _ordinals_to_int(base: int, ordinals: Sequence[int]) -> int:
    value = 0
    for ordinal in ordinals:
        value = value * base + ordinal
    return value


def _int_to_ordinals(base: int, value: int) -> List[int]:
    if value == 0:
        return [0]
    ordinals: List[int] = []
    while value:
        value, ordinal = divmod(value, base)
        ordinals.append(ordinal)
    ordinals.reverse()
    return ordinals


def _move_radix_point(
    integer: Tuple[int, ...], fraction: Tuple[int, ...], exponent: int
) -> Tuple[Tuple[int, ...], Tuple[int, ...]]:
    digits = integer + fraction
    point = len(integer) + exponent

    if point <= 0:
        return (0,), (0,) * (-point) + digits
    if point >= len(digits):
        return digits + (0,) * (point - len(digits)), ()
    return digits[:point], digits[point:]


def parse_notation(text: str, base: int) -> ParsedNumber:
    """
    Parses a number string in standard or scientific notation.

    Args:
        text: The number string
        base: Base of the digits (and of the exponent)

    Returns:
        ParsedNumber with raw ordinals

    Raises:
        NumberParsingError: If the string is not a valid number of this base
    """
    if not isinstance(text, str):
        raise NumberParsingError(
            f"Expected a string, got {type(text).__name__}", text=repr(text)
        )

    stripped = text.strip()
    scientific = (
        SCIENTIFIC_NOTATION_SIGNED
        if requires_explicit_exponent_sign(base)
        else SCIENTIFIC_NOTATION
    )

    match = scientific.match(stripped)
    if match:
        integer = _to_ordinals(base, match.group("integer"), text)
        fraction = _to_ordinals(base, match.group("fraction") or "", text)
        exponent = _ordinals_to_int(
            base, _to_ordinals(base, match.group("exponent"), text)
        )
        if match.group("exponent_sign") == "-":
            exponent = -exponent
        integer, fraction = _move_radix_point(integer, fraction, exponent)
        return ParsedNumber(match.group("sign") == "-", integer, fraction)

    match = STANDARD_NOTATION.match(stripped)
    if match:
        integer = _to_ordinals(base, match.group("integer"), text)
        fraction = _to_ordinals(base, match.group("fraction") or "", text)
        return ParsedNumber(match.group("sign") == "-", integer, fraction)

    raise NumberParsingError(
        f"Not a number in standard or scientific notation (base {base})", text=text
    )


def _symbols(base: int, ordinals: Sequence[int]) -> str:
    symbols = get_numeral_system(base).symbols
    return "".join(symbols[ordinal] for ordinal in ordinals)


def to_standard_notation(number) -> str:
    """Prints a number as [-]digits[.digits]."""
    if number.is_infinity():
        text = INFINITY_REPRESENTATION
    else:
        text = _symbols(number.base, number.integer_ordinals)
        if number.fraction_ordinals:
            text += DECIMAL_POINT + _symbols(number.base, number.fraction_ordinals)

    if number.is_negative():
        text = "-" + text
    return text


def to_scientific_notation(number) -> str:
    """
    Prints a number as [-]d[.ddd]E[+-]exponent.

    Zero prints as "0", infinity as in standard notation.
    """
    if number.is_infinity() or number.is_zero():
        return to_standard_notation(number)

    integer = number.integer_ordinals
    fraction = number.fraction_ordinals

    if integer != (0,):
        exponent = len(integer) - 1
        digits = integer + fraction
    else:
        leading_zeros = 0
        while fraction[leading_zeros] == 0:
            leading_zeros += 1
        exponent = -(leading_zeros + 1)
        digits = fraction[leading_zeros:]

    rest = list(digits[1:])
    while rest and rest[-1] == 0:
        rest.pop()

    base = number.base
    text = _symbols(base, digits[:1])
    if rest:
        text += DECIMAL_POINT + _symbols(base, rest)

    text += EXPONENT_MARKER
    if exponent < 0:
        text += "-"
    elif requires_explicit_exponent_sign(base):
        text += "+"
    text += _symbols(base, _int_to_ordinals(base, abs(exponent)))

    if number.is_negative():
        text = "-" + text
    return text
