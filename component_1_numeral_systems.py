"""
component_1_numeral_systems.py

Digits and positional numeral systems.

Every supported base has exactly one PositionalNumeralSystem which maps
digit ordinals to symbols and back. The symbol assignment (0-9, A-Z, a-z)
is shared by parsing, printing and every carry/borrow in the arithmetic
components.
"""

import threading
from dataclasses import dataclass
from typing import Dict, Tuple

from common.constants import BASE_MAX, BASE_MIN, DIGIT_SYMBOLS
from radix_exceptions import BaseRangeError, DigitRangeError


def check_base(base: int) -> int:
    """
    Validates a base.

    Raises:
        BaseRangeError: If base is not an int in [BASE_MIN, BASE_MAX]
    """
    if isinstance(base, bool) or not isinstance(base, int):
        raise BaseRangeError(f"Base must be an integer, got {type(base).__name__}", base=base)
    if not BASE_MIN <= base <= BASE_MAX:
        raise BaseRangeError(
            f"Base must be within [{BASE_MIN}, {BASE_MAX}]", base=base
        )
    return base


@dataclass(frozen=True)
class Digit:
    """A single digit value in [0, base-1] of a given base."""

    base: int
    ordinal: int

    def __post_init__(self):
        check_base(self.base)
        if not 0 <= self.ordinal < self.base:
            raise DigitRangeError(
                f"Ordinal {self.ordinal} is not a digit of base {self.base}",
                base=self.base,
                digit=self.ordinal,
            )

    @property
    def symbol(self) -> str:
        return DIGIT_SYMBOLS[self.ordinal]

    def is_zero(self) -> bool:
        return self.ordinal == 0

    def __str__(self) -> str:
        return self.symbol


class PositionalNumeralSystem:
    """
    Lookup tables for one base.

    Instances are shared; use get_numeral_system() instead of the
    constructor.
    """

    def __init__(self, base: int):
        self.base = check_base(base)
        self.symbols: str = DIGIT_SYMBOLS[:base]
        self._digits: Tuple[Digit, ...] = tuple(
            Digit(base, ordinal) for ordinal in range(base)
        )
        self._ordinals: Dict[str, int] = {
            symbol: ordinal for ordinal, symbol in enumerate(self.symbols)
        }

    def digit(self, ordinal: int) -> Digit:
        if isinstance(ordinal, bool) or not isinstance(ordinal, int):
            raise DigitRangeError(
                "Digit ordinal must be an integer", base=self.base, digit=ordinal
            )
        if not 0 <= ordinal < self.base:
            raise DigitRangeError(
                f"Ordinal {ordinal} is not a digit of base {self.base}",
                base=self.base,
                digit=ordinal,
            )
        return self._digits[ordinal]

    def ordinal(self, symbol: str) -> int:
        try:
            return self._ordinals[symbol]
        except KeyError:
            raise DigitRangeError(
                f"Symbol {symbol!r} is not a digit of base {self.base}",
                base=self.base,
                digit=symbol,
            ) from None

    def is_valid_symbol(self, symbol: str) -> bool:
        return symbol in self._ordinals

    def __repr__(self) -> str:
        return f"PositionalNumeralSystem(base={self.base})"


_systems: Dict[int, PositionalNumeralSystem] = {}
_systems_lock = threading.Lock()


def get_numeral_system(base: int) -> PositionalNumeralSystem:
    """Returns the shared numeral system of a base (created on first use)."""
    system = _systems.get(base)
    if system is None:
        check_base(base)
        with _systems_lock:
            system = _systems.get(base)
            if system is None:
                system = PositionalNumeralSystem(base)
                _systems[base] = system
    return system


def ordinal_to_digit(base: int, ordinal: int) -> Digit:
    return get_numeral_system(base).digit(ordinal)


def digit_to_ordinal(base: int, symbol: str) -> int:
    return get_numeral_system(base).ordinal(symbol)
