"""
infrastructure/interfaces.py

Base interfaces for all operation strategies of the arithmetic engine.

Every algorithm (long division, Russian division, repeated squaring, ...)
is a BaseOperation subclass. The operation registry (component_12) keeps one
instance per OperationIdentifier, so implementations must not hold
per-call state.

Interface Contract:
    - validate() checks operand types and bases without calculating
    - execute() validates, calculates and wraps the value in a Result
      (or ResultWithRemainder for integer division)
    - operands are never modified; results are always new objects

Usage:
    from infrastructure.interfaces import BaseOperation, Result

    class Doubling(BaseOperation):
        def __init__(self):
            super().__init__("doubling", "doubling", 1)

        def validate(self, *operands):
            return validate_numbers(operands, self.arity)

        def execute(self, *operands, details=None):
            self.check_operands(*operands)
            ...
            return self.result(doubled)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from radix_exceptions import BaseMismatchError


@dataclass(frozen=True)
class Result:
    """
    Immutable result of an operation.

    Attributes:
        result: The calculated value (Number, Fraction, bool or tuple)
        metadata: Operation name and parameters that produced the value
    """

    result: Any
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ResultWithRemainder:
    """
    Immutable result of an integer division.

    Attributes:
        result: The truncated quotient
        remainder: The remainder (same sign as the dividend)
        metadata: Operation name and parameters that produced the value
    """

    result: Any
    remainder: Any
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


class BaseOperation(ABC):
    """Abstract base class for arithmetic operation strategies"""

    def __init__(self, symbol: str, name: str, arity: int):
        self.symbol = symbol
        self.name = name
        self.arity = arity

    @abstractmethod
    def execute(self, *operands, details=None):
        """Execute the operation and return a Result"""

    @abstractmethod
    def validate(self, *operands) -> Tuple[bool, Optional[str]]:
        """Validate operands (count, types, bases)"""

    def check_operands(self, *operands) -> None:
        """
        Raises when validate() rejects the operands.

        Raises:
            BaseMismatchError: If the operands use different bases
            TypeError: For wrong operand count or types
        """
        is_valid, error = self.validate(*operands)
        if is_valid:
            return

        bases = {getattr(operand, "base", None) for operand in operands}
        if len(operands) == self.arity and None not in bases and len(bases) > 1:
            raise BaseMismatchError(f"{self.name}: {error}", bases=sorted(bases))
        raise TypeError(f"{self.name}: {error}")

    def result(self, value: Any, **metadata: Any) -> Result:
        return Result(value, {"operation": self.name, **metadata})

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


def validate_numbers(
    operands: Tuple[Any, ...], arity: int, allow_fraction: bool = False
) -> Tuple[bool, Optional[str]]:
    """
    Shared validation: operand count, Number (or Fraction) types, one base.
    """
    # Import here to avoid circular dependency
    from component_3_number import Number

    if len(operands) != arity:
        return False, f"expects {arity} operand(s), {len(operands)} given"

    accepted: Tuple[type, ...] = (Number,)
    if allow_fraction:
        from component_5_fraction import Fraction

        accepted = (Number, Fraction)

    for i, operand in enumerate(operands):
        if not isinstance(operand, accepted):
            return False, f"operand {i + 1} is not a number: {type(operand).__name__}"

    bases = {operand.base for operand in operands}
    if len(bases) > 1:
        return False, f"operands use different bases {sorted(bases)}"

    return True, None
