"""
component_13_processing_details.py

Configuration value for approximated operations.

ProcessingDetails select the algorithm variant, the precision (fraction
digits) and the iteration depth of an operation. Every field is optional;
None means "use the documented default":

    algorithm        first allowed algorithm of the operation kind
    precision        DEFAULT_DECIMAL_PLACES (10)
    iteration_depth  DEFAULT_ITERATION_DEPTH (32)

Usage:
    details = ProcessingDetails(OperationIdentifier.RUSSIAN_DIVISION, precision=20)
    quotient = radix_math.divide(a, b, details)
"""

from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

from common.constants import DEFAULT_DECIMAL_PLACES, DEFAULT_ITERATION_DEPTH
from component_12_operation_registry import OperationIdentifier
from radix_exceptions import InvalidProcessingDetailsError, RadixException


def _to_count(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    # Import here to avoid circular dependency
    from component_3_number import Number

    if isinstance(value, Number):
        try:
            return value.to_native_int()
        except RadixException as e:
            raise InvalidProcessingDetailsError(
                f"{field_name} must be an integer",
                context={field_name: str(value)},
                original_exception=e,
            ) from e
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidProcessingDetailsError(
            f"{field_name} must be an int or an integer Number",
            context={field_name: repr(value)},
        )
    return value


@dataclass(frozen=True)
class ProcessingDetails:
    """
    Immutable processing configuration.

    Attributes:
        algorithm: OperationIdentifier of the strategy to use (optional)
        precision: Number of fraction digits to keep, >= 0 (optional)
        iteration_depth: Maximum iterations of convergent algorithms, > 0 (optional)
    """

    algorithm: Optional[OperationIdentifier] = None
    precision: Optional[Any] = None
    iteration_depth: Optional[Any] = None

    def __post_init__(self):
        """Validate and normalize the configuration"""
        if self.algorithm is not None and not isinstance(
            self.algorithm, OperationIdentifier
        ):
            raise InvalidProcessingDetailsError(
                "algorithm must be an OperationIdentifier",
                context={"algorithm": repr(self.algorithm)},
            )

        precision = _to_count(self.precision, "precision")
        if precision is not None and precision < 0:
            raise InvalidProcessingDetailsError(
                "precision must be >= 0", context={"precision": precision}
            )

        iteration_depth = _to_count(self.iteration_depth, "iteration_depth")
        if iteration_depth is not None and iteration_depth < 1:
            raise InvalidProcessingDetailsError(
                "iteration_depth must be >= 1",
                context={"iteration_depth": iteration_depth},
            )

        object.__setattr__(self, "precision", precision)
        object.__setattr__(self, "iteration_depth", iteration_depth)

    def with_algorithm(self, algorithm: Optional[OperationIdentifier]) -> "ProcessingDetails":
        return replace(self, algorithm=algorithm)

    def with_precision(self, precision: Any) -> "ProcessingDetails":
        return replace(self, precision=precision)

    def with_iteration_depth(self, iteration_depth: Any) -> "ProcessingDetails":
        return replace(self, iteration_depth=iteration_depth)

    def resolve_algorithm(
        self, allowed: Sequence[OperationIdentifier]
    ) -> OperationIdentifier:
        """
        Returns the configured algorithm, or the first allowed one.

        Raises:
            InvalidProcessingDetailsError: If the configured algorithm is not allowed
        """
        if self.algorithm is None:
            return allowed[0]
        if self.algorithm not in allowed:
            raise InvalidProcessingDetailsError(
                f"Algorithm {self.algorithm.name} is not allowed here",
                context={"allowed": [identifier.name for identifier in allowed]},
            )
        return self.algorithm

    def resolve_precision(self, default: int = DEFAULT_DECIMAL_PLACES) -> int:
        return default if self.precision is None else self.precision

    def resolve_iteration_depth(self, default: int = DEFAULT_ITERATION_DEPTH) -> int:
        return default if self.iteration_depth is None else self.iteration_depth


DEFAULT_PROCESSING_DETAILS = ProcessingDetails()


def processing_details(details: Optional[ProcessingDetails]) -> ProcessingDetails:
    """Returns the given details or the defaults."""
    if details is None:
        return DEFAULT_PROCESSING_DETAILS
    if not isinstance(details, ProcessingDetails):
        raise InvalidProcessingDetailsError(
            "details must be ProcessingDetails", context={"details": repr(details)}
        )
    return details
