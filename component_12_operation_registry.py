"""
component_12_operation_registry.py

Operation identifiers and the process-wide strategy registry.

OperationIdentifier is the closed set of algorithm variants. The registry
maps each identifier to one shared strategy instance, created on first
lookup. Strategy modules are imported lazily, so looking up a division
strategy does not import the exponentiation engine.

Thread Safety:
    Lookups are lock-free once a strategy exists. Creation uses
    double-checked locking on an RLock so that concurrent first access
    never constructs a strategy twice or exposes a partially built one.

Usage:
    from component_12_operation_registry import OperationIdentifier, get_operation_registry

    strategy = get_operation_registry().get(OperationIdentifier.LONG_DIVISION)
    quotient = strategy.execute(a, b, details=details).result
"""

import importlib
import threading
from enum import Enum
from typing import Dict, List, Optional, Tuple

from component_2_logging_config import get_logger
from infrastructure.interfaces import BaseOperation
from radix_exceptions import UnknownOperationError

logger = get_logger(__name__)


class OperationIdentifier(Enum):
    """One identifier per strategy implementation"""

    # Exact core
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    INCREMENT = "increment"
    DECREMENT = "decrement"
    DOUBLING = "doubling"
    HALVING = "halving"
    SHIFT_LEFT = "shift_left"
    SHIFT_RIGHT = "shift_right"
    NEGATION = "negation"
    ABSOLUTE_VALUE = "absolute_value"
    COMPLEMENT = "complement"
    REMOVE_FRACTION_PART = "remove_fraction_part"
    REMOVE_INTEGER_PART = "remove_integer_part"

    # Multiplication
    LONG_MULTIPLICATION = "long_multiplication"
    MULTIPLICATION_BY_ADDITION = "multiplication_by_addition"
    RUSSIAN_PEASANT_MULTIPLICATION = "russian_peasant_multiplication"

    # Division
    LONG_DIVISION = "long_division"
    DIVISION_BY_SUBTRACTION = "division_by_subtraction"
    RUSSIAN_DIVISION = "russian_division"
    DIVISION_WITH_REMAINDER = "division_with_remainder"
    DIVISO = "diviso"
    MODULO = "modulo"
    EXACT_DIVISION = "exact_division"

    # Exponentiation and roots
    EXPONENTIATION_BY_SQUARING = "exponentiation_by_squaring"
    CONCURRENT_EXPONENTIATION = "concurrent_exponentiation"
    FRACTION_EXPONENTIATION = "fraction_exponentiation"
    NTH_ROOT = "nth_root"
    SQUARE_ROOT = "square_root"

    # Rounding and rebasing
    ROUND_TO_EVEN = "round_to_even"
    ROUND_TO_ODD = "round_to_odd"
    ROUND_UP = "round_up"
    ROUND_DOWN = "round_down"
    REBASE = "rebase"

    # Number theory
    GREATEST_COMMON_DIVISOR = "greatest_common_divisor"
    LEAST_COMMON_MULTIPLE = "least_common_multiple"
    DIVISORS = "divisors"
    COMMON_DIVISORS = "common_divisors"
    PRIME_FACTORS = "prime_factors"
    COMMON_PRIME_FACTORS = "common_prime_factors"
    IS_PRIME = "is_prime"
    NEXT_PRIME_NUMBER = "next_prime_number"
    FACTORIAL = "factorial"
    DIGIT_SUM = "digit_sum"

    # Approximations and random numbers
    ARCHIMEDES_PI = "archimedes_pi"
    LEIBNIZ_PI = "leibniz_pi"
    SINE = "sine"
    RANDOM_NUMBER = "random_number"
    RANDOM_NUMBER_WITHIN_INTERVAL = "random_number_within_interval"


_CORE = "component_6_arithmetic_core"
_MULTIPLICATION = "component_7_multiplication"
_DIVISION = "component_8_division"
_EXPONENTIATION = "component_9_exponentiation"
_NUMBER_THEORY = "component_10_number_theory"
_ROUNDING = "component_11_rounding_rebasing"
_APPROXIMATIONS = "component_14_approximations"

STRATEGY_LOCATIONS: Dict[OperationIdentifier, Tuple[str, str]] = {
    OperationIdentifier.ADDITION: (_CORE, "Addition"),
    OperationIdentifier.SUBTRACTION: (_CORE, "Subtraction"),
    OperationIdentifier.INCREMENT: (_CORE, "Increment"),
    OperationIdentifier.DECREMENT: (_CORE, "Decrement"),
    OperationIdentifier.DOUBLING: (_CORE, "Doubling"),
    OperationIdentifier.HALVING: (_CORE, "Halving"),
    OperationIdentifier.SHIFT_LEFT: (_CORE, "ShiftLeft"),
    OperationIdentifier.SHIFT_RIGHT: (_CORE, "ShiftRight"),
    OperationIdentifier.NEGATION: (_CORE, "Negation"),
    OperationIdentifier.ABSOLUTE_VALUE: (_CORE, "AbsoluteValue"),
    OperationIdentifier.COMPLEMENT: (_CORE, "Complement"),
    OperationIdentifier.REMOVE_FRACTION_PART: (_CORE, "RemoveFractionPart"),
    OperationIdentifier.REMOVE_INTEGER_PART: (_CORE, "RemoveIntegerPart"),
    OperationIdentifier.LONG_MULTIPLICATION: (_MULTIPLICATION, "LongMultiplication"),
    OperationIdentifier.MULTIPLICATION_BY_ADDITION: (
        _MULTIPLICATION,
        "MultiplicationByAddition",
    ),
    OperationIdentifier.RUSSIAN_PEASANT_MULTIPLICATION: (
        _MULTIPLICATION,
        "RussianPeasantMultiplication",
    ),
    OperationIdentifier.LONG_DIVISION: (_DIVISION, "LongDivision"),
    OperationIdentifier.DIVISION_BY_SUBTRACTION: (_DIVISION, "DivisionBySubtraction"),
    OperationIdentifier.RUSSIAN_DIVISION: (_DIVISION, "RussianDivision"),
    OperationIdentifier.DIVISION_WITH_REMAINDER: (_DIVISION, "DivisionWithRemainder"),
    OperationIdentifier.DIVISO: (_DIVISION, "Diviso"),
    OperationIdentifier.MODULO: (_DIVISION, "Modulo"),
    OperationIdentifier.EXACT_DIVISION: (_DIVISION, "ExactDivision"),
    OperationIdentifier.EXPONENTIATION_BY_SQUARING: (
        _EXPONENTIATION,
        "ExponentiationBySquaring",
    ),
    OperationIdentifier.CONCURRENT_EXPONENTIATION: (
        _EXPONENTIATION,
        "ConcurrentExponentiation",
    ),
    OperationIdentifier.FRACTION_EXPONENTIATION: (
        _EXPONENTIATION,
        "FractionExponentiation",
    ),
    OperationIdentifier.NTH_ROOT: (_EXPONENTIATION, "NthRoot"),
    OperationIdentifier.SQUARE_ROOT: (_EXPONENTIATION, "SquareRoot"),
    OperationIdentifier.ROUND_TO_EVEN: (_ROUNDING, "RoundToEven"),
    OperationIdentifier.ROUND_TO_ODD: (_ROUNDING, "RoundToOdd"),
    OperationIdentifier.ROUND_UP: (_ROUNDING, "RoundUp"),
    OperationIdentifier.ROUND_DOWN: (_ROUNDING, "RoundDown"),
    OperationIdentifier.REBASE: (_ROUNDING, "Rebase"),
    OperationIdentifier.GREATEST_COMMON_DIVISOR: (
        _NUMBER_THEORY,
        "GreatestCommonDivisor",
    ),
    OperationIdentifier.LEAST_COMMON_MULTIPLE: (_NUMBER_THEORY, "LeastCommonMultiple"),
    OperationIdentifier.DIVISORS: (_NUMBER_THEORY, "Divisors"),
    OperationIdentifier.COMMON_DIVISORS: (_NUMBER_THEORY, "CommonDivisors"),
    OperationIdentifier.PRIME_FACTORS: (_NUMBER_THEORY, "PrimeFactors"),
    OperationIdentifier.COMMON_PRIME_FACTORS: (_NUMBER_THEORY, "CommonPrimeFactors"),
    OperationIdentifier.IS_PRIME: (_NUMBER_THEORY, "IsPrime"),
    OperationIdentifier.NEXT_PRIME_NUMBER: (_NUMBER_THEORY, "NextPrimeNumber"),
    OperationIdentifier.FACTORIAL: (_NUMBER_THEORY, "Factorial"),
    OperationIdentifier.DIGIT_SUM: (_NUMBER_THEORY, "DigitSum"),
    OperationIdentifier.ARCHIMEDES_PI: (_APPROXIMATIONS, "ArchimedesPi"),
    OperationIdentifier.LEIBNIZ_PI: (_APPROXIMATIONS, "LeibnizPi"),
    OperationIdentifier.SINE: (_APPROXIMATIONS, "Sine"),
    OperationIdentifier.RANDOM_NUMBER: (_APPROXIMATIONS, "RandomNumber"),
    OperationIdentifier.RANDOM_NUMBER_WITHIN_INTERVAL: (
        _APPROXIMATIONS,
        "RandomNumberWithinInterval",
    ),
}


# Allowed algorithms per operation kind, default first
MULTIPLICATION_ALGORITHMS = (
    OperationIdentifier.LONG_MULTIPLICATION,
    OperationIdentifier.MULTIPLICATION_BY_ADDITION,
    OperationIdentifier.RUSSIAN_PEASANT_MULTIPLICATION,
)
DIVISION_ALGORITHMS = (
    OperationIdentifier.LONG_DIVISION,
    OperationIdentifier.DIVISION_BY_SUBTRACTION,
    OperationIdentifier.RUSSIAN_DIVISION,
)
EXPONENTIATION_ALGORITHMS = (
    OperationIdentifier.EXPONENTIATION_BY_SQUARING,
    OperationIdentifier.CONCURRENT_EXPONENTIATION,
)
ROUNDING_ALGORITHMS = (
    OperationIdentifier.ROUND_TO_EVEN,
    OperationIdentifier.ROUND_TO_ODD,
    OperationIdentifier.ROUND_UP,
    OperationIdentifier.ROUND_DOWN,
)
PI_ALGORITHMS = (
    OperationIdentifier.ARCHIMEDES_PI,
    OperationIdentifier.LEIBNIZ_PI,
)


class OperationRegistry:
    """Registry of strategy singletons (thread-safe, lazily populated)"""

    def __init__(self):
        self._operations: Dict[OperationIdentifier, BaseOperation] = {}
        self._lock = threading.RLock()  # Reentrant: strategies may look up others

    def get(self, identifier: OperationIdentifier) -> BaseOperation:
        """
        Returns the strategy for an identifier, creating it on first use.

        Raises:
            UnknownOperationError: If no strategy is known for the identifier
        """
        operation = self._operations.get(identifier)
        if operation is not None:
            return operation

        with self._lock:
            # Double-checked locking
            operation = self._operations.get(identifier)
            if operation is None:
                operation = self._create(identifier)
                self._operations[identifier] = operation
                logger.debug(
                    "Strategy created",
                    extra={"identifier": identifier.name, "strategy": repr(operation)},
                )
        return operation

    def register(self, identifier: OperationIdentifier, operation: BaseOperation) -> None:
        """Registers (or replaces) the strategy of an identifier"""
        if not isinstance(operation, BaseOperation):
            raise TypeError(f"Expected a BaseOperation, got {type(operation).__name__}")
        with self._lock:
            self._operations[identifier] = operation

    def is_created(self, identifier: OperationIdentifier) -> bool:
        with self._lock:
            return identifier in self._operations

    def list_operations(self) -> List[OperationIdentifier]:
        """Lists all identifiers the registry can serve"""
        with self._lock:
            known = set(STRATEGY_LOCATIONS) | set(self._operations)
        return sorted(known, key=lambda identifier: identifier.value)

    def _create(self, identifier: OperationIdentifier) -> BaseOperation:
        if not isinstance(identifier, OperationIdentifier):
            raise UnknownOperationError(
                "Not an operation identifier", context={"identifier": repr(identifier)}
            )
        location = STRATEGY_LOCATIONS.get(identifier)
        if location is None:
            raise UnknownOperationError(
                "No strategy registered", context={"identifier": identifier.name}
            )
        module_name, class_name = location
        module = importlib.import_module(module_name)
        return getattr(module, class_name)()


_registry: Optional[OperationRegistry] = None
_registry_lock = threading.Lock()


def get_operation_registry() -> OperationRegistry:
    """
    Get the global OperationRegistry instance.

    Returns:
        Singleton OperationRegistry instance
    """
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = OperationRegistry()
                logger.info("OperationRegistry initialized (singleton)")
    return _registry


def reset_operation_registry() -> None:
    """
    Reset the global registry (for testing only).

    Warning:
        This discards all created strategies. Only use in tests.
    """
    global _registry
    with _registry_lock:
        _registry = None


def get_operation(identifier: OperationIdentifier) -> BaseOperation:
    """Shortcut for get_operation_registry().get(identifier)"""
    return get_operation_registry().get(identifier)
