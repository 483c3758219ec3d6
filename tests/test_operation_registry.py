# tests/test_operation_registry.py
"""
Tests for the operation registry (component_12).

Covers:
- Lazy creation of strategy singletons
- Thread-safe first access
- Registration of custom strategies
- Unknown identifiers
"""

import threading

import pytest

from component_3_number import Number
from component_12_operation_registry import (
    DIVISION_ALGORITHMS,
    EXPONENTIATION_ALGORITHMS,
    MULTIPLICATION_ALGORITHMS,
    PI_ALGORITHMS,
    ROUNDING_ALGORITHMS,
    OperationIdentifier,
    OperationRegistry,
    get_operation,
    get_operation_registry,
    reset_operation_registry,
)
from infrastructure.interfaces import BaseOperation, validate_numbers
from radix_exceptions import UnknownOperationError


@pytest.fixture
def registry():
    """Fixture: Fresh global registry, reset again afterwards"""
    reset_operation_registry()
    yield get_operation_registry()
    reset_operation_registry()


class Identity(BaseOperation):
    """Test strategy returning its operand"""

    def __init__(self):
        super().__init__("id", "identity", 1)

    def validate(self, *operands):
        return validate_numbers(operands, self.arity)

    def execute(self, *operands, details=None):
        self.check_operands(*operands)
        return self.result(operands[0].copy())


class TestRegistry:
    """Tests for strategy lookup"""

    def test_singleton_registry(self, registry):
        """Test: get_operation_registry() returns one instance"""
        assert get_operation_registry() is registry

    def test_lazy_creation(self, registry):
        """Test: Strategies are created on first use"""
        assert not registry.is_created(OperationIdentifier.LONG_DIVISION)

        strategy = registry.get(OperationIdentifier.LONG_DIVISION)

        assert registry.is_created(OperationIdentifier.LONG_DIVISION)
        assert strategy.name == "long_division"

    def test_same_instance(self, registry):
        """Test: Repeated lookups return the same strategy"""
        first = get_operation(OperationIdentifier.ADDITION)
        second = get_operation(OperationIdentifier.ADDITION)

        assert first is second

    def test_every_identifier_resolves(self, registry):
        """Test: Each identifier has a strategy"""
        for identifier in OperationIdentifier:
            assert isinstance(registry.get(identifier), BaseOperation)

    def test_list_operations(self, registry):
        """Test: All identifiers are listed before creation"""
        assert set(registry.list_operations()) == set(OperationIdentifier)

    def test_algorithm_groups(self):
        """Test: The first entry of each group is the default"""
        assert MULTIPLICATION_ALGORITHMS[0] is OperationIdentifier.LONG_MULTIPLICATION
        assert DIVISION_ALGORITHMS[0] is OperationIdentifier.LONG_DIVISION
        assert EXPONENTIATION_ALGORITHMS[0] is OperationIdentifier.EXPONENTIATION_BY_SQUARING
        assert ROUNDING_ALGORITHMS[0] is OperationIdentifier.ROUND_TO_EVEN
        assert PI_ALGORITHMS[0] is OperationIdentifier.ARCHIMEDES_PI

    def test_reset(self, registry):
        """Test: reset_operation_registry() discards created strategies"""
        strategy = get_operation(OperationIdentifier.MODULO)
        reset_operation_registry()

        assert get_operation(OperationIdentifier.MODULO) is not strategy


class TestRegistration:
    """Tests for custom strategies"""

    def test_register_replaces_strategy(self, registry):
        """Test: A registered strategy is served for its identifier"""
        registry.register(OperationIdentifier.NEGATION, Identity())

        assert str(get_operation(OperationIdentifier.NEGATION).execute(Number.parse("5")).result) == "5"

    def test_register_rejects_non_operations(self, registry):
        """Test: Only BaseOperation instances can be registered"""
        with pytest.raises(TypeError):
            registry.register(OperationIdentifier.NEGATION, lambda number: number)

    def test_unknown_identifier(self):
        """Test: Strings are not identifiers"""
        with pytest.raises(UnknownOperationError):
            OperationRegistry().get("addition")


class TestThreadSafety:
    """Tests for concurrent first access"""

    def test_concurrent_first_access(self, registry):
        """Test: All threads receive the same strategy instance"""
        results = []
        barrier = threading.Barrier(8)

        def lookup():
            barrier.wait()
            results.append(registry.get(OperationIdentifier.RUSSIAN_DIVISION))

        threads = [threading.Thread(target=lookup) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(result is results[0] for result in results)
