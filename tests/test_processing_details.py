# tests/test_processing_details.py
"""
Tests for ProcessingDetails (component_13).

Covers:
- Defaults for algorithm, precision and iteration depth
- Validation of precision and iteration depth (int or integer Number)
- Algorithm resolution against the allowed set
- Immutability and the with_* helpers
"""

from dataclasses import FrozenInstanceError

import pytest

from common.constants import DEFAULT_DECIMAL_PLACES, DEFAULT_ITERATION_DEPTH
from component_3_number import Number
from component_12_operation_registry import (
    DIVISION_ALGORITHMS,
    MULTIPLICATION_ALGORITHMS,
    OperationIdentifier,
)
from component_13_processing_details import (
    DEFAULT_PROCESSING_DETAILS,
    ProcessingDetails,
    processing_details,
)
from radix_exceptions import InvalidProcessingDetailsError, RadixException


class TestDefaults:
    """Tests for unset fields"""

    def test_defaults(self):
        """Test: Unset fields resolve to the documented defaults"""
        details = ProcessingDetails()

        assert details.resolve_precision() == DEFAULT_DECIMAL_PLACES == 10
        assert details.resolve_iteration_depth() == DEFAULT_ITERATION_DEPTH == 32
        assert details.resolve_algorithm(DIVISION_ALGORITHMS) is OperationIdentifier.LONG_DIVISION

    def test_explicit_default_argument(self):
        """Test: Callers may pass their own fallback"""
        assert ProcessingDetails().resolve_precision(default=3) == 3
        assert ProcessingDetails(precision=5).resolve_precision(default=3) == 5

    def test_processing_details_helper(self):
        """Test: None becomes the shared defaults"""
        details = ProcessingDetails(precision=2)

        assert processing_details(None) is DEFAULT_PROCESSING_DETAILS
        assert processing_details(details) is details

    def test_processing_details_rejects_other_types(self):
        """Test: Only ProcessingDetails are accepted"""
        with pytest.raises(InvalidProcessingDetailsError):
            processing_details("precision=3")


class TestValidation:
    """Tests for field validation"""

    def test_number_precision(self):
        """Test: Integer Numbers are converted to int"""
        details = ProcessingDetails(precision=Number.parse("14", 8))

        assert details.precision == 12
        assert isinstance(details.precision, int)

    def test_zero_precision(self):
        """Test: Precision 0 is allowed"""
        assert ProcessingDetails(precision=0).resolve_precision() == 0

    @pytest.mark.parametrize("precision", [-1, 1.5, "10", True])
    def test_invalid_precision(self, precision):
        """Test: Negative, non-integral and bool precisions are rejected"""
        with pytest.raises(InvalidProcessingDetailsError):
            ProcessingDetails(precision=precision)

    def test_fractional_number_precision(self):
        """Test: A Number with fraction digits is not a count"""
        with pytest.raises(InvalidProcessingDetailsError) as exc_info:
            ProcessingDetails(precision=Number.parse("2.5"))

        assert exc_info.value.context["precision"] == "2.5"
        assert exc_info.value.original_exception is not None

    @pytest.mark.parametrize("depth", [0, -3])
    def test_invalid_iteration_depth(self, depth):
        """Test: At least one iteration"""
        with pytest.raises(InvalidProcessingDetailsError):
            ProcessingDetails(iteration_depth=depth)

    def test_invalid_algorithm(self):
        """Test: Algorithms are OperationIdentifiers"""
        with pytest.raises(InvalidProcessingDetailsError):
            ProcessingDetails(algorithm="long_division")

    def test_error_is_radix_exception(self):
        """Test: Configuration errors share the package base class"""
        assert issubclass(InvalidProcessingDetailsError, RadixException)


class TestAlgorithmResolution:
    """Tests for resolve_algorithm()"""

    def test_allowed_algorithm(self):
        """Test: A configured, allowed algorithm is returned"""
        details = ProcessingDetails(algorithm=OperationIdentifier.RUSSIAN_DIVISION)

        assert details.resolve_algorithm(DIVISION_ALGORITHMS) is OperationIdentifier.RUSSIAN_DIVISION

    def test_disallowed_algorithm(self):
        """Test: A division algorithm is not a multiplication algorithm"""
        details = ProcessingDetails(algorithm=OperationIdentifier.LONG_DIVISION)

        with pytest.raises(InvalidProcessingDetailsError) as exc_info:
            details.resolve_algorithm(MULTIPLICATION_ALGORITHMS)

        assert "LONG_MULTIPLICATION" in exc_info.value.context["allowed"]


class TestImmutability:
    """Tests for the frozen dataclass"""

    def test_frozen(self):
        """Test: Fields cannot be reassigned"""
        details = ProcessingDetails(precision=3)

        with pytest.raises(FrozenInstanceError):
            details.precision = 4

    def test_with_helpers(self):
        """Test: with_* return modified copies"""
        details = ProcessingDetails(precision=3)

        changed = (
            details.with_algorithm(OperationIdentifier.ROUND_TO_ODD)
            .with_precision(7)
            .with_iteration_depth(5)
        )

        assert details == ProcessingDetails(precision=3)
        assert changed == ProcessingDetails(OperationIdentifier.ROUND_TO_ODD, 7, 5)

    def test_with_helpers_validate(self):
        """Test: Copies are validated like new instances"""
        with pytest.raises(InvalidProcessingDetailsError):
            ProcessingDetails().with_precision(-2)

    def test_hashable(self):
        """Test: Equal details hash equally"""
        assert hash(ProcessingDetails(precision=2)) == hash(ProcessingDetails(precision=2))
