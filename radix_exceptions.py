"""
radix_exceptions.py

Central exception hierarchy for the radix arithmetic engine.
Defines specialized exception classes for the different failure scenarios.

Exception hierarchy:
    RadixException (base)
    ├── NumberFormatException
    │   ├── BaseRangeError
    │   ├── DigitRangeError
    │   └── NumberParsingError
    ├── RadixArithmeticException
    │   ├── UndefinedOperationException
    │   ├── NoResultButLimitException
    │   ├── InexactDivisionError
    │   ├── BaseMismatchError
    │   └── UnsupportedOperationError
    └── ConfigurationException
        ├── InvalidProcessingDetailsError
        └── UnknownOperationError

Usage:
    from radix_exceptions import NoResultButLimitException

    try:
        quotient = radix_math.diviso(dividend, divisor)
    except NoResultButLimitException as e:
        quotient = e.limit
"""

from typing import Any, Dict, Optional


class RadixException(Exception):
    """
    Base exception for all errors raised by the arithmetic engine.

    All exceptions support:
    - a detailed message
    - contextual information (dict)
    - chaining of an original exception
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        base_msg = self.message

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


# ============================================================================
# FORMAT EXCEPTIONS
# ============================================================================


class NumberFormatException(RadixException):
    """Base exception for invalid bases, digits and number strings."""


class BaseRangeError(NumberFormatException):
    """
    A base outside [BASE_MIN, BASE_MAX] was requested.
    """

    def __init__(self, message: str, base: Optional[int] = None, **kwargs):
        context = kwargs.get("context", {})
        context["base"] = base
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class DigitRangeError(NumberFormatException):
    """
    A digit ordinal or symbol is not valid in the requested base.

    Causes:
    - ordinal < 0 or ordinal >= base
    - symbol not part of the base's digit set
    """

    def __init__(
        self,
        message: str,
        base: Optional[int] = None,
        digit: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["base"] = base
        context["digit"] = digit
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class NumberParsingError(NumberFormatException):
    """
    A string (or host value) could not be turned into a number.
    """

    def __init__(self, message: str, text: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["text"] = text
        kwargs["context"] = context
        super().__init__(message, **kwargs)


# ============================================================================
# ARITHMETIC EXCEPTIONS
# ============================================================================


class RadixArithmeticException(RadixException):
    """Base exception for failed calculations."""


class UndefinedOperationException(RadixArithmeticException):
    """
    The result is mathematically undefined.

    Examples: division by zero, 0^0, infinity^0, infinity - infinity.
    """

    def __init__(self, message: str, operation: Optional[str] = None, **kwargs):
        context = kwargs.get("context", {})
        context["operation"] = operation
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class NoResultButLimitException(RadixArithmeticException):
    """
    There is no exact result, but a well-defined limit.

    The limit is available as ``limit`` so callers can recover a
    meaningful value (x/inf -> 0, inf/inf -> 1, 0/0 -> 1 for remainder
    division).
    """

    def __init__(self, message: str, limit: Any = None, **kwargs):
        context = kwargs.get("context", {})
        context["limit"] = limit
        kwargs["context"] = context
        super().__init__(message, **kwargs)
        self.limit = limit


class InexactDivisionError(RadixArithmeticException):
    """diviso() was called with a divisor that does not divide the dividend."""

    def __init__(
        self,
        message: str,
        dividend: Optional[Any] = None,
        divisor: Optional[Any] = None,
        **kwargs,
    ):
        context = kwargs.get("context", {})
        context["dividend"] = dividend
        context["divisor"] = divisor
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class BaseMismatchError(RadixArithmeticException):
    """
    Operands use different bases.

    Operands must be rebased to a common base first.
    """

    def __init__(self, message: str, bases: Optional[Any] = None, **kwargs):
        context = kwargs.get("context", {})
        context["bases"] = bases
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class UnsupportedOperationError(RadixArithmeticException):
    """
    The operation is not available for the given operands.

    Examples: remainder division of non-integers, divisors of zero.
    """


# ============================================================================
# CONFIGURATION EXCEPTIONS
# ============================================================================


class ConfigurationException(RadixException):
    """Base exception for invalid processing configuration."""


class InvalidProcessingDetailsError(ConfigurationException):
    """
    ProcessingDetails carry an invalid value.

    Causes:
    - negative precision
    - iteration depth < 1
    - algorithm not allowed for the requested operation
    """


class UnknownOperationError(ConfigurationException):
    """No strategy is registered for the requested operation identifier."""
