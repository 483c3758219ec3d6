"""
Common constants for the radix arithmetic engine.

This package provides the centralized configuration values shared by all
components.
"""

from common.constants import *

__all__ = [
    # Numeral Systems
    "DIGIT_SYMBOLS",
    "BASE_MIN",
    "BASE_MAX",
    "DEFAULT_NUMBER_BASE",
    # Notations
    "DECIMAL_POINT",
    "ALTERNATIVE_DECIMAL_POINT",
    "EXPONENT_MARKER",
    "EXPLICIT_EXPONENT_SIGN_BASE",
    "INFINITY_REPRESENTATION",
    # Approximation Defaults
    "DEFAULT_DECIMAL_PLACES",
    "DEFAULT_ITERATION_DEPTH",
    "ROOT_GUARD_DIGITS",
    # Concurrency
    "CONCURRENT_EXPONENTIATION_WORKERS",
    # Cache Configuration
    "PRIME_CACHE_NAME",
    "PRIME_CACHE_MAXSIZE",
]
