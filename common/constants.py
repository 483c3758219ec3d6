"""
Centralized constants for the radix arithmetic engine.

This module provides a single source of truth for the numeral system bounds,
the defaults of approximated operations, and the notation symbols used
throughout the code base.

Organization:
    - Numeral Systems: Supported bases and digit symbols
    - Notations: Radix point, exponent marker, infinity text
    - Approximation Defaults: Precision and iteration depth
    - Concurrency: Worker count for concurrent exponentiation
    - Cache Configuration: Sizes for named caches

Usage:
    from common.constants import DEFAULT_NUMBER_BASE, DEFAULT_DECIMAL_PLACES

Note:
    These constants define default values. Approximated operations can be
    overridden per call via ProcessingDetails (component_13).
"""

# =============================================================================
# Numeral Systems
# =============================================================================

DIGIT_SYMBOLS: str = (
    "0123456789" "ABCDEFGHIJKLMNOPQRSTUVWXYZ" "abcdefghijklmnopqrstuvwxyz"
)
"""
Canonical digit symbols, indexed by ordinal.

Decimal numerals first, then upper case letters (10-35), then lower case
letters (36-61). Parsing, printing and every carry/borrow depend on this
ordering, so it must never change.
"""

BASE_MIN: int = 2
"""Smallest supported base."""

BASE_MAX: int = len(DIGIT_SYMBOLS)
"""Largest supported base (62, one per digit symbol)."""

DEFAULT_NUMBER_BASE: int = 10
"""
Base used when none is given.

Used by:
    - component_3_number.py: Number.parse() and Number.from_native()
"""

# =============================================================================
# Notations
# =============================================================================

DECIMAL_POINT: str = "."
"""Radix separator used for printing."""

ALTERNATIVE_DECIMAL_POINT: str = ","
"""Additional radix separator accepted when parsing."""

EXPONENT_MARKER: str = "E"
"""
Separator between mantissa and exponent in scientific notation.

The same symbol is the digit with ordinal 14, see EXPLICIT_EXPONENT_SIGN_BASE.
"""

EXPLICIT_EXPONENT_SIGN_BASE: int = 15
"""
Smallest base whose digit set contains EXPONENT_MARKER.

From this base on the exponent sign is mandatory in scientific notation,
both when printing and when parsing ("1E+1" instead of "1E1").
"""

INFINITY_REPRESENTATION: str = "Infinity"
"""Text printed for an infinite number (prefixed with '-' when negative)."""

# =============================================================================
# Approximation Defaults
# =============================================================================

DEFAULT_DECIMAL_PLACES: int = 10
"""
Number of fraction digits kept by approximated operations.

Used by:
    - component_8_division.py: quotient truncation
    - component_9_exponentiation.py: roots, negative and fractional exponents
    - component_11_rounding_rebasing.py: fraction digits produced by rebase
    - component_6_arithmetic_core.py: halving in odd bases
"""

DEFAULT_ITERATION_DEPTH: int = 32
"""
Maximum number of iterations for convergent approximations.

The nth root (Newton) and the square root (Heron) stop earlier as soon as
an iteration no longer changes the working value. The budget only matters
for slowly converging inputs, in which case the best value reached is
returned.
"""

ROOT_GUARD_DIGITS: int = 2
"""Extra fraction digits carried by root iterations before final rounding."""

# =============================================================================
# Concurrency
# =============================================================================

CONCURRENT_EXPONENTIATION_WORKERS: int = 4
"""
Worker threads used by the concurrent exponentiation strategy.

The exponent is split into at most this many partial exponents, each
computed by repeated squaring on its own worker.
"""

# =============================================================================
# Cache Configuration
# =============================================================================

PRIME_CACHE_NAME: str = "prime_numbers"
"""Name of the CacheManager cache that stores prime lists per base."""

PRIME_CACHE_MAXSIZE: int = BASE_MAX
"""One entry per base (each entry is the list of primes found so far)."""
