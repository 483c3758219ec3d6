"""
infrastructure package

Shared infrastructure of the radix arithmetic engine.

Modules:
    - interfaces: Base interface and result types of operation strategies
    - cache_manager: Centralized cache management system
"""

from infrastructure.interfaces import (
    BaseOperation,
    Result,
    ResultWithRemainder,
    validate_numbers,
)
from infrastructure.cache_manager import CacheManager, get_cache_manager

__all__ = [
    "BaseOperation",
    "Result",
    "ResultWithRemainder",
    "validate_numbers",
    "CacheManager",
    "get_cache_manager",
]
