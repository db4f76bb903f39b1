"""Shared domain components.

This module exports shared exceptions, the bounded cache and time helpers
used across the domain layer.
"""

from recova.domain.shared.bounded_cache import BoundedLRUCache
from recova.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from recova.domain.shared.time import utc_now

__all__ = [
    # Error codes
    "ErrorCode",
    # Base exception
    "DomainException",
    # Exception categories
    "ValidationError",
    "EntityNotFoundError",
    # Caching
    "BoundedLRUCache",
    # Utilities
    "utc_now",
]
