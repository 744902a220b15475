from __future__ import annotations


class CacheError(Exception):
    """Base error for the cache package."""


class ValidationError(CacheError):
    """Raised when cache configuration or arguments are invalid."""


class ExternalServiceError(CacheError):
    """Raised when a remote producer (HTTP service) fails."""


class NotFoundError(CacheError):
    """Raised when a requested remote resource is not found."""
