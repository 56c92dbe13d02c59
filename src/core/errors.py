from __future__ import annotations


class MemoCacheError(Exception):
    """Base error for the memo cache."""


class ConfigurationError(MemoCacheError):
    """Raised when a node is used in a stage it has not reached (or has left)."""


class ValidationError(MemoCacheError):
    """Raised when user input is invalid."""


class CapacityExceeded(MemoCacheError):
    """Store is full; recovered internally by evicting."""


class EvictionEmpty(MemoCacheError):
    """Eviction found nothing to remove; recovered internally by clearing."""


class Expired(MemoCacheError):
    """Freshness check failed; consumed by the revalidation policy."""


class RegistryError(MemoCacheError):
    """Base error for registry lookups."""


class UnknownHandleError(RegistryError):
    """Raised when a handle is not registered."""


class DuplicateHandleError(RegistryError):
    """Raised when registering under a handle that is already taken."""
