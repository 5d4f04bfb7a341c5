"""Error types raised by document, section, and item operations"""


class MemoryDocError(Exception):
    """Base class for all mdmemory errors."""


class NotFoundError(MemoryDocError, LookupError):
    """A document, section, or item does not exist."""


class ValidationError(MemoryDocError, ValueError):
    """A required argument is missing or an argument value is invalid."""
