"""Typed exceptions for clustering arguments, configuration and I/O formats."""


class TravelmapError(Exception):
    """Base class for all package errors."""


class InvalidArgumentError(TravelmapError, ValueError):
    """Raised when an operation receives an argument it cannot accept."""


class NonFiniteCoordinateError(InvalidArgumentError):
    """Raised when an entity position contains NaN or infinite values."""


class ConfigError(TravelmapError, ValueError):
    """Raised when configuration sources cannot be loaded or applied."""


class IOFormatError(TravelmapError, ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader or writer is registered for a file format."""


class EntityFormatError(IOFormatError):
    """Raised when an input record cannot be turned into an entity."""
