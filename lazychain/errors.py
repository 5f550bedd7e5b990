"""Exceptions raised by chain construction and traversal."""

from typing import Any


class ChainError(Exception):
    """Base class for every error raised by lazychain."""
    pass


class UnsupportedSourceType(ChainError, TypeError):
    """Raised when a value cannot be wrapped as a chain source."""

    def __init__(self, source: Any):
        self.source_type = type(source).__name__
        super().__init__(
            f'Unsupported source type "{self.source_type}": only sequences, '
            f"mappings, collections and enumerables are supported."
        )


class UnsupportedZipArgument(ChainError, TypeError):
    """Raised when zip() receives something that is neither a sequence nor an enumerable."""

    def __init__(self, position: int, argument: Any):
        self.position = position
        self.argument_type = type(argument).__name__
        super().__init__(
            f"Collection at argument {position} should be a sequence or implement "
            f'Enumerable, got "{self.argument_type}"'
        )


class InvalidSliceBounds(ChainError, ValueError):
    """Raised when slice bounds cannot be resolved to integer offsets."""

    def __init__(self, begin: Any, end: Any, reason: str = ""):
        self.begin = begin
        self.end = end
        message = f"Invalid slice bounds begin={begin!r}, end={end!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
