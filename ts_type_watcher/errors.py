"""Error taxonomy for type regeneration runs."""

from __future__ import annotations


class TypeWatcherError(RuntimeError):
    """Base class for errors raised by ts-type-watcher."""


class ConfigurationError(TypeWatcherError):
    """Raised when configuration or the schema file is missing or unusable."""


class DirectoryNotFoundError(TypeWatcherError, FileNotFoundError):
    """Raised when the services directory does not exist."""


class WriteError(TypeWatcherError):
    """Raised when the declarations file cannot be written."""


class ExtractionSkipped(TypeWatcherError):
    """Raised when a function's return type cannot be determined statically."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


__all__ = [
    "ConfigurationError",
    "DirectoryNotFoundError",
    "ExtractionSkipped",
    "TypeWatcherError",
    "WriteError",
]
