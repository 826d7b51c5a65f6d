"""Exception types raised by embedgen."""

from __future__ import annotations


class EmbedGenError(RuntimeError):
    """Base class for every failure reported by embedgen."""


class ConfigError(EmbedGenError):
    """Raised when the configuration file cannot be parsed."""


class InputNotFoundError(EmbedGenError, FileNotFoundError):
    """Raised when an input is neither a regular file nor a directory."""


class FileReadError(EmbedGenError):
    """Raised when a discovered file cannot be opened or fully read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to read file '{path}': {reason}")
        self.path = path
        self.reason = reason


class OutputWriteError(EmbedGenError):
    """Raised when a generated document cannot be created or written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"failed to write '{path}': {reason}")
        self.path = path
        self.reason = reason


class DuplicateNameError(EmbedGenError):
    """Raised when two inputs share a display name and duplicates are rejected."""

    def __init__(self, name: str, first: str, second: str) -> None:
        super().__init__(
            f"duplicate embedded file name '{name}' ({first} and {second})"
        )
        self.name = name
        self.paths = (first, second)


class EmbeddedFileNotFoundError(EmbedGenError, KeyError):
    """Raised when a registry lookup by name finds no entry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"embedded file not found: {name}")
        self.name = name

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0])


class LiteralDecodeError(EmbedGenError, ValueError):
    """Raised when literal text does not follow the encoder's grammar."""


__all__ = [
    "ConfigError",
    "DuplicateNameError",
    "EmbedGenError",
    "EmbeddedFileNotFoundError",
    "FileReadError",
    "InputNotFoundError",
    "LiteralDecodeError",
    "OutputWriteError",
]
