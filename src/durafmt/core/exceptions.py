"""Exceptions raised by the parsing and formatting core."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class DurationError(ValueError):
    """Base exception for duration parsing and formatting errors.

    Provides a consistent interface for all failures with a human-readable
    message and optional technical details.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """Initialize the duration error.

        Args:
            message: Human-readable error message
            details: Additional technical details about the error
        """
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        if self.details:
            return f"{self.message} Details: {self.details}"
        return self.message


class InvalidPatternError(DurationError):
    """Raised when a duration text contains no recognizable unit token.

    This error occurs when:
    - The text has no number followed by a known unit alias
    - Every number in the text is followed by an unknown alias
    """

    def __init__(self, text: str, message: str | None = None, details: str | None = None) -> None:
        """Initialize the invalid pattern error.

        Args:
            text: The text that could not be parsed
            message: Optional custom message (default: auto-generated)
            details: Additional technical details
        """
        self.text = text
        if message is None:
            message = f"Invalid duration pattern: '{text}'"
        super().__init__(message, details=details)


class InvalidDurationError(DurationError):
    """Raised when a formatting operation receives a value that is not a valid number."""

    def __init__(self, value: Any, message: str | None = None, details: str | None = None) -> None:
        self.value = value
        if message is None:
            message = f"Invalid duration: {value!r}"
        super().__init__(message, details=details)


class LabelTableError(DurationError):
    """Raised when an external label table cannot be loaded.

    Common causes:
    - File not found
    - Unsupported file extension
    - Malformed JSON or YAML
    - Unknown unit identifiers or missing label fields
    """

    def __init__(self, message: str, path: Path | str | None = None, details: str | None = None) -> None:
        """Initialize the label table error.

        Args:
            message: Human-readable error message
            path: Path of the label file that failed to load
            details: Additional technical details
        """
        self.path = str(path) if path is not None else None
        super().__init__(message, details=details)
