"""Turn exceptions into user-facing messages with a hint on how to fix the input."""

from __future__ import annotations

from dataclasses import dataclass

from rich.markup import escape

from durafmt.core.exceptions import InvalidDurationError, InvalidPatternError, LabelTableError


@dataclass
class ErrorInfo:
    """What the CLI reports about a failed command."""

    error_type: str
    message: str
    details: str | None = None
    recovery_suggestion: str | None = None


# Looked up along the exception's MRO, so subclasses inherit the hint of
# their closest listed base.
RECOVERY_SUGGESTIONS: dict[type[BaseException], str] = {
    InvalidPatternError: (
        "Write each amount as a number followed by a unit, e.g. '3 days, 4hrs and 5 mins' or '1h30m'. "
        "Run `durafmt units` to list every accepted unit alias."
    ),
    InvalidDurationError: (
        "The duration must be a finite number of milliseconds (or of the unit given with `--unit`). "
        "Scientific notation such as 1.5e3 is accepted."
    ),
    LabelTableError: (
        "Check that the label file is valid JSON or YAML and maps unit identifiers "
        "(e.g. 'hour', 'day') to objects with 'default', 'compact' and optional 'counts' keys."
    ),
    PermissionError: "The label or configuration file is not readable by the current user.",
    OverflowError: "The duration is too large to convert to a calendar date. Use one of the text modes instead.",
    ValueError: "Run the command with `--help` to see the accepted values of each option.",
}


def get_recovery_suggestion(error: type[BaseException]) -> str | None:
    """Return the hint for an exception class, or None if nothing applies.

    Example:
        >>> get_recovery_suggestion(KeyError) is None
        True
    """
    for cls in error.__mro__:
        if cls in RECOVERY_SUGGESTIONS:
            return RECOVERY_SUGGESTIONS[cls]
    return None


def get_error_info(exception: BaseException) -> ErrorInfo:
    """Collect the message, details and hint of an exception.

    Duration errors keep their ``message`` and ``details`` apart; for other
    exceptions the details come from the chained cause, if any.
    """
    message = getattr(exception, "message", None) or str(exception) or type(exception).__name__
    details = getattr(exception, "details", None)
    if not details and exception.__cause__ is not None:
        details = str(exception.__cause__)

    return ErrorInfo(
        error_type=type(exception).__name__,
        message=message,
        details=details,
        recovery_suggestion=get_recovery_suggestion(type(exception)),
    )


def format_error_with_suggestion(error_info: ErrorInfo, prefix: str | None = None, show_details: bool = True) -> str:
    """Build the Rich markup printed for a failed command.

    Message and details are escaped, so text from the user's input (which may
    contain square brackets) is printed literally.
    """
    headline = escape(error_info.message)
    if prefix:
        headline = f"{prefix}: {headline}"

    lines = [f"[error]{headline}[/error]"]
    if show_details and error_info.details:
        lines.append(f"[dim]{escape(error_info.details)}[/dim]")
    if error_info.recovery_suggestion:
        lines.append(f"\n[info]Hint: {error_info.recovery_suggestion}[/info]")
    return "\n".join(lines)
