"""
Failure reporting for event assertions.

:func:`fail` and :func:`verify` are the only places an assertion failure is
raised. They format a message template with rendered values and an optional
reason phrase and raise :class:`EventAssertionError`, a plain
``AssertionError`` subclass, so pytest reports it like any failed ``assert``.

Message templates use ``str.format`` positional placeholders for values and
the ``{reason}`` keyword placeholder for the reason phrase:

    >>> fail("Expected {0} to be raised{reason}, but it was not.", "changed",
    ...      reason="the value was {0}", reason_args=(42,))
    Traceback (most recent call last):
    ...
    EventAssertionError: Expected "changed" to be raised because the value was 42, but it was not.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, NoReturn


class EventAssertionError(AssertionError):
    """
    Raised when an event assertion does not hold.

    Attributes:
        message: The fully formatted failure message
        reason: The formatted reason phrase ("" when none was given)
    """

    def __init__(self, message: str, reason: str = "") -> None:
        self.message = message
        self.reason = reason
        super().__init__(message)


def format_value(value: Any) -> str:
    """Render a value for a failure message."""
    if value is None:
        return "<None>"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    text = repr(value)
    if text.startswith("<") and text.endswith(">"):
        return text
    return f"<{text}>"


def format_reason(reason: str, reason_args: Sequence[Any] = ()) -> str:
    """
    Render a reason phrase, prefixing it with "because" when it lacks one.

    Returns:
        The phrase with a leading space, or "" when ``reason`` is empty
    """
    if not reason or not reason.strip():
        return ""
    text = reason.format(*reason_args) if reason_args else reason
    text = text.strip()
    if not text.startswith("because"):
        text = f"because {text}"
    return f" {text}"


def fail(
    message: str,
    *args: Any,
    reason: str = "",
    reason_args: Sequence[Any] = (),
) -> NoReturn:
    """
    Raise an assertion failure.

    Args:
        message: Template with positional placeholders and ``{reason}``
        *args: Values for the positional placeholders
        reason: Optional phrase explaining why the assertion should hold
        reason_args: Values for placeholders in ``reason``

    Raises:
        EventAssertionError: Always
    """
    rendered_reason = format_reason(reason, reason_args)
    formatted = message.format(*(format_value(arg) for arg in args), reason=rendered_reason)
    raise EventAssertionError(formatted, reason=rendered_reason.strip())


def verify(
    condition: bool,
    message: str,
    *args: Any,
    reason: str = "",
    reason_args: Sequence[Any] = (),
) -> None:
    """Raise an assertion failure built from ``message`` unless ``condition`` holds."""
    if not condition:
        fail(message, *args, reason=reason, reason_args=reason_args)


__all__ = [
    "EventAssertionError",
    "fail",
    "format_reason",
    "format_value",
    "verify",
]
