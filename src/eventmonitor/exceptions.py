"""Library exceptions for the eventmonitor package.

Every error raised here is a *usage* error: the test itself is malformed
(nothing was monitored, the event does not exist, the arguments have the
wrong shape). Failed expectations are reported separately through
:class:`eventmonitor.testing.execution.EventAssertionError`.
"""

from typing import Any


def type_name(obj: Any) -> str:
    """Return the class name of ``obj`` for use in messages."""
    return type(obj).__name__


class EventMonitorError(Exception):
    """Base exception for eventmonitor library."""

    pass


class NullSourceError(EventMonitorError, ValueError):
    """Raised when ``monitor`` is called with ``None``."""

    def __init__(self) -> None:
        super().__init__("Cannot monitor the events of a <None> object.")


class NoEventsExposedError(EventMonitorError, TypeError):
    """Raised when the type of a monitored object declares no events."""

    def __init__(self, source_type: str) -> None:
        self.source_type = source_type
        super().__init__(
            f"Type {source_type} does not expose any events. "
            f"Declare them with eventmonitor.Event or mix in NotifyPropertyChanged."
        )


class AlreadyMonitoredError(EventMonitorError, ValueError):
    """Raised when re-monitoring an object under the ``"error"`` policy."""

    def __init__(self, source_type: str) -> None:
        self.source_type = source_type
        super().__init__(
            f"Object of type {source_type} is already being monitored. "
            f"Call stop_monitoring(...) first or use remonitor='replace'."
        )


class NotMonitoredError(EventMonitorError, LookupError):
    """Raised when querying events of an object that was never monitored."""

    def __init__(self, source_type: str) -> None:
        self.source_type = source_type
        super().__init__(
            f"Object of type {source_type} is not being monitored. "
            f"You must call monitor(...) on it before asserting on its events."
        )


class UnknownEventError(EventMonitorError, LookupError):
    """
    Raised when a monitored object has no recorder for the requested event.

    This is distinct from an event that exists but never fired.

    Attributes:
        source_type: Name of the monitored object's class
        event_name: The requested event name
        available_events: Names of the events that are being recorded
    """

    def __init__(self, source_type: str, event_name: str, available_events: list[str]) -> None:
        self.source_type = source_type
        self.event_name = event_name
        self.available_events = available_events
        available = ", ".join(available_events) if available_events else "none"
        super().__init__(
            f'Type <{source_type}> does not expose an event named "{event_name}". '
            f"Available events: {available}."
        )


class EmptyRecorderError(EventMonitorError, LookupError):
    """Raised when asking for the first occurrence of an event that never fired."""

    def __init__(self, event_name: str) -> None:
        self.event_name = event_name
        super().__init__(f'Event "{event_name}" has not been raised yet.')


class NoEventArgumentsError(EventMonitorError, ValueError):
    """Raised when checking the sender of an event that carries no arguments."""

    def __init__(self, event_name: str, expected_sender: Any = None) -> None:
        self.event_name = event_name
        self.expected_sender = expected_sender
        super().__init__(
            f"Expected event from sender <{expected_sender!r}>, but event "
            f'"{event_name}" does not include any arguments.'
        )


class MissingArgumentError(EventMonitorError, TypeError):
    """Raised when no occurrence of an event carries an argument of the requested type."""

    def __init__(self, event_name: str, arg_type: type) -> None:
        self.event_name = event_name
        self.arg_type = arg_type
        super().__init__(f'No argument of event "{event_name}" is of type <{arg_type.__name__}>.')


class AmbiguousArgumentError(EventMonitorError, TypeError):
    """Raised when an occurrence carries more than one argument of the requested type."""

    def __init__(self, event_name: str, arg_type: type, count: int) -> None:
        self.event_name = event_name
        self.arg_type = arg_type
        self.count = count
        super().__init__(
            f'Ambiguous argument type: an occurrence of event "{event_name}" carries '
            f"{count} arguments of type <{arg_type.__name__}>, expected exactly one."
        )


class EventSignatureError(EventMonitorError, TypeError):
    """
    Raised when a handler or a firing does not match an event's declared shape.

    Attributes:
        event_name: Name of the event
        expected: The declared parameter names
        detail: What did not match
    """

    def __init__(self, event_name: str, expected: tuple[str, ...], detail: str) -> None:
        self.event_name = event_name
        self.expected = expected
        self.detail = detail
        params = ", ".join(expected)
        super().__init__(f'Event "{event_name}({params})": {detail}')


class InvalidPropertySelectorError(EventMonitorError, ValueError):
    """Raised when a property selector does not resolve to a single property name."""

    def __init__(self, selector: Any, detail: str) -> None:
        self.selector = selector
        self.detail = detail
        super().__init__(f"Invalid property selector {selector!r}: {detail}")
