"""
Handler adapter for recording events of any shape.

Each declared event has its own handler shape: no arguments, the
conventional ``(sender, args)`` pair, or any custom list of parameters. The
adapter bridges all of them to a single recording action: whatever arguments
the event is fired with are appended, in order, to one recorder.

Handlers are produced from a small dispatch table keyed by arity, each entry
a closure over the recorder's ``record`` method. The resulting callable
reports the event's exact signature to ``inspect.signature``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from eventmonitor.events.declaration import Event

logger = logging.getLogger(__name__)

RecordFunc = Callable[..., None]


class SupportsRecord(Protocol):
    """Anything that can append one occurrence of an event."""

    @property
    def event_name(self) -> str: ...

    def record(self, *parameters: Any) -> None: ...


def get_handler_name(handler: Any) -> str:
    """
    Get a descriptive name for a handler for logging and debugging.

    Args:
        handler: Any handler object (class instance, function, lambda)

    Returns:
        String name for the handler
    """
    if hasattr(handler, "__qualname__"):
        return str(handler.__qualname__)
    elif hasattr(handler, "__class__") and handler.__class__.__name__ != "function":
        return str(handler.__class__.__name__)
    else:
        return repr(handler)


def _nullary(record: RecordFunc) -> Callable[..., None]:
    def handler() -> None:
        record()

    return handler


def _unary(record: RecordFunc) -> Callable[..., None]:
    def handler(arg: Any) -> None:
        record(arg)

    return handler


def _binary(record: RecordFunc) -> Callable[..., None]:
    def handler(sender: Any, args: Any) -> None:
        record(sender, args)

    return handler


def _nary(record: RecordFunc) -> Callable[..., None]:
    def handler(*args: Any) -> None:
        record(*args)

    return handler


_HANDLER_FACTORIES: dict[int, Callable[[RecordFunc], Callable[..., None]]] = {
    0: _nullary,
    1: _unary,
    2: _binary,
}


def build_recording_handler(signature: inspect.Signature, record: RecordFunc) -> Callable[..., None]:
    """
    Build a handler with exactly ``signature`` that forwards its arguments to ``record``.

    Args:
        signature: The event's declared handler signature
        record: Called once per invocation with the received arguments, in order

    Returns:
        A plain function whose ``__signature__`` is ``signature``
    """
    factory = _HANDLER_FACTORIES.get(len(signature.parameters), _nary)
    handler = factory(record)
    handler.__signature__ = signature  # type: ignore[attr-defined]
    return handler


class HandlerAdapter:
    """
    Recording handler for one event, bound to one recorder.

    The adapter is what gets subscribed to the monitored object's event. Two
    adapters compare equal when they record into the same recorder, so an
    adapter can always be unsubscribed with a fresh instance.

    Example:
        >>> adapter = HandlerAdapter(recorder, Thermostat.changed)
        >>> thermostat.changed += adapter
        >>> thermostat.changed.fire(thermostat, 21)
        >>> recorder.count()
        1

    Attributes:
        recorder: The recorder occurrences are appended to
        name: Descriptive name for logging
    """

    def __init__(self, recorder: SupportsRecord, event: Event) -> None:
        self._recorder = recorder
        self._handler = build_recording_handler(event.signature, recorder.record)
        self.__signature__ = event.signature
        self._name = f"HandlerAdapter[{event.name}]"

    @property
    def recorder(self) -> SupportsRecord:
        """Get the recorder this adapter appends to."""
        return self._recorder

    @property
    def name(self) -> str:
        """Get the adapter's descriptive name."""
        return self._name

    def __call__(self, *args: Any) -> None:
        self._handler(*args)

    def __eq__(self, other: object) -> bool:
        """Check equality based on recorder identity."""
        if isinstance(other, HandlerAdapter):
            return self._recorder is other._recorder
        return NotImplemented

    def __hash__(self) -> int:
        """Hash based on recorder identity."""
        return id(self._recorder)

    def __repr__(self) -> str:
        return f"HandlerAdapter({self._recorder.event_name})"


__all__ = [
    "HandlerAdapter",
    "RecordFunc",
    "SupportsRecord",
    "build_recording_handler",
    "get_handler_name",
]
