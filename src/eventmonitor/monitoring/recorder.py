"""
Recorders: the append-only log of one event's occurrences.

An :class:`EventRecorder` exists per (monitored object, event name) pair. The
:class:`~eventmonitor.handlers.adapter.HandlerAdapter` subscribed to the
event appends a :class:`RecordedEvent` each time the event fires; assertions
read the log back. Reading is a live view: iterating twice may observe
occurrences recorded in between.

Example:
    >>> recorder = EventRecorder(thermostat, "changed")
    >>> recorder.subscribe(thermostat.changed)
    >>> thermostat.changed.fire(thermostat, 21)
    >>> recorder.count()
    1
    >>> recorder.first().parameters
    (<Thermostat object at ...>, 21)
"""

from __future__ import annotations

import inspect
import logging
import threading
import weakref
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Self, TypeVar

from eventmonitor.exceptions import (
    AmbiguousArgumentError,
    EmptyRecorderError,
    MissingArgumentError,
    NoEventArgumentsError,
)
from eventmonitor.execution import fail, verify
from eventmonitor.handlers.adapter import HandlerAdapter

if TYPE_CHECKING:
    from eventmonitor.events.declaration import BoundEvent

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class RecordedEvent:
    """
    The arguments of one occurrence of an event, in delivery order.

    For the conventional shape this is ``(sender, args)``; other events carry
    whatever their declaration specifies, possibly nothing.

    Attributes:
        parameters: Positional arguments the event was fired with
    """

    parameters: tuple[Any, ...]

    def of_type(self, arg_type: type[T]) -> list[T]:
        """Return the parameters that are instances of ``arg_type``."""
        return [p for p in self.parameters if isinstance(p, arg_type)]

    def __len__(self) -> int:
        return len(self.parameters)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.parameters)


def describe_predicate(predicate: Callable[..., Any]) -> str:
    """Best-effort source text of a predicate, for failure messages."""
    try:
        source = inspect.getsource(predicate).strip()
    except (OSError, TypeError):
        return getattr(predicate, "__qualname__", repr(predicate))
    return source.splitlines()[0]


def _reference(source: object) -> Callable[[], object | None]:
    try:
        return weakref.ref(source)
    except TypeError:
        return lambda: source


class RecordedEventsView:
    """
    Read-only query surface shared by recorders and filtered views.

    Subclasses provide ``event_name``, ``source``, ``source_type_name`` and
    ``_snapshot()``.
    """

    event_name: str
    source_type_name: str

    @property
    def source(self) -> object | None:
        raise NotImplementedError

    def _snapshot(self) -> list[RecordedEvent]:
        raise NotImplementedError

    def any(self) -> bool:
        """True if the event has been raised at least once."""
        return bool(self._snapshot())

    def count(self) -> int:
        """Number of recorded occurrences."""
        return len(self._snapshot())

    def first(self) -> RecordedEvent:
        """
        Return the earliest recorded occurrence.

        Raises:
            EmptyRecorderError: If nothing has been recorded
        """
        snapshot = self._snapshot()
        if not snapshot:
            raise EmptyRecorderError(self.event_name)
        return snapshot[0]

    def __iter__(self) -> Iterator[RecordedEvent]:
        return iter(self._snapshot())

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        """Views are always truthy, even when empty."""
        return True

    def with_sender(self, expected_sender: object) -> Self:
        """
        Assert that every occurrence was raised by ``expected_sender``.

        The sender is the first argument and is compared by identity.

        Raises:
            NoEventArgumentsError: If an occurrence carries no arguments
            EventAssertionError: On the first occurrence with another sender
        """
        snapshot = self._snapshot()
        if any(len(recorded) == 0 for recorded in snapshot):
            raise NoEventArgumentsError(self.event_name, expected_sender)

        for recorded in snapshot:
            actual_sender = recorded.parameters[0]
            verify(
                actual_sender is expected_sender,
                "Expected sender {0} for event {1}, but found {2}.",
                expected_sender,
                self.event_name,
                actual_sender,
            )
        return self

    def with_args(self, arg_type: type[T], predicate: Callable[[T], bool]) -> Self:
        """
        Assert that at least one occurrence has an ``arg_type`` argument matching ``predicate``.

        Occurrences that carry no ``arg_type`` argument are skipped.

        Raises:
            MissingArgumentError: If no occurrence carries an ``arg_type`` argument
            AmbiguousArgumentError: If an occurrence carries more than one
            EventAssertionError: If no argument satisfies the predicate
        """
        candidates: list[T] = []
        for recorded in self._snapshot():
            typed = recorded.of_type(arg_type)
            if len(typed) > 1:
                raise AmbiguousArgumentError(self.event_name, arg_type, len(typed))
            candidates.extend(typed)

        if not candidates:
            raise MissingArgumentError(self.event_name, arg_type)

        if not any(predicate(candidate) for candidate in candidates):
            fail(
                "Expected at least one event {0} with arguments matching {1}, but found none.",
                self.event_name,
                describe_predicate(predicate),
            )
        return self

    def where(self, predicate: Callable[[RecordedEvent], bool], description: str = "") -> FilteredEventRecorder:
        """Return a live view restricted to occurrences matching ``predicate``."""
        return FilteredEventRecorder(self, predicate, description or describe_predicate(predicate))


class EventRecorder(RecordedEventsView):
    """
    Append-only log of one event raised by one monitored object.

    The recorder references its source weakly; it never keeps the monitored
    object alive.

    Thread-Safety:
        Appends and reads are guarded by a per-recorder lock, so concurrent
        firings of the same event never lose or corrupt entries. Their
        relative order is the order in which they acquire the lock.

    Attributes:
        event_name: Name of the recorded event
        source_type_name: Class name of the monitored object
    """

    def __init__(self, source: object, event_name: str) -> None:
        self.event_name = event_name
        self.source_type_name = type(source).__name__
        self._source_ref = _reference(source)
        self._log: list[RecordedEvent] = []
        self._lock = threading.Lock()
        self._subscription: tuple[BoundEvent, HandlerAdapter] | None = None

    @property
    def source(self) -> object | None:
        """The monitored object, or None once it has been garbage collected."""
        return self._source_ref()

    @property
    def is_subscribed(self) -> bool:
        return self._subscription is not None

    def record(self, *parameters: Any) -> None:
        """Append one occurrence. Called by the subscribed handler."""
        recorded = RecordedEvent(parameters)
        with self._lock:
            self._log.append(recorded)

    def _snapshot(self) -> list[RecordedEvent]:
        with self._lock:
            return list(self._log)

    def subscribe(self, bound_event: BoundEvent) -> HandlerAdapter:
        """
        Start recording ``bound_event``.

        Args:
            bound_event: The monitored object's event with this recorder's name

        Returns:
            The adapter subscribed to the event
        """
        if bound_event.name != self.event_name:
            raise ValueError(
                f"Recorder for '{self.event_name}' cannot subscribe to event '{bound_event.name}'"
            )
        if self._subscription is not None:
            self.unsubscribe()
        adapter = HandlerAdapter(self, bound_event.event)
        bound_event.subscribe(adapter)
        self._subscription = (bound_event, adapter)
        return adapter

    def unsubscribe(self) -> bool:
        """
        Stop recording. Already recorded occurrences are kept.

        Returns:
            True if a subscription was removed
        """
        if self._subscription is None:
            return False
        bound_event, adapter = self._subscription
        self._subscription = None
        return bound_event.unsubscribe(adapter)

    def __repr__(self) -> str:
        return f"EventRecorder({self.source_type_name}.{self.event_name}, count={self.count()})"


class FilteredEventRecorder(RecordedEventsView):
    """
    Live view over another recorder restricted to matching occurrences.

    Example:
        >>> name_changes = recorder.where(
        ...     lambda e: e.parameters[1].property_name == "name", "property 'name'"
        ... )
        >>> name_changes.count()
        2
    """

    def __init__(
        self,
        parent: RecordedEventsView,
        predicate: Callable[[RecordedEvent], bool],
        description: str,
    ) -> None:
        self._parent = parent
        self._predicate = predicate
        self.description = description
        self.event_name = parent.event_name
        self.source_type_name = parent.source_type_name

    @property
    def parent(self) -> RecordedEventsView:
        return self._parent

    @property
    def source(self) -> object | None:
        return self._parent.source

    def _snapshot(self) -> list[RecordedEvent]:
        return [recorded for recorded in self._parent if self._predicate(recorded)]

    def __repr__(self) -> str:
        return f"FilteredEventRecorder({self.source_type_name}.{self.event_name}, {self.description})"


__all__ = [
    "EventRecorder",
    "FilteredEventRecorder",
    "RecordedEvent",
    "RecordedEventsView",
    "describe_predicate",
]
