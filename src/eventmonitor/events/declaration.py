"""
Declaring observable events on a class.

Python objects have no built-in notion of an event, so observable events are
declared explicitly with the :class:`Event` descriptor. The declaration fixes
the handler shape (arity, parameter names and optional annotations), which is
what lets the monitor subscribe a recording handler to any event without
knowing its signature in advance.

Example:
    >>> class Thermostat:
    ...     changed = Event("sender", "args")
    ...     reset = Event()
    ...
    ...     def set(self, value):
    ...         self.changed.fire(self, value)
    >>>
    >>> thermostat = Thermostat()
    >>> thermostat.changed += lambda sender, args: print(args)
    >>> thermostat.set(21)
    21
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any, overload

from eventmonitor.exceptions import EventSignatureError
from eventmonitor.handlers.adapter import get_handler_name

logger = logging.getLogger(__name__)

EventHandlerFunc = Callable[..., Any]


class Event:
    """
    Descriptor declaring an observable event and its handler shape.

    Parameters are declared by name, optionally with an annotation given as a
    keyword argument. Positional names come first, then keyword ones, in the
    order written. An event declared without parameters is fired with no
    arguments.

    Accessing the descriptor on an instance returns that instance's
    :class:`BoundEvent`; on the class it returns the descriptor itself.

    Example:
        >>> class Order:
        ...     shipped = Event("sender", "args")
        ...     line_added = Event(sender=object, sku=str, quantity=int)
        ...     closed = Event()

    Attributes:
        name: Attribute name the event was declared under
        signature: The exact handler signature for this event
    """

    def __init__(self, *parameter_names: str, **typed_parameters: Any) -> None:
        names = list(parameter_names) + list(typed_parameters)
        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise ValueError(f"Event parameter names must be identifiers, got {name!r}")
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate event parameter names: {names}")

        self._parameter_names = tuple(names)
        self.signature = inspect.Signature(
            [
                inspect.Parameter(
                    name,
                    inspect.Parameter.POSITIONAL_OR_KEYWORD,
                    annotation=typed_parameters.get(name, inspect.Parameter.empty),
                )
                for name in names
            ],
            return_annotation=None,
        )
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        # An alias (`updated = changed`) shares the first attribute's name and handlers
        if not self.name:
            self.name = name

    @property
    def parameter_names(self) -> tuple[str, ...]:
        """Names of the positional arguments each firing carries."""
        return self._parameter_names

    @property
    def arity(self) -> int:
        """Number of positional arguments each firing carries."""
        return len(self._parameter_names)

    @overload
    def __get__(self, instance: None, owner: type) -> Event: ...

    @overload
    def __get__(self, instance: object, owner: type) -> BoundEvent: ...

    def __get__(self, instance: object | None, owner: type) -> Event | BoundEvent:
        if instance is None:
            return self
        try:
            storage = instance.__dict__
        except AttributeError:
            raise TypeError(
                f"Cannot declare event {self.name!r} on {owner.__name__}: "
                f"instances need a __dict__ to hold their handlers"
            ) from None
        bound = storage.get(self.name)
        if bound is None:
            bound = storage.setdefault(self.name, BoundEvent(self))
        return bound  # type: ignore[no-any-return]

    def __set__(self, instance: object, value: Any) -> None:
        # `obj.changed += handler` rebinds the attribute to the same BoundEvent
        current = instance.__dict__.get(self.name)
        if current is None or value is not current:
            raise AttributeError(
                f"Cannot assign to event {self.name!r}; use += or subscribe() to add handlers"
            )

    def __repr__(self) -> str:
        return f"Event({self.name}({', '.join(self._parameter_names)}))"


class BoundEvent:
    """
    The per-instance side of an :class:`Event`: its subscribed handlers.

    Handlers are invoked synchronously, in subscription order, on the thread
    that fires the event.

    Thread-Safety:
        Subscribing, unsubscribing and firing may happen from any thread;
        the handler list is guarded by a lock and firing works on a snapshot.
    """

    __slots__ = ("_event", "_handlers", "_lock")

    def __init__(self, event: Event) -> None:
        self._event = event
        self._handlers: list[EventHandlerFunc] = []
        self._lock = threading.Lock()

    @property
    def event(self) -> Event:
        """The declaring descriptor."""
        return self._event

    @property
    def name(self) -> str:
        return self._event.name

    @property
    def signature(self) -> inspect.Signature:
        return self._event.signature

    @property
    def handlers(self) -> tuple[EventHandlerFunc, ...]:
        """Snapshot of the currently subscribed handlers."""
        with self._lock:
            return tuple(self._handlers)

    def subscribe(self, handler: EventHandlerFunc) -> EventHandlerFunc:
        """
        Subscribe a handler to this event.

        Args:
            handler: Callable accepting the event's positional arguments

        Returns:
            The handler (enables use as decorator)

        Raises:
            EventSignatureError: If the handler cannot accept the event's arguments
        """
        self._check_handler(handler)
        with self._lock:
            self._handlers.append(handler)
        logger.debug(
            "Subscribed %s to event '%s'",
            get_handler_name(handler),
            self.name,
            extra={"event_name": self.name},
        )
        return handler

    def unsubscribe(self, handler: EventHandlerFunc) -> bool:
        """
        Remove the first subscription equal to ``handler``.

        Returns:
            True if a subscription was removed, False if none matched
        """
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                return False
        logger.debug(
            "Unsubscribed %s from event '%s'",
            get_handler_name(handler),
            self.name,
            extra={"event_name": self.name},
        )
        return True

    def __iadd__(self, handler: EventHandlerFunc) -> BoundEvent:
        self.subscribe(handler)
        return self

    def __isub__(self, handler: EventHandlerFunc) -> BoundEvent:
        self.unsubscribe(handler)
        return self

    def fire(self, *args: Any) -> None:
        """
        Raise the event, invoking every subscribed handler with ``args``.

        Raises:
            EventSignatureError: If the number of arguments differs from the declaration
        """
        if len(args) != self._event.arity:
            raise EventSignatureError(
                self.name,
                self._event.parameter_names,
                f"fired with {len(args)} argument(s), expected {self._event.arity}",
            )
        for handler in self.handlers:
            handler(*args)

    __call__ = fire

    def _check_handler(self, handler: EventHandlerFunc) -> None:
        if not callable(handler):
            raise EventSignatureError(
                self.name,
                self._event.parameter_names,
                f"handler must be callable, got {type(handler).__name__}",
            )
        try:
            handler_signature = inspect.signature(handler)
        except (TypeError, ValueError):
            # Some builtins expose no signature; accept them as-is
            return
        try:
            handler_signature.bind(*range(self._event.arity))
        except TypeError as exc:
            raise EventSignatureError(
                self.name,
                self._event.parameter_names,
                f"handler {get_handler_name(handler)} cannot accept "
                f"{self._event.arity} positional argument(s): {exc}",
            ) from exc

    def __len__(self) -> int:
        with self._lock:
            return len(self._handlers)

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"BoundEvent({self.name}, handlers={len(self)})"


def discover_events(source: object) -> dict[str, Event]:
    """
    Find every event declared on the class of ``source``.

    Base class events come first, in definition order. An attribute that a
    subclass redefines as something other than an :class:`Event` hides the
    base class event. An event bound to several attributes is reported once,
    under the name it was first declared with.

    Args:
        source: Any object

    Returns:
        Mapping of event name to its declaring descriptor (possibly empty)
    """
    attributes: dict[str, Event] = {}
    for klass in reversed(type(source).__mro__):
        for attr_name, value in vars(klass).items():
            if isinstance(value, Event):
                attributes[attr_name] = value
            elif attr_name in attributes:
                del attributes[attr_name]

    events: dict[str, Event] = {}
    for event in attributes.values():
        events.setdefault(event.name, event)
    return events


__all__ = [
    "BoundEvent",
    "Event",
    "EventHandlerFunc",
    "discover_events",
]
