"""
Starting and stopping event monitoring.

:func:`monitor` discovers every event declared on an object's class, creates
one :class:`~eventmonitor.monitoring.recorder.EventRecorder` per event,
subscribes a recording handler to each and registers the set so assertions can
find it later.

Example:
    >>> from eventmonitor import monitor, should_raise
    >>>
    >>> thermostat = Thermostat()
    >>> recorders = monitor(thermostat)
    >>> thermostat.set(21)
    >>> should_raise(thermostat, "changed").with_sender(thermostat)

    >>> with monitoring(thermostat) as recorders:
    ...     thermostat.set(22)
    >>> # recorders are detached here but keep what they recorded
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

from eventmonitor.events.declaration import BoundEvent, discover_events
from eventmonitor.exceptions import (
    NoEventsExposedError,
    NullSourceError,
    UnknownEventError,
    type_name,
)
from eventmonitor.monitoring.recorder import EventRecorder
from eventmonitor.monitoring.registry import MonitorRegistry, default_registry


class EventMonitor:
    """
    Subscribes recorders to objects' events and keeps track of them.

    Attributes:
        registry: Where recorder sets are stored
    """

    def __init__(self, registry: MonitorRegistry | None = None) -> None:
        """
        Args:
            registry: Registry to store recorders in (default: ``default_registry``)
        """
        self.registry = registry if registry is not None else default_registry

    def monitor(self, source: object) -> tuple[EventRecorder, ...]:
        """
        Start recording every event of ``source``.

        Monitoring an object again replaces its recorders (or raises, depending
        on the registry's ``remonitor`` policy).

        Args:
            source: Object whose class declares at least one event

        Returns:
            One recorder per event, in declaration order

        Raises:
            NullSourceError: If ``source`` is None
            NoEventsExposedError: If the class of ``source`` declares no events
            AlreadyMonitoredError: If already monitored under the "error" policy
        """
        if source is None:
            raise NullSourceError()

        events = discover_events(source)
        if not events:
            raise NoEventsExposedError(type_name(source))

        recorders: list[EventRecorder] = []
        try:
            for event_name in events:
                bound_event: BoundEvent = getattr(source, event_name)
                recorder = EventRecorder(source, event_name)
                recorders.append(recorder)
                recorder.subscribe(bound_event)
            self.registry.add(source, recorders)
        except Exception:
            for recorder in recorders:
                recorder.unsubscribe()
            raise

        return tuple(recorders)

    def stop_monitoring(self, source: object) -> bool:
        """
        Detach the recorders of ``source`` and forget it.

        Returns:
            True if ``source`` was being monitored
        """
        return self.registry.remove(source)

    def recorders(self, source: object) -> tuple[EventRecorder, ...]:
        """
        Get the recorders of a monitored object.

        Raises:
            NotMonitoredError: If ``source`` is not being monitored
        """
        return self.registry.get(source)

    def get_recorder(self, source: object, event_name: str) -> EventRecorder:
        """
        Get the recorder of one event of a monitored object.

        Raises:
            NotMonitoredError: If ``source`` is not being monitored
            UnknownEventError: If ``source`` has no event named ``event_name``
        """
        recorders = self.registry.get(source)
        for recorder in recorders:
            if recorder.event_name == event_name:
                return recorder
        raise UnknownEventError(
            type_name(source),
            event_name,
            [recorder.event_name for recorder in recorders],
        )

    @contextmanager
    def monitoring(self, source: object) -> Iterator[tuple[EventRecorder, ...]]:
        """Monitor ``source`` for the duration of a ``with`` block."""
        recorders = self.monitor(source)
        try:
            yield recorders
        finally:
            self.stop_monitoring(source)


default_monitor = EventMonitor()


def monitor(source: object) -> tuple[EventRecorder, ...]:
    """Start recording every event of ``source`` in the default registry."""
    return default_monitor.monitor(source)


def stop_monitoring(source: object) -> bool:
    """Detach the recorders of ``source`` and remove it from the default registry."""
    return default_monitor.stop_monitoring(source)


def monitoring(source: object) -> AbstractContextManager[tuple[EventRecorder, ...]]:
    """Monitor ``source`` in the default registry for the duration of a ``with`` block."""
    return default_monitor.monitoring(source)


__all__ = [
    "EventMonitor",
    "default_monitor",
    "monitor",
    "monitoring",
    "stop_monitoring",
]
