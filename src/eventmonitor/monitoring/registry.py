"""
Process-wide registry of monitored objects and their recorders.

Objects are keyed by identity, never by ``__eq__``/``__hash__``, so two equal
but distinct objects are monitored independently and unhashable objects can be
monitored at all. Entries hold the object through a weak reference and
disappear once it is garbage collected; monitoring never extends an object's
lifetime.

The registry can be used as a singleton (via the module-level
``default_registry``) or instantiated for isolated testing.
"""

from __future__ import annotations

import logging
import threading
import weakref
from collections.abc import Callable, Sequence
from typing import Literal

from eventmonitor.exceptions import AlreadyMonitoredError, NotMonitoredError, type_name
from eventmonitor.monitoring.recorder import EventRecorder

logger = logging.getLogger(__name__)

# What to do when an already monitored object is monitored again
RemonitorPolicy = Literal["replace", "error"]


class _Entry:
    __slots__ = ("ref", "recorders")

    def __init__(self, ref: Callable[[], object | None], recorders: tuple[EventRecorder, ...]) -> None:
        self.ref = ref
        self.recorders = recorders


class MonitorRegistry:
    """
    Registry mapping monitored objects to their event recorders.

    Thread-Safety:
        All operations are thread-safe and use a single internal lock,
        separate from the recorders' own locks.

    Example:
        >>> registry = MonitorRegistry()
        >>> registry.add(thermostat, recorders)
        >>> registry.get(thermostat) == tuple(recorders)
        True

    Attributes:
        remonitor: Policy applied when ``add`` finds an existing entry
    """

    def __init__(self, *, remonitor: RemonitorPolicy = "replace") -> None:
        """
        Initialize an empty registry.

        Args:
            remonitor: How to handle monitoring an object twice:
                - "replace": Detach the previous recorders and keep the new ones (default)
                - "error": Raise AlreadyMonitoredError
        """
        if remonitor not in ("replace", "error"):
            raise ValueError(f"remonitor must be 'replace' or 'error', got {remonitor!r}")
        self.remonitor = remonitor
        self._entries: dict[int, _Entry] = {}
        self._lock = threading.RLock()

    def add(self, source: object, recorders: Sequence[EventRecorder]) -> None:
        """
        Associate ``source`` with ``recorders``.

        Args:
            source: The monitored object
            recorders: One recorder per event, with distinct event names

        Raises:
            AlreadyMonitoredError: If ``source`` is monitored and the policy is "error"
        """
        names = [recorder.event_name for recorder in recorders]
        if len(set(names)) != len(names):
            raise ValueError(f"Recorders must have distinct event names, got {names}")

        key = id(source)
        with self._lock:
            previous = self._lookup(source)
            if previous is not None:
                if self.remonitor == "error":
                    raise AlreadyMonitoredError(type_name(source))
                for recorder in previous.recorders:
                    recorder.unsubscribe()
                logger.debug(
                    "Replacing recorders of monitored %s",
                    type_name(source),
                    extra={"source_type": type_name(source)},
                )

            self._entries[key] = _Entry(self._make_ref(source, key), tuple(recorders))

        logger.debug(
            "Monitoring %s for %d event(s)",
            type_name(source),
            len(names),
            extra={"source_type": type_name(source), "event_count": len(names)},
        )

    def get(self, source: object) -> tuple[EventRecorder, ...]:
        """
        Get the recorders of a monitored object.

        Raises:
            NotMonitoredError: If ``source`` is not being monitored
        """
        with self._lock:
            entry = self._lookup(source)
            if entry is None:
                raise NotMonitoredError(type_name(source))
            return entry.recorders

    def remove(self, source: object) -> bool:
        """
        Forget a monitored object, detaching its recorders from its events.

        Returns:
            True if the object was monitored and removed, False otherwise
        """
        with self._lock:
            entry = self._lookup(source)
            if entry is None:
                return False
            del self._entries[id(source)]
        for recorder in entry.recorders:
            recorder.unsubscribe()
        logger.debug(
            "Stopped monitoring %s",
            type_name(source),
            extra={"source_type": type_name(source)},
        )
        return True

    def is_monitored(self, source: object) -> bool:
        with self._lock:
            return self._lookup(source) is not None

    def clear(self) -> None:
        """
        Forget every monitored object, detaching all recorders.

        Primarily useful for testing to reset state between tests.
        """
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for entry in entries:
            for recorder in entry.recorders:
                recorder.unsubscribe()
        logger.debug("Monitor registry cleared")

    def _lookup(self, source: object) -> _Entry | None:
        entry = self._entries.get(id(source))
        # An id can be reused once its object is gone; only a live match counts
        if entry is None or entry.ref() is not source:
            return None
        return entry

    def _make_ref(self, source: object, key: int) -> Callable[[], object | None]:
        registry_ref = weakref.ref(self)

        def _discard(ref: weakref.ref[object]) -> None:
            registry = registry_ref()
            if registry is None:
                return
            with registry._lock:
                entry = registry._entries.get(key)
                if entry is not None and entry.ref is ref:
                    del registry._entries[key]

        try:
            return weakref.ref(source, _discard)
        except TypeError:
            logger.debug(
                "%s does not support weak references; holding it until stop_monitoring()",
                type_name(source),
                extra={"source_type": type_name(source)},
            )
            return lambda: source

    def __len__(self) -> int:
        """Return the number of monitored objects still alive."""
        with self._lock:
            return sum(1 for entry in list(self._entries.values()) if entry.ref() is not None)

    def __bool__(self) -> bool:
        """Registry is always truthy, even when empty."""
        return True

    def __contains__(self, source: object) -> bool:
        return self.is_monitored(source)


# Module-level default registry instance
default_registry = MonitorRegistry()


__all__ = [
    "MonitorRegistry",
    "RemonitorPolicy",
    "default_registry",
]
