"""
Monitoring: recorders, the monitor registry and the monitor facade.

Exports:
- monitor / stop_monitoring / monitoring: Start and stop recording an object's events
- EventMonitor: Facade bound to a specific registry
- MonitorRegistry / default_registry: Identity-keyed store of recorder sets
- EventRecorder / FilteredEventRecorder / RecordedEvent: The recorded log and views over it
"""

from eventmonitor.monitoring.monitor import (
    EventMonitor,
    default_monitor,
    monitor,
    monitoring,
    stop_monitoring,
)
from eventmonitor.monitoring.recorder import (
    EventRecorder,
    FilteredEventRecorder,
    RecordedEvent,
    RecordedEventsView,
)
from eventmonitor.monitoring.registry import (
    MonitorRegistry,
    RemonitorPolicy,
    default_registry,
)

__all__ = [
    "EventMonitor",
    "EventRecorder",
    "FilteredEventRecorder",
    "MonitorRegistry",
    "RecordedEvent",
    "RecordedEventsView",
    "RemonitorPolicy",
    "default_monitor",
    "default_registry",
    "monitor",
    "monitoring",
    "stop_monitoring",
]
