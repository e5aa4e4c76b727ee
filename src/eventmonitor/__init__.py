"""
eventmonitor - Record the events an object publishes and assert on them in tests.

This library provides:
- The Event descriptor for declaring observable events on any class
- NotifyPropertyChanged, a mixin publishing property_changed notifications
- monitor(), which records every occurrence of every event of an object
- Fluent assertions: should_raise(...).with_sender(...).with_args(...)
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("eventsource-monitor")
except PackageNotFoundError:
    # Package not installed (running from source without install)
    __version__ = "0.0.0.dev0"

# Event declaration
from eventmonitor.events import (
    PROPERTY_CHANGED_EVENT_NAME,
    BoundEvent,
    Event,
    EventArgs,
    NotifyPropertyChanged,
    PropertyChangedEventArgs,
    discover_events,
)

# Exceptions
from eventmonitor.exceptions import (
    AlreadyMonitoredError,
    AmbiguousArgumentError,
    EmptyRecorderError,
    EventMonitorError,
    EventSignatureError,
    InvalidPropertySelectorError,
    MissingArgumentError,
    NoEventArgumentsError,
    NoEventsExposedError,
    NotMonitoredError,
    NullSourceError,
    UnknownEventError,
)
from eventmonitor.execution import EventAssertionError
from eventmonitor.handlers import HandlerAdapter

# Monitoring
from eventmonitor.monitoring import (
    EventMonitor,
    EventRecorder,
    FilteredEventRecorder,
    MonitorRegistry,
    RecordedEvent,
    default_registry,
    monitor,
    monitoring,
    stop_monitoring,
)

# Assertions
from eventmonitor.testing import (
    should_not_raise,
    should_not_raise_property_change_for,
    should_raise,
    should_raise_property_change_for,
    with_args,
    with_sender,
)

__all__ = [
    "__version__",
    # Event declaration
    "PROPERTY_CHANGED_EVENT_NAME",
    "BoundEvent",
    "Event",
    "EventArgs",
    "NotifyPropertyChanged",
    "PropertyChangedEventArgs",
    "discover_events",
    # Exceptions
    "AlreadyMonitoredError",
    "AmbiguousArgumentError",
    "EmptyRecorderError",
    "EventAssertionError",
    "EventMonitorError",
    "EventSignatureError",
    "InvalidPropertySelectorError",
    "MissingArgumentError",
    "NoEventArgumentsError",
    "NoEventsExposedError",
    "NotMonitoredError",
    "NullSourceError",
    "UnknownEventError",
    # Monitoring
    "EventMonitor",
    "EventRecorder",
    "FilteredEventRecorder",
    "HandlerAdapter",
    "MonitorRegistry",
    "RecordedEvent",
    "default_registry",
    "monitor",
    "monitoring",
    "stop_monitoring",
    # Assertions
    "should_not_raise",
    "should_not_raise_property_change_for",
    "should_raise",
    "should_raise_property_change_for",
    "with_args",
    "with_sender",
]
