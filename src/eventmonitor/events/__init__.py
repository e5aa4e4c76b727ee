"""
Event declaration primitives and payload models.

Exports:
- Event: Descriptor declaring an observable event and its handler shape
- BoundEvent: Per-instance handler list of an Event
- discover_events: Find all events declared on an object's class
- EventArgs / PropertyChangedEventArgs: Immutable payload models
- NotifyPropertyChanged: Mixin publishing the property_changed event
"""

from eventmonitor.events.base import (
    PROPERTY_CHANGED_EVENT_NAME,
    EventArgs,
    NotifyPropertyChanged,
    PropertyChangedEventArgs,
)
from eventmonitor.events.declaration import (
    BoundEvent,
    Event,
    EventHandlerFunc,
    discover_events,
)

__all__ = [
    "PROPERTY_CHANGED_EVENT_NAME",
    "BoundEvent",
    "Event",
    "EventArgs",
    "EventHandlerFunc",
    "NotifyPropertyChanged",
    "PropertyChangedEventArgs",
    "discover_events",
]
