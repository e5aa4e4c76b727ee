"""
Event payload models and the property-changed notification.

Payloads are immutable Pydantic models, so a recorded occurrence can never be
mutated after the fact by the code under test.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from eventmonitor.events.declaration import Event

PROPERTY_CHANGED_EVENT_NAME = "property_changed"


class EventArgs(BaseModel):
    """
    Base class for event payloads.

    Subclass it to carry event data; the conventional event shape is
    ``(sender, args)`` where ``args`` is an EventArgs instance.

    Example:
        >>> class TemperatureChanged(EventArgs):
        ...     old: float
        ...     new: float
    """

    model_config = ConfigDict(frozen=True)


class PropertyChangedEventArgs(EventArgs):
    """
    Payload of the ``property_changed`` event.

    Attributes:
        property_name: Name of the property whose value changed
    """

    property_name: str = Field(..., description="Name of the changed property")


class NotifyPropertyChanged:
    """
    Mixin publishing a ``property_changed(sender, args)`` event.

    Example:
        >>> class Person(NotifyPropertyChanged):
        ...     def __init__(self):
        ...         self._name = ""
        ...
        ...     @property
        ...     def name(self):
        ...         return self._name
        ...
        ...     @name.setter
        ...     def name(self, value):
        ...         self._name = value
        ...         self.on_property_changed("name")
    """

    property_changed = Event(sender=Any, args=PropertyChangedEventArgs)

    def on_property_changed(self, property_name: str) -> None:
        """Raise ``property_changed`` for ``property_name`` with this object as sender."""
        self.property_changed.fire(self, PropertyChangedEventArgs(property_name=property_name))


__all__ = [
    "PROPERTY_CHANGED_EVENT_NAME",
    "EventArgs",
    "NotifyPropertyChanged",
    "PropertyChangedEventArgs",
]
