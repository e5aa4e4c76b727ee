"""
Test assertions for monitored events.

Components:
    should_raise / should_not_raise: Assert an event was (not) raised
    should_raise_property_change_for / should_not_raise_property_change_for:
        Assert property_changed was (not) raised for a property
    with_sender / with_args: Chained checks on the recorded occurrences
    property_name_of: Resolve a property selector to its name

Example:
    >>> from eventmonitor import monitor
    >>> from eventmonitor.testing import should_raise
    >>>
    >>> monitor(person)
    >>> person.rename("Ada")
    >>> should_raise(person, "property_changed").with_sender(person)

Note:
    This module is intended for test code only. The pytest fixture lives in
    ``eventmonitor.testing.plugin`` and is not imported here.
"""

from eventmonitor.execution import EventAssertionError, fail, verify
from eventmonitor.testing.assertions import (
    get_recorder,
    should_not_raise,
    should_not_raise_property_change_for,
    should_raise,
    should_raise_property_change_for,
    with_args,
    with_sender,
)
from eventmonitor.testing.selectors import PropertySelector, property_name_of

__all__ = [
    "EventAssertionError",
    "PropertySelector",
    "fail",
    "get_recorder",
    "property_name_of",
    "should_not_raise",
    "should_not_raise_property_change_for",
    "should_raise",
    "should_raise_property_change_for",
    "verify",
    "with_args",
    "with_sender",
]
