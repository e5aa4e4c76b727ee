"""
Shared pytest fixtures for the eventmonitor library tests.

This module provides:
- Event source fixtures (thermostat, person)
- Registry fixtures (registry, event_monitor_instance)
- An autouse fixture resetting the default registry between tests
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from eventmonitor.monitoring import EventMonitor, MonitorRegistry, default_registry
from tests.fixtures import Person, Thermostat

# =============================================================================
# Registry Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_default_registry() -> Iterator[None]:
    """Forget every object monitored through the default registry after each test."""
    yield
    default_registry.clear()


@pytest.fixture
def registry() -> MonitorRegistry:
    """
    Provide an isolated registry with the default "replace" policy.

    Returns:
        A new, empty MonitorRegistry.
    """
    return MonitorRegistry()


@pytest.fixture
def event_monitor_instance(registry: MonitorRegistry) -> EventMonitor:
    """
    Provide a monitor bound to the isolated registry.

    Returns:
        An EventMonitor that does not touch the default registry.
    """
    return EventMonitor(registry)


# =============================================================================
# Source Fixtures
# =============================================================================


@pytest.fixture
def thermostat() -> Thermostat:
    """Provide a thermostat at 20 degrees."""
    return Thermostat()


@pytest.fixture
def person() -> Person:
    """Provide a person publishing property_changed."""
    return Person(name="Ada", age=36)
