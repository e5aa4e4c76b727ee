"""
Shared test fixtures for the eventmonitor library.

Usage:
    from tests.fixtures import (
        Person,
        Thermostat,
        TemperatureChanged,
    )
"""

from tests.fixtures.sources import (
    AlwaysEqual,
    NoWeakRefSource,
    Person,
    Reading,
    Silent,
    SmartThermostat,
    TemperatureChanged,
    Thermostat,
)

__all__ = [
    # Payloads
    "Reading",
    "TemperatureChanged",
    # Sources
    "AlwaysEqual",
    "NoWeakRefSource",
    "Person",
    "Silent",
    "SmartThermostat",
    "Thermostat",
]
