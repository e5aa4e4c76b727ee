"""Unit tests for the monitor facade."""

import gc

import pytest

from eventmonitor import Event, monitor, monitoring, stop_monitoring
from eventmonitor.exceptions import (
    AlreadyMonitoredError,
    NoEventsExposedError,
    NotMonitoredError,
    NullSourceError,
    UnknownEventError,
)
from eventmonitor.monitoring import EventMonitor, EventRecorder, MonitorRegistry, default_registry
from tests.fixtures import Person, Silent, SmartThermostat, Thermostat


class TestMonitor:
    """Tests for monitor()."""

    def test_one_recorder_per_event(self, thermostat):
        recorders = monitor(thermostat)

        assert isinstance(recorders, tuple)
        assert [r.event_name for r in recorders] == ["changed", "reset", "alarm"]
        assert all(isinstance(r, EventRecorder) for r in recorders)

    def test_recorders_are_registered(self, thermostat):
        recorders = monitor(thermostat)
        assert default_registry.get(thermostat) == recorders

    def test_subscribes_every_event(self, thermostat):
        monitor(thermostat)

        assert len(thermostat.changed) == 1
        assert len(thermostat.reset) == 1
        assert len(thermostat.alarm) == 1

    def test_records_firings(self, thermostat):
        changed, reset, alarm = monitor(thermostat)

        thermostat.set(21)
        thermostat.do_reset()
        thermostat.raise_alarm(1, "ok")

        assert changed.count() == 1
        assert reset.count() == 1
        assert alarm.first().parameters == (thermostat, 1, "ok")

    def test_inherited_events(self):
        recorders = monitor(SmartThermostat())
        assert [r.event_name for r in recorders] == ["changed", "reset", "alarm", "connected"]

    def test_property_changed_only(self, person):
        recorders = monitor(person)
        assert [r.event_name for r in recorders] == ["property_changed"]

    def test_none_source(self):
        with pytest.raises(NullSourceError, match="<None>"):
            monitor(None)

    def test_no_events(self):
        with pytest.raises(NoEventsExposedError) as exc_info:
            monitor(Silent())

        assert exc_info.value.source_type == "Silent"
        assert "Type Silent does not expose any events" in str(exc_info.value)

    def test_builtin_values_expose_no_events(self):
        with pytest.raises(NoEventsExposedError):
            monitor("a string")

    def test_remonitor_replaces(self, thermostat):
        first = monitor(thermostat)
        thermostat.set(21)
        second = monitor(thermostat)
        thermostat.set(22)

        assert default_registry.get(thermostat) == second
        assert first[0].count() == 1
        assert second[0].count() == 1
        assert len(thermostat.changed) == 1

    def test_aliased_event_is_monitored_once(self):
        class Aliased:
            changed = Event("sender", "args")
            updated = changed

        source = Aliased()
        recorders = monitor(source)

        assert [r.event_name for r in recorders] == ["changed"]
        source.updated.fire(source, 1)
        assert recorders[0].count() == 1
        assert len(source.changed) == 1

    def test_failed_subscription_detaches_earlier_recorders(self, thermostat, monkeypatch):
        original_subscribe = EventRecorder.subscribe

        def subscribe(recorder, bound_event):
            if recorder.event_name == "alarm":
                raise RuntimeError("subscription refused")
            return original_subscribe(recorder, bound_event)

        monkeypatch.setattr(EventRecorder, "subscribe", subscribe)

        with pytest.raises(RuntimeError, match="subscription refused"):
            monitor(thermostat)

        assert len(thermostat.changed) == 0
        assert len(thermostat.reset) == 0
        assert not default_registry.is_monitored(thermostat)

    def test_recorders_do_not_keep_source_alive(self):
        thermostat = Thermostat()
        recorders = monitor(thermostat)

        del thermostat
        gc.collect()

        assert recorders[0].source is None
        assert len(default_registry) == 0


class TestEventMonitor:
    """Tests for EventMonitor bound to its own registry."""

    def test_uses_given_registry(self, event_monitor_instance, registry, thermostat):
        recorders = event_monitor_instance.monitor(thermostat)

        assert registry.get(thermostat) == recorders
        assert thermostat not in default_registry

    def test_defaults_to_default_registry(self):
        assert EventMonitor().registry is default_registry

    def test_get_recorder(self, event_monitor_instance, thermostat):
        event_monitor_instance.monitor(thermostat)
        recorder = event_monitor_instance.get_recorder(thermostat, "reset")
        assert recorder.event_name == "reset"

    def test_get_recorder_unknown_event(self, event_monitor_instance, thermostat):
        event_monitor_instance.monitor(thermostat)

        with pytest.raises(UnknownEventError) as exc_info:
            event_monitor_instance.get_recorder(thermostat, "exploded")

        error = exc_info.value
        assert error.event_name == "exploded"
        assert error.available_events == ["changed", "reset", "alarm"]
        assert 'Type <Thermostat> does not expose an event named "exploded"' in str(error)

    def test_get_recorder_not_monitored(self, event_monitor_instance, thermostat):
        with pytest.raises(NotMonitoredError):
            event_monitor_instance.get_recorder(thermostat, "changed")

    def test_recorders(self, event_monitor_instance, thermostat):
        recorders = event_monitor_instance.monitor(thermostat)
        assert event_monitor_instance.recorders(thermostat) == recorders

    def test_error_policy_leaves_original_subscriptions(self, thermostat):
        strict = EventMonitor(MonitorRegistry(remonitor="error"))
        original = strict.monitor(thermostat)

        with pytest.raises(AlreadyMonitoredError):
            strict.monitor(thermostat)

        thermostat.set(21)
        assert len(thermostat.changed) == 1
        assert original[0].count() == 1


class TestStopMonitoring:
    """Tests for stop_monitoring() and monitoring()."""

    def test_stop_monitoring_detaches(self, thermostat):
        (changed, *_) = monitor(thermostat)
        thermostat.set(21)

        assert stop_monitoring(thermostat) is True
        thermostat.set(22)

        assert changed.count() == 1
        assert len(thermostat.changed) == 0
        assert thermostat not in default_registry

    def test_stop_monitoring_unmonitored(self, thermostat):
        assert stop_monitoring(thermostat) is False

    def test_context_manager(self, thermostat):
        with monitoring(thermostat) as recorders:
            thermostat.set(21)
            assert thermostat in default_registry

        thermostat.set(22)

        assert recorders[0].count() == 1
        assert thermostat not in default_registry

    def test_context_manager_stops_on_error(self, thermostat):
        with pytest.raises(RuntimeError), monitoring(thermostat):
            raise RuntimeError("boom")

        assert len(thermostat.changed) == 0

    def test_person_context_manager(self):
        person = Person()
        with monitoring(person) as (property_changed,):
            person.name = "Grace"
        assert property_changed.count() == 1
