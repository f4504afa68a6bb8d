import gc

import pytest

from useful_objects.core.dependency import declared_slots
from useful_objects.telemetry.channel import (
    TELEMETRY,
    Telemetry,
    TelemetrySlot,
    configure,
    declare_telemetry,
    register_sink,
)
from useful_objects.telemetry.sink import Sink


class Ordered:
    def __init__(self, log, label):
        self.log = log
        self.label = label

    def record(self, event, *payload, **fields):
        self.log.append((self.label, event, payload, fields))


def test_record_without_sinks_is_noop():
    Telemetry().record("something_done", 1, key="value")


def test_record_forwards_in_registration_order_unchanged():
    log = []
    channel = Telemetry()
    first = channel.register(Ordered(log, "first"))
    second = channel.register(Ordered(log, "second"))

    channel.record("saved", 1, 2, key="value")

    assert log == [
        ("first", "saved", (1, 2), {"key": "value"}),
        ("second", "saved", (1, 2), {"key": "value"}),
    ]
    assert channel.sinks == [first, second]


def test_register_has_no_replay():
    channel = Telemetry()
    channel.record("before")
    sink = channel.register(Sink())
    channel.record("after")

    assert not sink.recorded("before")
    assert sink.recorded("after")


def test_channel_holds_sinks_weakly():
    channel = Telemetry()
    channel.register(Sink())
    gc.collect()

    assert channel.sinks == []
    channel.record("nobody_listens")


def test_unregister():
    channel = Telemetry()
    sink = channel.register(Sink())
    channel.unregister(sink)
    channel.record("ignored")

    assert not sink.recorded("ignored")


def test_register_rejects_non_sink():
    with pytest.raises(TypeError):
        Telemetry().register(object())


def test_blank_event_rejected():
    with pytest.raises(ValueError):
        Telemetry().record("")


def test_sink_errors_propagate():
    class Broken:
        def record(self, event, *payload, **fields):
            raise RuntimeError("disk full")

    channel = Telemetry()
    sink = channel.register(Broken())

    with pytest.raises(RuntimeError, match="disk full"):
        channel.record("saved")
    assert sink is not None


def test_channel_conforms_to_telemetry_capability():
    assert TELEMETRY.operations == ("record", "register")
    assert TELEMETRY.conforms(Telemetry())


def test_telemetry_slot_defaults_to_empty_channel():
    class Host:
        telemetry = TelemetrySlot()

    host = Host()

    assert isinstance(host.telemetry, Telemetry)
    assert host.telemetry.sinks == []
    assert host.telemetry is host.telemetry
    assert declared_slots(Host)["telemetry"].kind == "telemetry"


def test_configure_installs_fresh_channel():
    class Host:
        telemetry = TelemetrySlot()

    host = Host()
    default = host.telemetry
    channel = configure(host)

    assert host.telemetry is channel
    assert channel is not default


def test_declare_telemetry_and_register_sink_with_custom_slot():
    class Host:
        pass

    declare_telemetry(Host, "events")
    host = Host()
    sink = register_sink(host, Sink(), "events")

    host.events.record("ping")

    assert sink.recorded("ping")
