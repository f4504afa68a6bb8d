"""
Telemetry channel: a per-owner broadcast point for named events.

Channels hold their sinks by weak reference; whoever registers a sink keeps it
alive. Recording with no sinks registered does nothing.
"""

from __future__ import annotations

import logging
import weakref
from typing import Any, TypeVar

from useful_objects.core.capability import CapabilityInterface
from useful_objects.core.dependency import (
    TELEMETRY as TELEMETRY_KIND,
    Dependency,
    get_dependency,
    set_dependency,
)
from useful_objects.ports.sink import Sink as SinkPort
from useful_objects.ports.telemetry import Telemetry as TelemetryPort

logger = logging.getLogger(__name__)

S = TypeVar("S", bound=SinkPort)

TELEMETRY = CapabilityInterface.from_protocol(TelemetryPort, name="Telemetry")


class Telemetry:
    def __init__(self) -> None:
        self._sinks: list[weakref.ReferenceType[Any]] = []

    @property
    def sinks(self) -> list[Any]:
        """Live sinks in registration order."""
        live = []
        for ref in self._sinks:
            sink = ref()
            if sink is not None:
                live.append(sink)
        if len(live) != len(self._sinks):
            self._sinks = [weakref.ref(sink) for sink in live]
        return live

    def register(self, sink: S) -> S:
        if not callable(getattr(sink, "record", None)):
            raise TypeError(f"{type(sink).__name__} cannot be registered: it has no record()")
        self._sinks.append(weakref.ref(sink))
        logger.debug(
            "sink_registered",
            extra={
                "event": "sink_registered",
                "sink": type(sink).__qualname__,
                "sinks_total": len(self._sinks),
            },
        )
        return sink

    def unregister(self, sink: Any) -> None:
        self._sinks = [ref for ref in self._sinks if ref() is not None and ref() is not sink]

    def record(self, event: str, *payload: Any, **fields: Any) -> None:
        if not event:
            raise ValueError("Telemetry event name must be a non-empty string")
        # snapshot: sinks registered while recording only see later events
        for sink in self.sinks:
            sink.record(event, *payload, **fields)

    def __repr__(self) -> str:
        return f"<Telemetry sinks={len(self.sinks)}>"


class TelemetrySlot(Dependency):
    """Class-body declaration of a telemetry slot; defaults to an empty channel."""

    kind = TELEMETRY_KIND

    def __init__(self) -> None:
        super().__init__(TELEMETRY, default=Telemetry)


def declare_telemetry(owner: type, slot_name: str = "telemetry") -> TelemetrySlot:
    descriptor = TelemetrySlot()
    setattr(owner, slot_name, descriptor)
    descriptor.__set_name__(owner, slot_name)
    return descriptor


def configure(instance: Any, slot_name: str = "telemetry") -> Telemetry:
    """Install a fresh channel on ``instance``; the telemetry wiring step of recipes."""
    channel = Telemetry()
    set_dependency(instance, slot_name, channel)
    return channel


def register_sink(instance: Any, sink: S, slot_name: str = "telemetry") -> S:
    get_dependency(instance, slot_name).register(sink)
    return sink
