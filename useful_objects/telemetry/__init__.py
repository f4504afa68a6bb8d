from useful_objects.telemetry.channel import (
    TELEMETRY,
    Telemetry,
    TelemetrySlot,
    configure,
    declare_telemetry,
    register_sink,
)
from useful_objects.telemetry.sink import Record, Sink

__all__ = [
    "TELEMETRY",
    "Record",
    "Sink",
    "Telemetry",
    "TelemetrySlot",
    "configure",
    "declare_telemetry",
    "register_sink",
]
