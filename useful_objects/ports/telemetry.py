"""Telemetry Port Interface.

Contract: A per-owner broadcast point. record(event, *payload, **fields) forwards
synchronously, in registration order, to every registered sink; register(sink)
only affects subsequent records.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from useful_objects.ports.sink import Sink


@runtime_checkable
class Telemetry(Protocol):
    def record(self, event: str, *payload: Any, **fields: Any) -> None: ...

    def register(self, sink: Sink) -> Sink: ...
