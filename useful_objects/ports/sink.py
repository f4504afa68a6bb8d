"""Sink Port Interface.

Contract: Observer registered on a telemetry channel. Receives every record the
channel forwards and answers whether a given event was recorded.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    def record(self, event: str, *payload: Any, **fields: Any) -> None:
        """Accept one event forwarded by a telemetry channel."""
        ...

    def recorded(self, event: str) -> bool:
        """Return True if ``event`` was ever recorded by this sink."""
        ...
