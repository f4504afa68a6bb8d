"""
A dependency with a destructive side effect, and its non-destructive substitute.

Both implementations satisfy ``SomeDependencyPort`` and record ``something_done`` on
their own telemetry channel; only ``SomeDependency`` performs the real effect.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

from useful_objects.core.actuator import UsefulObject
from useful_objects.core.recipe import register_recipe
from useful_objects.telemetry.channel import Telemetry, TelemetrySlot
from useful_objects.telemetry.sink import Sink

logger = logging.getLogger(__name__)


@runtime_checkable
class SomeDependencyPort(Protocol):
    def do_something(self, subject: Any = None) -> Any: ...


class SomeDependencySink(Sink):
    events = ("something_done",)


class SomeDependency(UsefulObject):
    telemetry = TelemetrySlot()
    telemetry_sink_class = SomeDependencySink

    def __init__(self) -> None:
        self.effects: list[Any] = []

    def actuate(self) -> Any:
        return self.do_something()

    def do_something(self, subject: Any = None) -> bool:
        self.telemetry.record("something_done", subject)
        self.do_some_destructive_side_effect(subject)
        return True

    def do_some_destructive_side_effect(self, subject: Any) -> None:
        self.effects.append(subject)
        logger.info(
            "destructive_side_effect",
            extra={"event": "destructive_side_effect", "subject": subject},
        )


class SubstituteSomeDependency(UsefulObject):
    """Stands in for SomeDependency where the real effect must not happen."""

    telemetry = TelemetrySlot()
    telemetry_sink_class = SomeDependencySink

    def __init__(self) -> None:
        self.pretended: list[Any] = []

    def actuate(self) -> Any:
        return self.do_something()

    def do_something(self, subject: Any = None) -> bool:
        self.telemetry.record("something_done", subject)
        self.pretend_to_do_some_destructive_side_effect(subject)
        return True

    def pretend_to_do_some_destructive_side_effect(self, subject: Any) -> None:
        self.pretended.append(subject)
        logger.debug(
            "pretended_side_effect",
            extra={"event": "pretended_side_effect", "subject": subject},
        )


register_recipe(SomeDependency, "telemetry", Telemetry)
register_recipe(SubstituteSomeDependency, "telemetry", Telemetry)
