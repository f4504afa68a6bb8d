"""
A useful object built from a source record, delegating its effect to SomeDependency.
"""

from __future__ import annotations

from typing import Any

from useful_objects.core.actuator import UsefulObject
from useful_objects.core.dependency import Dependency
from useful_objects.core.recipe import OPERATIONAL, SUBSTITUTE, register_recipe
from useful_objects.samples.some_dependency import (
    SomeDependency,
    SomeDependencyPort,
    SubstituteSomeDependency,
)
from useful_objects.telemetry.channel import Telemetry, TelemetrySlot
from useful_objects.telemetry.sink import Sink


class SomethingSink(Sink):
    events = ("something_done",)


class Something(UsefulObject):
    some_dependency = Dependency(SomeDependencyPort, name="SomeDependency")
    telemetry = TelemetrySlot()
    telemetry_sink_class = SomethingSink

    def __init__(self, some_value: Any, some_other_value: Any) -> None:
        self.some_value = some_value
        self.some_other_value = some_other_value

    @classmethod
    def build(
        cls,
        record: Any,
        *,
        namespace: str = OPERATIONAL,
        require_operational: bool = False,
    ) -> Something:
        """Build from any object exposing ``some_value`` and ``some_other_value``."""
        return super().build(
            record.some_value,
            record.some_other_value,
            namespace=namespace,
            require_operational=require_operational,
        )

    def actuate(self) -> Any:
        return self.do_something()

    def do_something(self) -> Any:
        self.telemetry.record("something_done", self.some_value)
        return self.do_something_else()

    def do_something_else(self) -> Any:
        return self.some_dependency.do_something(self.some_value)


register_recipe(Something, "some_dependency", SomeDependency.build)
register_recipe(Something, "telemetry", Telemetry)
register_recipe(
    Something, "some_dependency", SubstituteSomeDependency.build, namespace=SUBSTITUTE
)
register_recipe(Something, "telemetry", Telemetry, namespace=SUBSTITUTE)
