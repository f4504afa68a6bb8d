"""
Actuator protocol: the base class for useful objects.

    class Something(UsefulObject):
        some_dependency = Dependency(SomeDependencyPort)
        telemetry = TelemetrySlot()

        def actuate(self): ...

``Something(...)`` leaves every slot at its default; ``Something.build(...)`` also
applies the registered recipes; ``Something.call(...)`` builds and actuates.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from useful_objects.core.recipe import OPERATIONAL, RecipeRegistry, registry
from useful_objects.telemetry.channel import register_sink
from useful_objects.telemetry.sink import Sink

U = TypeVar("U", bound="UsefulObject")


class UsefulObject:
    # registry consulted by build(); override per class to isolate recipes
    recipes: ClassVar[RecipeRegistry] = registry
    telemetry_sink_class: ClassVar[type[Sink]] = Sink

    # --- construction ---

    @classmethod
    def build(
        cls: type[U],
        *args: Any,
        namespace: str = OPERATIONAL,
        require_operational: bool = False,
        **kwargs: Any,
    ) -> U:
        """Primitive construction followed by recipe application."""
        instance = cls(*args, **kwargs)
        return cls.configure(
            instance, namespace=namespace, require_operational=require_operational
        )

    @classmethod
    def configure(
        cls,
        instance: U,
        *,
        namespace: str = OPERATIONAL,
        require_operational: bool = False,
    ) -> U:
        cls.recipes.apply(instance, namespace=namespace, require=require_operational)
        return instance

    # --- actuation ---

    @classmethod
    def call(cls, *args: Any, **kwargs: Any) -> Any:
        """Build then actuate; returns whatever ``actuate`` returns."""
        return cls.build(*args, **kwargs).actuate()

    def actuate(self) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement actuate()")

    # --- telemetry ---

    @classmethod
    def telemetry_sink(cls) -> Sink:
        return cls.telemetry_sink_class()

    @classmethod
    def register_telemetry_sink(cls, instance: Any, slot_name: str = "telemetry") -> Sink:
        """Create this class's sink, register it on ``instance`` and return it."""
        return register_sink(instance, cls.telemetry_sink(), slot_name)
