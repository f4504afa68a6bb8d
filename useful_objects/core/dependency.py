"""
Dependency slots.

A slot is declared on a host class (``some_dependency = Dependency(SomePort)``) and
recorded in a static registry keyed by (class, slot name). Reading a slot that was
never assigned resolves it once to its default (a Null Object unless the slot
declares another default factory) and caches that value on the instance, so the
slot is never absent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, Optional

from useful_objects.core.capability import CapabilityInterface, capability_of
from useful_objects.core.null_object import generate_null
from useful_objects.errors.errors import ConformanceViolation, UnknownSlot

logger = logging.getLogger(__name__)

DEPENDENCY = "dependency"
TELEMETRY = "telemetry"


@dataclass(frozen=True)
class SlotSpec:
    """Static declaration of one slot on one class."""

    owner: type
    name: str
    capability: CapabilityInterface
    kind: str = DEPENDENCY
    default: Optional[Callable[[], Any]] = None

    def make_default(self) -> Any:
        if self.default is not None:
            return self.default()
        return generate_null(self.capability)


# --- Static registry: class -> {slot name -> spec} ---

_DECLARATIONS: dict[type, dict[str, SlotSpec]] = {}


def _register_spec(spec: SlotSpec) -> None:
    _DECLARATIONS.setdefault(spec.owner, {})[spec.name] = spec


def declared_slots(owner: type | object) -> Mapping[str, SlotSpec]:
    """
    All slots visible on ``owner`` (class or instance), in declaration order.
    Subclasses inherit their bases' slots and may redeclare them.
    """
    cls = owner if isinstance(owner, type) else type(owner)
    slots: dict[str, SlotSpec] = {}
    for klass in reversed(cls.__mro__):
        slots.update(_DECLARATIONS.get(klass, {}))
    return slots


def slot_spec(owner: type | object, name: str) -> SlotSpec:
    spec = declared_slots(owner).get(name)
    if spec is None:
        cls = owner if isinstance(owner, type) else type(owner)
        raise UnknownSlot(
            f"{cls.__name__} declares no slot named {name!r}",
            owner=cls.__qualname__,
            slot=name,
            component="dependency",
        )
    return spec


# --- Descriptor ---


class Dependency:
    """
    Class-body declaration of a dependency slot.

    ``capability`` may be a CapabilityInterface, a Protocol/class to derive one from,
    or an iterable of operation names (then ``name`` is required).
    """

    kind = DEPENDENCY

    def __init__(
        self,
        capability: CapabilityInterface | type | Iterable[str],
        *,
        name: Optional[str] = None,
        default: Optional[Callable[[], Any]] = None,
    ) -> None:
        self.capability = capability_of(capability, name=name)
        self.default = default
        self.name: Optional[str] = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        _register_spec(
            SlotSpec(
                owner=owner,
                name=name,
                capability=self.capability,
                kind=self.kind,
                default=self.default,
            )
        )

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        return get_dependency(instance, self._slot_name())

    def __set__(self, instance: Any, value: Any) -> None:
        set_dependency(instance, self._slot_name(), value)

    def _slot_name(self) -> str:
        if self.name is None:
            raise RuntimeError("Dependency used before being bound to a class attribute")
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.capability.name!r}, name={self.name!r})"


# --- Functional declaration interface ---


def declare_dependency(
    owner: type,
    slot_name: str,
    capability: CapabilityInterface | type | Iterable[str],
    *,
    name: Optional[str] = None,
    default: Optional[Callable[[], Any]] = None,
) -> Dependency:
    """Declare a slot on an existing class, equivalent to the class-body form."""
    descriptor = Dependency(capability, name=name, default=default)
    setattr(owner, slot_name, descriptor)
    descriptor.__set_name__(owner, slot_name)
    return descriptor


# --- Resolver ---


def _storage(instance: Any) -> dict[str, Any]:
    try:
        return vars(instance)
    except TypeError as exc:
        raise TypeError(
            f"{type(instance).__name__} instances need a __dict__ to hold dependency slots"
        ) from exc


def get_dependency(instance: Any, slot_name: str) -> Any:
    """Current value of the slot, resolving and caching its default on first read."""
    spec = slot_spec(instance, slot_name)
    storage = _storage(instance)
    if slot_name in storage:
        return storage[slot_name]

    value = spec.make_default()
    storage[slot_name] = value
    return value


def set_dependency(instance: Any, slot_name: str, value: Any, *, check: bool = True) -> None:
    """Assign ``value`` into the slot; conformance is checked unless ``check`` is False."""
    spec = slot_spec(instance, slot_name)
    if check:
        missing = spec.capability.missing_operations(value)
        if missing:
            raise ConformanceViolation(
                (
                    f"{type(value).__name__} does not implement {spec.capability.name} "
                    f"for slot {slot_name!r}"
                ),
                slot=slot_name,
                interface=spec.capability.name,
                missing=missing,
                component="dependency",
            )
    _storage(instance)[slot_name] = value
    logger.debug(
        "dependency_assigned",
        extra={
            "event": "dependency_assigned",
            "owner": type(instance).__qualname__,
            "slot": slot_name,
            "value_type": type(value).__qualname__,
        },
    )


def is_resolved(instance: Any, slot_name: str) -> bool:
    """True once the slot holds a value, whether assigned or resolved to its default."""
    slot_spec(instance, slot_name)
    return slot_name in _storage(instance)
