"""
Null Object generation.

For every capability interface a type is synthesized once: each declared operation
becomes a real method returning the interface's neutral default, and a single
fallback branch decides what happens for anything else (strict: raise, weak: no-op).
Instances are cheap and are created per slot per owner, never shared.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

from useful_objects.core.capability import CapabilityInterface, NullPolicy
from useful_objects.errors.errors import UnsupportedOperation

logger = logging.getLogger(__name__)

_NULL_TYPES: dict[CapabilityInterface, type[NullObject]] = {}


def _noop(result: Any = None) -> Callable[..., Any]:
    def operation(*args: Any, **kwargs: Any) -> Any:
        return result

    return operation


def _null_method(name: str, result: Any) -> Callable[..., Any]:
    def method(self: NullObject, *args: Any, **kwargs: Any) -> Any:
        # a fresh copy per call; mutable defaults must not be shared between owners
        return copy.copy(result)

    method.__name__ = name
    method.__qualname__ = f"NullObject.{name}"
    return method


class NullObject:
    """
    Base of all synthesized null types. Never instantiated directly; see
    ``generate_null``.
    """

    __slots__ = ()

    capability: CapabilityInterface

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup fails: the name is not a declared operation
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        capability = type(self).__dict__.get("capability")
        if capability is None:
            raise AttributeError(name)
        if capability.policy is NullPolicy.WEAK:
            return _noop()
        raise UnsupportedOperation(
            f"{capability.name} null object does not support {name!r}",
            operation=name,
            interface=capability.name,
            component="null_object",
        )

    def __repr__(self) -> str:
        return f"<Null {self.capability.name} ({self.capability.policy.value})>"


def null_type_for(capability: CapabilityInterface) -> type[NullObject]:
    """Return (and cache) the synthesized null type for ``capability``."""
    null_type = _NULL_TYPES.get(capability)
    if null_type is not None:
        return null_type

    namespace: dict[str, Any] = {
        "__slots__": (),
        "capability": capability,
    }
    for op in capability.operations:
        namespace[op] = _null_method(op, capability.defaults.get(op))

    null_type = type(f"Null{capability.name}", (NullObject,), namespace)
    _NULL_TYPES[capability] = null_type
    return null_type


def generate_null(capability: CapabilityInterface) -> NullObject:
    """Create a fresh Null Object implementing ``capability``."""
    instance = null_type_for(capability)()
    logger.debug(
        "null_object_created",
        extra={
            "event": "null_object_created",
            "interface": capability.name,
            "policy": capability.policy.value,
        },
    )
    return instance


def is_null(value: Any) -> bool:
    return isinstance(value, NullObject)
