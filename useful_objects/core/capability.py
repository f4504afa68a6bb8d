"""
Capability interfaces: the named contract a dependency slot must satisfy.

An interface is an identifier plus an ordered tuple of operation names. It can be
spelled out by hand or derived from a ``typing.Protocol`` port (or any class)
with ``CapabilityInterface.from_protocol``.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Protocol

# Protocol machinery that must never be mistaken for a declared operation
_IGNORED_BASES: frozenset[type] = frozenset({object, Protocol})


class NullPolicy(str, Enum):
    """How a generated Null Object reacts to operations outside its interface."""

    STRICT = "strict"  # undeclared operations raise UnsupportedOperation
    WEAK = "weak"  # any operation succeeds silently


@dataclass(frozen=True)
class CapabilityInterface:
    name: str
    operations: tuple[str, ...]
    policy: NullPolicy = NullPolicy.STRICT
    # neutral return value per operation, None where absent
    defaults: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Capability interface name must be a non-empty string")
        ops = tuple(self.operations)
        for op in ops:
            if not op.isidentifier() or op.startswith("_"):
                raise ValueError(f"Invalid operation name {op!r} on {self.name}")
        if len(set(ops)) != len(ops):
            raise ValueError(f"Duplicate operation names on {self.name}: {ops}")
        unknown = set(self.defaults) - set(ops)
        if unknown:
            raise ValueError(f"Defaults given for undeclared operations: {sorted(unknown)}")
        # frozen: bypass __setattr__ to store normalized values
        object.__setattr__(self, "operations", ops)
        object.__setattr__(self, "policy", NullPolicy(self.policy))
        object.__setattr__(self, "defaults", MappingProxyType(dict(self.defaults)))

    def __hash__(self) -> int:
        return hash((self.name, self.operations, self.policy))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CapabilityInterface):
            return NotImplemented
        return (
            self.name == other.name
            and self.operations == other.operations
            and self.policy == other.policy
            and dict(self.defaults) == dict(other.defaults)
        )

    # --- construction helpers ---

    @classmethod
    def from_protocol(
        cls,
        protocol: type,
        *,
        name: Optional[str] = None,
        policy: NullPolicy = NullPolicy.STRICT,
        defaults: Optional[Mapping[str, Any]] = None,
    ) -> CapabilityInterface:
        """
        Derive an interface from the public functions of ``protocol`` and its bases,
        base classes first, each in definition order.
        Properties, classmethods and staticmethods are not operations.
        """
        if not inspect.isclass(protocol):
            raise TypeError(f"Expected a class, got {protocol!r}")

        ops: list[str] = []
        for klass in reversed(protocol.__mro__):
            if klass in _IGNORED_BASES or klass.__module__ == "typing":
                continue
            for attr, member in vars(klass).items():
                if attr.startswith("_") or not inspect.isfunction(member):
                    continue
                if attr not in ops:
                    ops.append(attr)

        return cls(
            name=name or protocol.__name__,
            operations=tuple(ops),
            policy=policy,
            defaults=defaults or {},
        )

    def weak(self) -> CapabilityInterface:
        """Return the same contract with the weak null policy."""
        return CapabilityInterface(
            name=self.name,
            operations=self.operations,
            policy=NullPolicy.WEAK,
            defaults=self.defaults,
        )

    # --- conformance ---

    def missing_operations(self, value: Any) -> tuple[str, ...]:
        return tuple(op for op in self.operations if not callable(getattr(value, op, None)))

    def conforms(self, value: Any) -> bool:
        return not self.missing_operations(value)


def capability_of(
    target: CapabilityInterface | type | Iterable[str],
    *,
    name: Optional[str] = None,
) -> CapabilityInterface:
    """
    Normalize whatever a slot declaration was given into a CapabilityInterface.

    Accepts an existing interface, a Protocol/class, or a plain iterable of operation
    names (which requires ``name``).
    """
    if isinstance(target, CapabilityInterface):
        return target
    if inspect.isclass(target):
        return CapabilityInterface.from_protocol(target, name=name)
    if isinstance(target, str):
        raise TypeError("Pass operation names as an iterable, not a single string")
    if name is None:
        raise TypeError("A name is required when declaring operations directly")
    return CapabilityInterface(name=name, operations=tuple(target))
