"""
Exceptions raised while declaring, resolving and configuring dependency slots.

Exception hierarchy:
- UsefulObjectError (base)
  - UnsupportedOperation: a strict Null Object received an undeclared operation
  - MissingRecipe: an operational value was demanded for a slot without a recipe
  - ConformanceViolation: a value assigned into a slot lacks declared operations
  - UnknownSlot: a slot name that was never declared on the owner class
  - ConfigurationError: invalid configuration layers
"""

from __future__ import annotations

from typing import Any, Iterable, Optional


class UsefulObjectError(Exception):
    """Base exception for all useful object errors."""

    def __init__(
        self,
        message: str,
        *,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.component = component
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.args[0] if self.args else ""]
        if self.component:
            parts.append(f"[component={self.component}]")
        if self.details:
            parts.append(f"[details={self.details}]")
        return " ".join(parts)


class UnsupportedOperation(UsefulObjectError, AttributeError):
    """Raised when a strict Null Object is asked for an operation it does not declare."""

    def __init__(
        self,
        message: str,
        *,
        operation: Optional[str] = None,
        interface: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.operation = operation
        self.interface = interface
        details = details or {}
        if operation:
            details["operation"] = operation
        if interface:
            details["interface"] = interface
        super().__init__(message, component=component, details=details)


class MissingRecipe(UsefulObjectError, LookupError):
    """Raised when build requires an operational value and no recipe is registered."""

    def __init__(
        self,
        message: str,
        *,
        owner: Optional[str] = None,
        slot: Optional[str] = None,
        namespace: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.owner = owner
        self.slot = slot
        self.namespace = namespace
        details = details or {}
        if owner:
            details["owner"] = owner
        if slot:
            details["slot"] = slot
        if namespace:
            details["namespace"] = namespace
        super().__init__(message, component=component, details=details)


class ConformanceViolation(UsefulObjectError, TypeError):
    """Raised when a value assigned into a slot does not implement its interface."""

    def __init__(
        self,
        message: str,
        *,
        slot: Optional[str] = None,
        interface: Optional[str] = None,
        missing: Optional[Iterable[str]] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.slot = slot
        self.interface = interface
        self.missing = tuple(missing or ())
        details = details or {}
        if slot:
            details["slot"] = slot
        if interface:
            details["interface"] = interface
        if self.missing:
            details["missing"] = list(self.missing)
        super().__init__(message, component=component, details=details)


class UnknownSlot(UsefulObjectError, KeyError):
    """Raised when a slot name is not declared on the owner class."""

    def __init__(
        self,
        message: str,
        *,
        owner: Optional[str] = None,
        slot: Optional[str] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.owner = owner
        self.slot = slot
        details = details or {}
        if owner:
            details["owner"] = owner
        if slot:
            details["slot"] = slot
        super().__init__(message, component=component, details=details)


class ConfigurationError(UsefulObjectError, ValueError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        component: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, component=component, details=details)
