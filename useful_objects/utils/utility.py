"""Helpers shared by the config layer and the JSONL sink."""

from __future__ import annotations

import datetime
import uuid
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from typing import Any, Mapping

from pydantic import ValidationError

from useful_objects.errors.errors import ConfigurationError

# orjson serializes ints natively only inside this range
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


# --- Config layering ---


def deep_merge(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """
    Merge ``layers`` left to right into a new dict. Mappings present on both sides
    merge recursively; any other value from a later layer replaces the earlier one.
    Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(value, Mapping):
                base = current if isinstance(current, Mapping) else {}
                merged[key] = deep_merge(base, value)
            else:
                merged[key] = value
    return merged


def set_dotted(tree: dict[str, Any], dotted_path: str, value: Any, *, component: str) -> None:
    """Store ``value`` in ``tree`` under ``a.b.c``, creating intermediate sections."""
    keys = [key.strip() for key in dotted_path.split(".") if key.strip()]
    if not keys:
        raise ConfigurationError(
            f"Config key {dotted_path!r} has no non-empty segment",
            field=dotted_path,
            component=component,
        )

    section = tree
    for depth, key in enumerate(keys[:-1], start=1):
        child = section.setdefault(key, {})
        if not isinstance(child, dict):
            raise ConfigurationError(
                f"Config key {dotted_path!r} nests under {'.'.join(keys[:depth])!r}, "
                "which already holds a value",
                field=dotted_path,
                component=component,
            )
        section = child

    if isinstance(section.get(keys[-1]), dict):
        raise ConfigurationError(
            f"Config key {dotted_path!r} names a section, not a value",
            field=dotted_path,
            component=component,
        )
    section[keys[-1]] = value


def validation_errors(
    error: ValidationError, component: str = "config.schema"
) -> list[dict[str, str]]:
    """Flatten a pydantic ValidationError into one dict per invalid path."""
    return [
        {
            "component": component,
            "path": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


# --- Serialization ---


def make_serializable(obj: Any) -> Any:
    """
    Recursively reduce ``obj`` to values orjson always accepts: str-keyed dicts,
    lists, in-range ints, and other primitives. Anything else becomes a string.
    """
    if obj is None or isinstance(obj, (str, bool, float)):
        return obj
    if isinstance(obj, int):
        return obj if _INT_MIN <= obj <= _INT_MAX else str(obj)

    if isinstance(obj, Mapping):
        return {str(key): make_serializable(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [make_serializable(item) for item in obj]

    if isinstance(obj, (datetime.datetime, datetime.date)):
        return obj.isoformat()
    if isinstance(obj, (Decimal, uuid.UUID)):
        return str(obj)
    if is_dataclass(obj) and not isinstance(obj, type):
        return make_serializable(asdict(obj))
    return str(obj)
