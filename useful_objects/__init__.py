"""
Useful objects: hosts whose collaborators default to safe Null Objects, are upgraded
by registered recipes at build time, and report what they do through telemetry.
"""

from useful_objects.core.actuator import UsefulObject
from useful_objects.core.capability import CapabilityInterface, NullPolicy, capability_of
from useful_objects.core.dependency import (
    Dependency,
    declare_dependency,
    declared_slots,
    get_dependency,
    is_resolved,
    set_dependency,
)
from useful_objects.core.null_object import NullObject, generate_null, is_null
from useful_objects.core.recipe import (
    OPERATIONAL,
    SUBSTITUTE,
    Recipe,
    RecipeRegistry,
    recipe,
    register_recipe,
    registry,
)
from useful_objects.errors.errors import (
    ConfigurationError,
    ConformanceViolation,
    MissingRecipe,
    UnknownSlot,
    UnsupportedOperation,
    UsefulObjectError,
)
from useful_objects.telemetry import (
    Record,
    Sink,
    Telemetry,
    TelemetrySlot,
    declare_telemetry,
    register_sink,
)

__version__ = "0.1.0"

__all__ = [
    "OPERATIONAL",
    "SUBSTITUTE",
    "CapabilityInterface",
    "ConfigurationError",
    "ConformanceViolation",
    "Dependency",
    "MissingRecipe",
    "NullObject",
    "NullPolicy",
    "Recipe",
    "RecipeRegistry",
    "Record",
    "Sink",
    "Telemetry",
    "TelemetrySlot",
    "UnknownSlot",
    "UnsupportedOperation",
    "UsefulObject",
    "UsefulObjectError",
    "capability_of",
    "declare_dependency",
    "declare_telemetry",
    "declared_slots",
    "generate_null",
    "get_dependency",
    "is_null",
    "is_resolved",
    "recipe",
    "register_recipe",
    "register_sink",
    "registry",
    "set_dependency",
]
