from useful_objects.samples.some_dependency import (
    SomeDependency,
    SomeDependencyPort,
    SomeDependencySink,
    SubstituteSomeDependency,
)
from useful_objects.samples.something import Something, SomethingSink

__all__ = [
    "SomeDependency",
    "SomeDependencyPort",
    "SomeDependencySink",
    "Something",
    "SomethingSink",
    "SubstituteSomeDependency",
]
