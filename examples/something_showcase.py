#!/usr/bin/env python3
"""
Useful Objects - End-to-End Showcase

Walks through the lifecycle of the Something sample: a primitive instance running
against Null Object defaults, an operational build, a substitute build, and
telemetry observed through in-memory and JSONL sinks.

Usage:
    python examples/something_showcase.py
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from types import SimpleNamespace

from useful_objects import SUBSTITUTE, is_null
from useful_objects.adapters.telemetry.jsonl import JsonlSink
from useful_objects.samples import Something, SubstituteSomeDependency


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    source = SimpleNamespace(some_value="some value", some_other_value="some other value")

    # 1. Primitive construction: every dependency is a Null Object
    primitive = Something(source.some_value, source.some_other_value)
    print(f"primitive dependency: {primitive.some_dependency!r}")
    print(f"primitive result:     {primitive.actuate()!r}  (no side effect)")

    # 2. Operational build: recipes install the real dependency
    operational = Something.build(source)
    sink = Something.register_telemetry_sink(operational)
    operational.actuate()
    print(f"operational dependency is null: {is_null(operational.some_dependency)}")
    print(f"recorded something_done:        {sink.recorded_something_done()}")

    # 3. Substitute build: same events, pretend side effect, JSONL telemetry
    with tempfile.TemporaryDirectory() as tmp:
        events = Path(tmp) / "events.jsonl"
        substitute = Something.build(source, namespace=SUBSTITUTE)
        observed = SubstituteSomeDependency.register_telemetry_sink(substitute.some_dependency)
        file_sink = substitute.some_dependency.telemetry.register(
            JsonlSink(events, owner="SubstituteSomeDependency")
        )
        substitute.actuate()
        print(f"substitute recorded:  {observed.recorded_something_done()}")
        print(f"substitute pretended: {substitute.some_dependency.pretended}")
        print(f"jsonl lines:          {events.read_text().strip()}")
        print(f"file sink records:    {len(file_sink)}")


if __name__ == "__main__":
    main()
