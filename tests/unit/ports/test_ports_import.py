import importlib

import pytest

PORT_MODULES = [
    "useful_objects.ports.sink",
    "useful_objects.ports.telemetry",
]


@pytest.mark.parametrize("module_name", PORT_MODULES)
def test_all_ports_import(module_name):
    assert importlib.import_module(module_name)
