import logging

import pytest

from useful_objects.core.capability import CapabilityInterface, NullPolicy
from useful_objects.core.dependency import Dependency
from useful_objects.core.null_object import NullObject, generate_null, is_null, null_type_for
from useful_objects.errors.errors import UnsupportedOperation

CLOCK = CapabilityInterface("Clock", ("now", "sleep"), defaults={"now": 0})


def test_declared_operations_return_neutral_defaults():
    null = generate_null(CLOCK)

    assert null.now() == 0
    assert null.sleep(5, reason="test") is None


def test_strict_null_rejects_undeclared_operation():
    null = generate_null(CLOCK)

    with pytest.raises(UnsupportedOperation) as exc:
        null.tick()

    assert exc.value.operation == "tick"
    assert exc.value.interface == "Clock"
    assert "tick" in str(exc.value)


def test_unsupported_operation_is_an_attribute_error():
    null = generate_null(CLOCK)

    assert not hasattr(null, "tick")
    assert getattr(null, "tick", "fallback") == "fallback"


def test_weak_null_accepts_anything():
    null = generate_null(CLOCK.weak())

    assert null.now() == 0
    assert null.tick() is None
    assert null.anything(1, 2, key="value") is None


def test_dunder_lookups_keep_attribute_error_semantics():
    null = generate_null(CLOCK.weak())

    with pytest.raises(AttributeError) as exc:
        null.__missing_dunder__

    assert not isinstance(exc.value, UnsupportedOperation)


def test_one_type_per_interface_but_fresh_instances():
    first = generate_null(CLOCK)
    second = generate_null(CLOCK)

    assert type(first) is type(second) is null_type_for(CLOCK)
    assert first is not second
    assert type(first).__name__ == "NullClock"


def test_null_type_conforms_to_its_interface():
    null = generate_null(CLOCK)

    assert isinstance(null, NullObject)
    assert is_null(null)
    assert CLOCK.conforms(null)
    assert not is_null(object())


def test_strict_and_weak_types_are_distinct():
    assert null_type_for(CLOCK) is not null_type_for(CLOCK.weak())
    assert null_type_for(CLOCK.weak()).capability.policy is NullPolicy.WEAK


def test_repr_names_interface_and_policy():
    assert repr(generate_null(CLOCK)) == "<Null Clock (strict)>"


def test_generation_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="useful_objects.core.null_object"):
        generate_null(CLOCK)

    assert any(r.getMessage() == "null_object_created" for r in caplog.records)


def test_mutable_default_not_shared_between_owners():
    bag_port = CapabilityInterface("Bag", ("items",), defaults={"items": []})

    class Holder:
        bag = Dependency(bag_port)

    a, b = Holder(), Holder()
    a.bag.items().append("leak")

    assert b.bag.items() == []
    assert a.bag.items() == []
    assert bag_port.defaults["items"] == []
