import logging

import pytest

from useful_objects.core.null_object import is_null
from useful_objects.core.recipe import OPERATIONAL, SUBSTITUTE, RecipeRegistry
from useful_objects.errors.errors import MissingRecipe, UnknownSlot
from useful_objects.telemetry.channel import Telemetry


def test_apply_builds_registered_slots(recipes, host_class, smtp_mailer_cls):
    recipes.register(host_class, "mailer", smtp_mailer_cls)
    host = host_class("a")

    applied = recipes.apply(host)

    assert applied == ["mailer"]
    assert isinstance(host.mailer, smtp_mailer_cls)


def test_slot_without_recipe_keeps_default(recipes, host_class):
    host = host_class("a")

    assert recipes.apply(host) == []
    assert is_null(host.mailer)
    assert isinstance(host.telemetry, Telemetry)


def test_builder_runs_per_apply(recipes, host_class, smtp_mailer_cls):
    recipes.register(host_class, "mailer", smtp_mailer_cls)
    first, second = host_class("a"), host_class("b")

    recipes.apply(first)
    recipes.apply(second)

    assert first.mailer is not second.mailer


def test_last_registration_wins(recipes, host_class, smtp_mailer_cls):
    class OtherMailer(smtp_mailer_cls):
        pass

    recipes.register(host_class, "mailer", smtp_mailer_cls)
    recipes.register(host_class, "mailer", OtherMailer)
    host = host_class("a")

    recipes.apply(host)

    assert type(host.mailer) is OtherMailer


def test_namespaces_are_selected_explicitly(recipes, host_class, smtp_mailer_cls):
    class FakeMailer(smtp_mailer_cls):
        def send(self, to, body):
            return False

    recipes.register(host_class, "mailer", smtp_mailer_cls)
    recipes.register(host_class, "mailer", FakeMailer, namespace=SUBSTITUTE)

    operational, substitute = host_class("a"), host_class("b")
    recipes.apply(operational, namespace=OPERATIONAL)
    recipes.apply(substitute, namespace=SUBSTITUTE)

    assert type(operational.mailer) is smtp_mailer_cls
    assert type(substitute.mailer) is FakeMailer
    assert recipes.namespaces() == [OPERATIONAL, SUBSTITUTE]


def test_require_fails_before_writing_any_slot(recipes, host_class):
    built = []

    def telemetry_builder():
        built.append("telemetry")
        return Telemetry()

    recipes.register(host_class, "telemetry", telemetry_builder)
    host = host_class("a")

    with pytest.raises(MissingRecipe) as exc:
        recipes.apply(host, require=True)

    assert exc.value.slot == "mailer"
    assert exc.value.namespace == OPERATIONAL
    assert built == []


def test_require_ignores_telemetry_slots(recipes, host_class, smtp_mailer_cls):
    recipes.register(host_class, "mailer", smtp_mailer_cls)
    host = host_class("a")

    assert recipes.apply(host, require=True) == ["mailer"]


def test_recipes_are_inherited_and_overridable(recipes, host_class, smtp_mailer_cls):
    class Child(host_class):
        pass

    class ChildMailer(smtp_mailer_cls):
        pass

    recipes.register(host_class, "mailer", smtp_mailer_cls)
    inherited = Child("a")
    recipes.apply(inherited)
    assert type(inherited.mailer) is smtp_mailer_cls

    recipes.register(Child, "mailer", ChildMailer)
    overridden = Child("b")
    recipes.apply(overridden)
    assert type(overridden.mailer) is ChildMailer


def test_register_rejects_undeclared_slot(recipes, host_class, smtp_mailer_cls):
    with pytest.raises(UnknownSlot):
        recipes.register(host_class, "mailr", smtp_mailer_cls)


def test_register_rejects_non_callable(recipes, host_class):
    with pytest.raises(TypeError):
        recipes.register(host_class, "mailer", "not a builder")


def test_decorator_form_returns_builder(recipes, host_class, smtp_mailer_cls):
    @recipes.recipe(host_class, "mailer")
    def build_mailer():
        return smtp_mailer_cls()

    assert callable(build_mailer)
    assert recipes.lookup(host_class, "mailer").builder is build_mailer


def test_unregister(recipes, host_class, smtp_mailer_cls):
    recipes.register(host_class, "mailer", smtp_mailer_cls)
    recipes.unregister(host_class, "mailer")

    assert recipes.lookup(host_class, "mailer") is None


def test_builder_errors_propagate(recipes, host_class):
    def broken():
        raise RuntimeError("cannot connect")

    recipes.register(host_class, "mailer", broken)

    with pytest.raises(RuntimeError, match="cannot connect"):
        recipes.apply(host_class("a"))


def test_builder_can_wire_nested_telemetry(recipes, host_class):
    class WiredMailer:
        def __init__(self):
            self.telemetry = Telemetry()

        def send(self, to, body):
            self.telemetry.record("sent", to)
            return True

        def pending(self):
            return 0

    recipes.register(host_class, "mailer", WiredMailer)
    host = host_class("a")
    recipes.apply(host)

    assert isinstance(host.mailer.telemetry, Telemetry)


def test_apply_is_logged(recipes, host_class, smtp_mailer_cls, caplog):
    recipes.register(host_class, "mailer", smtp_mailer_cls)

    with caplog.at_level(logging.DEBUG, logger="useful_objects.core.recipe"):
        recipes.apply(host_class("a"))

    messages = [r.getMessage() for r in caplog.records]
    assert "recipe_applied" in messages
    assert "recipe_missing" in messages


def test_registries_are_independent(host_class, smtp_mailer_cls):
    one, two = RecipeRegistry(), RecipeRegistry()
    one.register(host_class, "mailer", smtp_mailer_cls)

    assert two.lookup(host_class, "mailer") is None
