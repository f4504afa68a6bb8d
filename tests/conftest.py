from __future__ import annotations

from typing import Any, Protocol

import pytest

from useful_objects.core.actuator import UsefulObject
from useful_objects.core.dependency import Dependency
from useful_objects.core.recipe import RecipeRegistry
from useful_objects.telemetry.channel import TelemetrySlot


class Mailer(Protocol):
    def send(self, to: str, body: str) -> bool: ...

    def pending(self) -> int: ...


class SmtpMailer:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []

    def send(self, to: str, body: str) -> bool:
        self.sent.append((to, body))
        return True

    def pending(self) -> int:
        return 0


@pytest.fixture
def recipes() -> RecipeRegistry:
    return RecipeRegistry()


@pytest.fixture
def host_class(recipes: RecipeRegistry) -> type[Any]:
    """A fresh host class per test, bound to its own recipe registry."""

    class Notifier(UsefulObject):
        mailer = Dependency(Mailer)
        telemetry = TelemetrySlot()

        def __init__(self, to: str) -> None:
            self.to = to

        def actuate(self) -> Any:
            self.telemetry.record("notified", self.to)
            return self.mailer.send(self.to, "hello")

    Notifier.recipes = recipes
    return Notifier


@pytest.fixture
def mailer_port() -> type[Any]:
    return Mailer


@pytest.fixture
def smtp_mailer_cls() -> type[SmtpMailer]:
    return SmtpMailer
