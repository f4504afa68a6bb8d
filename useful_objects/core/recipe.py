"""
Configuration recipes.

A recipe is a zero-argument builder registered for a (host class, slot name) pair
inside a namespace. ``RecipeRegistry.apply`` runs the recipes of one namespace
against a freshly constructed instance, upgrading its slots from their defaults to
operational (or substitute) values. Slots without a recipe keep their defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from useful_objects.core.dependency import DEPENDENCY, declared_slots, set_dependency, slot_spec
from useful_objects.errors.errors import MissingRecipe

logger = logging.getLogger(__name__)

OPERATIONAL = "operational"
SUBSTITUTE = "substitute"

Builder = Callable[[], Any]
B = TypeVar("B", bound=Callable[[], Any])


@dataclass(frozen=True)
class Recipe:
    owner: type
    slot: str
    builder: Builder
    namespace: str = OPERATIONAL

    def build(self) -> Any:
        return self.builder()


class RecipeRegistry:
    """
    Maps (namespace, class, slot) to a Recipe. Registration is last-write-wins.
    Lookup walks the owner's MRO, so subclasses inherit their bases' recipes.
    """

    def __init__(self) -> None:
        self._recipes: dict[tuple[str, type, str], Recipe] = {}

    def register(
        self,
        owner: type,
        slot: str,
        builder: Builder,
        *,
        namespace: str = OPERATIONAL,
    ) -> Recipe:
        if not callable(builder):
            raise TypeError(f"Recipe builder for {owner.__name__}.{slot} must be callable")
        if not namespace:
            raise ValueError("Recipe namespace must be a non-empty string")
        # fail at definition time on typos in the slot name
        slot_spec(owner, slot)

        recipe = Recipe(owner=owner, slot=slot, builder=builder, namespace=namespace)
        key = (namespace, owner, slot)
        replaced = key in self._recipes
        self._recipes[key] = recipe
        logger.debug(
            "recipe_registered",
            extra={
                "event": "recipe_registered",
                "owner": owner.__qualname__,
                "slot": slot,
                "namespace": namespace,
                "replaced": replaced,
            },
        )
        return recipe

    def recipe(self, owner: type, slot: str, *, namespace: str = OPERATIONAL) -> Callable[[B], B]:
        """Decorator form of ``register``; returns the builder unchanged."""

        def decorator(builder: B) -> B:
            self.register(owner, slot, builder, namespace=namespace)
            return builder

        return decorator

    def lookup(self, owner: type, slot: str, *, namespace: str = OPERATIONAL) -> Optional[Recipe]:
        for klass in owner.__mro__:
            recipe = self._recipes.get((namespace, klass, slot))
            if recipe is not None:
                return recipe
        return None

    def unregister(self, owner: type, slot: str, *, namespace: str = OPERATIONAL) -> None:
        self._recipes.pop((namespace, owner, slot), None)

    def namespaces(self) -> list[str]:
        return sorted({namespace for namespace, _, _ in self._recipes})

    def apply(
        self,
        instance: Any,
        *,
        namespace: str = OPERATIONAL,
        require: bool = False,
    ) -> list[str]:
        """
        Build and assign every declared slot of ``instance`` that has a recipe in
        ``namespace``. Returns the names of the slots that were written.

        With ``require`` every dependency slot must have a recipe; the check runs
        before any slot is written so a failing build leaves nothing half-applied.
        """
        owner = type(instance)
        plan: list[Recipe] = []
        missing: list[str] = []
        for name, spec in declared_slots(owner).items():
            recipe = self.lookup(owner, name, namespace=namespace)
            if recipe is not None:
                plan.append(recipe)
            elif require and spec.kind == DEPENDENCY:
                missing.append(name)
            else:
                logger.debug(
                    "recipe_missing",
                    extra={
                        "event": "recipe_missing",
                        "owner": owner.__qualname__,
                        "slot": name,
                        "namespace": namespace,
                    },
                )

        if missing:
            raise MissingRecipe(
                (
                    f"{owner.__name__} requires {namespace} recipes for "
                    f"{', '.join(repr(m) for m in missing)}"
                ),
                owner=owner.__qualname__,
                slot=", ".join(missing),
                namespace=namespace,
                component="recipe",
            )

        for recipe in plan:
            set_dependency(instance, recipe.slot, recipe.build())
            logger.debug(
                "recipe_applied",
                extra={
                    "event": "recipe_applied",
                    "owner": owner.__qualname__,
                    "slot": recipe.slot,
                    "namespace": namespace,
                },
            )
        return [recipe.slot for recipe in plan]


# process-wide default registry used by UsefulObject unless a class overrides it
registry = RecipeRegistry()


def register_recipe(
    owner: type,
    slot: str,
    builder: Builder,
    *,
    namespace: str = OPERATIONAL,
) -> Recipe:
    return registry.register(owner, slot, builder, namespace=namespace)


def recipe(owner: type, slot: str, *, namespace: str = OPERATIONAL) -> Callable[[B], B]:
    return registry.recipe(owner, slot, namespace=namespace)
