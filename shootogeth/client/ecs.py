"""Client components and a small entity-component store."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from ..game_objects import Vec2

C = TypeVar("C")


@dataclass
class Transform:
    pos: Vec2


@dataclass
class OwnedByClient:
    client_id: int


@dataclass
class Player:
    """Marks an entity as a player."""


@dataclass
class InputControlled:
    """Marks an entity as driven by the local player's input."""


@dataclass
class Health:
    hp: int


@dataclass
class Shape:
    dims: Vec2


@dataclass
class Physics:
    vel: Vec2


class World:
    """Entities are integer ids; each holds at most one component per type."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._entities: dict[int, dict[type, Any]] = {}

    def spawn(self, *components: Any) -> int:
        """Create an entity holding ``components`` and return its id."""
        store: dict[type, Any] = {}
        for component in components:
            kind = type(component)
            if kind in store:
                raise ValueError(f"duplicate component type {kind.__name__}")
            store[kind] = component
        entity = next(self._ids)
        self._entities[entity] = store
        return entity

    def insert_one(self, entity: int, component: Any) -> None:
        """Add ``component`` to ``entity``, replacing one of the same type."""
        try:
            store = self._entities[entity]
        except KeyError:
            raise KeyError(f"no such entity {entity}") from None
        store[type(component)] = component

    def get(self, entity: int, component_type: type[C]) -> C:
        """Return the ``component_type`` component of ``entity``."""
        try:
            store = self._entities[entity]
        except KeyError:
            raise KeyError(f"no such entity {entity}") from None
        try:
            return store[component_type]
        except KeyError:
            raise KeyError(
                f"entity {entity} has no {component_type.__name__} component"
            ) from None

    def query(self, *component_types: type) -> Iterator[tuple[int, tuple[Any, ...]]]:
        """Yield (entity, components) for every entity holding all the given types."""
        for entity, store in list(self._entities.items()):
            if all(kind in store for kind in component_types):
                yield entity, tuple(store[kind] for kind in component_types)

    def __len__(self) -> int:
        return len(self._entities)