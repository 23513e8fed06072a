"""Entity and Manifest containers.

An Entity is the resolved counterpart of a raw record. It is built one
component at a time by the manifest builder and frozen once the run ends.
Fields are keyed by component key; values are either plain JSON-ready data or
the pydantic result models from ``components.py``.
"""

import json
from typing import Any, Iterator

from pydantic import BaseModel


def dump_value(value: Any) -> Any:
    """Convert a component value into plain JSON-ready data."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, dict):
        return {k: dump_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [dump_value(v) for v in value]
    return value


class Entity:
    """A resolved record: component key -> processed value."""

    __slots__ = ("id", "_fields", "_frozen")

    def __init__(self, entity_id: str):
        self.id = entity_id
        self._fields: dict[str, Any] = {}
        self._frozen = False

    @property
    def name(self) -> str | None:
        return self._fields.get("name")

    @property
    def frozen(self) -> bool:
        return self._frozen

    def has(self, key: str) -> bool:
        """Check whether the component ``key`` has been written to this entity."""
        return key in self._fields

    def get(self, key: str, default: Any = None) -> Any:
        return self._fields.get(key, default)

    def __getitem__(self, key: str) -> Any:
        try:
            return self._fields[key]
        except KeyError:
            raise KeyError(f"{self.id} has no '{key}' component") from None

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def set(self, key: str, value: Any) -> None:
        if self._frozen:
            raise RuntimeError(f"Entity {self.id} is frozen; cannot set '{key}'")
        self._fields[key] = value

    def keys(self) -> list[str]:
        return list(self._fields)

    def freeze(self) -> None:
        self._frozen = True

    def to_dict(self) -> dict[str, Any]:
        return {key: dump_value(value) for key, value in self._fields.items()}

    def __repr__(self) -> str:
        return f"Entity({self.id!r}, fields={self.keys()})"


class Manifest:
    """Ordered mapping of entity id -> Entity; the engine's output."""

    def __init__(self, ids: list[str] | None = None):
        self._entities: dict[str, Entity] = {}
        for entity_id in ids or []:
            self._entities[entity_id] = Entity(entity_id)

    def __getitem__(self, entity_id: str) -> Entity:
        return self._entities[entity_id]

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._entities

    def __iter__(self) -> Iterator[str]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def get(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def ids(self) -> list[str]:
        return list(self._entities)

    def entities(self) -> list[Entity]:
        return list(self._entities.values())

    def remove(self, entity_id: str) -> None:
        self._entities.pop(entity_id, None)

    def freeze(self) -> None:
        for entity in self._entities.values():
            entity.freeze()

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {entity_id: entity.to_dict() for entity_id, entity in self._entities.items()}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
