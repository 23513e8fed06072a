"""Run state and the per-entity resolution context.

RunState is everything one engine run owns: the copied record store, the
manifest under construction, the passed sets, and the reference ledger.
ResolutionContext is the view of that state handed to every component hook
for one entity, together with the lookup helpers components use to reference
each other.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Callable

from ..core.models import Entity, EntitySummary, Manifest, RenderedText
from ..markdown import mentioned_ids
from .errors import UndefinedReferenceError
from .registry import ComponentDescriptor

RecordStore = dict[str, dict[str, Any]]
Renderer = Callable[[str], str]


class PassedSet:
    """Per-component ordered sets of entity ids that resolved successfully."""

    def __init__(self) -> None:
        self._passed: dict[str, dict[str, None]] = {}

    def open(self, key: str) -> None:
        self._passed.setdefault(key, {})

    def add(self, key: str, entity_id: str) -> None:
        self._passed.setdefault(key, {})[entity_id] = None

    def has(self, key: str, entity_id: str) -> bool:
        return entity_id in self._passed.get(key, {})

    def ids(self, key: str) -> list[str]:
        return list(self._passed.get(key, {}))

    def keys_for(self, entity_id: str) -> list[str]:
        """Component keys the entity has passed, in pass order."""
        return [key for key, ids in self._passed.items() if entity_id in ids]

    def discard(self, entity_id: str) -> None:
        """Remove an id from every set it entered."""
        for ids in self._passed.values():
            ids.pop(entity_id, None)


@dataclass
class Backlink:
    """An item ``source`` put in a list owned by ``target``.

    ``attr`` names the list on the target's ``key`` value; ``None`` means the
    value itself is the list.
    """

    source: str
    target: str
    key: str
    attr: str | None
    item: Any


def link_items(value: Any, attr: str | None) -> list:
    """The list a back-reference was appended to."""
    if attr is None:
        return value
    if isinstance(value, dict):
        return value[attr]
    return getattr(value, attr)


class ReferenceLedger:
    """Tracks which entities depend on which, and what they left in each other.

    Used by the error collector when an entity fails:

    - dependents are entities holding a hard reference to it; they fail too
    - back-references it appended to other entities' lists are withdrawn
    - text that links to it by ``@id`` is rendered again without it
    """

    def __init__(self) -> None:
        # target -> {source: key of the component that made the reference}
        self._dependents: dict[str, dict[str, str | None]] = {}
        self._backlinks: dict[str, list[Backlink]] = {}
        self._mentions: dict[str, list[RenderedText]] = {}

    def depend(self, source: str, target: str, component: str | None = None) -> None:
        if source != target:
            self._dependents.setdefault(target, {}).setdefault(source, component)

    def dependents(self, target: str) -> list[tuple[str, str | None]]:
        """``(source, component)`` pairs for every entity referencing ``target``."""
        return list(self._dependents.get(target, {}).items())

    def add_backlink(self, link: Backlink) -> None:
        self._backlinks.setdefault(link.source, []).append(link)

    def backlinks(self, source: str) -> list[Backlink]:
        return list(self._backlinks.get(source, []))

    def mention(self, target: str, text: RenderedText) -> None:
        self._mentions.setdefault(target, []).append(text)

    def mentions(self, target: str) -> list[RenderedText]:
        return list(self._mentions.get(target, []))

    def forget(self, entity_id: str) -> None:
        self._backlinks.pop(entity_id, None)
        self._dependents.pop(entity_id, None)
        self._mentions.pop(entity_id, None)
        for sources in self._dependents.values():
            sources.pop(entity_id, None)


@dataclass
class RunState:
    """Mutable state owned by one manifest builder run."""

    records: RecordStore
    manifest: Manifest
    components: list[ComponentDescriptor]
    render: Renderer
    brief_length: int = 250
    passed: PassedSet = field(default_factory=PassedSet)
    ledger: ReferenceLedger = field(default_factory=ReferenceLedger)

    def is_live(self, entity_id: str) -> bool:
        return entity_id in self.manifest


@dataclass
class ResolutionContext:
    """Everything a component hook may look at while resolving one entity.

    ``parent`` is the entity as built so far: components earlier in the order
    have been applied, later ones have not. ``data`` is that entity's raw
    record and must not be modified.
    """

    id: str
    state: RunState
    component: str | None = None

    @property
    def data(self) -> dict[str, Any]:
        return self.state.records[self.id]

    @property
    def parent(self) -> Entity:
        return self.state.manifest[self.id]

    @property
    def records(self) -> RecordStore:
        return self.state.records

    @property
    def manifest(self) -> Manifest:
        return self.state.manifest

    @property
    def passed(self) -> PassedSet:
        return self.state.passed

    @property
    def components(self) -> list[ComponentDescriptor]:
        return self.state.components

    @property
    def brief_length(self) -> int:
        return self.state.brief_length

    def render(self, text: str) -> str:
        return self.state.render(text)

    def render_text(self, text: Any) -> RenderedText:
        """Render text, remembering which live entities it links to.

        If a linked entity fails later, the text is rendered again without it.
        """
        text = str(text)
        rendered = RenderedText(raw=text, rendered=self.render(text))
        for target_id in mentioned_ids(text):
            if target_id in self.records and target_id != self.id:
                self.state.ledger.mention(target_id, rendered)
        return rendered

    def copy_data(self, key: str) -> Any:
        """Deep copy of one raw field, safe to modify."""
        return copy.deepcopy(self.data[key])

    def require(self, target_id: str, key: str, what: str | None = None) -> Entity:
        """Look up an entity whose ``key`` component has already passed.

        Records this entity as depending on the target, so that it fails too
        if the target is later removed.

        Raises:
            UndefinedReferenceError: If the target is unknown or ``key`` has
                not passed for it
        """
        if not self.passed.has(key, target_id):
            label = what or key.capitalize()
            if target_id in self.manifest:
                raise UndefinedReferenceError(
                    f"{self.id} references {target_id} as a {label}, "
                    f"but {target_id} has no valid {key} component"
                )
            raise UndefinedReferenceError(
                f'{self.id} contains an undefined {label} reference: "{target_id}"'
            )
        self.depend(target_id)
        return self.manifest[target_id]

    def record(self, target_id: str, field_name: str | None = None) -> dict[str, Any]:
        """Look up another live raw record, optionally requiring one of its fields.

        Raises:
            UndefinedReferenceError: If the record is unknown or lacks the field
        """
        target = self.records.get(target_id)
        if target is None:
            raise UndefinedReferenceError(
                f'{self.id} contains an undefined reference: "{target_id}"'
            )
        if field_name is not None and field_name not in target:
            raise UndefinedReferenceError(
                f"{self.id} references {target_id} as a {field_name}, "
                f"but {target_id} lacks the {field_name} component"
            )
        self.depend(target_id)
        return target

    def depend(self, target_id: str) -> None:
        """Fail this entity too if ``target_id`` fails."""
        self.state.ledger.depend(self.id, target_id, self.component)

    def backlink(self, target_id: str, key: str, attr: str, item: Any = None) -> None:
        """Append to a list held by another entity's component result.

        ``item`` defaults to this entity's id. The append is withdrawn if
        this entity later fails.
        """
        if item is None:
            item = self.id
        link_items(self.manifest[target_id][key], attr).append(item)
        self.state.ledger.add_backlink(
            Backlink(source=self.id, target=target_id, key=key, attr=attr, item=item)
        )

    def soft_link(self, target_id: str, key: str, item: Any) -> None:
        """Record that ``item`` in this entity's ``key`` list came from ``target_id``.

        If ``target_id`` fails, the item is withdrawn and this entity survives.
        """
        self.state.ledger.add_backlink(
            Backlink(source=target_id, target=self.id, key=key, attr=None, item=item)
        )

    def summarize(self, entity: Entity) -> EntitySummary:
        return EntitySummary(
            name=entity.get("name"),
            id=entity.id,
            description=entity.get("description"),
        )

    def summarize_self(self) -> EntitySummary:
        return self.summarize(self.parent)
