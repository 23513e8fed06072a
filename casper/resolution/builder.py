"""Manifest builder: drives every component across every entity.

A run moves through three states:

    LOADED -> RESOLVING (one pass per component, in registry order) -> RESOLVED

Each pass attempts every live entity before the next pass begins, and no pass
is ever repeated. Per-entity failures are collected, never raised; only a
configuration error in the registry aborts a run, and it does so before any
record is touched.
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from ..core.models import ErrorKind, ErrorReport, Manifest, ResolutionIssue
from ..markdown import link_entities
from .collector import ErrorCollector
from .context import RecordStore, Renderer, ResolutionContext, RunState
from .errors import UnknownComponentError
from .registry import ComponentDescriptor, ComponentRegistry
from .resolver import Err, Ok, resolve_component

logger = logging.getLogger(__name__)


class BuildState(str, Enum):
    LOADED = "loaded"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


@dataclass
class BuildResult:
    """Output of one run: surviving entities plus every issue found."""

    manifest: Manifest
    errors: ErrorReport
    order: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def types(self) -> list[str]:
        """Distinct entity types in the manifest, in first-seen order."""
        seen: dict[str, None] = {}
        for entity in self.manifest.entities():
            if entity.has("type"):
                seen[entity["type"]] = None
        return list(seen)

    def to_dict(self) -> dict[str, Any]:
        return {"manifest": self.manifest.to_dict(), "errors": self.errors.to_dict()}


class ManifestBuilder:
    """Resolves one batch of raw records into a manifest.

    A builder instance performs exactly one run. Create a new builder to
    resolve again; there is no incremental re-resolution.

    Example:
        >>> builder = ManifestBuilder(build_registry(), records)
        >>> result = builder.run()
        >>> result.manifest["weapon.club"]["properties"]
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        records: Iterable[Mapping[str, Any]],
        *,
        render: Renderer | None = None,
        brief_length: int = 250,
        strict_fields: bool = False,
        report: ErrorReport | None = None,
    ):
        self.registry = registry
        self._records = list(records)
        self._render = render
        self.brief_length = brief_length
        self.strict_fields = strict_fields
        self.collector = ErrorCollector(report)
        self.state = BuildState.LOADED
        self.current_component: str | None = None
        self._run_state: RunState | None = None

    @property
    def errors(self) -> ErrorReport:
        return self.collector.report

    def run(self) -> BuildResult:
        """Resolve every record.

        Raises:
            ConfigurationError: If the registry cannot be ordered
            RuntimeError: If this builder has already run
        """
        if self.state is not BuildState.LOADED or self._run_state is not None:
            raise RuntimeError("ManifestBuilder.run() can only be called once")

        components = self.registry.order()
        records = self._load_records(components)
        manifest = Manifest(list(records))
        render = self._render or (lambda text: link_entities(text, records))
        state = RunState(
            records=records,
            manifest=manifest,
            components=components,
            render=render,
            brief_length=self.brief_length,
        )
        self._run_state = state

        logger.info(
            "Resolving %d entities with %d components", len(manifest), len(components)
        )

        self.state = BuildState.RESOLVING
        for descriptor in components:
            self._run_pass(descriptor, state)
        self.current_component = None

        manifest.freeze()
        self.state = BuildState.RESOLVED

        logger.info(
            "Resolved %d entities, %d with errors", len(manifest), len(self.errors)
        )
        return BuildResult(
            manifest=manifest,
            errors=self.errors,
            order=[d.key for d in components],
        )

    def _run_pass(self, descriptor: ComponentDescriptor, state: RunState) -> None:
        self.current_component = descriptor.key
        state.passed.open(descriptor.key)
        resolved = 0

        for entity_id in state.manifest.ids():
            # Earlier failures in this pass may have cascaded to this entity
            if not state.is_live(entity_id):
                continue

            ctx = ResolutionContext(entity_id, state, descriptor.key)
            outcome = resolve_component(descriptor, ctx)
            if isinstance(outcome, Err):
                self.collector.fail(entity_id, outcome.issue, state)
            elif isinstance(outcome, Ok):
                state.passed.add(descriptor.key, entity_id)
                resolved += 1

        logger.debug("Pass '%s': %d entities resolved", descriptor.key, resolved)

    def _load_records(self, components: list[ComponentDescriptor]) -> RecordStore:
        """Copy input records into a fresh store, dropping invalid and duplicate ids."""
        store: RecordStore = {}
        names: dict[str, list[Any]] = {}
        known = {d.key for d in components}

        for index, raw in enumerate(self._records):
            entity_id = raw.get("id") if isinstance(raw, Mapping) else None
            if not isinstance(entity_id, str) or not entity_id:
                self.collector.add(
                    f"record[{index}]",
                    ResolutionIssue(
                        kind=ErrorKind.MISSING_FIELD,
                        component="id",
                        message=f"record #{index} has no string id",
                    ),
                )
                continue

            # Every occurrence counts towards duplicates, valid or not
            names.setdefault(entity_id, []).append(raw.get("name"))
            if not isinstance(raw.get("name"), str):
                self.collector.add(
                    entity_id,
                    ResolutionIssue(
                        kind=ErrorKind.MISSING_FIELD,
                        component="name",
                        message=f"{entity_id} has no string name",
                    ),
                )
                continue
            if len(names[entity_id]) == 1:
                store[entity_id] = copy.deepcopy(dict(raw))

        for entity_id, seen in names.items():
            if len(seen) > 1:
                store.pop(entity_id, None)
                self.collector.add(
                    entity_id,
                    ResolutionIssue(
                        kind=ErrorKind.DUPLICATE_ID,
                        component="id",
                        message=f"Duplicate id {entity_id}: "
                        + ", ".join(n if isinstance(n, str) else "<no name>" for n in seen),
                    ),
                )

        if self.strict_fields:
            for entity_id in list(store):
                unknown = [k for k in store[entity_id] if k not in known]
                if unknown:
                    error = UnknownComponentError(
                        f"{entity_id} contains unknown fields: {', '.join(unknown)}"
                    )
                    store.pop(entity_id)
                    self.collector.add(
                        entity_id,
                        ResolutionIssue(kind=error.kind, component=None, message=str(error)),
                    )

        logger.info("Loaded %d records (%d input)", len(store), len(self._records))
        return store


def resolve_entities(
    records: Iterable[Mapping[str, Any]],
    registry: ComponentRegistry | None = None,
    **options: Any,
) -> BuildResult:
    """Resolve raw records into a manifest in one call.

    Args:
        records: Raw records, each with a string ``id`` and ``name``
        registry: Components to apply; defaults to every built-in component
        **options: Passed to ManifestBuilder (render, brief_length, strict_fields)

    Returns:
        BuildResult with the manifest and the error report
    """
    if registry is None:
        from ..components import build_registry

        registry = build_registry()
    return ManifestBuilder(registry, records, **options).run()
