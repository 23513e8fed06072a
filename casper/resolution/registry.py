"""Component descriptors and the registry that orders them.

A component is a named processing rule bound to one root field of a record.
The registry owns every descriptor taking part in a run and computes the
order the manifest builder processes them in:

1. hoisted components (identity fields such as ``id`` and ``name``)
2. regular components, each after everything it requires or waits for
3. sink components, which observe the result of every other component

Ties are broken by registration order, so the same registered set always
yields the same order.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Iterator

from ..utils import topological_sort, CircularDependencyError
from .errors import ComponentCycleError, ConfigurationError

if TYPE_CHECKING:
    from .context import ResolutionContext

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ComponentDescriptor:
    """Declarative description of one component.

    Attributes:
        key: Root field the component reacts to and writes to
        requires: Fields that must exist on the same raw record
        wait_for: Components whose whole pass must finish before this one
        hoist: Order before every non-hoisted component
        sink: Order after every non-sink component
        suppress_type: Ignore this component when inferring an entity's type
        each: Run ``process`` per element when the data is a list. ``None``
            infers it from the key: plural keys (ending in "s") are array
            components.
        trigger: ``(ctx) -> bool``; default: the record has ``key``
        get_data: ``(ctx) -> data``; default: a copy of ``record[key]``
        process: ``(data, ctx) -> result``; default: data unchanged
        transform: ``(result, ctx) -> None``; default: write ``key`` on the entity
    """

    key: str
    requires: tuple[str, ...] = ()
    wait_for: tuple[str, ...] = ()
    hoist: bool = False
    sink: bool = False
    suppress_type: bool = False
    each: bool | None = None
    trigger: Callable[["ResolutionContext"], bool] | None = None
    get_data: Callable[["ResolutionContext"], Any] | None = None
    process: Callable[[Any, "ResolutionContext"], Any] | None = None
    transform: Callable[[Any, "ResolutionContext"], None] | None = None
    description: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        self.requires = tuple(self.requires)
        self.wait_for = tuple(self.wait_for)

    @property
    def dependencies(self) -> list[str]:
        """Keys that must be processed before this component, without duplicates."""
        return list(dict.fromkeys(self.requires + self.wait_for))

    @property
    def maps_elements(self) -> bool:
        if self.each is not None:
            return self.each
        return self.key.endswith("s")


class ComponentRegistry:
    """Holds component descriptors and computes their processing order.

    Built once at startup, then passed to every ManifestBuilder. The registry
    is read-only while a run is in progress; the builder takes a snapshot of
    ``order()`` before touching any record.
    """

    def __init__(self, descriptors: list[ComponentDescriptor] | None = None):
        self._descriptors: dict[str, ComponentDescriptor] = {}
        self._order: list[ComponentDescriptor] | None = None
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ComponentDescriptor) -> None:
        """Add a descriptor. Registering the same object twice is a no-op.

        Raises:
            ConfigurationError: If a different descriptor already uses the key
        """
        existing = self._descriptors.get(descriptor.key)
        if existing is descriptor:
            return
        if existing is not None:
            raise ConfigurationError(
                f"Component key '{descriptor.key}' is already registered"
            )
        self._descriptors[descriptor.key] = descriptor
        self._order = None

    def reset(self) -> None:
        """Remove every descriptor."""
        self._descriptors.clear()
        self._order = None

    def get(self, key: str) -> ComponentDescriptor | None:
        return self._descriptors.get(key)

    def keys(self) -> list[str]:
        return list(self._descriptors)

    def __contains__(self, key: object) -> bool:
        return key in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ComponentDescriptor]:
        return iter(list(self._descriptors.values()))

    def order(self) -> list[ComponentDescriptor]:
        """Return descriptors in processing order.

        Raises:
            ComponentCycleError: If dependencies form a cycle
            ConfigurationError: If a dependency is unregistered, a hoisted
                component depends on a non-hoisted one, or a regular
                component depends on a sink
        """
        if self._order is None:
            self._order = self._compute_order()
        return list(self._order)

    def _compute_order(self) -> list[ComponentDescriptor]:
        self._validate()

        rank = {key: i for i, key in enumerate(self._descriptors)}
        tiers: list[list[ComponentDescriptor]] = [[], [], []]
        for descriptor in self._descriptors.values():
            if descriptor.hoist:
                tiers[0].append(descriptor)
            elif descriptor.sink:
                tiers[2].append(descriptor)
            else:
                tiers[1].append(descriptor)

        ordered: list[ComponentDescriptor] = []
        for tier in tiers:
            keys = {d.key for d in tier}
            # Dependencies in an earlier tier are already satisfied
            deps = {d.key: [k for k in d.dependencies if k in keys] for d in tier}
            try:
                tier_order = topological_sort(deps, priority=rank)
            except CircularDependencyError as e:
                raise ComponentCycleError(
                    f"Component dependency cycle: {e}", components=e.nodes
                ) from e
            ordered.extend(self._descriptors[key] for key in tier_order)

        logger.debug("Component order: %s", ", ".join(d.key for d in ordered))
        return ordered

    def _validate(self) -> None:
        for descriptor in self._descriptors.values():
            if descriptor.hoist and descriptor.sink:
                raise ConfigurationError(
                    f"Component '{descriptor.key}' cannot be both hoisted and a sink"
                )
            for dep in descriptor.dependencies:
                target = self._descriptors.get(dep)
                if target is None:
                    raise ConfigurationError(
                        f"Component '{descriptor.key}' depends on unregistered component '{dep}'"
                    )
                if descriptor.hoist and not target.hoist:
                    raise ConfigurationError(
                        f"Hoisted component '{descriptor.key}' depends on "
                        f"non-hoisted component '{dep}'"
                    )
                if target.sink and not descriptor.sink:
                    raise ConfigurationError(
                        f"Component '{descriptor.key}' depends on sink component '{dep}'"
                    )
