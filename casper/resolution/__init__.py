"""Entity resolution engine.

Turns a flat list of raw records into a cross-referenced manifest:

- registry.py: ComponentDescriptor and the dependency-ordered ComponentRegistry
- context.py: RunState, PassedSet, ReferenceLedger, ResolutionContext
- resolver.py: applies one component to one entity, returning Ok/Err/SKIPPED
- collector.py: ErrorCollector, which records failures and purges entities
- builder.py: ManifestBuilder and resolve_entities
"""

from .errors import (
    ConfigurationError,
    ComponentCycleError,
    ResolutionError,
    MissingRequirementError,
    UndefinedReferenceError,
    UnknownComponentError,
)
from .registry import ComponentDescriptor, ComponentRegistry
from .context import (
    PassedSet,
    RecordStore,
    ReferenceLedger,
    Renderer,
    ResolutionContext,
    RunState,
)
from .resolver import OMIT, SKIPPED, Err, Ok, Outcome, Skipped, resolve_component
from .collector import ErrorCollector
from .builder import BuildResult, BuildState, ManifestBuilder, resolve_entities

__all__ = [
    # Errors
    "ConfigurationError",
    "ComponentCycleError",
    "ResolutionError",
    "MissingRequirementError",
    "UndefinedReferenceError",
    "UnknownComponentError",
    # Registry
    "ComponentDescriptor",
    "ComponentRegistry",
    # Context
    "PassedSet",
    "RecordStore",
    "ReferenceLedger",
    "Renderer",
    "ResolutionContext",
    "RunState",
    # Resolver
    "OMIT",
    "SKIPPED",
    "Err",
    "Ok",
    "Outcome",
    "Skipped",
    "resolve_component",
    # Collector
    "ErrorCollector",
    # Builder
    "BuildResult",
    "BuildState",
    "ManifestBuilder",
    "resolve_entities",
]
