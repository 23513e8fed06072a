"""Casper: resolves hand-authored YAML game-reference records into a
cross-referenced manifest.

    from casper import resolve_entities

    result = resolve_entities(records)
    result.manifest["weapon.club"].to_dict()
    result.errors.to_dict()
"""

__version__ = "0.3.0"

from .resolution import (
    BuildResult,
    ComponentDescriptor,
    ComponentRegistry,
    ManifestBuilder,
    resolve_entities,
)
from .components import build_registry
from .catalog import Casper

__all__ = [
    "__version__",
    "BuildResult",
    "ComponentDescriptor",
    "ComponentRegistry",
    "ManifestBuilder",
    "resolve_entities",
    "build_registry",
    "Casper",
]
