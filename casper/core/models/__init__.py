"""All models for Casper, organized by concern.

- entity.py: Entity and Manifest containers built by the resolution engine
- issues.py: ErrorKind, ResolutionIssue, ErrorReport
- components.py: Result models written by the built-in components
"""

from .entity import Entity, Manifest, dump_value
from .issues import ErrorKind, ResolutionIssue, ErrorReport
from .components import (
    # Shared
    RenderedText,
    EntitySummary,
    # Items
    ItemInfo,
    AbilityCheck,
    ToolInfo,
    ProficiencyInfo,
    # Properties
    PropertyInfo,
    PropertyRef,
    # Categories
    CategoryInfo,
    CategoryRef,
    # Activities
    ActivityInfo,
    ActivityRef,
    # Lineages
    TraitInfo,
    LanguageInfo,
    Stature,
    LineageInfo,
    SubLineageInfo,
)

__all__ = [
    "Entity",
    "Manifest",
    "dump_value",
    "ErrorKind",
    "ResolutionIssue",
    "ErrorReport",
    "RenderedText",
    "EntitySummary",
    "ItemInfo",
    "AbilityCheck",
    "ToolInfo",
    "ProficiencyInfo",
    "PropertyInfo",
    "PropertyRef",
    "CategoryInfo",
    "CategoryRef",
    "ActivityInfo",
    "ActivityRef",
    "TraitInfo",
    "LanguageInfo",
    "Stature",
    "LineageInfo",
    "SubLineageInfo",
]
