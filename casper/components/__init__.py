"""Built-in components.

``build_registry()`` returns a fresh registry holding every built-in
component. Registration order is the tie-break for components that do not
depend on each other, so it is kept stable here.
"""

from ..resolution import ComponentDescriptor, ComponentRegistry
from .identity import ID, NAME
from .text import DESCRIPTION, BRIEF, SOURCE, IMG, ARTICLE
from .item import ITEM, ARMOR, WEAPON, TOOL, VEHICLE
from .proficiency import PROFICIENCY
from .property import PROPERTY, PROPERTIES, property_id
from .category import CATEGORY, CATEGORIES
from .activity import ACTIVITY, ACTIVITIES
from .lineage import TRAIT, LANGUAGE, LINEAGE, SUBLINEAGE, parse_stature
from .spell import SPELL, REQ
from .entity_type import TYPE

DEFAULT_COMPONENTS: tuple[ComponentDescriptor, ...] = (
    ID,
    NAME,
    DESCRIPTION,
    BRIEF,
    SOURCE,
    IMG,
    ARTICLE,
    ITEM,
    ARMOR,
    WEAPON,
    PROFICIENCY,
    TOOL,
    VEHICLE,
    PROPERTY,
    PROPERTIES,
    CATEGORY,
    CATEGORIES,
    ACTIVITY,
    ACTIVITIES,
    TRAIT,
    LANGUAGE,
    LINEAGE,
    SUBLINEAGE,
    SPELL,
    REQ,
    TYPE,
)


def build_registry() -> ComponentRegistry:
    """Create a registry with every built-in component."""
    registry = ComponentRegistry()
    for descriptor in DEFAULT_COMPONENTS:
        registry.register(descriptor)
    return registry


__all__ = [
    "DEFAULT_COMPONENTS",
    "build_registry",
    "property_id",
    "parse_stature",
    "ID",
    "NAME",
    "DESCRIPTION",
    "BRIEF",
    "SOURCE",
    "IMG",
    "ARTICLE",
    "ITEM",
    "ARMOR",
    "WEAPON",
    "PROFICIENCY",
    "TOOL",
    "VEHICLE",
    "PROPERTY",
    "PROPERTIES",
    "CATEGORY",
    "CATEGORIES",
    "ACTIVITY",
    "ACTIVITIES",
    "TRAIT",
    "LANGUAGE",
    "LINEAGE",
    "SUBLINEAGE",
    "SPELL",
    "REQ",
    "TYPE",
]
