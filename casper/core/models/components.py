"""Result models written onto entities by the built-in components.

Components with a fixed output shape return one of these models. Components
that pass their data through unchanged (armor, weapon, spell, ...) keep plain
dicts instead.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Shared
# =============================================================================


class RenderedText(BaseModel):
    """Source text plus its rendered form."""

    raw: str
    rendered: str


class EntitySummary(BaseModel):
    """Short read-only copy of another entity, used for joins."""

    name: str
    id: str
    description: RenderedText | None = None


# =============================================================================
# Items
# =============================================================================


class ItemInfo(BaseModel):
    cost: dict[str, float] | None = Field(
        default=None, description="Coin denomination -> amount, e.g. {'gp': 10}"
    )
    weight: float | None = Field(default=None, description="Weight in lb")
    bundle: int = Field(
        default=1, description="Items per recorded cost/weight, e.g. 20 arrows"
    )


class AbilityCheck(BaseModel):
    ability: str | None = None
    proficiency: str | None = None
    dc: int | Literal["Varies"]
    description: str


class ToolInfo(BaseModel):
    supplies: list[EntitySummary] | None = None
    checks: list[AbilityCheck] | None = None


class ProficiencyInfo(BaseModel):
    ability: EntitySummary
    combos: list[EntitySummary] | None = None


# =============================================================================
# Properties
# =============================================================================


class PropertyInfo(BaseModel):
    """The ``property`` component: a rule other entities can reference."""

    type: Literal["weapon", "armor", "any"] = "any"
    args: list[str] = Field(default_factory=list)
    description: str
    entities: list[str] = Field(
        default_factory=list, description="Ids of entities that reference this property"
    )


class PropertyRef(BaseModel):
    """A resolved reference to a property, with its arguments substituted."""

    name: str
    id: str
    description: str
    args: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# Categories
# =============================================================================


class CategoryInfo(BaseModel):
    entities: list[str] = Field(default_factory=list)


class CategoryRef(BaseModel):
    id: str
    name: str
    description: RenderedText | None = None


# =============================================================================
# Activities
# =============================================================================


class ActivityInfo(BaseModel):
    time: str


class ActivityRef(BaseModel):
    name: str
    id: str
    description: RenderedText | None = None
    brief: RenderedText | None = None
    time: str


# =============================================================================
# Lineages
# =============================================================================


class TraitInfo(BaseModel):
    type: Literal["minor", "major", "heritage"]
    requirements: str | None = None


class LanguageInfo(BaseModel):
    speakers: list[str] = Field(default_factory=list)
    script: EntitySummary | None = None
    exotic: bool = False


class Stature(BaseModel):
    height: list[int]
    weight: list[int]


class LineageInfo(BaseModel):
    """The ``lineage`` component.

    Unknown core fields (appearance, size, age, ...) are kept as extras so
    that sublineages can override any of them.
    """

    model_config = ConfigDict(extra="allow")

    stature: Stature | None = None
    languages: list[EntitySummary] = Field(default_factory=list)
    traits: list[EntitySummary] = Field(default_factory=list)
    limited: bool = False
    subs: list[EntitySummary] = Field(default_factory=list)


class SubLineageInfo(BaseModel):
    delta: dict[str, Any] = Field(
        description="Fields this sublineage sets on top of its base lineage"
    )
    full: dict[str, Any] = Field(description="Base lineage merged with the delta")
    of: EntitySummary
