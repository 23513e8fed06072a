"""Lineages, sublineages, and the traits and languages they reference.

A sublineage names its base lineage with ``of`` and only lists what differs.
Its resolved form keeps that difference (``delta``) as well as the base
lineage with the difference applied (``full``); list fields such as
languages and traits are extended rather than replaced. The base lineage
keeps a summary of each of its sublineages in ``subs``.
"""

from typing import Any

from ..core.models import (
    EntitySummary,
    LanguageInfo,
    LineageInfo,
    Stature,
    SubLineageInfo,
    TraitInfo,
)
from ..resolution import ComponentDescriptor, ResolutionContext


def _process_trait(data: dict[str, Any], ctx: ResolutionContext) -> TraitInfo:
    return TraitInfo.model_validate(data)


TRAIT = ComponentDescriptor(
    key="trait",
    requires=("description",),
    process=_process_trait,
)


def _process_language(data: dict[str, Any], ctx: ResolutionContext) -> LanguageInfo:
    # Languages written in another language's script point at that language
    script = None
    script_id = data.pop("script", None)
    if script_id is not None:
        ctx.record(script_id, "language")
        script = ctx.summarize(ctx.manifest[script_id])

    return LanguageInfo(script=script, **data)


LANGUAGE = ComponentDescriptor(
    key="language",
    requires=("description",),
    process=_process_language,
)


# =============================================================================
# Lineage
# =============================================================================


def parse_stature(stature: dict[str, str]) -> Stature:
    """Parse ``{"height": "4-5", "weight": "200-300"}`` into integer ranges."""
    return Stature(
        height=[int(i) for i in str(stature["height"]).split("-")],
        weight=[int(i) for i in str(stature["weight"]).split("-")],
    )


def _summaries(ids: list[str], key: str, ctx: ResolutionContext) -> list[EntitySummary]:
    return [ctx.summarize(ctx.require(i, key)) for i in ids]


def _process_lineage(data: dict[str, Any], ctx: ResolutionContext) -> LineageInfo:
    stature = data.pop("stature", None)
    languages = data.pop("languages", None) or []
    traits = data.pop("traits", None) or []
    data.pop("subs", None)

    return LineageInfo(
        **data,
        stature=parse_stature(stature) if stature is not None else None,
        languages=_summaries(languages, "language", ctx),
        traits=_summaries(traits, "trait", ctx),
        subs=[],
    )


LINEAGE = ComponentDescriptor(
    key="lineage",
    requires=("description",),
    wait_for=("language", "trait"),
    process=_process_lineage,
)


# =============================================================================
# Sublineage
# =============================================================================


def _process_sublineage(data: dict[str, Any], ctx: ResolutionContext) -> SubLineageInfo:
    base_id = data.pop("of")
    base = ctx.require(base_id, "lineage")

    stature = data.pop("stature", None)
    languages = data.pop("languages", None)
    traits = data.pop("traits", None)

    delta: dict[str, Any] = dict(data)
    if stature is not None:
        delta["stature"] = parse_stature(stature).model_dump(mode="json")
    if languages is not None:
        delta["languages"] = [
            s.model_dump(mode="json") for s in _summaries(languages, "language", ctx)
        ]
    if traits is not None:
        delta["traits"] = [s.model_dump(mode="json") for s in _summaries(traits, "trait", ctx)]

    full = base["lineage"].model_dump(mode="json", exclude={"subs"})
    for key, value in delta.items():
        if isinstance(full.get(key), list) and isinstance(value, list):
            full[key] = full[key] + value
        else:
            full[key] = value

    ctx.backlink(base_id, "lineage", "subs", ctx.summarize_self())

    return SubLineageInfo(delta=delta, full=full, of=ctx.summarize(base))


SUBLINEAGE = ComponentDescriptor(
    key="sublineage",
    requires=("description",),
    wait_for=("language", "trait", "lineage"),
    process=_process_sublineage,
)
