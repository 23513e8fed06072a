"""Spells and requirements."""

from typing import Any

from ..resolution import ComponentDescriptor, ResolutionContext, ResolutionError


def _process_spell(data: dict[str, Any], ctx: ResolutionContext) -> dict[str, Any]:
    level = data.get("level")
    if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 9:
        raise ResolutionError(f"{ctx.id} has spell level {level!r}, which is out of bounds (0-9)")

    data.setdefault("ritual", False)
    data.setdefault("concentration", False)
    return data


SPELL = ComponentDescriptor(
    key="spell",
    requires=("description",),
    process=_process_spell,
)


# =============================================================================
# Requirements
# =============================================================================

BOUNDED_SCORES = ("str", "con", "dex", "int", "wis", "cha", "level")


def _process_req(data: dict[str, Any] | list[dict[str, Any]], ctx: ResolutionContext) -> list[dict[str, Any]]:
    """Normalize requirements to a list and check scores and entity references."""
    reqs = data if isinstance(data, list) else [data]

    out = []
    for req in reqs:
        req = dict(req)
        for score in BOUNDED_SCORES:
            value = req.get(score)
            if value is not None and not 1 <= value <= 20:
                raise ResolutionError(f"{ctx.id} requires {score}({value}), which is out of bounds (1-20)")

        entity_id = req.pop("entity", None)
        if entity_id is not None:
            ctx.record(entity_id)
            req["entity"] = ctx.summarize(ctx.manifest[entity_id]).model_dump(mode="json")
        out.append(req)

    return out


REQ = ComponentDescriptor(
    key="req",
    suppress_type=True,
    each=False,
    process=_process_req,
)
