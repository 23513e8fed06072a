"""Physical items and the components that build on them."""

from typing import Any

from ..core.models import AbilityCheck, EntitySummary, ItemInfo, ToolInfo
from ..resolution import ComponentDescriptor, ResolutionContext


def _process_item(data: dict[str, Any] | None, ctx: ResolutionContext) -> ItemInfo:
    # An empty `item:` still marks the entity as an item
    return ItemInfo.model_validate(data or {})


ITEM = ComponentDescriptor(key="item", process=_process_item)

ARMOR = ComponentDescriptor(key="armor", requires=("item",))

WEAPON = ComponentDescriptor(key="weapon", requires=("item",))


# =============================================================================
# Tool
# =============================================================================


def _supply(supply_id: str, ctx: ResolutionContext) -> EntitySummary:
    ctx.record(supply_id, "item")
    return ctx.summarize(ctx.manifest[supply_id])


def _process_tool(data: dict[str, Any] | None, ctx: ResolutionContext) -> ToolInfo:
    """Resolve supply references and validate ability checks."""
    data = data or {}

    supplies = data.get("supplies")
    if supplies is not None:
        supplies = [_supply(s, ctx) for s in supplies]

    checks = data.get("checks")
    if checks is not None:
        checks = [AbilityCheck.model_validate(c) for c in checks]

    return ToolInfo(supplies=supplies, checks=checks)


TOOL = ComponentDescriptor(
    key="tool",
    requires=("item", "proficiency"),
    process=_process_tool,
)

VEHICLE = ComponentDescriptor(key="vehicle", requires=("tool", "item", "proficiency"))
