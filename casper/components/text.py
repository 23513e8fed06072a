"""Text components: description, brief, article, source, img."""

from typing import Any

from ..core.models import RenderedText
from ..resolution import ComponentDescriptor, ResolutionContext


def _rendered(text: Any, ctx: ResolutionContext) -> RenderedText:
    return ctx.render_text(text)


# =============================================================================
# Description
# =============================================================================


def _has_text(ctx: ResolutionContext) -> bool:
    return "description" in ctx.data or "brief" in ctx.data


def _description_data(ctx: ResolutionContext) -> Any:
    """Use the description, falling back to the brief when there is none."""
    if "description" in ctx.data:
        return ctx.data["description"]
    return ctx.data["brief"]


DESCRIPTION = ComponentDescriptor(
    key="description",
    suppress_type=True,
    trigger=_has_text,
    get_data=_description_data,
    process=_rendered,
)


# =============================================================================
# Brief
# =============================================================================


def _brief_data(ctx: ResolutionContext) -> Any:
    """Use the brief, or derive one by truncating the description."""
    if "brief" in ctx.data:
        return ctx.data["brief"]

    text = str(ctx.data["description"])
    limit = ctx.brief_length
    if len(text) > limit:
        text = text[: max(limit - 3, 0)] + "..."
    return text


BRIEF = ComponentDescriptor(
    key="brief",
    suppress_type=True,
    trigger=_has_text,
    get_data=_brief_data,
    process=_rendered,
)


# =============================================================================
# Article, source, img
# =============================================================================


def _process_article(data: dict[str, Any], ctx: ResolutionContext) -> dict[str, RenderedText]:
    return {section: ctx.render_text(text) for section, text in data.items()}


# Long-form text; description stays required so search results have a summary
ARTICLE = ComponentDescriptor(
    key="article",
    requires=("description",),
    suppress_type=True,
    process=_process_article,
)

SOURCE = ComponentDescriptor(key="source", suppress_type=True)

IMG = ComponentDescriptor(key="img", suppress_type=True)
