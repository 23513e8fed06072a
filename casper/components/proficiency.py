"""Things a character can be proficient in."""

from typing import Any

from ..core.models import EntitySummary, ProficiencyInfo
from ..resolution import ComponentDescriptor, ResolutionContext


def _process_proficiency(data: dict[str, Any], ctx: ResolutionContext) -> ProficiencyInfo:
    """
    Resolve the default ability and the skill combos of a proficiency.

    The ability must be a described entity. Each combo references a skill
    entity and carries its own effect text, which replaces the skill's
    description in the output.
    """
    ability = ctx.require(data["ability"], "description", what="ability")

    combos = None
    if data.get("combos") is not None:
        combos = []
        for combo in data["combos"]:
            ctx.record(combo["skill"])
            skill = ctx.manifest[combo["skill"]]
            combos.append(
                EntitySummary(
                    name=skill.name,
                    id=skill.id,
                    description=ctx.render_text(combo["effect"]),
                )
            )

    return ProficiencyInfo(ability=ctx.summarize(ability), combos=combos)


PROFICIENCY = ComponentDescriptor(
    key="proficiency",
    requires=("description",),
    process=_process_proficiency,
)
