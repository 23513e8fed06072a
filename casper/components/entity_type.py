"""Entity type inference.

Runs after every other component. The type of an entity is the one
component it passed that no other passed component depends on: a vehicle
also passes ``item``, ``tool`` and ``proficiency``, but ``vehicle`` requires
all three, so its type is ``vehicle``. Hoisted, sink and reference-list
components never count.
"""

from ..resolution import ComponentDescriptor, ResolutionContext, ResolutionError

DEFAULT_TYPE = "entity"


def _always(ctx: ResolutionContext) -> bool:
    return True


def _candidates(ctx: ResolutionContext) -> list[ComponentDescriptor]:
    return [
        d
        for d in ctx.components
        if not (d.suppress_type or d.hoist or d.sink) and ctx.passed.has(d.key, ctx.id)
    ]


def _process_type(candidates: list[ComponentDescriptor], ctx: ResolutionContext) -> str:
    required = {r for d in candidates for r in d.requires}
    remaining = [d.key for d in candidates if d.key not in required]

    if not remaining:
        return DEFAULT_TYPE
    if len(remaining) == 1:
        return remaining[0]
    raise ResolutionError(f"{ctx.id} has multiple valid types! {', '.join(remaining)}")


TYPE = ComponentDescriptor(
    key="type",
    sink=True,
    each=False,
    trigger=_always,
    get_data=_candidates,
    process=_process_type,
)
