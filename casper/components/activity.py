"""Activities: actions a character can take, and references to them."""

from typing import Any

from ..core.models import ActivityInfo, ActivityRef
from ..resolution import ComponentDescriptor, ResolutionContext

ACTIVITY_PREFIX = "activity."


def _process_activity(data: dict[str, Any], ctx: ResolutionContext) -> ActivityInfo:
    return ActivityInfo.model_validate(data)


ACTIVITY = ComponentDescriptor(
    key="activity",
    requires=("description",),
    process=_process_activity,
)


def _process_activity_ref(data: dict[str, Any], ctx: ResolutionContext) -> ActivityRef:
    ref = data["ref"]
    target_id = ref if ref.startswith(ACTIVITY_PREFIX) else ACTIVITY_PREFIX + ref
    target = ctx.require(target_id, "activity")

    return ActivityRef(
        name=target.name,
        id=target.id,
        description=target.get("description"),
        brief=target.get("brief"),
        time=target["activity"].time,
    )


ACTIVITIES = ComponentDescriptor(
    key="activities",
    wait_for=("activity", "brief"),
    suppress_type=True,
    each=True,
    process=_process_activity_ref,
)
