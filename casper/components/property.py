"""Properties: reusable rules that items reference with arguments.

A property entity declares placeholder arguments in its text, e.g. a
"Range ({normal}/{max})" property with description "Range {normal} ft.".
Items reference it as ``{ref: range, normal: 30, max: 120}``; every declared
argument must be supplied and is substituted into the name and description.
The property keeps a list of every entity that references it.
"""

import re
from typing import Any

from ..core.models import PropertyInfo, PropertyRef
from ..resolution import ComponentDescriptor, ResolutionContext, ResolutionError

PLACEHOLDER = re.compile(r"{(\w+)}")

PROPERTY_PREFIX = "property."


def property_id(ref: str) -> str:
    """Expand a short property reference: ``heavy`` -> ``property.heavy``."""
    if ref.startswith(PROPERTY_PREFIX):
        return ref
    return PROPERTY_PREFIX + ref


def _process_property(data: dict[str, Any] | None, ctx: ResolutionContext) -> PropertyInfo:
    data = data or {}

    description = data.get("description")
    if description is None:
        root = ctx.parent.get("description")
        if root is None:
            raise ResolutionError(f"{ctx.id} is a property without a description")
        description = root.raw

    args = data.get("args")
    if args is None:
        # Infer from the placeholders used in the name and description
        text = (ctx.parent.name or "") + str(description)
        args = list(dict.fromkeys(PLACEHOLDER.findall(text)))

    return PropertyInfo(
        type=data.get("type", "any"),
        args=args,
        description=str(description),
    )


PROPERTY = ComponentDescriptor(
    key="property",
    wait_for=("description",),
    process=_process_property,
)


def _process_property_ref(data: dict[str, Any], ctx: ResolutionContext) -> PropertyRef:
    target_id = property_id(data["ref"])
    target = ctx.require(target_id, "property")
    info: PropertyInfo = target["property"]

    if info.type != "any" and info.type not in ctx.data:
        raise ResolutionError(
            f"{ctx.id} cannot have property {target_id}, which only applies to {info.type} entities"
        )

    name = target.name
    description = info.description
    args: dict[str, Any] = {}
    for arg in info.args:
        if arg not in data:
            raise ResolutionError(f'property {target.name} of {ctx.id} is missing arg "{arg}"')
        value = data[arg]
        name = name.replace(f"{{{arg}}}", str(value))
        description = description.replace(f"{{{arg}}}", str(value))
        args[arg] = value

    if ctx.id not in info.entities:
        ctx.backlink(target_id, "property", "entities")

    return PropertyRef(name=name, id=target_id, description=description, args=args)


PROPERTIES = ComponentDescriptor(
    key="properties",
    requires=("item",),
    wait_for=("property",),
    suppress_type=True,
    each=True,
    process=_process_property_ref,
)
