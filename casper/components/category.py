"""Categories.

Ids are namespaces: ``weapon.martial.longsword`` lives in the categories
``weapon.*`` and ``weapon.martial.*`` when those category entities exist.
Entities may list further categories explicitly by namespace
(``categories: [weapon.ranged]``). Every category keeps the ids of its members.

Only explicit categories are hard references. If an implicit category fails,
it is dropped from its members and the members resolve as if it never existed.
"""

from ..core.models import CategoryInfo, CategoryRef
from ..resolution import ComponentDescriptor, ResolutionContext, ResolutionError


def _is_category(ctx: ResolutionContext) -> bool:
    return ctx.id.endswith("*")


CATEGORY = ComponentDescriptor(
    key="category",
    requires=("description",),
    trigger=_is_category,
    get_data=lambda ctx: None,
    process=lambda data, ctx: CategoryInfo(),
)


def _always(ctx: ResolutionContext) -> bool:
    return True


def _categories_data(ctx: ResolutionContext) -> list[str] | None:
    if "categories" in ctx.data:
        return ctx.copy_data("categories")
    return None


def _process_categories(data: list[str] | None, ctx: ResolutionContext) -> list[CategoryRef]:
    """Collect implicit categories from the id, then the explicit ones."""
    implicit = [
        category_id
        for category_id in ctx.passed.ids("category")
        if ctx.id.startswith(category_id[:-1]) and ctx.id != category_id
    ]

    explicit: list[str] = []
    for name in data or []:
        ref = f"{name}.*"
        ctx.require(ref, "category")
        if ref in implicit or ref in explicit:
            raise ResolutionError(f'{ctx.id} contains a duplicate category reference: "{name}"')
        explicit.append(ref)

    out = []
    for ref in implicit + explicit:
        category = ctx.manifest[ref]
        category_ref = CategoryRef(
            id=ref, name=category.name, description=category.get("description")
        )
        ctx.backlink(ref, "category", "entities")
        if ref in implicit:
            ctx.soft_link(ref, "categories", category_ref)
        out.append(category_ref)
    return out


CATEGORIES = ComponentDescriptor(
    key="categories",
    wait_for=("category",),
    suppress_type=True,
    each=False,
    trigger=_always,
    get_data=_categories_data,
    process=_process_categories,
)
