"""Entity links in rendered text.

Authors mention other entities as ``@weapon.longsword``. Rendering replaces
each mention with a link to the entity, labelled with its name. A host that
wants full markdown-to-HTML conversion passes its own renderer to the
manifest builder and calls ``link_entities`` from it.
"""

import html
import re
from typing import Any, Mapping

ENTITY_LINK = re.compile(r"\B@([\w.]+\w)")


def entity_path(entity_id: str) -> str:
    """URL path of an entity: ``weapon.longsword`` -> ``/weapon/longsword``."""
    return "/" + entity_id.replace(".", "/")


def mentioned_ids(text: str) -> list[str]:
    """Ids mentioned as ``@id`` in the text, in order, without duplicates."""
    return list(dict.fromkeys(ENTITY_LINK.findall(text)))


def link_entities(text: str, records: Mapping[str, Mapping[str, Any]]) -> str:
    """Replace every ``@id`` mention with an anchor to that entity.

    Unknown ids are kept visible as ``[Reference Error: id]``.
    """

    def replace(match: re.Match) -> str:
        entity_id = match.group(1)
        record = records.get(entity_id)
        if record is None:
            name = f"[Reference Error: {entity_id}]"
        else:
            name = str(record.get("name", entity_id))
        return (
            f'<a href="{entity_path(entity_id)}" class="markdown-entity-link" '
            f'data-entity-id="{entity_id}">{html.escape(name)}</a>'
        )

    return ENTITY_LINK.sub(replace, text)
