"""Identity fields every record carries.

Both are hoisted: they resolve before any other component, so every hook can
rely on ``ctx.parent.name`` and on the id/name of any live entity.
"""

from ..resolution import ComponentDescriptor

ID = ComponentDescriptor(key="id", hoist=True)

NAME = ComponentDescriptor(key="name", hoist=True)
