"""Variable path resolution against a render context."""

from collections.abc import Mapping
from typing import Any

from .values import UNDEFINED


def resolve(path: str, context: Mapping[str, Any]) -> Any:
    """Resolve a variable path such as ``user`` or ``user.address.city``.

    Each dotted segment is looked up in the current mapping. Resolution stops
    with ``UNDEFINED`` as soon as an intermediate value is not a mapping, so
    ``items.0`` never reaches into a list.

    Args:
        path: Variable name, optionally dotted
        context: Render context to look the name up in

    Returns:
        The resolved value, or ``UNDEFINED`` when any segment is missing
    """
    if "." not in path:
        return context.get(path, UNDEFINED)

    value: Any = context
    for part in path.split("."):
        if not isinstance(value, Mapping):
            return UNDEFINED
        value = value.get(part, UNDEFINED)
    return value
