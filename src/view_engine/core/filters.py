"""Built-in filters and the filter pipeline.

A filter receives the current value followed by its own arguments exactly
as written in the template (strings); filters do their own coercion.
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, Optional

from .arguments import parse_args
from .dates import DEFAULT_DATE_FORMAT, format_date, parse_date
from .models import UnknownNamePolicy
from .registry import Registry

FILTER_SEGMENT = re.compile(r"^([a-zA-Z0-9_]+)(?::(.*))?$", re.DOTALL)

_HTML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&#x27;"),
)


def escape(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    for char, entity in _HTML_ESCAPES:
        value = value.replace(char, entity)
    return value


def upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def capitalize(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    return value[:1].upper() + value[1:].lower()


def date(value: Any, fmt: str = DEFAULT_DATE_FORMAT) -> Any:
    """Format a date value; anything that is not a date is returned as is."""
    if not value:
        return value
    moment = parse_date(value)
    if moment is None:
        return value
    return format_date(moment, fmt)


def truncate(value: Any, length: Any = 100, suffix: str = "...") -> Any:
    if not isinstance(value, str):
        return value
    try:
        limit = int(length)
    except (TypeError, ValueError):
        return value
    if len(value) > limit:
        return value[:max(limit, 0)] + suffix
    return value


BUILTIN_FILTERS: Dict[str, Callable[..., Any]] = {
    "escape": escape,
    "upper": upper,
    "lower": lower,
    "capitalize": capitalize,
    "date": date,
    "truncate": truncate,
}


def apply_filters(
    value: Any,
    segments: Iterable[str],
    registry: Registry,
    policy: UnknownNamePolicy = UnknownNamePolicy.SILENT,
    log: Optional[logging.Logger] = None,
) -> Any:
    """Run ``value`` through a chain of ``name:arg1,arg2`` segments in order.

    Segments that are not valid filter syntax are ignored. Unknown filters
    leave the value unchanged unless the policy is strict.
    """
    for segment in segments:
        match = FILTER_SEGMENT.match(segment.strip())
        if not match:
            continue
        name, raw_args = match.group(1), match.group(2)
        args = parse_args(raw_args) if raw_args else []
        func = registry.lookup(name, policy, log)
        if func is not None:
            value = func(value, *args)
    return value
