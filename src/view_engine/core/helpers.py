"""Helper function calls inside interpolation: ``{{name(arg, "text")}}``."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional

from .arguments import is_quoted, split_quoted, unquote
from .dates import DEFAULT_DATE_FORMAT, format_date, parse_date
from .models import UnknownNamePolicy
from .registry import Registry
from .resolver import resolve
from .values import UNDEFINED, is_sequence

HELPER_CALL = re.compile(r"^([a-zA-Z0-9_]+)\((.*)\)$", re.DOTALL)


def format_date_helper(value: Any = None, fmt: str = DEFAULT_DATE_FORMAT) -> Any:
    if not value:
        return ""
    moment = parse_date(value)
    if moment is None:
        return value
    return format_date(moment, fmt)


def is_even(value: Any) -> bool:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return False
    return number.is_integer() and int(number) % 2 == 0


def count(value: Any) -> int:
    return len(value) if is_sequence(value) else 0


BUILTIN_HELPERS: Dict[str, Callable[..., Any]] = {
    "formatDate": format_date_helper,
    "isEven": is_even,
    "count": count,
}


def match_helper_call(expression: str) -> Optional[re.Match]:
    """Return the call match if ``expression`` looks like ``name(...)``."""
    if "(" not in expression or ")" not in expression:
        return None
    return HELPER_CALL.match(expression)


def resolve_helper_args(raw_args: str, context: Mapping) -> List[Any]:
    """Turn the raw argument text of a helper call into Python values.

    Quoted arguments are string literals. Anything else is resolved as a
    variable; if it does not resolve, the raw text is passed through so
    bare numbers and words still work.
    """
    if not raw_args.strip():
        return []
    values: List[Any] = []
    for arg in split_quoted(raw_args, ","):
        if is_quoted(arg):
            values.append(unquote(arg))
            continue
        value = resolve(arg, context)
        values.append(arg if value is UNDEFINED else value)
    return values


def call_helper(
    name: str,
    raw_args: str,
    context: Mapping,
    registry: Registry,
    policy: UnknownNamePolicy = UnknownNamePolicy.SILENT,
    log: Optional[logging.Logger] = None,
) -> Any:
    """Invoke a registered helper; unknown helpers produce an empty string."""
    func = registry.lookup(name, policy, log)
    if func is None:
        return ""
    return func(*resolve_helper_args(raw_args, context))
