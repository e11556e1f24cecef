"""Value helpers shared by the evaluation passes.

Render contexts hold JSON-like values: strings, numbers, booleans, ``None``,
mappings and sequences. These helpers give those values one consistent
meaning for truthiness, comparison and text output.
"""

import json
import math
from collections.abc import Mapping, Sequence
from typing import Any


class _Undefined:
    """Marker for a binding that does not exist (distinct from ``None``)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = _Undefined()

_SCALARS = (str, bool, int, float)


def is_number(value: Any) -> bool:
    """True for ints and floats, but not for booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """True for list-like values; strings and bytes are not sequences here."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_truthy(value: Any) -> bool:
    """Truthiness used by ``{{if}}``.

    Falsy values are the empty string, zero, NaN, ``None``, ``UNDEFINED``
    and ``False``. Empty collections are truthy.
    """
    if value is None or value is UNDEFINED or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if is_number(value):
        return not (value == 0 or (isinstance(value, float) and math.isnan(value)))
    return True


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if text == "":
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def loose_equals(left: Any, right: Any) -> bool:
    """Equality for ``==`` / ``!=``.

    Numbers and numeric strings compare by numeric value, booleans compare
    as 0/1 and ``None`` equals ``UNDEFINED``.
    """
    left_missing = left is None or left is UNDEFINED
    right_missing = right is None or right is UNDEFINED
    if left_missing or right_missing:
        return left_missing and right_missing

    if isinstance(left, str) and isinstance(right, str):
        return left == right
    if isinstance(left, _SCALARS) and isinstance(right, _SCALARS):
        return _to_number(left) == _to_number(right)
    if isinstance(left, str) or isinstance(right, str):
        return stringify(left) == stringify(right)

    return left is right or left == right


def strict_equals(left: Any, right: Any) -> bool:
    """Equality for ``===`` / ``!==``: values must also be of the same kind."""
    if left is UNDEFINED or right is UNDEFINED:
        return left is right
    if left is None or right is None:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    if isinstance(left, str) and isinstance(right, str):
        return left == right
    return left is right


def _json_default(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if is_sequence(value):
        return list(value)
    return str(value)


def to_json(value: Any) -> str:
    """Serialise a collection value compactly for substitution into text."""
    return json.dumps(value, default=_json_default, ensure_ascii=False, separators=(",", ":"))


def stringify(value: Any) -> str:
    """Convert a resolved value into the text written to the output."""
    if isinstance(value, str):
        return value
    if value is None or value is UNDEFINED:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping) or is_sequence(value):
        return to_json(value)
    return str(value)
