"""Quote-aware splitting of filter and helper argument lists."""

from typing import List

QUOTES = ('"', "'")


def split_quoted(raw: str, delimiter: str = ",") -> List[str]:
    """Split ``raw`` on ``delimiter`` outside of quoted spans.

    Only one quote state is tracked: a span opened by ``"`` is closed by the
    next ``"`` and ignores ``'`` in between (and vice versa). An unterminated
    quote runs to the end of the string. Parts are whitespace-stripped but
    keep their quotes. A trailing empty part is dropped.
    """
    parts: List[str] = []
    current: List[str] = []
    quote_char = None

    for char in raw:
        if quote_char is None and char in QUOTES:
            quote_char = char
        elif char == quote_char:
            quote_char = None
        elif char == delimiter and quote_char is None:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    last = "".join(current).strip()
    if last:
        parts.append(last)
    return parts


def is_quoted(arg: str) -> bool:
    """True if ``arg`` starts and ends with the same quote character."""
    return len(arg) >= 2 and arg[0] in QUOTES and arg[-1] == arg[0]


def unquote(arg: str) -> str:
    return arg[1:-1] if is_quoted(arg) else arg


def parse_args(raw: str) -> List[str]:
    """Parse a comma separated argument list.

    ``'a, "b, c", d'`` gives ``['a', 'b, c', 'd']``. Surrounding quotes are
    removed; unquoted arguments are returned as written so callers can treat
    them as literals or variable names.
    """
    return [unquote(arg) for arg in split_quoted(raw, ",")]
