"""Date parsing and token formatting used by ``date`` and ``formatDate``."""

from datetime import date, datetime
from typing import Any, Optional

from .values import is_number

DEFAULT_DATE_FORMAT = "YYYY-MM-DD HH:mm:ss"


def parse_date(value: Any) -> Optional[datetime]:
    """Interpret ``value`` as a point in time.

    Accepts ``datetime``/``date`` objects, epoch milliseconds and ISO-8601
    strings. Timezone-aware values are converted to local time. Returns None
    when the value cannot be read as a date.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif is_number(value):
        try:
            parsed = datetime.fromtimestamp(value / 1000)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed


def format_date(moment: datetime, fmt: str = DEFAULT_DATE_FORMAT) -> str:
    """Replace the first occurrence of each of YYYY, MM, DD, HH, mm, ss."""
    tokens = (
        ("YYYY", f"{moment.year:04d}"),
        ("MM", f"{moment.month:02d}"),
        ("DD", f"{moment.day:02d}"),
        ("HH", f"{moment.hour:02d}"),
        ("mm", f"{moment.minute:02d}"),
        ("ss", f"{moment.second:02d}"),
    )
    result = fmt
    for token, replacement in tokens:
        result = result.replace(token, replacement, 1)
    return result
