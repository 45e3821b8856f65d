"""Helper utility functions."""

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional

DATE_FORMAT = "%Y-%m-%d"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Fallbacks tried after ISO 8601
_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%a %b %d %Y",
    "%b %d %Y",
    "%d %b %Y",
)


def normalize_date(value: Optional[str] = None) -> str:
    """Return the caller's date unchanged, or today's local date as YYYY-MM-DD.

    Caller-supplied values are not validated.
    """
    if value:
        return value
    return date.today().strftime(DATE_FORMAT)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date string leniently.

    Args:
        value: Date in ISO format (YYYY-MM-DD, full ISO datetime) or a
            common textual form such as "Mon Jan 01 2020"

    Returns:
        Naive datetime (aware values are converted to UTC), or None if the
        value cannot be parsed
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()

    parsed = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is None:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_int(value: Any) -> Optional[int]:
    """Parse the leading integer of a value ("30" -> 30, "30min" -> 30).

    Returns None when no integer can be read.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            try:
                return int(match.group(1))
            except ValueError:
                # Longer than the interpreter allows for int conversion
                return None
    return None


def coerce_text(value: Any) -> Any:
    """Cast a JSON number to its string form; other values are unchanged."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    return value


def pick_fields(payload: Mapping[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """Copy only the given keys that are present and not None."""
    return {key: payload[key] for key in keys if payload.get(key) is not None}
