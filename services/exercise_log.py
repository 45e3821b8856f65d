"""Shaping a user's exercise log for the log endpoint."""

from typing import Any, Dict, List, Optional
from schemas import Exercise, User
from utils.helpers import parse_date, parse_int


def filter_by_date(
    entries: List[Exercise],
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
) -> List[Exercise]:
    """Keep entries strictly after `from_date` and strictly before `to_date`.

    An unparseable bound or entry date never compares as in range, so it
    drops the entries it is compared against.
    """
    if from_date:
        lower = parse_date(from_date)
        entries = [
            entry for entry in entries
            if lower is not None and _after(entry, lower)
        ]
    if to_date:
        upper = parse_date(to_date)
        entries = [
            entry for entry in entries
            if upper is not None and _before(entry, upper)
        ]
    return entries


def _after(entry: Exercise, bound) -> bool:
    entry_date = parse_date(entry.date)
    return entry_date is not None and entry_date > bound


def _before(entry: Exercise, bound) -> bool:
    entry_date = parse_date(entry.date)
    return entry_date is not None and entry_date < bound


def build_log_response(
    user: User,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    limit: Optional[str] = None,
) -> Dict[str, Any]:
    """Build the `{userId, username, log, count}` payload.

    Order matters: `limit` truncates the log first, `count` is taken next,
    then the date filters run. With no limit, `count` is therefore the full
    log size even when `from`/`to` drop entries.
    """
    entries = list(user.log)

    if limit:
        max_entries = parse_int(limit)
        if max_entries is not None:
            entries = entries[:max_entries]

    count = len(entries)
    entries = filter_by_date(entries, from_date, to_date)

    return {
        "userId": user.id,
        "username": user.username,
        "log": [entry.model_dump() for entry in entries],
        "count": count,
    }
