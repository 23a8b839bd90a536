"""Leave index: who is unavailable on which calendar dates."""

from __future__ import annotations

from datetime import timedelta
from typing import Dict, Iterable, Set

from roster.domain.entities import LeaveRecord

from .dates import parse_calendar_date, to_iso


# Leave blocks the leave date itself and the following day.
LEAVE_WINDOW_DAYS = 2


def build_leave_index(leaves: Iterable[LeaveRecord]) -> Dict[str, Set[str]]:
    """
    Build a lookup from worker name to the ISO dates they cannot work.

    Records with a blank name or an unparsable date are skipped.

    Args:
        leaves: Leave records in any order

    Returns:
        Dict of worker name -> set of ISO date strings
    """
    index: Dict[str, Set[str]] = {}
    for record in leaves:
        name = (record.name or "").strip()
        if not name:
            continue
        leave_date = parse_calendar_date(record.date)
        if leave_date is None:
            continue
        blocked = index.setdefault(name, set())
        for offset in range(LEAVE_WINDOW_DAYS):
            blocked.add(to_iso(leave_date + timedelta(days=offset)))
    return index


def is_on_leave(name: str, iso_date: str, leave_index: Dict[str, Set[str]]) -> bool:
    return iso_date in leave_index.get(name, ())
