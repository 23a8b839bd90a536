"""Constraint checking for a single worker/day/shift slot."""

from __future__ import annotations

from datetime import date
from typing import Dict, Set

from roster.domain.entities import ShiftCode, Worker, WorkloadState

from .dates import day_date, to_iso
from .leave import is_on_leave


# Maximum number of days a worker may be rostered within the 7-day window.
MAX_WORKED_DAYS = 6


def is_eligible(
    worker: Worker,
    day_offset: int,
    shift: ShiftCode,
    workload: WorkloadState,
    leave_index: Dict[str, Set[str]],
    week_start: date,
    max_days: int = MAX_WORKED_DAYS,
) -> bool:
    """
    Check if a worker can take a shift on a given day of the week.

    Args:
        worker: Worker to check
        day_offset: Day of the week, 0 = week start
        shift: Shift slot being filled
        workload: Current shift counts and days worked
        leave_index: Worker name -> blocked ISO dates
        week_start: First calendar date of the week
        max_days: Cap on days worked within the week

    Returns:
        True if the worker can be assigned, False otherwise
    """
    # 1. Leave window
    if is_on_leave(worker.name, to_iso(day_date(week_start, day_offset)), leave_index):
        return False

    # 2. One shift per day
    if workload.worked_on(worker.name, day_offset):
        return False

    # 3. Retired staff never work nights
    if shift == ShiftCode.NIGHT and worker.retired:
        return False

    # 4. Weekly day cap
    if workload.days(worker.name) >= max_days:
        return False

    return True
