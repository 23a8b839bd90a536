"""Daily slot requirements and the coverage shortage resolver."""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from roster.domain.entities import Machine, ShiftCode, Worker, WorkloadState

from .constraints import MAX_WORKED_DAYS
from .dates import day_date, to_iso
from .leave import is_on_leave


THREE_SHIFTS: Tuple[ShiftCode, ...] = (ShiftCode.MORNING, ShiftCode.EVENING, ShiftCode.NIGHT)
TWO_SHIFTS: Tuple[ShiftCode, ...] = (ShiftCode.MORNING, ShiftCode.EVENING)
GENERAL_SHIFT: Tuple[ShiftCode, ...] = (ShiftCode.GENERAL,)


def required_slots(machines: Iterable[Machine]) -> int:
    """Slots needed in a day if no machine is flexed."""
    return sum(3 if m.three_shift else 2 for m in machines)


def available_count(
    workers: Iterable[Worker],
    day_offset: int,
    workload: WorkloadState,
    leave_index: Dict[str, Set[str]],
    week_start: date,
    max_days: int = MAX_WORKED_DAYS,
) -> int:
    """
    Rough head count of workers able to work on a day.

    Only leave, same-day work and the day cap are applied. Retirement and
    per-shift rules are left out on purpose, so this can differ from the
    real number of fillable slots.
    """
    iso = to_iso(day_date(week_start, day_offset))
    count = 0
    for w in workers:
        if is_on_leave(w.name, iso, leave_index):
            continue
        if workload.worked_on(w.name, day_offset):
            continue
        if workload.days(w.name) >= max_days:
            continue
        count += 1
    return count


def resolve_flex_machines(
    machines: Sequence[Machine],
    shortage: int,
    flex_priority: Iterable[str],
) -> Set[str]:
    """
    Pick machines that collapse to a single General shift today.

    Walks flex_priority in order; each non-three-shift, flex-capable machine
    found takes one slot off the shortage. Stops at zero or the end of the list.

    Returns:
        Set of machine ids flexed for the day
    """
    flexed: Set[str] = set()
    if shortage <= 0:
        return flexed

    by_id = {m.id: m for m in machines}
    remaining = shortage
    for machine_id in flex_priority:
        machine = by_id.get(machine_id)
        if machine is None or machine.three_shift or not machine.flex_to_general:
            continue
        flexed.add(machine_id)
        remaining -= 1
        if remaining <= 0:
            break
    return flexed


def flexed_machines_for_day(
    workers: Sequence[Worker],
    machines: Sequence[Machine],
    day_offset: int,
    workload: WorkloadState,
    leave_index: Dict[str, Set[str]],
    week_start: date,
    flex_priority: Iterable[str],
    max_days: int = MAX_WORKED_DAYS,
) -> Set[str]:
    """Run the shortage resolver for one day, before any slot is filled."""
    required = required_slots(machines)
    available = available_count(workers, day_offset, workload, leave_index, week_start, max_days)
    shortage = max(0, required - available)
    return resolve_flex_machines(machines, shortage, flex_priority)


def shifts_for_machine(machine: Machine, flexed: bool) -> Tuple[ShiftCode, ...]:
    if machine.three_shift:
        return THREE_SHIFTS
    if flexed:
        return GENERAL_SHIFT
    return TWO_SHIFTS


def default_flex_priority(machines: Iterable[Machine]) -> List[str]:
    return [m.id for m in machines if m.flex_to_general and not m.three_shift]
