"""Greedy weekly roster engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Sequence, Set

import pandas as pd

from roster.domain.entities import UNSTAFFED, LeaveRecord, Machine, ShiftCode, Worker, WorkloadState
from roster.services.constraints import MAX_WORKED_DAYS
from roster.services.dates import DAYS_IN_WEEK, DateLike, day_date, parse_week_start, to_iso
from roster.services.leave import build_leave_index
from roster.services.requirements import default_flex_priority, flexed_machines_for_day, shifts_for_machine
from roster.services.scoring import rank_candidates


# day offset -> machine id -> shift -> worker name or UNSTAFFED
AssignmentTable = Dict[int, Dict[str, Dict[ShiftCode, str]]]


@dataclass
class RosterResult:
    week_start: date
    assignments: AssignmentTable
    workload: WorkloadState
    flexed: Dict[int, Set[str]] = field(default_factory=dict)

    @property
    def shift_counts(self) -> Dict[str, int]:
        return self.workload.shift_counts

    @property
    def days_worked(self) -> Dict[str, Set[int]]:
        return self.workload.days_worked

    def day_date(self, day_offset: int) -> date:
        return day_date(self.week_start, day_offset)

    def unstaffed_slots(self) -> int:
        return sum(
            1
            for machines in self.assignments.values()
            for shifts in machines.values()
            for name in shifts.values()
            if name == UNSTAFFED
        )

    def to_frame(self) -> pd.DataFrame:
        """Long-format view: one row per (day, machine, shift) slot."""
        return assignments_to_frame(self.week_start, self.assignments)


def assignments_to_frame(week_start: date, assignments: AssignmentTable) -> pd.DataFrame:
    rows = []
    for day_offset in sorted(assignments):
        iso = to_iso(day_date(week_start, day_offset))
        for machine_id, shifts in assignments[day_offset].items():
            for shift, name in shifts.items():
                rows.append(
                    {
                        "day": day_offset,
                        "date": iso,
                        "machine": machine_id,
                        "shift": ShiftCode(shift).value,
                        "worker": name,
                    }
                )
    return pd.DataFrame(rows, columns=["day", "date", "machine", "shift", "worker"])


def generate_roster(
    workers: Sequence[Worker],
    machines: Sequence[Machine],
    week_start: DateLike,
    leaves: Iterable[LeaveRecord] = (),
    flex_priority: Iterable[str] | None = None,
    max_days: int = MAX_WORKED_DAYS,
) -> RosterResult:
    """
    Build a 7-day roster in a single greedy pass.

    Days are filled in order 0..6, machines in declared order and shifts in
    each machine's shift order. Every filled slot updates the workload before
    the next slot is ranked, so later slots see earlier choices.

    Args:
        workers: Staff in declared order
        machines: Machines in declared order
        week_start: First day of the week (date or YYYY-MM-DD)
        leaves: Leave records; malformed ones are ignored
        flex_priority: Machine ids in the order they may flex to General
            (default: flex-capable machines in declared order)
        max_days: Cap on days worked per worker within the week

    Returns:
        RosterResult with the assignment table and final workload

    Raises:
        ValueError: If week_start is not a valid date
    """
    start = parse_week_start(week_start)
    workers = list(workers)
    machines = list(machines)
    priority: List[str] = (
        list(flex_priority) if flex_priority is not None else default_flex_priority(machines)
    )

    leave_index = build_leave_index(leaves)
    workload = WorkloadState.for_workers(workers)
    assignments: AssignmentTable = {}
    flexed_by_day: Dict[int, Set[str]] = {}

    for day in range(DAYS_IN_WEEK):
        flexed = flexed_machines_for_day(
            workers, machines, day, workload, leave_index, start, priority, max_days
        )
        flexed_by_day[day] = flexed
        day_table: Dict[str, Dict[ShiftCode, str]] = {}
        assignments[day] = day_table

        for machine in machines:
            slots: Dict[ShiftCode, str] = {}
            day_table[machine.id] = slots
            for shift in shifts_for_machine(machine, machine.id in flexed):
                pool = rank_candidates(workers, day, shift, workload, leave_index, start, max_days)
                if not pool:
                    slots[shift] = UNSTAFFED
                    continue
                chosen = pool[0]
                slots[shift] = chosen.name
                workload.record(chosen.name, day)

    return RosterResult(
        week_start=start,
        assignments=assignments,
        workload=workload,
        flexed=flexed_by_day,
    )
