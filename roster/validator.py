from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

import pandas as pd

from roster.domain.entities import UNSTAFFED, LeaveRecord, Machine, ShiftCode, Worker
from roster.services.constraints import MAX_WORKED_DAYS
from roster.services.dates import DAYS_IN_WEEK
from roster.services.leave import build_leave_index

if TYPE_CHECKING:
    from roster.engine.roster_engine import RosterResult


_ALLOWED_SHIFT_SETS = (
    frozenset({ShiftCode.MORNING, ShiftCode.EVENING, ShiftCode.NIGHT}),
    frozenset({ShiftCode.MORNING, ShiftCode.EVENING}),
    frozenset({ShiftCode.GENERAL}),
)


def _check_coverage(result: RosterResult, machines: Sequence[Machine]) -> None:
    for day in range(DAYS_IN_WEEK):
        day_table = result.assignments.get(day)
        if day_table is None:
            raise ValueError(f"Day {day} missing from roster")
        for machine in machines:
            cell = day_table.get(machine.id)
            if not cell:
                raise ValueError(f"Machine {machine.id} has no shifts on day {day}")
            shifts = frozenset(ShiftCode(s) for s in cell)
            if shifts not in _ALLOWED_SHIFT_SETS:
                raise ValueError(
                    f"Machine {machine.id} on day {day} has invalid shift set {sorted(s.value for s in shifts)}"
                )
            if machine.three_shift and ShiftCode.NIGHT not in shifts:
                raise ValueError(f"Three-shift machine {machine.id} missing Night on day {day}")
            if not machine.three_shift and ShiftCode.NIGHT in shifts:
                raise ValueError(f"Machine {machine.id} is not three-shift but has Night on day {day}")
            if ShiftCode.GENERAL in shifts and not machine.flex_to_general:
                raise ValueError(f"Machine {machine.id} cannot flex to General (day {day})")
            for shift, name in cell.items():
                if not name:
                    raise ValueError(f"Empty slot {machine.id}/{ShiftCode(shift).value} on day {day}")


def validate_roster(
    result: RosterResult,
    workers: Sequence[Worker],
    machines: Sequence[Machine],
    leaves: Iterable[LeaveRecord] = (),
    max_days: int = MAX_WORKED_DAYS,
) -> None:
    """
    Re-check every roster invariant on a finished result.

    Raises:
        ValueError: Naming the first violated rule
    """
    _check_coverage(result, machines)

    df = result.to_frame()
    staffed = df[df["worker"] != UNSTAFFED]
    if staffed.empty:
        return

    # Referential integrity
    known = {w.name for w in workers}
    unknown = set(staffed["worker"]) - known
    if unknown:
        raise ValueError(f"Roster references unknown workers: {sorted(unknown)}")

    # One shift per worker per day
    per_day = staffed.groupby(["day", "worker"]).size()
    doubled = per_day[per_day > 1]
    if not doubled.empty:
        day, name = doubled.index[0]
        raise ValueError(f"Worker {name} has {doubled.iloc[0]} shifts on day {day}")

    # Weekly day cap
    days_per_worker = staffed.groupby("worker")["day"].nunique()
    over = days_per_worker[days_per_worker > max_days]
    if not over.empty:
        raise ValueError(f"Worker {over.index[0]} works {over.iloc[0]} days, cap is {max_days}")

    # Retired staff never on nights
    retired = {w.name for w in workers if w.retired}
    nights = staffed[(staffed["shift"] == ShiftCode.NIGHT.value) & staffed["worker"].isin(retired)]
    if not nights.empty:
        row = nights.iloc[0]
        raise ValueError(f"Retired worker {row['worker']} assigned Night on {row['date']}")

    # Leave window
    leave_index = build_leave_index(leaves)
    on_leave = staffed[
        staffed.apply(lambda r: r["date"] in leave_index.get(r["worker"], ()), axis=1)
    ]
    if not on_leave.empty:
        row = on_leave.iloc[0]
        raise ValueError(f"Worker {row['worker']} assigned on {row['date']} while on leave")


def summarize_roster(result: RosterResult) -> str:
    df = result.to_frame()
    if df.empty:
        return "No slots."
    df["staffed"] = df["worker"] != UNSTAFFED

    coverage = df.pivot_table(index="date", columns="shift", values="staffed", aggfunc="sum", fill_value=0)
    unstaffed = (~df["staffed"]).groupby(df["date"]).sum()
    shifts = (
        pd.Series(result.shift_counts, dtype="int64")
        .sort_values(ascending=False, kind="mergesort")
    )
    flexed = pd.Series(
        {result.day_date(d).isoformat(): ", ".join(sorted(ids)) or "-" for d, ids in sorted(result.flexed.items())},
        dtype="object",
    )

    lines = ["Staffed slots per day per shift:"]
    lines.append(coverage.to_string())
    lines.append("")
    lines.append("Unstaffed slots per day:")
    lines.append(unstaffed.to_string())
    lines.append("")
    lines.append("Machines flexed to General:")
    lines.append(flexed.to_string() if not flexed.empty else "-")
    lines.append("")
    lines.append("Shifts per worker (week):")
    lines.append(shifts.to_string() if not shifts.empty else "-")
    return "\n".join(lines)
