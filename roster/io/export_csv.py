"""Per-day roster tables and CSV export."""

from __future__ import annotations

import csv
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, Iterable, List

import pandas as pd

from roster.domain.entities import UNSTAFFED, ShiftCode


DAY_COLUMNS = [
    "Machine",
    ShiftCode.MORNING.label,
    ShiftCode.EVENING.label,
    f"{ShiftCode.NIGHT.label}/{ShiftCode.GENERAL.label}",
]

DayTable = Dict[str, Dict[ShiftCode, str]]


def build_day_table(day_assignments: DayTable) -> pd.DataFrame:
    """
    One row per machine, in roster order.

    The last column shows the General shift when the machine was flexed,
    otherwise the Night shift (empty for two-shift machines).
    """
    rows = []
    for machine_id, cell in day_assignments.items():
        rows.append(
            [
                machine_id,
                cell.get(ShiftCode.MORNING, ""),
                cell.get(ShiftCode.EVENING, ""),
                cell.get(ShiftCode.GENERAL) or cell.get(ShiftCode.NIGHT) or "",
            ]
        )
    return pd.DataFrame(rows, columns=DAY_COLUMNS)


def rest_staff(day_assignments: DayTable, staff_names: Iterable[str]) -> List[str]:
    """Staff with no assignment that day, in staff order."""
    working = {
        name
        for cell in day_assignments.values()
        for name in cell.values()
        if name and name != UNSTAFFED
    }
    return [name for name in staff_names if name not in working]


def _quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def render_day_csv(day_assignments: DayTable, staff_names: Iterable[str]) -> str:
    """Header, quoted machine rows, a blank line, then the Rest Staff line."""
    table = build_day_table(day_assignments)
    body = table.to_csv(index=False, header=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    rest = rest_staff(day_assignments, staff_names)
    rest_line = f'{_quote("Rest Staff:")},{_quote(", ".join(rest))}'
    return ",".join(DAY_COLUMNS) + "\n" + body + "\n" + rest_line


def day_filename(day: date) -> str:
    return f"Roster_{day.strftime('%Y-%m-%d')}.csv"


def export_day_csv(
    out_dir: str | Path,
    day: date,
    day_assignments: DayTable,
    staff_names: Iterable[str],
) -> Path:
    """
    Write one day's roster to out_dir/Roster_<date>.csv (UTF-8 with BOM).

    Returns:
        Path of the written file
    """
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / day_filename(day)
    with open(path, "w", encoding="utf-8-sig", newline="") as fh:
        fh.write(render_day_csv(day_assignments, staff_names))
    return path


def export_week_csv(
    out_dir: str | Path,
    week_start: date,
    assignments: Dict[int, DayTable],
    staff_names: Iterable[str],
) -> List[Path]:
    """Write one CSV per rostered day. Returns the written paths in day order."""
    staff_names = list(staff_names)
    paths = []
    for day_offset in sorted(assignments):
        day = week_start + timedelta(days=day_offset)
        paths.append(export_day_csv(out_dir, day, assignments[day_offset], staff_names))
    print(f"[INFO] Exported {len(paths)} day rosters to {out_dir}")
    return paths


def format_day_label(day: date) -> str:
    return day.strftime("%a %d %b")


def render_day_text(day: date, day_assignments: DayTable, staff_names: Iterable[str]) -> str:
    """Plain-text day view for the terminal."""
    table = build_day_table(day_assignments)
    rest = rest_staff(day_assignments, staff_names)
    lines = [f"{format_day_label(day)} ({day.isoformat()})"]
    lines.append(table.to_string(index=False) if not table.empty else "No machines.")
    lines.append("")
    lines.append("Rest Staff: " + ", ".join(rest))
    return "\n".join(lines)
