"""CSV import utilities to load staff, machines and leave into the database."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from roster.config import validate_machines
from roster.domain.models import LeaveEntry, MachineSpec, StaffMember
from roster.domain.repositories import LeaveRepository, MachineRepository, StaffRepository

from .leave_parser import read_leave_file


_TRUE = {"TRUE", "T", "1", "YES", "Y"}


def _as_bool(value) -> bool:
    if pd.isna(value):
        return False
    return str(value).strip().upper() in _TRUE


def import_staff_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import staff from CSV into database.

    Expected columns: name, retired (optional). Row order becomes the
    declared staff order, after anyone already stored.

    Args:
        session: Database session
        csv_path: Path to staff CSV

    Returns:
        Number of staff imported
    """
    df = pd.read_csv(csv_path, dtype={"name": str})

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    df["name"] = df["name"].fillna("").str.strip()
    df = df[df["name"] != ""]

    start = StaffRepository.next_position(session)
    staff = []
    for offset, (_, row) in enumerate(df.iterrows()):
        staff.append(
            StaffMember(
                name=row["name"],
                retired=_as_bool(row.get("retired")),
                position=start + offset,
            )
        )

    StaffRepository.bulk_create(session, staff)

    print(f"[INFO] Imported {len(staff)} staff from {csv_path}")
    return len(staff)


def import_machines_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import machines from CSV into database.

    Expected columns: machine_id, three_shift, flex_to_general, flex_rank (optional).
    Machines already stored are skipped; new ones follow them in declared order.

    Args:
        session: Database session
        csv_path: Path to machines CSV

    Returns:
        Number of machines imported

    Raises:
        ValueError: On duplicate ids in the file or conflicting machine flags
    """
    df = pd.read_csv(csv_path, dtype={"machine_id": str})

    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    df.rename(columns={"id": "machine_id"}, inplace=True)

    rows = []
    for _, row in df.iterrows():
        rank = row.get("flex_rank")
        rows.append(
            MachineSpec(
                machine_id=str(row["machine_id"]).strip(),
                three_shift=_as_bool(row.get("three_shift")),
                flex_to_general=_as_bool(row.get("flex_to_general")),
                flex_rank=int(rank) if pd.notna(rank) else None,
            )
        )
    validate_machines(spec.to_machine() for spec in rows)

    start = MachineRepository.next_position(session)
    machines = []
    for spec in rows:
        if MachineRepository.get_by_id(session, spec.machine_id) is not None:
            print(f"[WARN] Machine {spec.machine_id} already stored, skipping")
            continue
        spec.position = start + len(machines)
        machines.append(spec)

    MachineRepository.bulk_create(session, machines)

    print(f"[INFO] Imported {len(machines)} machines from {csv_path}")
    return len(machines)


def import_leave_file(session: Session, path: str | Path) -> int:
    """
    Import leave entries from a `Name,YYYY-MM-DD` text file.

    Malformed lines and entries already stored are skipped.

    Returns:
        Number of leave entries imported
    """
    entries = []
    seen = set()
    for record in read_leave_file(path):
        key = (record.name, record.date)
        if key in seen or LeaveRepository.exists(session, record.name, record.date):
            continue
        seen.add(key)
        entries.append(LeaveEntry(name=record.name, date=record.date))

    LeaveRepository.bulk_create(session, entries)

    print(f"[INFO] Imported {len(entries)} leave entries from {path}")
    return len(entries)
