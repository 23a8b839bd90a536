"""Orchestrator - loads inputs, runs the roster engine, validates and persists the week."""

from __future__ import annotations

from datetime import date
from typing import List, Sequence

from sqlalchemy.orm import Session

from roster.config import RosterConfig
from roster.domain.entities import LeaveRecord, Machine, Worker
from roster.domain.models import RosterSlot
from roster.domain.repositories import LeaveRepository, MachineRepository, RosterRepository, StaffRepository
from roster.services.dates import DateLike, parse_week_start
from roster.services.requirements import default_flex_priority
from roster.validator import validate_roster

from .roster_engine import RosterResult, generate_roster


class RosterOrchestrator:
    """
    Runs the roster engine for one week and checks the result.

    Each call to build_roster gets its own engine run and workload state,
    so one orchestrator can serve several weeks.
    """

    def __init__(self, cfg: RosterConfig | None = None):
        """
        Initialize orchestrator.

        Args:
            cfg: RosterConfig (default: built-in configuration)
        """
        self.cfg = cfg or RosterConfig()

    def build_roster(
        self,
        week_start: DateLike,
        leaves: Sequence[LeaveRecord] = (),
        workers: Sequence[Worker] | None = None,
        machines: Sequence[Machine] | None = None,
        flex_priority: Sequence[str] | None = None,
    ) -> RosterResult:
        """
        Build and validate the roster for a week.

        Staff, machines and flex priority default to the configuration.

        Returns:
            RosterResult for the week

        Raises:
            ValueError: If week_start is invalid or the result breaks an invariant
        """
        workers = list(workers) if workers is not None else list(self.cfg.staff)
        machines = list(machines) if machines is not None else list(self.cfg.machines)
        priority = list(flex_priority) if flex_priority is not None else list(self.cfg.flex_priority)
        max_days = self.cfg.max_days_per_week

        start = parse_week_start(week_start)
        print(f"[INFO] Orchestrator: Building roster for week starting {start.isoformat()}")
        print(f"[INFO] {len(workers)} staff, {len(machines)} machines, {len(leaves)} leave entries")

        result = generate_roster(workers, machines, start, leaves, flex_priority=priority, max_days=max_days)

        for day, flexed in sorted(result.flexed.items()):
            if flexed:
                print(f"[INFO] {result.day_date(day).isoformat()}: flexed to General: {', '.join(sorted(flexed))}")

        print("[INFO] Validating roster...")
        validate_roster(result, workers, machines, leaves, max_days=max_days)

        unstaffed = result.unstaffed_slots()
        if unstaffed:
            print(f"[WARN] {unstaffed} slots left UNSTAFFED")
        print(f"[OK] Orchestrator: Roster built for {start.isoformat()}")
        return result


def result_to_slots(result: RosterResult) -> List[RosterSlot]:
    slots = []
    position = 0
    for day_offset in sorted(result.assignments):
        for machine_id, cell in result.assignments[day_offset].items():
            for shift, name in cell.items():
                slots.append(
                    RosterSlot(
                        week_start=result.week_start,
                        day_offset=day_offset,
                        date=result.day_date(day_offset),
                        machine_id=machine_id,
                        shift_code=shift.value,
                        worker_name=name,
                        position=position,
                    )
                )
                position += 1
    return slots


def load_inputs(session: Session, week_start: date, cfg: RosterConfig):
    """
    Read staff, machines, flex priority and leave for a week from the database.

    Staff and machines fall back to the configuration when their tables are empty.
    """
    staff_rows = StaffRepository.get_all(session)
    if staff_rows:
        workers = [s.to_worker() for s in staff_rows]
    else:
        print("[INFO] No staff in database, using configured staff list")
        workers = list(cfg.staff)

    machine_rows = MachineRepository.get_all(session)
    if machine_rows:
        machines = [m.to_machine() for m in machine_rows]
        # Unranked machines flex in declared order
        flex_priority = MachineRepository.flex_priority(session) or default_flex_priority(machines)
    else:
        print("[INFO] No machines in database, using configured machines")
        machines = list(cfg.machines)
        flex_priority = list(cfg.flex_priority)

    leaves = [entry.to_leave() for entry in LeaveRepository.get_for_week(session, week_start)]
    return workers, machines, flex_priority, leaves


def build_week_roster(
    session: Session,
    week_start: DateLike,
    cfg: RosterConfig | None = None,
    persist: bool = True,
) -> RosterResult:
    """
    Convenience function to build a week roster from the database.

    Args:
        session: Database session
        week_start: First day of the week
        cfg: RosterConfig
        persist: If True, replace the stored roster for this week

    Returns:
        RosterResult
    """
    cfg = cfg or RosterConfig()
    start = parse_week_start(week_start)
    workers, machines, flex_priority, leaves = load_inputs(session, start, cfg)

    orchestrator = RosterOrchestrator(cfg)
    result = orchestrator.build_roster(start, leaves, workers, machines, flex_priority)

    if persist:
        # Delete existing slots for this week
        deleted = RosterRepository.delete_by_week(session, start)
        if deleted > 0:
            print(f"[INFO] Deleted {deleted} existing slots for week {start.isoformat()}")

        slots = result_to_slots(result)
        RosterRepository.bulk_create(session, slots)
        print(f"[INFO] Persisted {len(slots)} slots to database")

    return result
