"""Repository classes for data access."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from .entities import ShiftCode
from .models import LeaveEntry, MachineSpec, RosterSlot, StaffMember


class StaffRepository:
    """Repository for staff data access."""

    @staticmethod
    def get_all(session: Session) -> List[StaffMember]:
        """Get all staff in declared order."""
        return session.query(StaffMember).order_by(StaffMember.position, StaffMember.id).all()

    @staticmethod
    def get_by_name(session: Session, name: str) -> Optional[StaffMember]:
        """Get a staff member by name."""
        return session.query(StaffMember).filter(StaffMember.name == name).first()

    @staticmethod
    def next_position(session: Session) -> int:
        last = session.query(StaffMember).order_by(StaffMember.position.desc()).first()
        return 0 if last is None else last.position + 1

    @staticmethod
    def bulk_create(session: Session, staff: List[StaffMember]) -> None:
        """Create multiple staff members."""
        session.add_all(staff)
        session.commit()


class MachineRepository:
    """Repository for machine data access."""

    @staticmethod
    def get_all(session: Session) -> List[MachineSpec]:
        """Get all machines in declared order."""
        return session.query(MachineSpec).order_by(MachineSpec.position, MachineSpec.machine_id).all()

    @staticmethod
    def get_by_id(session: Session, machine_id: str) -> Optional[MachineSpec]:
        """Get machine by ID."""
        return session.query(MachineSpec).filter(MachineSpec.machine_id == machine_id).first()

    @staticmethod
    def next_position(session: Session) -> int:
        last = session.query(MachineSpec).order_by(MachineSpec.position.desc()).first()
        return 0 if last is None else last.position + 1

    @staticmethod
    def flex_priority(session: Session) -> List[str]:
        """Machine ids with a flex rank, lowest rank first."""
        ranked = (
            session.query(MachineSpec)
            .filter(MachineSpec.flex_rank.isnot(None))
            .order_by(MachineSpec.flex_rank, MachineSpec.position)
            .all()
        )
        return [m.machine_id for m in ranked]

    @staticmethod
    def bulk_create(session: Session, machines: List[MachineSpec]) -> None:
        """Create multiple machines."""
        session.add_all(machines)
        session.commit()


class LeaveRepository:
    """Repository for leave data access."""

    @staticmethod
    def get_all(session: Session) -> List[LeaveEntry]:
        """Get all leave entries."""
        return session.query(LeaveEntry).order_by(LeaveEntry.date, LeaveEntry.name).all()

    @staticmethod
    def get_for_week(session: Session, week_start: date) -> List[LeaveEntry]:
        """Leave entries that can block a day of the week starting at week_start.

        Leave on the day before the week blocks its first day, so that day is included.
        """
        return (
            session.query(LeaveEntry)
            .filter(LeaveEntry.date >= week_start - timedelta(days=1))
            .filter(LeaveEntry.date <= week_start + timedelta(days=6))
            .order_by(LeaveEntry.date, LeaveEntry.name)
            .all()
        )

    @staticmethod
    def exists(session: Session, name: str, leave_date: date) -> bool:
        return (
            session.query(LeaveEntry)
            .filter(LeaveEntry.name == name, LeaveEntry.date == leave_date)
            .first()
            is not None
        )

    @staticmethod
    def bulk_create(session: Session, entries: List[LeaveEntry]) -> None:
        """Create multiple leave entries."""
        session.add_all(entries)
        session.commit()

    @staticmethod
    def delete_all(session: Session) -> int:
        """Delete every leave entry. Returns number of deleted rows."""
        count = session.query(LeaveEntry).delete(synchronize_session=False)
        session.commit()
        return count


class RosterRepository:
    """Repository for generated roster slots."""

    @staticmethod
    def get_by_week(session: Session, week_start: date) -> List[RosterSlot]:
        """Get all slots for a week in fill order."""
        return (
            session.query(RosterSlot)
            .filter(RosterSlot.week_start == week_start)
            .order_by(RosterSlot.position)
            .all()
        )

    @staticmethod
    def load_table(session: Session, week_start: date) -> Dict[int, Dict[str, Dict[ShiftCode, str]]]:
        """Rebuild the day -> machine -> shift -> worker table for a stored week."""
        table: Dict[int, Dict[str, Dict[ShiftCode, str]]] = {}
        for slot in RosterRepository.get_by_week(session, week_start):
            table.setdefault(slot.day_offset, {}).setdefault(slot.machine_id, {})[slot.shift] = slot.worker_name
        return table

    @staticmethod
    def bulk_create(session: Session, slots: List[RosterSlot]) -> None:
        """Create multiple roster slots."""
        session.add_all(slots)
        session.commit()

    @staticmethod
    def delete_by_week(session: Session, week_start: date) -> int:
        """Delete all slots for a specific week. Returns number of deleted rows."""
        count = (
            session.query(RosterSlot)
            .filter(RosterSlot.week_start == week_start)
            .delete(synchronize_session=False)
        )
        session.commit()
        return count
