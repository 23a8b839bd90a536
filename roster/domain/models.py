"""SQLAlchemy models for the duty roster."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Date, Integer, String, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase

from .entities import UNSTAFFED, LeaveRecord, Machine, ShiftCode, Worker


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


class StaffMember(Base):
    """A rosterable worker. position keeps the declared staff order."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    retired = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)

    def to_worker(self) -> Worker:
        return Worker(name=self.name, retired=bool(self.retired))

    def __repr__(self) -> str:
        return f"<StaffMember(id={self.id}, name='{self.name}', retired={self.retired})>"


class MachineSpec(Base):
    """A ticket machine; flex_rank orders machines for collapsing to General."""

    __tablename__ = "machines"

    machine_id = Column(String(20), primary_key=True)
    three_shift = Column(Boolean, nullable=False, default=False)
    flex_to_general = Column(Boolean, nullable=False, default=False)
    flex_rank = Column(Integer, nullable=True)
    position = Column(Integer, nullable=False, default=0)

    def to_machine(self) -> Machine:
        return Machine(
            id=self.machine_id,
            three_shift=bool(self.three_shift),
            flex_to_general=bool(self.flex_to_general),
        )

    def __repr__(self) -> str:
        return f"<MachineSpec(id='{self.machine_id}', three_shift={self.three_shift}, flex={self.flex_to_general})>"


class LeaveEntry(Base):
    """A single day of leave; the engine also blocks the following day."""

    __tablename__ = "leave_entries"
    __table_args__ = (UniqueConstraint("name", "date", name="uq_leave_name_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False)

    def to_leave(self) -> LeaveRecord:
        return LeaveRecord(name=self.name, date=self.date)

    def __repr__(self) -> str:
        return f"<LeaveEntry(id={self.id}, name='{self.name}', date={self.date})>"


class RosterSlot(Base):
    """One generated (day, machine, shift) slot of a weekly roster."""

    __tablename__ = "roster_slots"
    __table_args__ = (
        UniqueConstraint("week_start", "day_offset", "machine_id", "shift_code", name="uq_roster_slot"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    week_start = Column(Date, nullable=False, index=True)
    day_offset = Column(Integer, nullable=False)  # 0-6 from week_start
    date = Column(Date, nullable=False)
    machine_id = Column(String(20), nullable=False)
    shift_code = Column(String(1), nullable=False)  # M, E, N, G
    worker_name = Column(String(100), nullable=False)  # or UNSTAFFED
    position = Column(Integer, nullable=False, default=0)  # fill order within the week

    @property
    def shift(self) -> ShiftCode:
        return ShiftCode(self.shift_code)

    @property
    def is_unstaffed(self) -> bool:
        return self.worker_name == UNSTAFFED

    def __repr__(self) -> str:
        return (
            f"<RosterSlot(week={self.week_start}, day={self.day_offset}, machine='{self.machine_id}', "
            f"shift={self.shift_code}, worker='{self.worker_name}')>"
        )
