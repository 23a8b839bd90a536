"""Domain types, models and data access layer."""

from .entities import UNSTAFFED, LeaveRecord, Machine, ShiftCode, Worker, WorkloadState
from .models import Base, LeaveEntry, MachineSpec, RosterSlot, StaffMember
from .repositories import LeaveRepository, MachineRepository, RosterRepository, StaffRepository

__all__ = [
    "UNSTAFFED",
    "LeaveRecord",
    "Machine",
    "ShiftCode",
    "Worker",
    "WorkloadState",
    "Base",
    "LeaveEntry",
    "MachineSpec",
    "RosterSlot",
    "StaffMember",
    "LeaveRepository",
    "MachineRepository",
    "RosterRepository",
    "StaffRepository",
]
