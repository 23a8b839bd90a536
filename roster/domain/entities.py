"""Value types consumed and produced by the roster engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Set, Union


UNSTAFFED = "UNSTAFFED"


class ShiftCode(str, Enum):
    """Shift slots a machine can carry on a given day."""

    MORNING = "M"
    EVENING = "E"
    NIGHT = "N"
    GENERAL = "G"

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Worker:
    name: str
    retired: bool = False


@dataclass(frozen=True)
class Machine:
    """A ticket machine and its daily shift requirement.

    three_shift machines need Morning, Evening and Night every day. Other
    machines need Morning and Evening, unless flex_to_general lets them fall
    back to a single General shift on a shortage day.
    """

    id: str
    three_shift: bool = False
    flex_to_general: bool = False


@dataclass(frozen=True)
class LeaveRecord:
    name: str
    date: Union[date, str]


@dataclass
class WorkloadState:
    """Per-worker load carried across the week: shift totals and days worked."""

    shift_counts: Dict[str, int] = field(default_factory=dict)
    days_worked: Dict[str, Set[int]] = field(default_factory=dict)

    @classmethod
    def for_workers(cls, workers: Iterable[Worker]) -> "WorkloadState":
        state = cls()
        for worker in workers:
            state.shift_counts[worker.name] = 0
            state.days_worked[worker.name] = set()
        return state

    def shifts(self, name: str) -> int:
        return self.shift_counts.get(name, 0)

    def days(self, name: str) -> int:
        return len(self.days_worked.get(name, ()))

    def worked_on(self, name: str, day_offset: int) -> bool:
        return day_offset in self.days_worked.get(name, ())

    def record(self, name: str, day_offset: int) -> None:
        self.shift_counts[name] = self.shift_counts.get(name, 0) + 1
        self.days_worked.setdefault(name, set()).add(day_offset)
