"""Roster configuration: staff, machines and flex rules (JSON or YAML)."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import yaml

from roster.domain.entities import Machine, Worker
from roster.services.constraints import MAX_WORKED_DAYS
from roster.services.requirements import default_flex_priority


DEFAULT_STAFF_NAMES: List[str] = [
    "Krishnan",
    "Priya",
    "Bàlakrishnan",
    "Parameswaran",
    "Viswanathan",
    "Appu",
    "Majeed",
    "Ramachadran",
    "Premarajan",
    "Narayanan",
    "Vijayakumar",
    "Koya",
    "Ramachadran 2",
    "Vijayan T V",
    "Abdul Razak",
    "Vinod Kumar",
    "Saravanan",
    "Nikhil Lal",
    "Rema",
    "Koulath Beevi",
    "Sanjeev",
    "Vinayak P",
    "Vishnu Vin",
    "Sheeba",
    "Sreenitha",
    "Sruthi",
    "Noushad",
    "Sharmila",
    "Muraleedhar",
    "Geetha",
    "Aparna P",
    "Azhakesan",
    "Nigitha",
    "Shabna",
    "Sakthidhar",
    "Valsala",
    "Jincy",
    "Abdul Basit",
    "Jisha T T",
    "Rajesh KM",
    "Abishek P K",
    "Ramya N",
    "Sajini",
    "Aparna 2",
    "Roshni",
]
# The first names on the staff list are retired staff.
DEFAULT_RETIRED_COUNT = 15

DEFAULT_THREE_SHIFT = ["T04", "T06", "T10", "T13", "T16"]
DEFAULT_FLEX_PRIORITY = ["T15", "T11", "T17", "T03"]


def default_staff() -> List[Worker]:
    return [
        Worker(name=name, retired=idx < DEFAULT_RETIRED_COUNT)
        for idx, name in enumerate(DEFAULT_STAFF_NAMES)
    ]


def default_machines() -> List[Machine]:
    machines = []
    for n in range(3, 18):
        machine_id = f"T{n:02d}"
        machines.append(
            Machine(
                id=machine_id,
                three_shift=machine_id in DEFAULT_THREE_SHIFT,
                flex_to_general=machine_id in DEFAULT_FLEX_PRIORITY,
            )
        )
    return machines


@dataclass
class RosterConfig:
    staff: List[Worker] = field(default_factory=default_staff)
    machines: List[Machine] = field(default_factory=default_machines)
    # None: the built-in order for the built-in machines, else flex-capable machines in declared order
    flex_priority: Optional[List[str]] = None
    max_days_per_week: int = MAX_WORKED_DAYS

    def __post_init__(self) -> None:
        if self.flex_priority is None:
            if self.machines == default_machines():
                self.flex_priority = list(DEFAULT_FLEX_PRIORITY)
            else:
                self.flex_priority = default_flex_priority(self.machines)
        validate_config(self)


def validate_machines(machines: Iterable[Machine]) -> Set[str]:
    """
    Check machine ids are unique and flags do not conflict.

    Returns:
        The set of machine ids

    Raises:
        ValueError: On a duplicate id or a machine both three-shift and flex-to-general
    """
    seen_ids: Set[str] = set()
    for machine in machines:
        if machine.id in seen_ids:
            raise ValueError(f"Duplicate machine id: {machine.id}")
        if machine.three_shift and machine.flex_to_general:
            raise ValueError(f"Machine {machine.id} cannot be both three-shift and flex-to-general")
        seen_ids.add(machine.id)
    return seen_ids


def validate_config(cfg: RosterConfig) -> None:
    """
    Check a configuration for contradictions.

    Raises:
        ValueError: On duplicate names/ids, conflicting machine flags or a bad day cap
    """
    seen_names = set()
    for worker in cfg.staff:
        if not worker.name.strip():
            raise ValueError("Staff entry with an empty name")
        if worker.name in seen_names:
            raise ValueError(f"Duplicate staff name: {worker.name}")
        seen_names.add(worker.name)

    seen_ids = validate_machines(cfg.machines)

    if cfg.max_days_per_week <= 0:
        raise ValueError(f"max_days_per_week must be positive, got {cfg.max_days_per_week}")

    unknown = [mid for mid in cfg.flex_priority if mid not in seen_ids]
    if unknown:
        print(f"[WARN] flex_priority names unknown machines, they will be skipped: {unknown}")


def _parse_staff(entries: List[Any]) -> List[Worker]:
    staff = []
    for entry in entries:
        if isinstance(entry, str):
            staff.append(Worker(name=entry.strip()))
        else:
            staff.append(Worker(name=str(entry["name"]).strip(), retired=bool(entry.get("retired", False))))
    return staff


def _parse_machines(entries: List[Dict[str, Any]]) -> List[Machine]:
    return [
        Machine(
            id=str(entry["id"]),
            three_shift=bool(entry.get("three_shift", False)),
            flex_to_general=bool(entry.get("flex_to_general", False)),
        )
        for entry in entries
    ]


def config_from_dict(data: Dict[str, Any]) -> RosterConfig:
    kwargs: Dict[str, Any] = {}
    if data.get("staff") is not None:
        kwargs["staff"] = _parse_staff(data["staff"])
    if data.get("machines") is not None:
        kwargs["machines"] = _parse_machines(data["machines"])
    if data.get("flex_priority") is not None:
        kwargs["flex_priority"] = [str(x) for x in data["flex_priority"]]
    if data.get("max_days_per_week") is not None:
        kwargs["max_days_per_week"] = int(data["max_days_per_week"])
    return RosterConfig(**kwargs)


def load_config(path: str | Path | None = None) -> RosterConfig:
    """
    Load configuration from a YAML or JSON file.

    Keys left out of the file keep their built-in defaults. With no path,
    the built-in defaults are returned.
    """
    if path is None:
        return RosterConfig()
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)
    return config_from_dict(data or {})
