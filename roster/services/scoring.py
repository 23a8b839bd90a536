"""Fairness ranking of eligible candidates for a slot."""

from __future__ import annotations

import unicodedata
from datetime import date
from typing import Dict, Iterable, List, Set, Tuple

from roster.domain.entities import ShiftCode, Worker, WorkloadState

from .constraints import MAX_WORKED_DAYS, is_eligible


def fold_name(name: str) -> str:
    """Name with accents and case stripped, e.g. "Àna" -> "ana"."""
    decomposed = unicodedata.normalize("NFKD", name)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def candidate_sort_key(worker: Worker, workload: WorkloadState) -> Tuple[int, int, str, str]:
    """
    Composite ranking key, lower is better.

    Fewest shifts first, then fewest days worked, then name ignoring case
    and accents. The raw name settles names that fold to the same text.
    """
    return (
        workload.shifts(worker.name),
        workload.days(worker.name),
        fold_name(worker.name),
        worker.name,
    )


def rank_candidates(
    workers: Iterable[Worker],
    day_offset: int,
    shift: ShiftCode,
    workload: WorkloadState,
    leave_index: Dict[str, Set[str]],
    week_start: date,
    max_days: int = MAX_WORKED_DAYS,
) -> List[Worker]:
    """
    Eligible workers for a (day, shift) slot, best candidate first.

    Returns:
        Sorted list of eligible workers; empty when nobody can take the slot
    """
    pool = [
        w for w in workers
        if is_eligible(w, day_offset, shift, workload, leave_index, week_start, max_days)
    ]
    return sorted(pool, key=lambda w: candidate_sort_key(w, workload))
