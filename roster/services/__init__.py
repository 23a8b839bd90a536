"""Services for roster logic."""

from .constraints import MAX_WORKED_DAYS, is_eligible
from .leave import build_leave_index
from .requirements import (
    available_count,
    flexed_machines_for_day,
    required_slots,
    resolve_flex_machines,
    shifts_for_machine,
)
from .scoring import candidate_sort_key, rank_candidates

__all__ = [
    "MAX_WORKED_DAYS",
    "is_eligible",
    "build_leave_index",
    "available_count",
    "flexed_machines_for_day",
    "required_slots",
    "resolve_flex_machines",
    "shifts_for_machine",
    "candidate_sort_key",
    "rank_candidates",
]
