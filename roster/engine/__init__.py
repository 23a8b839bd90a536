"""Roster engine and the orchestrator around it."""

from .orchestrator import RosterOrchestrator, build_week_roster
from .roster_engine import DAYS_IN_WEEK, RosterResult, generate_roster

__all__ = [
    "DAYS_IN_WEEK",
    "RosterResult",
    "generate_roster",
    "RosterOrchestrator",
    "build_week_roster",
]
