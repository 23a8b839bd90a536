"""Roster package for the ticket-machine duty roster.

Modules:
- config: load and validate configuration (JSON or YAML)
- domain: engine value types, SQLAlchemy models and repositories
- services: leave index, eligibility, candidate ranking, shortage resolver
- engine: greedy weekly roster engine and the orchestrator around it
- io: leave-line parser, CSV import and per-day CSV export
- validator: post-generation invariant checks and text summary
- cli: command-line interface entrypoints
"""

__all__ = [
    "config",
    "domain",
    "services",
    "engine",
    "io",
    "validator",
    "cli",
]
