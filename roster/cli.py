"""Command-line interface for the duty roster."""

from __future__ import annotations

import argparse

from roster.domain.db import DEFAULT_DB_URL, get_session, init_database
from roster.domain.repositories import LeaveRepository, RosterRepository
from roster.engine.orchestrator import RosterOrchestrator, build_week_roster, load_inputs
from roster.io.config import load_config
from roster.io.export_csv import export_week_csv, render_day_text
from roster.io.import_csv import import_leave_file, import_machines_csv, import_staff_csv
from roster.io.leave_parser import read_leave_file
from roster.services.dates import day_date, next_monday, parse_week_start
from roster.validator import summarize_roster


def _week_start(args: argparse.Namespace):
    if args.week:
        return parse_week_start(args.week)
    start = next_monday()
    print(f"[INFO] No --week given, using next Monday: {start.isoformat()}")
    return start


def _cmd_init_db(args: argparse.Namespace) -> None:
    """Initialize the database."""
    db_url = init_database(args.db)
    print(f"[OK] Database initialized: {db_url}")


def _cmd_import_csv(args: argparse.Namespace) -> None:
    """Import staff, machines and leave into the database."""
    session = get_session(args.db)

    try:
        if args.staff:
            count = import_staff_csv(session, args.staff)
            print(f"[OK] Imported {count} staff")

        if args.machines:
            count = import_machines_csv(session, args.machines)
            print(f"[OK] Imported {count} machines")

        if args.replace_leaves:
            removed = LeaveRepository.delete_all(session)
            print(f"[INFO] Cleared {removed} stored leave entries")

        if args.leaves:
            count = import_leave_file(session, args.leaves)
            print(f"[OK] Imported {count} leave entries")

        session.close()
        print("[OK] CSV import complete")

    except Exception as e:
        session.rollback()
        session.close()
        print(f"[ERROR] Import failed: {e}")
        raise


def _cmd_generate(args: argparse.Namespace) -> None:
    """Generate the roster for a week."""
    cfg = load_config(args.config)
    week_start = _week_start(args)

    if not args.db:
        leaves = read_leave_file(args.leaves) if args.leaves else []
        result = RosterOrchestrator(cfg).build_roster(week_start, leaves)
        staff_names = [w.name for w in cfg.staff]
    else:
        session = get_session(args.db)
        try:
            if args.leaves:
                import_leave_file(session, args.leaves)
            result = build_week_roster(session, week_start, cfg, persist=True)
            workers, _, _, _ = load_inputs(session, week_start, cfg)
            staff_names = [w.name for w in workers]
            session.close()
        except Exception as e:
            session.rollback()
            session.close()
            print(f"[ERROR] Generation failed: {e}")
            raise

    if args.out_dir:
        export_week_csv(args.out_dir, result.week_start, result.assignments, staff_names)

    print(summarize_roster(result))
    print(f"[OK] Generated roster for week starting {result.week_start.isoformat()}")


def _cmd_show(args: argparse.Namespace) -> None:
    """Print stored day rosters."""
    session = get_session(args.db)

    try:
        cfg = load_config(args.config)
        week_start = parse_week_start(args.week)
        table = RosterRepository.load_table(session, week_start)
        workers, _, _, _ = load_inputs(session, week_start, cfg)
        staff_names = [w.name for w in workers]
        session.close()
    except Exception as e:
        session.close()
        print(f"[ERROR] Show failed: {e}")
        raise

    if not table:
        raise SystemExit(f"No roster stored for week starting {week_start.isoformat()}")

    days = [args.day] if args.day is not None else sorted(table)
    for day in days:
        if day not in table:
            print(f"[WARN] Day {day} not in stored roster")
            continue
        print(render_day_text(day_date(week_start, day), table[day], staff_names))
        print()


def _cmd_export(args: argparse.Namespace) -> None:
    """Export a stored week roster to per-day CSV files."""
    session = get_session(args.db)

    try:
        cfg = load_config(args.config)
        week_start = parse_week_start(args.week)
        table = RosterRepository.load_table(session, week_start)
        if not table:
            session.close()
            raise SystemExit(f"No roster stored for week starting {week_start.isoformat()}")
        workers, _, _, _ = load_inputs(session, week_start, cfg)
        paths = export_week_csv(args.out_dir, week_start, table, [w.name for w in workers])
        session.close()
        print(f"[OK] Exported {len(paths)} files to {args.out_dir}")

    except Exception as e:
        session.close()
        print(f"[ERROR] Export failed: {e}")
        raise


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="duty-roster",
        description="Ticket Machine Duty Roster",
    )

    # Global options
    parser.add_argument("--db", help=f"Database URL or SQLite file path (init-db/import-csv/show/export default: {DEFAULT_DB_URL})")

    sub = parser.add_subparsers(dest="command", required=True)

    # init-db command
    init = sub.add_parser("init-db", help="Initialize database")
    init.set_defaults(func=_cmd_init_db)

    # import-csv command
    imp = sub.add_parser("import-csv", help="Import staff, machines and leave into database")
    imp.add_argument("--staff", help="Path to staff CSV (name,retired)")
    imp.add_argument("--machines", help="Path to machines CSV (machine_id,three_shift,flex_to_general,flex_rank)")
    imp.add_argument("--leaves", help="Path to leave file (Name,YYYY-MM-DD per line)")
    imp.add_argument("--replace-leaves", action="store_true", help="Clear stored leave before importing")
    imp.set_defaults(func=_cmd_import_csv)

    # generate command
    gen = sub.add_parser("generate", help="Generate the roster for a week")
    gen.add_argument("--week", help="Week start date YYYY-MM-DD (default: next Monday)")
    gen.add_argument("--config", help="Path to config YAML/JSON (default: built-in)")
    gen.add_argument("--leaves", help="Path to leave file (Name,YYYY-MM-DD per line)")
    gen.add_argument("--out-dir", help="Optional: export per-day CSV files here")
    gen.set_defaults(func=_cmd_generate)

    # show command
    show = sub.add_parser("show", help="Print a stored week roster")
    show.add_argument("--week", required=True, help="Week start date YYYY-MM-DD")
    show.add_argument("--day", type=int, choices=range(7), help="Day offset 0-6 (default: all)")
    show.add_argument("--config", help="Path to config YAML/JSON (default: built-in)")
    show.set_defaults(func=_cmd_show)

    # export command
    exp = sub.add_parser("export", help="Export a stored week roster to CSV")
    exp.add_argument("--week", required=True, help="Week start date YYYY-MM-DD")
    exp.add_argument("--out-dir", required=True, help="Directory for Roster_<date>.csv files")
    exp.add_argument("--config", help="Path to config YAML/JSON (default: built-in)")
    exp.set_defaults(func=_cmd_export)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
