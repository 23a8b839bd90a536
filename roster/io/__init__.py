"""I/O utilities: leave parsing, CSV import/export."""

from .export_csv import build_day_table, export_day_csv, export_week_csv, render_day_csv, rest_staff
from .import_csv import import_leave_file, import_machines_csv, import_staff_csv
from .leave_parser import parse_leave_lines, read_leave_file

__all__ = [
    "build_day_table",
    "export_day_csv",
    "export_week_csv",
    "render_day_csv",
    "rest_staff",
    "import_leave_file",
    "import_machines_csv",
    "import_staff_csv",
    "parse_leave_lines",
    "read_leave_file",
]
