"""Parser for free-text leave entries, one `Name,YYYY-MM-DD` per line."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Union

from roster.domain.entities import LeaveRecord
from roster.services.dates import parse_calendar_date


_SPLIT = re.compile(r"\s*,\s*")


def parse_leave_line(line: str) -> LeaveRecord | None:
    """Parse one line; None if it is not exactly a non-empty name and a valid date."""
    line = line.strip()
    if not line:
        return None
    parts = _SPLIT.split(line)
    if len(parts) != 2:
        return None
    name, raw_date = parts[0].strip(), parts[1].strip()
    if not name:
        return None
    leave_date = parse_calendar_date(raw_date)
    if leave_date is None:
        return None
    return LeaveRecord(name=name, date=leave_date)


def parse_leave_lines(text: Union[str, Iterable[str]]) -> List[LeaveRecord]:
    """
    Parse leave entries, dropping anything malformed.

    A header line such as `Name,YYYY-MM-DD` fails the date check and is
    dropped like any other bad line.

    Args:
        text: Whole text block or an iterable of lines

    Returns:
        Leave records in input order
    """
    lines = text.splitlines() if isinstance(text, str) else text
    records = []
    for line in lines:
        record = parse_leave_line(line)
        if record is not None:
            records.append(record)
    return records


def read_leave_file(path: str | Path) -> List[LeaveRecord]:
    return parse_leave_lines(Path(path).read_text(encoding="utf-8-sig"))
