from __future__ import annotations

import csv
import io
import re
from datetime import date
from typing import Optional, Sequence

from ..core.constants import UNKNOWN_EVENT_NAME
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..events.model import Event
from .model import AttendanceRecord

BASE_HEADERS = ["Student ID", "Student Name", "Event", "Date"]


def _one_line(value: str) -> str:
    return " ".join(str(value).splitlines())


def status_label(record: AttendanceRecord) -> str:
    return "Registered" if record.status == AttendanceStatus.REGISTERED else "Attended"


def build_csv(records: Sequence[AttendanceRecord], event: Optional[Event]) -> str:
    """Render attendance as CSV text: a header row plus one line per record.

    Record cells are double-quoted (embedded quotes doubled), the header is
    plain. The Day column is present only when the
    event has a day schedule.
    """
    if not records:
        raise ValidationError("No attendance records to export.")

    with_day = bool(event and event.is_multi_day)
    headers = BASE_HEADERS + (["Day"] if with_day else []) + ["Status"]

    out = io.StringIO()
    out.write(",".join(headers) + "\n")
    writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for r in records:
        row = [
            r.student_id,
            r.student_name,
            event.name if event else (r.event_name or UNKNOWN_EVENT_NAME),
            (event.date if event else "") or "N/A",
        ]
        if with_day:
            row.append(r.day or "N/A")
        row.append(status_label(r))
        writer.writerow([_one_line(c) for c in row])

    return out.getvalue().rstrip("\n")


def export_filename(event_name: Optional[str], today: date) -> str:
    slug = re.sub(r"\s+", "_", event_name.strip()) if event_name and event_name.strip() else "export"
    return f"attendance_{slug}_{today.isoformat()}.csv"
