from __future__ import annotations

import asyncio
from datetime import date

import pytest

from jpcs_connect.attendance.export import build_csv, export_filename
from jpcs_connect.attendance.model import AttendanceRecord
from jpcs_connect.core.enums import AttendanceStatus, EventStatus
from jpcs_connect.core.exceptions import ValidationError
from jpcs_connect.events.model import Event
from jpcs_connect.store.document_store import ATTENDANCE


def run(coro):
    return asyncio.run(coro)


def _record(student_id, name, *, day=None, status=AttendanceStatus.ATTENDED):
    return AttendanceRecord(
        attendance_id=student_id,
        event_id="E1",
        event_name="Assembly",
        student_id=student_id,
        student_name=name,
        status=status,
        timestamp="2026-03-14T09:00:00Z",
        day=day,
    )


EVENT = Event(event_id="E1", name="General Assembly", date="2026-03-14", start_time="09:00", location="AVR", status=EventStatus.ONGOING)


def test_csv_has_header_plus_one_line_per_record():
    content = build_csv([_record("S1", "Ana Cruz"), _record("S2", "Ben", status=AttendanceStatus.REGISTERED)], EVENT)

    lines = content.split("\n")
    assert lines == [
        "Student ID,Student Name,Event,Date,Status",
        '"S1","Ana Cruz","General Assembly","2026-03-14","Attended"',
        '"S2","Ben","General Assembly","2026-03-14","Registered"',
    ]


def test_csv_escapes_quotes_and_commas():
    content = build_csv([_record("S1", 'Ana "AJ" Cruz, Jr.\nIII')], EVENT)

    assert content.split("\n")[1] == '"S1","Ana ""AJ"" Cruz, Jr. III","General Assembly","2026-03-14","Attended"'


def test_csv_adds_day_column_for_multi_day_events():
    event = Event(
        event_id="E1",
        name="Hackathon",
        date="2026-03-20",
        start_time="08:00",
        location="Lab",
        status=EventStatus.ONGOING,
        days=("Day 1", "Day 2"),
    )
    content = build_csv([_record("S1", "Ana", day="Day 2"), _record("S2", "Ben")], event)

    lines = content.split("\n")
    assert lines[0] == "Student ID,Student Name,Event,Date,Day,Status"
    assert lines[1].endswith('"Day 2","Attended"')
    assert lines[2].endswith('"N/A","Attended"')


def test_csv_for_deleted_event_uses_recorded_name():
    assert build_csv([_record("S1", "Ana")], None).split("\n")[1] == '"S1","Ana","Assembly","N/A","Attended"'


def test_empty_export_is_rejected():
    with pytest.raises(ValidationError, match="No attendance records to export."):
        build_csv([], EVENT)


def test_export_filename():
    assert export_filename("General  Assembly 2026", date(2026, 3, 14)) == "attendance_General_Assembly_2026_2026-03-14.csv"
    assert export_filename("", date(2026, 3, 14)) == "attendance_export_2026-03-14.csv"
    assert export_filename(None, date(2026, 3, 14)) == "attendance_export_2026-03-14.csv"


def test_service_export_filters_by_day(attendance_service, event_service, store):
    event_id = run(
        event_service.create_event(name="Hackathon", date="2026-03-20", start_time="08:00", location="Lab", days=["Day 1", "Day 2"])
    )
    run(store.insert(ATTENDANCE, {"eventId": event_id, "studentId": "S1", "studentName": "Ana", "day": "Day 1"}))
    run(store.insert(ATTENDANCE, {"eventId": event_id, "studentId": "S1", "studentName": "Ana", "day": "Day 2"}))

    export = run(attendance_service.export_csv(event_id, day="Day 2", today=date(2026, 3, 21)))
    assert export.count == 1
    assert export.filename == "attendance_Hackathon_2026-03-21.csv"
    assert len(export.content.split("\n")) == 2

    assert run(attendance_service.list_for_event("missing")) == []
