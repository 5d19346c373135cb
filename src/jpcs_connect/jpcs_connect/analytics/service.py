from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import parse_timestamp
from ..core.constants import DEFAULT_TOP_EVENTS, DEFAULT_TREND_MONTHS
from ..core.exceptions import StoreUnavailableError
from ..events.model import Event
from ..events.repository import EventRepository
from ..registrations.model import Registration
from ..registrations.repository import RegistrationRepository
from ..users.model import User
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@dataclass(frozen=True)
class EventStats:
    event_id: str
    name: str
    attendees: int
    registrants: int
    rate: str


@dataclass(frozen=True)
class Dashboard:
    total_events: int = 0
    total_students: int = 0
    total_attendance: int = 0
    avg_attendance: float = 0
    top_events: list[EventStats] = field(default_factory=list)
    monthly: list[dict] = field(default_factory=list)
    has_data: bool = False

    def to_public(self) -> dict:
        return {
            "totalEvents": self.total_events,
            "totalStudents": self.total_students,
            "totalAttendance": self.total_attendance,
            "avgAttendance": self.avg_attendance,
            "topEvents": [
                {
                    "id": s.event_id,
                    "name": s.name,
                    "attendees": s.attendees,
                    "registrants": s.registrants,
                    "rate": s.rate,
                }
                for s in self.top_events
            ],
            "monthly": self.monthly,
            "hasData": self.has_data,
        }


def attendance_rate(attendees: int, total_students: int) -> str:
    if total_students <= 0:
        return "0%"
    return f"{round(attendees / total_students * 100)}%"


def event_stats(
    events: Sequence[Event],
    registrations: Sequence[Registration],
    attendance: Sequence[AttendanceRecord],
    total_students: int,
) -> list[EventStats]:
    """Per-event counts in catalogue order."""
    attended = Counter(a.event_id for a in attendance)
    registered = Counter(r.event_id for r in registrations)
    return [
        EventStats(
            event_id=e.event_id,
            name=e.name,
            attendees=attended[e.event_id],
            registrants=registered[e.event_id],
            rate=attendance_rate(attended[e.event_id], total_students),
        )
        for e in events
    ]


def top_events(stats: Sequence[EventStats], n: int = DEFAULT_TOP_EVENTS) -> list[EventStats]:
    # sorted() is stable, so ties keep catalogue order
    return sorted(stats, key=lambda s: s.attendees, reverse=True)[:n]


def monthly_trend(
    events: Sequence[Event],
    attendance: Sequence[AttendanceRecord],
    today: date,
    months: int = DEFAULT_TREND_MONTHS,
) -> list[dict]:
    """Events held and check-ins recorded in each of the last ``months`` months."""
    buckets: list[tuple[int, int]] = []
    year, month = today.year, today.month
    for _ in range(months):
        buckets.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    buckets.reverse()

    def _month_of(value) -> Optional[tuple[int, int]]:
        parsed = parse_timestamp(value)
        return (parsed.year, parsed.month) if parsed else None

    event_months = Counter(_month_of(e.date) for e in events)
    attendance_months = Counter(_month_of(a.timestamp) for a in attendance)

    return [
        {
            "month": MONTH_NAMES[m - 1],
            "year": y,
            "events": event_months[(y, m)],
            "attendance": attendance_months[(y, m)],
        }
        for y, m in buckets
    ]


def build_dashboard(
    events: Sequence[Event],
    users: Sequence[User],
    registrations: Sequence[Registration],
    attendance: Sequence[AttendanceRecord],
    *,
    today: date,
    top_n: int = DEFAULT_TOP_EVENTS,
) -> Dashboard:
    total_events = len(events)
    total_students = len(users)
    total_attendance = len(attendance)
    stats = event_stats(events, registrations, attendance, total_students)

    return Dashboard(
        total_events=total_events,
        total_students=total_students,
        total_attendance=total_attendance,
        avg_attendance=round(total_attendance / total_events, 1) if total_events else 0,
        top_events=top_events(stats, top_n),
        monthly=monthly_trend(events, attendance, today),
        has_data=bool(total_events or total_students),
    )


class AnalyticsService:
    """Read-only dashboard over events, students, registrations and attendance."""

    def __init__(
        self,
        events: EventRepository,
        users: UserRepository,
        registrations: RegistrationRepository,
        attendance: AttendanceRepository,
    ):
        self._events = events
        self._users = users
        self._registrations = registrations
        self._attendance = attendance

    async def dashboard(self, *, today: Optional[date] = None, top_n: int = DEFAULT_TOP_EVENTS) -> Dashboard:
        try:
            events = await self._events.list_all()
            users = await self._users.list_all()
            registrations = await self._registrations.list_all()
            attendance = await self._attendance.list_all()
        except StoreUnavailableError:
            logger.warning("Analytics unavailable, no data to show", exc_info=True)
            return Dashboard()

        return build_dashboard(events, users, registrations, attendance, today=today or date.today(), top_n=top_n)
