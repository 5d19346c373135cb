from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization."""

    ADMIN = "admin"
    STUDENT = "student"


class EventStatus(str, Enum):
    """Event lifecycle. Transitions only move forward."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        return _EVENT_STATUS_ORDER.index(self)


_EVENT_STATUS_ORDER = [EventStatus.UPCOMING, EventStatus.ONGOING, EventStatus.COMPLETED]


class AttendanceStatus(str, Enum):
    ATTENDED = "attended"
    REGISTERED = "registered"


class Priority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
