from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScanState(str, Enum):
    """States a single scan moves through. Terminal states return to IDLE."""

    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    ACCEPTED = "ACCEPTED"
    ACCEPTED_NEW_WALKIN = "ACCEPTED_NEW_WALKIN"
    REJECTED_EMPTY = "REJECTED_EMPTY"
    REJECTED_NOT_REGISTERED = "REJECTED_NOT_REGISTERED"
    REJECTED_DUPLICATE = "REJECTED_DUPLICATE"
    FAILED = "FAILED"


class NotificationLevel(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


_LEVELS = {
    ScanState.ACCEPTED: NotificationLevel.SUCCESS,
    ScanState.ACCEPTED_NEW_WALKIN: NotificationLevel.SUCCESS,
    ScanState.REJECTED_DUPLICATE: NotificationLevel.WARNING,
    ScanState.REJECTED_EMPTY: NotificationLevel.ERROR,
    ScanState.REJECTED_NOT_REGISTERED: NotificationLevel.ERROR,
    ScanState.FAILED: NotificationLevel.ERROR,
}


@dataclass(frozen=True)
class CheckinResult:
    """Outcome of one scan, shaped as the notification shown to the operator."""

    outcome: ScanState
    title: str
    message: str
    student_id: Optional[str] = None
    student_name: Optional[str] = None
    attendance_id: Optional[str] = None
    day: Optional[str] = None

    @property
    def level(self) -> NotificationLevel:
        return _LEVELS[self.outcome]

    @property
    def accepted(self) -> bool:
        return self.outcome in (ScanState.ACCEPTED, ScanState.ACCEPTED_NEW_WALKIN)

    def to_public(self) -> dict:
        return {
            "success": self.accepted,
            "outcome": self.outcome.value,
            "level": self.level.value,
            "title": self.title,
            "message": self.message,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "attendanceId": self.attendance_id,
            "day": self.day,
        }
