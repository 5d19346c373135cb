from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.documents import as_text, require_fields
from ..core.enums import AttendanceStatus
from ..core.exceptions import DocumentShapeError
from ..store.document_store import Document


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: a student checked in for an event (and day)."""

    attendance_id: str
    event_id: str
    event_name: str
    student_id: str
    student_name: str
    status: AttendanceStatus
    timestamp: str
    day: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Document) -> "AttendanceRecord":
        require_fields(doc, "Attendance", "eventId", "studentId")
        try:
            status = AttendanceStatus(doc.get("status") or AttendanceStatus.ATTENDED.value)
        except ValueError as e:
            raise DocumentShapeError(f"Attendance {doc.id} has unknown status {doc.get('status')!r}") from e

        return cls(
            attendance_id=doc.id,
            event_id=str(doc.get("eventId")),
            event_name=as_text(doc.get("eventName")),
            student_id=str(doc.get("studentId")),
            student_name=as_text(doc.get("studentName")),
            status=status,
            timestamp=as_text(doc.get("timestamp") or doc.get("createdAt")),
            day=doc.get("day") or None,
        )

    def to_public(self) -> dict:
        return {
            "id": self.attendance_id,
            "eventId": self.event_id,
            "eventName": self.event_name,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "status": self.status.value,
            "timestamp": self.timestamp,
            "day": self.day,
        }


def attendance_key(event_id: str, student_id: str, day: Optional[str] = None) -> str:
    """Compound uniqueness key for an attendance record."""
    key = f"attendance:{event_id}:{student_id}"
    return f"{key}:{day}" if day else key
