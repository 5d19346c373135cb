from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.documents import as_text, require_fields
from ..store.document_store import Document


@dataclass(frozen=True)
class Registration:
    """Domain entity: a student's intent to attend an event."""

    registration_id: str
    event_id: str
    student_id: str
    student_name: str
    created_at: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Document) -> "Registration":
        require_fields(doc, "Registration", "eventId", "studentId")
        return cls(
            registration_id=doc.id,
            event_id=str(doc.get("eventId")),
            student_id=str(doc.get("studentId")),
            student_name=as_text(doc.get("studentName")),
            created_at=doc.get("createdAt"),
        )

    def to_public(self) -> dict:
        return {
            "id": self.registration_id,
            "eventId": self.event_id,
            "studentId": self.student_id,
            "studentName": self.student_name,
            "createdAt": self.created_at,
        }


def registration_key(event_id: str, student_id: str) -> str:
    return f"registration:{event_id}:{student_id}"
