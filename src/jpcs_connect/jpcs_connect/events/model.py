from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..common.documents import as_text, require_fields
from ..core.constants import DEFAULT_DAY_LABEL
from ..core.enums import EventStatus
from ..core.exceptions import DocumentShapeError
from ..store.document_store import Document


@dataclass(frozen=True)
class Event:
    """Domain entity: an event students can register for and attend."""

    event_id: str
    name: str
    date: str
    start_time: str
    location: str
    status: EventStatus
    description: str = ""
    end_time: Optional[str] = None
    days: tuple[str, ...] = field(default_factory=tuple)
    created_at: Optional[str] = None

    @property
    def is_multi_day(self) -> bool:
        return bool(self.days)

    def default_day(self) -> str:
        return self.days[0] if self.days else DEFAULT_DAY_LABEL

    @classmethod
    def from_doc(cls, doc: Document) -> "Event":
        require_fields(doc, "Event", "name", "date")
        try:
            status = EventStatus(doc.get("status") or EventStatus.UPCOMING.value)
        except ValueError as e:
            raise DocumentShapeError(f"Event {doc.id} has unknown status {doc.get('status')!r}") from e

        days = doc.get("days") or []
        if not isinstance(days, list):
            raise DocumentShapeError(f"Event {doc.id}: days must be a list")

        return cls(
            event_id=doc.id,
            name=str(doc.get("name")),
            date=str(doc.get("date")),
            start_time=as_text(doc.get("startTime")),
            location=as_text(doc.get("location")),
            status=status,
            description=as_text(doc.get("description")),
            end_time=doc.get("endTime") or None,
            days=tuple(str(d) for d in days),
            created_at=doc.get("createdAt"),
        )

    def to_public(self) -> dict:
        return {
            "id": self.event_id,
            "name": self.name,
            "description": self.description,
            "date": self.date,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "status": self.status.value,
            "days": list(self.days),
            "createdAt": self.created_at,
        }
