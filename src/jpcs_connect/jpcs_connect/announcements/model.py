from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.documents import as_int, as_text, require_fields
from ..core.enums import Priority
from ..core.exceptions import DocumentShapeError
from ..store.document_store import Document


@dataclass(frozen=True)
class Announcement:
    announcement_id: str
    title: str
    message: str
    priority: Priority
    recipients: str
    author: str
    views: int
    status: str
    created_at: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Document) -> "Announcement":
        require_fields(doc, "Announcement", "title", "message")
        try:
            priority = Priority(doc.get("priority") or Priority.NORMAL.value)
        except ValueError as e:
            raise DocumentShapeError(f"Announcement {doc.id} has unknown priority") from e

        return cls(
            announcement_id=doc.id,
            title=str(doc.get("title")),
            message=str(doc.get("message")),
            priority=priority,
            recipients=as_text(doc.get("recipients")) or "all",
            author=as_text(doc.get("author")),
            views=as_int(doc, "views"),
            status=as_text(doc.get("status")) or "sent",
            created_at=doc.get("createdAt"),
        )

    def to_public(self) -> dict:
        return {
            "id": self.announcement_id,
            "title": self.title,
            "message": self.message,
            "priority": self.priority.value,
            "recipients": self.recipients,
            "author": self.author,
            "views": self.views,
            "status": self.status,
            "createdAt": self.created_at,
        }
