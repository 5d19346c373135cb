from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.documents import as_int, as_text
from ..core.exceptions import DocumentShapeError
from ..store.document_store import Document


@dataclass(frozen=True)
class User:
    """Domain entity: a student known to the system.

    Note: Plain data object (no store access code).
    """

    user_id: str
    student_id: str
    display_name: str
    full_name: str
    email: str
    photo_url: str = ""
    department: str = ""
    program: str = ""
    firebase_uid: Optional[str] = None
    events_attended: int = 0
    profile_completed: bool = False
    is_registered: bool = True
    is_walk_in: bool = False
    created_at: Optional[str] = None

    @property
    def name(self) -> str:
        return self.full_name or self.display_name or "Unknown"

    @property
    def is_claimable(self) -> bool:
        """Directory entries nobody has signed in to yet (walk-ins, imported rosters)."""
        return not self.firebase_uid and not self.is_registered

    @property
    def status_label(self) -> str:
        return "Registered" if self.firebase_uid else "Unregistered"

    @classmethod
    def from_doc(cls, doc: Document) -> "User":
        if "studentId" not in doc.data and "firebaseUid" not in doc.data:
            raise DocumentShapeError(f"User {doc.id} has neither studentId nor firebaseUid")
        uid = doc.get("firebaseUid")
        return cls(
            user_id=doc.id,
            student_id=as_text(doc.get("studentId")),
            display_name=as_text(doc.get("displayName")),
            full_name=as_text(doc.get("fullName")),
            email=as_text(doc.get("email")),
            photo_url=as_text(doc.get("photoURL")),
            department=as_text(doc.get("department")),
            program=as_text(doc.get("program")),
            firebase_uid=str(uid) if uid else None,
            events_attended=as_int(doc, "eventsAttended"),
            profile_completed=bool(doc.get("profileCompleted", False)),
            is_registered=bool(doc.get("isRegistered", bool(uid))),
            is_walk_in=bool(doc.get("walkIn", False)),
            created_at=doc.get("createdAt"),
        )

    def to_public(self) -> dict:
        return {
            "id": self.user_id,
            "firebaseUid": self.firebase_uid,
            "studentId": self.student_id,
            "displayName": self.display_name,
            "fullName": self.full_name,
            "email": self.email,
            "photoURL": self.photo_url,
            "department": self.department,
            "program": self.program,
            "eventsAttended": self.events_attended,
            "profileCompleted": self.profile_completed,
            "isRegistered": self.is_registered,
            "walkIn": self.is_walk_in,
            "status": self.status_label,
            "createdAt": self.created_at,
        }
