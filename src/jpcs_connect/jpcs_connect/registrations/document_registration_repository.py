from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import DocumentShapeError
from ..store.document_store import REGISTRATIONS, Document, DocumentStore
from .model import Registration, registration_key
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


def _registrations(docs: Sequence[Document]) -> list[Registration]:
    out: list[Registration] = []
    for d in docs:
        try:
            out.append(Registration.from_doc(d))
        except DocumentShapeError as e:
            logger.warning("Skipping malformed registration document: %s", e)
    return out


class DocumentRegistrationRepository(RegistrationRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    async def list_for_event(self, event_id: str) -> Sequence[Registration]:
        res = await self._store.query_where(REGISTRATIONS, "eventId", "==", event_id)
        return _registrations(res.items)

    async def list_all(self) -> Sequence[Registration]:
        snapshot = await self._store.get_all(REGISTRATIONS)
        return _registrations(snapshot.items)

    async def create(self, *, event_id: str, student_id: str, student_name: str) -> str:
        return await self._store.insert(
            REGISTRATIONS,
            {"eventId": event_id, "studentId": student_id, "studentName": student_name},
            unique_key=registration_key(event_id, student_id),
        )

    async def get_by_id(self, registration_id: str) -> Optional[Registration]:
        res = await self._store.query_where(REGISTRATIONS, "id", "==", registration_id)
        regs = _registrations(res.items)
        return regs[0] if regs else None

    async def list_for_student(self, student_id: str) -> Sequence[Registration]:
        res = await self._store.query_where(REGISTRATIONS, "studentId", "==", student_id)
        return _registrations(res.items)

    async def reassign(self, registration_id: str, *, event_id: str, student_id: str, student_name: str) -> None:
        await self._store.update(
            REGISTRATIONS,
            registration_id,
            {"studentId": student_id, "studentName": student_name},
            unique_key=registration_key(event_id, student_id),
        )

    async def delete(self, registration_id: str) -> None:
        await self._store.delete(REGISTRATIONS, registration_id)
