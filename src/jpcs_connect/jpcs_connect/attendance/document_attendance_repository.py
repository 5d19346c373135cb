from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import DocumentShapeError
from ..store.document_store import ATTENDANCE, Document, DocumentStore
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def _records(docs: Sequence[Document]) -> list[AttendanceRecord]:
    out: list[AttendanceRecord] = []
    for d in docs:
        try:
            out.append(AttendanceRecord.from_doc(d))
        except DocumentShapeError as e:
            logger.warning("Skipping malformed attendance document: %s", e)
    return out


class DocumentAttendanceRepository(AttendanceRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    async def list_for_event(self, event_id: str, day: Optional[str] = None) -> Sequence[AttendanceRecord]:
        res = await self._store.query_where(ATTENDANCE, "eventId", "==", event_id)
        records = _records(res.items)
        if day:
            records = [r for r in records if r.day == day]
        return records

    async def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        res = await self._store.query_where(ATTENDANCE, "studentId", "==", student_id)
        return _records(res.items)

    async def list_all(self) -> Sequence[AttendanceRecord]:
        snapshot = await self._store.get_all(ATTENDANCE)
        return _records(snapshot.items)

    async def create(self, fields: dict[str, Any], *, unique_key: Optional[str] = None) -> str:
        return await self._store.insert(ATTENDANCE, fields, unique_key=unique_key)

    async def update(self, attendance_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(ATTENDANCE, attendance_id, fields)
