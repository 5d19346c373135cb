from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import StoreUnavailableError
from ..events.repository import EventRepository
from .export import build_csv, export_filename
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    count: int


class AttendanceService:
    """Use case: read side of the attendance log (admin tables, exports)."""

    def __init__(self, attendance: AttendanceRepository, events: EventRepository):
        self._attendance = attendance
        self._events = events

    async def list_for_event(self, event_id: str, day: Optional[str] = None) -> Sequence[AttendanceRecord]:
        try:
            return await self._attendance.list_for_event(event_id, day)
        except StoreUnavailableError:
            logger.warning("Attendance for event %s unavailable, showing none", event_id, exc_info=True)
            return []

    async def export_csv(self, event_id: str, *, day: Optional[str] = None, today: Optional[date] = None) -> CsvExport:
        event = await self._events.get_by_id(event_id)
        records = await self._attendance.list_for_event(event_id, day)
        content = build_csv(records, event)
        filename = export_filename(event.name if event else None, today or date.today())
        return CsvExport(filename=filename, content=content, count=len(records))
