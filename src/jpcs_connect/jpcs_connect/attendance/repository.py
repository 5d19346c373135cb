from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    async def list_for_event(self, event_id: str, day: Optional[str] = None) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def list_for_student(self, student_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    async def create(self, fields: dict[str, Any], *, unique_key: Optional[str] = None) -> str:
        """Append an attendance record.

        Raises DuplicateKeyError when ``unique_key`` is already recorded.
        """

        raise NotImplementedError

    async def update(self, attendance_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError
