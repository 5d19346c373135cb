from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Announcement


class AnnouncementRepository(Protocol):
    async def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        raise NotImplementedError

    async def list_recent(self) -> Sequence[Announcement]:
        """Newest first."""

        raise NotImplementedError

    async def create(self, fields: dict[str, Any]) -> str:
        raise NotImplementedError

    async def update(self, announcement_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError

    async def delete(self, announcement_id: str) -> None:
        raise NotImplementedError
