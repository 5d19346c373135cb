from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import DocumentShapeError
from ..store.document_store import ANNOUNCEMENTS, DocumentStore
from .model import Announcement
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class DocumentAnnouncementRepository(AnnouncementRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_by_id(self, announcement_id: str) -> Optional[Announcement]:
        res = await self._store.query_where(ANNOUNCEMENTS, "id", "==", announcement_id)
        return Announcement.from_doc(res.items[0]) if not res.empty else None

    async def list_recent(self) -> Sequence[Announcement]:
        res = await self._store.query_ordered(ANNOUNCEMENTS, "createdAt", "desc")
        out: list[Announcement] = []
        for d in res.items:
            try:
                out.append(Announcement.from_doc(d))
            except DocumentShapeError as e:
                logger.warning("Skipping malformed announcement document: %s", e)
        return out

    async def create(self, fields: dict[str, Any]) -> str:
        return await self._store.insert(ANNOUNCEMENTS, fields)

    async def update(self, announcement_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(ANNOUNCEMENTS, announcement_id, fields)

    async def delete(self, announcement_id: str) -> None:
        await self._store.delete(ANNOUNCEMENTS, announcement_id)
