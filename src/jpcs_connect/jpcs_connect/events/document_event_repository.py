from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import DocumentShapeError
from ..store.document_store import EVENTS, DocumentStore
from .model import Event
from .repository import EventRepository

logger = logging.getLogger(__name__)


class DocumentEventRepository(EventRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_by_id(self, event_id: str) -> Optional[Event]:
        res = await self._store.query_where(EVENTS, "id", "==", event_id)
        if res.empty:
            return None
        return Event.from_doc(res.items[0])

    async def list_all(self) -> Sequence[Event]:
        snapshot = await self._store.get_all(EVENTS)
        events: list[Event] = []
        for d in snapshot.items:
            try:
                events.append(Event.from_doc(d))
            except DocumentShapeError as e:
                logger.warning("Skipping malformed event document: %s", e)
        return events

    async def create(self, fields: dict[str, Any]) -> str:
        return await self._store.insert(EVENTS, fields)

    async def update(self, event_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(EVENTS, event_id, fields)

    async def delete(self, event_id: str) -> None:
        await self._store.delete(EVENTS, event_id)
