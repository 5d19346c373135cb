from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import Event


class EventRepository(Protocol):
    async def get_by_id(self, event_id: str) -> Optional[Event]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[Event]:
        raise NotImplementedError

    async def create(self, fields: dict[str, Any]) -> str:
        raise NotImplementedError

    async def update(self, event_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError

    async def delete(self, event_id: str) -> None:
        raise NotImplementedError
