from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..core.exceptions import DocumentShapeError
from ..store.document_store import USERS, Document, DocumentStore
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


def _users(docs: Sequence[Document]) -> list[User]:
    out: list[User] = []
    for d in docs:
        try:
            out.append(User.from_doc(d))
        except DocumentShapeError as e:
            logger.warning("Skipping malformed user document: %s", e)
    return out


class DocumentUserRepository(UserRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    async def get_by_id(self, user_id: str) -> Optional[User]:
        res = await self._store.query_where(USERS, "id", "==", user_id)
        users = _users(res.items)
        return users[0] if users else None

    async def find_by_student_id(self, student_id: str) -> Optional[User]:
        if not student_id:
            return None
        res = await self._store.query_where(USERS, "studentId", "==", student_id)
        users = _users(res.items)
        return users[0] if users else None

    async def find_by_uid(self, uid: str) -> Optional[User]:
        if not uid:
            return None
        res = await self._store.query_where(USERS, "firebaseUid", "==", uid)
        users = _users(res.items)
        if users:
            return users[0]
        return await self.get_by_id(uid)

    async def list_all(self) -> Sequence[User]:
        snapshot = await self._store.get_all(USERS)
        return _users(snapshot.items)

    async def create(self, fields: dict[str, Any]) -> str:
        return await self._store.insert(USERS, fields)

    async def create_at(self, user_id: str, fields: dict[str, Any]) -> None:
        await self._store.upsert(USERS, user_id, fields)

    async def update(self, user_id: str, fields: dict[str, Any]) -> None:
        await self._store.update(USERS, user_id, fields)

    async def delete(self, user_id: str) -> None:
        await self._store.delete(USERS, user_id)
