from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from .model import User


class UserRepository(Protocol):
    async def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    async def find_by_student_id(self, student_id: str) -> Optional[User]:
        raise NotImplementedError

    async def find_by_uid(self, uid: str) -> Optional[User]:
        """Match the identity provider uid against firebaseUid or the document id."""

        raise NotImplementedError

    async def list_all(self) -> Sequence[User]:
        raise NotImplementedError

    async def create(self, fields: dict[str, Any]) -> str:
        raise NotImplementedError

    async def create_at(self, user_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError

    async def update(self, user_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError

    async def delete(self, user_id: str) -> None:
        raise NotImplementedError
