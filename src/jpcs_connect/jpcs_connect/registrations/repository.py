from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Registration


class RegistrationRepository(Protocol):
    async def list_for_event(self, event_id: str) -> Sequence[Registration]:
        raise NotImplementedError

    async def list_all(self) -> Sequence[Registration]:
        raise NotImplementedError

    async def create(self, *, event_id: str, student_id: str, student_name: str) -> str:
        """Insert a registration.

        Raises DuplicateKeyError when the (event, student) pair already exists.
        """

        raise NotImplementedError

    async def get_by_id(self, registration_id: str) -> Optional[Registration]:
        raise NotImplementedError

    async def list_for_student(self, student_id: str) -> Sequence[Registration]:
        raise NotImplementedError

    async def reassign(self, registration_id: str, *, event_id: str, student_id: str, student_name: str) -> None:
        """Point a registration at another student id (and re-key it).

        Raises DuplicateKeyError when that student is already registered.
        """

        raise NotImplementedError

    async def delete(self, registration_id: str) -> None:
        raise NotImplementedError
