from __future__ import annotations

from typing import Optional

from ...users.repository import UserRepository
from .base import ResolutionStrategy, StudentResolution, lookup_student


class StrictResolution(ResolutionStrategy):
    """Only students already known to the system can check in."""

    async def resolve(self, code: str, users: UserRepository) -> Optional[StudentResolution]:
        user = await lookup_student(users, code, self.lookup_key)
        return StudentResolution(user=user) if user else None
