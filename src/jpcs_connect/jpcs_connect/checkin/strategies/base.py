from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...users.model import User
from ...users.repository import UserRepository
from ..policy import LookupKey


@dataclass(frozen=True)
class StudentResolution:
    user: User
    is_new: bool = False


async def lookup_student(users: UserRepository, code: str, key: LookupKey) -> Optional[User]:
    if key == LookupKey.UID:
        return await users.find_by_uid(code)
    return await users.find_by_student_id(code)


class ResolutionStrategy(ABC):
    """Strategy Pattern: decide who a scanned code belongs to."""

    def __init__(self, lookup_key: LookupKey = LookupKey.STUDENT_ID):
        self.lookup_key = lookup_key

    @abstractmethod
    async def resolve(self, code: str, users: UserRepository) -> Optional[StudentResolution]:
        raise NotImplementedError
