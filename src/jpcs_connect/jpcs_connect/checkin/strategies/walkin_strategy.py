from __future__ import annotations

import logging
from typing import Optional

from ...users.model import User
from ...users.repository import UserRepository
from ..policy import LookupKey
from .base import ResolutionStrategy, StudentResolution, lookup_student

logger = logging.getLogger(__name__)


def placeholder_fields(code: str) -> dict:
    return {
        "studentId": code,
        "displayName": f"Student {code}",
        "fullName": f"Unregistered Student {code}",
        "email": "",
        "department": "Unknown",
        "program": "Unknown",
        "photoURL": "",
        "eventsAttended": 0,
        "firebaseUid": None,
        "profileCompleted": False,
        "isRegistered": False,
        "walkIn": True,
    }


class WalkInResolution(ResolutionStrategy):
    """Unknown codes get a placeholder student record tagged unregistered."""

    async def resolve(self, code: str, users: UserRepository) -> Optional[StudentResolution]:
        user = await lookup_student(users, code, self.lookup_key)
        if user:
            return StudentResolution(user=user)

        fields = placeholder_fields(code)
        if self.lookup_key == LookupKey.UID:
            # uid lookups fall back to the document id, so the next scan finds it
            user_id = code
            await users.create_at(user_id, fields)
        else:
            user_id = await users.create(fields)
        logger.info("Created walk-in placeholder %s for code %s", user_id, code)
        return StudentResolution(
            user=User(
                user_id=user_id,
                student_id=code,
                display_name=fields["displayName"],
                full_name=fields["fullName"],
                email="",
                department="Unknown",
                program="Unknown",
                is_registered=False,
                is_walk_in=True,
            ),
            is_new=True,
        )
