from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash

from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.service import StudentService
from .model import SessionUser
from .provider import IdentityProvider

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: sign students in through the identity provider, admins by password."""

    def __init__(
        self,
        provider: IdentityProvider,
        students: StudentService,
        *,
        admin_username: str = "admin",
        admin_password_hash: Optional[str] = None,
    ):
        self._provider = provider
        self._students = students
        self._admin_username = admin_username
        self._admin_password_hash = admin_password_hash

    async def sign_in(self, credential: str) -> SessionUser:
        identity = self._provider.verify(credential)
        user = await self._students.ensure_user(identity)
        logger.info("Student %s signed in", identity.uid)
        return SessionUser(
            uid=identity.uid,
            name=user.full_name or identity.display_name or user.name,
            role=Role.STUDENT,
            student_id=user.student_id or None,
            profile_completed=user.profile_completed,
        )

    def authenticate_admin(self, username: str, password: str) -> SessionUser:
        if not self._admin_password_hash or (username or "").strip() != self._admin_username:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(self._admin_password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(uid=f"admin:{self._admin_username}", name="Administrator", role=Role.ADMIN)
