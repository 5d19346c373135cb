from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..auth.model import Identity
from ..common.datetime_utils import now_utc, to_iso
from ..common.validators import optional_text, require_non_empty
from ..core.constants import UNKNOWN_EVENT_NAME
from ..core.exceptions import NotRegisteredError, StoreUnavailableError, ValidationError
from ..events.repository import EventRepository
from ..registrations.repository import RegistrationRepository
from ..store.document_store import DuplicateKeyError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use case: student directory (sign-in bootstrap, profiles, admin edits)."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        events: EventRepository,
        registrations: RegistrationRepository,
    ):
        self._users = users
        self._attendance = attendance
        self._events = events
        self._registrations = registrations

    async def ensure_user(self, identity: Identity) -> User:
        """Create the user record on first sign-in.

        Existing records are left alone, except a walk-in placeholder stored
        under this uid, which becomes the signed-in account.
        """
        user = await self._users.get_by_id(identity.uid)
        if user and user.is_claimable:
            await self._users.update(
                user.user_id,
                {
                    "firebaseUid": identity.uid,
                    "displayName": identity.display_name or user.display_name,
                    "email": identity.email or "",
                    "photoURL": identity.photo_url or "",
                    "isRegistered": True,
                    "walkIn": False,
                },
            )
            logger.info("User %s took over walk-in record", identity.uid)
            return await self.get_user(identity.uid)
        if user:
            return user

        await self._users.create_at(
            identity.uid,
            {
                "firebaseUid": identity.uid,
                "displayName": identity.display_name or "",
                "email": identity.email or "",
                "photoURL": identity.photo_url or "",
                "studentId": "",
                "eventsAttended": 0,
                "profileCompleted": False,
                "isRegistered": True,
                "createdAt": to_iso(now_utc()),
            },
        )
        logger.info("Bootstrapped user %s (%s)", identity.uid, identity.email)
        return await self.get_user(identity.uid)

    async def get_user(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if not user:
            raise NotRegisteredError("Student not found")
        return user

    async def _ensure_student_id_free(self, student_id: str, *, owner_id: str) -> None:
        holder = await self._users.find_by_student_id(student_id)
        if holder and holder.user_id != owner_id:
            raise ValidationError(f"Student ID {student_id} is already in use")

    async def complete_profile(
        self,
        uid: str,
        *,
        student_id: str,
        full_name: str,
        department: str,
        program: str,
    ) -> User:
        """Fill in the signed-in student's profile.

        A student id held by a directory entry nobody has signed in to (a
        walk-in placeholder or an imported roster row) is claimed: its
        attendance count moves to this user and the entry is removed.
        """
        user = await self.get_user(uid)
        student_id = require_non_empty(student_id, "Student ID")
        fields = {
            "studentId": student_id,
            "fullName": require_non_empty(full_name, "Full name"),
            "department": require_non_empty(department, "Department"),
            "program": require_non_empty(program, "Program"),
            "profileCompleted": True,
        }

        holder = await self._users.find_by_student_id(student_id)
        claimed = None
        if holder and holder.user_id != user.user_id:
            if not holder.is_claimable:
                raise ValidationError(f"Student ID {student_id} is already in use")
            claimed = holder
            fields["eventsAttended"] = user.events_attended + claimed.events_attended

        await self._users.update(user.user_id, fields)
        updated = await self.get_user(user.user_id)
        if claimed:
            await self._users.delete(claimed.user_id)
            logger.info("User %s claimed student id %s from %s", user.user_id, student_id, claimed.user_id)
            await self._propagate(student_id, updated)
        if user.student_id and user.student_id != student_id:
            await self._propagate(user.student_id, updated)
        return updated

    async def admin_update(
        self,
        user_id: str,
        *,
        student_id: Optional[str] = None,
        display_name: Optional[str] = None,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
        program: Optional[str] = None,
    ) -> User:
        """Edit a student; a new student id or name is carried into their attendance and registrations."""
        user = await self.get_user(user_id)
        fields: dict[str, str] = {}

        if student_id is not None:
            student_id = require_non_empty(student_id, "Student ID")
            await self._ensure_student_id_free(student_id, owner_id=user.user_id)
            fields["studentId"] = student_id
        if display_name is not None:
            fields["displayName"] = require_non_empty(display_name, "Name")
        if full_name is not None:
            fields["fullName"] = optional_text(full_name)
        if email is not None:
            fields["email"] = optional_text(email)
        if department is not None:
            fields["department"] = optional_text(department)
        if program is not None:
            fields["program"] = optional_text(program)

        if not fields:
            return user

        await self._users.update(user.user_id, fields)
        updated = await self.get_user(user.user_id)
        if user.student_id:
            await self._propagate(user.student_id, updated)
        return updated

    async def _propagate(self, old_student_id: str, user: User) -> None:
        await self._propagate_to_attendance(old_student_id, user)
        await self._propagate_to_registrations(old_student_id, user)

    async def _propagate_to_attendance(self, old_student_id: str, user: User) -> int:
        changed = 0
        for record in await self._attendance.list_for_student(old_student_id):
            fields = {}
            if record.student_id != user.student_id:
                fields["studentId"] = user.student_id
            if record.student_name != user.name:
                fields["studentName"] = user.name
            if fields:
                await self._attendance.update(record.attendance_id, fields)
                changed += 1
        if changed:
            logger.info("Updated %s attendance records of %s", changed, old_student_id)
        return changed

    async def _propagate_to_registrations(self, old_student_id: str, user: User) -> int:
        changed = 0
        for reg in await self._registrations.list_for_student(old_student_id):
            if reg.student_id == user.student_id and reg.student_name == user.name:
                continue
            try:
                await self._registrations.reassign(
                    reg.registration_id,
                    event_id=reg.event_id,
                    student_id=user.student_id,
                    student_name=user.name,
                )
            except DuplicateKeyError:
                # already registered under the new id
                await self._registrations.delete(reg.registration_id)
            changed += 1
        if changed:
            logger.info("Updated %s registrations of %s", changed, old_student_id)
        return changed

    async def list_students(self, search: str = "") -> Sequence[User]:
        try:
            users = list(await self._users.list_all())
        except StoreUnavailableError:
            logger.warning("Student list unavailable, showing none", exc_info=True)
            return []

        term = (search or "").strip().lower()
        if not term:
            return users
        return [
            u
            for u in users
            if term in u.display_name.lower() or term in u.full_name.lower() or term in u.student_id.lower()
        ]

    async def attendance_history(self, student_id: str) -> list[dict]:
        records = await self._attendance.list_for_student(student_id)
        if not records:
            return []
        names = {e.event_id: e.name for e in await self._events.list_all()}
        return [
            {**r.to_public(), "eventName": names.get(r.event_id) or r.event_name or UNKNOWN_EVENT_NAME}
            for r in records
        ]
