from __future__ import annotations

import logging
from collections import Counter
from typing import Sequence

from ..common.validators import require_non_empty
from ..core.enums import EventStatus
from ..core.exceptions import ValidationError
from ..events.repository import EventRepository
from ..store.document_store import DuplicateKeyError
from .model import Registration
from .repository import RegistrationRepository

logger = logging.getLogger(__name__)


class RegistrationService:
    """Use case: the registration ledger."""

    def __init__(self, registrations: RegistrationRepository, events: EventRepository):
        self._registrations = registrations
        self._events = events

    async def register(self, event_id: str, student_id: str, student_name: str) -> str:
        event_id = require_non_empty(event_id, "Event")
        student_id = require_non_empty(student_id, "Student ID")
        student_name = require_non_empty(student_name, "Student name")

        event = await self._events.get_by_id(event_id)
        if not event:
            raise ValidationError("Event not found")
        if event.status == EventStatus.COMPLETED:
            raise ValidationError("Registration is closed for this event")

        if await self.is_registered(event_id, student_id):
            raise ValidationError("You are already registered for this event")

        try:
            registration_id = await self._registrations.create(
                event_id=event_id, student_id=student_id, student_name=student_name
            )
        except DuplicateKeyError:
            raise ValidationError("You are already registered for this event")

        logger.info("Registered %s for event %s", student_id, event_id)
        return registration_id

    async def list_registrants(self, event_id: str) -> Sequence[Registration]:
        return await self._registrations.list_for_event(event_id)

    async def is_registered(self, event_id: str, student_id: str) -> bool:
        registrants = await self.list_registrants(event_id)
        return any(r.student_id == student_id for r in registrants)

    async def count_by_event(self) -> dict[str, int]:
        return dict(Counter(r.event_id for r in await self._registrations.list_all()))
