from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Callable, Optional, Sequence

from ..attendance.model import AttendanceRecord, attendance_key
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_utc, to_iso
from ..core.enums import AttendanceStatus
from ..core.exceptions import StoreUnavailableError, ValidationError
from ..events.model import Event
from ..events.repository import EventRepository
from ..registrations.repository import RegistrationRepository
from ..store.document_store import DuplicateKeyError
from ..users.model import User
from ..users.repository import UserRepository
from .factory import ResolutionStrategyFactory
from .model import CheckinResult, ScanState
from .policy import CheckinPolicy
from .scanner import NullScanner, Scanner

logger = logging.getLogger(__name__)


def _attendee_key(user: User) -> str:
    return user.student_id or user.firebase_uid or user.user_id


class ScanSession:
    """A live scanning session for one event (and day).

    Holds the attendance view shown next to the scanner; it is refreshed
    after every accepted scan.
    """

    def __init__(self, service: "CheckinService", event: Event, day: Optional[str], scanner: Scanner):
        self._service = service
        self._scanner = scanner
        self.event = event
        self.day = day
        self.state = ScanState.IDLE
        self.attendance: Sequence[AttendanceRecord] = []
        self.last_result: Optional[CheckinResult] = None

    async def refresh(self) -> Sequence[AttendanceRecord]:
        self.attendance = await self._service.list_attendance(self.event.event_id, self.day)
        return self.attendance

    async def handle(self, payload: Optional[str]) -> CheckinResult:
        await self._scanner.pause()
        self.state = ScanState.VALIDATING
        try:
            result = await self._service.evaluate(self.event, self.day, payload)
            self.state = result.outcome
            if result.accepted:
                await self.refresh()
        finally:
            await self._scanner.resume()

        self.last_result = result
        self.state = ScanState.IDLE
        return result


class CheckinService:
    """Use case: decide what happens when a code is scanned at an event."""

    def __init__(
        self,
        users: UserRepository,
        registrations: RegistrationRepository,
        attendance: AttendanceRepository,
        events: EventRepository,
        *,
        policy: Optional[CheckinPolicy] = None,
        strategy_factory: Optional[ResolutionStrategyFactory] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._users = users
        self._registrations = registrations
        self._attendance = attendance
        self._events = events
        self.policy = policy or CheckinPolicy()
        self._resolver = (strategy_factory or ResolutionStrategyFactory()).for_policy(self.policy)
        self._clock = clock

    async def get_event(self, event_id: str) -> Event:
        event = await self._events.get_by_id(event_id)
        if not event:
            raise ValidationError("Event not found")
        return event

    def resolve_day(self, event: Event, day: Optional[str]) -> Optional[str]:
        """Pick the session day. Single-day events have none."""
        day = (day or "").strip() or None
        if not event.is_multi_day:
            return None
        if day is None:
            return event.default_day()
        if day not in event.days:
            raise ValidationError(f"{day} is not on the schedule of {event.name}")
        return day

    async def list_attendance(self, event_id: str, day: Optional[str] = None) -> Sequence[AttendanceRecord]:
        return await self._attendance.list_for_event(event_id, day)

    @asynccontextmanager
    async def open_session(
        self,
        event_id: str,
        *,
        day: Optional[str] = None,
        scanner: Optional[Scanner] = None,
    ) -> AsyncIterator[ScanSession]:
        event = await self.get_event(event_id)
        session_day = self.resolve_day(event, day)
        scanner = scanner or NullScanner()

        await scanner.start()
        try:
            session = ScanSession(self, event, session_day, scanner)
            await session.refresh()
            yield session
        finally:
            await scanner.stop()

    async def check_in(self, event_id: str, payload: Optional[str], *, day: Optional[str] = None) -> CheckinResult:
        async with self.open_session(event_id, day=day) as session:
            return await session.handle(payload)

    async def evaluate(self, event: Event, day: Optional[str], payload: Optional[str]) -> CheckinResult:
        code = (payload or "").strip()
        if not code:
            return self._log(
                event,
                CheckinResult(
                    outcome=ScanState.REJECTED_EMPTY,
                    title="Invalid QR Code",
                    message="The scanned QR code is empty or invalid",
                ),
            )

        try:
            return self._log(event, await self._evaluate(event, day, code))
        except StoreUnavailableError:
            logger.exception("Check-in for %s at event %s failed", code, event.event_id)
            return CheckinResult(
                outcome=ScanState.FAILED,
                title="Error",
                message="Failed to process check-in. Please try again.",
                student_id=code,
            )

    async def _evaluate(self, event: Event, day: Optional[str], code: str) -> CheckinResult:
        resolution = await self._resolver.resolve(code, self._users)
        if resolution is None:
            return CheckinResult(
                outcome=ScanState.REJECTED_NOT_REGISTERED,
                title="Not Registered",
                message="Student not found in system",
                student_id=code,
            )

        user = resolution.user
        student_id = _attendee_key(user)

        # walk-in placeholders never have a registration
        if self.policy.require_registration and not user.is_walk_in:
            registrants = await self._registrations.list_for_event(event.event_id)
            if not any(r.student_id == student_id for r in registrants):
                return CheckinResult(
                    outcome=ScanState.REJECTED_NOT_REGISTERED,
                    title="Not Registered",
                    message=f"{user.name} is not registered for this event",
                    student_id=student_id,
                    student_name=user.name,
                )

        scope_day = day if self.policy.per_day else None
        existing = await self._find_existing(event.event_id, student_id, scope_day)
        if existing:
            return self._duplicate(existing.student_name or user.name, student_id, scope_day)

        fields = {
            "eventId": event.event_id,
            "eventName": event.name,
            "studentId": student_id,
            "studentName": user.name,
            "status": AttendanceStatus.ATTENDED.value,
            "timestamp": to_iso(self._clock()),
        }
        if day:
            fields["day"] = day

        try:
            attendance_id = await self._attendance.create(
                fields, unique_key=attendance_key(event.event_id, student_id, scope_day)
            )
        except DuplicateKeyError:
            return self._duplicate(user.name, student_id, scope_day)

        await self._users.update(user.user_id, {"eventsAttended": user.events_attended + 1})

        if resolution.is_new:
            return CheckinResult(
                outcome=ScanState.ACCEPTED_NEW_WALKIN,
                title="Check-in Successful!",
                message=f"New student {student_id} checked in successfully",
                student_id=student_id,
                student_name=user.name,
                attendance_id=attendance_id,
                day=day,
            )
        return CheckinResult(
            outcome=ScanState.ACCEPTED,
            title="Check-in Successful!",
            message=f"{user.name} checked in successfully",
            student_id=student_id,
            student_name=user.name,
            attendance_id=attendance_id,
            day=day,
        )

    async def _find_existing(self, event_id: str, student_id: str, day: Optional[str]) -> Optional[AttendanceRecord]:
        for record in await self._attendance.list_for_event(event_id):
            if record.student_id != student_id:
                continue
            if day is None or record.day == day:
                return record
        return None

    @staticmethod
    def _duplicate(name: str, student_id: str, day: Optional[str]) -> CheckinResult:
        scope = "this day" if day else "this event"
        return CheckinResult(
            outcome=ScanState.REJECTED_DUPLICATE,
            title="Already Checked In",
            message=f"{name} has already been checked in for {scope}.",
            student_id=student_id,
            student_name=name,
            day=day,
        )

    @staticmethod
    def _log(event: Event, result: CheckinResult) -> CheckinResult:
        logger.info(
            "Scan at event %s: %s (%s)",
            event.event_id,
            result.outcome.value,
            result.student_id or "-",
        )
        return result
