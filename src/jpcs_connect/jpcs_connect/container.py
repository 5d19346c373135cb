from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .analytics.service import AnalyticsService
from .announcements.document_announcement_repository import DocumentAnnouncementRepository
from .announcements.service import AnnouncementService
from .attendance.document_attendance_repository import DocumentAttendanceRepository
from .attendance.service import AttendanceService
from .auth.provider import StaticIdentityProvider
from .auth.service import AuthService
from .checkin.factory import ResolutionStrategyFactory
from .checkin.policy import CheckinPolicy
from .checkin.service import CheckinService
from .core.exceptions import ValidationError
from .database.connection import DBConfig, ConnectionFactory
from .events.document_event_repository import DocumentEventRepository
from .events.service import EventService
from .registrations.document_registration_repository import DocumentRegistrationRepository
from .registrations.service import RegistrationService
from .store.blob_store import LocalDocumentStore, MemoryDocumentStore
from .store.document_store import DocumentStore
from .store.mysql_document_store import MySQLDocumentStore
from .users.document_user_repository import DocumentUserRepository
from .users.service import StudentService


@dataclass(frozen=True)
class Container:
    store: DocumentStore

    users_repo: DocumentUserRepository
    events_repo: DocumentEventRepository
    registrations_repo: DocumentRegistrationRepository
    attendance_repo: DocumentAttendanceRepository
    announcements_repo: DocumentAnnouncementRepository

    auth_service: AuthService
    student_service: StudentService
    event_service: EventService
    registration_service: RegistrationService
    checkin_service: CheckinService
    attendance_service: AttendanceService
    announcement_service: AnnouncementService
    analytics_service: AnalyticsService


def build_store(settings: Any) -> DocumentStore:
    """Pick the document store backend named by ``STORE_BACKEND``."""
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    latency_ms = getattr(settings, "STORE_LATENCY_MS", None)
    latency = None if latency_ms is None else float(latency_ms) / 1000

    if backend == "memory":
        store = MemoryDocumentStore(latency=latency)
    elif backend == "local":
        store = LocalDocumentStore(getattr(settings, "LOCAL_STORE_DIR", "instance/store"), latency=latency)
    elif backend == "mysql":
        conn = ConnectionFactory(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        return MySQLDocumentStore(conn)
    else:
        raise ValidationError(f"Unknown STORE_BACKEND: {backend}")

    store.initialize()
    return store


def build_container(settings: Any, *, store: Optional[DocumentStore] = None) -> Container:
    store = store or build_store(settings)

    users_repo = DocumentUserRepository(store)
    events_repo = DocumentEventRepository(store)
    registrations_repo = DocumentRegistrationRepository(store)
    attendance_repo = DocumentAttendanceRepository(store)
    announcements_repo = DocumentAnnouncementRepository(store)

    student_service = StudentService(users_repo, attendance_repo, events_repo, registrations_repo)
    auth_service = AuthService(
        StaticIdentityProvider.from_config(getattr(settings, "IDENTITY_CREDENTIALS", None)),
        student_service,
        admin_username=getattr(settings, "ADMIN_USERNAME", "admin"),
        admin_password_hash=getattr(settings, "ADMIN_PASSWORD_HASH", None),
    )
    event_service = EventService(events_repo)
    registration_service = RegistrationService(registrations_repo, events_repo)
    checkin_service = CheckinService(
        users_repo,
        registrations_repo,
        attendance_repo,
        events_repo,
        policy=CheckinPolicy.from_settings(settings),
        strategy_factory=ResolutionStrategyFactory(),
    )
    attendance_service = AttendanceService(attendance_repo, events_repo)
    announcement_service = AnnouncementService(announcements_repo)
    analytics_service = AnalyticsService(events_repo, users_repo, registrations_repo, attendance_repo)

    return Container(
        store=store,
        users_repo=users_repo,
        events_repo=events_repo,
        registrations_repo=registrations_repo,
        attendance_repo=attendance_repo,
        announcements_repo=announcements_repo,
        auth_service=auth_service,
        student_service=student_service,
        event_service=event_service,
        registration_service=registration_service,
        checkin_service=checkin_service,
        attendance_service=attendance_service,
        announcement_service=announcement_service,
        analytics_service=analytics_service,
    )
