from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from jpcs_connect.analytics.service import AnalyticsService
from jpcs_connect.announcements.document_announcement_repository import DocumentAnnouncementRepository
from jpcs_connect.announcements.service import AnnouncementService
from jpcs_connect.attendance.document_attendance_repository import DocumentAttendanceRepository
from jpcs_connect.attendance.service import AttendanceService
from jpcs_connect.events.document_event_repository import DocumentEventRepository
from jpcs_connect.events.service import EventService
from jpcs_connect.registrations.document_registration_repository import DocumentRegistrationRepository
from jpcs_connect.registrations.service import RegistrationService
from jpcs_connect.store.blob_store import MemoryDocumentStore
from jpcs_connect.users.document_user_repository import DocumentUserRepository
from jpcs_connect.users.service import StudentService


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 14, 9, 30, 0, tzinfo=timezone.utc)


@pytest.fixture
def store():
    s = MemoryDocumentStore()
    s.initialize()
    return s


@pytest.fixture
def users_repo(store):
    return DocumentUserRepository(store)


@pytest.fixture
def events_repo(store):
    return DocumentEventRepository(store)


@pytest.fixture
def registrations_repo(store):
    return DocumentRegistrationRepository(store)


@pytest.fixture
def attendance_repo(store):
    return DocumentAttendanceRepository(store)


@pytest.fixture
def event_service(events_repo):
    return EventService(events_repo)


@pytest.fixture
def registration_service(registrations_repo, events_repo):
    return RegistrationService(registrations_repo, events_repo)


@pytest.fixture
def student_service(users_repo, attendance_repo, events_repo, registrations_repo):
    return StudentService(users_repo, attendance_repo, events_repo, registrations_repo)


@pytest.fixture
def attendance_service(attendance_repo, events_repo):
    return AttendanceService(attendance_repo, events_repo)


@pytest.fixture
def announcement_service(store):
    return AnnouncementService(DocumentAnnouncementRepository(store))


@pytest.fixture
def analytics_service(events_repo, users_repo, registrations_repo, attendance_repo):
    return AnalyticsService(events_repo, users_repo, registrations_repo, attendance_repo)


def add_student(users_repo, student_id, name, *, uid=None):
    return run(
        users_repo.create(
            {
                "studentId": student_id,
                "displayName": name,
                "fullName": name,
                "email": f"{student_id}@school.edu",
                "eventsAttended": 0,
                "profileCompleted": True,
                "isRegistered": bool(uid),
                "firebaseUid": uid,
            }
        )
    )


@pytest.fixture
def make_student(users_repo):
    def _make(student_id, name, *, uid=None):
        return add_student(users_repo, student_id, name, uid=uid)

    return _make
