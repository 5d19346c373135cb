from __future__ import annotations

import asyncio

import pytest

from jpcs_connect.auth.model import Identity
from jpcs_connect.checkin.strategies.walkin_strategy import placeholder_fields
from jpcs_connect.core.exceptions import NotRegisteredError, StoreUnavailableError, ValidationError
from jpcs_connect.store.document_store import ATTENDANCE, USERS, DuplicateKeyError
from jpcs_connect.users.service import StudentService


def run(coro):
    return asyncio.run(coro)


IDENTITY = Identity(uid="uid-ana", display_name="Ana C", email="ana@school.edu", photo_url="")


class UnavailableUsersRepo:
    async def list_all(self):
        raise StoreUnavailableError("users offline")


def test_ensure_user_bootstraps_once(student_service, store):
    user = run(student_service.ensure_user(IDENTITY))

    assert user.user_id == "uid-ana"
    assert user.firebase_uid == "uid-ana"
    assert user.profile_completed is False
    assert user.name == "Ana C"

    run(student_service.complete_profile("uid-ana", student_id="S1", full_name="Ana Cruz", department="CCS", program="BSCS"))
    again = run(student_service.ensure_user(IDENTITY))
    assert again.student_id == "S1"
    assert run(store.get_all(USERS)).count == 1


def test_complete_profile(student_service):
    run(student_service.ensure_user(IDENTITY))
    user = run(
        student_service.complete_profile("uid-ana", student_id=" S1 ", full_name="Ana Cruz", department="CCS", program="BSCS")
    )

    assert user.student_id == "S1"
    assert user.name == "Ana Cruz"
    assert user.profile_completed is True
    assert user.status_label == "Registered"


def test_complete_profile_requires_fields(student_service):
    run(student_service.ensure_user(IDENTITY))
    with pytest.raises(ValidationError):
        run(student_service.complete_profile("uid-ana", student_id="S1", full_name="", department="CCS", program="BSCS"))


def test_student_id_must_be_unique(student_service, make_student):
    make_student("S1", "Someone Else", uid="uid-other")
    run(student_service.ensure_user(IDENTITY))

    with pytest.raises(ValidationError, match="already in use"):
        run(student_service.complete_profile("uid-ana", student_id="S1", full_name="Ana", department="CCS", program="BSCS"))


def test_get_unknown_user(student_service):
    with pytest.raises(NotRegisteredError):
        run(student_service.get_user("nobody"))


def test_admin_update_carries_changes_into_attendance(student_service, users_repo, store, make_student):
    user_id = make_student("S1", "Ana Cruz")
    run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "S1", "studentName": "Ana Cruz", "status": "attended"}))
    run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "S2", "studentName": "Ben", "status": "attended"}))

    user = run(student_service.admin_update(user_id, student_id="S1-NEW", full_name="Ana M. Cruz"))
    assert user.student_id == "S1-NEW"

    by_student = {d.get("studentId"): d.get("studentName") for d in run(store.get_all(ATTENDANCE)).items}
    assert by_student == {"S1-NEW": "Ana M. Cruz", "S2": "Ben"}


def test_admin_update_without_changes_is_a_no_op(student_service, make_student):
    user_id = make_student("S1", "Ana Cruz")
    assert run(student_service.admin_update(user_id)).student_id == "S1"


def test_list_students_search(student_service, make_student):
    make_student("2021-001", "Ana Cruz")
    make_student("2021-002", "Ben Reyes")

    assert [u.student_id for u in run(student_service.list_students("cruz"))] == ["2021-001"]
    assert [u.full_name for u in run(student_service.list_students("002"))] == ["Ben Reyes"]
    assert len(run(student_service.list_students(""))) == 2


def test_list_students_degrades_when_store_is_down(attendance_repo, events_repo, registrations_repo):
    service = StudentService(UnavailableUsersRepo(), attendance_repo, events_repo, registrations_repo)
    assert run(service.list_students()) == []


def test_attendance_history_uses_current_event_names(student_service, event_service, store):
    event_id = run(event_service.create_event(name="Assembly", date="2026-03-14", start_time="09:00", location="AVR"))
    run(store.insert(ATTENDANCE, {"eventId": event_id, "eventName": "Old name", "studentId": "S1", "status": "attended"}))
    run(store.insert(ATTENDANCE, {"eventId": "gone", "studentId": "S1", "status": "attended"}))

    history = run(student_service.attendance_history("S1"))
    assert sorted(h["eventName"] for h in history) == ["Assembly", "Unknown Event"]
    assert run(student_service.attendance_history("S9")) == []


def test_admin_update_moves_registrations_to_new_student_id(student_service, registrations_repo, make_student):
    user_id = make_student("S1", "Ana Cruz")
    run(registrations_repo.create(event_id="E1", student_id="S1", student_name="Ana Cruz"))

    run(student_service.admin_update(user_id, student_id="S1-NEW", full_name="Ana M. Cruz"))

    assert run(registrations_repo.list_for_student("S1")) == []
    [moved] = run(registrations_repo.list_for_student("S1-NEW"))
    assert (moved.event_id, moved.student_name) == ("E1", "Ana M. Cruz")
    with pytest.raises(DuplicateKeyError):
        run(registrations_repo.create(event_id="E1", student_id="S1-NEW", student_name="Ana M. Cruz"))
    run(registrations_repo.create(event_id="E1", student_id="S1", student_name="Someone Else"))


def test_admin_update_drops_registration_already_held_by_new_id(student_service, registrations_repo, make_student):
    user_id = make_student("S1", "Ana Cruz")
    run(registrations_repo.create(event_id="E1", student_id="S1", student_name="Ana Cruz"))
    run(registrations_repo.create(event_id="E1", student_id="S1-NEW", student_name="Ana Cruz"))

    run(student_service.admin_update(user_id, student_id="S1-NEW"))

    assert [r.student_id for r in run(registrations_repo.list_all())] == ["S1-NEW"]


def test_complete_profile_claims_walk_in_placeholder(student_service, users_repo, registrations_repo, store):
    run(users_repo.create({**placeholder_fields("S3"), "eventsAttended": 2}))
    run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "S3", "studentName": "Unregistered Student S3"}))
    run(registrations_repo.create(event_id="E2", student_id="S3", student_name="Unregistered Student S3"))
    run(student_service.ensure_user(IDENTITY))

    user = run(
        student_service.complete_profile("uid-ana", student_id="S3", full_name="Ana Cruz", department="CCS", program="BSCS")
    )

    assert user.user_id == "uid-ana"
    assert user.student_id == "S3"
    assert user.events_attended == 2
    assert run(store.get_all(USERS)).count == 1
    assert run(users_repo.find_by_student_id("S3")).user_id == "uid-ana"
    assert [r.get("studentName") for r in run(store.get_all(ATTENDANCE)).items] == ["Ana Cruz"]
    assert [r.student_name for r in run(registrations_repo.list_for_student("S3"))] == ["Ana Cruz"]


def test_ensure_user_takes_over_placeholder_stored_under_uid(student_service, users_repo, store):
    run(users_repo.create_at("uid-ana", {**placeholder_fields("uid-ana"), "eventsAttended": 1}))
    run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "uid-ana", "studentName": "Unregistered Student uid-ana"}))

    user = run(student_service.ensure_user(IDENTITY))
    assert user.firebase_uid == "uid-ana"
    assert user.is_walk_in is False
    assert user.events_attended == 1
    assert user.email == "ana@school.edu"

    run(student_service.complete_profile("uid-ana", student_id="S1", full_name="Ana Cruz", department="CCS", program="BSCS"))

    assert run(store.get_all(USERS)).count == 1
    [record] = run(store.get_all(ATTENDANCE)).items
    assert (record.get("studentId"), record.get("studentName")) == ("S1", "Ana Cruz")
