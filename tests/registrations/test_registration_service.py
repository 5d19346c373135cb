from __future__ import annotations

import asyncio

import pytest

from jpcs_connect.core.exceptions import ValidationError
from jpcs_connect.registrations.model import registration_key
from jpcs_connect.store.document_store import REGISTRATIONS, DuplicateKeyError


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def event_id(event_service):
    return run(event_service.create_event(name="Tech Talk", date="2026-04-01", start_time="13:00", location="AVR"))


def test_register_writes_one_record(registration_service, event_id, store):
    reg_id = run(registration_service.register(event_id, "S1", "Ana Cruz"))

    docs = run(store.get_all(REGISTRATIONS)).items
    assert [d.id for d in docs] == [reg_id]
    assert docs[0].get("eventId") == event_id
    assert docs[0].get("studentId") == "S1"
    assert docs[0].get("studentName") == "Ana Cruz"
    assert docs[0].get("createdAt")


def test_register_twice_is_rejected(registration_service, event_id, store):
    run(registration_service.register(event_id, "S1", "Ana Cruz"))

    with pytest.raises(ValidationError, match="already registered"):
        run(registration_service.register(event_id, "S1", "Ana Cruz"))
    assert run(store.get_all(REGISTRATIONS)).count == 1


def test_store_level_key_blocks_racing_registration(registrations_repo, event_id, store):
    # a write that slipped in between the check and the insert
    run(store.insert(REGISTRATIONS, {"eventId": event_id, "studentId": "S1"}, unique_key=registration_key(event_id, "S1")))

    with pytest.raises(DuplicateKeyError):
        run(registrations_repo.create(event_id=event_id, student_id="S1", student_name="Ana"))


@pytest.mark.parametrize(
    "student_id,student_name",
    [("", "Ana"), ("S1", ""), ("  ", "Ana")],
)
def test_register_requires_student_fields(registration_service, event_id, student_id, student_name):
    with pytest.raises(ValidationError):
        run(registration_service.register(event_id, student_id, student_name))


def test_register_requires_existing_event(registration_service):
    with pytest.raises(ValidationError, match="Event not found"):
        run(registration_service.register("missing", "S1", "Ana"))


def test_register_closed_for_completed_event(registration_service, event_service, event_id):
    run(event_service.change_status(event_id, "completed"))

    with pytest.raises(ValidationError, match="closed"):
        run(registration_service.register(event_id, "S1", "Ana"))


def test_list_and_count(registration_service, event_service, event_id):
    other = run(event_service.create_event(name="Workshop", date="2026-04-02", start_time="10:00", location="Lab"))
    run(registration_service.register(event_id, "S1", "Ana"))
    run(registration_service.register(event_id, "S2", "Ben"))
    run(registration_service.register(other, "S1", "Ana"))

    registrants = run(registration_service.list_registrants(event_id))
    assert sorted(r.student_id for r in registrants) == ["S1", "S2"]
    assert run(registration_service.is_registered(other, "S1"))
    assert not run(registration_service.is_registered(other, "S2"))
    assert run(registration_service.count_by_event()) == {event_id: 2, other: 1}
