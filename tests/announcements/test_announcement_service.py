from __future__ import annotations

import asyncio

import pytest

from jpcs_connect.core.enums import Priority
from jpcs_connect.core.exceptions import ValidationError
from jpcs_connect.store.document_store import ANNOUNCEMENTS


def run(coro):
    return asyncio.run(coro)


def test_create_announcement_defaults(announcement_service):
    announcement_id = run(announcement_service.create(title="Welcome", message="Orientation on Friday", author=""))

    [item] = run(announcement_service.list_recent())
    assert item.announcement_id == announcement_id
    assert item.priority == Priority.NORMAL
    assert item.recipients == "all"
    assert item.author == "Admin"
    assert item.views == 0
    assert item.status == "sent"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": "", "message": "m"},
        {"title": "t", "message": " "},
        {"title": "t", "message": "m", "priority": "urgent"},
    ],
)
def test_create_announcement_validates(announcement_service, kwargs):
    with pytest.raises(ValidationError):
        run(announcement_service.create(author="Admin", **kwargs))


def test_list_recent_is_newest_first(announcement_service, store):
    for title, created in (("old", "2026-01-01T00:00:00Z"), ("new", "2026-03-01T00:00:00Z"), ("mid", "2026-02-01T00:00:00Z")):
        run(store.insert(ANNOUNCEMENTS, {"title": title, "message": "m", "createdAt": created}))

    assert [a.title for a in run(announcement_service.list_recent())] == ["new", "mid", "old"]


def test_record_view_and_delete(announcement_service):
    announcement_id = run(announcement_service.create(title="t", message="m", author="Admin", priority="high"))

    assert run(announcement_service.record_view(announcement_id)) == 1
    assert run(announcement_service.record_view(announcement_id)) == 2

    run(announcement_service.delete(announcement_id))
    assert run(announcement_service.list_recent()) == []
    with pytest.raises(ValidationError):
        run(announcement_service.delete(announcement_id))
    with pytest.raises(ValidationError):
        run(announcement_service.record_view(announcement_id))
