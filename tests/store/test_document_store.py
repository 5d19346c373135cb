from __future__ import annotations

import asyncio
import json

import pytest

from jpcs_connect.core.exceptions import StoreUnavailableError
from jpcs_connect.store.blob_store import LocalDocumentStore, MemoryDocumentStore
from jpcs_connect.store.document_store import (
    ATTENDANCE,
    COLLECTIONS,
    EVENTS,
    USERS,
    DuplicateKeyError,
    InvalidQueryError,
    UnknownCollectionError,
    new_document_id,
    storage_key,
)


def run(coro):
    return asyncio.run(coro)


def test_initialize_creates_every_collection_empty(store):
    for collection in COLLECTIONS:
        assert run(store.get_all(collection)).count == 0


def test_initialize_keeps_existing_data(store):
    run(store.insert(EVENTS, {"name": "Assembly", "date": "2026-03-14"}))
    store.initialize()
    assert run(store.get_all(EVENTS)).count == 1


def test_insert_assigns_id_and_created_at(store):
    doc_id = run(store.insert(EVENTS, {"name": "Assembly", "id": "ignored"}))

    docs = run(store.get_all(EVENTS)).items
    assert len(docs) == 1
    assert docs[0].id == doc_id
    assert docs[0].get("id") == doc_id
    assert docs[0].get("name") == "Assembly"
    assert docs[0].get("createdAt")


def test_insert_keeps_caller_created_at(store):
    run(store.insert(EVENTS, {"name": "Old", "createdAt": "2020-01-01T00:00:00Z"}))
    assert run(store.get_all(EVENTS)).items[0].get("createdAt") == "2020-01-01T00:00:00Z"


def test_new_document_ids_are_distinct():
    ids = {new_document_id() for _ in range(200)}
    assert len(ids) == 200


def test_unknown_collection_is_rejected(store):
    with pytest.raises(UnknownCollectionError):
        run(store.get_all("faculty"))
    with pytest.raises(UnknownCollectionError):
        storage_key("faculty")


def test_storage_key_is_namespaced():
    assert storage_key(USERS) == "jpcs_users"


def test_update_merges_fields_and_keeps_id(store):
    doc_id = run(store.insert(USERS, {"studentId": "S1", "fullName": "Ana"}))
    run(store.update(USERS, doc_id, {"fullName": "Ana Cruz", "id": "other"}))

    doc = run(store.get_all(USERS)).items[0]
    assert doc.id == doc_id
    assert doc.get("studentId") == "S1"
    assert doc.get("fullName") == "Ana Cruz"


def test_update_of_missing_document_is_a_no_op(store):
    run(store.insert(USERS, {"studentId": "S1"}))
    run(store.update(USERS, "missing", {"studentId": "S2"}))
    assert [d.get("studentId") for d in run(store.get_all(USERS)).items] == ["S1"]


def test_delete_removes_only_that_document(store):
    a = run(store.insert(EVENTS, {"name": "A"}))
    run(store.insert(EVENTS, {"name": "B"}))
    run(store.delete(EVENTS, a))
    run(store.delete(EVENTS, "missing"))
    assert [d.get("name") for d in run(store.get_all(EVENTS)).items] == ["B"]


def test_upsert_replaces_whole_document(store):
    run(store.upsert(USERS, "uid-1", {"displayName": "Ana", "email": "a@x"}))
    run(store.upsert(USERS, "uid-1", {"displayName": "Ana C"}))

    docs = run(store.get_all(USERS)).items
    assert len(docs) == 1
    assert docs[0].id == "uid-1"
    assert docs[0].get("displayName") == "Ana C"
    assert docs[0].get("email") is None


def test_query_where_operators(store):
    for n in (1, 2, 3):
        run(store.insert(EVENTS, {"name": f"E{n}", "seats": n}))
    run(store.insert(EVENTS, {"name": "no seats"}))

    assert len(run(store.query_where(EVENTS, "seats", "==", 2)).items) == 1
    assert len(run(store.query_where(EVENTS, "seats", "!=", 2)).items) == 3
    assert [d.get("name") for d in run(store.query_where(EVENTS, "seats", ">", 1)).items] == ["E2", "E3"]
    assert [d.get("name") for d in run(store.query_where(EVENTS, "seats", "<", 2)).items] == ["E1"]
    assert run(store.query_where(EVENTS, "seats", "==", 9)).empty


def test_query_where_rejects_unknown_operator(store):
    with pytest.raises(InvalidQueryError):
        run(store.query_where(EVENTS, "seats", ">=", 1))


def test_query_ordered_desc_with_limit(store):
    for ts in ("2026-01-02", "2026-01-03", "2026-01-01"):
        run(store.insert(EVENTS, {"name": ts, "date": ts}))

    res = run(store.query_ordered(EVENTS, "date", "desc", limit=2))
    assert [d.get("date") for d in res.items] == ["2026-01-03", "2026-01-02"]


def test_query_ordered_puts_missing_values_last(store):
    run(store.insert(EVENTS, {"name": "undated"}))
    run(store.insert(EVENTS, {"name": "b", "date": "2026-02-01"}))
    run(store.insert(EVENTS, {"name": "a", "date": "2026-01-01"}))

    res = run(store.query_ordered(EVENTS, "date"))
    assert [d.get("name") for d in res.items] == ["a", "b", "undated"]


def test_query_ordered_zero_limit_means_all(store):
    for n in range(3):
        run(store.insert(EVENTS, {"name": str(n)}))
    assert len(run(store.query_ordered(EVENTS, "name", limit=0)).items) == 3


def test_query_ordered_rejects_bad_direction(store):
    with pytest.raises(InvalidQueryError):
        run(store.query_ordered(EVENTS, "date", "up"))


def test_unique_key_blocks_second_insert(store):
    run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "S1"}, unique_key="attendance:E1:S1"))
    with pytest.raises(DuplicateKeyError):
        run(store.insert(ATTENDANCE, {"eventId": "E1", "studentId": "S1"}, unique_key="attendance:E1:S1"))

    docs = run(store.get_all(ATTENDANCE)).items
    assert len(docs) == 1
    assert "__uniqueKey" not in docs[0].data


def test_update_moves_unique_key(store):
    doc_id = run(store.insert(ATTENDANCE, {"studentId": "S1"}, unique_key="attendance:E1:S1"))
    run(store.update(ATTENDANCE, doc_id, {"studentId": "S9"}, unique_key="attendance:E1:S9"))

    [doc] = run(store.get_all(ATTENDANCE)).items
    assert doc.get("studentId") == "S9"
    assert "__uniqueKey" not in doc.data

    run(store.insert(ATTENDANCE, {"studentId": "S1"}, unique_key="attendance:E1:S1"))
    with pytest.raises(DuplicateKeyError):
        run(store.insert(ATTENDANCE, {"studentId": "S9"}, unique_key="attendance:E1:S9"))


def test_update_refuses_unique_key_held_by_another_document(store):
    first = run(store.insert(ATTENDANCE, {"studentId": "S1"}, unique_key="attendance:E1:S1"))
    run(store.insert(ATTENDANCE, {"studentId": "S2"}, unique_key="attendance:E1:S2"))

    with pytest.raises(DuplicateKeyError):
        run(store.update(ATTENDANCE, first, {"studentId": "S2"}, unique_key="attendance:E1:S2"))
    assert run(store.query_where(ATTENDANCE, "id", "==", first)).items[0].get("studentId") == "S1"


def test_memory_store_defaults_to_no_latency():
    assert MemoryDocumentStore().latency == 0


def test_local_store_persists_between_instances(tmp_path):
    first = LocalDocumentStore(tmp_path, latency=0)
    first.initialize()
    doc_id = run(first.insert(EVENTS, {"name": "Assembly", "date": "2026-03-14"}))

    second = LocalDocumentStore(tmp_path, latency=0)
    docs = run(second.get_all(EVENTS)).items
    assert [d.id for d in docs] == [doc_id]
    assert json.loads((tmp_path / "jpcs_events.json").read_text(encoding="utf-8"))[0]["name"] == "Assembly"


def test_local_store_reports_corrupt_collection(tmp_path):
    store = LocalDocumentStore(tmp_path, latency=0)
    (tmp_path / "jpcs_events.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StoreUnavailableError):
        run(store.get_all(EVENTS))
