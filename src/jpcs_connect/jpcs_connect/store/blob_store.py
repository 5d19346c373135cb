"""Document stores that keep each collection as one serialized JSON blob.

This mirrors browser local storage: a flat key/value space where every
collection lives under a namespaced key (``jpcs_<collection>``) as a JSON
array. Reads and writes are synchronous; the public API is asynchronous with
a fixed artificial latency so callers behave as they would against a remote
store.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from ..common.datetime_utils import now_utc, to_iso
from ..core.constants import STORE_LATENCY_SECONDS
from ..core.exceptions import StoreUnavailableError
from .document_store import (
    COLLECTIONS,
    Document,
    DuplicateKeyError,
    QueryResult,
    Snapshot,
    filter_documents,
    new_document_id,
    order_documents,
    storage_key,
)

logger = logging.getLogger(__name__)

UNIQUE_KEY_FIELD = "__uniqueKey"


def _public(raw: dict[str, Any]) -> Document:
    data = {k: v for k, v in raw.items() if k != UNIQUE_KEY_FIELD}
    return Document(id=str(raw.get("id")), data=data)


class BlobDocumentStore:
    """Collection operations over ``_get_item`` / ``_set_item`` blobs."""

    latency: float = STORE_LATENCY_SECONDS

    def __init__(self, *, latency: Optional[float] = None):
        if latency is not None:
            self.latency = float(latency)

    def _get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def _set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def initialize(self) -> None:
        """Create every known collection that does not exist yet."""
        for collection in COLLECTIONS:
            key = storage_key(collection)
            if self._get_item(key) is None:
                self._set_item(key, "[]")

    async def _pause(self) -> None:
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    def _load(self, collection: str) -> list[dict[str, Any]]:
        key = storage_key(collection)
        self.initialize()
        blob = self._get_item(key)
        try:
            data = json.loads(blob or "[]")
        except ValueError as e:
            raise StoreUnavailableError(f"Collection {collection} is corrupted") from e
        if not isinstance(data, list):
            raise StoreUnavailableError(f"Collection {collection} is corrupted")
        return data

    def _save(self, collection: str, data: list[dict[str, Any]]) -> None:
        self._set_item(storage_key(collection), json.dumps(data))

    async def get_all(self, collection: str) -> Snapshot:
        await self._pause()
        return Snapshot(items=[_public(r) for r in self._load(collection)])

    async def insert(self, collection: str, fields: dict[str, Any], *, unique_key: Optional[str] = None) -> str:
        await self._pause()
        data = self._load(collection)

        if unique_key is not None and any(r.get(UNIQUE_KEY_FIELD) == unique_key for r in data):
            raise DuplicateKeyError(f"{collection}: {unique_key} already exists")

        taken = {r.get("id") for r in data}
        doc_id = new_document_id()
        while doc_id in taken:
            doc_id = new_document_id()

        record = {**fields, "id": doc_id}
        record.setdefault("createdAt", to_iso(now_utc()))
        if unique_key is not None:
            record[UNIQUE_KEY_FIELD] = unique_key

        data.append(record)
        self._save(collection, data)
        return doc_id

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        *,
        unique_key: Optional[str] = None,
    ) -> None:
        await self._pause()
        data = self._load(collection)
        if unique_key is not None and any(
            r.get(UNIQUE_KEY_FIELD) == unique_key and r.get("id") != doc_id for r in data
        ):
            raise DuplicateKeyError(f"{collection}: {unique_key} already exists")

        for i, r in enumerate(data):
            if r.get("id") == doc_id:
                data[i] = {**r, **fields, "id": doc_id}
                if unique_key is not None:
                    data[i][UNIQUE_KEY_FIELD] = unique_key
                self._save(collection, data)
                return
        logger.debug("update skipped, %s/%s not found", collection, doc_id)

    async def delete(self, collection: str, doc_id: str) -> None:
        await self._pause()
        data = self._load(collection)
        kept = [r for r in data if r.get("id") != doc_id]
        if len(kept) != len(data):
            self._save(collection, kept)

    async def upsert(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        await self._pause()
        data = self._load(collection)
        record = {**fields, "id": doc_id}
        for i, r in enumerate(data):
            if r.get("id") == doc_id:
                data[i] = record
                break
        else:
            data.append(record)
        self._save(collection, data)

    async def query_where(self, collection: str, field_name: str, operator: str, value: Any) -> QueryResult:
        await self._pause()
        docs = [_public(r) for r in self._load(collection)]
        return QueryResult(items=filter_documents(docs, field_name, operator, value))

    async def query_ordered(
        self,
        collection: str,
        field_name: str,
        direction: str = "asc",
        limit: Optional[int] = None,
    ) -> QueryResult:
        await self._pause()
        docs = [_public(r) for r in self._load(collection)]
        return QueryResult(items=order_documents(docs, field_name, direction, limit))


class MemoryDocumentStore(BlobDocumentStore):
    """Process-local store used by tests. No artificial latency."""

    latency = 0.0

    def __init__(self, *, latency: Optional[float] = None):
        super().__init__(latency=latency)
        self._items: dict[str, str] = {}

    def _get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def _set_item(self, key: str, value: str) -> None:
        self._items[key] = value


class LocalDocumentStore(BlobDocumentStore):
    """One ``<key>.json`` file per collection inside ``directory``."""

    def __init__(self, directory: str | Path, *, latency: Optional[float] = None):
        super().__init__(latency=latency)
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def _get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreUnavailableError(f"Cannot read {path}") from e

    def _set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(value, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise StoreUnavailableError(f"Cannot write {path}") from e
