from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import mysql.connector
from mysql.connector import errorcode

from ..common.datetime_utils import now_utc, to_iso
from ..core.exceptions import StoreUnavailableError
from ..database.connection import ConnectionFactory
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .document_store import (
    Document,
    DuplicateKeyError,
    QueryResult,
    Snapshot,
    filter_documents,
    new_document_id,
    order_documents,
    require_collection,
)

logger = logging.getLogger(__name__)


def _to_document(row: dict) -> Document:
    body = row["body"]
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    data = json.loads(body) if isinstance(body, str) else dict(body)
    data["id"] = row["doc_id"]
    return Document(id=row["doc_id"], data=data)


class MySQLDocumentStore:
    """Document store backed by the ``documents`` table.

    Blocking connector calls run on a worker thread. Unique keys are enforced
    by the ``(collection, unique_key)`` index, so concurrent inserts of the
    same key cannot both succeed.
    """

    def __init__(self, conn_factory: ConnectionFactory):
        self._conn_factory = conn_factory

    async def _run(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except mysql.connector.Error as e:
            logger.error("Document store query failed: %s", e)
            raise StoreUnavailableError(str(e)) from e

    def _select_all(self, collection: str) -> list[Document]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT doc_id, body FROM documents WHERE collection=%s ORDER BY seq ASC",
                (collection,),
            )
            return [_to_document(r) for r in fetchall(cur)]

    def _insert(self, collection: str, fields: dict[str, Any], unique_key: Optional[str]) -> str:
        doc_id = new_document_id()
        body = {**fields, "id": doc_id}
        body.setdefault("createdAt", to_iso(now_utc()))
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO documents(collection, doc_id, unique_key, body) VALUES(%s,%s,%s,%s)",
                    (collection, doc_id, unique_key, json.dumps(body)),
                )
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY and unique_key is not None:
                raise DuplicateKeyError(f"{collection}: {unique_key} already exists") from e
            raise
        return doc_id

    def _update(self, collection: str, doc_id: str, fields: dict[str, Any], unique_key: Optional[str]) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT doc_id, body FROM documents WHERE collection=%s AND doc_id=%s FOR UPDATE",
                    (collection, doc_id),
                )
                row = fetchone(cur)
                if not row:
                    return
                merged = json.dumps({**_to_document(row).data, **fields, "id": doc_id})
                if unique_key is None:
                    cur.execute(
                        "UPDATE documents SET body=%s WHERE collection=%s AND doc_id=%s",
                        (merged, collection, doc_id),
                    )
                else:
                    cur.execute(
                        "UPDATE documents SET body=%s, unique_key=%s WHERE collection=%s AND doc_id=%s",
                        (merged, unique_key, collection, doc_id),
                    )
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY and unique_key is not None:
                raise DuplicateKeyError(f"{collection}: {unique_key} already exists") from e
            raise

    def _delete(self, collection: str, doc_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM documents WHERE collection=%s AND doc_id=%s", (collection, doc_id))

    def _upsert(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        body = {**fields, "id": doc_id}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO documents(collection, doc_id, body) VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE body=VALUES(body), unique_key=NULL
                """,
                (collection, doc_id, json.dumps(body)),
            )

    async def get_all(self, collection: str) -> Snapshot:
        require_collection(collection)
        return Snapshot(items=await self._run(self._select_all, collection))

    async def insert(self, collection: str, fields: dict[str, Any], *, unique_key: Optional[str] = None) -> str:
        require_collection(collection)
        return await self._run(self._insert, collection, dict(fields), unique_key)

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        *,
        unique_key: Optional[str] = None,
    ) -> None:
        require_collection(collection)
        await self._run(self._update, collection, doc_id, dict(fields), unique_key)

    async def delete(self, collection: str, doc_id: str) -> None:
        require_collection(collection)
        await self._run(self._delete, collection, doc_id)

    async def upsert(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        require_collection(collection)
        await self._run(self._upsert, collection, doc_id, dict(fields))

    async def query_where(self, collection: str, field_name: str, operator: str, value: Any) -> QueryResult:
        docs = (await self.get_all(collection)).items
        return QueryResult(items=filter_documents(docs, field_name, operator, value))

    async def query_ordered(
        self,
        collection: str,
        field_name: str,
        direction: str = "asc",
        limit: Optional[int] = None,
    ) -> QueryResult:
        docs = (await self.get_all(collection)).items
        return QueryResult(items=order_documents(docs, field_name, direction, limit))
