"""Document store contract shared by every backend.

A document store keeps named collections of JSON-like documents. Each
document carries a store-assigned ``id``. All operations are coroutines so
that a local backend and a remote database can be swapped without changing
the calling code.
"""
from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Protocol, Sequence

from ..core.constants import STORAGE_KEY_PREFIX
from ..core.exceptions import DomainError

USERS = "users"
EVENTS = "events"
ATTENDANCE = "attendance"
REGISTRATIONS = "registrations"
ANNOUNCEMENTS = "announcements"
CUSTOM_BADGES = "customBadges"

COLLECTIONS = (USERS, EVENTS, ATTENDANCE, REGISTRATIONS, ANNOUNCEMENTS, CUSTOM_BADGES)

OPERATORS = ("==", "!=", ">", "<")
DIRECTIONS = ("asc", "desc")

_ALPHABET = string.digits + string.ascii_lowercase


class InvalidQueryError(ValueError):
    """Unsupported operator or direction, or values that cannot be ordered."""


class UnknownCollectionError(ValueError):
    """The collection name is not part of the store namespace."""


class DuplicateKeyError(DomainError):
    """Another document of the collection already holds the unique key."""


@dataclass(frozen=True)
class Document:
    id: str
    data: dict[str, Any]

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)


@dataclass(frozen=True)
class Snapshot:
    items: list[Document] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class QueryResult:
    items: list[Document] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.items


class DocumentStore(Protocol):
    async def get_all(self, collection: str) -> Snapshot:
        raise NotImplementedError

    async def insert(self, collection: str, fields: dict[str, Any], *, unique_key: Optional[str] = None) -> str:
        """Append a document and return its new id.

        Raises DuplicateKeyError when ``unique_key`` is already taken in the
        collection; nothing is written in that case.
        """

        raise NotImplementedError

    async def update(
        self,
        collection: str,
        doc_id: str,
        fields: dict[str, Any],
        *,
        unique_key: Optional[str] = None,
    ) -> None:
        """Merge fields into the document. Missing documents are ignored.

        A ``unique_key`` replaces the document's key; DuplicateKeyError when
        another document holds it.
        """

        raise NotImplementedError

    async def delete(self, collection: str, doc_id: str) -> None:
        raise NotImplementedError

    async def upsert(self, collection: str, doc_id: str, fields: dict[str, Any]) -> None:
        raise NotImplementedError

    async def query_where(self, collection: str, field_name: str, operator: str, value: Any) -> QueryResult:
        raise NotImplementedError

    async def query_ordered(
        self,
        collection: str,
        field_name: str,
        direction: str = "asc",
        limit: Optional[int] = None,
    ) -> QueryResult:
        raise NotImplementedError


def require_collection(collection: str) -> str:
    if collection not in COLLECTIONS:
        raise UnknownCollectionError(f"Unknown collection: {collection!r}")
    return collection


def storage_key(collection: str) -> str:
    return STORAGE_KEY_PREFIX + require_collection(collection)


def new_document_id() -> str:
    """Time-based base36 prefix followed by a random base36 suffix."""
    millis = int(time.time() * 1000)
    prefix = ""
    while millis:
        millis, rem = divmod(millis, 36)
        prefix = _ALPHABET[rem] + prefix
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(11))
    return prefix + suffix


def _matches(stored: Any, operator: str, value: Any) -> bool:
    if operator == "==":
        return stored == value
    if operator == "!=":
        return stored != value
    if stored is None or value is None:
        return False
    try:
        if operator == ">":
            return stored > value
        return stored < value
    except TypeError:
        return False


def filter_documents(docs: Iterable[Document], field_name: str, operator: str, value: Any) -> list[Document]:
    if operator not in OPERATORS:
        raise InvalidQueryError(f"Unsupported operator: {operator!r}")
    return [d for d in docs if _matches(d.data.get(field_name), operator, value)]


def order_documents(
    docs: Sequence[Document],
    field_name: str,
    direction: str = "asc",
    limit: Optional[int] = None,
) -> list[Document]:
    if direction not in DIRECTIONS:
        raise InvalidQueryError(f"Unsupported direction: {direction!r}")
    if limit is not None and limit < 0:
        raise InvalidQueryError("limit must not be negative")

    present = [d for d in docs if d.data.get(field_name) is not None]
    missing = [d for d in docs if d.data.get(field_name) is None]
    try:
        ordered = sorted(present, key=lambda d: d.data[field_name], reverse=direction == "desc")
    except TypeError as e:
        raise InvalidQueryError(f"Field {field_name!r} holds values that cannot be ordered") from e

    ordered.extend(missing)
    return ordered[:limit] if limit else ordered
