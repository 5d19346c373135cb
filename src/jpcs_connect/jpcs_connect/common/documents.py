from __future__ import annotations

from typing import Any

from ..core.exceptions import DocumentShapeError
from ..store.document_store import Document


def require_fields(doc: Document, entity: str, *names: str) -> None:
    missing = [n for n in names if doc.data.get(n) in (None, "")]
    if missing:
        raise DocumentShapeError(f"{entity} {doc.id} is missing {', '.join(missing)}")


def as_text(value: Any) -> str:
    return "" if value is None else str(value)


def as_int(doc: Document, name: str, default: int = 0) -> int:
    value = doc.data.get(name, default)
    try:
        return int(value or 0)
    except (TypeError, ValueError) as e:
        raise DocumentShapeError(f"{doc.id}: {name} must be a number") from e
