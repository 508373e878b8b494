from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError

from ..core.exceptions import ConflictError, ValidationError


def to_object_id(value: str, *, entity: str = "record") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise ValidationError(f"Invalid {entity} ID")


def id_str(doc: Mapping[str, Any]) -> str:
    return str(doc["_id"])


def without_id(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in doc.items() if k not in {"_id", "id"}}


def optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


@contextmanager
def translate_duplicate_key(message: str) -> Iterator[None]:
    """Map unique-index violations to ConflictError with a readable message."""
    try:
        yield
    except DuplicateKeyError:
        raise ConflictError(message)
