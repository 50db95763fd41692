"""Document batch body builder.

A batch is a JSON array of operations::

    [{"type": "add", "id": "1", "fields": {"name": "fritters"}},
     {"type": "delete", "id": "2"}]

Date and datetime field values are sent as integer epoch seconds so they can
be stored in numeric index fields and ranked on.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any, Iterable, Mapping


def to_epoch_seconds(value: date | datetime) -> int:
    """Convert a date or datetime to epoch seconds.

    Naive datetimes and plain dates are taken as UTC.
    """
    if isinstance(value, datetime):
        moment = value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
    else:
        moment = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    return int(moment.timestamp())


def normalize_field_value(value: Any) -> Any:
    """Prepare one field value for the batch body."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return to_epoch_seconds(value)
    return value


def add_operation(doc_id: object, fields: Mapping[str, Any]) -> dict[str, Any]:
    """Build an ``add`` operation; adding an existing id replaces the document."""
    return {
        "type": "add",
        "id": str(doc_id),
        "fields": {str(name): normalize_field_value(value) for name, value in fields.items()},
    }


def delete_operation(doc_id: object) -> dict[str, Any]:
    """Build a ``delete`` operation."""
    return {"type": "delete", "id": str(doc_id)}


def encode_batch(operations: Iterable[Mapping[str, Any]]) -> bytes:
    """Serialize operations into a UTF-8 JSON array."""
    return json.dumps(list(operations), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
