# persistence/codec.py

"""
JSON codec for the stored todo record.

The record is a bare JSON array of task objects (no envelope, no version):

    [{"id": "...", "text": "...", "isDone": false, "isEditing": false, "order": 1}, ...]

decode_tasks() is all-or-nothing: one bad entry rejects the whole payload.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.models import Task, TodoList


class TaskPayloadError(ValueError):
    """Stored or received payload is not a valid todo record."""


# field -> accepted python types after json.loads
_SCHEMA: dict[str, tuple[type, ...]] = {
    "id": (str,),
    "text": (str,),
    "isDone": (bool,),
    "isEditing": (bool,),
    "order": (int, float),
}


def _check_entry(idx: int, entry: Any) -> None:
    if not isinstance(entry, dict):
        raise TaskPayloadError(f"entry #{idx} is not an object")

    for name, types in _SCHEMA.items():
        if name not in entry:
            raise TaskPayloadError(f"entry #{idx} is missing '{name}'")
        value = entry[name]
        # bool is an int subclass; only the flag fields may be booleans.
        if isinstance(value, bool) and bool not in types:
            raise TaskPayloadError(f"entry #{idx} field '{name}' has wrong type")
        if not isinstance(value, types):
            raise TaskPayloadError(f"entry #{idx} field '{name}' has wrong type")

    order = entry["order"]
    if isinstance(order, float) and not order.is_integer():
        raise TaskPayloadError(f"entry #{idx} field 'order' is not an integer")


def validate_payload(data: Any) -> TodoList:
    """Validate already-parsed JSON and build the task tuple."""
    if not isinstance(data, list):
        raise TaskPayloadError("payload is not an array")

    for idx, entry in enumerate(data):
        _check_entry(idx, entry)

    return tuple(Task.from_dict(entry) for entry in data)


def decode_tasks(raw: str | None) -> TodoList:
    """
    Parse + validate a stored value.

    Raises TaskPayloadError on malformed JSON, wrong shape or wrong field types.
    None (nothing stored) decodes to an empty collection.
    """
    if raw is None:
        return ()
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise TaskPayloadError(f"payload is not valid JSON: {e}") from e
    return validate_payload(data)


def encode_tasks(tasks: TodoList) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)
