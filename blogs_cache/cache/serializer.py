"""
JSON serialization with temporal value support.

``datetime`` and ``date`` values nested at any depth are written as
``{"__type": ..., "value": <ISO-8601>}`` and restored on read. A mapping of
the caller's own that carries a ``__type`` key is written as
``{"__type": "object", "value": {...}}`` so it is never mistaken for a tag.
"""

import json
from datetime import date, datetime
from typing import Any

TYPE_MARKER = "__type"
VALUE_FIELD = "value"
DATETIME_TYPE = "datetime"
DATE_TYPE = "date"
OBJECT_TYPE = "object"


def _tag(value: Any) -> Any:
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return {TYPE_MARKER: DATETIME_TYPE, VALUE_FIELD: value.isoformat()}
    if isinstance(value, date):
        return {TYPE_MARKER: DATE_TYPE, VALUE_FIELD: value.isoformat()}
    if isinstance(value, (list, tuple)):
        return [_tag(item) for item in value]
    if isinstance(value, dict):
        tagged = {key: _tag(item) for key, item in value.items()}
        if TYPE_MARKER in value:
            return {TYPE_MARKER: OBJECT_TYPE, VALUE_FIELD: tagged}
        return tagged
    return value


def _restore(value: Any) -> Any:
    if isinstance(value, list):
        return [_restore(item) for item in value]
    if not isinstance(value, dict):
        return value

    # Every mapping with a marker was written by _tag
    if TYPE_MARKER in value:
        marker = value[TYPE_MARKER]
        if marker == OBJECT_TYPE:
            return {key: _restore(item) for key, item in value[VALUE_FIELD].items()}
        if marker == DATETIME_TYPE:
            return datetime.fromisoformat(value[VALUE_FIELD])
        if marker == DATE_TYPE:
            return date.fromisoformat(value[VALUE_FIELD])
        raise ValueError(f"Unknown serialized type: {marker!r}")

    return {key: _restore(item) for key, item in value.items()}


def serialize(value: Any) -> str:
    """Serialize a value to a JSON string."""
    return json.dumps(_tag(value))


def deserialize(text: str) -> Any:
    """Deserialize a JSON string produced by :func:`serialize`."""
    return _restore(json.loads(text))
