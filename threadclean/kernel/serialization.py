from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any


def to_jsonable(value: Any) -> Any:
    """Coerce the value types we emit into JSON-compatible primitives.

    This is intentionally explicit (and limited). If you need to serialize
    a new type, add a branch and tests.
    """
    if value is None:
        return None

    if isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, (datetime, date)):
        return value.isoformat()

    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for (k, v) in value.items()}

    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]

    raise TypeError(f"Unsupported type for JSON serialization: {type(value)!r}")


def json_dumps_compact(value: Any) -> str:
    """Compact JSON that keeps key insertion order and non-ASCII text as-is."""
    return json.dumps(
        to_jsonable(value),
        ensure_ascii=False,
        separators=(",", ":"),
    )


def json_loads(value: str) -> Any:
    return json.loads(value)
