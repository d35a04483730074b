"""
Thread Parser

Decodes a serialized agent thread into a `ThreadDocument`. The only path
consumed is `storeState.messages`; every other field is ignored so newer
runtime versions keep parsing.
"""

from __future__ import annotations

import json

import structlog
from pydantic import ValidationError

from threadclean.kernel.errors import EmptyInputError, ParseError
from threadclean.kernel.serialization import json_loads
from threadclean.models import ThreadDocument

logger = structlog.get_logger()


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid')}" if location else error.get("msg", "invalid"))
    return "; ".join(parts) or str(exc)


def parse_thread(serialized_json: str | None) -> ThreadDocument:
    """
    Parse a serialized thread.

    Args:
        serialized_json: JSON text shaped like `{"storeState": {"messages": [...]}}`

    Returns:
        The decoded thread, messages in their original order

    Raises:
        EmptyInputError: input is None, empty, or whitespace
        ParseError: invalid JSON or the expected nested structure is missing
    """
    if serialized_json is None or not serialized_json.strip():
        raise EmptyInputError()

    try:
        payload = json_loads(serialized_json)
    except json.JSONDecodeError as exc:
        raise ParseError(
            message=f"Invalid thread JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            meta={"position": exc.pos},
        ) from exc
    except RecursionError as exc:
        raise ParseError(message="Invalid thread JSON: nesting too deep") from exc

    if not isinstance(payload, dict):
        raise ParseError(
            message=f"Invalid thread JSON: expected an object at the top level, got {type(payload).__name__}",
        )

    store_state = payload.get("storeState")
    if not isinstance(store_state, dict):
        raise ParseError(message="Invalid thread JSON: missing 'storeState' object")
    if not isinstance(store_state.get("messages"), list):
        raise ParseError(message="Invalid thread JSON: missing 'storeState.messages' array")

    try:
        document = ThreadDocument.model_validate(payload)
    except ValidationError as exc:
        raise ParseError(
            message=f"Invalid thread JSON: {_describe_validation_error(exc)}",
            meta={"error_count": exc.error_count()},
        ) from exc

    logger.debug("Parsed thread", message_count=len(document.messages))
    return document
