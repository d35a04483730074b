"""
Thread Re-serializer

Rebuilds the `{"storeState": {"messages": [...]}}` shape with every content
`text` replaced by its stripped plain-text form. Cleaning is best-effort: a
failure here must never prevent the caller from persisting the thread.
"""

from __future__ import annotations

from typing import Any

import structlog

from threadclean.kernel.errors import ReserializationError, ThreadCleanError
from threadclean.kernel.serialization import json_dumps_compact
from threadclean.models import RawContent, RawMessage, ThreadDocument
from threadclean.parsers.thread_parser import parse_thread
from threadclean.text.markup import strip_markup

logger = structlog.get_logger()

# Scalar message fields copied verbatim when present in the input.
_MESSAGE_FIELDS = (
    ("role", "role"),
    ("author_name", "authorName"),
    ("created_at", "createdAt"),
    ("message_id", "messageId"),
)


def _clean_content(content: RawContent) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    if "content_type" in content.model_fields_set:
        cleaned["contentType"] = content.content_type
    if content.has_text:
        cleaned["text"] = strip_markup(content.text or "")
    return cleaned


def _clean_message(message: RawMessage) -> dict[str, Any]:
    present = message.model_fields_set
    cleaned: dict[str, Any] = {
        wire_name: getattr(message, field_name)
        for field_name, wire_name in _MESSAGE_FIELDS
        if field_name in present
    }
    if "contents" in present:
        cleaned["contents"] = [_clean_content(content) for content in message.contents]
    return cleaned


def build_cleaned_document(document: ThreadDocument) -> str:
    """
    Serialize a markup-free copy of a parsed thread.

    Raises:
        ReserializationError: the cleaned document could not be built
    """
    try:
        messages = [_clean_message(message) for message in document.messages]
        return json_dumps_compact({"storeState": {"messages": messages}})
    except (TypeError, ValueError) as exc:
        raise ReserializationError(
            message=f"Cleaned thread could not be rebuilt: {exc}",
        ) from exc


def clean_serialized_thread(serialized_json: str) -> str:
    """Markup-free copy of a serialized thread, or the input unchanged on failure."""
    try:
        return build_cleaned_document(parse_thread(serialized_json))
    except ThreadCleanError as exc:
        logger.warning(
            "Thread cleaning failed, keeping original",
            **exc.to_public_dict(),
        )
        return serialized_json
