"""
Thread Compaction

Shrinks a serialized thread before it is handed back to a model, to keep
prompt tokens down:

- user messages keep only the question, without the context blocks the
  agents append to it
- assistant messages are reduced to bounded plain text
- content entries without text are dropped

Compaction is best-effort: anything that is not a thread document comes
back unchanged.
"""

from __future__ import annotations

import json
import re
from typing import Any

import structlog

from threadclean.config import Settings, get_settings
from threadclean.kernel.serialization import json_dumps_compact, json_loads
from threadclean.models import Role

logger = structlog.get_logger()

_COPIED_FIELDS = ("role", "authorName", "createdAt", "messageId")
_CONTENT_TYPE_KEYS = ("$type", "contentType")

_DECLARATION_RE = re.compile(r"<!DOCTYPE[^>]*>|<\?xml[^>]*\?>", re.IGNORECASE)
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")

_ENTITIES = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)


def _truncate(text: str, limit: int) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def extract_user_question(text: str, settings: Settings) -> str:
    """Keep only the user's question from an agent-augmented user message."""
    marker = settings.compaction_question_marker
    if marker and marker in text:
        question = text[text.index(marker) + len(marker):]
        end = question.find("\n\n")
        if end > 0:
            question = question[:end]
        return question.strip()

    context_marker = settings.compaction_context_marker
    if context_marker:
        index = text.find(context_marker)
        if index > 0:
            return text[:index].strip()

    return _truncate(text, settings.compaction_user_max_chars).strip()


def html_to_plain_text(text: str, settings: Settings) -> str:
    """Bounded plain-text rendering of an assistant reply."""
    if "<" not in text and ">" not in text:
        return text

    text = _DECLARATION_RE.sub("", text)
    text = _SCRIPT_STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)

    return _truncate(text.strip(), settings.compaction_assistant_max_chars)


def _compact_text(role: Role, text: str, settings: Settings) -> str:
    if role is Role.USER:
        return extract_user_question(text, settings)
    if role is Role.ASSISTANT:
        return html_to_plain_text(text, settings)
    return text


def _compact_message(message: dict[str, Any], settings: Settings) -> dict[str, Any]:
    role = Role.from_raw(message["role"])
    compacted = {field: message[field] for field in _COPIED_FIELDS if field in message}

    contents = message.get("contents")
    if isinstance(contents, list):
        compacted_contents = []
        for content in contents:
            if not isinstance(content, dict) or "text" not in content:
                continue
            entry = {key: content[key] for key in _CONTENT_TYPE_KEYS if key in content}
            entry["text"] = _compact_text(role, content["text"] or "", settings)
            compacted_contents.append(entry)
        compacted["contents"] = compacted_contents

    return compacted


def compact_thread(serialized_json: str, settings: Settings | None = None) -> str:
    """
    Compact a serialized thread for token reduction.

    Args:
        serialized_json: Thread JSON shaped like `{"storeState": {"messages": [...]}}`
        settings: Limits and markers; defaults to `get_settings()`

    Returns:
        Compacted thread JSON, or the input unchanged when it cannot be compacted
    """
    settings = settings or get_settings()

    try:
        payload = json_loads(serialized_json)
    except (TypeError, RecursionError, json.JSONDecodeError) as exc:
        logger.warning("Thread compaction skipped, input is not JSON", error=str(exc))
        return serialized_json

    store_state = payload.get("storeState") if isinstance(payload, dict) else None
    messages = store_state.get("messages") if isinstance(store_state, dict) else None
    if not isinstance(messages, list):
        return serialized_json

    try:
        compacted = [
            _compact_message(message, settings)
            for message in messages
            if isinstance(message, dict) and message.get("role") is not None
        ]
        return json_dumps_compact({"storeState": {"messages": compacted}})
    except (TypeError, ValueError, AttributeError, RecursionError) as exc:
        logger.warning("Thread compaction failed, keeping original", error=str(exc))
        return serialized_json
