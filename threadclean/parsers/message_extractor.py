"""
Message Classifier & Content Extractor

Turns a `RawMessage` into an `ExtractedMessage`. The text payload is the
last content entry carrying a `text` field; how it is cleaned depends on
the message role:

- assistant: isolate the embedded markup payload, text otherwise untouched
- user / other: escape normalization and whitespace collapsing only, so
  natural-language input is never read as markup
"""

from __future__ import annotations

from collections.abc import Callable

from threadclean.kernel.time import parse_iso8601_or_none
from threadclean.models import ExtractedMessage, RawMessage, Role
from threadclean.text.escapes import normalize_plain_text
from threadclean.text.markup import has_markup_root, isolate_markup


def _extract_assistant(text: str) -> str:
    return isolate_markup(text) if text else ""


EXTRACTION_POLICIES: dict[Role, Callable[[str], str]] = {
    Role.USER: normalize_plain_text,
    Role.ASSISTANT: _extract_assistant,
    Role.OTHER: normalize_plain_text,
}


def select_text(message: RawMessage) -> str:
    """Text payload of a message; the last content entry with text wins."""
    selected = ""
    for content in message.contents:
        if content.has_text:
            selected = content.text or ""
    return selected


def extract_message(message: RawMessage) -> ExtractedMessage:
    role = message.kind
    content = EXTRACTION_POLICIES[role](select_text(message))

    return ExtractedMessage(
        role=role,
        content=content,
        author_name=message.author_name or "",
        created_at=parse_iso8601_or_none(message.created_at),
        is_html=role is Role.ASSISTANT and has_markup_root(content),
    )
