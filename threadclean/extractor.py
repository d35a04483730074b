"""
Conversation Extractor

Single entry point that turns a serialized agent thread into a
`ConversationRecord`: the flat, cleaned message history plus a markup-free
copy of the thread. Both outputs come from the same parse.

No exception crosses `extract_conversation`; failures are reported through
`success` / `error_message`.
"""

from __future__ import annotations

import structlog

from threadclean.kernel.errors import ReserializationError, ThreadCleanError
from threadclean.models import ConversationRecord, ThreadDocument
from threadclean.parsers.message_extractor import extract_message
from threadclean.parsers.thread_parser import parse_thread
from threadclean.reserializer import build_cleaned_document

logger = structlog.get_logger()


def _cleaned_document_or_original(document: ThreadDocument, serialized_json: str) -> str:
    try:
        return build_cleaned_document(document)
    except ReserializationError as exc:
        logger.warning(
            "Cleaned thread rebuild failed, returning original JSON",
            **exc.to_public_dict(),
        )
        return serialized_json


def extract_conversation(serialized_json: str | None) -> ConversationRecord:
    """
    Extract the conversation history from a serialized thread.

    Args:
        serialized_json: Thread JSON shaped like `{"storeState": {"messages": [...]}}`

    Returns:
        ConversationRecord; check `success` before reading the other fields
    """
    try:
        document = parse_thread(serialized_json)
    except ThreadCleanError as exc:
        logger.warning("Thread extraction failed", **exc.to_public_dict())
        return ConversationRecord.failure(exc.message)

    messages = [extract_message(message) for message in document.messages]
    record = ConversationRecord(
        success=True,
        messages=messages,
        cleaned_document_json=_cleaned_document_or_original(document, serialized_json),
    )

    logger.info(
        "Thread extracted",
        conversation_count=record.conversation_count,
        has_assistant_response=bool(record.last_assistant_response),
    )
    return record
