"""
Thread Parsers

Decode the persisted agent thread and classify its messages:
- Thread parsing: `storeState.messages` into a `ThreadDocument`
- Message extraction: role-dependent content policy per message
"""

from .message_extractor import EXTRACTION_POLICIES, extract_message, select_text
from .thread_parser import parse_thread

__all__ = [
    "parse_thread",
    "EXTRACTION_POLICIES",
    "extract_message",
    "select_text",
]
