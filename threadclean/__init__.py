"""
threadclean

Extraction and sanitization of persisted AI chat threads:
- Flat conversation history with role-aware content extraction
- Markup-free re-serialization of the thread
- Token-reduction compaction of a thread
"""

from .compaction import compact_thread
from .extractor import extract_conversation
from .kernel.errors import EmptyInputError, ParseError, ReserializationError, ThreadCleanError
from .models import ConversationRecord, ExtractedMessage, Role, ThreadDocument
from .reserializer import build_cleaned_document, clean_serialized_thread

__all__ = [
    # Engine
    "extract_conversation",
    "clean_serialized_thread",
    "build_cleaned_document",
    "compact_thread",
    # Models
    "ConversationRecord",
    "ExtractedMessage",
    "Role",
    "ThreadDocument",
    # Errors
    "ThreadCleanError",
    "EmptyInputError",
    "ParseError",
    "ReserializationError",
]
