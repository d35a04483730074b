"""
Thread Models

Input side: the persisted agent thread (`storeState.messages[]`).
Output side: the flat conversation record returned to callers.

Both sides use lower-camel-case field names on the wire.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class Role(str, Enum):
    """Closed set of message roles the extraction policy distinguishes."""

    USER = "user"
    ASSISTANT = "assistant"
    OTHER = "other"

    @classmethod
    def from_raw(cls, value: str | None) -> "Role":
        if value == cls.USER.value:
            return cls.USER
        if value == cls.ASSISTANT.value:
            return cls.ASSISTANT
        return cls.OTHER


class _ThreadModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# INPUT
# =============================================================================


class RawContent(_ThreadModel):
    """One entry of a message's `contents`; only `text` is consumed."""

    content_type: str | None = Field(
        default=None,
        validation_alias=AliasChoices("contentType", "$type", "content_type"),
        serialization_alias="contentType",
    )
    text: str | None = None

    @property
    def has_text(self) -> bool:
        return "text" in self.model_fields_set


class RawMessage(_ThreadModel):
    """A persisted thread message.

    `role` keeps the raw string so the cleaned document can copy it verbatim;
    `kind` is its classification.
    """

    role: str
    author_name: str | None = None
    created_at: str | None = None
    message_id: str | None = None
    contents: list[RawContent] = Field(default_factory=list)

    @property
    def kind(self) -> Role:
        return Role.from_raw(self.role)


class StoreState(_ThreadModel):
    messages: list[RawMessage]


class ThreadDocument(_ThreadModel):
    store_state: StoreState

    @property
    def messages(self) -> list[RawMessage]:
        return self.store_state.messages


# =============================================================================
# OUTPUT
# =============================================================================


class ExtractedMessage(_ThreadModel):
    """A single message of the flat conversation history."""

    role: Role
    content: str = ""
    author_name: str = ""
    created_at: datetime | None = None
    is_html: bool = False


class ConversationRecord(_ThreadModel):
    """Result of extracting a thread.

    Callers must check `success` before relying on any other field.
    """

    success: bool
    error_message: str = ""
    messages: list[ExtractedMessage] = Field(default_factory=list)
    cleaned_document_json: str = ""

    @computed_field(alias="conversationCount")
    @property
    def conversation_count(self) -> int:
        return len(self.messages)

    @computed_field(alias="lastAssistantResponse")
    @property
    def last_assistant_response(self) -> str:
        for message in reversed(self.messages):
            if message.role is Role.ASSISTANT:
                return message.content
        return ""

    @classmethod
    def failure(cls, error_message: str) -> "ConversationRecord":
        return cls(success=False, error_message=error_message, messages=[])

    def to_json(self) -> str:
        """Compact camelCase JSON, as stored by the calling endpoints."""
        return self.model_dump_json(by_alias=True)
