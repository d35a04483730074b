from __future__ import annotations

import re
from typing import Any


_ERROR_CODE_RE = re.compile(r"^[a-z][a-z0-9_]*(\.[a-z][a-z0-9_]*)*$")


class ThreadCleanError(Exception):
    """Base typed error for thread extraction.

    - Stable `code` for programmatic handling by callers.
    - Human-readable `message` that ends up in `ConversationRecord.error_message`.
    - Optional `meta` payload for debugging.
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        meta: dict[str, Any] | None = None,
    ) -> None:
        if not _ERROR_CODE_RE.fullmatch(code):
            raise ValueError(
                "Invalid error code. Expected dot-separated lowercase tokens, "
                f"got: {code!r}"
            )
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = dict(meta or {})

    def to_public_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "detail": self.message,
            "code": self.code,
        }
        if self.meta:
            payload["meta"] = self.meta
        return payload


class EmptyInputError(ThreadCleanError):
    def __init__(
        self,
        *,
        message: str = "Serialized thread is empty",
        code: str = "thread.empty_input",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)


class ParseError(ThreadCleanError):
    def __init__(
        self,
        *,
        message: str = "Serialized thread could not be parsed",
        code: str = "thread.parse_error",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)


class ReserializationError(ThreadCleanError):
    def __init__(
        self,
        *,
        message: str = "Cleaned thread could not be rebuilt",
        code: str = "thread.reserialization_failed",
        meta: dict[str, Any] | None = None,
    ):
        super().__init__(code=code, message=message, meta=meta)
