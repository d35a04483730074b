"""
Escape Normalizer

The agent runtime sometimes persists Spanish text with literal `\\u00XX`
sequences left in it, always with uppercase hex digits. Only the fixed table
below is replaced; any other escape sequence, lowercase hex included, passes
through unchanged.
"""

import re

ESCAPE_TABLE: dict[str, str] = {
    "E1": "á",
    "E9": "é",
    "ED": "í",
    "F3": "ó",
    "FA": "ú",
    "FC": "ü",
    "F1": "ñ",
    "C1": "Á",
    "C9": "É",
    "CD": "Í",
    "D3": "Ó",
    "DA": "Ú",
    "DC": "Ü",
    "D1": "Ñ",
}

_ESCAPE_RE = re.compile(r"\\u00([0-9A-F]{2})")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_WHITESPACE_RE = re.compile(r"\s+")


def _replace_escape(match: re.Match) -> str:
    return ESCAPE_TABLE.get(match.group(1), match.group(0))


def normalize_escapes(text: str) -> str:
    """Replace the known accented-character escapes with their characters."""
    if not text:
        return ""
    return _ESCAPE_RE.sub(_replace_escape, text)


def collapse_whitespace(text: str) -> str:
    """Fold line breaks and whitespace runs into single spaces and trim."""
    if not text:
        return ""
    text = _LINE_BREAK_RE.sub(" ", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def normalize_plain_text(text: str) -> str:
    """Cleaning applied to non-assistant messages."""
    return collapse_whitespace(normalize_escapes(text))
