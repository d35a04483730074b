"""
Markup Flattener

Assistant messages carry HTML either inside a ```html fence or as a full
`<!DOCTYPE html> ... </html>` document. Two operations are offered:

- isolation: pull the markup span out of a larger reply, tags untouched
- stripping: flatten any markup into a single line of readable text

Block-level elements emit a trailing space so adjacent blocks never fuse
into one word; table cells emit a visible `|` separator.
"""

import re

from threadclean.text.escapes import collapse_whitespace, normalize_escapes

_FENCED_BLOCK_RE = re.compile(r"```html\s*([\s\S]*?)\s*```", re.IGNORECASE)
_HTML_DOCUMENT_RE = re.compile(r"<!DOCTYPE html[\s\S]*?</html>", re.IGNORECASE)
_MARKUP_ROOT_RE = re.compile(r"<html", re.IGNORECASE)

_COMMENT_RE = re.compile(r"<!--[\s\S]*?-->")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)\b[^>]*>[\s\S]*?</\1\s*>", re.IGNORECASE)
_BLOCK_RE = re.compile(
    r"<(h[1-6]|p|div|section|li)\b[^>]*>([\s\S]*?)</\1\s*>", re.IGNORECASE
)
_CELL_RE = re.compile(r"<(td|th)\b[^>]*>([\s\S]*?)</\1\s*>", re.IGNORECASE)
_LINE_BREAK_TAG_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")

_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
    "&quot;": '"',
    "&#39;": "'",
    "&apos;": "'",
    "&nbsp;": " ",
}
_ENTITY_RE = re.compile("|".join(re.escape(entity) for entity in _ENTITIES))


def isolate_markup(text: str) -> str:
    """Return the markup payload of an assistant reply.

    Priority: fenced html block (inner content), then a full html document,
    then the text unchanged. Only the first match is used.
    """
    if not text:
        return ""

    fenced = _FENCED_BLOCK_RE.search(text)
    if fenced:
        return fenced.group(1).strip()

    document = _HTML_DOCUMENT_RE.search(text)
    if document:
        return document.group(0).strip()

    return text


def has_markup_root(text: str) -> bool:
    if not text:
        return False
    return _MARKUP_ROOT_RE.search(text) is not None


def _inner_text(match: re.Match) -> str:
    return _TAG_RE.sub("", match.group(2)).strip()


def _decode_entities(text: str) -> str:
    return _ENTITY_RE.sub(lambda m: _ENTITIES[m.group(0)], text)


def flatten_html(html: str) -> str:
    """Drop tags from an HTML fragment, keeping block separation.

    Whitespace is not collapsed here; `strip_markup` does that once at the end.
    """
    if not html:
        return ""

    html = _COMMENT_RE.sub("", html)
    html = _SCRIPT_STYLE_RE.sub("", html)
    html = _BLOCK_RE.sub(lambda m: _inner_text(m) + " ", html)
    html = _CELL_RE.sub(lambda m: _inner_text(m) + " | ", html)
    html = _LINE_BREAK_TAG_RE.sub(" ", html)
    html = _TAG_RE.sub("", html)
    return _decode_entities(html)


def _strip_once(text: str) -> str:
    text = _FENCED_BLOCK_RE.sub(lambda m: flatten_html(m.group(1)), text)
    text = flatten_html(text)
    text = normalize_escapes(text)
    return collapse_whitespace(text)


def strip_markup(text: str) -> str:
    """Flatten any fenced or raw markup in `text` into plain text.

    Decoded entities can form new tags (`&lt;b&gt;`), so the pass repeats
    until the text stops changing. After the first pass whitespace is already
    collapsed, so any further change makes the text shorter and the loop ends
    on a fixed point.
    """
    if not text:
        return ""

    current = _strip_once(text)
    while True:
        following = _strip_once(current)
        if following == current:
            return current
        current = following
