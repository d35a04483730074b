"""
Text Transforms

Pure string functions used by the extractor and the re-serializer:
- Markup isolation and stripping
- Fixed-table escape normalization
- Whitespace collapsing
"""

from .escapes import collapse_whitespace, normalize_escapes, normalize_plain_text
from .markup import flatten_html, has_markup_root, isolate_markup, strip_markup

__all__ = [
    "collapse_whitespace",
    "normalize_escapes",
    "normalize_plain_text",
    "flatten_html",
    "has_markup_root",
    "isolate_markup",
    "strip_markup",
]
