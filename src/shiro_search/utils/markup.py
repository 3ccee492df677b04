"""String-only markup stripping for rich-text document bodies.

The editor stores note and chapter content as HTML fragments. Search needs the
visible text only, and must not depend on an HTML parser or DOM being present.
"""

from __future__ import annotations

import html
import re


# Content of these elements is never visible text
_INVISIBLE_BLOCK_PATTERN = re.compile(r"<(script|style|template)\b[^>]*>.*?</\1\s*>", re.IGNORECASE | re.DOTALL)
_COMMENT_PATTERN = re.compile(r"<!--.*?-->", re.DOTALL)
# Quoted attribute values may contain '>' so they are consumed explicitly
_TAG_PATTERN = re.compile(r"</?[A-Za-z][^>\"']*(?:(?:\"[^\"]*\"|'[^']*')[^>\"']*)*>")
# Block-level boundaries become whitespace so adjacent words do not fuse
_BLOCK_TAG_PATTERN = re.compile(
    r"<(?:br|p|div|li|ul|ol|h[1-6]|tr|td|th|blockquote|pre|section|article|hr)\b[^>]*/?>"
    r"|</(?:p|div|li|h[1-6]|tr|td|th|blockquote|pre|section|article)\s*>",
    re.IGNORECASE,
)


def strip_markup(markup: str | None) -> str:
    """Return the text content of an HTML fragment.

    Tags, comments and script/style bodies are removed, entities are decoded.
    ``None`` and empty input give an empty string.

    Examples:
        >>> strip_markup("<p>Hello <b>world</b></p>")
        'Hello world'
        >>> strip_markup("Fish &amp; chips")
        'Fish & chips'
    """
    if not markup:
        return ""
    if "<" not in markup and "&" not in markup:
        return markup

    text = _COMMENT_PATTERN.sub("", markup)
    text = _INVISIBLE_BLOCK_PATTERN.sub("", text)
    text = _BLOCK_TAG_PATTERN.sub(" ", text)
    text = _TAG_PATTERN.sub("", text)
    text = html.unescape(text)
    return re.sub(r"[ \t\r\f\v]+", " ", text).strip()
