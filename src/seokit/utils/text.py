from __future__ import annotations

import re

ELLIPSIS = "..."

_CODE_FENCE_RE = re.compile(r"```.*?```", re.DOTALL)
_HEADER_RE = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]*\)")
_BOLD_RE = re.compile(r"(?<!\w)(\*\*|__)(?!\s)(.+?)(?<!\s)\1(?!\w)")
_ITALIC_RE = re.compile(r"(?<!\w)(\*|_)(?!\s)(.+?)(?<!\s)\1(?!\w)")
_INLINE_CODE_RE = re.compile(r"`([^`]+)`")
_BLOCKQUOTE_RE = re.compile(r"^\s*>\s?", re.MULTILINE)
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+", re.MULTILINE)
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_HEADING_LINE_RE = re.compile(r"^#{1,6}\s+.*$", re.MULTILINE)
_PARAGRAPH_SPLIT_RE = re.compile(r"\n\s*\n")
_WS_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def strip_markdown(text: str) -> str:
    """
    Remove the Markdown syntax that would read as noise in a summary.
    Line structure is preserved so paragraphs can still be told apart.
    """
    text = _CODE_FENCE_RE.sub("", text)
    text = _HTML_TAG_RE.sub("", text)
    text = _HEADER_RE.sub("", text)
    text = _IMAGE_RE.sub(r"\1", text)
    text = _LINK_RE.sub(r"\1", text)
    text = _BOLD_RE.sub(r"\2", text)
    text = _ITALIC_RE.sub(r"\2", text)
    text = _INLINE_CODE_RE.sub(r"\1", text)
    text = _BLOCKQUOTE_RE.sub("", text)
    text = _LIST_MARKER_RE.sub("", text)
    return text


def truncate_at_word(text: str, max_length: int) -> str:
    """
    Cut at the last whitespace at or before max_length and append '...'.
    Text within the limit comes back untouched.
    """
    if len(text) <= max_length:
        return text

    window = text[: max_length + 1]
    cut = max((m.start() for m in _WS_RE.finditer(window)), default=-1)
    if cut <= 0:
        return text[:max_length] + ELLIPSIS
    return text[:cut].rstrip() + ELLIPSIS


def make_excerpt(body: str, max_length: int = 160) -> str:
    """
    First non-empty paragraph of a Markdown body as plain text.
    Headings are section labels, not prose, and never become the excerpt.
    """
    if not body:
        return ""

    plain = strip_markdown(_HEADING_LINE_RE.sub("", body))
    for paragraph in _PARAGRAPH_SPLIT_RE.split(plain):
        flat = collapse_whitespace(paragraph)
        if flat:
            return truncate_at_word(flat, max_length)
    return ""
