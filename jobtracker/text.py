"""Turn raw document or listing text into clean plain text."""
from __future__ import annotations

import html
import re
from typing import Any

_TAG_RE = re.compile(r"<[^>]*>")
_WS_RE = re.compile(r"\s+")

# Headers, footers and contact noise that carry no matching signal
BOILERPLATE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"Page\s+\d+\s+of\s+\d+", re.IGNORECASE),
    re.compile(r"(?:Â)?©\s*\d{4}"),
    re.compile(r"Confidential"),
    re.compile(r"Resume\s*of"),
    re.compile(r"Curriculum\s*Vitae"),
    re.compile(r"(?<!\S)-\s*\d+\s*-(?!\S)"),
    re.compile(r"https?://\S+"),
    re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}"),
]

DESCRIPTION_LIMIT = 1000


def strip_html(raw: str | None) -> str:
    """Drop tags, decode entities, collapse whitespace."""
    if not raw:
        return ""
    text = _TAG_RE.sub(" ", raw)
    text = html.unescape(text)
    return _WS_RE.sub(" ", text).strip()


def clean_text(raw: str | None) -> str:
    """Plain text with HTML, boilerplate and whitespace runs removed."""
    text = strip_html(raw)
    if not text:
        return ""
    for pattern in BOILERPLATE_PATTERNS:
        text = pattern.sub(" ", text)
    return _WS_RE.sub(" ", text).strip()


def clean_description(raw: str | None, limit: int = DESCRIPTION_LIMIT) -> str:
    return clean_text(raw)[:limit]


def text_stats(text: str | None) -> dict[str, Any]:
    text = text or ""
    words = text.split()
    sentences = [s for s in re.split(r"[.!?]+", text) if s.strip()]
    return {
        "word_count": len(words),
        "sentence_count": len(sentences),
        "avg_word_length": sum(len(w) for w in words) / len(words) if words else 0.0,
        "unique_words": len({w.lower() for w in words}),
        "char_count": len(text),
    }
