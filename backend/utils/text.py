import re
from typing import Iterable

_WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_PATTERN.sub(" ", text or "").strip()


def truncate(text: str, limit: int, marker: str = "...") -> str:
    """Cut text to at most `limit` characters, ending in `marker` when cut."""
    if len(text) <= limit:
        return text
    return text[:max(0, limit - len(marker))].rstrip() + marker


def preview(text: str, length: int, marker: str = "...") -> str:
    """First `length` characters followed by `marker`, as used in narrative bullets."""
    return text[:length].rstrip() + marker


def remove_phrases(text: str, phrases: Iterable[str]) -> str:
    """Case-insensitive removal of each phrase."""
    for phrase in phrases:
        text = re.sub(re.escape(phrase), "", text, flags=re.IGNORECASE)
    return text
