"""Text processing utilities for institution names."""

import re
from typing import Optional

# Standalone words dropped by aggressive normalization.
_STOPWORD_RE = re.compile(r"\b(?:of the|in|at)\b")
_TRAILING_PAREN_RE = re.compile(r"\s*\([^()]*\)\s*$")
_COMMUNITY_COLLEGE_RE = re.compile(r"\bco\b")
_AND_RE = re.compile(r"\band\b")
_WHITESPACE_RE = re.compile(r"\s+")
_ALIAS_SPLIT_RE = re.compile(r"[,;|]")

# " — City, ST" with em dash, en dash or hyphen.
_LOCATION_SUFFIX_RE = re.compile(r"\s+[-—–]\s+[A-Za-z .'-]+,\s*[A-Z]{2}$")


def exact_key(name: str) -> str:
    """Exact lookup key: trimmed and lowercased."""
    return name.strip().lower()


def _aggressive_pass(key: str) -> str:
    key = key.replace(".", "")
    key = _TRAILING_PAREN_RE.sub("", key)
    key = key.replace("@", " at ")
    key = _STOPWORD_RE.sub("", key)
    key = _COMMUNITY_COLLEGE_RE.sub("community college", key)
    key = _AND_RE.sub(" ", key)
    key = _WHITESPACE_RE.sub(" ", key)
    return key.strip()


def aggressive_key(name: str) -> str:
    """
    Aggressively normalized lookup key.

    Removes periods, a trailing parenthetical, the standalone words "in",
    "at" and "of the" (an "@" counts as "at"), expands "co" to
    "community college", drops "and" and collapses whitespace.

    Rules are applied until the key stops changing, so
    aggressive_key(aggressive_key(x)) == aggressive_key(x).
    """
    key = exact_key(name)
    while True:
        next_key = _aggressive_pass(key)
        if next_key == key:
            return key
        key = next_key


def split_aliases(alias_field: Optional[str]) -> list[str]:
    """Split a raw alias field on , ; or | and drop blank parts."""
    if not alias_field:
        return []
    return [part.strip() for part in _ALIAS_SPLIT_RE.split(alias_field) if part.strip()]


def has_location_suffix(label: str) -> bool:
    """Check if a name carries a " — City, ST" location suffix."""
    if not label or not isinstance(label, str):
        return False
    return bool(_LOCATION_SUFFIX_RE.search(label))


def clean_college_name(label: str) -> str:
    """
    Strip a " — City, ST" location suffix from a search label.

    "Cornell University — Ithaca, NY" -> "Cornell University"
    """
    if not label or not isinstance(label, str):
        return ""
    return _LOCATION_SUFFIX_RE.sub("", label).strip()


def word_starts_with(text: str, prefix: str) -> bool:
    """True if any whitespace-delimited word of text starts with prefix."""
    return any(word.startswith(prefix) for word in text.split())
