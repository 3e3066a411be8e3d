"""Predicates deciding whether a candidate link is noise."""

from typing import Optional

from .rules import JUNK_TITLE_PATTERNS, SKIP_URL_PATTERNS

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 200


def should_skip_url(url: Optional[str]) -> bool:
    """Check if a URL is navigation, sharing, legal or asset noise."""
    if not url:
        return True
    return any(pattern.search(url) for pattern in SKIP_URL_PATTERNS)


def is_junk_title(title: Optional[str]) -> bool:
    """Check if a title is UI chrome rather than a recommendation name."""
    if not title or len(title) < MIN_TITLE_LENGTH or len(title) > MAX_TITLE_LENGTH:
        return True
    stripped = title.strip()
    return any(pattern.search(stripped) for pattern in JUNK_TITLE_PATTERNS)
