"""Heuristics for deciding which recommendation titles to refetch."""

import re

VAGUE_TITLES = {"link", "here", "this", "check it out", "watch", "listen", "read"}
SHORT_TITLE_LENGTH = 30

TITLE_FETCH_SKIP_PATTERNS = (
    re.compile(r"^mailto:"),
    re.compile(r"^tel:"),
    re.compile(r"^javascript:"),
    re.compile(r"\.(pdf|zip|dmg|exe|mp3|mp4|mov|avi)$", re.IGNORECASE),
    # Bare domains without a path
    re.compile(r"^https?://[^/]+/?$"),
)


def needs_better_title(title: str) -> bool:
    """Check whether a title looks like vague anchor text."""
    lowered = title.lower()
    return (
        len(title) < SHORT_TITLE_LENGTH
        or lowered in VAGUE_TITLES
        or (lowered.startswith("the ") and len(title) < 20)
    )


def should_skip_for_title_extraction(url: str) -> bool:
    """Check if a URL is unlikely to serve a page with a useful title."""
    return any(pattern.search(url) for pattern in TITLE_FETCH_SKIP_PATTERNS)


def title_similarity(first: str, second: str) -> float:
    """
    Rough similarity between two titles.

    Returns:
        0.0 for unrelated titles up to 1.0 for identical ones
    """
    longer, shorter = (first, second) if len(first) > len(second) else (second, first)
    if not longer:
        return 1.0

    if shorter in longer:
        return len(shorter) / len(longer)

    first_words = set(first.split())
    second_words = set(second.split())
    return len(first_words & second_words) / (max(len(first_words), len(second_words)) or 1)
