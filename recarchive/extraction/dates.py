"""Publication date extraction."""

import re
from datetime import date, datetime
from typing import Iterable, Optional

import pendulum

from .document import iter_values, load_tree
from .payload import find_published_at, load_next_data

TIME_QUERY = "//time/@datetime"
META_PUBLISHED_QUERY = (
    '//meta[@property="article:published_time" or @name="article:published_time"'
    ' or @property="datePublished" or @name="datePublished"'
    ' or @itemprop="datePublished"]/@content'
)
URL_DATE_PATTERN = re.compile(r"/(\d{4})/(\d{1,2})/(\d{1,2})/")
# Lenient parsing only runs on candidates naming a year.
YEAR_PATTERN = re.compile(r"\b\d{4}\b")


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a timestamp string, returning None if it does not name a date.

    ISO 8601 is tried first; free-form text only when it carries a year.
    Time-only values such as ``10:30`` are rejected rather than pinned to today.
    """
    if not value or not value.strip():
        return None
    text = value.strip()

    try:
        parsed = pendulum.parse(text, exact=True)
    except (ValueError, OverflowError):
        if not YEAR_PATTERN.search(text):
            return None
        try:
            parsed = pendulum.parse(text, strict=False)
        except (ValueError, OverflowError):
            return None

    if isinstance(parsed, datetime):
        return parsed
    if isinstance(parsed, date):
        return pendulum.datetime(parsed.year, parsed.month, parsed.day)
    return None


def _first_valid(candidates: Iterable[Optional[str]]) -> Optional[datetime]:
    for candidate in candidates:
        parsed = parse_timestamp(candidate)
        if parsed is not None:
            return parsed
    return None


def extract_publish_date(html: str) -> Optional[datetime]:
    """
    Extract the publication date of a page.

    Looks at the embedded structured payload first, then ``<time datetime>``
    elements, then published-time metadata.

    Returns:
        The first candidate that parses, or None when the page carries no date
    """
    if not html:
        return None

    published = _first_valid(find_published_at(load_next_data(html)))
    if published:
        return published

    tree = load_tree(html)
    if tree is None:
        return None

    return _first_valid(iter_values(tree, TIME_QUERY)) or _first_valid(
        iter_values(tree, META_PUBLISHED_QUERY)
    )


def date_from_issue_url(url: str) -> Optional[date]:
    """Derive a date from ``/yyyy/m/d/`` segments of an issue URL."""
    match = URL_DATE_PATTERN.search(url or "")
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None
