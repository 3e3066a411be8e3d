"""Title extraction from fetched pages and title inference for weak anchors."""

import re
from typing import Optional
from urllib.parse import urlparse

from .document import first_value, load_tree
from .filters import is_junk_title
from .rules import TITLE_SUFFIX_PATTERNS
from .text import decode_and_strip

# Tried in order; a source only counts if it yields more than 2 characters.
TITLE_QUERIES = (
    '//meta[@property="og:title"]/@content',
    '//meta[@name="twitter:title" or @property="twitter:title"]/@content',
    "//title/text()",
)

# The newsletter marks its canonical links as "Some Thing (link)".
LINK_MARKER_PATTERN = re.compile(r"([A-Z][^.!?]*?)\s*\((?i:link)\)")
SLUG_PATTERN = re.compile(r"/([a-z0-9-]+)/?$", re.IGNORECASE)
WORD_START_PATTERN = re.compile(r"\b\w")

MIN_ANCHOR_LENGTH = 5
SHORT_ANCHOR_LENGTH = 20
MAX_EXPANDED_LENGTH = 100


def clean_title(title: str) -> str:
    """Strip known site-name suffixes from a page title."""
    cleaned = title
    for pattern in TITLE_SUFFIX_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def extract_page_title(html: str) -> Optional[str]:
    """
    Extract the best human-readable title from a page.

    Open Graph title first, then the Twitter card title, then the document
    ``<title>``. Each source is tried only if the previous one yielded nothing
    longer than 2 characters.

    Returns:
        Cleaned title, or None if the page has no usable title
    """
    tree = load_tree(html)
    if tree is None:
        return None

    for query in TITLE_QUERIES:
        candidate = first_value(tree, query)
        if not candidate:
            continue
        title = decode_and_strip(candidate).strip()
        if len(title) > 2:
            return clean_title(title)

    return None


def _title_from_link_marker(context: str) -> Optional[str]:
    match = LINK_MARKER_PATTERN.search(context)
    if match and len(match.group(1)) > 3:
        return match.group(1).strip()
    return None


def _expand_in_context(anchor_text: str, context: str) -> Optional[str]:
    index = context.find(anchor_text)
    if index <= 0:
        return None

    back = max(index - 20, 0)
    start = max(0, context.rfind(" ", 0, back + 1))
    end = context.find(" ", index + len(anchor_text) + 30)
    if end == -1:
        end = len(context)

    expanded = context[start:end].strip()
    if len(anchor_text) < len(expanded) < MAX_EXPANDED_LENGTH:
        return expanded
    return None


def title_from_url(url: str) -> Optional[str]:
    """Turn the last path segment of a URL into a title-cased phrase."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    if not parsed.scheme or not parsed.netloc:
        return None

    match = SLUG_PATTERN.search(parsed.path)
    if not match:
        return None

    slug = WORD_START_PATTERN.sub(lambda m: m.group(0).upper(), match.group(1).replace("-", " "))
    if len(slug) > 5 and not is_junk_title(slug):
        return slug
    return None


def extract_better_title(
    anchor_text: Optional[str],
    context: Optional[str],
    url: Optional[str],
) -> Optional[str]:
    """
    Resolve the title of a recommendation whose anchor text may be weak.

    Args:
        anchor_text: Visible text of the link
        context: Plain text surrounding the link
        url: Link target

    Returns:
        Best available title, or None if there is nothing to go on
    """
    if anchor_text and len(anchor_text) >= MIN_ANCHOR_LENGTH and not is_junk_title(anchor_text):
        return anchor_text.strip()

    if context:
        title = _title_from_link_marker(context)
        if title:
            return title

        if anchor_text and len(anchor_text) < SHORT_ANCHOR_LENGTH:
            title = _expand_in_context(anchor_text, context)
            if title:
                return title

    if url:
        title = title_from_url(url)
        if title:
            return title

    if anchor_text and anchor_text.strip():
        return anchor_text.strip()
    return None
