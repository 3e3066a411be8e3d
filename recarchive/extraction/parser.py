"""Newsletter issue parser.

Turns one issue page into an ordered list of recommendations. The structured
payload is preferred; pages without one (or where it yields nothing) fall back
to the anchors inside the first ``<article>`` element.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Set

from .categories import guess_category
from .filters import is_junk_title, should_skip_url
from .models import ParsedRecommendation
from .payload import block_fragments, block_html, find_blocks, load_next_data
from .rules import NEWSLETTER_BASE_URL
from .text import decode_and_strip
from .titles import extract_better_title

ANCHOR_PATTERN = re.compile(r'<a\s+[^>]*href="([^"]+)"[^>]*>(.*?)</a>', re.IGNORECASE | re.DOTALL)
ARTICLE_PATTERN = re.compile(r"<article[^>]*>([\s\S]*?)</article>", re.IGNORECASE)
MARKUP_CONTRIBUTOR_PATTERN = re.compile(r"(?:&mdash;|—)\s*(?:&nbsp;)?(\w+)\s*$")
TEXT_CONTRIBUTOR_PATTERN = re.compile(r"—\s*(\w+)\s*$")
WHITESPACE_PATTERN = re.compile(r"\s+")

HEADING_BLOCK = "CoreHeadingBlockType"
PARAGRAPH_BLOCK = "CoreParagraphBlockType"
LIST_BLOCK = "CoreListBlockType"

INITIAL_SECTION = "intro"
MAX_DESCRIPTION_LENGTH = 500
MIN_DESCRIPTION_LENGTH = 10
PRIMARY_LINK_MARKER = "(link)"
CROWDSOURCE_MARKERS = ("community", "installer reader")


class Anchor(NamedTuple):
    href: str
    text: str


@dataclass
class _WalkState:
    """Accumulator threaded through one parse of one document."""

    section: Optional[str] = None
    seen_urls: Set[str] = field(default_factory=set)
    recommendations: List[ParsedRecommendation] = field(default_factory=list)


def extract_anchors(markup: str) -> List[Anchor]:
    """Extract (href, text) pairs of all anchors with both an href and text."""
    anchors = []
    for match in ANCHOR_PATTERN.finditer(markup or ""):
        href = decode_and_strip(match.group(1))
        text = decode_and_strip(match.group(2).strip())
        if href and text:
            anchors.append(Anchor(href, text))
    return anchors


def extract_contributor(markup: str) -> Optional[str]:
    """Extract a reader's name from a trailing ``— Name`` credit."""
    match = MARKUP_CONTRIBUTOR_PATTERN.search(markup or "")
    return match.group(1) if match else None


def section_label(heading_markup: str) -> str:
    """Normalize a heading into a section label like ``signing_off``."""
    return WHITESPACE_PATTERN.sub("_", decode_and_strip(heading_markup).lower())


def is_crowdsourced_context(context: str) -> bool:
    """Check whether surrounding text credits a reader submission."""
    lowered = context.lower()
    return bool(TEXT_CONTRIBUTOR_PATTERN.search(context)) or any(
        marker in lowered for marker in CROWDSOURCE_MARKERS
    )


def _resolve_href(href: str, base_url: str) -> str:
    if href.startswith("/"):
        return f"{base_url.rstrip('/')}{href}"
    return href


def _process_anchor(
    state: _WalkState,
    anchor: Anchor,
    context: str,
    contributor_name: Optional[str],
    base_url: str,
) -> None:
    url = _resolve_href(anchor.href, base_url)
    if url in state.seen_urls or should_skip_url(url):
        return
    if is_junk_title(anchor.text):
        return

    title = extract_better_title(anchor.text, context, url)
    if not title or is_junk_title(title):
        return

    is_crowdsourced = contributor_name is not None or is_crowdsourced_context(context)
    if is_crowdsourced and contributor_name is None:
        match = TEXT_CONTRIBUTOR_PATTERN.search(context)
        if match:
            contributor_name = match.group(1)

    state.recommendations.append(
        ParsedRecommendation(
            title=title,
            url=url,
            description=context[:MAX_DESCRIPTION_LENGTH] if len(context) > MIN_DESCRIPTION_LENGTH else None,
            category=guess_category(title, context, url),
            section_name=state.section,
            is_primary_link=PRIMARY_LINK_MARKER in context.lower(),
            is_crowdsourced=is_crowdsourced,
            contributor_name=contributor_name,
        )
    )
    state.seen_urls.add(url)


def _walk_block(state: _WalkState, block: Dict[str, Any], base_url: str) -> _WalkState:
    typename = block.get("__typename")

    if typename == HEADING_BLOCK:
        state.section = section_label(block_html(block.get("contents")))

    elif typename == PARAGRAPH_BLOCK:
        for fragment in block_fragments(block, "paragraphContents"):
            markup = block_html(fragment)
            context = decode_and_strip(markup)
            contributor_name = extract_contributor(markup)
            for anchor in extract_anchors(markup):
                _process_anchor(state, anchor, context, contributor_name, base_url)

    elif typename == LIST_BLOCK:
        for item in block_fragments(block, "items"):
            markup = block_html(item)
            context = decode_and_strip(markup)
            for anchor in extract_anchors(markup):
                _process_anchor(state, anchor, context, None, base_url)

    return state


def parse_structured_content(html: str, base_url: str = NEWSLETTER_BASE_URL) -> List[ParsedRecommendation]:
    """Parse recommendations from the embedded content blocks, if any."""
    blocks = find_blocks(load_next_data(html))
    if not blocks:
        return []

    state = _WalkState(section=INITIAL_SECTION)
    for block in blocks:
        state = _walk_block(state, block, base_url)
    return state.recommendations


def parse_article_anchors(html: str, base_url: str = NEWSLETTER_BASE_URL) -> List[ParsedRecommendation]:
    """Parse recommendations from the anchors of the first ``<article>``."""
    match = ARTICLE_PATTERN.search(html or "")
    if not match:
        return []

    state = _WalkState()
    for anchor in extract_anchors(match.group(1)):
        _process_anchor(state, anchor, anchor.text, None, base_url)
    return state.recommendations


def parse_newsletter_content(html: str, base_url: str = NEWSLETTER_BASE_URL) -> List[ParsedRecommendation]:
    """
    Extract recommendations from a newsletter issue page.

    Args:
        html: Full page markup
        base_url: Site root used to resolve relative links

    Returns:
        Recommendations in document order, one per distinct URL. An empty
        list is a valid outcome for issues without qualifying links.
    """
    recommendations = parse_structured_content(html, base_url)
    if recommendations:
        return recommendations
    return parse_article_anchors(html, base_url)


def count_article_links(html: str) -> Optional[int]:
    """Count the anchors inside the first ``<article>``, or None without one."""
    match = ARTICLE_PATTERN.search(html or "")
    if not match:
        return None
    return len(ANCHOR_PATTERN.findall(match.group(1)))
