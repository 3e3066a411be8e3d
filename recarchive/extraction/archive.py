"""Issue discovery from the newsletter's archive-index pages."""

import re
from typing import List, Pattern, Set
from urllib.parse import urlparse

from .dates import date_from_issue_url
from .models import IssueStub
from .rules import NEWSLETTER_BASE_URL, NEWSLETTER_TOPIC
from .text import decode_and_strip

MIN_ISSUE_TITLE_LENGTH = 15
CHROME_TITLE_FRAGMENTS = ("Comment", "See All")


def issue_link_pattern(base_url: str = NEWSLETTER_BASE_URL, topic: str = NEWSLETTER_TOPIC) -> Pattern[str]:
    """Build the anchor pattern matching canonical issue URLs of a site."""
    host = re.escape(urlparse(base_url).netloc or base_url)
    issue_path = rf"(?:\d{{4}}/\d{{1,2}}/\d{{1,2}}/\d+/[^\"]+|{re.escape(topic)}/\d+/[^\"]+)"
    return re.compile(
        rf'<a[^>]*href="(https?://{host}/{issue_path})"[^>]*>([^<]+)</a>',
        re.IGNORECASE,
    )


def parse_archive_page(
    html: str,
    base_url: str = NEWSLETTER_BASE_URL,
    topic: str = NEWSLETTER_TOPIC,
) -> List[IssueStub]:
    """
    Harvest issue stubs from an archive-listing page.

    Returns:
        Issues in page order, one per URL
    """
    issues: List[IssueStub] = []
    seen_urls: Set[str] = set()

    for match in issue_link_pattern(base_url, topic).finditer(html or ""):
        url = match.group(1)
        title = decode_and_strip(match.group(2).strip())

        if url in seen_urls:
            continue
        seen_urls.add(url)

        if len(title) < MIN_ISSUE_TITLE_LENGTH:
            continue
        if any(fragment in title for fragment in CHROME_TITLE_FRAGMENTS):
            continue

        issues.append(IssueStub(title=title, url=url, date=date_from_issue_url(url)))

    return issues
