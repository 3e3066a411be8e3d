"""Recommendation extraction from newsletter pages."""

from .archive import parse_archive_page
from .categories import guess_category
from .dates import date_from_issue_url, extract_publish_date
from .filters import is_junk_title, should_skip_url
from .models import CATEGORIES, Category, IssueStub, ParsedRecommendation
from .parser import parse_newsletter_content
from .payload import describe_payload
from .text import decode_and_strip, extract_domain
from .titles import extract_better_title, extract_page_title

__all__ = [
    "CATEGORIES",
    "Category",
    "IssueStub",
    "ParsedRecommendation",
    "date_from_issue_url",
    "decode_and_strip",
    "describe_payload",
    "extract_better_title",
    "extract_domain",
    "extract_page_title",
    "extract_publish_date",
    "guess_category",
    "is_junk_title",
    "parse_archive_page",
    "parse_newsletter_content",
    "should_skip_url",
]
