"""Category classification for extracted recommendations."""

from typing import Optional

from .models import DEFAULT_CATEGORY, Category
from .rules import first_domain_match, first_text_match
from .text import extract_domain


def guess_category(
    title: Optional[str],
    description: Optional[str],
    url: Optional[str],
) -> Category:
    """
    Guess the category of a recommendation.

    Domain rules are checked first since the host of a link is the most
    reliable signal. Only when no domain rule applies are the narrow text
    rules tried against title, description and URL. Anything else is an
    article.

    Returns:
        One of the fixed categories, never None
    """
    url = url or ""
    domain = extract_domain(url)

    if domain:
        category = first_domain_match(domain, url)
        if category:
            return category

    text = f"{title or ''} {description or ''} {url}".lower()
    return first_text_match(text) or DEFAULT_CATEGORY
