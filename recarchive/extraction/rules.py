"""Declarative rule tables for link filtering, title cleaning and categorization.

Every table is evaluated top to bottom and the first matching rule wins, so
the order of entries is significant.
"""

import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from .models import Category

NEWSLETTER_BASE_URL = "https://www.theverge.com"
NEWSLETTER_TOPIC = "installer-newsletter"

SKIP_URL_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern)
    for pattern in (
        # Site chrome and legal pages
        r"theverge\.com/ethics",
        r"theverge\.com/privacy",
        r"theverge\.com/terms",
        r"theverge\.com/contact",
        r"theverge\.com/about",
        r"theverge\.com/sitemap",
        r"theverge\.com/rss",
        r"theverge\.com/authors/",
        r"theverge\.com/pages/",
        r"theverge\.com/?$",
        # The newsletter's own index and archive
        r"theverge\.com/installer-newsletter/?$",
        r"theverge\.com/installer-newsletter/archives",
        # Social sharing and brand accounts
        r"twitter\.com/intent",
        r"twitter\.com/verge",
        r"x\.com/intent",
        r"facebook\.com/sharer",
        r"linkedin\.com/share",
        r"instagram\.com/verge",
        r"threads\.net/.*verge",
        r"tiktok\.com/@verge",
        # Publisher network and consent manager
        r"voxmedia\.com",
        r"onetrust\.com",
        r"status\.voxmedia",
        # Non-navigational links
        r"mailto:",
        r"^javascript:",
        r"#comments",
        r"^#",
        r"\.(css|js|woff|png|jpg|ico|svg)$",
    )
)

JUNK_TITLE_PATTERNS: Tuple[Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^see all",
        r"^comments?\s*\d*",
        r"^\d+\s*comments?",
        r"^share$",
        r"^icon",
        r"^subscribe",
        r"^sign up",
        r"^read more$",
        r"^click here",
        r"^here$",
        r"^link$",
        r"^\d+$",
        r"^the$",
        r"^a$",
        r"^an$",
        r"^\s*$",
    )
)

_SEPARATOR = r"\s*[|\-–—]\s*"

TITLE_SUFFIX_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(_SEPARATOR + r"YouTube$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"The Verge$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Netflix$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Apple$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Spotify$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Steam$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Amazon\.com$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"IMDb$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Rotten Tomatoes$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Wikipedia$", re.IGNORECASE),
    re.compile(_SEPARATOR + r"Reddit$", re.IGNORECASE),
    re.compile(r"\s*on the App Store$", re.IGNORECASE),
    re.compile(r"\s*- Apps on Google Play$", re.IGNORECASE),
    # Unlisted " - Site Name" suffixes
    re.compile(_SEPARATOR + r"[A-Z][a-zA-Z\s]{2,20}$"),
)


@dataclass(frozen=True)
class DomainRule:
    """Map a link to a category by its hostname or full URL."""

    category: Category
    host_contains: Tuple[str, ...] = ()
    host_suffixes: Tuple[str, ...] = ()
    url_contains: Tuple[str, ...] = ()
    url_excludes: Tuple[str, ...] = ()

    def matches(self, domain: str, url: str) -> bool:
        """Check whether the rule applies to a hostname/URL pair."""
        if any(fragment in url for fragment in self.url_excludes):
            return False
        return (
            any(fragment in domain for fragment in self.host_contains)
            or any(domain.endswith(suffix) for suffix in self.host_suffixes)
            or any(fragment in url for fragment in self.url_contains)
        )


_STREAMING = (
    "netflix.com",
    "hulu.com",
    "disneyplus.com",
    "max.com",
    "hbomax.com",
    "peacocktv.com",
    "paramountplus.com",
    "appletv.apple.com",
    "tv.apple.com",
    "amazon.com/gp/video",
    "primevideo.com",
)

DOMAIN_RULES: Tuple[DomainRule, ...] = (
    DomainRule(
        "apps",
        host_contains=("apps.apple.com", "play.google.com", "app."),
        host_suffixes=(".app",),
    ),
    DomainRule("shows", host_contains=_STREAMING, url_contains=_STREAMING),
    DomainRule("videos", host_contains=("youtube.com", "youtu.be", "vimeo.com", "tiktok.com")),
    DomainRule(
        "music",
        url_contains=(
            "spotify.com/track",
            "spotify.com/album",
            "music.apple.com",
            "soundcloud.com",
            "bandcamp.com",
        ),
    ),
    DomainRule(
        "podcasts",
        url_contains=(
            "spotify.com/show",
            "podcasts.apple.com",
            "pocketcasts.com",
            "overcast.fm",
            "castro.fm",
        ),
    ),
    DomainRule(
        "games",
        host_contains=(
            "store.steampowered.com",
            "epicgames.com",
            "gog.com",
            "itch.io",
            "nintendo.com",
            "playstation.com",
            "xbox.com",
            "ea.com",
        ),
    ),
    DomainRule(
        "books",
        url_contains=(
            "amazon.com/dp",
            "bookshop.org",
            "goodreads.com",
            "librarything.com",
            "books.google.com",
        ),
    ),
    DomainRule("movies", host_contains=("imdb.com",), url_contains=("themoviedb.org/movie",)),
    DomainRule("shows", url_contains=("themoviedb.org/tv",)),
    DomainRule("gadgets", host_contains=("amazon.com",), url_excludes=("/dp/",)),
    DomainRule("gadgets", host_contains=("bestbuy.com", "bhphotovideo.com")),
    DomainRule(
        "food-drink",
        host_contains=(
            "seriouseats.com",
            "bonappetit.com",
            "foodnetwork.com",
            "epicurious.com",
            "food52.com",
            "allrecipes.com",
            "delish.com",
            "tastingtable.com",
            "eater.com",
            "thekitchn.com",
            "cookieandkate.com",
            "minimalistbaker.com",
            "wine.com",
            "vinepair.com",
            "punchdrink.com",
            "diffordsguide.com",
            "imbibemagazine.com",
        ),
    ),
)

# No rule for podcasts or for articles about a topic: mentioning a topic is
# not evidence that the link belongs to that category.
TEXT_RULES: Tuple[Tuple[Category, Pattern[str]], ...] = (
    ("apps", re.compile(r"\b(ios|android|iphone|ipad)\s*(app|application)", re.IGNORECASE)),
    (
        "shows",
        re.compile(
            r"\b(tv\s*show|tv\s*series|season\s*\d+\s*(episode|finale|premiere)"
            r"|episode\s*\d+|limited\s*series|miniseries)",
            re.IGNORECASE,
        ),
    ),
    ("movies", re.compile(r"\b(movie|film|cinema|theatrical\s*release|box\s*office)", re.IGNORECASE)),
    (
        "games",
        re.compile(
            r"\b(video\s*game|nintendo\s*switch|playstation\s*\d|xbox\s*(series|one|game)"
            r"|steam\s*(game|deck)|pc\s*game)",
            re.IGNORECASE,
        ),
    ),
    (
        "books",
        re.compile(
            r"\b(novel|memoir|nonfiction|hardcover|paperback|kindle\s*edition|audiobook)",
            re.IGNORECASE,
        ),
    ),
    (
        "music",
        re.compile(
            r"\b(new\s*album|debut\s*album|studio\s*album|music\s*video|new\s*single|new\s*song)",
            re.IGNORECASE,
        ),
    ),
    (
        "gadgets",
        re.compile(
            r"\b(smart\s*home|wearable|headphones|earbuds|charger|cable|accessory|gadget)",
            re.IGNORECASE,
        ),
    ),
    (
        "food-drink",
        re.compile(
            r"\b(recipe|cookbook|restaurant\s*review|cocktail\s*recipe|wine\s*review)",
            re.IGNORECASE,
        ),
    ),
)


def first_domain_match(domain: str, url: str) -> Optional[Category]:
    """Return the category of the first domain rule matching the link."""
    for rule in DOMAIN_RULES:
        if rule.matches(domain, url):
            return rule.category
    return None


def first_text_match(text: str) -> Optional[Category]:
    """Return the category of the first text rule matching the text."""
    for category, pattern in TEXT_RULES:
        if pattern.search(text):
            return category
    return None
