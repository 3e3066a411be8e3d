"""Text normalization helpers shared by the extraction pipeline."""

import re
from typing import Optional
from urllib.parse import urlparse

# Replaced in this order, so "&amp;lt;" ends up as "<".
HTML_ENTITIES = {
    "&rsquo;": "'",
    "&lsquo;": "'",
    "&rdquo;": '"',
    "&ldquo;": '"',
    "&mdash;": "—",
    "&ndash;": "–",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&nbsp;": " ",
    "&#038;": "&",
    "&eacute;": "é",
    "&egrave;": "è",
    "&aacute;": "á",
    "&oacute;": "ó",
    "&uacute;": "ú",
    "&ntilde;": "ñ",
    "&uuml;": "ü",
    "&ouml;": "ö",
    "&hellip;": "…",
}

TAG_PATTERN = re.compile(r"<[^>]+>")


def decode_and_strip(raw: Optional[str]) -> str:
    """Decode the known HTML entities and strip all tag markup."""
    if not raw:
        return ""

    result = raw
    for entity, replacement in HTML_ENTITIES.items():
        result = result.replace(entity, replacement)

    return TAG_PATTERN.sub("", result)


def extract_domain(url: Optional[str]) -> Optional[str]:
    """Extract the hostname from a URL, without a leading www."""
    if not url:
        return None
    try:
        domain = urlparse(url).hostname
    except ValueError:
        return None
    if not domain:
        return None
    if domain.startswith("www."):
        domain = domain[4:]
    return domain
