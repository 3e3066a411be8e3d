"""Parsed-tree access to page metadata."""

from typing import Iterator, Optional

import trafilatura
from lxml import etree
from lxml.html import HtmlElement, document_fromstring


def load_tree(html: Optional[str]) -> Optional[HtmlElement]:
    """
    Parse page markup into an HTML tree.

    Bare fragments (a few ``<meta>`` tags, a lone ``<time>``) are rejected by
    trafilatura's loader, so they are parsed as a standalone document instead.

    Returns:
        Root element, or None for empty or unparseable input
    """
    if not html or not html.strip():
        return None

    tree = trafilatura.load_html(html)
    if tree is not None:
        return tree

    try:
        return document_fromstring(html)
    except (etree.ParserError, ValueError):
        return None


def iter_values(tree: Optional[HtmlElement], query: str) -> Iterator[str]:
    """Yield the non-empty string results of an XPath query, in document order."""
    if tree is None:
        return
    for value in tree.xpath(query):
        text = str(value).strip()
        if text:
            yield text


def first_value(tree: Optional[HtmlElement], query: str) -> Optional[str]:
    """Return the first non-empty result of an XPath query."""
    return next(iter_values(tree, query), None)
