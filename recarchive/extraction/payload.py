"""Accessors for the structured data payload embedded in newsletter pages.

The payload is a Next.js ``__NEXT_DATA__`` JSON document whose shape varies
between page versions, so every lookup is an optional chain that yields
``None`` instead of raising when a step is missing or has the wrong type.
"""

import json
import re
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

NEXT_DATA_PATTERN = re.compile(r'<script id="__NEXT_DATA__"[^>]*>([\s\S]*?)</script>')

PathStep = Union[str, int]


def load_next_data(html: str) -> Optional[Dict[str, Any]]:
    """Parse the embedded payload, or return None if absent or malformed."""
    if not html:
        return None
    match = NEXT_DATA_PATTERN.search(html)
    if not match:
        return None
    try:
        data = json.loads(match.group(1))
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def dig(data: Any, path: Sequence[PathStep]) -> Any:
    """Follow a path of keys and list indexes, returning None on any miss."""
    current = data
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
        if current is None:
            return None
    return current


def iter_responses(data: Optional[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
    """Yield every hydration response object in the payload."""
    responses = dig(data, ("props", "pageProps", "hydration", "responses"))
    if not isinstance(responses, list):
        return
    for response in responses:
        if isinstance(response, dict):
            yield response


def find_blocks(data: Optional[Dict[str, Any]]) -> Optional[List[Dict[str, Any]]]:
    """Find the first non-empty content block list across all responses."""
    for response in iter_responses(data):
        blocks = dig(response, ("data", "node", "blocks"))
        if isinstance(blocks, list) and blocks:
            return [block for block in blocks if isinstance(block, dict)]
    return None


def find_published_at(data: Optional[Dict[str, Any]]) -> List[str]:
    """Collect candidate publish timestamps in priority order."""
    candidates: List[str] = []
    for response in iter_responses(data):
        for key in ("publishedAt", "datePublished"):
            value = dig(response, ("data", "node", key))
            if isinstance(value, str) and value:
                candidates.append(value)
    fallback = dig(data, ("props", "pageProps", "data", "node", "publishedAt"))
    if isinstance(fallback, str) and fallback:
        candidates.append(fallback)
    return candidates


def block_html(entry: Any) -> str:
    """Return the ``html`` string of a block fragment, or an empty string."""
    value = dig(entry, ("html",))
    return value if isinstance(value, str) else ""


def block_fragments(block: Dict[str, Any], key: str) -> List[Any]:
    """Return a list-valued field of a block, or an empty list."""
    value = block.get(key)
    return value if isinstance(value, list) else []


def describe_payload(html: str) -> List[str]:
    """Summarize where content blocks were (or were not) found in a page."""
    data = load_next_data(html)
    if data is None:
        return ["No __NEXT_DATA__ found on page - using fallback parser"]

    blocks = find_blocks(data)
    if blocks:
        types = list(dict.fromkeys(str(block.get("__typename")) for block in blocks))
        return [f"Found {len(blocks)} blocks with types: {', '.join(types)}"]

    lines = ["No blocks found in __NEXT_DATA__ responses"]
    page_props = dig(data, ("props", "pageProps"))
    if isinstance(page_props, dict):
        lines.append(f"pageProps keys: {', '.join(page_props.keys())}")
    for index, response in enumerate(iter_responses(data)):
        response_data = response.get("data")
        if not isinstance(response_data, dict):
            continue
        lines.append(f"responses[{index}].data keys: {', '.join(response_data.keys())}")
        for key, value in response_data.items():
            if isinstance(value, dict) and {"blocks", "body", "content"} & value.keys():
                lines.append(
                    f"Found potential content at responses[{index}].data.{key} "
                    f"with keys: {', '.join(value.keys())}"
                )
    return lines
