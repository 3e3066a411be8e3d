"""Sequential page fetcher with a fixed politeness delay."""

import time
from typing import Callable, Optional

import httpx

from .models import PageContent


class PageFetcher:
    """Fetch pages one at a time from the newsletter site and linked sites.

    Pages are never fetched concurrently; callers pause between requests to
    distinct pages to keep the load on the source site low.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        delay: float = 2.0,
        user_agent: str = "recarchive/1.0",
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize page fetcher."""
        self.timeout = timeout
        self.delay = delay
        self.user_agent = user_agent
        self._sleep = sleep
        self._client = httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml",
            },
            transport=transport,
        )

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def pause(self, seconds: Optional[float] = None) -> None:
        """Wait before the next request."""
        seconds = self.delay if seconds is None else seconds
        if seconds > 0:
            self._sleep(seconds)

    def _failed(self, url: str, error: str, status_code: Optional[int] = None) -> PageContent:
        return PageContent(
            url=url,
            final_url=url,
            status_code=status_code,
            fetch_success=False,
            error=error,
        )

    def fetch(self, url: str, timeout: Optional[float] = None) -> PageContent:
        """Fetch a single page, reporting failures in the result."""
        try:
            response = self._client.get(url, timeout=timeout or self.timeout)
            response.raise_for_status()
            return PageContent(
                url=url,
                final_url=str(response.url),
                html=response.text,
                status_code=response.status_code,
            )

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            error_msg = f"HTTP {status}"
            if status == 404:
                error_msg = "Page not found (404)"
            elif status == 403:
                error_msg = "Access forbidden (403)"
            elif status == 429:
                error_msg = "Rate limited (429)"
            elif status >= 500:
                error_msg = f"Server error ({status})"
            return self._failed(url, error_msg, status)
        except httpx.TimeoutException:
            return self._failed(url, "Request timed out")
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            return self._failed(url, f"Network error: {e}")
