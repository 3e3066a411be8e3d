"""Page fetching for the scrape pipeline."""

from .fetcher import PageFetcher
from .models import PageContent

__all__ = ["PageFetcher", "PageContent"]
