"""Scrape and backfill orchestration."""

from .models import BackfillResult, ScrapeResult
from .orchestrator import ScrapeError, ScrapeOrchestrator, print_backfill_summary, print_scrape_summary

__all__ = [
    "BackfillResult",
    "ScrapeError",
    "ScrapeOrchestrator",
    "ScrapeResult",
    "print_backfill_summary",
    "print_scrape_summary",
]
