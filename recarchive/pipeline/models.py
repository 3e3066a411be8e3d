"""Result models for scrape actions."""

from typing import List

from pydantic import BaseModel, Field


class ScrapeResult(BaseModel):
    """Summary of an archive or issue scrape."""

    issues_found: int = Field(0, description="Issues discovered or queued")
    issues_scraped: int = Field(0, description="Issues parsed successfully")
    recommendations_added: int = Field(0, description="New recommendations stored")
    errors: List[str] = Field(default_factory=list, description="Non-fatal per-item errors")
    debug: List[str] = Field(default_factory=list, description="Diagnostics for single-URL scrapes")

    def merge(self, other: "ScrapeResult") -> "ScrapeResult":
        """Combine an archive scrape with the issue scrape that followed it."""
        return ScrapeResult(
            issues_found=self.issues_found,
            issues_scraped=self.issues_scraped + other.issues_scraped,
            recommendations_added=self.recommendations_added + other.recommendations_added,
            errors=self.errors + other.errors,
            debug=self.debug + other.debug,
        )


class BackfillResult(BaseModel):
    """Summary of a date or title backfill."""

    updated: int = Field(0, description="Records updated")
    skipped: int = Field(0, description="Records left unchanged")
    errors: List[str] = Field(default_factory=list, description="Non-fatal per-item errors")
