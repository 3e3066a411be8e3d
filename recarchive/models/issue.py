"""Issue model for newsletter editions."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import DBModel


class Issue(DBModel):
    """One published edition of the newsletter."""

    title: str = Field(..., description="Issue title")
    url: str = Field(..., description="Canonical issue URL (unique)")
    date: Optional[datetime] = Field(None, description="Publish date, if known")
    issue_number: Optional[int] = Field(None, description="Issue number, if known")
    scraped_at: Optional[datetime] = Field(None, description="When recommendations were last parsed")

    @property
    def is_scraped(self) -> bool:
        """Whether the content parser has run for this issue."""
        return self.scraped_at is not None
