"""Value records produced by the extraction pipeline."""

import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Category = Literal[
    "apps",
    "shows",
    "movies",
    "games",
    "books",
    "videos",
    "music",
    "podcasts",
    "articles",
    "gadgets",
    "food-drink",
    "blog",
    "website",
]

CATEGORIES = (
    "apps",
    "shows",
    "movies",
    "games",
    "books",
    "videos",
    "music",
    "podcasts",
    "articles",
    "gadgets",
    "food-drink",
    "blog",
    "website",
)

DEFAULT_CATEGORY = "articles"


class ParsedRecommendation(BaseModel):
    """One recommendation extracted from a newsletter issue page."""

    title: str = Field(..., description="Resolved recommendation title")
    url: Optional[str] = Field(None, description="Recommended link")
    description: Optional[str] = Field(None, description="Surrounding context, at most 500 chars")
    category: Category = Field(DEFAULT_CATEGORY, description="Guessed category")
    section_name: Optional[str] = Field(None, description="Newsletter section at the point of extraction")
    is_primary_link: bool = Field(False, description="Context carried the (link) marker")
    is_crowdsourced: bool = Field(False, description="Submitted by a reader")
    contributor_name: Optional[str] = Field(None, description="Reader credited for the item")


class IssueStub(BaseModel):
    """Issue discovered on an archive-index page."""

    title: str = Field(..., description="Issue title as linked from the archive")
    url: str = Field(..., description="Canonical issue URL")
    date: Optional[datetime.date] = Field(None, description="Date derived from the URL, if present")
