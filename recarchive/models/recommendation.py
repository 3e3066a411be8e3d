"""Recommendation model for items linked from an issue."""

from typing import Optional

from pydantic import Field

from ..extraction.models import DEFAULT_CATEGORY, Category
from .base import DBModel


class Recommendation(DBModel):
    """Recommendation stored for an issue."""

    issue_id: int = Field(..., description="Foreign key to issues table")
    title: str = Field(..., description="Recommendation title")
    url: Optional[str] = Field(None, description="Recommended link")
    description: Optional[str] = Field(None, description="Context snippet")
    category: Category = Field(DEFAULT_CATEGORY, description="Recommendation category")
    section_name: Optional[str] = Field(None, description="Newsletter section")
    is_primary_link: bool = Field(False, description="Marked with the (link) convention")
    is_crowdsourced: bool = Field(False, description="Submitted by a reader")
    contributor_name: Optional[str] = Field(None, description="Reader credited for the item")
    hidden: bool = Field(False, description="Suppressed by an admin")
    dead: bool = Field(False, description="Marked as a broken link")
