"""Tag model for curation labels."""

from pydantic import Field

from .base import DBModel


class Tag(DBModel):
    """Free-form label, unique by name."""

    name: str = Field(..., description="Normalized tag name")
