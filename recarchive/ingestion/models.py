"""Data models for page fetching."""

from typing import Optional

from pydantic import BaseModel, Field


class PageContent(BaseModel):
    """Result of fetching one page."""

    url: str = Field(..., description="Requested URL")
    final_url: str = Field(..., description="URL after redirects")
    html: str = Field("", description="Response body")
    status_code: Optional[int] = Field(None, description="HTTP status code")
    fetch_success: bool = Field(True, description="Whether fetch was successful")
    error: Optional[str] = Field(None, description="Error message if failed")
