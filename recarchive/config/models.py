"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("recarchive", description="Database name")
    user: str = Field("recarchive_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class ScraperConfig(BaseModel):
    """Newsletter site and fetch politeness settings."""

    base_url: str = Field("https://www.theverge.com", description="Newsletter site root")
    newsletter_path: str = Field("installer-newsletter", description="Newsletter section path on the site")
    user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        description="User agent sent with every request",
    )
    delay_between_requests: float = Field(2.0, description="Seconds between newsletter page fetches", ge=0.0)
    title_delay: float = Field(1.5, description="Seconds between external page fetches", ge=0.0)
    timeout: float = Field(30.0, description="Archive page fetch timeout (seconds)", gt=0.0)
    issue_timeout: float = Field(60.0, description="Issue page fetch timeout (seconds)", gt=0.0)
    title_timeout: float = Field(15.0, description="External page fetch timeout (seconds)", gt=0.0)
    max_archive_pages: int = Field(20, description="Safety limit on archive pages", ge=1, le=500)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute http(s) URL without a trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must be an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @field_validator("newsletter_path")
    @classmethod
    def validate_newsletter_path(cls, v: str) -> str:
        """Normalize the path to a bare slug."""
        path = v.strip().strip("/")
        if not path:
            raise ValueError("newsletter_path cannot be empty")
        return path

    @property
    def archive_url(self) -> str:
        """URL of the newsletter's landing page."""
        return f"{self.base_url}/{self.newsletter_path}"

    @property
    def site_domain(self) -> str:
        """Bare domain of the newsletter site."""
        domain = self.base_url.split("://", 1)[-1]
        if domain.startswith("www."):
            domain = domain[4:]
        return domain


class ConfigModel(BaseModel):
    """Main configuration model."""

    workspace_root: str = Field("~/Recommendation-Archive", description="Root directory for exports")
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    scraper: ScraperConfig = Field(default_factory=ScraperConfig)
