"""Data models for the recommendation archive."""

from .issue import Issue
from .recommendation import Recommendation
from .tag import Tag

__all__ = ["Issue", "Recommendation", "Tag"]
