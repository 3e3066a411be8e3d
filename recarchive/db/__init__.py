"""Database management for the recommendation archive."""

from .connection import close_connection_pool, get_connection, get_connection_pool
from .init import init_database, validate_connection
from .issues import IssueManager
from .recommendations import RecommendationStorage
from .tags import TagManager, normalize_tag_name

__all__ = [
    "IssueManager",
    "RecommendationStorage",
    "TagManager",
    "close_connection_pool",
    "get_connection",
    "get_connection_pool",
    "init_database",
    "normalize_tag_name",
    "validate_connection",
]
