"""Recommendation archive for newsletter issues."""

__version__ = "0.1.0"
