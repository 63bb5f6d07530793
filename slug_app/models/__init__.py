"""
Database models for the slug shortener.

A ShortenedUrl and its VisitAnalytics row share one lifecycle: they are
inserted together and deleted together.
"""

from .url import ShortenedUrl
from .analytic import VisitAnalytics

__all__ = ["ShortenedUrl", "VisitAnalytics"]
