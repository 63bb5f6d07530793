"""
URL store module.

Implements the Strategy Pattern for pluggable persistence of shortened URLs
and their visit analytics.
"""

from .models import UrlRecord
from .strategies import UrlStore, SQLAlchemyUrlStore, InMemoryUrlStore, normalize_pagination
from .factory import UrlStoreFactory, UrlStoreBackend

__all__ = [
    "UrlRecord",
    "UrlStore",
    "SQLAlchemyUrlStore",
    "InMemoryUrlStore",
    "normalize_pagination",
    "UrlStoreFactory",
    "UrlStoreBackend",
]
