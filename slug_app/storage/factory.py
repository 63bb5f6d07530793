"""
Factory for creating URL store instances.
Simple, clean factory with singleton caching.
"""

import logging
from enum import Enum
from .strategies import UrlStore, SQLAlchemyUrlStore, InMemoryUrlStore
from slug_app.config import settings

logger = logging.getLogger(__name__)


class UrlStoreBackend(Enum):
    """Available URL store backends"""
    SQLALCHEMY = "sqlalchemy"
    MEMORY = "memory"


class UrlStoreFactory:
    """
    Simple factory for creating URL store instances.

    Gets configuration from settings (not passed as parameters).
    """

    _instance: UrlStore = None  # Single cached instance

    @classmethod
    def create(cls, backend: UrlStoreBackend) -> UrlStore:
        """
        Create or return cached URL store instance.

        Args:
            backend: Type of store backend (from enum)

        Returns:
            Singleton URL store instance
        """
        if cls._instance is not None:
            return cls._instance

        paging = {
            "default_per_page": settings.default_per_page,
        }

        if backend == UrlStoreBackend.SQLALCHEMY:
            from slug_app.database.connection import SessionLocal, init_db

            init_db()
            cls._instance = SQLAlchemyUrlStore(SessionLocal, **paging)
            logger.info("SQLAlchemy URL store initialized")

        elif backend == UrlStoreBackend.MEMORY:
            cls._instance = InMemoryUrlStore(**paging)
            logger.info("In-memory URL store initialized")

        else:
            raise ValueError(f"Unknown store backend: {backend}")

        return cls._instance

    @classmethod
    def clear_instance(cls):
        """Clear cached instance (for testing)"""
        cls._instance = None
