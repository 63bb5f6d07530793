"""
FastAPI dependencies for dependency injection.

This module provides singleton instances of the store, cache and slug
generator that are injected into the service and routes.
Tests swap any of them through app.dependency_overrides.
"""

from functools import lru_cache

from fastapi import Depends

from slug_app.cache.factory import CacheFactory, CacheBackend
from slug_app.cache.strategies import CacheStrategy
from slug_app.config import settings
from slug_app.services.slug_factory import SlugStrategyFactory
from slug_app.services.slug_generator import SlugGenerator
from slug_app.services.url_service import URLService
from slug_app.storage.factory import UrlStoreFactory, UrlStoreBackend
from slug_app.storage.strategies import UrlStore


@lru_cache()
def get_cache() -> CacheStrategy:
    """Cache instance (singleton) selected by settings.cache_backend"""
    backend = CacheBackend(settings.cache_backend)
    return CacheFactory.create(backend)


@lru_cache()
def get_url_store() -> UrlStore:
    """URL store instance (singleton) selected by settings.store_backend"""
    backend = UrlStoreBackend(settings.store_backend)
    return UrlStoreFactory.create(backend)


@lru_cache()
def get_slug_generator() -> SlugGenerator:
    """Slug generator over the strategy selected by settings.slug_strategy"""
    return SlugGenerator(
        SlugStrategyFactory.create_strategy(),
        max_attempts=settings.max_slug_attempts
    )


def get_url_service(
    store: UrlStore = Depends(get_url_store),
    cache: CacheStrategy = Depends(get_cache),
    slug_generator: SlugGenerator = Depends(get_slug_generator)
) -> URLService:
    """
    Get URLService with all dependencies injected.

    Routes depend on the service only; the service depends on the
    infrastructure (store, cache, slug generator).
    """
    return URLService(store=store, slug_generator=slug_generator, cache=cache)
