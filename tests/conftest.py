"""
Test configuration and fixtures for the slug shortener.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from main import app
from slug_app.cache.strategies import InMemoryCache
from slug_app.database.connection import build_engine, init_db
from slug_app.dependencies import get_cache, get_url_store, get_slug_generator
from slug_app.services.slug_generator import SlugGenerator
from slug_app.services.slug_strategies import RandomSlugStrategy
from slug_app.services.url_service import URLService
from slug_app.storage.strategies import InMemoryUrlStore, SQLAlchemyUrlStore


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    A fresh SQLite database file for each test.
    This ensures tests are isolated and don't affect each other.
    """
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_store(engine):
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    return SQLAlchemyUrlStore(session_factory)


@pytest.fixture
def memory_store():
    return InMemoryUrlStore()


@pytest.fixture(params=["sql_store", "memory_store"])
def store(request):
    """Runs the test once against every store backend"""
    return request.getfixturevalue(request.param)


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def slug_generator():
    """Seeded generator so slug sequences are reproducible"""
    return SlugGenerator(RandomSlugStrategy(length=8, seed=1234), max_attempts=5)


@pytest.fixture
def service(store, cache, slug_generator):
    return URLService(store=store, slug_generator=slug_generator, cache=cache)


@pytest.fixture(scope="function")
def client(sql_store, cache, slug_generator):
    """
    Create a test client with store, cache and slug generator overridden.
    This is the main fixture that API tests will use.
    """
    app.dependency_overrides[get_url_store] = lambda: sql_store
    app.dependency_overrides[get_cache] = lambda: cache
    app.dependency_overrides[get_slug_generator] = lambda: slug_generator

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
