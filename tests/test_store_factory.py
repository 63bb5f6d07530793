"""
Tests for the URL store factory.
"""
from unittest.mock import patch

import pytest

from slug_app.storage.factory import UrlStoreBackend, UrlStoreFactory
from slug_app.storage.strategies import InMemoryUrlStore, SQLAlchemyUrlStore


class TestUrlStoreFactory:

    def setup_method(self):
        UrlStoreFactory.clear_instance()

    def teardown_method(self):
        UrlStoreFactory.clear_instance()

    def test_creates_memory_store(self):
        store = UrlStoreFactory.create(UrlStoreBackend.MEMORY)

        assert isinstance(store, InMemoryUrlStore)
        assert store.default_per_page == 20

    def test_creates_sqlalchemy_store_and_tables(self):
        with patch("slug_app.database.connection.init_db") as init_db:
            store = UrlStoreFactory.create(UrlStoreBackend.SQLALCHEMY)

        assert isinstance(store, SQLAlchemyUrlStore)
        init_db.assert_called_once()

    def test_returns_singleton(self):
        first = UrlStoreFactory.create(UrlStoreBackend.MEMORY)
        assert UrlStoreFactory.create(UrlStoreBackend.MEMORY) is first

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown store backend"):
            UrlStoreFactory.create("mongodb")

        assert UrlStoreFactory._instance is None
