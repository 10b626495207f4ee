"""
Test the MongoDB connection, model registry and startup.
"""
import logging

import mongomock
import pytest

import common.database
import main
from common.database import MongoDBConnection, get_mongo_db, register_model, reset_models
from common.logging_config import setup_logging
from event.crud import count_events, create_event
from event.schemas import get_event_model


@pytest.fixture
def mock_client(monkeypatch):
    monkeypatch.setattr(common.database, "MongoClient", mongomock.MongoClient)
    monkeypatch.setattr(MongoDBConnection, "_instance", None)
    reset_models()
    yield
    reset_models()


class TestMongoDBConnection:
    """Test the shared connection."""

    def test_singleton(self, mock_client):
        """Test the connection is created once per process."""
        first = MongoDBConnection()
        second = MongoDBConnection()

        assert first is second
        assert first.db.name == common.database.MONGODB_DATABASE

    def test_close_allows_reconnect(self, mock_client):
        """Test a closed connection is replaced on next use."""
        first = MongoDBConnection()
        first.close()

        assert MongoDBConnection() is not first

    def test_get_mongo_db(self, mock_client):
        """Test the context manager yields the configured database."""
        with get_mongo_db() as db:
            assert db.name == common.database.MONGODB_DATABASE
        assert MongoDBConnection._instance is None


class TestModelRegistry:
    """Test registering models once per process."""

    def test_factory_runs_once(self, mock_client):
        calls = []

        def factory():
            calls.append(1)
            return object()

        first = register_model("Thing", factory)
        second = register_model("Thing", factory)

        assert first is second
        assert len(calls) == 1


class TestStartup:
    """Test the entry point."""

    def test_init_event_model(self, mock_client):
        """Test startup registers the Event model with its indexes."""
        model = main.init_event_model()

        assert model.name == "Event"
        assert "eventId_1" in model.collection.index_information()

    def test_model_usable_after_init(self, mock_client, event_data):
        """Test the registered model keeps an open connection once startup returns."""
        model = main.init_event_model()
        connection = MongoDBConnection._instance

        assert connection is not None
        assert MongoDBConnection() is connection
        assert get_event_model() is model
        assert model.collection.database == connection.db

        create_event(get_event_model(), event_data)
        assert count_events(get_event_model()) == 1

    def test_setup_logging(self):
        """Test the root logger gets one console handler at the requested level."""
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        root.handlers = []
        try:
            setup_logging("debug")
            setup_logging("debug")
            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert logging.getLogger("pymongo").level == logging.WARNING
        finally:
            root.handlers = handlers
            root.setLevel(level)
