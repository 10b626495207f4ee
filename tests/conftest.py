import itertools
from datetime import datetime, timedelta, timezone

import mongomock
import pytest

from common.database import reset_models
from event.schemas import get_event_model

# 1x1 PNG, base64url encoded
IMAGE = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk-M9Q"
    "DwADhgGAWjR9awAAAABJRU5ErkJggg"
)


@pytest.fixture
def clock():
    """A clock that moves forward one second on every reading."""
    start = datetime(2026, 1, 1, 9, 0, tzinfo=timezone.utc)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


@pytest.fixture
def mongo_db():
    client = mongomock.MongoClient()
    yield client["fest_events_test"]
    client.close()


@pytest.fixture
def event_model(mongo_db, clock):
    reset_models()
    yield get_event_model(mongo_db, clock=clock)
    reset_models()


@pytest.fixture
def event_data() -> dict:
    return {
        "eventId": "sprint-1",
        "category": "technical",
        "societyName": "Coding Society",
        "eventName": "Code Sprint",
        "regFees": 149.99,
        "dateTime": "2026-03-14T10:00:00Z",
        "location": "Lab 3, Main Block",
        "briefDescription": "A three hour competitive programming sprint.",
        "pdfLink": "https://fest.example.com/rules/sprint.pdf",
        "image": IMAGE,
        "mapCoordinates": {"latitude": 28.6139, "longitude": 77.209},
        "contactInfo": "sprint@fest.example.com",
        "teamLimit": 40,
    }


@pytest.fixture
def make_event(event_data):
    """Build event data with a different eventId and any overrides."""

    def _make(event_id: str, **overrides) -> dict:
        return {**event_data, "eventId": event_id, **overrides}

    return _make
