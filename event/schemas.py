"""
MongoDB definition of the Event collection.

EventModel is the handle every read and write goes through: it owns the
collection, its indexes, the clock used for createdAt/updatedAt and the
conversion between validated records and stored documents.
"""
import logging
from datetime import datetime

from pymongo import ASCENDING

from common.database import MongoDBConnection, register_model
from common.helpers import to_mongo_datetime, utc_now
from event.constants import EVENT_MODEL_NAME, EVENTS_COLLECTION
from event.models import EventResponse, validate_event

logger = logging.getLogger(__name__)

# Maintained by the model, never taken from caller input
SYSTEM_FIELDS = ("_id", "createdAt", "updatedAt")


class EventModel:
    name = EVENT_MODEL_NAME
    indexes = [
        ([("eventId", ASCENDING)], {"name": "eventId_1", "unique": True}),
        ([("category", ASCENDING)], {"name": "category_1"}),
        ([("dateTime", ASCENDING)], {"name": "dateTime_1"}),
    ]

    def __init__(self, db, collection_name: str = EVENTS_COLLECTION, clock=utc_now):
        self.collection = db[collection_name]
        self.clock = clock

    def create_indexes(self) -> list[str]:
        names = [
            self.collection.create_index(keys, **options)
            for keys, options in self.indexes
        ]
        logger.info(f"Indexes ready on {self.collection.name}: {', '.join(names)}")
        return names

    def validate(self, data) -> dict:
        """Validate a record and return it as a storable document."""
        document = validate_event(data).to_document()
        document["dateTime"] = to_mongo_datetime(document["dateTime"])
        return document

    def now(self) -> datetime:
        return to_mongo_datetime(self.clock())

    def to_response(self, document: dict) -> EventResponse:
        return EventResponse.model_validate({**document, "id": str(document["_id"])})


def get_event_model(db=None, clock=None) -> EventModel:
    """Return the process-wide Event model, registering it on first use."""

    def build():
        database = db if db is not None else MongoDBConnection().db
        model = EventModel(database, clock=clock or utc_now)
        model.create_indexes()
        return model

    return register_model(EVENT_MODEL_NAME, build)
