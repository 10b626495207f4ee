import logging
from datetime import datetime
from typing import Optional

from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError

from common.exceptions import DuplicateKeyError
from common.helpers import db_operation_handler, to_mongo_datetime
from event.models import EventResponse, to_persisted_keys
from event.schemas import SYSTEM_FIELDS, EventModel

logger = logging.getLogger(__name__)


def _event_filter(
    category: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
) -> dict:
    query = {}
    if category is not None:
        query["category"] = category
    if start is not None or end is not None:
        query["dateTime"] = {}
        if start is not None:
            query["dateTime"]["$gte"] = to_mongo_datetime(start)
        if end is not None:
            query["dateTime"]["$lte"] = to_mongo_datetime(end)
    return query


@db_operation_handler
def create_event(model: EventModel, data) -> EventResponse:
    """Validate and insert a new event."""
    document = model.validate(data)
    now = model.now()
    document["createdAt"] = now
    document["updatedAt"] = now
    try:
        result = model.collection.insert_one(document)
    except MongoDuplicateKeyError as e:
        logger.warning(f"Duplicate event ID: {document['eventId']}")
        raise DuplicateKeyError(document["eventId"]) from e
    document["_id"] = result.inserted_id
    logger.info(f"Created event {document['eventId']}")
    return model.to_response(document)


@db_operation_handler
def get_event_by_id(model: EventModel, event_id: str) -> Optional[EventResponse]:
    document = model.collection.find_one({"eventId": event_id.strip()})
    if document is None:
        return None
    return model.to_response(document)


@db_operation_handler
def get_events(
    model: EventModel,
    category: Optional[str] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    skip: int = 0,
    limit: int = 10,
) -> list[EventResponse]:
    """Events ordered by date, optionally filtered by category and date range."""
    cursor = (
        model.collection.find(_event_filter(category, start, end))
        .sort("dateTime", ASCENDING)
        .skip(skip)
        .limit(limit)
    )
    return [model.to_response(document) for document in cursor]


@db_operation_handler
def count_events(model: EventModel, category: Optional[str] = None) -> int:
    return model.collection.count_documents(_event_filter(category))


@db_operation_handler
def update_event(model: EventModel, event_id: str, changes: dict) -> Optional[EventResponse]:
    """
    Apply changes to an event and re-validate the whole record.

    Passing mapCoordinates=None removes the coordinates. createdAt is kept,
    updatedAt is refreshed. Returns None when no event has this ID.
    """
    existing = model.collection.find_one({"eventId": event_id.strip()})
    if existing is None:
        return None

    merged = {
        key: value for key, value in existing.items() if key not in SYSTEM_FIELDS
    }
    changed = to_persisted_keys(changes)
    merged.update(changed)
    document = model.validate(merged)

    # Only the changed paths are written so concurrent writes to other fields survive
    fields = {key: document[key] for key in changed if key in document}
    fields["updatedAt"] = model.now()
    update = {"$set": fields}
    if "mapCoordinates" in changed and "mapCoordinates" not in document:
        update["$unset"] = {"mapCoordinates": ""}

    try:
        updated = model.collection.find_one_and_update(
            {"_id": existing["_id"]}, update, return_document=ReturnDocument.AFTER
        )
    except MongoDuplicateKeyError as e:
        logger.warning(f"Duplicate event ID: {document['eventId']}")
        raise DuplicateKeyError(document["eventId"]) from e
    if updated is None:
        return None
    logger.info(f"Updated event {updated['eventId']}")
    return model.to_response(updated)


@db_operation_handler
def delete_event(model: EventModel, event_id: str) -> Optional[EventResponse]:
    document = model.collection.find_one_and_delete({"eventId": event_id.strip()})
    if document is None:
        return None
    logger.info(f"Deleted event {document['eventId']}")
    return model.to_response(document)
