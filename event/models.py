from datetime import datetime
from typing import Optional

from pydantic import BaseModel, confloat, conint, constr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from common.exceptions import GeoRangeError, ValidationError
from common.helpers import as_utc
from event.constants import (
    CATEGORY_MESSAGE,
    FIELD_LABELS,
    GEO_RANGE_MESSAGES,
    MIN_MESSAGES,
    EventCategory,
)

TrimmedStr = constr(strip_whitespace=True, min_length=1)


class MapCoordinates(BaseModel):
    """Embedded location of an event; stored inside the event without an _id."""

    class Config:
        frozen = True

    latitude: confloat(ge=-90, le=90)
    longitude: confloat(ge=-180, le=180)


class EventCreate(BaseModel):

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    event_id: TrimmedStr
    category: str
    society_name: TrimmedStr
    event_name: TrimmedStr
    reg_fees: confloat(ge=0)
    date_time: datetime
    location: TrimmedStr
    brief_description: TrimmedStr
    pdf_link: TrimmedStr
    image: constr(min_length=1)  # base64url encoded image
    map_coordinates: Optional[MapCoordinates] = None
    contact_info: TrimmedStr
    team: conint(ge=0) = 0
    team_limit: conint(ge=0)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str) -> str:
        if value not in EventCategory.values():
            raise ValueError(CATEGORY_MESSAGE)
        return value

    @field_validator("date_time")
    @classmethod
    def normalize_date_time(cls, value: datetime) -> datetime:
        return as_utc(value)

    def to_document(self) -> dict:
        """Return the record keyed the way it is persisted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class EventResponse(EventCreate):
    id: str
    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, value: datetime) -> datetime:
        return as_utc(value)


def to_persisted_keys(data: dict) -> dict:
    """Rename attribute-style keys (event_id) to persisted keys (eventId)."""
    fields = EventCreate.model_fields
    return {
        fields[key].alias if key in fields else key: value
        for key, value in data.items()
    }


def validate_event(data) -> EventCreate:
    """Validate a raw record, raising ValidationError with per-field messages."""
    if isinstance(data, EventCreate):
        data = data.model_dump(by_alias=True)
    try:
        return EventCreate.model_validate(data)
    except PydanticValidationError as e:
        raise validation_error_from(e) from e


def validation_error_from(exc: PydanticValidationError) -> ValidationError:
    errors = {}
    for error in exc.errors():
        path = _field_path(error["loc"])
        errors.setdefault(path, _error_message(path, error))

    geo_failures = [
        path for path, message in errors.items()
        if GEO_RANGE_MESSAGES.get(path) == message
    ]
    if geo_failures:
        return GeoRangeError(errors)
    return ValidationError(errors)


def _field_path(loc) -> str:
    fields = EventCreate.model_fields
    parts = [
        fields[part].alias if part in fields else str(part)
        for part in loc
    ]
    return ".".join(parts) or "event"


def _error_message(path: str, error: dict) -> str:
    kind = error["type"]
    label = FIELD_LABELS.get(path, path)

    if kind in ("missing", "string_too_short") or error.get("input") is None:
        return f"{label} is required"
    if path == "category":
        return CATEGORY_MESSAGE
    if kind in ("greater_than_equal", "less_than_equal"):
        if path in GEO_RANGE_MESSAGES:
            return GEO_RANGE_MESSAGES[path]
        if path in MIN_MESSAGES:
            return MIN_MESSAGES[path]
    if kind.startswith("int"):
        return f"{label} must be a whole number"
    if kind.startswith("float"):
        return f"{label} must be a number"
    if kind.startswith("datetime"):
        return f"{label} must be a valid date"
    if kind == "string_type":
        return f"{label} must be a string"
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return f"{label} must be an object"
    return f"{label} is invalid: {error['msg']}"
