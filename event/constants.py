import os

from dotenv import load_dotenv

load_dotenv()

EVENT_MODEL_NAME = "Event"
EVENTS_COLLECTION = os.getenv("EVENTS_COLLECTION", "events")


class EventCategory:
    TECHNICAL = "technical"
    CULTURAL = "cultural"
    CONVENOR = "convenor"

    @classmethod
    def values(cls) -> list[str]:
        return [cls.TECHNICAL, cls.CULTURAL, cls.CONVENOR]


CATEGORY_MESSAGE = "Category must be either technical, cultural, or convenor"

# Human-readable label for every persisted field, used in generic messages
FIELD_LABELS = {
    "eventId": "Event ID",
    "category": "Category",
    "societyName": "Society name",
    "eventName": "Event name",
    "regFees": "Registration fees",
    "dateTime": "Date and time",
    "location": "Location",
    "briefDescription": "Brief description",
    "pdfLink": "PDF link",
    "image": "Image",
    "mapCoordinates": "Map coordinates",
    "mapCoordinates.latitude": "Latitude",
    "mapCoordinates.longitude": "Longitude",
    "contactInfo": "Contact info",
    "team": "Team count",
    "teamLimit": "Team limit",
}

MIN_MESSAGES = {
    "regFees": "Registration fees cannot be negative",
    "team": "Team count cannot be negative",
    "teamLimit": "Team limit cannot be negative",
}

GEO_RANGE_MESSAGES = {
    "mapCoordinates.latitude": "Latitude must be between -90 and 90",
    "mapCoordinates.longitude": "Longitude must be between -180 and 180",
}
