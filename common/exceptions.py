class EventStoreError(Exception):
    """Base exception for event store errors."""


class ValidationError(EventStoreError):
    """Raised when a record fails field validation before it is written."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(
            "; ".join(f"{field}: {message}" for field, message in errors.items())
        )


class GeoRangeError(ValidationError):
    """Raised when map coordinates fall outside valid geographic bounds."""


class DuplicateKeyError(EventStoreError):
    """Raised when an eventId collides with an existing record."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event ID '{event_id}' already exists")


class DatabaseError(EventStoreError):
    """Raised when a MongoDB operation fails."""
