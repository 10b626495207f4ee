import logging
from datetime import datetime, timezone
from functools import wraps

from pymongo.errors import PyMongoError

from common.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return as_utc(datetime.now(timezone.utc))


def as_utc(value: datetime) -> datetime:
    """Aware UTC datetime at millisecond precision. Naive values are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_mongo_datetime(value: datetime) -> datetime:
    """Naive UTC datetime, the form MongoDB stores and returns."""
    return as_utc(value).replace(tzinfo=None)


def db_operation_handler(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except PyMongoError as e:
            logger.error(f"MongoDB error in {func.__name__}: {e}")
            raise DatabaseError(f"MongoDB operation failed: {e}") from e

    return wrapper
