import logging

from common.logging_config import setup_logging
from event.crud import count_events
from event.schemas import get_event_model

logger = logging.getLogger(__name__)


def init_event_model():
    """Register the Event model and its indexes on the shared MongoDB connection."""
    model = get_event_model()
    logger.info(
        f"{model.name} model ready on '{model.collection.name}' "
        f"({count_events(model)} events stored)"
    )
    return model


if __name__ == "__main__":
    setup_logging()
    init_event_model()
