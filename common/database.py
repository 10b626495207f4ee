import logging
import os
from contextlib import contextmanager

from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.errors import PyMongoError

load_dotenv()

logger = logging.getLogger(__name__)

# NOTE: For local setup
# MONGODB_URL = "mongodb://localhost:27017"
# MONGODB_DATABASE = "fest_events"

MONGODB_URL = os.getenv("MONGODB_URL", "mongodb://localhost:27017")
MONGODB_DATABASE = os.getenv("MONGODB_DATABASE", "fest_events")


class MongoDBConnection:
    _instance = None

    def __new__(cls):
        # Use the singleton pattern to ensure only one instance
        if cls._instance is None:
            instance = super().__new__(cls)
            try:
                instance.client = MongoClient(MONGODB_URL)
                instance.db = instance.client[MONGODB_DATABASE]
                logger.info(f"MongoDB connection established ({MONGODB_DATABASE})")
            except PyMongoError as e:
                logger.error(f"MongoDB connection failed: {e}")
                raise
            cls._instance = instance
        return cls._instance

    def close(self):
        """Close the MongoDB connection."""
        try:
            self.client.close()
            logger.info("MongoDB connection closed")
        except PyMongoError as e:
            logger.error(f"Error closing MongoDB connection: {e}")
        finally:
            MongoDBConnection._instance = None


@contextmanager
def get_mongo_db():
    """Provide a MongoDB database."""
    mongo_conn = MongoDBConnection()
    try:
        yield mongo_conn.db
    finally:
        mongo_conn.close()


# Models registered in this process, keyed by model name
_models = {}


def register_model(name: str, factory):
    """Return the model registered under name, building it on first request only."""
    model = _models.get(name)
    if model is None:
        model = factory()
        _models[name] = model
        logger.info(f"Registered model {name}")
    return model


def reset_models():
    """Forget every registered model."""
    _models.clear()
