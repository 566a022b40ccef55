"""MongoDB connection held on the FastAPI app state."""

import logging

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

logger = logging.getLogger(__name__)

MONGO_URL = "mongodb://localhost:27017"
DB_NAME = "crs_ledger"
CRS_COLLECTION = "crs_records"


def connect_to_mongo(app, mongo_url: str = MONGO_URL, db_name: str = DB_NAME):
    app.state.mongo_client = AsyncIOMotorClient(mongo_url)
    app.state.db_name = db_name
    logger.info("MongoDB client created for database %s", db_name)


def close_mongo_connection(app):
    client = getattr(app.state, "mongo_client", None)
    if client:
        client.close()
        app.state.mongo_client = None


def get_db(request: Request):
    client = getattr(request.app.state, "mongo_client", None)
    if client is None:
        raise RuntimeError("MongoDB not connected")
    return client[getattr(request.app.state, "db_name", DB_NAME)]


def get_crs_collection(request: Request) -> AsyncIOMotorCollection:
    return get_db(request)[CRS_COLLECTION]
