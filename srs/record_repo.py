"""
MongoDB repository for review records.

Stores one document per (namespace, item_id) holding the flat record
fields, so several namespaces can share one collection.
"""

from __future__ import annotations

from typing import Iterable, Optional

from loguru import logger
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from srs.config import DEFAULT_MONGO_DB_NAME, get_mongo_uri
from srs.sm2.persistence import RecordStore, decode_record, encode_record

# Configuration
COLLECTION_NAME = "review_records"

# Global connection pool (reused across requests)
_client: Optional[MongoClient] = None


# ---- Connection Management ----

def get_client() -> MongoClient:
    """
    Get the shared MongoDB client, creating it on first use.

    Returns:
        MongoClient connected to MONGO_URI
    """
    global _client

    if _client is not None:
        return _client

    _client = MongoClient(
        get_mongo_uri(),
        maxPoolSize=10,  # Connection pool size
        minPoolSize=1,   # Keep at least 1 connection alive
        maxIdleTimeMS=60000  # Keep connections alive for 60 seconds
    )
    return _client


def get_collection(
    db_name: str = DEFAULT_MONGO_DB_NAME,
    collection_name: str = COLLECTION_NAME
) -> Collection:
    """Get the review record collection."""
    return get_client()[db_name][collection_name]


def ensure_indexes(collection: Collection) -> None:
    """Unique (namespace, item_id) key; safe to call repeatedly."""
    collection.create_index(
        [("namespace", ASCENDING), ("item_id", ASCENDING)],
        unique=True,
        name="namespace_item_id"
    )


# ---- Store ----

class MongoRecordStore(RecordStore):
    """Review record store backed by a MongoDB collection."""

    def __init__(self, collection: Optional[Collection] = None):
        self.collection = collection if collection is not None else get_collection()

    def get(self, namespace, item_id, now=None):
        try:
            doc = self.collection.find_one(
                {"namespace": namespace, "item_id": item_id},
                {"_id": 0, "namespace": 0}
            )
        except PyMongoError as exc:
            logger.error("Failed to load review record {}/{}: {}", namespace, item_id, exc)
            return None
        return decode_record(doc, item_id, now)

    def get_many(self, namespace, item_ids: Iterable[str], now=None):
        wanted = list(item_ids)
        if not wanted:
            return {}

        try:
            docs = list(self.collection.find(
                {"namespace": namespace, "item_id": {"$in": wanted}},
                {"_id": 0, "namespace": 0}
            ))
        except PyMongoError as exc:
            logger.error("Failed to load review records for {}: {}", namespace, exc)
            return {}

        result = {}
        for doc in docs:
            item_id = doc.get("item_id")
            record = decode_record(doc, item_id, now)
            if record is not None:
                result[item_id] = record
        return result

    def set(self, namespace, item_id, record):
        doc = encode_record(record)
        doc["namespace"] = namespace

        try:
            self.collection.replace_one(
                {"namespace": namespace, "item_id": item_id},
                doc,
                upsert=True
            )
            return True
        except PyMongoError as exc:
            logger.error("Failed to save review record {}/{}: {}", namespace, item_id, exc)
            return False
