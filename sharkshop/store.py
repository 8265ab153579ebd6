"""
MongoDB collections used by the store and the helpers shared by every
entity module.

Unique indexes are the source of truth for uniqueness. Application-level
duplicate checks only produce friendlier errors earlier; a
``DuplicateKeyError`` raised by the database is always reported as
``Conflict``.
"""
from datetime import datetime, timezone
from typing import Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from flask import current_app
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from sharkshop.errors import Conflict


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value) -> Optional[ObjectId]:
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None


def isoformat(value) -> Optional[str]:
    return value.isoformat() if isinstance(value, datetime) else None


class Store:
    def __init__(self, db):
        self.db = db

    @property
    def admins(self):
        return self.db.admins

    @property
    def categories(self):
        return self.db.categories

    @property
    def products(self):
        return self.db.products

    @property
    def orders(self):
        return self.db.orders

    def ensure_indexes(self, logger=None):
        specs = [
            (self.admins, [("email", ASCENDING)], {"unique": True}),
            (self.categories, [("name", ASCENDING)], {"unique": True}),
            (self.products, [("product_id", ASCENDING)], {"unique": True}),
            (self.products, [("category", ASCENDING), ("created_at", DESCENDING)], {}),
            (self.orders, [("created_at", DESCENDING)], {}),
        ]
        for collection, keys, options in specs:
            try:
                collection.create_index(keys, **options)
            except PyMongoError as exc:
                if logger is not None:
                    logger.warning(
                        "Unable to ensure index %s on %s: %s", keys, collection.name, exc
                    )

    def insert(self, collection, document: Dict, conflict_message: str) -> Dict:
        try:
            result = collection.insert_one(document)
        except DuplicateKeyError as exc:
            raise Conflict(conflict_message) from exc
        return collection.find_one({"_id": result.inserted_id})

    def update(self, collection, query: Dict, fields: Dict, conflict_message: str) -> Optional[Dict]:
        try:
            return collection.find_one_and_update(
                query,
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise Conflict(conflict_message) from exc

    def ping(self) -> bool:
        try:
            self.db.command("ping")
        except PyMongoError:
            return False
        return True


def get_store() -> Store:
    return current_app.extensions["store"]
