"""
Admin credential store and the login flow.
"""
from functools import lru_cache
from typing import Dict, List

import bcrypt
from flask import current_app
from pymongo import DESCENDING

from sharkshop.errors import Conflict, InvalidCredentials, NotFound, ValidationFailed
from sharkshop.store import Store, isoformat, parse_object_id, utcnow
from sharkshop.validators import validate_admin_create, validate_admin_update, validate_login

DUPLICATE_ADMIN_MESSAGE = "Admin with this email already exists"


def _bcrypt_rounds() -> int:
    return int(current_app.config.get("BCRYPT_ROUNDS", 12))


@lru_cache(maxsize=None)
def _placeholder_hash(rounds: int) -> bytes:
    return bcrypt.hashpw(b"placeholder-password", bcrypt.gensalt(rounds))


def hash_password(password: str) -> str:
    rounds = _bcrypt_rounds()
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds)).decode("utf-8")


def check_password(password: str, stored_hash) -> bool:
    if not stored_hash:
        return False
    if isinstance(stored_hash, str):
        stored_hash = stored_hash.encode("utf-8")
    try:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash)
    except ValueError:
        return False


def serialize_admin_summary(admin_document) -> Dict[str, str]:
    return {
        "id": str(admin_document.get("_id")),
        "email": admin_document.get("email", "") or "",
        "name": admin_document.get("name", "") or "",
    }


def serialize_admin(admin_document) -> Dict[str, str]:
    if not admin_document:
        return {}

    return {
        **serialize_admin_summary(admin_document),
        "createdAt": isoformat(admin_document.get("created_at")),
        "updatedAt": isoformat(admin_document.get("updated_at")),
    }


def _admin_object_id(admin_id):
    object_id = parse_object_id(admin_id)
    if object_id is None:
        raise ValidationFailed("Invalid admin identifier.", field="id")
    return object_id


def has_admins(store: Store) -> bool:
    return store.admins.find_one({}, {"_id": 1}) is not None


def create_admin(store: Store, payload: Dict) -> Dict:
    cleaned = validate_admin_create(payload)

    if store.admins.find_one({"email": cleaned["email"]}):
        raise Conflict(DUPLICATE_ADMIN_MESSAGE, field="email")

    timestamp = utcnow()
    document = {
        "email": cleaned["email"],
        "password": hash_password(cleaned["password"]),
        "name": cleaned["name"],
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    return store.insert(store.admins, document, DUPLICATE_ADMIN_MESSAGE)


def list_admins(store: Store) -> List[Dict]:
    cursor = store.admins.find({}, {"password": 0}).sort("created_at", DESCENDING)
    return [serialize_admin(document) for document in cursor]


def get_admin(store: Store, admin_id) -> Dict:
    document = store.admins.find_one({"_id": _admin_object_id(admin_id)}, {"password": 0})
    if not document:
        raise NotFound("Admin not found")
    return document


def update_admin(store: Store, admin_id, payload: Dict) -> Dict:
    object_id = _admin_object_id(admin_id)
    cleaned = validate_admin_update(payload)

    if "email" in cleaned and store.admins.find_one(
        {"email": cleaned["email"], "_id": {"$ne": object_id}}
    ):
        raise Conflict(DUPLICATE_ADMIN_MESSAGE, field="email")

    if "password" in cleaned:
        cleaned["password"] = hash_password(cleaned["password"])
    cleaned["updated_at"] = utcnow()

    updated = store.update(store.admins, {"_id": object_id}, cleaned, DUPLICATE_ADMIN_MESSAGE)
    if not updated:
        raise NotFound("Admin not found")
    return updated


def authenticate(store: Store, payload: Dict) -> Dict:
    """Return the admin document matching the submitted credentials.

    Unknown email and wrong password raise the same ``InvalidCredentials``
    error so callers cannot tell which accounts exist.
    """
    credentials = validate_login(payload)
    admin = store.admins.find_one({"email": credentials["email"]})
    if not admin:
        # Unknown emails pay the same bcrypt cost as a wrong password.
        check_password(credentials["password"], _placeholder_hash(_bcrypt_rounds()))
        raise InvalidCredentials()
    if not check_password(credentials["password"], admin.get("password")):
        raise InvalidCredentials()
    return admin
