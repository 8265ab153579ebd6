"""
Categories and the catalog integrity check.

A product may only reference a category that exists and is active at the
time of the write. Category names are matched on their normalized form
(trimmed, lowercased).
"""
from typing import Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from sharkshop.errors import Conflict, InvalidCategory, NotFound, ValidationFailed
from sharkshop.store import Store, isoformat, parse_object_id, utcnow
from sharkshop.validators import validate_category_payload

NO_CATEGORIES_MESSAGE = "No categories available. Please create categories first."
DUPLICATE_CATEGORY_MESSAGE = "Category with this name already exists"


def normalize_category_name(value: Optional[str]) -> str:
    if value is None:
        return ""
    return str(value).strip().lower()


def active_category_names(store: Store) -> List[str]:
    cursor = store.categories.find({"is_active": True}, {"name": 1}).sort("name", ASCENDING)
    return [document["name"] for document in cursor if document.get("name")]


def ensure_active_category(store: Store, raw_name) -> str:
    normalized_name = normalize_category_name(raw_name)
    if normalized_name and store.categories.find_one(
        {"name": normalized_name, "is_active": True}
    ):
        return normalized_name

    available = active_category_names(store)
    if available:
        message = (
            "Invalid category. Category must exist in database and be active. "
            f"Available categories: {', '.join(available)}"
        )
    else:
        message = NO_CATEGORIES_MESSAGE
    raise InvalidCategory(
        message,
        field="category",
        received=raw_name,
        availableCategories=available,
    )


def serialize_category(category_document) -> Dict:
    if not category_document:
        return {}

    return {
        "id": str(category_document.get("_id")),
        "name": category_document.get("name", ""),
        "description": category_document.get("description", "") or "",
        "image": category_document.get("image", "") or "",
        "isActive": bool(category_document.get("is_active", True)),
        "createdAt": isoformat(category_document.get("created_at")),
        "updatedAt": isoformat(category_document.get("updated_at")),
    }


def _category_object_id(category_id):
    object_id = parse_object_id(category_id)
    if object_id is None:
        raise ValidationFailed("Invalid category identifier.", field="id")
    return object_id


def list_categories(store: Store) -> List[Dict]:
    cursor = store.categories.find().sort("created_at", DESCENDING)
    return [serialize_category(document) for document in cursor]


def get_category(store: Store, category_id) -> Dict:
    document = store.categories.find_one({"_id": _category_object_id(category_id)})
    if not document:
        raise NotFound("Category not found")
    return document


def create_category(store: Store, payload: Dict) -> Dict:
    cleaned = validate_category_payload(payload)
    name = normalize_category_name(cleaned["name"])

    if store.categories.find_one({"name": name}):
        raise Conflict(DUPLICATE_CATEGORY_MESSAGE, field="name")

    timestamp = utcnow()
    document = {
        "name": name,
        "description": cleaned.get("description", ""),
        "image": cleaned.get("image", ""),
        "is_active": cleaned.get("is_active", True),
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    return store.insert(store.categories, document, DUPLICATE_CATEGORY_MESSAGE)


def update_category(store: Store, category_id, payload: Dict) -> Dict:
    object_id = _category_object_id(category_id)
    cleaned = validate_category_payload(payload, partial=True)

    if "name" in cleaned:
        cleaned["name"] = normalize_category_name(cleaned["name"])
        if store.categories.find_one({"name": cleaned["name"], "_id": {"$ne": object_id}}):
            raise Conflict(DUPLICATE_CATEGORY_MESSAGE, field="name")

    cleaned["updated_at"] = utcnow()
    updated = store.update(
        store.categories, {"_id": object_id}, cleaned, DUPLICATE_CATEGORY_MESSAGE
    )
    if not updated:
        raise NotFound("Category not found")
    return updated


def delete_category(store: Store, category_id) -> Dict:
    deleted = store.categories.find_one_and_delete({"_id": _category_object_id(category_id)})
    if not deleted:
        raise NotFound("Category not found")
    return deleted
