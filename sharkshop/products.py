"""
Product persistence. Every write that sets a category goes through
``ensure_active_category`` first.
"""
import secrets
import string
import time
from typing import Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from sharkshop.catalog import ensure_active_category, normalize_category_name
from sharkshop.errors import NotFound, ValidationFailed
from sharkshop.store import Store, isoformat, parse_object_id, utcnow
from sharkshop.validators import validate_product_create, validate_product_update

PRODUCT_ID_ALPHABET = string.digits + string.ascii_lowercase
DUPLICATE_PRODUCT_MESSAGE = "A product with this identifier already exists"


def generate_product_id() -> str:
    suffix = "".join(secrets.choice(PRODUCT_ID_ALPHABET) for _ in range(9))
    return f"PROD-{int(time.time() * 1000)}-{suffix}"


def serialize_product(product_document) -> Dict:
    if not product_document:
        return {}

    try:
        price_value = float(product_document.get("price", 0) or 0)
    except (TypeError, ValueError):
        price_value = 0.0

    flavor = product_document.get("flavor") or []
    if isinstance(flavor, str):
        flavor = [flavor] if flavor else []

    return {
        "id": str(product_document.get("_id")),
        "productId": product_document.get("product_id", "") or "",
        "name": product_document.get("name", "") or "",
        "price": price_value,
        "category": product_document.get("category", "") or "",
        "image": product_document.get("image"),
        "flavor": list(flavor),
        "weight": product_document.get("weight", "") or "",
        "createdAt": isoformat(product_document.get("created_at")),
        "updatedAt": isoformat(product_document.get("updated_at")),
    }


def product_lookup_queries(identifier) -> List[Dict]:
    queries = []
    object_id = parse_object_id(identifier)
    if object_id is not None:
        queries.append({"_id": object_id})
    queries.append({"product_id": str(identifier)})
    return queries


def list_products(store: Store, category: Optional[str] = None) -> List[Dict]:
    query: Dict[str, object] = {}
    if category:
        query["category"] = normalize_category_name(category)
    cursor = store.products.find(query).sort([("category", ASCENDING), ("created_at", DESCENDING)])
    return [serialize_product(document) for document in cursor]


def list_all_products(store: Store) -> List[Dict]:
    cursor = store.products.find().sort("created_at", DESCENDING)
    return [serialize_product(document) for document in cursor]


def count_products(store: Store) -> int:
    return store.products.count_documents({})


def get_product(store: Store, identifier) -> Dict:
    for query in product_lookup_queries(identifier):
        document = store.products.find_one(query)
        if document:
            return document
    raise NotFound("Product not found")


def create_product(store: Store, payload: Dict, image: Optional[str] = None) -> Dict:
    cleaned = validate_product_create(payload)
    category = ensure_active_category(store, cleaned["category"])

    timestamp = utcnow()
    document = {
        "product_id": generate_product_id(),
        "name": cleaned["name"],
        "category": category,
        "price": cleaned["price"],
        "weight": cleaned["weight"],
        "flavor": cleaned["flavor"],
        "image": image or cleaned["image"],
        "created_at": timestamp,
        "updated_at": timestamp,
    }
    return store.insert(store.products, document, DUPLICATE_PRODUCT_MESSAGE)


def update_product(
    store: Store, identifier, payload: Dict, image: Optional[str] = None
) -> Tuple[Dict, Dict]:
    """Apply a partial update, returning ``(previous, updated)`` documents.

    The category is only re-checked when the payload names one; an update
    that leaves the category alone keeps whatever is stored.
    """
    update = validate_product_update(payload)
    if image:
        update["image"] = image
    if not update:
        raise ValidationFailed("No product fields supplied to update.")

    if "category" in update:
        update["category"] = ensure_active_category(store, update["category"])

    existing = get_product(store, identifier)
    update["updated_at"] = utcnow()
    updated = store.update(
        store.products, {"_id": existing["_id"]}, update, DUPLICATE_PRODUCT_MESSAGE
    )
    if not updated:
        raise NotFound("Product not found")
    return existing, updated


def delete_product(store: Store, identifier) -> Dict:
    for query in product_lookup_queries(identifier):
        removed = store.products.find_one_and_delete(query)
        if removed:
            return removed
    raise NotFound("Product not found")
