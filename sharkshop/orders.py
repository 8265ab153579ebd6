"""
Customer orders. Orders are created by public checkout and are read-only
afterwards.
"""
from typing import Dict, List

from pymongo import DESCENDING

from sharkshop.store import Store, isoformat, utcnow
from sharkshop.validators import validate_order


def serialize_order(order_document) -> Dict:
    if not order_document:
        return {}

    items = []
    for item in order_document.get("cart_items") or []:
        items.append(
            {
                "productId": item.get("product_id", ""),
                "name": item.get("name", ""),
                "price": item.get("price"),
                "count": item.get("count"),
                "flavor": item.get("flavor") or [],
            }
        )

    return {
        "id": str(order_document.get("_id")),
        "name": order_document.get("name", ""),
        "email": order_document.get("email", ""),
        "phone": order_document.get("phone", ""),
        "address": order_document.get("address", ""),
        "paymentMethod": order_document.get("payment_method", ""),
        "cartItems": items,
        "totalAmount": order_document.get("total_amount"),
        "createdAt": isoformat(order_document.get("created_at")),
        "updatedAt": isoformat(order_document.get("updated_at")),
    }


def create_order(store: Store, payload: Dict) -> Dict:
    document = validate_order(payload)
    timestamp = utcnow()
    document["created_at"] = timestamp
    document["updated_at"] = timestamp
    result = store.orders.insert_one(document)
    return store.orders.find_one({"_id": result.inserted_id})


def list_orders(store: Store) -> List[Dict]:
    cursor = store.orders.find().sort([("created_at", DESCENDING), ("_id", DESCENDING)])
    return [serialize_order(document) for document in cursor]


def count_orders(store: Store) -> int:
    return store.orders.count_documents({})
