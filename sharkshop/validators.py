"""
Field-level payload validation for admin, category, product and order writes.

Validators run before anything touches the database. They raise
``ValidationFailed`` naming the offending field and return cleaned values.
"""
import json
import math
from typing import Dict, List, Optional

from sharkshop.errors import ValidationFailed

TRUE_VALUES = {"true", "1", "yes", "on"}
FALSE_VALUES = {"false", "0", "no", "off"}


def clean_text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_blank(value) -> bool:
    return clean_text(value) == ""


def parse_bool(value, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)) and value in (0, 1):
        return bool(value)
    lowered = clean_text(value).lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValidationFailed(f"{field} must be true or false.", field=field, received=value)


def parse_price(raw_value) -> float:
    if isinstance(raw_value, bool):
        raise ValidationFailed(
            "Price must be a valid positive number", field="price", received=raw_value
        )
    try:
        price_value = float(raw_value)
    except (TypeError, ValueError):
        raise ValidationFailed(
            "Price must be a valid positive number", field="price", received=raw_value
        )
    if not math.isfinite(price_value) or price_value <= 0:
        raise ValidationFailed(
            "Price must be a valid positive number", field="price", received=raw_value
        )
    return price_value


def parse_string_list(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        candidates = list(value)
    else:
        candidate = clean_text(value)
        if not candidate:
            return []
        try:
            parsed = json.loads(candidate)
        except (json.JSONDecodeError, ValueError):
            parsed = None
        if isinstance(parsed, list):
            candidates = parsed
        elif "," in candidate:
            candidates = candidate.split(",")
        else:
            candidates = [candidate]

    cleaned: List[str] = []
    for entry in candidates:
        text = clean_text(entry)
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned


def validate_product_create(payload: Dict) -> Dict:
    name = clean_text(payload.get("name"))
    category = clean_text(payload.get("category"))
    raw_price = payload.get("price")

    if not name or not category or is_blank(raw_price):
        missing = [
            field
            for field, present in (
                ("name", bool(name)),
                ("category", bool(category)),
                ("price", not is_blank(raw_price)),
            )
            if not present
        ]
        raise ValidationFailed(
            "Name, category, and price are required",
            field=missing[0],
            received={"name": bool(name), "category": bool(category), "price": not is_blank(raw_price)},
        )

    return {
        "name": name,
        "category": payload.get("category"),
        "price": parse_price(raw_price),
        "weight": clean_text(payload.get("weight")),
        "flavor": parse_string_list(payload.get("flavor")),
        "image": clean_text(payload.get("image")) or None,
    }


def validate_product_update(payload: Dict) -> Dict:
    update: Dict[str, object] = {}

    if "name" in payload:
        name = clean_text(payload.get("name"))
        if not name:
            raise ValidationFailed("Product name cannot be empty.", field="name")
        update["name"] = name
    if "price" in payload:
        update["price"] = parse_price(payload.get("price"))
    if "category" in payload:
        if is_blank(payload.get("category")):
            raise ValidationFailed("Category cannot be empty.", field="category")
        update["category"] = payload.get("category")
    if "weight" in payload:
        update["weight"] = clean_text(payload.get("weight"))
    if "flavor" in payload:
        update["flavor"] = parse_string_list(payload.get("flavor"))
    if "image" in payload and not is_blank(payload.get("image")):
        update["image"] = clean_text(payload.get("image"))

    return update


def validate_category_payload(payload: Dict, partial: bool = False) -> Dict:
    cleaned: Dict[str, object] = {}

    if "name" in payload or not partial:
        name = clean_text(payload.get("name"))
        if not name:
            raise ValidationFailed("Category name is required", field="name")
        cleaned["name"] = payload.get("name")
    for field in ("description", "image"):
        if field in payload:
            cleaned[field] = clean_text(payload.get(field))
    for key in ("isActive", "is_active"):
        if key in payload and payload.get(key) is not None:
            cleaned["is_active"] = parse_bool(payload.get(key), "isActive")
            break

    return cleaned


# bcrypt only hashes the first 72 bytes and newer releases refuse longer input.
MAX_PASSWORD_BYTES = 72


def check_password_length(password: str) -> str:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationFailed(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.", field="password"
        )
    return password


def validate_admin_create(payload: Dict) -> Dict:
    email = clean_text(payload.get("email"))
    password = payload.get("password")
    if not email or password is None or str(password) == "":
        raise ValidationFailed(
            "Email and password are required",
            field="email" if not email else "password",
        )
    return {
        "email": email,
        "password": check_password_length(str(password)),
        "name": clean_text(payload.get("name")),
    }


def validate_admin_update(payload: Dict) -> Dict:
    cleaned: Dict[str, str] = {}
    if payload.get("email") is not None:
        email = clean_text(payload.get("email"))
        if not email:
            raise ValidationFailed("Email cannot be empty.", field="email")
        cleaned["email"] = email
    if payload.get("name") is not None:
        cleaned["name"] = clean_text(payload.get("name"))
    password = clean_text(payload.get("password"))
    if password:
        cleaned["password"] = check_password_length(password)
    return cleaned


def validate_login(payload: Dict) -> Dict:
    email = clean_text(payload.get("email"))
    password = payload.get("password")
    if not email or password is None or str(password) == "":
        raise ValidationFailed(
            "Email and password are required",
            field="email" if not email else "password",
        )
    return {"email": email, "password": str(password)}


def _optional_float(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def normalize_cart_item(entry: Dict) -> Dict:
    flavor = entry.get("flavor")
    return {
        "product_id": clean_text(entry.get("productId") or entry.get("product_id")),
        "name": clean_text(entry.get("name")),
        "price": _optional_float(entry.get("price")),
        "count": _optional_float(entry.get("count")),
        "flavor": parse_string_list(flavor),
    }


def validate_order(payload: Dict) -> Dict:
    name = clean_text(payload.get("name"))
    email = clean_text(payload.get("email"))
    if not name or not email:
        raise ValidationFailed(
            "Name and email are required",
            field="name" if not name else "email",
        )

    raw_items = payload.get("cartItems", payload.get("cart_items"))
    items = []
    if isinstance(raw_items, list):
        items = [normalize_cart_item(entry) for entry in raw_items if isinstance(entry, dict)]

    return {
        "name": name,
        "email": email,
        "phone": clean_text(payload.get("phone")),
        "address": clean_text(payload.get("address")),
        "payment_method": clean_text(payload.get("paymentMethod") or payload.get("payment_method")),
        "cart_items": items,
        "total_amount": _optional_float(payload.get("totalAmount", payload.get("total_amount"))),
    }
