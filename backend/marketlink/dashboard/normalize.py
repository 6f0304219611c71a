"""
Normalization of API payloads into the canonical domain models

Backends in the wild return the same concept under several key names
(supplier_id / supplierId / supplier._id, total_amount / totalAmount, ...).
Every payload is mapped here, right after it is fetched; the rest of the
dashboard only sees Product, Order and BuyerSummary.
"""
import json
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from marketlink.core.exceptions import NetworkOrServerError
from marketlink.domain.order import Order, OrderItem
from marketlink.domain.product import Product
from marketlink.domain.supermarket import BuyerSummary

Body = Union[dict, list]

SUPPLIER_KEYS = ("supplier_id", "supplierId", "supplier")
SUPERMARKET_KEYS = ("supermarket_id", "supermarketId", "supermarket", "buyer")
PRODUCT_KEYS = ("product_id", "productId", "product")
TOTAL_KEYS = ("total_amount", "totalAmount", "total")


def first_present(record: Mapping, *keys: str) -> Any:
    """Value of the first key that is present and not None/empty string"""
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None


def ref_id(value: Any) -> Optional[str]:
    """ID of a reference that may be a bare ID or an embedded document"""
    if isinstance(value, Mapping):
        value = first_present(value, "_id", "id")
    if value is None or value == "":
        return None
    return str(value)


def to_decimal(value: Any) -> Optional[Decimal]:
    """Non-negative finite Decimal, or None for anything else"""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite() or number < 0:
        return None
    return number


def to_quantity(value: Any) -> Optional[int]:
    """Integer quantity (truncated toward zero), or None for non-numeric / non-finite input"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    # Decimal keeps arbitrarily large input exact, so it can be clamped
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return int(number)


# =============================================================================
# Records
# =============================================================================

def normalize_product(raw: Mapping) -> Product:
    supplier = first_present(raw, *SUPPLIER_KEYS)
    return Product(
        id=ref_id(first_present(raw, "_id", "id")) or "",
        name=raw.get("name") or "",
        price=to_decimal(raw.get("price")),
        category=raw.get("category"),
        description=raw.get("description"),
        supplier_id=ref_id(supplier),
        is_active=raw.get("is_active", raw.get("isActive", True)) is not False,
        created_at=first_present(raw, "created_at", "createdAt"),
        updated_at=first_present(raw, "updated_at", "updatedAt"),
    )


def normalize_order_item(raw: Mapping) -> OrderItem:
    product = first_present(raw, *PRODUCT_KEYS)
    name = first_present(raw, "product_name", "productName", "name")
    if name is None and isinstance(product, Mapping):
        name = product.get("name")

    return OrderItem(
        product_id=ref_id(product) or "",
        product_name=name,
        qty=max(0, to_quantity(first_present(raw, "qty", "quantity")) or 0),
        price=to_decimal(first_present(raw, "price", "unit_price", "unitPrice")) or Decimal("0"),
    )


def normalize_order(raw: Mapping) -> Order:
    supplier = first_present(raw, *SUPPLIER_KEYS)
    supermarket = first_present(raw, *SUPERMARKET_KEYS)

    return Order(
        id=ref_id(first_present(raw, "_id", "id")) or "",
        supplier_id=ref_id(supplier),
        supermarket_id=ref_id(supermarket),
        items=[normalize_order_item(item) for item in (first_present(raw, "items", "lines") or [])],
        status=raw.get("status") or None,
        total_amount=to_decimal(first_present(raw, *TOTAL_KEYS)) or Decimal("0"),
        delivery_address=first_present(raw, "delivery_address", "deliveryAddress"),
        delivery_date=first_present(raw, "delivery_date", "deliveryDate"),
        payment_method=first_present(raw, "payment_method", "paymentMethod"),
        note=first_present(raw, "note", "notes"),
        created_at=first_present(raw, "created_at", "createdAt"),
        updated_at=first_present(raw, "updated_at", "updatedAt"),
        supplier_name=supplier.get("name") if isinstance(supplier, Mapping) else raw.get("supplier_name"),
        supermarket_name=supermarket.get("name") if isinstance(supermarket, Mapping) else raw.get("supermarket_name"),
    )


def normalize_buyer(raw: Mapping) -> BuyerSummary:
    return BuyerSummary(
        supermarket_id=ref_id(first_present(raw, "supermarket_id", "supermarketId", "_id", "id")) or "",
        name=raw.get("name") or "Unknown",
        contact_email=first_present(raw, "contact_email", "contactEmail") or "",
        address=raw.get("address") or "",
        total_orders=max(0, to_quantity(first_present(raw, "total_orders", "totalOrders")) or 0),
        total_revenue=to_decimal(first_present(raw, "total_revenue", "totalRevenue")) or Decimal("0"),
        last_order_date=first_present(raw, "last_order_date", "lastOrderDate"),
    )


def normalize_many(records: Iterable[Mapping], normalizer) -> list:
    """Apply a normalizer to every record; a malformed record fails the whole read"""
    try:
        return [normalizer(record) for record in records]
    except PydanticValidationError as e:
        raise NetworkOrServerError(f"Unexpected response format: {e.error_count()} invalid field(s)")


# =============================================================================
# Response bodies
# =============================================================================

def unwrap_list(body: Body, key: str) -> List[Mapping]:
    """
    Accept a bare array or a wrapper object

    Wrappers may hold the sequence under the resource name ("orders",
    "products") or under "data".
    """
    if isinstance(body, list):
        return body
    if isinstance(body, Mapping):
        for candidate in (key, "data"):
            value = body.get(candidate)
            if isinstance(value, list):
                return value
    return []


def unwrap_record(body: Body) -> Mapping:
    """Single record, bare or under "data" / "order" """
    if isinstance(body, Mapping):
        for candidate in ("data", "order"):
            value = body.get(candidate)
            if isinstance(value, Mapping):
                return value
        return body
    return {}


def parse_body(response: httpx.Response) -> Body:
    """
    Decode a response body without ever failing

    Empty bodies become {}, HTML error pages and other non-JSON text become
    {"message": <text>}.
    """
    text = response.text
    if not text:
        return {}

    stripped = text.strip()
    if stripped.startswith("<!DOCTYPE") or stripped.startswith("<html"):
        return {"message": text}

    try:
        return json.loads(text)
    except ValueError:
        return {"message": text}


def error_message(body: Body, fallback: str) -> str:
    """Message carried by an error body, or the fallback"""
    if not isinstance(body, Mapping):
        return fallback

    for key in ("message", "detail", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
        if isinstance(value, list) and value:
            # FastAPI request validation errors
            return "; ".join(
                str(entry.get("msg", entry)) if isinstance(entry, Mapping) else str(entry)
                for entry in value
            )
    return fallback
