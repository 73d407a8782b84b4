"""Cart (de)serialization for the key-value store.

The stored value is a JSON array of CartItem records:

    [{"product_id": "prod-001", "name": "Desk Lamp", "price": 24.5,
      "quantity": 2, ...}, ...]

Dates are ISO-8601 strings. Any record that cannot be turned back into a
valid CartItem makes the whole payload invalid.
"""

import json
from datetime import datetime

from storefront.cart.cart import Cart, CartItem

_SNAPSHOT_FIELDS = ("name", "description", "price", "image_ref", "category", "stock_quantity")


class CartDecodeError(ValueError):
    """Stored cart data is malformed."""


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_datetime(value) -> datetime | None:
    if value in (None, ""):
        return None
    if not isinstance(value, str):
        raise CartDecodeError(f"Expected an ISO date string, got {value!r}")
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise CartDecodeError(f"Invalid date {value!r}") from exc


def item_to_record(item: CartItem) -> dict:
    return {
        "product_id": str(item.product_id),
        "name": item.name,
        "description": item.description or "",
        "price": item.price,
        "image_ref": item.image_ref or "",
        "category": item.category or "",
        "stock_quantity": item.stock_quantity or 0,
        "product_created_at": _isoformat(item.product_created_at),
        "quantity": item.quantity,
        "added_at": _isoformat(item.added_at),
    }


def dumps(cart: Cart) -> str:
    return json.dumps([item_to_record(item) for item in cart.items])


def loads(raw: str) -> Cart:
    """Rebuild a Cart from its stored JSON form.

    Raises:
        CartDecodeError: the payload is not valid JSON or not an array of
            well-formed records.
        protean.exceptions.ValidationError: a record violates CartItem rules
            (for example a quantity below one or a negative price).
    """
    try:
        records = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CartDecodeError(f"Stored cart is not valid JSON: {exc}") from exc

    if not isinstance(records, list):
        raise CartDecodeError("Stored cart must be a JSON array")

    cart = Cart.create()
    for record in records:
        if not isinstance(record, dict):
            raise CartDecodeError(f"Cart record must be an object, got {record!r}")
        if "product_id" not in record or "quantity" not in record:
            raise CartDecodeError(f"Cart record is missing product_id or quantity: {record!r}")

        cart.restore_item(
            CartItem(
                product_id=record["product_id"],
                quantity=record["quantity"],
                product_created_at=_parse_datetime(record.get("product_created_at")),
                added_at=_parse_datetime(record.get("added_at")),
                **{field: record[field] for field in _SNAPSHOT_FIELDS if field in record},
            )
        )
    return cart
