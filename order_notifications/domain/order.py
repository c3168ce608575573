"""Order field resolution rules.

Mental model refresher:
- Domain modules hold business rules and stay free of I/O.
- Order documents are written by several generations of checkout code, so the
  same fact can live under different field names. Each resolver here is an
  ordered list of candidate lookups returning the first usable value.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

RECIPIENT_EMAIL_FIELDS = ("customerEmail", "userEmail", "user_email")
ITEM_LIST_FIELDS = ("items", "cart")
TOTAL_FIELDS = ("totalAmount", "total", "price")
ITEM_NAME_FIELDS = ("name", "title")
ITEM_PRICE_FIELDS = ("price", "unitPrice")

MISSING_TOTAL = "N/A"


def first_present(source: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """Return the first value that is not None (0 and "" count as present)."""
    for key in keys:
        value = source.get(key)
        if value is not None:
            return value
    return None


def first_non_empty(source: Mapping[str, Any], keys: Sequence[str]) -> str | None:
    """Return the first value that is non-empty once stripped."""
    for key in keys:
        value = source.get(key)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return None


def resolve_recipient_email(order: Mapping[str, Any]) -> str | None:
    return first_non_empty(order, RECIPIENT_EMAIL_FIELDS)


def resolve_customer_name(order: Mapping[str, Any]) -> str:
    user_name = first_non_empty(order, ("userName",))
    if user_name:
        return user_name

    shipping = order.get("shippingAddress")
    if not isinstance(shipping, Mapping):
        return ""
    first = str(shipping.get("firstName") or "")
    last = str(shipping.get("lastName") or "")
    return f"{first} {last}".strip()


def resolve_items(order: Mapping[str, Any]) -> list[dict[str, Any]]:
    # `items: []` still wins over `cart`; only a missing/None field falls through.
    raw_items = first_present(order, ITEM_LIST_FIELDS)
    if not isinstance(raw_items, (list, tuple)):
        return []
    return [resolve_item(item, index) for index, item in enumerate(raw_items)]


def resolve_item(item: Any, index: int) -> dict[str, Any]:
    """Normalize one line item; `index` is 0-based."""
    fields = item if isinstance(item, Mapping) else {}
    quantity = fields.get("quantity")
    price = first_present(fields, ITEM_PRICE_FIELDS)
    return {
        "name": first_non_empty(fields, ITEM_NAME_FIELDS) or f"Item {index + 1}",
        "quantity": 1 if quantity is None else quantity,
        "price": 0 if price is None else price,
    }


def resolve_total(order: Mapping[str, Any]) -> Any:
    total = first_present(order, TOTAL_FIELDS)
    return MISSING_TOTAL if total is None else total


def format_amount(value: Any) -> str:
    """Render a number without a trailing `.0` for whole floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
