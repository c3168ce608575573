"""Payload adapter functions.

Mental model refresher:
- This is an adapter/edge module.
- It translates a raw Firestore order document into the internal order
  dictionary used by application/domain code.
- It resolves legacy field names and applies defaults, but it does not decide
  business outcomes like send/skip.
"""

from __future__ import annotations

from typing import Any, Mapping

from ..domain.order import (
    resolve_customer_name,
    resolve_items,
    resolve_recipient_email,
    resolve_total,
)
from ..types import Order, OrderDict


def parse_order_snapshot(data: Order) -> OrderDict:
    """Normalize a raw order document into a plain order dictionary.

    This is the first handoff from stored data to internal data.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"Order snapshot must be a mapping, got {type(data).__name__}")

    return {
        "recipient_email": resolve_recipient_email(data),
        "payment_confirmed": data.get("paymentConfirmed") is True,
        "customer_name": resolve_customer_name(data),
        "items": resolve_items(data),
        "total": resolve_total(data),
        "raw": data,
    }


def email_state_of(record: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return the `email` sub-object of a stored record, or an empty dict."""
    if not record:
        return {}
    state = record.get("email")
    return dict(state) if isinstance(state, Mapping) else {}
