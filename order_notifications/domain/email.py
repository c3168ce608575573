"""Order confirmation email content.

Mental model refresher:
- Domain modules hold channel/business rules.
- This one decides what the confirmation message says:
  - who it is from and to
  - subject line
  - HTML body (greeting, order id, line items, total)
- It does not read records, resolve credentials or talk to Mailgun.
"""

from __future__ import annotations

from html import escape
from typing import Any, Mapping, Sequence

from ..types import MessageDict, OrderDict
from .order import MISSING_TOTAL, format_amount

CURRENCY_SYMBOL = "₹"
DEFAULT_FROM_NAME = "Chem Revolutions"
DEFAULT_FROM_LOCALPART = "orders"

_CELL = "padding:6px;border:1px solid #eee"


def build_confirmation_message(
    order: OrderDict,
    order_id: str,
    *,
    domain: str,
    from_name: str = DEFAULT_FROM_NAME,
    from_localpart: str = DEFAULT_FROM_LOCALPART,
) -> MessageDict:
    """Build the transport message for one confirmed order."""
    return {
        "from": f"{from_name} <{from_localpart}@{domain}>",
        "to": str(order["recipient_email"]),
        "subject": f"Order Confirmation — {order_id}",
        "html": render_confirmation_html(order, order_id),
    }


def render_confirmation_html(order: OrderDict, order_id: str) -> str:
    customer_name = order.get("customer_name") or ""
    greeting = "Thank you for your order"
    if customer_name:
        greeting = f"{greeting}, {escape(customer_name)}"

    return (
        '<div style="font-family:Arial,Helvetica,sans-serif;line-height:1.4;color:#222">\n'
        f"  <h2>{greeting}!</h2>\n"
        f"  <p><strong>Order ID:</strong> {escape(str(order_id))}</p>\n"
        f"  {render_items_html(order.get('items') or [])}\n"
        f'  <p style="font-size:16px"><strong>Total:</strong> '
        f"{render_total(order.get('total', MISSING_TOTAL))}</p>\n"
        "</div>"
    )


def render_items_html(items: Sequence[Mapping[str, Any]]) -> str:
    """Render normalized line items as a table; empty input gets a placeholder row."""
    if items:
        rows = "".join(_render_item_row(item) for item in items)
    else:
        rows = f'<tr><td colspan="3" style="{_CELL};text-align:center">No items</td></tr>'

    return (
        '<table style="border-collapse:collapse;width:100%;max-width:600px">'
        "<thead><tr>"
        f'<th style="{_CELL};text-align:left">Item</th>'
        f'<th style="{_CELL}">Qty</th>'
        f'<th style="{_CELL};text-align:right">Price</th>'
        "</tr></thead>"
        f"<tbody>{rows}</tbody>"
        "</table>"
    )


def render_total(total: Any) -> str:
    if total is None or total == MISSING_TOTAL:
        return MISSING_TOTAL
    return f"{CURRENCY_SYMBOL}{escape(format_amount(total))}"


def _render_item_row(item: Mapping[str, Any]) -> str:
    name = escape(str(item.get("name", "")))
    quantity = escape(format_amount(item.get("quantity", 1)))
    price = escape(format_amount(item.get("price", 0)))
    return (
        "<tr>"
        f'<td style="{_CELL}">{name}</td>'
        f'<td style="{_CELL};text-align:center">{quantity}</td>'
        f'<td style="{_CELL};text-align:right">{CURRENCY_SYMBOL}{price}</td>'
        "</tr>"
    )
