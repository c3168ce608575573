#!/usr/bin/env python3
"""Run the order confirmation flow locally without Firebase or Mailgun.

Uses an in-memory record store and the console sender. Invoking more than once
shows the send-once behavior: later invocations stop at the `email.sent` check.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

# Allow running this file directly from repository root.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from order_notifications.adapters.config import load_env_file  # noqa: E402
from order_notifications.adapters.fake_senders import send_email_via_console  # noqa: E402
from order_notifications.adapters.record_store import InMemoryRecordStore  # noqa: E402
from order_notifications.application.dispatch import dispatch_order_confirmation  # noqa: E402


def main() -> int:
    args = parse_args()
    load_env_file(REPO_ROOT / ".env")
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s %(message)s")
    if args.demo_config:
        os.environ.setdefault("MAILGUN_API_KEY", "demo-key")
        os.environ.setdefault("MAILGUN_DOMAIN", "mg.example.com")

    order = load_order(args.payload_file)
    store = InMemoryRecordStore({args.order_id: order})

    for invocation in range(1, args.invocations + 1):
        # Each platform delivery carries the original creation snapshot.
        result = dispatch_order_confirmation(
            order,
            args.order_id,
            store=store,
            send_email=send_email_via_console,
        )
        print(
            f"[INVOCATION {invocation}] status={result['status']} "
            f"error={result['error']} response={result['response']}"
        )

    final = store.get(args.order_id) or {}
    print("")
    print("[EMAIL STATE]")
    for key, value in sorted((final.get("email") or {}).items()):
        print(f"{key}={value}")
    return 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Execute the order confirmation flow against an in-memory store."
    )
    parser.add_argument(
        "--payload-file",
        type=Path,
        default=None,
        help="Optional JSON file holding one order document.",
    )
    parser.add_argument(
        "--order-id",
        default="order-demo-1",
        help="Order id used as the record key and in the subject line.",
    )
    parser.add_argument(
        "--invocations",
        type=int,
        default=2,
        help="How many times to deliver the same created event.",
    )
    parser.add_argument(
        "--demo-config",
        action="store_true",
        help="Fill MAILGUN_API_KEY/MAILGUN_DOMAIN with demo values when unset.",
    )
    return parser.parse_args()


def load_order(payload_file: Path | None) -> dict[str, Any]:
    if payload_file is None:
        return sample_order()
    with payload_file.open("r", encoding="utf-8") as file_handle:
        return json.load(file_handle)


def sample_order() -> dict[str, Any]:
    return {
        "customerEmail": "buyer@example.com",
        "paymentConfirmed": True,
        "shippingAddress": {"firstName": "Asha", "lastName": "Rao"},
        "items": [
            {"name": "Widget", "quantity": 2, "price": 50},
            {"title": "Sodium chloride 500g", "unitPrice": 120},
            {},
        ],
        "totalAmount": 220,
    }


if __name__ == "__main__":
    sys.exit(main())
