"""Application use-case: send the one-time order confirmation email.

Mental model refresher:
- Application layer coordinates the flow across domain rules and adapters.
- Flow for one "order created" event:
  1) precondition gate on the event snapshot (recipient, paymentConfirmed)
  2) fresh read of the stored record; stop if `email.sent` is already true
  3) intent marking (`email.sending`, `email.sendingAt`, `email.attempts += 1`)
  4) Mailgun config resolution; a missing key/domain is recorded, not raised
  5) build message, send once, write the terminal `email.*` state
- Failures after the gate are written back to `email.error` and re-raised so
  the event platform's retry policy decides what happens next.

Known limitation: the fresh read in (2) and the mark in (3) are separate
writes. Two invocations delivered at the same moment can both pass (2) and
both send. `email.attempts > 1` on a sent order is the evidence to look for.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..adapters.config import MailgunConfigError, mailgun_config_from_env
from ..adapters.payload import email_state_of, parse_order_snapshot
from ..domain.email import DEFAULT_FROM_LOCALPART, DEFAULT_FROM_NAME, build_confirmation_message
from ..types import (
    SERVER_TIMESTAMP,
    DispatchResult,
    Increment,
    LoadConfigFn,
    RecordStore,
    SendEmailFn,
)

logger = logging.getLogger(__name__)


def dispatch_order_confirmation(
    snapshot: Mapping[str, Any] | None,
    order_id: str,
    *,
    store: RecordStore,
    send_email: SendEmailFn,
    load_config: LoadConfigFn = mailgun_config_from_env,
) -> DispatchResult:
    """Run the send-once flow for one created order and return a result dict.

    Skips and configuration faults return normally. Transport and other runtime
    faults after the precondition gate are recorded on the order and re-raised.
    """
    if snapshot is None:
        logger.info("[SKIP] order_id=%s reason=no_snapshot", order_id)
        return _result("skipped_no_snapshot", order_id)

    order = parse_order_snapshot(snapshot)
    recipient = order["recipient_email"]
    if not recipient:
        logger.info("[SKIP] order_id=%s reason=missing_recipient", order_id)
        return _result("skipped_missing_recipient", order_id)

    # No later confirmation event exists; unconfirmed orders are skipped for good.
    if not order["payment_confirmed"]:
        logger.info("[SKIP] order_id=%s reason=payment_unconfirmed", order_id)
        return _result("skipped_payment_unconfirmed", order_id)

    try:
        # The event snapshot can predate an earlier invocation's writes.
        fresh = store.get(order_id)
        if fresh is None:
            logger.warning("[SKIP] order_id=%s reason=record_missing", order_id)
            return _result("skipped_record_missing", order_id)
        if email_state_of(fresh).get("sent"):
            logger.info("[SKIP] order_id=%s reason=already_sent", order_id)
            return _result("skipped_already_sent", order_id)

        store.update(
            order_id,
            {
                "email.sending": True,
                "email.sendingAt": SERVER_TIMESTAMP,
                "email.attempts": Increment(1),
            },
        )
        logger.info("[SENDING] order_id=%s to=%s", order_id, recipient)

        try:
            config = load_config()
        except MailgunConfigError as exc:
            # Deterministic fault: a platform retry would fail the same way.
            error = str(exc)
            logger.error("[CONFIG ERROR] order_id=%s error=%s", order_id, error)
            store.update(order_id, {"email.error": error, "email.sending": False})
            return _result("config_missing", order_id, error=error)

        logger.info(
            "[CONFIG] order_id=%s domain=%s api_key_present=%s",
            order_id,
            config.get("domain"),
            bool(config.get("api_key")),
        )
        message = build_confirmation_message(
            order,
            order_id,
            domain=config["domain"],
            from_name=config.get("from_name") or DEFAULT_FROM_NAME,
            from_localpart=config.get("from_localpart") or DEFAULT_FROM_LOCALPART,
        )
        response = send_email(message, config=config)

        store.update(
            order_id,
            {
                "email.sent": True,
                "email.sentAt": SERVER_TIMESTAMP,
                "email.sending": False,
                "email.lastSendResponse": response,
            },
        )
        logger.info("[SENT] order_id=%s to=%s response=%s", order_id, recipient, response)
        return _result("sent", order_id, response=response)
    except Exception as exc:
        logger.error("[SEND ERROR] order_id=%s error=%s", order_id, exc)
        _record_failure(store, order_id, exc)
        raise


def _record_failure(store: RecordStore, order_id: str, exc: BaseException) -> None:
    """Best-effort write-back of a failure; never replaces the original error."""
    try:
        store.update(
            order_id,
            {
                "email.error": str(exc) or type(exc).__name__,
                "email.sending": False,
                "email.lastErrorAt": SERVER_TIMESTAMP,
            },
        )
    except Exception:
        logger.exception("[WRITEBACK ERROR] order_id=%s failed to record send error", order_id)


def _result(
    status: str,
    order_id: str,
    *,
    error: str | None = None,
    response: Any = None,
) -> DispatchResult:
    return {
        "status": status,
        "order_id": order_id,
        "error": error,
        "response": response,
    }
