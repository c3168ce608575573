"""Cloud Firestore trigger adapter for order confirmation email.

Mental model refresher:
- This module is transport glue to Firebase itself.
- It maps a Firestore "document created" event into the dispatch use-case.
- Reads and `email.*` writes go to the collection of the document that fired
  the event, taken from the event's document path.
- The Firestore client is process-wide: built once under a lock and reused by
  concurrent invocations of the same instance. It holds no per-order state.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from ..application.dispatch import dispatch_order_confirmation
from ..types import DispatchResult, RecordStore, SendEmailFn
from .config import mailgun_config_from_env
from .real_senders import send_email_via_mailgun
from .record_store import FirestoreRecordStore

logger = logging.getLogger(__name__)

ORDER_ID_PARAM = "orderId"

_client: Any | None = None
_client_lock = threading.Lock()


def handle_order_created(
    event: Any,
    *,
    store: RecordStore | None = None,
    send_email: SendEmailFn | None = None,
) -> DispatchResult:
    """Handle one `orders/{orderId}` document-created event.

    Errors raised by the dispatch flow propagate so the platform can apply its
    own retry policy.
    """
    order_id = _order_id_from_event(event)
    snapshot = _snapshot_data(getattr(event, "data", None))
    result = dispatch_order_confirmation(
        snapshot,
        order_id,
        store=store if store is not None else order_store_for_event(event),
        send_email=send_email or send_email_via_mailgun,
        load_config=mailgun_config_from_env,
    )
    logger.info(
        "[RESULT] order_id=%s status=%s error=%s", order_id, result["status"], result["error"]
    )
    return result


def order_store_for_event(event: Any) -> RecordStore:
    """Return a store addressing the collection of the triggering document."""
    return FirestoreRecordStore(get_firestore_client(), collection=_collection_path(event))


def get_firestore_client() -> Any:
    """Return the process-wide Firestore client, initializing Firebase once."""
    global _client
    if _client is None:
        with _client_lock:
            if _client is None:
                firebase_admin, admin_firestore = _import_firebase_admin()
                try:
                    firebase_admin.get_app()
                except ValueError:
                    firebase_admin.initialize_app()
                _client = admin_firestore.client()
                logger.info("[FIRESTORE INIT] client ready")
    return _client


def reset_firestore_client() -> None:
    """Drop the cached client so the next invocation rebuilds it."""
    global _client
    with _client_lock:
        _client = None


def _order_id_from_event(event: Any) -> str:
    params = getattr(event, "params", None) or {}
    order_id = str(params.get(ORDER_ID_PARAM, "")).strip()
    if not order_id:
        raise ValueError(f"Event is missing the `{ORDER_ID_PARAM}` path parameter")
    return order_id


def _collection_path(event: Any) -> str:
    """Collection path of the event document, e.g. `orders` for `orders/o-1`."""
    document = getattr(event, "document", None)
    if not document:
        reference = getattr(getattr(event, "data", None), "reference", None)
        document = getattr(reference, "path", None)
    if not document:
        raise ValueError("Event does not name the document that triggered it")

    parts = [part for part in str(document).strip("/").split("/") if part]
    # Document paths alternate collection/id, so they have an even segment count.
    if len(parts) < 2 or len(parts) % 2:
        raise ValueError(f"Not a Firestore document path: {document!r}")
    return "/".join(parts[:-1])


def _snapshot_data(snapshot: Any) -> dict[str, Any] | None:
    if snapshot is None:
        return None
    if isinstance(snapshot, dict):
        return snapshot
    if getattr(snapshot, "exists", True) is False:
        return None
    return snapshot.to_dict() or {}


def _import_firebase_admin() -> tuple[Any, Any]:
    try:
        import firebase_admin
        from firebase_admin import firestore as admin_firestore
    except Exception as exc:
        raise RuntimeError(
            "Firestore trigger support requires `firebase-admin`. "
            "Install with: pip install firebase-admin"
        ) from exc
    return firebase_admin, admin_firestore
