"""Send-once order confirmation email for newly created Firestore orders."""

from .adapters import (
    FirestoreRecordStore,
    InMemoryRecordStore,
    MailgunConfigError,
    MailgunSendError,
    mailgun_config_from_env,
    parse_order_snapshot,
    send_email_via_console,
    send_email_via_mailgun,
)
from .adapters.firebase_runtime import handle_order_created
from .application.dispatch import dispatch_order_confirmation
from .domain.email import build_confirmation_message, render_items_html

__all__ = [
    "FirestoreRecordStore",
    "InMemoryRecordStore",
    "MailgunConfigError",
    "MailgunSendError",
    "build_confirmation_message",
    "dispatch_order_confirmation",
    "handle_order_created",
    "mailgun_config_from_env",
    "parse_order_snapshot",
    "render_items_html",
    "send_email_via_console",
    "send_email_via_mailgun",
]
