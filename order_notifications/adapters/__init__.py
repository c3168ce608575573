"""Adapter layer: record mapping, configuration, stores and sender implementations.

`firebase_runtime` sits on top of the application layer and is imported
directly by the Cloud Functions entrypoint.
"""

from .config import MailgunConfigError, mailgun_config_from_env
from .fake_senders import send_email_via_console
from .payload import email_state_of, parse_order_snapshot
from .real_senders import MailgunSendError, send_email_via_mailgun
from .record_store import FirestoreRecordStore, InMemoryRecordStore

__all__ = [
    "FirestoreRecordStore",
    "InMemoryRecordStore",
    "MailgunConfigError",
    "MailgunSendError",
    "email_state_of",
    "mailgun_config_from_env",
    "parse_order_snapshot",
    "send_email_via_console",
    "send_email_via_mailgun",
]
