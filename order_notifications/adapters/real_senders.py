"""Real provider adapter for order confirmation email.

Mental model refresher:
- This module is an outbound adapter.
- It talks to the Mailgun messages API with settings resolved by
  `adapters.config`.
- Application code only sees a callable that takes a message and returns the
  provider receipt, or raises `MailgunSendError`.
"""

from __future__ import annotations

import base64
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from typing import Any

from ..types import MailgunConfig, MessageDict

logger = logging.getLogger(__name__)


class MailgunSendError(RuntimeError):
    """Mailgun rejected the message or could not be reached."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def send_email_via_mailgun(message: MessageDict, *, config: MailgunConfig) -> dict[str, Any]:
    """Send one message via the Mailgun REST API and return its receipt."""
    encoded_domain = urllib.parse.quote(config["domain"], safe="")
    endpoint = f"{config['base_url']}/v3/{encoded_domain}/messages"
    payload = urllib.parse.urlencode(
        {
            "from": message["from"],
            "to": message["to"],
            "subject": message["subject"],
            "html": message["html"],
        }
    ).encode("utf-8")

    request = urllib.request.Request(endpoint, data=payload, method="POST")
    request.add_header("Authorization", _basic_auth_header("api", config["api_key"]))
    request.add_header("Content-Type", "application/x-www-form-urlencoded")

    logger.info(
        "[MAILGUN] domain=%s to=%s subject=%r", config["domain"], message["to"], message["subject"]
    )
    try:
        with urllib.request.urlopen(request, timeout=config["timeout_seconds"]) as response:
            status = int(response.getcode())
            body = response.read()
    except urllib.error.HTTPError as exc:
        details = exc.read().decode("utf-8", errors="replace")
        raise MailgunSendError(
            f"Mailgun email send failed HTTP {exc.code}: {details[:300]}", status=exc.code
        ) from exc
    except urllib.error.URLError as exc:
        raise MailgunSendError(f"Mailgun email send failed: {exc.reason}") from exc

    if status < 200 or status >= 300:
        raise MailgunSendError(f"Mailgun email send failed with status {status}", status=status)
    return _parse_receipt(status, body)


def _parse_receipt(status: int, body: bytes) -> dict[str, Any]:
    text = body.decode("utf-8", errors="replace")
    try:
        parsed = json.loads(text)
    except ValueError:
        return {"status": status, "body": text[:300]}
    if not isinstance(parsed, dict):
        return {"status": status, "body": parsed}
    return parsed


def _basic_auth_header(username: str, password: str) -> str:
    token = f"{username}:{password}".encode("utf-8")
    encoded = base64.b64encode(token).decode("ascii")
    return f"Basic {encoded}"
