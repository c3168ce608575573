"""Fake sender adapter for local smoke runs.

Mental model refresher:
- This is outbound adapter code.
- In production, `real_senders.send_email_via_mailgun` sits in this seam.
- It has the same call shape and returns a Mailgun-like receipt so the
  controller's terminal write looks the same as in production.
"""

from __future__ import annotations

import uuid
from typing import Any

from ..types import MailgunConfig, MessageDict


def send_email_via_console(message: MessageDict, *, config: MailgunConfig) -> dict[str, Any]:
    print("[EMAIL]")
    print(f"domain={config.get('domain')}")
    print(f"from={message['from']}")
    print(f"to={message['to']}")
    print(f"subject={message['subject']}")
    print(f"html={message['html']}")
    return {
        "id": f"<console-{uuid.uuid4().hex[:12]}@{config.get('domain')}>",
        "message": "Printed to console.",
    }
