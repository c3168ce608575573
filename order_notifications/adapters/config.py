"""Environment-variable configuration for the Mailgun transport.

Cloud Functions params and secrets (`MAILGUN_DOMAIN`, `MAILGUN_API_KEY`) are
exposed to the function as environment variables, so the same reader serves
deployed and local runs. Values are read per invocation, never cached.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..domain.email import DEFAULT_FROM_LOCALPART, DEFAULT_FROM_NAME
from ..types import MailgunConfig

DEFAULT_MAILGUN_BASE_URL = "https://api.mailgun.net"


class MailgunConfigError(RuntimeError):
    """Mailgun credentials or settings are missing or malformed."""


def mailgun_config_from_env() -> MailgunConfig:
    """Resolve Mailgun settings, raising `MailgunConfigError` when unusable."""
    api_key = _optional_env("MAILGUN_API_KEY")
    domain = _optional_env("MAILGUN_DOMAIN")
    missing = [
        name
        for name, value in (("MAILGUN_API_KEY", api_key), ("MAILGUN_DOMAIN", domain))
        if value is None
    ]
    if missing:
        raise MailgunConfigError(
            f"Mailgun config missing (api key or domain): {', '.join(missing)}"
        )

    raw_timeout = os.getenv("MAILGUN_TIMEOUT_SECONDS", "10")
    try:
        timeout_seconds = float(raw_timeout)
    except ValueError as exc:
        raise MailgunConfigError(
            f"Invalid MAILGUN_TIMEOUT_SECONDS value: {raw_timeout!r}"
        ) from exc
    if timeout_seconds <= 0:
        raise MailgunConfigError("MAILGUN_TIMEOUT_SECONDS must be > 0")

    return {
        "api_key": api_key,
        "domain": domain,
        "base_url": (_optional_env("MAILGUN_API_BASE_URL") or DEFAULT_MAILGUN_BASE_URL).rstrip("/"),
        "timeout_seconds": timeout_seconds,
        "from_name": _optional_env("ORDER_EMAIL_FROM_NAME") or DEFAULT_FROM_NAME,
        "from_localpart": _optional_env("ORDER_EMAIL_FROM_LOCALPART") or DEFAULT_FROM_LOCALPART,
    }


def load_env_file(path: Path) -> None:
    """Seed unset environment variables from a `KEY=value` file, if it exists."""
    if not path.exists():
        return

    for line in path.read_text(encoding="utf-8").splitlines():
        text = line.strip()
        if not text or text.startswith("#") or "=" not in text:
            continue
        key, _, value = text.partition("=")
        key = key.strip()
        value = value.strip()
        if not key:
            continue
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        os.environ.setdefault(key, value)


def _optional_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
