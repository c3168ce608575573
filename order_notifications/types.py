"""Shared type aliases and store-write primitives for the notifier package."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Protocol

Order = Mapping[str, Any]
OrderDict = dict[str, Any]
MessageDict = dict[str, str]
MailgunConfig = dict[str, Any]
DispatchResult = dict[str, Any]

SendEmailFn = Callable[..., Any]
LoadConfigFn = Callable[[], MailgunConfig]


class ServerTimestamp:
    """Placeholder for a timestamp the record store assigns at write time."""

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


class Increment:
    """Atomic numeric increment applied by the record store."""

    def __init__(self, amount: int = 1) -> None:
        self.amount = amount

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Increment) and other.amount == self.amount

    def __repr__(self) -> str:
        return f"Increment({self.amount})"


class RecordStore(Protocol):
    """Point reads and partial updates keyed by record id.

    Field names in `update` are dotted paths (`"email.sending"`) and values may
    be `SERVER_TIMESTAMP` or `Increment`.
    """

    def get(self, record_id: str) -> dict[str, Any] | None: ...

    def update(self, record_id: str, fields: Mapping[str, Any]) -> None: ...
