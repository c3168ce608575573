"""Record store adapters for order documents.

Mental model refresher:
- The controller reads orders and writes `email.*` fields through the small
  `RecordStore` interface in `types.py`.
- `FirestoreRecordStore` is the production adapter. Store-assigned timestamps
  and increments are translated into Firestore write transforms, so they are
  applied atomically on the server.
- `InMemoryRecordStore` applies the same update semantics to plain dicts for
  local demos and tests.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any, Mapping

from ..types import SERVER_TIMESTAMP, Increment, ServerTimestamp


class FirestoreRecordStore:
    """Order documents in one Firestore collection."""

    def __init__(
        self,
        client: Any,
        collection: str,
        *,
        firestore_module: Any | None = None,
    ) -> None:
        self._client = client
        self._collection = collection
        self._firestore = firestore_module

    def get(self, record_id: str) -> dict[str, Any] | None:
        snapshot = self._document(record_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    def update(self, record_id: str, fields: Mapping[str, Any]) -> None:
        firestore = self._firestore or _import_firestore()
        # Dotted keys are Firestore field paths, so sibling `email.*` fields survive.
        translated = {
            path: _to_firestore_value(firestore, value) for path, value in fields.items()
        }
        self._document(record_id).update(translated)

    def _document(self, record_id: str) -> Any:
        return self._client.collection(self._collection).document(record_id)


class InMemoryRecordStore:
    """Dict-backed store with the same update semantics as Firestore."""

    def __init__(self, records: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = {
            record_id: copy.deepcopy(dict(data)) for record_id, data in (records or {}).items()
        }
        self.writes: list[tuple[str, dict[str, Any]]] = []

    def add(self, record_id: str, data: Mapping[str, Any]) -> None:
        self._records[record_id] = copy.deepcopy(dict(data))

    def get(self, record_id: str) -> dict[str, Any] | None:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    def update(self, record_id: str, fields: Mapping[str, Any]) -> None:
        if record_id not in self._records:
            raise KeyError(f"No document to update: {record_id}")
        record = self._records[record_id]
        for path, value in fields.items():
            _apply_field(record, path.split("."), value)
        self.writes.append((record_id, dict(fields)))


def _apply_field(record: dict[str, Any], parts: list[str], value: Any) -> None:
    target = record
    for part in parts[:-1]:
        child = target.get(part)
        if not isinstance(child, dict):
            child = {}
            target[part] = child
        target = child

    leaf = parts[-1]
    if isinstance(value, ServerTimestamp):
        target[leaf] = datetime.now(tz=UTC)
    elif isinstance(value, Increment):
        current = target.get(leaf)
        base = current if isinstance(current, (int, float)) and not isinstance(current, bool) else 0
        target[leaf] = base + value.amount
    else:
        target[leaf] = copy.deepcopy(value)


def _to_firestore_value(firestore: Any, value: Any) -> Any:
    if value is SERVER_TIMESTAMP or isinstance(value, ServerTimestamp):
        return firestore.SERVER_TIMESTAMP
    if isinstance(value, Increment):
        return firestore.Increment(value.amount)
    return value


def _import_firestore() -> Any:
    try:
        from google.cloud import firestore
    except Exception as exc:
        raise RuntimeError(
            "Firestore support requires `google-cloud-firestore`. "
            "Install with: pip install google-cloud-firestore"
        ) from exc
    return firestore
