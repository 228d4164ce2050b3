"""
Persistence Port - Review Record Storage

Defines the key-value interface the engine reads and writes records through,
plus the shared encode/decode helpers and an in-memory store.

Keys are (namespace, item_id). Every adapter keeps namespaces disjoint, so
several engines can share one backing store.

Error contract:
- get() never raises on bad data: a corrupt record is logged and treated
  as absent
- set() returns False on a failed write instead of raising
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from srs.sm2.schemas import StoredReviewRecord
from srs.sm2.record import ReviewRecord


def encode_record(record: ReviewRecord) -> dict:
    """Serialize a record to its flat stored form (ISO-8601 timestamps)."""
    return StoredReviewRecord.from_record(record).model_dump(mode="json")


def decode_record(
    data: Optional[Mapping],
    item_id: Optional[str] = None,
    now: Optional[datetime] = None
) -> Optional[ReviewRecord]:
    """
    Parse a stored record, returning None for missing or corrupt data.

    Args:
        data: Raw stored mapping (or None)
        item_id: Expected item id; a mismatching stored id is corrupt
        now: Read time, used as next_review for never-reviewed records

    Returns:
        ReviewRecord, or None if absent/unreadable
    """
    if data is None:
        return None

    try:
        stored = StoredReviewRecord.model_validate(dict(data))
    except (ValidationError, TypeError, ValueError) as exc:
        logger.warning("Discarding unreadable review record {!r}: {}", item_id, exc)
        return None

    if item_id is not None and stored.item_id != item_id:
        logger.warning(
            "Discarding review record stored under {!r} with item_id {!r}",
            item_id, stored.item_id,
        )
        return None

    return stored.to_record(now)


class RecordStore(ABC):
    """Key-value persistence port for review records."""

    @abstractmethod
    def get(
        self,
        namespace: str,
        item_id: str,
        now: Optional[datetime] = None
    ) -> Optional[ReviewRecord]:
        """Load one record, or None if absent or unreadable."""

    @abstractmethod
    def set(self, namespace: str, item_id: str, record: ReviewRecord) -> bool:
        """Insert or replace one record. Returns False if the write failed."""

    def get_many(
        self,
        namespace: str,
        item_ids: Iterable[str],
        now: Optional[datetime] = None
    ) -> dict[str, ReviewRecord]:
        """
        Load several records. Absent or unreadable ids are left out.

        Adapters override this with a single round-trip where they can.
        """
        result: dict[str, ReviewRecord] = {}
        for item_id in item_ids:
            record = self.get(namespace, item_id, now=now)
            if record is not None:
                result[item_id] = record
        return result


class InMemoryRecordStore(RecordStore):
    """
    Dict-backed store holding records in their encoded form.

    Used for tests and single-process sessions.
    """

    def __init__(self, initial: Optional[Mapping[tuple[str, str], Mapping]] = None):
        self._data: dict[tuple[str, str], dict] = {
            key: dict(value) for key, value in (initial or {}).items()
        }

    def get(self, namespace, item_id, now=None):
        return decode_record(self._data.get((namespace, item_id)), item_id, now)

    def set(self, namespace, item_id, record):
        self._data[(namespace, item_id)] = encode_record(record)
        return True

    def put_raw(self, namespace: str, item_id: str, data: Mapping) -> None:
        """Store a raw mapping as-is (imports and fixtures)."""
        self._data[(namespace, item_id)] = dict(data)

    def keys(self, namespace: Optional[str] = None) -> list[tuple[str, str]]:
        return [key for key in self._data if namespace is None or key[0] == namespace]

    def __len__(self) -> int:
        return len(self._data)
