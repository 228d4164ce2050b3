"""
Review engine for one content namespace.

Ties the pieces together for UI callers:
- reads records through the store (defaults for unknown ids)
- applies the SM-2 scheduler and writes the result back
- selects due / next / practice items from the catalog
- classifies difficulty and computes statistics

One engine is instantiated per content type (words, verbs, phrases), each
with its own namespace key, usually over one shared store.
"""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Mapping, Optional

from loguru import logger

from srs import session_builders
from srs.analytics import build_namespace_dashboard, compute_stats, compute_status_breakdown
from srs.analytics.types import NamespaceDashboardData, ReviewStats
from srs.catalog_repo import Catalog
from srs.config import Settings, load_settings
from srs.session_builders import PoolState
from srs.session_builders.review_builder import SESSION_SIZE
from srs.sm2 import classifier, scheduler
from srs.sm2.constants import (
    FAST_RESPONSE_MS,
    MASTERED_REPETITIONS,
    NAMESPACES,
    Difficulty,
)
from srs.sm2.persistence import RecordStore
from srs.sm2.record import ReviewRecord, ensure_utc, initialize_new_record, utc_now

# Correct-answer latencies kept for the median
LATENCY_WINDOW = 200


@dataclass(frozen=True)
class ReviewResult:
    """
    Outcome of one review event.

    record is the new state and stays valid for the session even when
    persisted is False (the store write failed).
    """
    record: ReviewRecord
    persisted: bool


class ReviewEngine:
    """Spaced-repetition engine scoped to one namespace."""

    def __init__(
        self,
        namespace: str,
        catalog: Catalog,
        store: RecordStore,
        clock: Optional[Callable[[], datetime]] = None,
        fast_response_ms: int = FAST_RESPONSE_MS,
        mastered_repetitions: int = MASTERED_REPETITIONS
    ):
        self.namespace = namespace
        self.catalog = catalog
        self.store = store
        self.clock = clock or utc_now
        self.fast_response_ms = fast_response_ms
        self.mastered_repetitions = mastered_repetitions
        self._latencies: deque[float] = deque(maxlen=LATENCY_WINDOW)

    def __repr__(self):
        return f"<ReviewEngine({self.namespace}, items={len(self.catalog)})>"

    def now(self, now: Optional[datetime] = None) -> datetime:
        return ensure_utc(now) if now is not None else ensure_utc(self.clock())

    # ---- Records ----

    def get_record(self, item_id: str, now: Optional[datetime] = None) -> ReviewRecord:
        """Stored record, or a synthesized new-item record."""
        now = self.now(now)
        record = self.store.get(self.namespace, item_id, now=now)
        if record is None:
            return initialize_new_record(item_id, now)
        return record

    def get_records(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> dict[str, ReviewRecord]:
        """All catalog records (optionally one category), in catalog order."""
        now = self.now(now)
        item_ids = self.catalog.ids(category)
        stored = self.store.get_many(self.namespace, item_ids, now=now)
        return {
            item_id: stored.get(item_id) or initialize_new_record(item_id, now)
            for item_id in item_ids
        }

    def _save(self, record: ReviewRecord) -> ReviewResult:
        persisted = self.store.set(self.namespace, record.item_id, record)
        if not persisted:
            logger.error(
                "Review of {}/{} not persisted; keeping in-memory state",
                self.namespace, record.item_id,
            )
        return ReviewResult(record=record, persisted=persisted)

    # ---- Reviews ----

    def record_review(
        self,
        item_id: str,
        quality: int,
        now: Optional[datetime] = None,
        requeue: bool = False
    ) -> ReviewResult:
        """
        Apply a 0-5 quality rating to an item and persist the result.

        Args:
            item_id: Item being reviewed
            quality: Recall quality (clamped to 0-5)
            now: Review time (defaults to the engine clock)
            requeue: On a lapse, make the item due again this session

        Returns:
            ReviewResult with the new record and whether it was saved
        """
        now = self.now(now)
        if item_id not in self.catalog:
            logger.debug("Reviewing {} which is not in the {} catalog", item_id, self.namespace)

        current = self.get_record(item_id, now)
        updated = scheduler.record_review(current, quality, now=now, requeue=requeue)
        return self._save(updated)

    def record_review_from_outcome(
        self,
        item_id: str,
        is_correct: bool,
        response_time_ms: Optional[float] = None,
        recognized: bool = False,
        now: Optional[datetime] = None,
        requeue: bool = False
    ) -> ReviewResult:
        """
        Apply a right/wrong answer, judging speed against recent answers.
        """
        now = self.now(now)
        median_ms = scheduler.median_latency(self._latencies)

        current = self.get_record(item_id, now)
        updated = scheduler.record_review_from_outcome(
            current,
            is_correct,
            response_time_ms=response_time_ms,
            recognized=recognized,
            median_response_ms=median_ms,
            now=now,
            requeue=requeue,
            fast_response_ms=self.fast_response_ms,
        )

        if is_correct and response_time_ms is not None and response_time_ms >= 0:
            self._latencies.append(float(response_time_ms))

        return self._save(updated)

    # ---- Selection ----

    def get_pool_state(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> PoolState:
        now = self.now(now)
        return session_builders.build_pool_state(self.get_records(category, now), now)

    def get_due_items(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
        include_new: bool = True
    ) -> list[str]:
        """Due item ids, most overdue first. Recomputed on every call."""
        now = self.now(now)
        return session_builders.get_due_items(
            self.get_records(category, now), now, include_new=include_new
        )

    def get_next_items(
        self,
        count: int,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> list[str]:
        """Up to `count` ids: due, then new (catalog order), then soonest-due."""
        return session_builders.get_next_items(self.get_pool_state(category, now), count)

    def build_practice_set(
        self,
        count: int = SESSION_SIZE,
        category: Optional[str] = None,
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None
    ) -> list[str]:
        """Mixed practice set: the next items, shuffled."""
        return session_builders.create_practice_set(
            self.get_pool_state(category, now), count, rng=rng
        )

    # ---- Display ----

    def get_difficulty(self, item_id: str, now: Optional[datetime] = None) -> Difficulty:
        return classifier.get_difficulty(self.get_record(item_id, now))

    def get_stats(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> ReviewStats:
        now = self.now(now)
        records = self.get_records(category, now)
        return compute_stats(records.values(), now, self.mastered_repetitions)

    def get_status_breakdown(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> dict[str, int]:
        records = self.get_records(category, now)
        return compute_status_breakdown(records.values(), self.mastered_repetitions)

    def build_dashboard(
        self,
        category: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> NamespaceDashboardData:
        return build_namespace_dashboard(self, now=now, category=category)


def build_engines(
    store: RecordStore,
    catalogs: Mapping[str, Catalog],
    clock: Optional[Callable[[], datetime]] = None,
    settings: Optional[Settings] = None
) -> dict[str, ReviewEngine]:
    """
    Create one engine per content type over a shared store.

    Args:
        store: Backing record store
        catalogs: content type ("words", "verbs", "phrases") -> catalog
        clock: Time source shared by all engines
        settings: Tunables (defaults to the environment)

    Returns:
        content type -> ReviewEngine
    """
    settings = settings or load_settings()

    unknown = set(catalogs) - set(NAMESPACES)
    if unknown:
        raise ValueError(
            f"Unknown content types {sorted(unknown)}; expected some of {sorted(NAMESPACES)}"
        )

    return {
        content_type: ReviewEngine(
            namespace=NAMESPACES[content_type],
            catalog=catalog,
            store=store,
            clock=clock,
            fast_response_ms=settings.fast_response_ms,
            mastered_repetitions=settings.mastered_repetitions,
        )
        for content_type, catalog in catalogs.items()
    }
