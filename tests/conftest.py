"""
Shared fixtures for the review engine tests.

All tests run against a fixed clock so due/overdue checks are deterministic.
"""

from datetime import datetime, timedelta, timezone

import pytest

from srs.catalog_repo import Catalog
from srs.engine import ReviewEngine
from srs.sm2 import InMemoryRecordStore, WORDS_NAMESPACE
from srs.sm2.database import SqlRecordStore
from srs.sm2.record import ReviewRecord, derive_next_review


NOW = datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_record(
    item_id: str,
    days_since_review: float = 1,
    interval: int = 1,
    repetitions: int = 1,
    ease_factor: float = 2.5,
    correct_count: int = None,
    incorrect_count: int = 0,
    now: datetime = NOW,
) -> ReviewRecord:
    """A reviewed record whose next_review is consistent with its interval."""
    last_review = now - timedelta(days=days_since_review)
    return ReviewRecord(
        item_id=item_id,
        ease_factor=ease_factor,
        interval=interval,
        repetitions=repetitions,
        last_review=last_review,
        next_review=derive_next_review(last_review, interval),
        correct_count=repetitions if correct_count is None else correct_count,
        incorrect_count=incorrect_count,
    )


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def sql_store():
    return SqlRecordStore(db_url="sqlite:///:memory:")


@pytest.fixture
def word_catalog():
    return Catalog.from_pairs([
        ("hund", "animals"),
        ("katze", "animals"),
        ("brot", "food"),
        ("apfel", "food"),
        ("vogel", "animals"),
        ("wasser", "food"),
    ])


@pytest.fixture
def engine(store, word_catalog):
    return ReviewEngine(WORDS_NAMESPACE, word_catalog, store, clock=lambda: NOW)
