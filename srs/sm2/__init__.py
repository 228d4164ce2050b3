"""
SM-2 - Spaced Repetition Scheduler

Core algorithm and storage API for the review engine.

This package implements the SM-2 family algorithm with:
- Ease factor adjustment from a 0-5 recall quality, clamped to [1.3, 2.5]
- Interval growth 1 -> 6 -> interval * ease on passing streaks
- Lapse reset (next day, or same session when re-queued)
- A key-value storage port with in-memory and SQL adapters

Quick start:
    from srs import sm2

    # Process a review (algorithm only, no storage calls)
    record = sm2.initialize_new_record("hund")
    record = sm2.record_review(record, sm2.Quality.PERFECT)

    # Persist it
    store = sm2.InMemoryRecordStore()
    store.set(sm2.WORDS_NAMESPACE, record.item_id, record)
"""

# Core scheduler API (algorithm logic)
from srs.sm2.scheduler import (
    calculate_ease_factor,
    calculate_interval,
    clamp_quality,
    quality_from_outcome,
    record_review,
    record_review_from_outcome,
)

# Classification
from srs.sm2.classifier import get_difficulty

# Storage API
from srs.sm2.persistence import (
    InMemoryRecordStore,
    RecordStore,
    decode_record,
    encode_record,
)

# Constants and parameters
from srs.sm2.constants import (
    Difficulty,
    Quality,
    DEFAULT_EASE_FACTOR,
    MIN_EASE_FACTOR,
    MAX_EASE_FACTOR,
    PASSING_QUALITY,
    MASTERED_REPETITIONS,
    NAMESPACES,
    WORDS_NAMESPACE,
    VERBS_NAMESPACE,
    PHRASES_NAMESPACE,
)

# Record state
from srs.sm2.record import (
    ReviewRecord,
    calculate_priority,
    initialize_new_record,
    is_due,
)


__all__ = [
    # Core algorithm
    "calculate_ease_factor",
    "calculate_interval",
    "clamp_quality",
    "quality_from_outcome",
    "record_review",
    "record_review_from_outcome",
    "get_difficulty",

    # Storage
    "InMemoryRecordStore",
    "RecordStore",
    "decode_record",
    "encode_record",

    # Enums
    "Difficulty",
    "Quality",

    # Record state
    "ReviewRecord",
    "calculate_priority",
    "initialize_new_record",
    "is_due",

    # Parameters
    "DEFAULT_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "MAX_EASE_FACTOR",
    "PASSING_QUALITY",
    "MASTERED_REPETITIONS",
    "NAMESPACES",
    "WORDS_NAMESPACE",
    "VERBS_NAMESPACE",
    "PHRASES_NAMESPACE",
]
