"""
Scheduler - SM-2 Algorithm Logic

Pure scheduling and record updates (no storage calls).

Main workflow:
1. Load the record (caller's responsibility)
2. Clamp the quality into the 0-5 scale
3. Update ease factor, interval and repetitions
4. Return the new record

This module handles ONLY the algorithm logic.
Persistence is handled by the store adapters.
"""

from __future__ import annotations
import math
from dataclasses import replace
from datetime import datetime
from statistics import median
from typing import Iterable, Optional, Tuple

from loguru import logger

from srs.sm2.constants import (
    FAST_RESPONSE_MS,
    FIRST_INTERVAL,
    LAPSE_INTERVAL,
    MAX_EASE_FACTOR,
    MAX_QUALITY,
    MEDIAN_FAST_FRACTION,
    MIN_EASE_FACTOR,
    MIN_LATENCY_SAMPLES,
    MIN_QUALITY,
    PASSING_QUALITY,
    REQUEUE_INTERVAL,
    SECOND_INTERVAL,
    Quality,
)
from srs.sm2.record import ReviewRecord, derive_next_review, ensure_utc, utc_now


def clamp_quality(quality) -> int:
    """
    Coerce a quality rating into the 0-5 integer scale.

    Quality is user-input-adjacent, so out-of-range and non-numeric values
    are clamped instead of raising. Fractions are floored, so 2.6 is
    still a lapse.
    """
    try:
        value = math.floor(float(quality))
    except (TypeError, ValueError, OverflowError):
        logger.warning("Non-numeric review quality {!r}, treating as blackout", quality)
        return MIN_QUALITY

    if value < MIN_QUALITY or value > MAX_QUALITY:
        clamped = max(MIN_QUALITY, min(MAX_QUALITY, value))
        logger.warning("Review quality {} out of range, clamped to {}", value, clamped)
        return clamped

    return value


def calculate_ease_factor(current_ease: float, quality: int) -> float:
    """
    Calculate new ease factor based on review quality.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)),
    clamped to [MIN_EASE_FACTOR, MAX_EASE_FACTOR].
    """
    adjustment = 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
    new_ease = current_ease + adjustment
    return max(MIN_EASE_FACTOR, min(MAX_EASE_FACTOR, new_ease))


def calculate_interval(
    current_interval: int,
    repetitions: int,
    ease_factor: float,
    quality: int,
    requeue: bool = False
) -> Tuple[int, int]:
    """
    Calculate the next interval and updated repetition count.

    Returns tuple of (new_interval, new_repetitions).

    For passing reviews (quality >= 3):
    - First: 1 day
    - Second: 6 days
    - Subsequent: previous interval * ease factor (the already updated one)

    For lapses (quality < 3) the streak resets and the item comes back
    tomorrow, or within the session when requeue is set.
    """
    if quality < PASSING_QUALITY:
        return (REQUEUE_INTERVAL if requeue else LAPSE_INTERVAL, 0)

    new_repetitions = repetitions + 1

    if new_repetitions == 1:
        new_interval = FIRST_INTERVAL
    elif new_repetitions == 2:
        new_interval = SECOND_INTERVAL
    else:
        # Halves round up (13 * 2.5 -> 33)
        new_interval = int(current_interval * ease_factor + 0.5)

    return (new_interval, new_repetitions)


def record_review(
    record: ReviewRecord,
    quality: int,
    now: Optional[datetime] = None,
    requeue: bool = False
) -> ReviewRecord:
    """
    Apply one review event to a record.

    This is the core SM-2 algorithm. No storage calls.
    Caller is responsible for loading the record and saving the result.

    Args:
        record: Current record (stored or synthesized defaults)
        quality: Recall quality, clamped to 0-5
        now: Review time (defaults to now)
        requeue: On a lapse, use interval 0 so the item is due again
            within the active session

    Returns:
        New ReviewRecord (the input is not modified)
    """
    now = ensure_utc(now) if now is not None else utc_now()
    quality = clamp_quality(quality)

    new_ease = calculate_ease_factor(record.ease_factor, quality)
    new_interval, new_repetitions = calculate_interval(
        record.interval, record.repetitions, new_ease, quality, requeue=requeue
    )

    passed = quality >= PASSING_QUALITY

    updated = replace(
        record,
        ease_factor=new_ease,
        interval=new_interval,
        repetitions=new_repetitions,
        last_review=now,
        next_review=derive_next_review(now, new_interval),
        correct_count=record.correct_count + (1 if passed else 0),
        incorrect_count=record.incorrect_count + (0 if passed else 1),
    )

    logger.debug(
        "Reviewed {} q={} ease {:.2f}->{:.2f} interval {}->{} reps {}->{}",
        record.item_id, quality,
        record.ease_factor, updated.ease_factor,
        record.interval, updated.interval,
        record.repetitions, updated.repetitions,
    )
    return updated


# ---- Binary Outcomes ----

def fast_threshold_ms(
    median_response_ms: Optional[float] = None,
    default_ms: float = FAST_RESPONSE_MS
) -> float:
    """Latency under which a correct answer counts as instant recall."""
    if median_response_ms is not None and median_response_ms > 0:
        return median_response_ms * MEDIAN_FAST_FRACTION
    return default_ms


def median_latency(samples: Iterable[float]) -> Optional[float]:
    """Median of observed latencies, or None until enough samples exist."""
    values = [s for s in samples if s is not None and s >= 0]
    if len(values) < MIN_LATENCY_SAMPLES:
        return None
    return float(median(values))


def quality_from_outcome(
    is_correct: bool,
    response_time_ms: Optional[float] = None,
    recognized: bool = False,
    median_response_ms: Optional[float] = None,
    fast_response_ms: float = FAST_RESPONSE_MS
) -> Quality:
    """
    Map a right/wrong answer to the 0-5 quality scale.

    - correct and fast -> PERFECT (5)
    - correct otherwise, or latency unknown -> GOOD (4)
    - incorrect but recognized once shown -> RECOGNIZED (2)
    - incorrect -> WRONG (1)
    """
    if not is_correct:
        return Quality.RECOGNIZED if recognized else Quality.WRONG

    if response_time_ms is None:
        return Quality.GOOD

    threshold = fast_threshold_ms(median_response_ms, default_ms=fast_response_ms)
    if response_time_ms < threshold:
        return Quality.PERFECT
    return Quality.GOOD


def record_review_from_outcome(
    record: ReviewRecord,
    is_correct: bool,
    response_time_ms: Optional[float] = None,
    recognized: bool = False,
    median_response_ms: Optional[float] = None,
    now: Optional[datetime] = None,
    requeue: bool = False,
    fast_response_ms: float = FAST_RESPONSE_MS
) -> ReviewRecord:
    """
    Convenience wrapper for binary right/wrong UIs.

    Maps the outcome to a quality and delegates to record_review().
    """
    quality = quality_from_outcome(
        is_correct,
        response_time_ms=response_time_ms,
        recognized=recognized,
        median_response_ms=median_response_ms,
        fast_response_ms=fast_response_ms,
    )
    return record_review(record, quality, now=now, requeue=requeue)
