"""
SM-2 Constants and Parameters

All configurable parameters for the review scheduler in one place.
"""

from enum import Enum, IntEnum
from typing import Final


# ---- Quality Scale ----

class Quality(IntEnum):
    """Recall quality for a single review event (SM-2 convention)."""
    BLACKOUT = 0     # Complete blackout, no recognition
    WRONG = 1        # Incorrect, saw the correct answer afterwards
    RECOGNIZED = 2   # Incorrect, but recognized the answer once shown
    HARD = 3         # Correct with serious difficulty
    GOOD = 4         # Correct after some hesitation
    PERFECT = 5      # Immediate, perfect recall


MIN_QUALITY = int(Quality.BLACKOUT)
MAX_QUALITY = int(Quality.PERFECT)
PASSING_QUALITY = int(Quality.HARD)  # Anything below is a lapse


# ---- Ease Factor ----

MIN_EASE_FACTOR = 1.3
MAX_EASE_FACTOR = 2.5
DEFAULT_EASE_FACTOR = 2.5


# ---- Intervals (days) ----

REQUEUE_INTERVAL = 0   # Lapse, shown again in the active session
LAPSE_INTERVAL = 1     # Lapse, shown again tomorrow
FIRST_INTERVAL = 1     # First passing review
SECOND_INTERVAL = 6    # Second passing review


# ---- Outcome Mapping ----
# Binary right/wrong UIs report a latency instead of a quality.

FAST_RESPONSE_MS = 2000        # Correct and faster than this -> PERFECT
MEDIAN_FAST_FRACTION = 0.5     # With a known median, fast = under half of it
MIN_LATENCY_SAMPLES = 5        # Samples needed before the median is trusted


# ---- Difficulty Classification ----

class Difficulty(str, Enum):
    """Coarse difficulty label shown next to an item."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


HARD_EASE_THRESHOLD = 1.8      # ease <= this is hard
EASY_EASE_THRESHOLD = 2.3      # ease >= this (with a streak) is easy
EASY_REPETITIONS = 5


# ---- Progress ----

MASTERED_REPETITIONS = 5


# ---- Namespaces ----
# Storage partition keys, one per content type.

WORDS_NAMESPACE: Final[str] = "german-srs-data"
VERBS_NAMESPACE: Final[str] = "german-verb-srs-data"
PHRASES_NAMESPACE: Final[str] = "german-phrase-srs-data"

NAMESPACES: Final[dict[str, str]] = {
    "words": WORDS_NAMESPACE,
    "verbs": VERBS_NAMESPACE,
    "phrases": PHRASES_NAMESPACE,
}

NAMESPACE_LABELS: Final[dict[str, str]] = {
    WORDS_NAMESPACE: "Words",
    VERBS_NAMESPACE: "Verbs",
    PHRASES_NAMESPACE: "Phrases",
}
