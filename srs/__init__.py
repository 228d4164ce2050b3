"""
Spaced-repetition review engine for the German trainer.

Quick start:
    from srs.catalog_repo import Catalog
    from srs.engine import build_engines
    from srs.sm2 import InMemoryRecordStore, Quality

    engines = build_engines(InMemoryRecordStore(), {
        "words": Catalog.from_pairs([("hund", "animals"), ("katze", "animals")]),
    })
    words = engines["words"]

    for item_id in words.get_next_items(10):
        words.record_review(item_id, Quality.GOOD)
"""

__version__ = "0.1.0"
