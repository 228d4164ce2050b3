"""
Content catalog access.

The engine only needs an ordered list of item ids with a category tag.
Catalogs are built in memory from any list of documents, or loaded from a
MongoDB collection (the word, verb and phrase lists).
"""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping, Optional

from loguru import logger
from pydantic import ValidationError

from srs.config import DEFAULT_MONGO_DB_NAME
from srs.record_repo import get_client
from srs.sm2.schemas import CatalogItem


class Catalog:
    """
    Ordered, read-only collection of catalog items.

    Catalog order is preserved everywhere it matters (new-item ordering).
    Duplicate ids keep their first occurrence.
    """

    def __init__(self, items: Iterable[CatalogItem]):
        self._items: list[CatalogItem] = []
        self._by_id: dict[str, CatalogItem] = {}
        for item in items:
            if item.item_id in self._by_id:
                logger.warning("Duplicate catalog id {!r} ignored", item.item_id)
                continue
            self._items.append(item)
            self._by_id[item.item_id] = item

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Optional[str]]]) -> "Catalog":
        """Build from (item_id, category) pairs."""
        return cls(CatalogItem(item_id=item_id, category=category) for item_id, category in pairs)

    @classmethod
    def from_documents(
        cls,
        docs: Iterable[Mapping],
        id_field: str = "id",
        category_field: str = "category"
    ) -> "Catalog":
        """
        Build from content documents (e.g. vocabulary entries).

        Documents without a usable id are skipped.
        """
        items = []
        for doc in docs:
            try:
                items.append(CatalogItem(
                    item_id=str(doc[id_field]),
                    category=doc.get(category_field)
                ))
            except (KeyError, ValidationError) as exc:
                logger.warning("Skipping catalog document without {!r}: {}", id_field, exc)
        return cls(items)

    def ids(self, category: Optional[str] = None) -> list[str]:
        """Item ids in catalog order, optionally limited to one category."""
        return [
            item.item_id for item in self._items
            if category is None or item.category == category
        ]

    def category_of(self, item_id: str) -> Optional[str]:
        item = self._by_id.get(item_id)
        return item.category if item else None

    def categories(self) -> list[str]:
        """Distinct categories in order of first appearance."""
        seen: list[str] = []
        for item in self._items:
            if item.category is not None and item.category not in seen:
                seen.append(item.category)
        return seen

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._by_id

    def __iter__(self) -> Iterator[CatalogItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def load_catalog(
    collection_name: str,
    id_field: str = "id",
    category_field: str = "category",
    query: Optional[dict] = None,
    db_name: str = DEFAULT_MONGO_DB_NAME
) -> Catalog:
    """
    Load a catalog from a MongoDB collection, in insertion order.

    Args:
        collection_name: Collection holding the content documents
        id_field: Document field with the stable item id
        category_field: Document field with the category tag
        query: Optional MongoDB filter
        db_name: Database name

    Returns:
        Catalog of the matching documents
    """
    collection = get_client()[db_name][collection_name]
    docs = collection.find(query or {}, {id_field: 1, category_field: 1}).sort("_id", 1)
    return Catalog.from_documents(docs, id_field=id_field, category_field=category_field)
