"""
Size cap for the anonymous (public) collection.

Before each public insert the oldest document is evicted if the collection
is at capacity. Count, delete and the following insert are separate store
calls with no lock or transaction around them, so concurrent writers at the
boundary can leave the collection above max_entries for a while. The cap is
approximate.
"""

from typing import Optional

from repositories import Collection
from utils.logging import get_logger

logger = get_logger(__name__)


class BoundedPublicStore:
    """Oldest-first eviction, at most one document per insert."""

    def __init__(self, collection: Collection, max_entries: int = 1000, order_field: str = "createdAt"):
        self.collection = collection
        self.max_entries = max_entries
        self.order_field = order_field

    def evict_if_full(self, max_entries: Optional[int] = None) -> Optional[str]:
        """
        Delete the single oldest document if the collection is full.

        Args:
            max_entries: Capacity override; defaults to the configured cap

        Returns:
            The evicted document id, or None if nothing was evicted.
        """
        limit = self.max_entries if max_entries is None else max_entries
        current = self.collection.count()
        if current < limit:
            return None

        oldest = self.collection.query(order_by=self.order_field, limit=1)
        if not oldest:
            return None

        doc_id = oldest[0]["id"]
        logger.info(
            "Public collection full (%d/%d), deleting oldest entry: %s",
            current, limit, doc_id,
        )
        self.collection.delete(doc_id)
        return doc_id
