"""
In-memory backend - process-local collections for development and tests.

Nothing survives a restart.
"""

import threading
import uuid
from typing import Iterable, Optional

from config import PRIMARY_COLLECTION, PUBLIC_COLLECTION, WAITLIST_COLLECTION
from .base import Collection, Filter, Repository, run_query


class MemoryCollection(Collection):
    """Dict-backed collection. Individual operations are thread-safe."""

    def __init__(self, name: str):
        self.name = name
        self._docs: dict[str, dict] = {}
        self._lock = threading.Lock()

    def add(self, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        with self._lock:
            self._docs[doc_id] = dict(data)
        return doc_id

    def get(self, doc_id: str) -> Optional[dict]:
        with self._lock:
            data = self._docs.get(doc_id)
        if data is None:
            return None
        return {**data, "id": doc_id}

    def delete(self, doc_id: str) -> bool:
        with self._lock:
            return self._docs.pop(doc_id, None) is not None

    def count(self) -> int:
        with self._lock:
            return len(self._docs)

    def query(
        self,
        filters: Iterable[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        with self._lock:
            docs = [{**data, "id": doc_id} for doc_id, data in self._docs.items()]
        return run_query(docs, filters, order_by, descending, limit)


class MemoryRepository(Repository):
    """In-memory backend implementation."""

    def __init__(
        self,
        primary: str = PRIMARY_COLLECTION,
        public: str = PUBLIC_COLLECTION,
        waitlist: str = WAITLIST_COLLECTION,
    ):
        self._painpoints = MemoryCollection(primary)
        self._public = MemoryCollection(public)
        self._waitlist = MemoryCollection(waitlist)

    @property
    def painpoints(self) -> Collection:
        return self._painpoints

    @property
    def public_painpoints(self) -> Collection:
        return self._public

    @property
    def waitlist(self) -> Collection:
        return self._waitlist
