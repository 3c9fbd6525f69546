"""
Repository base classes - define the interface.

A Collection is a schema-less set of documents (plain dicts) with
store-generated ids, matching what Firestore offers: insert, get, delete,
count, and filtered/ordered/limited queries.
"""

import operator
from abc import ABC, abstractmethod
from typing import Any, Iterable, Optional

# (field, op, value)
Filter = tuple[str, str, Any]

OPERATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class Collection(ABC):
    """Abstract document collection."""

    name: str

    @abstractmethod
    def add(self, data: dict) -> str:
        """Insert a document. Returns the generated id."""
        pass

    @abstractmethod
    def get(self, doc_id: str) -> Optional[dict]:
        """Get document by id (with `id` key set), or None."""
        pass

    @abstractmethod
    def delete(self, doc_id: str) -> bool:
        """Delete document by id. Returns True if deleted."""
        pass

    @abstractmethod
    def count(self) -> int:
        """Number of documents in the collection."""
        pass

    @abstractmethod
    def query(
        self,
        filters: Iterable[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        """
        Query documents.

        Documents that lack a filtered or ordered field are not returned.
        Each result carries its `id`.
        """
        pass


class Repository(ABC):
    """
    Aggregate repository - provides access to every collection.

    This is what consumers use. Backend implementations provide
    concrete collections.
    """

    @property
    @abstractmethod
    def painpoints(self) -> Collection:
        """Primary (internal) pain points."""
        pass

    @property
    @abstractmethod
    def public_painpoints(self) -> Collection:
        """Anonymous submissions, capped by BoundedPublicStore."""
        pass

    @property
    @abstractmethod
    def waitlist(self) -> Collection:
        """Waitlist signups."""
        pass


def validate_filters(filters: Iterable[Filter]) -> list[Filter]:
    """Reject unknown operators before touching a backend."""
    checked = []
    for field, op, value in filters:
        if op not in OPERATORS:
            raise ValueError(f"Unsupported operator: {op}")
        checked.append((field, op, value))
    return checked


def run_query(
    docs: Iterable[dict],
    filters: Iterable[Filter] = (),
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> list[dict]:
    """In-process query evaluation shared by the local backends."""
    filters = validate_filters(filters)

    def matches(doc: dict) -> bool:
        for field, op, value in filters:
            if field not in doc:
                return False
            try:
                if not OPERATORS[op](doc[field], value):
                    return False
            except TypeError:
                return False
        return True

    results = [dict(d) for d in docs if matches(d)]

    if order_by:
        results = [d for d in results if d.get(order_by) is not None]
        results.sort(key=lambda d: d[order_by], reverse=descending)

    if limit is not None:
        results = results[:limit]

    return results
