"""
JSON file backend - stores each collection as one JSON file.

Directory structure:
    {data_dir}/
        painpoints.json        - {id: document}
        publicPainPoints.json  - {id: document}
        waitlist.json          - {id: document}
"""

import json
import threading
import uuid
from pathlib import Path
from typing import Iterable, Optional

from config import DATA_DIR, PRIMARY_COLLECTION, PUBLIC_COLLECTION, WAITLIST_COLLECTION
from utils.logging import get_logger
from .base import Collection, Filter, Repository, run_query

logger = get_logger(__name__)


class WriteQueue:
    """Thread-safe write serialization."""

    def __init__(self):
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    def write_json(self, path: Path, data: dict) -> None:
        """Atomic JSON write."""
        with self._lock:
            temp = path.with_suffix(".json.tmp")
            with open(temp, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
            temp.replace(path)


_write_queue = WriteQueue()


class JsonCollection(Collection):
    """JSON file implementation of a collection."""

    def __init__(self, name: str, base_path: Path = None):
        self.name = name
        self._base_path = base_path or DATA_DIR

    @property
    def path(self) -> Path:
        return self._base_path / f"{self.name}.json"

    def _load(self) -> dict[str, dict]:
        path = self.path
        if not path.exists():
            return {}

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            # Refuse to continue: the next write would overwrite the corrupt file
            logger.error("Corrupt collection file %s: %s", path, e)
            raise

        if not isinstance(data, dict):
            raise ValueError(f"Collection file {path} is not a JSON object")
        return data

    def _save(self, docs: dict[str, dict]) -> None:
        self._base_path.mkdir(parents=True, exist_ok=True)
        _write_queue.write_json(self.path, docs)

    def add(self, data: dict) -> str:
        doc_id = uuid.uuid4().hex
        with _write_queue.lock:
            docs = self._load()
            docs[doc_id] = dict(data)
            self._save(docs)
        return doc_id

    def get(self, doc_id: str) -> Optional[dict]:
        data = self._load().get(doc_id)
        if data is None:
            return None
        return {**data, "id": doc_id}

    def delete(self, doc_id: str) -> bool:
        with _write_queue.lock:
            docs = self._load()
            if doc_id not in docs:
                return False
            del docs[doc_id]
            self._save(docs)
        return True

    def count(self) -> int:
        return len(self._load())

    def query(
        self,
        filters: Iterable[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        docs = [{**data, "id": doc_id} for doc_id, data in self._load().items()]
        return run_query(docs, filters, order_by, descending, limit)


class JsonRepository(Repository):
    """JSON file backend implementation."""

    def __init__(
        self,
        base_path: Path = None,
        primary: str = PRIMARY_COLLECTION,
        public: str = PUBLIC_COLLECTION,
        waitlist: str = WAITLIST_COLLECTION,
    ):
        self._base_path = base_path or DATA_DIR
        self._painpoints = JsonCollection(primary, self._base_path)
        self._public = JsonCollection(public, self._base_path)
        self._waitlist = JsonCollection(waitlist, self._base_path)

    @property
    def painpoints(self) -> Collection:
        return self._painpoints

    @property
    def public_painpoints(self) -> Collection:
        return self._public

    @property
    def waitlist(self) -> Collection:
        return self._waitlist
