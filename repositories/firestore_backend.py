"""
Firestore backend - production document store.

Credentials come from GOOGLE_APPLICATION_CREDENTIALS (service account file)
or the ambient Google Cloud environment.
"""

from typing import Iterable, Optional

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from config import Settings
from .base import Collection, Filter, Repository, validate_filters


class FirestoreCollection(Collection):
    """Thin adapter over a Firestore collection reference."""

    def __init__(self, client: firestore.Client, name: str):
        self.name = name
        self._ref = client.collection(name)

    def add(self, data: dict) -> str:
        _, doc_ref = self._ref.add(dict(data))
        return doc_ref.id

    def get(self, doc_id: str) -> Optional[dict]:
        snapshot = self._ref.document(doc_id).get()
        if not snapshot.exists:
            return None
        return {**snapshot.to_dict(), "id": snapshot.id}

    def delete(self, doc_id: str) -> bool:
        doc_ref = self._ref.document(doc_id)
        if not doc_ref.get().exists:
            return False
        doc_ref.delete()
        return True

    def count(self) -> int:
        results = self._ref.count().get()
        return int(results[0][0].value)

    def query(
        self,
        filters: Iterable[Filter] = (),
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> list[dict]:
        query = self._ref
        for field, op, value in validate_filters(filters):
            query = query.where(filter=FieldFilter(field, op, value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        if limit is not None:
            query = query.limit(limit)
        return [{**snap.to_dict(), "id": snap.id} for snap in query.stream()]


class FirestoreRepository(Repository):
    """Firestore backend implementation."""

    def __init__(self, settings: Settings, client: firestore.Client = None):
        self._client = client or self._make_client(settings)
        self._painpoints = FirestoreCollection(self._client, settings.primary_collection)
        self._public = FirestoreCollection(self._client, settings.public_collection)
        self._waitlist = FirestoreCollection(self._client, settings.waitlist_collection)

    @staticmethod
    def _make_client(settings: Settings) -> firestore.Client:
        if settings.firestore_credentials:
            return firestore.Client.from_service_account_json(
                settings.firestore_credentials, project=settings.firestore_project
            )
        return firestore.Client(project=settings.firestore_project)

    @property
    def painpoints(self) -> Collection:
        return self._painpoints

    @property
    def public_painpoints(self) -> Collection:
        return self._public

    @property
    def waitlist(self) -> Collection:
        return self._waitlist
