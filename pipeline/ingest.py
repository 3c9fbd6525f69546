"""
Ingestion pipeline: validate → classify → build record → (evict) → persist → notify.

IngestionService is the only writer of pain point documents. It keeps no
per-request state; Flask request threads share one instance.
"""

from typing import Any, Callable, Optional

import pydantic

from classifier import Classifier
from config import Settings, TEST_MARKER
from errors import PersistenceError, ValidationError
from models import PainPointRecord, PainPointSubmission, Target, utc_now_iso
from repositories import Collection, Repository
from utils.logging import get_logger
from .public_store import BoundedPublicStore

logger = get_logger(__name__)

INVALID_DESCRIPTION = "Invalid or empty description provided."


def has_test_marker(description: str) -> bool:
    """True if the description contains [test] in any letter case."""
    return TEST_MARKER in description.lower()


class IngestionService:
    """
    Accepts pain point submissions and stores classified records.

    Failure modes:
    - ValidationError before any network or store call
    - classification problems never surface (Classifier falls back)
    - PersistenceError if eviction or insert fails; nothing is notified
    - notification problems are logged and ignored
    """

    def __init__(
        self,
        settings: Settings,
        repository: Repository,
        classifier: Classifier,
        notifier=None,
        public_store: Optional[BoundedPublicStore] = None,
        clock: Callable[[], str] = utc_now_iso,
    ):
        self.settings = settings
        self.repository = repository
        self.classifier = classifier
        self.notifier = notifier
        self.public_store = public_store or BoundedPublicStore(
            repository.public_painpoints, max_entries=settings.public_max_entries
        )
        self.clock = clock

    # -------------------- Write path -------------------- #

    def validate(self, payload: Any) -> PainPointSubmission:
        """Parse the request body. Raises ValidationError."""
        if not isinstance(payload, dict):
            raise ValidationError(INVALID_DESCRIPTION)
        try:
            return PainPointSubmission.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(INVALID_DESCRIPTION) from e

    def sanitize(self, description: str, target: Target) -> str:
        description = description.strip()
        if target is Target.PUBLIC:
            description = description[: self.settings.public_max_description].rstrip()
        return description

    def _collection(self, target: Target) -> Collection:
        if target is Target.PUBLIC:
            return self.repository.public_painpoints
        return self.repository.painpoints

    def ingest(self, payload: Any, target: Target = Target.PRIMARY) -> PainPointRecord:
        """
        Classify and store one submission.

        Args:
            payload: Decoded request body, expected {"description": str}
            target: PRIMARY or PUBLIC collection

        Returns:
            The stored record, including its store-assigned id.
        """
        target = Target(target)
        submission = self.validate(payload)
        description = self.sanitize(submission.description, target)

        classification = self.classifier.classify(description)

        record = PainPointRecord.build(
            description=description,
            classification=classification,
            created_at=self.clock(),
            is_test=has_test_marker(description),
            is_anonymous=target is Target.PUBLIC,
        )

        collection = self._collection(target)
        try:
            if target is Target.PUBLIC:
                self.public_store.evict_if_full()
            doc_id = collection.add(record.to_document())
        except Exception as e:
            logger.exception("Failed to save pain point to %s", collection.name)
            raise PersistenceError(f"Failed to save pain point: {e}") from e

        record = record.model_copy(update={"id": doc_id})
        logger.info(
            "Saved %s pain point %s (%s/%s, confidence=%d%s)",
            target.value,
            doc_id,
            record.industry,
            record.sentiment,
            record.confidence_score,
            ", test" if record.is_test else "",
        )

        self._notify(record)
        return record

    def _notify(self, record: PainPointRecord) -> None:
        if self.notifier is None:
            return
        try:
            self.notifier.notify(record)
        except Exception as e:
            logger.warning("Notification for %s failed: %s", record.id, e)

    # -------------------- Read paths -------------------- #

    def _visible(self, docs: list[dict], include_tests: Optional[bool]) -> list[PainPointRecord]:
        if include_tests is None:
            include_tests = self.settings.is_development
        records = [PainPointRecord.from_document(d) for d in docs]
        if include_tests:
            return records
        return [r for r in records if r.is_test is not True]

    def list_records(self, include_tests: Optional[bool] = None) -> list[PainPointRecord]:
        """All primary records; [test] entries hidden outside development."""
        try:
            docs = self.repository.painpoints.query()
        except Exception as e:
            logger.exception("Failed to retrieve pain points")
            raise PersistenceError(f"Failed to retrieve pain points: {e}") from e
        return self._visible(docs, include_tests)

    def recent_records(
        self, limit: Optional[int] = None, include_tests: Optional[bool] = None
    ) -> list[PainPointRecord]:
        """Newest primary records first."""
        if limit is None:
            limit = self.settings.recent_limit
        try:
            docs = self.repository.painpoints.query(order_by="createdAt", descending=True, limit=limit)
        except Exception as e:
            logger.exception("Failed to retrieve recent pain points")
            raise PersistenceError(f"Failed to retrieve recent pain points: {e}") from e
        return self._visible(docs, include_tests)
