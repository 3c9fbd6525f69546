"""
Waitlist signups.

Uniqueness is a check-then-insert against the store, not a constraint:
two simultaneous signups for the same address can both get in.
"""

from typing import Any, Optional

import pydantic

from errors import DuplicateError, PersistenceError, ValidationError
from models import WaitlistEntry, WaitlistSignup, normalize_email, utc_now_iso
from repositories import Collection
from utils.logging import get_logger

logger = get_logger(__name__)

INVALID_EMAIL = "Invalid email format provided."


class WaitlistService:
    """Stores one entry per normalized (trimmed, lower-cased) email."""

    def __init__(self, collection: Collection, clock=utc_now_iso):
        self.collection = collection
        self.clock = clock

    def _lookup(self, email: str) -> Optional[dict]:
        try:
            found = self.collection.query(filters=[("email", "==", email)], limit=1)
        except Exception as e:
            logger.exception("Waitlist lookup failed")
            raise PersistenceError(f"Waitlist lookup failed: {e}") from e
        return found[0] if found else None

    def find(self, email: str) -> Optional[WaitlistEntry]:
        """Look up an address in any letter case / surrounding whitespace."""
        if not isinstance(email, str):
            return None
        doc = self._lookup(normalize_email(email))
        return WaitlistEntry.from_document(doc) if doc else None

    def join(self, payload: Any) -> WaitlistEntry:
        """
        Add an email to the waitlist.

        Raises:
            ValidationError: missing or malformed email
            DuplicateError: address already on the list
            PersistenceError: store failure
        """
        if not isinstance(payload, dict):
            raise ValidationError(INVALID_EMAIL)
        try:
            signup = WaitlistSignup.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError(INVALID_EMAIL) from e

        if self._lookup(signup.email):
            raise DuplicateError("This email is already on the waitlist.")

        entry = WaitlistEntry(email=signup.email, signed_up_at=self.clock())
        try:
            doc_id = self.collection.add(entry.to_document())
        except Exception as e:
            logger.exception("Failed to add %s to waitlist", signup.email)
            raise PersistenceError(f"Failed to join waitlist: {e}") from e

        logger.info("Waitlist signup %s", doc_id)
        return entry.model_copy(update={"id": doc_id})
