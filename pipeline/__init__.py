"""
Write-side services.

Exports:
    IngestionService: validate, classify, store and announce pain points.
    BoundedPublicStore: approximate size cap for the public collection.
    WaitlistService: de-duplicated waitlist signups.
"""

from .public_store import BoundedPublicStore
from .ingest import IngestionService, has_test_marker
from .waitlist import WaitlistService

__all__ = ["BoundedPublicStore", "IngestionService", "has_test_marker", "WaitlistService"]
