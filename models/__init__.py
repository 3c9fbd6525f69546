"""
Domain models - single source of truth for all documents.

Design principles:
- Every document defined once
- camelCase in the store and on the wire, snake_case in Python
- Validation at the boundary
- Backend-agnostic (repository handles persistence)
"""

from .base import CamelModel, Document, utc_now_iso
from .painpoint import Target, PainPointSubmission, Classification, PainPointRecord
from .waitlist import WaitlistSignup, WaitlistEntry, normalize_email
from .worker import WorkerStats

__all__ = [
    # Base
    "CamelModel",
    "Document",
    "utc_now_iso",
    # Pain points
    "Target",
    "PainPointSubmission",
    "Classification",
    "PainPointRecord",
    # Waitlist
    "WaitlistSignup",
    "WaitlistEntry",
    "normalize_email",
    # Worker
    "WorkerStats",
]
