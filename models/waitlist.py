"""
Waitlist signups.
"""

import re
from pydantic import Field, StrictStr, field_validator

from .base import CamelModel, Document, utc_now_iso

# local@domain.tld, no whitespace anywhere
EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def normalize_email(email: str) -> str:
    """Trim and lower-case. The stored and queried form of every address."""
    return email.strip().lower()


class WaitlistSignup(CamelModel):
    """Client input for the waitlist endpoint."""
    email: StrictStr

    @field_validator("email")
    @classmethod
    def _valid_address(cls, value: str) -> str:
        value = normalize_email(value)
        if not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("invalid email format")
        return value


class WaitlistEntry(Document):
    """One signup; at most one per normalized email."""
    email: str
    signed_up_at: str = Field(default_factory=utc_now_iso)
