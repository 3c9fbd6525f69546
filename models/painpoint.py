"""
Pain point models - submissions, classifications and stored records.
"""

import math
from enum import Enum
from typing import Any, Mapping, Optional
from pydantic import Field, StrictStr, field_validator

from config import (
    DEFAULT_INDUSTRY,
    DEFAULT_SENTIMENT,
    DEFAULT_CONFIDENCE,
    DEFAULT_EXPLANATION,
    FAILED_EXPLANATION,
)
from .base import CamelModel, Document, utc_now_iso


class Target(str, Enum):
    """Which collection a submission is written to."""
    PRIMARY = "primary"
    PUBLIC = "public"


class PainPointSubmission(CamelModel):
    """Client input. Only `description` is accepted; everything else is ignored."""
    description: StrictStr

    @field_validator("description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("description must be a non-empty string")
        return value


def _text_or(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback


def _score_or(value: Any, fallback: int) -> int:
    # bool is an int subclass; "85" is a string. Both are wrong types here.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    if isinstance(value, float) and not math.isfinite(value):
        return fallback
    return max(0, min(100, int(round(value))))


class Classification(CamelModel):
    """
    Industry / sentiment / confidence for one description.

    All four fields are always present. Build from untrusted data with
    coerce(), never with the constructor.
    """
    industry: str = DEFAULT_INDUSTRY
    sentiment: str = DEFAULT_SENTIMENT
    confidence_score: int = Field(default=DEFAULT_CONFIDENCE, ge=0, le=100)
    confidence_explanation: str = DEFAULT_EXPLANATION

    @classmethod
    def coerce(cls, data: Optional[Mapping[str, Any]]) -> "Classification":
        """
        Normalize an untyped mapping (model output or a stored record).

        Any field that is missing or of the wrong type is replaced by its
        fallback. Accepts camelCase or snake_case keys.
        """
        if isinstance(data, CamelModel):
            data = data.model_dump(by_alias=True)
        if not isinstance(data, Mapping):
            data = {}

        def pick(camel: str, snake: str) -> Any:
            return data[camel] if camel in data else data.get(snake)

        return cls(
            industry=_text_or(pick("industry", "industry"), DEFAULT_INDUSTRY),
            sentiment=_text_or(pick("sentiment", "sentiment"), DEFAULT_SENTIMENT),
            confidence_score=_score_or(pick("confidenceScore", "confidence_score"), DEFAULT_CONFIDENCE),
            confidence_explanation=_text_or(
                pick("confidenceExplanation", "confidence_explanation"), DEFAULT_EXPLANATION
            ),
        )

    @classmethod
    def failed(cls) -> "Classification":
        """Result used whenever classification could not be obtained."""
        return cls(confidence_explanation=FAILED_EXPLANATION)


class PainPointRecord(Document):
    """
    A persisted, classified pain point.

    Created once at ingestion, never updated. is_test is only stored when
    true; is_anonymous only on the public collection.
    """
    description: str
    industry: str = DEFAULT_INDUSTRY
    sentiment: str = DEFAULT_SENTIMENT
    confidence_score: int = DEFAULT_CONFIDENCE
    confidence_explanation: str = DEFAULT_EXPLANATION
    created_at: str = Field(default_factory=utc_now_iso)
    is_test: Optional[bool] = None
    is_anonymous: Optional[bool] = None

    @classmethod
    def build(
        cls,
        description: str,
        classification: Classification,
        created_at: str,
        is_test: bool = False,
        is_anonymous: bool = False,
    ) -> "PainPointRecord":
        """Assemble a record, re-applying the classification fallbacks."""
        clean = Classification.coerce(classification)
        return cls(
            description=description,
            industry=clean.industry,
            sentiment=clean.sentiment,
            confidence_score=clean.confidence_score,
            confidence_explanation=clean.confidence_explanation,
            created_at=created_at,
            is_test=True if is_test else None,
            is_anonymous=True if is_anonymous else None,
        )

    @classmethod
    def from_document(cls, data: dict) -> "PainPointRecord":
        """Tolerates legacy documents with missing or mistyped fields."""
        clean = Classification.coerce(data)
        description = data.get("description")
        created_at = data.get("createdAt")
        doc_id = data.get("id")
        return cls(
            id=doc_id if isinstance(doc_id, str) else None,
            description=description if isinstance(description, str) else "",
            industry=clean.industry,
            sentiment=clean.sentiment,
            confidence_score=clean.confidence_score,
            confidence_explanation=clean.confidence_explanation,
            created_at=created_at if isinstance(created_at, str) else "",
            # Flags are only ever stored as literal true
            is_test=True if data.get("isTest") is True else None,
            is_anonymous=True if data.get("isAnonymous") is True else None,
        )

    def to_listing(self) -> dict:
        """Fields returned by the listing endpoints."""
        return self.model_dump(
            by_alias=True,
            include={
                "id", "description", "industry", "sentiment",
                "confidence_score", "confidence_explanation", "created_at",
            },
        )

    def to_public_summary(self) -> dict:
        """What the anonymous caller sees; the explanation is withheld."""
        return self.model_dump(
            by_alias=True,
            include={"industry", "sentiment", "confidence_score"},
        )
