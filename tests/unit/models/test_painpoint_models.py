"""Unit tests for pain point and waitlist models."""

import math

import pytest
import pydantic

from models import (
    Classification,
    PainPointRecord,
    PainPointSubmission,
    WaitlistSignup,
    normalize_email,
)


class TestClassificationCoerce:
    """Test the single place where untyped model output is normalized."""

    def test_all_fields_present_on_empty_input(self):
        c = Classification.coerce({})

        assert c.industry == "unknown"
        assert c.sentiment == "neutral"
        assert c.confidence_score == 0
        assert c.confidence_explanation == "No explanation provided."

    @pytest.mark.parametrize("data", [None, [], "SaaS", 42])
    def test_non_mapping_input(self, data):
        assert Classification.coerce(data) == Classification()

    def test_camel_and_snake_keys(self):
        camel = Classification.coerce({"confidenceScore": 70, "confidenceExplanation": "ok"})
        snake = Classification.coerce({"confidence_score": 70, "confidence_explanation": "ok"})

        assert camel == snake

    def test_strings_trimmed(self):
        c = Classification.coerce({"industry": "  SaaS  ", "sentiment": "\tFrustration\n"})

        assert c.industry == "SaaS"
        assert c.sentiment == "Frustration"

    @pytest.mark.parametrize("score", [True, False, "85", None, [85], math.nan, math.inf])
    def test_bad_scores_become_zero(self, score):
        assert Classification.coerce({"confidenceScore": score}).confidence_score == 0

    def test_coerce_accepts_classification(self):
        original = Classification(industry="Retail", confidence_score=12)

        assert Classification.coerce(original) == original

    def test_failed_has_failure_message(self):
        failed = Classification.failed()

        assert failed.confidence_score == 0
        assert failed.confidence_explanation != "No explanation provided."
        assert failed.confidence_explanation


class TestPainPointSubmission:
    """Test submission validation."""

    def test_trims(self):
        assert PainPointSubmission.model_validate({"description": "  hi  "}).description == "hi"

    @pytest.mark.parametrize("payload", [
        {},
        {"description": ""},
        {"description": "   "},
        {"description": None},
        {"description": 123},
        {"description": ["a"]},
    ])
    def test_rejects(self, payload):
        with pytest.raises(pydantic.ValidationError):
            PainPointSubmission.model_validate(payload)

    def test_ignores_extra_fields(self):
        s = PainPointSubmission.model_validate({"description": "x", "industry": "forged"})

        assert not hasattr(s, "industry")


class TestPainPointRecord:
    """Test record assembly and serialization."""

    def test_document_is_camel_case_without_id(self):
        record = PainPointRecord.build(
            description="desc",
            classification=Classification(industry="SaaS", confidence_score=50),
            created_at="2025-01-15T12:00:00.000Z",
        )

        doc = record.to_document()

        assert doc == {
            "description": "desc",
            "industry": "SaaS",
            "sentiment": "neutral",
            "confidenceScore": 50,
            "confidenceExplanation": "No explanation provided.",
            "createdAt": "2025-01-15T12:00:00.000Z",
        }

    def test_flags_only_when_true(self):
        record = PainPointRecord.build("d", Classification(), "t", is_test=True, is_anonymous=True)

        doc = record.to_document()

        assert doc["isTest"] is True
        assert doc["isAnonymous"] is True

    def test_public_summary_withholds_explanation(self):
        record = PainPointRecord.build("d", Classification(industry="SaaS"), "t", is_anonymous=True)

        assert record.to_public_summary() == {
            "industry": "SaaS",
            "sentiment": "neutral",
            "confidenceScore": 0,
        }

    def test_from_legacy_document(self):
        record = PainPointRecord.from_document({
            "id": "abc",
            "description": "old entry",
            "industry": "",
            "createdAt": "2024-01-01T00:00:00.000Z",
        })

        assert record.id == "abc"
        assert record.industry == "unknown"
        assert record.confidence_score == 0

    @pytest.mark.parametrize("field, value", [
        ("description", 123),
        ("description", None),
        ("createdAt", None),
        ("createdAt", 1700000000),
        ("isTest", "maybe"),
        ("isAnonymous", 1),
        ("id", 7),
    ])
    def test_from_mistyped_document(self, field, value):
        doc = {
            "id": "abc",
            "description": "ok",
            "createdAt": "2024-01-01T00:00:00.000Z",
            field: value,
        }

        record = PainPointRecord.from_document(doc)

        assert isinstance(record.description, str)
        assert isinstance(record.created_at, str)
        assert record.is_test is None
        assert record.is_anonymous is None

    def test_from_document_keeps_true_flags(self):
        record = PainPointRecord.from_document({"description": "d", "isTest": True, "isAnonymous": True})

        assert record.is_test is True
        assert record.is_anonymous is True

    def test_created_at_default_is_utc_iso(self):
        record = PainPointRecord(description="d")

        assert record.created_at.endswith("Z")
        assert "T" in record.created_at


class TestWaitlistSignup:
    """Test email normalization and validation."""

    def test_normalize(self):
        assert normalize_email("  Foo@Example.COM ") == "foo@example.com"

    def test_signup_normalizes(self):
        assert WaitlistSignup.model_validate({"email": "Foo@Example.com "}).email == "foo@example.com"

    @pytest.mark.parametrize("email", ["", "foo", "foo@bar", "foo bar@example.com", "@example.com", "a@b@c.com", "mail me at a@b.com", 7, None])
    def test_rejects(self, email):
        with pytest.raises(pydantic.ValidationError):
            WaitlistSignup.model_validate({"email": email})
