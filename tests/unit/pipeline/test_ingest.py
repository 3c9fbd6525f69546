"""Unit tests for IngestionService."""

import dataclasses
import json
from unittest.mock import MagicMock

import pytest

from errors import PersistenceError, ValidationError
from models import Target
from pipeline import IngestionService
from pipeline.ingest import INVALID_DESCRIPTION, has_test_marker


class TestValidation:
    """Invalid input fails before any classifier or store call."""

    @pytest.mark.parametrize("payload", [
        None,
        "a description",
        ["a"],
        {},
        {"description": ""},
        {"description": "   \n\t"},
        {"description": 42},
        {"description": None},
    ])
    def test_rejected_without_side_effects(self, service, repo, llm_client, notifier, payload):
        with pytest.raises(ValidationError) as exc:
            service.ingest(payload)

        assert str(exc.value) == INVALID_DESCRIPTION
        llm_client.chat.completions.create.assert_not_called()
        notifier.notify.assert_not_called()
        assert repo.painpoints.count() == 0
        assert repo.public_painpoints.count() == 0


class TestPrimaryIngest:
    """Submissions to the primary collection."""

    def test_stores_classified_record(self, service, repo):
        record = service.ingest({"description": "  Invoicing takes hours every month  "})

        assert record.id
        assert record.description == "Invoicing takes hours every month"
        assert record.industry == "SaaS"
        assert record.sentiment == "Frustration"
        assert record.confidence_score == 82
        assert record.created_at == "2025-01-15T12:00:00.000Z"

        stored = repo.painpoints.get(record.id)
        assert stored["description"] == "Invoicing takes hours every month"
        assert stored["confidenceScore"] == 82
        assert "isTest" not in stored
        assert "isAnonymous" not in stored
        assert repo.public_painpoints.count() == 0

    def test_notifies_with_stored_record(self, service, notifier):
        record = service.ingest({"description": "Shipping labels misprint"})

        notifier.notify.assert_called_once()
        sent = notifier.notify.call_args[0][0]
        assert sent.id == record.id

    def test_long_description_not_truncated(self, service):
        text = "x" * 6000

        record = service.ingest({"description": text})

        assert len(record.description) == 6000

    def test_extra_fields_ignored(self, service, repo):
        record = service.ingest({"description": "desc", "industry": "forged", "isTest": True})

        assert record.industry == "SaaS"
        assert "isTest" not in repo.painpoints.get(record.id)

    @pytest.mark.parametrize("description", [
        "[test] billing is broken",
        "billing is broken [TEST]",
        "a [TeSt] entry",
    ])
    def test_marker_sets_is_test(self, service, repo, description):
        record = service.ingest({"description": description})

        assert record.is_test is True
        assert repo.painpoints.get(record.id)["isTest"] is True

    def test_failed_classification_still_stored(self, settings, repo, notifier, clock, make_llm):
        from classifier import Classifier

        llm = make_llm("I am not sure what you mean.")
        service = IngestionService(settings, repo, Classifier(settings, client=llm), notifier=notifier, clock=clock)

        record = service.ingest({"description": "something"})

        assert record.industry == "unknown"
        assert record.sentiment == "neutral"
        assert record.confidence_score == 0
        assert repo.painpoints.count() == 1
        notifier.notify.assert_called_once()

    @pytest.mark.parametrize("score, expected", [(250, 100), (-3, 0), (49.5, 50), ("90", 0)])
    def test_score_always_int_in_range(self, settings, repo, clock, make_llm, score, expected):
        from classifier import Classifier

        answer = json.dumps({"industry": "Retail", "sentiment": "Anger", "confidenceScore": score})
        service = IngestionService(settings, repo, Classifier(settings, client=make_llm(answer)), clock=clock)

        record = service.ingest({"description": "returns are painful"})

        assert isinstance(record.confidence_score, int)
        assert record.confidence_score == expected
        assert repo.painpoints.get(record.id)["confidenceScore"] == expected


class TestPersistenceFailures:
    """Store failures surface as PersistenceError and suppress notification."""

    def test_insert_failure(self, service, repo, notifier):
        repo.painpoints.add = MagicMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(PersistenceError):
            service.ingest({"description": "desc"})

        notifier.notify.assert_not_called()

    def test_eviction_failure(self, service, repo, notifier):
        repo.public_painpoints.count = MagicMock(side_effect=RuntimeError("unavailable"))

        with pytest.raises(PersistenceError):
            service.ingest({"description": "desc"}, Target.PUBLIC)

        notifier.notify.assert_not_called()

    def test_notifier_errors_swallowed(self, service, repo, notifier):
        notifier.notify.side_effect = RuntimeError("smtp down")

        record = service.ingest({"description": "desc"})

        assert repo.painpoints.get(record.id) is not None


class TestPublicIngest:
    """Anonymous submissions to the capped public collection."""

    def test_marks_anonymous(self, service, repo):
        record = service.ingest({"description": "desc"}, Target.PUBLIC)

        assert record.is_anonymous is True
        assert repo.public_painpoints.get(record.id)["isAnonymous"] is True
        assert repo.painpoints.count() == 0

    def test_accepts_target_value(self, service, repo):
        service.ingest({"description": "desc"}, "public")

        assert repo.public_painpoints.count() == 1

    def test_truncates_long_description(self, settings, service, llm_client):
        text = "y" * (settings.public_max_description + 500)

        record = service.ingest({"description": text}, Target.PUBLIC)

        assert len(record.description) == settings.public_max_description
        sent = llm_client.chat.completions.create.call_args.kwargs["messages"][-1]["content"]
        assert "y" * (settings.public_max_description + 1) not in sent

    def test_truncation_does_not_end_in_whitespace(self, settings, service):
        limit = settings.public_max_description
        text = "z" * (limit - 3) + "      tail"

        record = service.ingest({"description": text}, Target.PUBLIC)

        assert record.description == "z" * (limit - 3)

    def test_cap_evicts_oldest(self, settings, service, repo):
        ids = [service.ingest({"description": f"entry {i}"}, Target.PUBLIC).id for i in range(5)]

        remaining = {d["id"] for d in repo.public_painpoints.query()}

        assert repo.public_painpoints.count() == settings.public_max_entries
        assert remaining == set(ids[-settings.public_max_entries:])


class TestListing:
    """list_records / recent_records visibility and ordering."""

    def _seed(self, service):
        service.ingest({"description": "first"})
        service.ingest({"description": "[test] second"})
        service.ingest({"description": "third"})

    def test_list_hides_test_records(self, service):
        self._seed(service)

        descriptions = [r.description for r in service.list_records()]

        assert sorted(descriptions) == ["first", "third"]

    def test_development_shows_test_records(self, settings, repo, classifier, clock):
        dev = IngestionService(dataclasses.replace(settings, environment="development"), repo, classifier, clock=clock)
        self._seed(dev)

        assert len(dev.list_records()) == 3
        assert len(dev.recent_records()) == 3

    def test_include_tests_override(self, service):
        self._seed(service)

        assert len(service.list_records(include_tests=True)) == 3

    def test_recent_newest_first(self, service):
        self._seed(service)

        descriptions = [r.description for r in service.recent_records()]

        assert descriptions == ["third", "first"]

    def test_recent_limit(self, service):
        for i in range(4):
            service.ingest({"description": f"entry {i}"})

        records = service.recent_records(limit=2)

        assert [r.description for r in records] == ["entry 3", "entry 2"]

    def test_read_failure(self, service, repo):
        repo.painpoints.query = MagicMock(side_effect=RuntimeError("timeout"))

        with pytest.raises(PersistenceError):
            service.list_records()
        with pytest.raises(PersistenceError):
            service.recent_records()

    @pytest.mark.parametrize("bad", [
        {"description": 123},
        {"createdAt": None},
        {"isTest": "maybe"},
    ])
    def test_malformed_document_does_not_break_listing(self, service, repo, bad):
        repo.painpoints.add({
            "description": "legacy",
            "createdAt": "2025-01-01T00:00:00.000Z",
            **bad,
        })
        service.ingest({"description": "fresh"})

        records = service.list_records()

        assert len(records) == 2
        assert "fresh" in [r.description for r in records]
        assert len(service.recent_records()) >= 1

    def test_listing_fields(self, service):
        service.ingest({"description": "first"})

        listing = service.list_records()[0].to_listing()

        assert set(listing) == {
            "id", "description", "industry", "sentiment",
            "confidenceScore", "confidenceExplanation", "createdAt",
        }


class TestHasTestMarker:
    def test_absent(self):
        assert not has_test_marker("testing the checkout flow")
        assert not has_test_marker("[tes t]")

    def test_present(self):
        assert has_test_marker("[Test]")
