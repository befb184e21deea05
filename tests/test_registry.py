"""Tests for the in-memory suspicious registry."""

import json
import threading

import pytest

from app.main import DATA_DIR
from app.storage.registry import InMemoryRegistry, load_registry
from tests.conftest import SUSPICIOUS_RECIPIENTS


class TestRegistryLookup:
    def test_listed_recipient(self, registry):
        entry = registry.lookup("scammer@upi")
        assert entry.report_count == 15
        assert entry.max_safe_amount == 1000

    def test_unlisted_recipient(self, registry):
        assert registry.lookup("merchant@upi") is None

    def test_exact_match_is_case_sensitive(self, registry):
        assert registry.lookup("SCAMMER@UPI") is None

    def test_exact_match_keeps_whitespace(self, registry):
        assert registry.lookup(" scammer@upi ") is None

    def test_entries_listing(self, registry):
        ids = {e.recipient_id for e in registry.entries()}
        assert ids == {"scammer@upi", "unknown@suspicious", "fake@payment"}
        assert len(registry) == 3


class TestRegistryMatchingModes:
    def test_normalized_ignores_case_and_whitespace(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="normalized")
        entry = registry.lookup("  Scammer@UPI ")
        assert entry.recipient_id == "scammer@upi"

    def test_normalized_does_not_fuzzy_match(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="normalized")
        assert registry.lookup("scamer@upi") is None

    def test_fuzzy_catches_lookalike(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="fuzzy")
        entry = registry.lookup("scamer@upi")
        assert entry.recipient_id == "scammer@upi"

    def test_fuzzy_ignores_unrelated(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="fuzzy")
        assert registry.lookup("merchant@upi") is None

    def test_fuzzy_threshold_respected(self):
        registry = InMemoryRegistry(
            SUSPICIOUS_RECIPIENTS[:], matching="fuzzy", fuzzy_threshold=100
        )
        assert registry.lookup("scamer@upi") is None

    def test_reports_never_fuzzy_match(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="fuzzy")
        entry = registry.report_and_upsert("scamer@upi")
        assert entry.recipient_id == "scamer@upi"
        assert entry.report_count == 1
        assert registry.lookup("scammer@upi").report_count == 15

    def test_normalized_report_updates_listed_entry(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="normalized")
        entry = registry.report_and_upsert("FAKE@payment")
        assert entry.recipient_id == "fake@payment"
        assert entry.report_count == 26

    def test_unknown_mode_rejected(self):
        with pytest.raises(ValueError):
            InMemoryRegistry(matching="phonetic")

    def test_configure_switches_mode(self, registry):
        registry.configure("normalized", 90, 0)
        assert registry.lookup("SCAMMER@UPI") is not None


class TestReportAndUpsert:
    def test_existing_entry_incremented(self, registry):
        entry = registry.report_and_upsert("scammer@upi")
        assert entry.report_count == 16
        assert entry.max_safe_amount == 1000
        assert registry.lookup("scammer@upi") == entry

    def test_previous_entry_value_unchanged(self, registry):
        before = registry.lookup("scammer@upi")
        registry.report_and_upsert("scammer@upi")
        assert before.report_count == 15

    def test_new_entry_gets_default_limit(self, registry):
        entry = registry.report_and_upsert("newscam@upi")
        assert entry.report_count == 1
        assert entry.max_safe_amount == 0
        assert registry.lookup("newscam@upi") == entry

    def test_configured_default_limit(self):
        registry = InMemoryRegistry(default_max_safe_amount=250)
        assert registry.report_and_upsert("x@upi").max_safe_amount == 250

    def test_n_reports_give_count_n(self, registry):
        for _ in range(7):
            registry.report_and_upsert("repeat@upi")
        assert registry.lookup("repeat@upi").report_count == 7

    def test_other_entries_untouched(self, registry):
        registry.report_and_upsert("scammer@upi")
        assert registry.lookup("fake@payment").report_count == 25
        assert registry.lookup("unknown@suspicious").report_count == 8

    def test_concurrent_reports_counted_exactly(self, registry):
        def worker():
            for _ in range(50):
                registry.report_and_upsert("busy@upi")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert registry.lookup("busy@upi").report_count == 400

    def test_lookups_during_reports_in_normalized_mode(self):
        registry = InMemoryRegistry(SUSPICIOUS_RECIPIENTS[:], matching="normalized")
        errors = []

        def reporter():
            for i in range(300):
                registry.report_and_upsert(f"new{i}@upi")

        def reader():
            try:
                for _ in range(300):
                    registry.lookup("Unlisted@UPI")
                    registry.entries()
            except RuntimeError as exc:
                errors.append(exc)

        threads = [threading.Thread(target=reporter)]
        threads += [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []
        assert len(registry) == 303


class TestLoadRegistry:
    def test_load_from_json(self, tmp_path):
        path = tmp_path / "suspicious.json"
        path.write_text(json.dumps([
            {"recipient_id": "a@upi", "report_count": 3, "max_safe_amount": 700},
        ]))
        registry = load_registry(path, default_max_safe_amount=100, matching="normalized")
        assert registry.lookup("A@UPI").max_safe_amount == 700
        assert registry.report_and_upsert("b@upi").max_safe_amount == 100

    def test_bundled_seed_data(self):
        registry = load_registry(DATA_DIR / "suspicious_recipients.json")
        assert registry.lookup("unknown@suspicious").max_safe_amount == 2000
