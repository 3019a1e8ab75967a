"""Tests for SEO metrics, mock backlinks, the search history store, and exports."""

import json
import random
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from conftest import FakeClock
from seo_keywords.modules.keyword_generation.engine import LocalGenerationEngine
from seo_keywords.modules.search_history.backlinks import (
    FIRST_SEEN_EPOCH,
    MOCK_DOMAINS,
    generate_mock_backlinks,
)
from seo_keywords.modules.search_history.exporter import JSONFileExporter
from seo_keywords.modules.search_history.history_store import (
    HISTORY_STORAGE_KEY,
    SearchHistoryStore,
)
from seo_keywords.modules.search_history.metrics import (
    calculate_seo_metrics,
    count_keywords,
    get_percentage,
    get_seo_score_class,
    normalize_competition,
)
from seo_keywords.storage import StorageError

PARAMS = {"business": "Test", "industry": "test", "location": "", "keywordType": "mixed"}


def _kw(keyword, volume="100", competition="easy"):
    return {"keyword": keyword, "search_volume": volume, "competition": competition,
            "intent": "commercial"}


# ===========================================================================
# 1. SEO metrics
# ===========================================================================
class TestSeoMetrics:

    def test_two_keyword_scenario(self, sample_results):
        metrics = calculate_seo_metrics(sample_results)
        assert metrics["totalKeywords"] == 2
        assert metrics["totalVolume"] == 1500
        assert metrics["averageVolume"] == 750
        assert metrics["competitionBreakdown"] == {"easy": 1, "medium": 1, "hard": 0}
        assert metrics["seoScore"] == 45

    def test_empty_results(self):
        metrics = calculate_seo_metrics({})
        assert metrics == {
            "totalKeywords": 0,
            "totalVolume": 0,
            "averageVolume": 0,
            "competitionBreakdown": {"easy": 0, "medium": 0, "hard": 0},
            "seoScore": 0,
        }

    def test_display_volumes_are_parsed(self):
        metrics = calculate_seo_metrics({
            "primary_keywords": [_kw("a", "1.5k"), _kw("b", "2,000"), _kw("c", "n/a")],
        })
        assert metrics["totalVolume"] == 3500

    def test_volume_score_is_capped(self):
        metrics = calculate_seo_metrics({"primary_keywords": [_kw("a", "50000", "easy")]})
        # 0.8 * 0.6 + 1.0 * 0.4
        assert metrics["seoScore"] == 88

    def test_breakdown_sums_to_total(self):
        metrics = calculate_seo_metrics({
            "primary_keywords": [_kw("a", competition="high"), _kw("b", competition="low")],
            "local_keywords": [_kw("c", competition="???"), _kw("d", competition=None)],
        })
        breakdown = metrics["competitionBreakdown"]
        assert breakdown == {"easy": 1, "medium": 2, "hard": 1}
        assert sum(breakdown.values()) == metrics["totalKeywords"]

    def test_loose_entries_skipped(self):
        metrics = calculate_seo_metrics({
            "primary_keywords": [_kw("a"), "stray string", None],
            "long_tail_keywords": "not a list",
        })
        assert metrics["totalKeywords"] == 1

    def test_count_ignores_non_mapping_entries(self):
        results = {"primary_keywords": [_kw("a"), "stray", None, 7]}
        assert count_keywords(results) == 1
        assert count_keywords(results) == calculate_seo_metrics(results)["totalKeywords"]

    def test_non_finite_volume_counts_as_zero(self):
        results = json.loads(
            '{"primary_keywords":[{"keyword":"x","search_volume":NaN,"competition":"easy"}]}'
        )
        metrics = calculate_seo_metrics(results)
        assert metrics["totalKeywords"] == 1
        assert metrics["totalVolume"] == 0

    def test_legacy_content_key(self):
        results = {"content_keywords": [_kw("how to groom a dog")]}
        assert count_keywords(results) == 1
        assert calculate_seo_metrics(results)["totalKeywords"] == 1

    @pytest.mark.parametrize("score,expected", [
        (85, "excellent"), (80, "excellent"), (70, "good"), (60, "good"),
        (50, "fair"), (40, "fair"), (30, "poor"), (0, "poor"),
    ])
    def test_score_class(self, score, expected):
        assert get_seo_score_class(score) == expected

    def test_percentage(self):
        assert get_percentage(1, 3) == 33
        assert get_percentage(1, 8) == 13
        assert get_percentage(5, 0) == 0

    @pytest.mark.parametrize("label,tier", [
        ("Easy", "easy"), ("HIGH", "hard"), (" medium ", "medium"), ("", "medium"),
    ])
    def test_normalize_competition(self, label, tier):
        assert normalize_competition(label) == tier


# ===========================================================================
# 2. Mock backlinks
# ===========================================================================
class TestMockBacklinks:

    def test_shape_and_ordering(self, rng):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        params = {"business": "Happy Paws Grooming Studio", "location": "Seattle"}
        links = generate_mock_backlinks(params, rng=rng, now=now)

        assert 5 <= len(links) <= 20
        authorities = [link["authority"] for link in links]
        assert authorities == sorted(authorities, reverse=True)
        anchors = {"Happy Paws Grooming", "Happy services", "click here", "read more",
                   "Happy in Seattle"}
        for link in links:
            assert link["domain"] in MOCK_DOMAINS
            assert link["url"].startswith("https://" + link["domain"] + "/page-")
            assert 1 <= link["authority"] <= 100
            assert link["followType"] in ("follow", "nofollow")
            assert link["anchorText"] in anchors
            first_seen = datetime.fromisoformat(link["firstSeen"])
            assert FIRST_SEEN_EPOCH <= first_seen <= now
            assert link["lastChecked"] == now.isoformat()

    def test_without_location(self, rng):
        links = generate_mock_backlinks({"business": ""}, rng=rng)
        assert {link["anchorText"] for link in links} <= {
            "", " services", "click here", "read more", "local business",
        }

    def test_seeded_reproducible(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        first = generate_mock_backlinks(PARAMS, rng=random.Random(3), now=now)
        second = generate_mock_backlinks(PARAMS, rng=random.Random(3), now=now)
        assert first == second


# ===========================================================================
# 3. History store mutations
# ===========================================================================
class TestHistoryStoreAdd:

    def test_add_search_scenario(self, history_store, sample_results):
        entry_id = history_store.add_search(PARAMS, sample_results)
        entry = history_store.get_search_by_id(entry_id)

        assert entry["searchParams"] == PARAMS
        assert entry["results"] == sample_results
        assert entry["timestamp"] == "2024-01-15T10:00:00+00:00"
        assert entry["seoMetrics"]["totalKeywords"] == 2
        assert entry["seoMetrics"]["totalVolume"] == 1500
        assert entry["seoMetrics"]["competitionBreakdown"] == {"easy": 1, "medium": 1, "hard": 0}
        assert 5 <= len(entry["backlinks"]) <= 20

    def test_ids_are_unique(self, history_store, sample_results):
        ids = {history_store.add_search(PARAMS, sample_results) for _ in range(25)}
        assert len(ids) == 25

    def test_accepts_result_set_objects(self, history_store, rng):
        result = LocalGenerationEngine(rng=rng, delay_seconds=0).build(
            "Professional pet grooming services", "pet-care", "Seattle", "local",
        )
        entry_id = history_store.add_search(PARAMS, result)
        entry = history_store.get_search_by_id(entry_id)
        assert entry["results"] == result.to_dict()
        assert entry["seoMetrics"]["totalKeywords"] == count_keywords(result.to_dict())

    def test_stored_results_are_copies(self, history_store, sample_results):
        entry_id = history_store.add_search(PARAMS, sample_results)
        sample_results["primary_keywords"].clear()
        assert len(history_store.get_search_by_id(entry_id)["results"]["primary_keywords"]) == 2

    def test_capacity_drops_oldest(self, memory_kv, rng, fake_clock, sample_results):
        store = SearchHistoryStore(memory_kv, max_items=3, rng=rng, clock=fake_clock)
        ids = [store.add_search(PARAMS, sample_results) for _ in range(5)]

        assert len(store) == 3
        assert [entry["id"] for entry in store.get_history()] == list(reversed(ids[2:]))
        assert len(json.loads(memory_kv.get(HISTORY_STORAGE_KEY))) == 3

    def test_persist_failure_keeps_memory(self, rng, fake_clock, sample_results):
        kv = MagicMock()
        kv.get.return_value = None
        kv.set.side_effect = StorageError("disk full")
        store = SearchHistoryStore(kv, rng=rng, clock=fake_clock)

        entry_id = store.add_search(PARAMS, sample_results)

        assert store.get_search_by_id(entry_id) is not None
        assert len(store) == 1

    def test_reload_from_kv(self, memory_kv, rng, fake_clock, sample_results):
        store = SearchHistoryStore(memory_kv, rng=rng, clock=fake_clock)
        entry_id = store.add_search(PARAMS, sample_results)

        reloaded = SearchHistoryStore(memory_kv)
        assert reloaded.get_search_by_id(entry_id)["seoMetrics"]["totalVolume"] == 1500

    @pytest.mark.parametrize("stored", ["not json", json.dumps({"a": 1})])
    def test_corrupt_storage_loads_empty(self, memory_kv, stored):
        memory_kv.set(HISTORY_STORAGE_KEY, stored)
        assert len(SearchHistoryStore(memory_kv)) == 0

    def test_clear_history(self, history_store, memory_kv, sample_results):
        history_store.add_search(PARAMS, sample_results)
        assert history_store.clear_history() is True
        assert history_store.get_history() == []
        assert memory_kv.get(HISTORY_STORAGE_KEY) is None

    def test_clear_failure_keeps_history(self, rng, fake_clock, sample_results):
        kv = MagicMock()
        kv.get.return_value = None
        kv.remove.side_effect = StorageError("locked")
        store = SearchHistoryStore(kv, rng=rng, clock=fake_clock)
        store.add_search(PARAMS, sample_results)

        assert store.clear_history() is False
        assert len(store) == 1


# ===========================================================================
# 4. History store queries
# ===========================================================================
class TestHistoryStoreQueries:

    def test_history_most_recent_first(self, history_store, sample_results):
        first = history_store.add_search(PARAMS, sample_results)
        second = history_store.add_search(PARAMS, sample_results)
        assert [entry["id"] for entry in history_store.get_history()] == [second, first]
        assert [entry["id"] for entry in history_store.get_recent_searches(1)] == [second]

    def test_unknown_id(self, history_store):
        assert history_store.get_search_by_id("missing") is None

    def test_history_snapshots_are_independent(self, history_store, sample_results):
        for business in ("A", "B", "C"):
            history_store.add_search(dict(PARAMS, business=business), sample_results)

        first = history_store.get_history()
        second = history_store.get_history()
        assert first == second
        assert first is not second

        first[0]["searchParams"]["business"] = "changed"
        first[0]["results"]["primary_keywords"].clear()
        first.clear()
        assert history_store.get_history() == second
        assert [e["searchParams"]["business"] for e in second] == ["C", "B", "A"]

    def test_add_search_with_non_finite_volume(self, history_store):
        results = json.loads(
            '{"primary_keywords":[{"keyword":"x","search_volume":NaN,"competition":"easy"}]}'
        )
        entry_id = history_store.add_search(PARAMS, results)
        metrics = history_store.get_search_by_id(entry_id)["seoMetrics"]
        assert metrics["totalKeywords"] == 1
        assert metrics["totalVolume"] == 0

    def test_average_ignores_loose_entries(self, history_store):
        history_store.add_search(PARAMS, {"primary_keywords": [_kw("a"), _kw("b"), "stray"]})
        history_store.add_search(PARAMS, {"primary_keywords": [_kw("c"), None, 3]})
        stats = history_store.get_search_stats()
        assert stats["averageKeywordsPerSearch"] == 2

    def test_business_filter_is_case_insensitive(self, history_store, sample_results):
        history_store.add_search(dict(PARAMS, business="Happy Paws Grooming"), sample_results)
        history_store.add_search(dict(PARAMS, business="Downtown Dental"), sample_results)
        matches = history_store.get_searches_by_business("paws")
        assert [m["searchParams"]["business"] for m in matches] == ["Happy Paws Grooming"]

    def test_stats(self, history_store, sample_results):
        three = dict(sample_results, local_keywords=[_kw("x")])
        history_store.add_search(dict(PARAMS, business="A", industry="pet-care"), sample_results)
        history_store.add_search(dict(PARAMS, business="B", industry="fitness"), three)
        history_store.add_search(dict(PARAMS, business="A", industry="pet-care"), sample_results)

        stats = history_store.get_search_stats()
        assert stats["totalSearches"] == 3
        assert stats["uniqueBusinesses"] == 2
        assert stats["mostUsedIndustry"] == "pet-care"
        # (2 + 3 + 2) / 3 = 2.33
        assert stats["averageKeywordsPerSearch"] == 2
        assert stats["firstSearchDate"] == "2024-01-15T10:00:00+00:00"
        assert stats["latestSearchDate"] == "2024-01-15T10:00:02+00:00"

    def test_stats_average_rounds_half_up(self, history_store, sample_results):
        three = dict(sample_results, local_keywords=[_kw("x")])
        history_store.add_search(PARAMS, sample_results)
        history_store.add_search(PARAMS, three)
        assert history_store.get_search_stats()["averageKeywordsPerSearch"] == 3

    def test_most_used_industry_tie_goes_to_first_seen(self, history_store, sample_results):
        history_store.add_search(dict(PARAMS, industry="beauty"), sample_results)
        history_store.add_search(dict(PARAMS, industry="fitness"), sample_results)
        assert history_store.get_search_stats()["mostUsedIndustry"] == "beauty"

    def test_empty_stats(self, history_store):
        assert history_store.get_search_stats() == {
            "totalSearches": 0,
            "uniqueBusinesses": 0,
            "mostUsedIndustry": None,
            "averageKeywordsPerSearch": 0,
            "firstSearchDate": None,
            "latestSearchDate": None,
        }

    def test_chart_fills_gaps(self, memory_kv, rng, sample_results):
        clock = FakeClock(datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc), timedelta(days=2))
        store = SearchHistoryStore(memory_kv, rng=rng, clock=clock)
        store.add_search(PARAMS, sample_results)
        store.add_search(PARAMS, sample_results)

        assert store.get_history_for_chart() == {
            "labels": ["2024-03-01", "2024-03-02", "2024-03-03"],
            "data": [1, 0, 1],
        }

    def test_chart_same_day(self, history_store, sample_results):
        history_store.add_search(PARAMS, sample_results)
        history_store.add_search(PARAMS, sample_results)
        assert history_store.get_history_for_chart() == {"labels": ["2024-01-15"], "data": [2]}

    def test_chart_empty(self, history_store):
        assert history_store.get_history_for_chart() == {"labels": [], "data": []}

    def test_dashboard_summary(self, history_store, sample_results):
        history_store.add_search(PARAMS, sample_results)
        history_store.add_search(PARAMS, {"primary_keywords": [_kw("a", "100", "hard")]})
        summary = history_store.get_dashboard_summary()
        assert summary["recentSearches"] == 2
        assert summary["competitionBreakdown"] == {"easy": 1, "medium": 1, "hard": 1}
        assert 0 <= summary["averageSeoScore"] <= 100


# ===========================================================================
# 5. Export / import
# ===========================================================================
class TestHistoryExport:

    def test_export_writes_dated_file(self, history_store, sample_results, tmp_path):
        history_store.add_search(PARAMS, sample_results)
        path = history_store.export_history(JSONFileExporter(tmp_path / "exports"))

        assert path.name == "seo_search_history_2024-01-15.json"
        snapshot = json.loads(path.read_text(encoding="utf-8"))
        assert snapshot["totalSearches"] == 1
        assert len(snapshot["searches"]) == 1
        assert "exportDate" in snapshot

    def test_export_uses_exporter_collaborator(self, history_store):
        exporter = MagicMock()
        exporter.save.return_value = "saved"
        assert history_store.export_history(exporter) == "saved"
        blob, filename = exporter.save.call_args.args
        assert json.loads(blob)["searches"] == []
        assert filename.endswith(".json")

    def test_import_round_trip(self, history_store, sample_results, tmp_path):
        from seo_keywords.storage import MemoryKeyValueStore

        history_store.add_search(PARAMS, sample_results)
        history_store.add_search(PARAMS, sample_results)
        path = history_store.export_history(JSONFileExporter(tmp_path))

        target = SearchHistoryStore(MemoryKeyValueStore())
        assert target.import_history(path.read_bytes()) == 2
        assert target.import_history(path.read_text(encoding="utf-8")) == 0
        assert [e["id"] for e in target.get_history()] == [
            e["id"] for e in history_store.get_history()
        ]

    @pytest.mark.parametrize("snapshot", ["{not json", "[]", {"searches": "nope"}])
    def test_import_rejects_bad_snapshots(self, history_store, snapshot):
        with pytest.raises(ValueError):
            history_store.import_history(snapshot)
