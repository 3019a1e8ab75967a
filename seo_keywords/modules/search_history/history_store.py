"""Search history persistence, queries, and aggregate statistics."""

import copy
import json
import logging
import random
import threading
import uuid
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Mapping, Optional, Union

from seo_keywords.modules.search_history.backlinks import generate_mock_backlinks
from seo_keywords.modules.search_history.metrics import (
    calculate_seo_metrics,
    count_keywords,
)
from seo_keywords.storage import KeyValueStore, StorageError
from seo_keywords.utils.helpers import parse_iso_timestamp, round_half_up, utcnow

logger = logging.getLogger(__name__)

HISTORY_STORAGE_KEY = "seo-tool-search-history"
DEFAULT_MAX_ITEMS = 100


class SearchHistoryStore:
    """Ordered, capacity-bounded search history mirrored to a key/value store.

    Entries are appended oldest-first and persisted as one JSON array
    under a fixed key; the oldest entries are dropped once ``max_items``
    is exceeded.  Persistence failures are logged and the in-memory
    history stays authoritative.

    Usage::

        store = SearchHistoryStore(SQLKeyValueStore())
        entry_id = store.add_search(
            {"business": "Pet grooming", "industry": "pet-care",
             "location": "Seattle", "keywordType": "local"},
            results,
        )
        stats = store.get_search_stats()
    """

    def __init__(
        self,
        kv_store: KeyValueStore,
        storage_key: str = HISTORY_STORAGE_KEY,
        max_items: int = DEFAULT_MAX_ITEMS,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._kv = kv_store
        self._key = storage_key
        self._max_items = max_items
        self._rng = rng or random.Random()
        self._clock = clock
        self._lock = threading.RLock()
        self._history: list[dict[str, Any]] = self._load_history()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load_history(self) -> list[dict[str, Any]]:
        try:
            raw = self._kv.get(self._key)
        except StorageError as exc:
            logger.warning("Failed to load search history: %s", exc)
            return []
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Stored search history is not valid JSON: %s", exc)
            return []
        if not isinstance(data, list):
            logger.warning("Stored search history is not a list; ignoring it")
            return []
        entries = [entry for entry in data if isinstance(entry, dict)]
        logger.info("Loaded %d search history entries", len(entries))
        return entries

    def _save_history(self) -> bool:
        self._history = self._history[-self._max_items:]
        try:
            self._kv.set(self._key, json.dumps(self._history))
        except StorageError as exc:
            logger.warning("Failed to save search history: %s", exc)
            return False
        return True

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_search(self, search_params: Mapping[str, Any], results: Any) -> str:
        """Record one generation request and its results; return the new entry id."""
        if hasattr(results, "to_dict"):
            results = results.to_dict()
        params = {
            "business": search_params.get("business") or "",
            "industry": search_params.get("industry") or "",
            "location": search_params.get("location") or "",
            "keywordType": search_params.get("keywordType") or "",
        }
        with self._lock:
            now = self._clock()
            entry = {
                "id": uuid.uuid4().hex,
                "timestamp": now.isoformat(),
                "searchParams": params,
                "results": copy.deepcopy(results),
                "backlinks": generate_mock_backlinks(params, rng=self._rng, now=now),
                "seoMetrics": calculate_seo_metrics(results),
            }
            self._history.append(entry)
            self._save_history()

        logger.info(
            "Saved search %s for business=%r (%d keywords, score=%d)",
            entry["id"], params["business"],
            entry["seoMetrics"]["totalKeywords"], entry["seoMetrics"]["seoScore"],
        )
        return entry["id"]

    def clear_history(self) -> bool:
        with self._lock:
            try:
                self._kv.remove(self._key)
            except StorageError as exc:
                logger.warning("Failed to clear search history: %s", exc)
                return False
            self._history = []
        logger.info("Search history cleared")
        return True

    def import_history(self, snapshot: Union[Mapping[str, Any], str, bytes]) -> int:
        """Append entries from an export snapshot, skipping ids already present.

        Returns:
            Number of entries imported.

        Raises:
            ValueError: If the snapshot is not valid JSON or has no ``searches`` list.
        """
        if isinstance(snapshot, (str, bytes)):
            try:
                snapshot = json.loads(snapshot)
            except json.JSONDecodeError as exc:
                raise ValueError(f"Export snapshot is not valid JSON: {exc}") from exc
        searches = snapshot.get("searches") if isinstance(snapshot, Mapping) else None
        if not isinstance(searches, list):
            raise ValueError("Export snapshot has no 'searches' list.")

        with self._lock:
            known_ids = {entry.get("id") for entry in self._history}
            imported = 0
            for entry in searches:
                if not isinstance(entry, dict) or not entry.get("id"):
                    continue
                if entry["id"] in known_ids:
                    continue
                self._history.append(copy.deepcopy(entry))
                known_ids.add(entry["id"])
                imported += 1
            if imported:
                self._save_history()

        logger.info("Imported %d of %d searches", imported, len(searches))
        return imported

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_history(self) -> list[dict[str, Any]]:
        """All entries, most recent first."""
        with self._lock:
            return copy.deepcopy(list(reversed(self._history)))

    def get_recent_searches(self, limit: int = 10) -> list[dict[str, Any]]:
        return self.get_history()[:limit]

    def get_search_by_id(self, search_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            for entry in self._history:
                if entry.get("id") == search_id:
                    return copy.deepcopy(entry)
        return None

    def get_searches_by_business(self, business: str) -> list[dict[str, Any]]:
        """Entries whose business text contains ``business``, case-insensitively."""
        needle = business.lower()
        with self._lock:
            return [
                copy.deepcopy(entry) for entry in self._history
                if needle in str(_params(entry).get("business", "")).lower()
            ]

    def get_search_stats(self) -> dict[str, Any]:
        with self._lock:
            history = list(self._history)

        businesses = {_params(entry).get("business") for entry in history}
        industries = Counter(_params(entry).get("industry") for entry in history)
        most_used = industries.most_common(1)[0][0] if industries else None

        return {
            "totalSearches": len(history),
            "uniqueBusinesses": len(businesses),
            "mostUsedIndustry": most_used,
            "averageKeywordsPerSearch": _average_keywords(history),
            "firstSearchDate": history[0].get("timestamp") if history else None,
            "latestSearchDate": history[-1].get("timestamp") if history else None,
        }

    def get_history_for_chart(self) -> dict[str, list]:
        """Searches per calendar day, with zero-filled gaps between first and last day."""
        with self._lock:
            timestamps = [entry.get("timestamp") for entry in self._history]

        counts: Counter = Counter()
        for ts in timestamps:
            if not ts:
                continue
            try:
                counts[parse_iso_timestamp(ts).astimezone(timezone.utc).date()] += 1
            except ValueError:
                logger.debug("Skipping unparsable timestamp %r", ts)

        labels: list[str] = []
        data: list[int] = []
        if counts:
            day = min(counts)
            last = max(counts)
            while day <= last:
                labels.append(day.isoformat())
                data.append(counts.get(day, 0))
                day += timedelta(days=1)
        return {"labels": labels, "data": data}

    def get_dashboard_summary(self, limit: int = 10) -> dict[str, Any]:
        """Average SEO score and summed competition mix over the recent searches."""
        recent = self.get_recent_searches(limit)
        breakdown = {"easy": 0, "medium": 0, "hard": 0}
        scores = []
        for entry in recent:
            metrics = entry.get("seoMetrics") or {}
            scores.append(int(metrics.get("seoScore", 0)))
            for tier, count in (metrics.get("competitionBreakdown") or {}).items():
                if tier in breakdown:
                    breakdown[tier] += int(count)
        average = round_half_up(sum(scores) / len(scores)) if scores else 0
        return {
            "recentSearches": len(recent),
            "averageSeoScore": average,
            "competitionBreakdown": breakdown,
        }

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def build_export(self) -> dict[str, Any]:
        with self._lock:
            searches = copy.deepcopy(self._history)
        return {
            "exportDate": self._clock().isoformat(),
            "totalSearches": len(searches),
            "searches": searches,
        }

    def export_history(self, exporter) -> Any:
        """Serialise the export snapshot and hand it to ``exporter.save``.

        Returns whatever the exporter returns (a file path for
        :class:`JSONFileExporter`).
        """
        snapshot = self.build_export()
        blob = json.dumps(snapshot, indent=2).encode("utf-8")
        filename = "seo_search_history_" + self._clock().date().isoformat() + ".json"
        return exporter.save(blob, filename)

    def __len__(self) -> int:
        with self._lock:
            return len(self._history)


def _params(entry: Mapping[str, Any]) -> Mapping[str, Any]:
    params = entry.get("searchParams")
    return params if isinstance(params, Mapping) else {}


def _average_keywords(history: list[dict[str, Any]]) -> int:
    if not history:
        return 0
    total = sum(count_keywords(entry.get("results") or {}) for entry in history)
    return round_half_up(total / len(history))
