"""Search History module: persisted generation history, SEO metrics, and exports."""

from seo_keywords.modules.search_history.exporter import JSONFileExporter
from seo_keywords.modules.search_history.history_store import SearchHistoryStore
from seo_keywords.modules.search_history.metrics import (
    calculate_seo_metrics,
    get_seo_score_class,
)

__all__ = [
    "SearchHistoryStore",
    "JSONFileExporter",
    "calculate_seo_metrics",
    "get_seo_score_class",
]
