"""SEO metrics computed over one keyword result set."""

from typing import Any, Iterable, Mapping

from seo_keywords.utils.helpers import parse_search_volume, round_half_up

KEYWORD_CATEGORY_KEYS = (
    "primary_keywords",
    "long_tail_keywords",
    "local_keywords",
    "content_ideas",
)
# Older result sets stored the content category under this key.
LEGACY_CONTENT_KEY = "content_keywords"

_TIER_ALIASES = {
    "easy": "easy",
    "low": "easy",
    "medium": "medium",
    "moderate": "medium",
    "hard": "hard",
    "high": "hard",
    "very hard": "hard",
}

DIFFICULTY_WEIGHTS = {"easy": 0.8, "medium": 0.5, "hard": 0.2}
VOLUME_NORMALIZER = 10000


def iter_keyword_lists(results: Mapping[str, Any]) -> Iterable[list]:
    """Yield the four keyword-category lists present in ``results``."""
    if not isinstance(results, Mapping):
        return
    for key in KEYWORD_CATEGORY_KEYS:
        value = results.get(key)
        if value is None and key == "content_ideas":
            value = results.get(LEGACY_CONTENT_KEY)
        if isinstance(value, list):
            yield value


def count_keywords(results: Mapping[str, Any]) -> int:
    """Number of keyword entries, ignoring list items that are not mappings."""
    return sum(
        1 for keywords in iter_keyword_lists(results)
        for kw in keywords if isinstance(kw, Mapping)
    )


def normalize_competition(value: Any) -> str:
    """Map a competition label onto easy/medium/hard; unknown labels count as medium."""
    return _TIER_ALIASES.get(str(value or "").strip().lower(), "medium")


def calculate_seo_score(total: int, easy: int, medium: int, hard: int, volume: int) -> int:
    """Blend keyword difficulty mix (60%) and capped total volume (40%) into 0-100."""
    if total == 0:
        return 0
    difficulty_score = (
        easy * DIFFICULTY_WEIGHTS["easy"]
        + medium * DIFFICULTY_WEIGHTS["medium"]
        + hard * DIFFICULTY_WEIGHTS["hard"]
    ) / total
    volume_score = min(volume / VOLUME_NORMALIZER, 1)
    return round_half_up((difficulty_score * 0.6 + volume_score * 0.4) * 100)


def calculate_seo_metrics(results: Mapping[str, Any]) -> dict[str, Any]:
    """Totals, average volume, competition breakdown, and SEO score for a result set.

    Entries that are not mappings are ignored, so loosely-shaped remote
    payloads never break the calculation.
    """
    breakdown = {"easy": 0, "medium": 0, "hard": 0}
    total_keywords = 0
    total_volume = 0

    for keywords in iter_keyword_lists(results):
        for kw in keywords:
            if not isinstance(kw, Mapping):
                continue
            total_keywords += 1
            total_volume += parse_search_volume(kw.get("search_volume"))
            breakdown[normalize_competition(kw.get("competition"))] += 1

    average_volume = round_half_up(total_volume / total_keywords) if total_keywords else 0
    return {
        "totalKeywords": total_keywords,
        "totalVolume": total_volume,
        "averageVolume": average_volume,
        "competitionBreakdown": breakdown,
        "seoScore": calculate_seo_score(
            total_keywords,
            breakdown["easy"],
            breakdown["medium"],
            breakdown["hard"],
            total_volume,
        ),
    }


def get_seo_score_class(score: int) -> str:
    """Bucket an SEO score: excellent (>=80), good (>=60), fair (>=40), else poor."""
    if score >= 80:
        return "excellent"
    if score >= 60:
        return "good"
    if score >= 40:
        return "fair"
    return "poor"


def get_percentage(value: int, total: int) -> int:
    return round_half_up(value / total * 100) if total > 0 else 0
