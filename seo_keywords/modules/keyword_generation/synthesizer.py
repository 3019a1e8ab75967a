"""Category-constrained keyword synthesis from business words and industry vocabulary."""

import logging
import random
from typing import Optional, Sequence, Union

from seo_keywords.modules.keyword_generation.types import (
    COMPETITION_TIERS,
    IndustryBundle,
    KeywordEntry,
    KeywordFocus,
    KeywordSets,
)
from seo_keywords.utils.helpers import format_search_volume

logger = logging.getLogger(__name__)

MAX_PER_CATEGORY = 6

COMMERCIAL_PHRASES = ("hire", "book", "find", "cost of", "price of")
CONTENT_PREFIXES = ("how to choose", "what is", "benefits of", "tips for", "guide to")
INFO_SUFFIXES = ("explained", "for beginners", "mistakes to avoid")


def _focus_value(focus: Union[KeywordFocus, str]) -> str:
    if isinstance(focus, KeywordFocus):
        return focus.value
    return str(focus)


class _CategoryBuilder:
    """Accumulates one category list, skipping keywords already added to it."""

    def __init__(self, synthesizer: "KeywordSynthesizer"):
        self._synth = synthesizer
        self._seen: set[str] = set()
        self.entries: list[KeywordEntry] = []

    def add(
        self,
        keyword: str,
        volume_range: tuple[int, int],
        competition: Optional[str],
        intent: str,
    ) -> None:
        if keyword in self._seen:
            return
        self.entries.append(KeywordEntry(
            keyword=keyword,
            search_volume=self._synth.random_volume(*volume_range),
            competition=competition or self._synth.random_competition(),
            intent=intent,
        ))
        self._seen.add(keyword)

    def build(self) -> tuple[KeywordEntry, ...]:
        return tuple(self.entries[:MAX_PER_CATEGORY])


class KeywordSynthesizer:
    """Builds the primary, long-tail, local, and content keyword lists.

    Every list is generated in a fixed construction order and then
    truncated, so the earliest candidates win when a category overflows.
    Volumes and random competition tiers come from the injected ``rng``.

    Usage::

        synth = KeywordSynthesizer(rng=random.Random(7))
        sets = synth.synthesize(["grooming"], bundle, "Seattle", "local")
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    # ------------------------------------------------------------------
    # Random display data
    # ------------------------------------------------------------------

    def random_volume(self, low: int, high: int) -> str:
        return format_search_volume(self._rng.randint(low, high))

    def random_competition(self) -> str:
        return self._rng.choice(COMPETITION_TIERS)

    # ------------------------------------------------------------------
    # synthesize
    # ------------------------------------------------------------------

    def synthesize(
        self,
        words: Sequence[str],
        bundle: IndustryBundle,
        location: Optional[str],
        focus: Union[KeywordFocus, str],
    ) -> KeywordSets:
        """Generate all four category lists for one request."""
        focus_value = _focus_value(focus)
        location = location or ""

        primary = self._build_primary(words, bundle)
        long_tail: tuple[KeywordEntry, ...] = ()
        local: tuple[KeywordEntry, ...] = ()
        content: tuple[KeywordEntry, ...] = ()

        if focus_value != KeywordFocus.SHORT_TAIL.value:
            long_tail = self._build_long_tail(words, bundle, location, focus_value)
        if focus_value != KeywordFocus.INFORMATIONAL.value:
            local = self._build_local(words, bundle, location)
        if focus_value in (KeywordFocus.INFORMATIONAL.value, KeywordFocus.MIXED.value):
            content = self._build_content(words, bundle)

        logger.debug(
            "Synthesized focus=%s: primary=%d long_tail=%d local=%d content=%d",
            focus_value, len(primary), len(long_tail), len(local), len(content),
        )
        return KeywordSets(primary=primary, long_tail=long_tail, local=local, content=content)

    # ------------------------------------------------------------------
    # Category builders
    # ------------------------------------------------------------------

    def _build_primary(
        self, words: Sequence[str], bundle: IndustryBundle,
    ) -> tuple[KeywordEntry, ...]:
        builder = _CategoryBuilder(self)
        main_term = _main_term(words, bundle)

        for word in words:
            builder.add(f"{word} services", (800, 3000), "medium", "commercial")

        doubled = f"{words[0]} {words[0]}" if words else None
        for service in bundle.services[:4]:
            keyword = f"{service} {main_term}"
            if keyword == doubled:
                continue
            builder.add(keyword, (500, 2500), None, "commercial")

        for term in bundle.terms[:2]:
            builder.add(term, (1000, 4000), "hard", "commercial")

        return builder.build()

    def _build_long_tail(
        self,
        words: Sequence[str],
        bundle: IndustryBundle,
        location: str,
        focus_value: str,
    ) -> tuple[KeywordEntry, ...]:
        builder = _CategoryBuilder(self)
        main_term = _main_term(words, bundle)
        first_service = _first(bundle.services)
        first_term = _first(bundle.terms)
        location_part = f" {location}" if location else ""

        for adjective in bundle.adjectives[:3]:
            keyword = f"{adjective} {main_term} {first_service}{location_part}".strip()
            builder.add(keyword, (100, 800), "easy", "commercial")

        for word, service in zip(words[:3], bundle.services):
            keyword = f"best {word} {service} for {first_term}"
            builder.add(keyword, (200, 600), "easy", "commercial")

        if focus_value in (KeywordFocus.COMMERCIAL.value, KeywordFocus.MIXED.value):
            for phrase in COMMERCIAL_PHRASES[:2]:
                keyword = f"{phrase} {main_term} {first_service}"
                builder.add(keyword, (150, 500), "easy", "commercial")

        return builder.build()

    def _build_local(
        self, words: Sequence[str], bundle: IndustryBundle, location: str,
    ) -> tuple[KeywordEntry, ...]:
        builder = _CategoryBuilder(self)
        near_me = f" {location}" if location else " near me"

        for word in words[:3]:
            builder.add(f"{word}{near_me}", (300, 1200), "medium", "local")

        if location:
            for service in bundle.services[:3]:
                builder.add(f"{service} in {location}", (150, 800), "easy", "local")

            first_service = _first(bundle.services)
            for word in words[:2]:
                keyword = f"{location} {word} {first_service}"
                builder.add(keyword, (200, 600), "easy", "local")

        return builder.build()

    def _build_content(
        self, words: Sequence[str], bundle: IndustryBundle,
    ) -> tuple[KeywordEntry, ...]:
        builder = _CategoryBuilder(self)
        if not words:
            return builder.build()
        first_word = words[0]

        for prefix, service in zip(CONTENT_PREFIXES[:4], bundle.services):
            keyword = f"{prefix} {first_word} {service}"
            builder.add(keyword, (100, 500), "easy", "informational")

        first_service = _first(bundle.services)
        for suffix in INFO_SUFFIXES[:2]:
            keyword = f"{first_word} {first_service} {suffix}"
            builder.add(keyword, (80, 400), "easy", "informational")

        return builder.build()


def _first(values: Sequence[str]) -> str:
    return values[0] if values else ""


def _main_term(words: Sequence[str], bundle: IndustryBundle) -> str:
    """First business word, else the first industry term."""
    if words:
        return words[0]
    return _first(bundle.terms)
