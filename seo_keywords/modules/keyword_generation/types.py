"""Value types produced by the local keyword generation engine."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class KeywordFocus(str, Enum):
    """Category-weighting selector chosen on the keyword form."""

    MIXED = "mixed"
    LOCAL = "local"
    COMMERCIAL = "commercial"
    INFORMATIONAL = "informational"
    SHORT_TAIL = "short-tail"


COMPETITION_TIERS = ("easy", "medium", "hard")


@dataclass(frozen=True)
class IndustryBundle:
    """Hand-curated vocabulary for one industry."""

    services: tuple[str, ...]
    adjectives: tuple[str, ...]
    terms: tuple[str, ...]


@dataclass(frozen=True)
class KeywordEntry:
    keyword: str
    search_volume: str
    competition: str
    intent: str

    def to_dict(self) -> dict[str, str]:
        return {
            "keyword": self.keyword,
            "search_volume": self.search_volume,
            "competition": self.competition,
            "intent": self.intent,
        }


@dataclass(frozen=True)
class TipEntry:
    tip: str
    keyword_example: str
    placement: str

    def to_dict(self) -> dict[str, str]:
        return {
            "tip": self.tip,
            "keyword_example": self.keyword_example,
            "placement": self.placement,
        }


@dataclass(frozen=True)
class KeywordSets:
    """The four category lists built by the synthesizer."""

    primary: tuple[KeywordEntry, ...] = ()
    long_tail: tuple[KeywordEntry, ...] = ()
    local: tuple[KeywordEntry, ...] = ()
    content: tuple[KeywordEntry, ...] = ()


@dataclass(frozen=True)
class KeywordResultSet:
    """Immutable output of one local generation call."""

    primary: tuple[KeywordEntry, ...] = ()
    long_tail: tuple[KeywordEntry, ...] = ()
    local: tuple[KeywordEntry, ...] = ()
    content: tuple[KeywordEntry, ...] = ()
    tips: tuple[TipEntry, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the canonical result shape shared with remote services."""
        return {
            "primary_keywords": [kw.to_dict() for kw in self.primary],
            "long_tail_keywords": [kw.to_dict() for kw in self.long_tail],
            "local_keywords": [kw.to_dict() for kw in self.local],
            "content_ideas": [kw.to_dict() for kw in self.content],
            "seo_tips": [tip.to_dict() for tip in self.tips],
        }
