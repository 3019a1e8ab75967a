"""Static industry vocabulary used to seed keyword synthesis."""

from types import MappingProxyType
from typing import Mapping, Optional

from seo_keywords.modules.keyword_generation.types import IndustryBundle


def _bundle(services: list[str], adjectives: list[str], terms: list[str]) -> IndustryBundle:
    return IndustryBundle(tuple(services), tuple(adjectives), tuple(terms))


DEFAULT_BUNDLE = _bundle(
    services=["service", "consultation", "solution", "support", "maintenance"],
    adjectives=["professional", "experienced", "reliable", "quality", "affordable"],
    terms=["business", "service", "company", "professional", "expert"],
)

INDUSTRIES: Mapping[str, IndustryBundle] = MappingProxyType({
    "pet-care": _bundle(
        services=["grooming", "boarding", "training", "walking", "sitting", "veterinary"],
        adjectives=["professional", "certified", "experienced", "affordable", "premium"],
        terms=["pet care", "animal care", "dog", "cat", "puppy", "kitten"],
    ),
    "healthcare": _bundle(
        services=["treatment", "consultation", "diagnosis", "therapy", "care", "checkup"],
        adjectives=["medical", "clinical", "professional", "certified", "experienced"],
        terms=["health", "wellness", "medical", "doctor", "physician", "clinic"],
    ),
    "fitness": _bundle(
        services=["training", "coaching", "workout", "exercise", "nutrition", "wellness"],
        adjectives=["personal", "professional", "certified", "experienced", "custom"],
        terms=["fitness", "gym", "health", "weight loss", "muscle building", "cardio"],
    ),
    "food-restaurant": _bundle(
        services=["dining", "catering", "delivery", "takeout", "reservation", "menu"],
        adjectives=["fresh", "authentic", "delicious", "gourmet", "family"],
        terms=["restaurant", "food", "cuisine", "dining", "meal", "dish"],
    ),
    "beauty": _bundle(
        services=["makeup", "skincare", "hair", "nails", "spa", "facial"],
        adjectives=["professional", "luxury", "organic", "premium", "natural"],
        terms=["beauty", "cosmetics", "salon", "spa", "treatment", "style"],
    ),
    "technology": _bundle(
        services=["development", "consulting", "support", "maintenance", "training", "integration"],
        adjectives=["professional", "enterprise", "custom", "innovative", "reliable"],
        terms=["software", "technology", "IT", "digital", "computer", "system"],
    ),
    "real-estate": _bundle(
        services=["buying", "selling", "renting", "management", "investment", "appraisal"],
        adjectives=["professional", "experienced", "trusted", "local", "expert"],
        terms=["real estate", "property", "home", "house", "agent", "broker"],
    ),
    "education": _bundle(
        services=["tutoring", "training", "courses", "certification", "workshop", "coaching"],
        adjectives=["professional", "certified", "experienced", "qualified", "expert"],
        terms=["education", "learning", "training", "course", "teacher", "instructor"],
    ),
    "automotive": _bundle(
        services=["repair", "maintenance", "service", "inspection", "parts", "installation"],
        adjectives=["professional", "certified", "experienced", "reliable", "quality"],
        terms=["automotive", "car", "vehicle", "auto", "mechanic", "garage"],
    ),
    "home-garden": _bundle(
        services=["landscaping", "maintenance", "design", "installation", "repair", "cleaning"],
        adjectives=["professional", "experienced", "reliable", "quality", "affordable"],
        terms=["home", "garden", "landscape", "yard", "outdoor", "maintenance"],
    ),
})


def get_industry_keywords(industry: Optional[str]) -> IndustryBundle:
    """Look up the vocabulary bundle for an industry identifier.

    Unknown, empty, or ``None`` identifiers get :data:`DEFAULT_BUNDLE`.
    """
    if not industry:
        return DEFAULT_BUNDLE
    return INDUSTRIES.get(industry, DEFAULT_BUNDLE)


def list_industries() -> list[str]:
    return list(INDUSTRIES)
