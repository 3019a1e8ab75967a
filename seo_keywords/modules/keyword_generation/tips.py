"""Implementation tips that show where generated keywords belong on a site."""

from typing import Optional, Sequence

from seo_keywords.modules.keyword_generation.types import IndustryBundle, TipEntry


def generate_seo_tips(
    words: Sequence[str],
    bundle: IndustryBundle,
    location: Optional[str],
) -> tuple[TipEntry, ...]:
    """Return the five fixed-template placement tips."""
    main_term = words[0] if words else (bundle.terms[0] if bundle.terms else "")
    service = bundle.services[0] if bundle.services else ""
    adjective = bundle.adjectives[0] if bundle.adjectives else ""

    return (
        TipEntry(
            tip="Include your primary keyword in the page title and H1 tag",
            keyword_example=f"{main_term} {service}",
            placement="title tag and H1",
        ),
        TipEntry(
            tip="Use location-based keywords in your meta description",
            keyword_example=f"{main_term} {location or 'near you'}",
            placement="meta description",
        ),
        TipEntry(
            tip="Create service pages for each keyword category",
            keyword_example=f"{adjective} {service}",
            placement="service pages",
        ),
        TipEntry(
            tip="Include keywords in your URL structure",
            keyword_example=f"/{main_term}-{service}",
            placement="URL slug",
        ),
        TipEntry(
            tip="Use long-tail keywords in your blog content",
            keyword_example=f"how to choose {main_term} {service}",
            placement="blog articles",
        ),
    )
