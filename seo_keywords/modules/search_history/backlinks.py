"""Illustrative backlink records attached to each history entry.

Nothing here discovers real links.  The records only give the history
views something realistic-looking to report on.
"""

import random
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

MOCK_DOMAINS = (
    "example.com",
    "businessdirectory.com",
    "yelp.com",
    "facebook.com",
    "linkedin.com",
    "instagram.com",
    "localbusiness.com",
    "industry-news.com",
)

MIN_BACKLINKS = 5
MAX_BACKLINKS = 20
FOLLOW_RATIO = 0.7
FIRST_SEEN_EPOCH = datetime(2023, 1, 1, tzinfo=timezone.utc)


def _anchor_options(search_params: Mapping[str, Any]) -> list[str]:
    business_words = str(search_params.get("business") or "").split()
    first_word = business_words[0] if business_words else ""
    location = search_params.get("location") or ""
    return [
        " ".join(business_words[:3]),
        f"{first_word} services",
        "click here",
        "read more",
        f"{first_word} in {location}" if location else "local business",
    ]


def generate_mock_backlinks(
    search_params: Mapping[str, Any],
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> list[dict[str, Any]]:
    """Generate 5-20 synthetic backlinks sorted by descending authority."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)
    anchors = _anchor_options(search_params)
    span = max((now - FIRST_SEEN_EPOCH).total_seconds(), 0.0)

    backlinks = []
    for index in range(rng.randint(MIN_BACKLINKS, MAX_BACKLINKS)):
        domain = rng.choice(MOCK_DOMAINS)
        first_seen = datetime.fromtimestamp(
            FIRST_SEEN_EPOCH.timestamp() + rng.random() * span, tz=timezone.utc
        )
        backlinks.append({
            "url": f"https://{domain}/page-{index + 1}",
            "domain": domain,
            "anchorText": rng.choice(anchors),
            "authority": rng.randint(1, 100),
            "followType": "follow" if rng.random() < FOLLOW_RATIO else "nofollow",
            "firstSeen": first_seen.isoformat(),
            "lastChecked": now.isoformat(),
        })

    backlinks.sort(key=lambda link: link["authority"], reverse=True)
    return backlinks
