"""Deterministic local keyword generation, the fallback when no remote service answers."""

import asyncio
import logging
import random
from typing import Optional, Union

from seo_keywords.modules.keyword_generation.industry_catalog import get_industry_keywords
from seo_keywords.modules.keyword_generation.synthesizer import KeywordSynthesizer
from seo_keywords.modules.keyword_generation.term_extractor import extract_key_terms
from seo_keywords.modules.keyword_generation.tips import generate_seo_tips
from seo_keywords.modules.keyword_generation.types import KeywordFocus, KeywordResultSet

logger = logging.getLogger(__name__)


class LocalGenerationEngine:
    """Extract terms, look up the industry, synthesize keywords, and add tips.

    Usage::

        engine = LocalGenerationEngine(delay_seconds=0)
        result = await engine.generate(
            "Professional pet grooming for dogs", "pet-care", "Seattle", "local",
        )
        payload = result.to_dict()
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        delay_seconds: float = 0.1,
    ):
        self._synthesizer = KeywordSynthesizer(rng=rng)
        self._delay = max(delay_seconds, 0.0)

    def build(
        self,
        business: str,
        industry: Optional[str],
        location: Optional[str],
        keyword_type: Union[KeywordFocus, str],
    ) -> KeywordResultSet:
        """Synchronously produce a result set without the cosmetic delay."""
        words = extract_key_terms(business)
        bundle = get_industry_keywords(industry)
        sets = self._synthesizer.synthesize(words, bundle, location, keyword_type)
        tips = generate_seo_tips(words, bundle, location)
        return KeywordResultSet(
            primary=sets.primary,
            long_tail=sets.long_tail,
            local=sets.local,
            content=sets.content,
            tips=tips,
        )

    async def generate(
        self,
        business: str,
        industry: Optional[str],
        location: Optional[str],
        keyword_type: Union[KeywordFocus, str],
    ) -> KeywordResultSet:
        """Produce a result set after the simulated processing delay."""
        if self._delay:
            await asyncio.sleep(self._delay)
        result = self.build(business, industry, location, keyword_type)
        logger.info(
            "Local generation for industry=%r type=%s: %d primary, %d long-tail, "
            "%d local, %d content",
            industry, keyword_type, len(result.primary), len(result.long_tail),
            len(result.local), len(result.content),
        )
        return result
