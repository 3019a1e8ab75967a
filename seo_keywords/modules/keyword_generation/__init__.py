"""Keyword Generation module -- term extraction, industry vocabulary, and keyword synthesis."""

from seo_keywords.modules.keyword_generation.engine import LocalGenerationEngine
from seo_keywords.modules.keyword_generation.industry_catalog import get_industry_keywords
from seo_keywords.modules.keyword_generation.service import KeywordGenerationService
from seo_keywords.modules.keyword_generation.synthesizer import KeywordSynthesizer
from seo_keywords.modules.keyword_generation.term_extractor import extract_key_terms
from seo_keywords.modules.keyword_generation.types import KeywordFocus, KeywordResultSet

__all__ = [
    "LocalGenerationEngine",
    "KeywordGenerationService",
    "KeywordSynthesizer",
    "KeywordFocus",
    "KeywordResultSet",
    "extract_key_terms",
    "get_industry_keywords",
]
