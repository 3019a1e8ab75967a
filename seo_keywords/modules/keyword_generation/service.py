"""Keyword generation front door: remote service first, local engine on any failure."""

import logging
from typing import Any, Optional, Protocol, Union

from seo_keywords.integrations.results import RemoteOk, RemoteResult
from seo_keywords.modules.keyword_generation.engine import LocalGenerationEngine
from seo_keywords.modules.keyword_generation.types import KeywordFocus

logger = logging.getLogger(__name__)


class RemoteKeywordClient(Protocol):
    async def generate_keywords(
        self,
        business: str,
        industry: str,
        location: Optional[str],
        keyword_type: str,
    ) -> RemoteResult:
        ...

    async def close(self) -> None:
        ...


class KeywordGenerationService:
    """Produce a keyword result set, never failing for well-formed input.

    Usage::

        service = KeywordGenerationService(LocalGenerationEngine(), KeywordWorkerClient())
        result = await service.generate("Italian restaurant", "food-restaurant", "Chicago", "local")
        print(service.last_source)  # "remote" or "local"
    """

    def __init__(
        self,
        engine: Optional[LocalGenerationEngine] = None,
        remote: Optional[RemoteKeywordClient] = None,
    ):
        self._engine = engine or LocalGenerationEngine()
        self._remote = remote
        self.last_source: Optional[str] = None

    async def generate(
        self,
        business: str,
        industry: str,
        location: Optional[str],
        keyword_type: Union[KeywordFocus, str],
    ) -> dict[str, Any]:
        focus_value = keyword_type.value if isinstance(keyword_type, KeywordFocus) else keyword_type

        if self._remote is not None:
            outcome = await self._try_remote(business, industry, location, focus_value)
            if isinstance(outcome, RemoteOk):
                self.last_source = "remote"
                logger.info("Remote generation succeeded for industry=%r", industry)
                return outcome.payload
            logger.warning("Remote generation unavailable (%s), using local generation", outcome)

        result = await self._engine.generate(business, industry, location, focus_value)
        self.last_source = "local"
        return result.to_dict()

    async def _try_remote(
        self,
        business: str,
        industry: str,
        location: Optional[str],
        keyword_type: str,
    ) -> Optional[RemoteResult]:
        try:
            return await self._remote.generate_keywords(business, industry, location, keyword_type)
        except Exception as exc:
            logger.warning("Remote keyword client raised: %s", exc)
            return None

    async def close(self) -> None:
        if self._remote is not None:
            await self._remote.close()
