"""HTTP client for the hosted keyword-generation worker."""

import asyncio
import json
import logging
import os
from typing import Any, Optional

import aiohttp

from seo_keywords.integrations.results import (
    RemoteOk,
    RemoteParseError,
    RemoteResult,
    RemoteServiceError,
    looks_like_result_set,
)
from seo_keywords.modules.keyword_generation.prompts import build_prompt

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://seo-keyword-worker.kedster.workers.dev/api/generate-keywords"


def parse_worker_payload(data: Any) -> RemoteResult:
    """Interpret a decoded worker response body.

    The worker has answered in three shapes over time: ``{"result": {...}}``,
    ``{"response": "<json text>"}``, and a bare result object.
    """
    if not isinstance(data, dict):
        return RemoteParseError("Unexpected response format from AI service", str(data)[:500])

    error = data.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        return RemoteServiceError(None, message or "Unknown error occurred")

    result = data.get("result")
    if isinstance(result, dict):
        return RemoteOk(result)

    response = data.get("response")
    if isinstance(response, str):
        try:
            parsed = json.loads(response)
        except json.JSONDecodeError:
            logger.debug("Raw AI response: %s", response[:500])
            return RemoteParseError("Invalid JSON response from AI service", response[:500])
        if looks_like_result_set(parsed):
            return RemoteOk(parsed)
        return RemoteParseError("Unexpected response format from AI service", response[:500])

    if looks_like_result_set(data):
        return RemoteOk(data)

    return RemoteParseError("Unexpected response format from AI service", json.dumps(data)[:500])


class KeywordWorkerClient:
    """Async client for the worker that wraps a hosted text-generation model.

    Never raises for network, HTTP, or decoding problems; every failure is
    reported as a :class:`RemoteServiceError` or :class:`RemoteParseError`.

    Usage::

        client = KeywordWorkerClient()
        outcome = await client.generate_keywords(
            "Mobile dog grooming", "pet-care", "Austin", "local",
        )
        await client.close()
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: int = 30):
        self._endpoint = endpoint or os.getenv("KEYWORD_WORKER_URL", DEFAULT_ENDPOINT)
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._http_session: Optional[aiohttp.ClientSession] = None

    async def _get_http_session(self) -> aiohttp.ClientSession:
        """Lazily create and return an aiohttp session."""
        if self._http_session is None or self._http_session.closed:
            self._http_session = aiohttp.ClientSession(timeout=self._timeout)
        return self._http_session

    async def close(self) -> None:
        if self._http_session and not self._http_session.closed:
            await self._http_session.close()

    async def generate_keywords(
        self,
        business: str,
        industry: str,
        location: Optional[str],
        keyword_type: str,
    ) -> RemoteResult:
        body = {
            "prompt": build_prompt(business, industry, location, keyword_type),
            "business": business,
            "industry": industry,
            "location": location or "",
            "keywordType": keyword_type,
        }
        session = await self._get_http_session()
        try:
            async with session.post(self._endpoint, json=body) as resp:
                text = await resp.text()
                if resp.status >= 400:
                    return RemoteServiceError(resp.status, _error_message(resp.status, text))
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("Keyword worker unreachable at %s: %s", self._endpoint, exc)
            return RemoteServiceError(None, str(exc) or exc.__class__.__name__)

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.debug("Raw worker response: %s", text[:500])
            return RemoteParseError(f"Worker returned invalid JSON: {exc}", text[:500])
        return parse_worker_payload(data)


def _error_message(status: int, text: str) -> str:
    """Pull a message out of an error body, defaulting to the status line."""
    fallback = f"AI service request failed ({status})"
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return fallback
    if not isinstance(data, dict):
        return fallback
    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if data.get("message"):
        return str(data["message"])
    return fallback
