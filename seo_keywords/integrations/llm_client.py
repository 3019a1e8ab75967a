"""Direct OpenAI client for keyword generation, used instead of the hosted worker."""

import json
import logging
import os
from typing import Any, Optional

import openai

from seo_keywords.integrations.results import (
    RemoteOk,
    RemoteParseError,
    RemoteResult,
    RemoteServiceError,
    looks_like_result_set,
)
from seo_keywords.modules.keyword_generation.prompts import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding markdown code fence, if the model added one."""
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.split("\n")
        lines = lines[1:]  # remove opening ```json
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)
    return cleaned


class LLMClient:
    """Async OpenAI chat client that returns keyword result sets.

    The API key comes from the constructor (usually the saved settings
    blob) or the ``OPENAI_API_KEY`` environment variable.

    Usage::

        client = LLMClient(api_key="sk-...")
        outcome = await client.generate_keywords(
            "Family dental clinic", "healthcare", "Miami", "local",
        )
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        max_tokens: int = 2000,
        temperature: float = 0.7,
        timeout: int = 60,
    ):
        self._api_key = api_key or os.getenv("OPENAI_API_KEY", "")
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

        self._client: Optional[openai.AsyncOpenAI] = None
        if self._api_key:
            self._client = openai.AsyncOpenAI(api_key=self._api_key, timeout=timeout)

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def generate_keywords(
        self,
        business: str,
        industry: str,
        location: Optional[str],
        keyword_type: str,
    ) -> RemoteResult:
        if self._client is None:
            return RemoteServiceError(None, "No OpenAI API key configured.")

        prompt = build_prompt(business, industry, location, keyword_type)
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except openai.APIStatusError as exc:
            logger.warning("OpenAI returned status %s: %s", exc.status_code, exc.message)
            return RemoteServiceError(exc.status_code, exc.message)
        except openai.APIError as exc:
            logger.warning("OpenAI call failed: %s", exc)
            return RemoteServiceError(None, str(exc))

        raw = response.choices[0].message.content or ""
        usage = response.usage
        if usage:
            logger.info(
                "OpenAI call: %d in / %d out tokens",
                usage.prompt_tokens, usage.completion_tokens,
            )
        return self.parse_response(raw)

    @staticmethod
    def parse_response(raw: str) -> RemoteResult:
        cleaned = strip_code_fences(raw)
        try:
            data: Any = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            logger.error("Failed to parse JSON from LLM response: %s", exc)
            logger.debug("Raw response: %s", raw[:500])
            return RemoteParseError(f"LLM returned invalid JSON: {exc}", raw[:500])
        if not looks_like_result_set(data):
            return RemoteParseError("LLM response is missing keyword categories", raw[:500])
        return RemoteOk(data)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
