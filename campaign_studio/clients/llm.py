from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

import google.generativeai as genai
import openai
from google.api_core.exceptions import GoogleAPIError, ResourceExhausted

from campaign_studio.config import Settings
from campaign_studio.services.exceptions import (
    QuotaExceededError,
    UpstreamMalformedError,
    UpstreamServiceError,
)
from campaign_studio.services.prompts import SYSTEM_INSTRUCTION

logger = logging.getLogger(__name__)

_QUOTA_CODE = "insufficient_quota"


class TextGenerator(Protocol):
    async def generate(self, prompt: str) -> str:
        """Return the raw model text for ``prompt``."""


class GeminiTextGenerator:
    """Text generator backed by Google Gemini models."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = "gemini-2.5-flash",
        temperature: float = 0.8,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._configured = False

    def _ensure_configured(self) -> None:
        if self._configured:
            return
        if not self._api_key:
            raise UpstreamServiceError("GOOGLE_API_KEY not set on server")
        genai.configure(api_key=self._api_key)
        self._configured = True

    async def generate(self, prompt: str) -> str:
        self._ensure_configured()
        model = genai.GenerativeModel(
            self._model,
            system_instruction=SYSTEM_INSTRUCTION,
            generation_config={
                "temperature": self._temperature,
                "response_mime_type": "application/json",
            },
        )
        try:
            response = await asyncio.to_thread(model.generate_content, prompt)
            text = response.text
        except ResourceExhausted as exc:
            logger.warning("Gemini quota exhausted: %s", exc)
            raise QuotaExceededError(str(exc), cause=exc) from exc
        except GoogleAPIError as exc:
            logger.exception("Gemini request failed: %s", exc)
            raise UpstreamServiceError(
                str(exc), getattr(exc, "code", None), cause=exc
            ) from exc
        except ValueError as exc:
            # Raised by ``response.text`` when the candidate was blocked or empty.
            logger.exception("Gemini response did not contain text output")
            raise UpstreamMalformedError(str(exc), cause=exc) from exc
        if not text:
            raise UpstreamMalformedError("Gemini response did not contain text output")
        return text.strip()


class OpenAITextGenerator:
    """Text generator backed by the OpenAI chat completions API."""

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = "gpt-4.1-mini",
        temperature: float = 0.8,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._client: Optional[openai.OpenAI] = None

    def _ensure_client(self) -> openai.OpenAI:
        if self._client is None:
            if not self._api_key:
                raise UpstreamServiceError("OPENAI_API_KEY not set on server")
            self._client = openai.OpenAI(api_key=self._api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        client = self._ensure_client()
        try:
            completion = await asyncio.to_thread(
                client.chat.completions.create,
                model=self._model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                temperature=self._temperature,
            )
        except openai.RateLimitError as exc:
            logger.warning(
                "OpenAI rate limited (code=%s): %s", getattr(exc, "code", None), exc
            )
            raise QuotaExceededError(str(exc), cause=exc) from exc
        except openai.APIStatusError as exc:
            if getattr(exc, "code", None) == _QUOTA_CODE:
                raise QuotaExceededError(str(exc), cause=exc) from exc
            logger.exception("OpenAI returned error %s", exc.status_code)
            raise UpstreamServiceError(str(exc), exc.status_code, cause=exc) from exc
        except openai.APIError as exc:
            logger.exception("Unable to reach OpenAI: %s", exc)
            raise UpstreamServiceError(str(exc), cause=exc) from exc
        return completion.choices[0].message.content or "{}"


def build_text_generator(settings: Settings) -> TextGenerator:
    """Return the text generator for the configured provider."""

    if settings.llm_provider == "gemini":
        return GeminiTextGenerator(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            temperature=settings.llm_temperature,
        )
    if settings.llm_provider == "openai":
        return OpenAITextGenerator(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            temperature=settings.llm_temperature,
        )
    raise ValueError(f"Unsupported LLM provider '{settings.llm_provider}'")
