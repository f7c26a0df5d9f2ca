"""LLM client for the remote delegate: Gemini REST, Anthropic or OpenAI, one credential."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx
from anthropic import Anthropic
from openai import OpenAI
from openai.types.chat import ChatCompletionMessageParam

from noteorganizer.config import Settings, get_settings

logger = logging.getLogger(__name__)


class LLMError(RuntimeError):
    """The remote generation call failed."""


class MissingCredentialError(LLMError):
    """No API key is configured, so no remote call is attempted."""


class LLMClient:
    """Client for the configured text-generation provider.

    Only one provider is used per client; there is no chain. Failures raise
    LLMError and the caller decides how to fall back.
    """

    def __init__(self, api_key: str | None, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._api_key = api_key
        self._anthropic_client: Anthropic | None = None
        self._openai_client: OpenAI | None = None
        self.provider: str = self._settings.llm_provider

    @property
    def has_credential(self) -> bool:
        return bool(self._api_key)

    @property
    def model_name(self) -> str:
        if self.provider == "anthropic":
            return self._settings.anthropic_model
        if self.provider == "openai":
            return self._settings.openai_model
        return self._settings.gemini_model

    @property
    def anthropic_client(self) -> Anthropic | None:
        """Lazy-load Anthropic client (None if no API key)."""
        if self._anthropic_client is None and self._api_key:
            self._anthropic_client = Anthropic(
                api_key=self._api_key, timeout=self._settings.request_timeout
            )
        return self._anthropic_client

    @property
    def openai_client(self) -> OpenAI | None:
        """Lazy-load OpenAI client (None if no API key)."""
        if self._openai_client is None and self._api_key:
            self._openai_client = OpenAI(api_key=self._api_key, timeout=self._settings.request_timeout)
        return self._openai_client

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        """Send one generation request and return the response text.

        Raises MissingCredentialError without a key, LLMError on any failure.
        """
        if not self._api_key:
            raise MissingCredentialError("API key missing")

        start = time.perf_counter()
        try:
            logger.info("Calling %s (%s)...", self.provider, self.model_name)
            if self.provider == "anthropic":
                text = self._generate_anthropic(system_prompt, user_prompt)
            elif self.provider == "openai":
                text = self._generate_openai(system_prompt, user_prompt)
            else:
                text = self._generate_gemini(system_prompt, user_prompt)
        except LLMError:
            raise
        except Exception as e:
            logger.warning("%s request failed", self.provider, exc_info=True)
            raise LLMError(f"{self.provider} request failed: {str(e)[:500]}") from e

        latency_ms = (time.perf_counter() - start) * 1000
        logger.info("%s responded in %.0f ms (%d chars)", self.provider, latency_ms, len(text))
        return text

    def _generate_gemini(self, system_prompt: str, user_prompt: str) -> str:
        url = f"{self._settings.gemini_base_url}/models/{self._settings.gemini_model}:generateContent"
        payload: dict[str, Any] = {
            "contents": [{"parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}]}],
            "generationConfig": {
                "temperature": self._settings.temperature,
                "maxOutputTokens": self._settings.max_output_tokens,
            },
        }
        response = httpx.post(
            url,
            params={"key": self._api_key},
            json=payload,
            timeout=self._settings.request_timeout,
        )
        if response.status_code >= 400:
            raise LLMError(f"API error: {response.status_code} - {response.text[:500]}")

        data = response.json()
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise LLMError("Empty or invalid response from API") from e
        if not isinstance(text, str):
            raise LLMError("Empty or invalid response from API")
        return text

    def _generate_anthropic(self, system_prompt: str, user_prompt: str) -> str:
        client = self.anthropic_client
        if client is None:
            raise LLMError("anthropic client unavailable")
        response = client.messages.create(
            model=self._settings.anthropic_model,
            max_tokens=self._settings.max_output_tokens,
            temperature=self._settings.temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return response.content[0].text  # type: ignore[union-attr]

    def _generate_openai(self, system_prompt: str, user_prompt: str) -> str:
        client = self.openai_client
        if client is None:
            raise LLMError("openai client unavailable")
        messages: list[ChatCompletionMessageParam] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        response = client.chat.completions.create(
            model=self._settings.openai_model,
            messages=messages,
            temperature=self._settings.temperature,
            max_tokens=self._settings.max_output_tokens,
        )
        return response.choices[0].message.content or ""
