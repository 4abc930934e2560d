"""Central LLM client: OpenAI primary, Gemini fallback.

All calls are async. Singleton via asyncio.Lock.
Every outbound call carries an explicit timeout; transient failures are
retried a bounded number of times via tenacity.
"""

import asyncio

import httpx
import openai as openai_errors
from google.api_core import exceptions as google_errors
from openai import AsyncOpenAI
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from rezum_api.config import load_settings
from rezum_api.core.constants import LLM_RETRY_ATTEMPTS, MAX_OPENAI_FAILURES
from rezum_api.core.logger import logger

# Transient errors worth retrying
_RETRYABLE_OPENAI = (httpx.TimeoutException, httpx.ConnectError, openai_errors.APITimeoutError)
_RETRYABLE_GEMINI = (
    asyncio.TimeoutError,
    google_errors.DeadlineExceeded,
    google_errors.ServiceUnavailable,
)


class LLMClient:
    """OpenAI primary, Gemini fallback."""

    def __init__(self):
        settings = load_settings()
        self.timeout = settings.llm_timeout_seconds
        self.openai_client = (
            AsyncOpenAI(api_key=settings.openai_api_key, timeout=self.timeout, max_retries=0)
            if settings.openai_api_key
            else None
        )
        self.gemini_available = bool(settings.google_api_key)
        self._gemini_api_key = settings.google_api_key
        self._gemini_model = settings.gemini_model
        self.openai_failures = 0
        self.model = settings.llm_model

    async def call(
        self,
        prompt: str,
        system_prompt: str = "",
        temperature: float = 0.3,
        max_tokens: int = 4000,
    ) -> str | None:
        """Make an LLM call. Returns response text or None."""
        if self.openai_client and self.openai_failures < MAX_OPENAI_FAILURES:
            try:
                result = await self._call_openai(prompt, system_prompt, temperature, max_tokens)
                self.openai_failures = 0
                return result
            except (openai_errors.APIError, httpx.HTTPError, ValueError) as e:
                self.openai_failures += 1
                logger.warning(f"OpenAI failed ({self.openai_failures}x): {e}")

        if self.gemini_available:
            try:
                result = await self._call_gemini(prompt, system_prompt, temperature, max_tokens)
                # Gemini succeeded, reset OpenAI counter so it retries next call
                self.openai_failures = 0
                return result
            except (google_errors.GoogleAPIError, asyncio.TimeoutError, ValueError, RuntimeError) as e:
                logger.warning(f"Gemini fallback also failed: {e}")

        logger.error("All LLM providers failed.")
        return None

    @retry(
        stop=stop_after_attempt(LLM_RETRY_ATTEMPTS),
        wait=wait_exponential(min=1, max=5),
        retry=retry_if_exception_type(_RETRYABLE_OPENAI),
        reraise=True,
    )
    async def _call_openai(
        self,
        prompt: str,
        system_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        if not response.choices:
            raise ValueError("LLM returned no choices")

        content = response.choices[0].message.content
        if not content:
            raise ValueError("LLM returned empty content")
        return content

    @retry(
        stop=stop_after_attempt(LLM_RETRY_ATTEMPTS),
        wait=wait_exponential(min=1, max=5),
        retry=retry_if_exception_type(_RETRYABLE_GEMINI),
        reraise=True,
    )
    async def _call_gemini(
        self,
        prompt: str,
        system_prompt: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        """Google Gemini, the only provider when no OpenAI key is configured."""
        import google.generativeai as genai

        genai.configure(api_key=self._gemini_api_key)
        model = genai.GenerativeModel(
            self._gemini_model,
            system_instruction=system_prompt or None,
            generation_config={"temperature": temperature, "max_output_tokens": max_tokens},
        )

        response = await asyncio.wait_for(
            model.generate_content_async(prompt),
            timeout=self.timeout,
        )
        return response.text


_client: LLMClient | None = None
_lock = asyncio.Lock()


async def get_llm_client() -> LLMClient:
    """Get or create the singleton LLM client."""
    global _client
    if _client is None:
        async with _lock:
            if _client is None:
                _client = LLMClient()
    return _client
