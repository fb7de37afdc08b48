"""
LLM gateway: the single outbound integration with the model provider.

Sends OpenAI-compatible chat-completion requests to OpenRouter over httpx and
retries transient failures with tenacity. Failures are classified by
``innervoice.errors.classify_response``; authentication and quota failures are
never retried.

Usage:
    async with LLMGateway(settings) as gateway:
        text = await gateway.complete(prompt, settings.quote_model)
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
)

from .config import Settings
from .errors import (
    GenericFailure,
    MissingCredentials,
    ProviderError,
    RateLimited,
    classify_response,
)
from .messages import chat_fallback
from .models import Language

logger = logging.getLogger(__name__)

MAX_TOKENS = 1000
COMPLETION_TEMPERATURE = 0.7
CHAT_TEMPERATURE = 0.8

Sleep = Callable[[float], Awaitable[None]]


def _is_retryable(exc: BaseException) -> bool:
    """Return True for provider errors worth another attempt."""
    return isinstance(exc, ProviderError) and exc.retryable


def _uniform_jitter() -> float:
    return random.uniform(0.0, 1.0)


def backoff_delay(
    attempt: int,
    error: BaseException | None,
    base_delay: float,
    jitter: float,
) -> float:
    """
    Seconds to wait after the failed attempt ``attempt`` (0-indexed).

    A rate-limit error carrying an explicit retry-after value overrides the
    exponential schedule for that attempt only.
    """
    if isinstance(error, RateLimited) and error.explicit and error.retry_after:
        return float(error.retry_after)
    return base_delay * 2**attempt + jitter


def _extract_content(data: Any) -> str:
    """Text of the first choice, or an empty string when missing."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices") or []
    first = choices[0] if isinstance(choices, list) and choices else None
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else ""


class LLMGateway:
    """
    Async client for the OpenRouter chat-completions endpoint.

    All configuration comes from the ``Settings`` passed in. ``transport``,
    ``sleep`` and ``jitter`` exist so tests can fake the network and the clock.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
        jitter: Callable[[], float] = _uniform_jitter,
    ) -> None:
        self.settings = settings
        self._sleep = sleep
        self._jitter = jitter
        self._client = httpx.AsyncClient(
            base_url=settings.base_url,
            timeout=settings.request_timeout,
            transport=transport,
        )

    # MARK: - Completions

    async def complete(self, prompt: str, model: str) -> str:
        """Send ``prompt`` as the only user message and return the reply text."""
        messages = [{"role": "user", "content": prompt}]
        return await self._complete_with_retry(
            messages, model, COMPLETION_TEMPERATURE
        )

    async def complete_chat(
        self,
        user_message: str,
        system_prompt: str,
        history: Sequence[dict[str, str]],
        language: Language = Language.EN,
    ) -> str:
        """
        Continue a chat conversation in the inner-voice persona.

        Transient failures degrade to a canned, localized reply once retries
        are exhausted. Authentication and quota failures still propagate.
        """
        messages = [
            {"role": "system", "content": system_prompt},
            *history,
            {"role": "user", "content": user_message},
        ]
        try:
            return await self._complete_with_retry(
                messages, self.settings.letter_model, CHAT_TEMPERATURE
            )
        except ProviderError as e:
            if not e.retryable:
                raise
            logger.warning("Chat completion failed, using fallback reply: %s", e)
            return chat_fallback(language)

    # MARK: - Retry

    def _wait(self, retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        return backoff_delay(
            retry_state.attempt_number - 1,
            error,
            self.settings.retry_base_delay,
            self._jitter(),
        )

    def _log_retry(self, retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        logger.warning(
            "Provider call failed (attempt %d/%d): %s; retrying in %.2fs",
            retry_state.attempt_number,
            self.settings.max_retries + 1,
            error,
            delay,
        )

    async def _complete_with_retry(
        self, messages: list[dict[str, str]], model: str, temperature: float
    ) -> str:
        if not self.settings.has_credentials:
            raise MissingCredentials()

        payload = {
            "model": model,
            "messages": messages,
            "max_tokens": MAX_TOKENS,
            "temperature": temperature,
        }
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_retries + 1),
            wait=self._wait,
            retry=retry_if_exception(_is_retryable),
            before_sleep=self._log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                content = await self._post(payload)
        return content

    # MARK: - HTTP

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.app_url,
            "X-Title": self.settings.app_title,
        }

    async def _post(self, payload: dict[str, Any]) -> str:
        try:
            response = await self._client.post(
                "/chat/completions", json=payload, headers=self._headers()
            )
        except httpx.RequestError as e:
            raise GenericFailure(f"Request error calling OpenRouter: {e!r}") from e

        if not response.is_success:
            raise classify_response(response)

        try:
            data = response.json()
        except ValueError as e:
            raise GenericFailure("OpenRouter returned a malformed response body") from e
        return _extract_content(data)

    # MARK: - Lifecycle

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def __aenter__(self) -> "LLMGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
