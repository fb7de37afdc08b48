"""
Error taxonomy for calls to the LLM provider.

Every failed provider response is classified into exactly one
``ProviderError`` subclass. Each kind knows whether it is worth retrying and
which HTTP status the service should answer with.
"""

import httpx

DEFAULT_RETRY_AFTER = 60

SERVICE_UNAVAILABLE_STATUSES = frozenset({500, 502, 503, 504})


class InnerVoiceError(Exception):
    """Base class for all errors raised by this package."""

    status_code = 500


class MissingCredentials(InnerVoiceError):
    """No API key is configured, so the provider cannot be called."""

    def __init__(self) -> None:
        super().__init__("OpenRouter API key is not configured")


class ProviderError(InnerVoiceError):
    """A call to the LLM provider failed."""

    retryable = True
    title = "Failed to generate response"

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationFailure(ProviderError):
    retryable = False
    status_code = 401
    title = "Authentication failed"


class QuotaExceeded(ProviderError):
    retryable = False
    status_code = 402
    title = "Quota exceeded"


class RateLimited(ProviderError):
    status_code = 429
    title = "Rate limit exceeded"

    def __init__(
        self,
        message: str,
        status: int | None = 429,
        retry_after: int = DEFAULT_RETRY_AFTER,
        explicit: bool = False,
    ) -> None:
        super().__init__(message, status)
        self.retry_after = retry_after
        # Whether the provider sent Retry-After; only then does it set the backoff
        self.explicit = explicit


class ServiceUnavailable(ProviderError):
    status_code = 503
    title = "Service unavailable"


class GenericFailure(ProviderError):
    status_code = 500


def parse_retry_after(value: str | None) -> int | None:
    """Seconds from a ``Retry-After`` header, or None when absent or unusable."""
    if not value:
        return None
    try:
        seconds = int(value.strip())
    except ValueError:
        return None
    return seconds if seconds > 0 else None


def _provider_message(response: httpx.Response) -> str | None:
    """Extract ``error.message`` from a provider error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    return None


def classify_response(response: httpx.Response) -> ProviderError:
    """
    Map a non-2xx provider response to its error kind.

    Any status not listed explicitly falls through to ``GenericFailure``,
    which is retryable.
    """
    status = response.status_code
    provider_message = _provider_message(response)

    if status == 401:
        return AuthenticationFailure(
            "Invalid API key or authentication failed", status
        )
    if status == 402:
        return QuotaExceeded(
            "API quota exceeded or insufficient credits", status
        )
    if status == 429:
        header_seconds = parse_retry_after(response.headers.get("retry-after"))
        retry_after = header_seconds or DEFAULT_RETRY_AFTER
        return RateLimited(
            f"Rate limit exceeded. Retry after {retry_after} seconds.",
            status,
            retry_after=retry_after,
            explicit=header_seconds is not None,
        )
    if status in SERVICE_UNAVAILABLE_STATUSES:
        return ServiceUnavailable(
            f"OpenRouter service is temporarily unavailable ({status})", status
        )

    message = f"OpenRouter API error: {status} {response.reason_phrase}"
    if provider_message:
        message = f"{message} - {provider_message}"
    return GenericFailure(message, status)
