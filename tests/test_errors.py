"""
Tests for classifying provider responses into error kinds.
"""

import httpx
import pytest

from innervoice.errors import (
    DEFAULT_RETRY_AFTER,
    AuthenticationFailure,
    GenericFailure,
    QuotaExceeded,
    RateLimited,
    ServiceUnavailable,
    classify_response,
    parse_retry_after,
)
from innervoice.messages import error_message
from innervoice.models import Language


class TestClassifyResponse:
    @pytest.mark.parametrize(
        ("status", "error_type", "retryable"),
        [
            (401, AuthenticationFailure, False),
            (402, QuotaExceeded, False),
            (429, RateLimited, True),
            (500, ServiceUnavailable, True),
            (502, ServiceUnavailable, True),
            (503, ServiceUnavailable, True),
            (504, ServiceUnavailable, True),
            (400, GenericFailure, True),
            (403, GenericFailure, True),
            (404, GenericFailure, True),
            (501, GenericFailure, True),
        ],
    )
    def test_status_mapping(self, status, error_type, retryable):
        error = classify_response(httpx.Response(status))
        assert type(error) is error_type
        assert error.retryable is retryable
        assert error.status == status

    def test_rate_limit_reads_retry_after(self):
        error = classify_response(httpx.Response(429, headers={"Retry-After": "12"}))
        assert isinstance(error, RateLimited)
        assert error.retry_after == 12
        assert error.explicit

    def test_rate_limit_defaults_retry_after(self):
        error = classify_response(httpx.Response(429))
        assert error.retry_after == DEFAULT_RETRY_AFTER == 60
        assert not error.explicit

    def test_generic_message_includes_provider_error(self):
        response = httpx.Response(
            409, json={"error": {"message": "model not found", "code": 409}}
        )
        error = classify_response(response)
        assert str(error) == (
            "OpenRouter API error: 409 Conflict - model not found"
        )

    def test_generic_message_without_body(self):
        error = classify_response(httpx.Response(418, content=b"<html>"))
        assert str(error).startswith("OpenRouter API error: 418")
        assert " - " not in str(error)


@pytest.mark.parametrize(
    ("header", "expected"),
    [("5", 5), (" 30 ", 30), (None, None), ("", None), ("soon", None), ("0", None)],
)
def test_parse_retry_after(header, expected):
    assert parse_retry_after(header) == expected


class TestErrorMessages:
    """Localized, user-facing explanations of errors."""

    def test_rate_limit_includes_wait_time(self):
        error = RateLimited("slow down", retry_after=5)
        assert error_message(error, Language.EN) == (
            "Rate limit exceeded. Please wait a moment before trying again. "
            "Please try again in 5 seconds."
        )

    def test_turkish_messages(self):
        error = ServiceUnavailable("down")
        assert error_message(error, Language.TR).startswith("Hizmet geçici olarak")

    def test_unknown_errors_get_generic_message(self):
        assert error_message(RuntimeError("boom"), Language.EN) == (
            "Failed to generate response. Please try again."
        )
