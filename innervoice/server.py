"""
FastAPI server for the InnerVoice service.

This module implements the HTTP API endpoints for one-shot generation of a
quote and a letter, and for chatting with the inner-voice persona. Provider
failures are mapped to HTTP statuses with a localized, human-readable message.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import Field, field_validator

from . import __version__
from .config import get_settings
from .errors import InnerVoiceError, ProviderError, RateLimited
from .gateway import LLMGateway
from .log import configure_logging
from .messages import error_message, message, mood_label
from .models import (
    CamelModel,
    ChatMessage,
    InnerVoiceResponse,
    Language,
    Mood,
    UserProfile,
)
from .service import InnerVoiceService

logger = logging.getLogger(__name__)

VALIDATION_TITLES = {
    "/api/generate": "Invalid form data",
    "/api/chat": "Message and user context are required",
}


# API Request/Response Schemas
class GenerateRequest(UserProfile):
    """Payload for generation requests: the profile plus a display language."""

    language: Language = Field(Language.EN, description="Display language")


class ChatRequest(CamelModel):
    """Payload for a single chat turn."""

    message: str = Field(..., description="The user's new message")
    user_context: UserProfile = Field(..., description="Who the user is")
    message_history: list[ChatMessage] = Field(
        default_factory=list, description="Prior transcript, oldest first"
    )
    language: Language = Field(Language.EN, description="Display language")

    @field_validator("message")
    @classmethod
    def _require_message(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Message must not be empty")
        return value


class ChatResponse(CamelModel):
    response: str = Field(..., description="The assistant's reply")


class MoodOption(CamelModel):
    value: Mood
    label: str


def _error_response(error: Exception, language: Language) -> JSONResponse:
    """Build the error payload and status for a failed operation."""
    if isinstance(error, ProviderError):
        title = error.title
    elif isinstance(error, InnerVoiceError):
        title = str(error)
    else:
        title = message(language, "error_occurred")
    status_code = getattr(error, "status_code", 500)

    content: dict[str, object] = {
        "error": title,
        "message": error_message(error, language),
    }
    headers: dict[str, str] = {}
    if isinstance(error, RateLimited) and error.retry_after:
        content["retryAfter"] = error.retry_after
        headers["Retry-After"] = str(error.retry_after)

    if isinstance(error, InnerVoiceError):
        logger.warning(
            "Request failed: %s",
            error,
            extra={"status_code": status_code, "error_kind": type(error).__name__},
        )
    else:
        logger.exception("Unexpected error while handling request")

    return JSONResponse(status_code=status_code, content=content, headers=headers)


def create_app(service: InnerVoiceService) -> FastAPI:
    """
    Create a FastAPI application around the given service.

    Args:
        service: The InnerVoiceService instance to use for the application

    Returns:
        Configured FastAPI application
    """
    configure_logging(service.gateway.settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        yield
        # Shutdown - release the provider connection pool
        await service.aclose()

    app = FastAPI(
        title="InnerVoice",
        description="Personalized quotes, letters and chat from your inner voice",
        version=__version__,
        lifespan=lifespan,
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report invalid input as 400 with field-level details."""
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"] if part != "body"),
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        title = VALIDATION_TITLES.get(request.url.path, "Invalid request")
        return JSONResponse(
            status_code=400, content={"error": title, "details": details}
        )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "innervoice"}

    @app.get("/api/moods")
    async def list_moods(language: Language = Language.EN) -> list[MoodOption]:
        """List the selectable moods with labels in the requested language."""
        return [MoodOption(value=mood, label=mood_label(mood, language)) for mood in Mood]

    @app.post("/api/generate", response_model=InnerVoiceResponse)
    async def generate(request: GenerateRequest) -> InnerVoiceResponse | JSONResponse:
        """
        Generate an inspirational quote and a comforting letter.

        Both are requested from the provider concurrently; if either fails the
        whole request fails.
        """
        logger.info(
            "generate request",
            extra={"endpoint": "generate", "language": request.language.value},
        )
        try:
            return await service.generate(request, request.language)
        except Exception as e:
            return _error_response(e, request.language)

    @app.post("/api/chat", response_model=ChatResponse)
    async def chat(request: ChatRequest) -> ChatResponse | JSONResponse:
        """
        Answer one chat message as the user's inner voice.

        Transient provider failures come back as an in-persona fallback reply;
        only authentication, quota and configuration errors are reported.
        """
        logger.info(
            "chat request",
            extra={"endpoint": "chat", "language": request.language.value},
        )
        try:
            reply = await service.chat(
                request.message,
                request.user_context,
                request.message_history,
                request.language,
            )
        except Exception as e:
            return _error_response(e, request.language)
        return ChatResponse(response=reply)

    @app.post("/api/chat/welcome")
    async def chat_welcome(request: GenerateRequest) -> ChatMessage:
        """The greeting that opens a chat session."""
        return service.welcome(request, request.language)

    return app


# Default app instance for ``uvicorn innervoice.server:app``
app = create_app(InnerVoiceService(LLMGateway(get_settings())))


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "innervoice.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
