"""
InnerVoice business logic.

This module composes the prompt builder, the LLM gateway and the response
parser into the two flows the API exposes: one-shot generation of a quote and
a letter, and a chat turn with the inner-voice persona.
"""

import asyncio
from collections.abc import Sequence

from .gateway import LLMGateway
from .models import (
    ChatMessage,
    GeneratedLetter,
    GeneratedQuote,
    InnerVoiceResponse,
    Language,
    UserProfile,
)
from .parser import assemble_letter, assemble_quote
from .prompts import (
    build_chat_history,
    build_chat_system_prompt,
    build_letter_prompt,
    build_quote_prompt,
    build_welcome_message,
)


class InnerVoiceService:
    """
    Generates quotes, letters and chat replies for a user profile.

    The service holds no per-user state; every call builds what it needs from
    its arguments, so overlapping requests are independent.
    """

    def __init__(self, gateway: LLMGateway) -> None:
        self.gateway = gateway

    async def generate_quote(
        self, profile: UserProfile, language: Language = Language.EN
    ) -> GeneratedQuote:
        raw = await self.gateway.complete(
            build_quote_prompt(profile, language),
            self.gateway.settings.quote_model,
        )
        return assemble_quote(raw)

    async def generate_letter(
        self, profile: UserProfile, language: Language = Language.EN
    ) -> GeneratedLetter:
        raw = await self.gateway.complete(
            build_letter_prompt(profile, language),
            self.gateway.settings.letter_model,
        )
        return assemble_letter(raw)

    async def generate(
        self, profile: UserProfile, language: Language = Language.EN
    ) -> InnerVoiceResponse:
        """
        Generate the quote and the letter concurrently.

        If either request fails the other is cancelled and the error
        propagates; there is no partial result.
        """
        quote_task = asyncio.create_task(self.generate_quote(profile, language))
        letter_task = asyncio.create_task(self.generate_letter(profile, language))
        tasks = (quote_task, letter_task)

        try:
            quote, letter = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        return InnerVoiceResponse(quote=quote, letter=letter)

    async def chat(
        self,
        message: str,
        profile: UserProfile,
        history: Sequence[ChatMessage] = (),
        language: Language = Language.EN,
    ) -> str:
        """Answer one chat message in the persona, given the prior transcript."""
        return await self.gateway.complete_chat(
            message,
            build_chat_system_prompt(profile, language),
            build_chat_history(history),
            language,
        )

    def welcome(
        self, profile: UserProfile, language: Language = Language.EN
    ) -> ChatMessage:
        return build_welcome_message(profile, language)

    async def aclose(self) -> None:
        await self.gateway.aclose()
