"""
Prompt templates for the InnerVoice persona.

Every function here is pure: it renders text from an already validated
``UserProfile`` and never raises. Instructions are written in English and tell
the model which language to answer in, so adding a language only means adding
its entries to ``LANGUAGE_NAMES`` and ``PERSONA_NAMES``.
"""

from collections.abc import Iterable
from datetime import date

from .messages import mood_label, message
from .models import (
    WELCOME_MESSAGE_ID,
    ChatMessage,
    ChatRole,
    Language,
    Mood,
    UserProfile,
)

LANGUAGE_NAMES: dict[Language, str] = {
    Language.EN: "English",
    Language.TR: "Turkish",
}

PERSONA_NAMES: dict[Language, str] = {
    Language.EN: "Your Inner Voice",
    Language.TR: "İç Sesin",
}

QUOTE_TEMPLATE = """\
Generate an inspirational quote from a well-known historical figure that would \
be appropriate for someone named {name} {surname}, who is feeling {mood}.

Make sure the quote is genuine and historically accurate, and that it addresses \
the person's current mood in a comforting and inspiring way. Write the quote in \
{language_name}.

Respond with a single line of strict JSON and nothing else, no markdown and no \
explanation, in exactly this shape:
{{"quote": "The actual quote text here", "author": "Name of the historical figure"}}"""

LETTER_TEMPLATE = """\
Write a personalized, comforting letter for {name}, who is approximately {age} \
years old and is currently feeling {mood}.

The letter should be:
- Warm and empathetic
- Personally addressing their current emotional state
- Offering genuine comfort and encouragement
- About 2-3 paragraphs long
- Written in a caring, supportive tone
- Written in {language_name}
- Signed as "{persona}"

Make the letter feel personal and heartfelt, as if written by a caring friend \
who truly understands their situation.

Respond with strict JSON and nothing else, no markdown and no explanation, in \
exactly this shape:
{{"letter": "The complete letter content here"}}"""

CHAT_SYSTEM_TEMPLATE = """\
You are the inner voice of {name}, a {age}-year-old person who is currently \
feeling {mood}. You know them deeply and speak to them as their own kind, \
honest and encouraging inner voice.

Guidelines:
- Speak warmly and conversationally, in the first person, as "{persona}"
- Keep replies short: a few sentences, like a real conversation
- Acknowledge their feelings before offering perspective
- Do not diagnose, lecture or sound clinical
- Always reply in {language_name}, in plain text"""


def build_quote_prompt(profile: UserProfile, language: Language = Language.EN) -> str:
    return QUOTE_TEMPLATE.format(
        name=profile.name,
        surname=profile.surname,
        mood=profile.effective_mood,
        language_name=LANGUAGE_NAMES[language],
    )


def build_letter_prompt(
    profile: UserProfile,
    language: Language = Language.EN,
    today: date | None = None,
) -> str:
    return LETTER_TEMPLATE.format(
        name=profile.name,
        age=profile.age(today),
        mood=profile.effective_mood,
        language_name=LANGUAGE_NAMES[language],
        persona=PERSONA_NAMES[language],
    )


def build_chat_system_prompt(
    profile: UserProfile,
    language: Language = Language.EN,
    today: date | None = None,
) -> str:
    """System prompt establishing the persona for the whole chat session."""
    return CHAT_SYSTEM_TEMPLATE.format(
        name=profile.name,
        age=profile.age(today),
        mood=profile.effective_mood,
        language_name=LANGUAGE_NAMES[language],
        persona=PERSONA_NAMES[language],
    )


def build_chat_history(transcript: Iterable[ChatMessage]) -> list[dict[str, str]]:
    """
    Replay a transcript as provider messages.

    The synthetic welcome message is dropped; everything else keeps its order
    and role.
    """
    return [
        {"role": entry.role.value, "content": entry.content}
        for entry in transcript
        if entry.id != WELCOME_MESSAGE_ID
    ]


def _welcome_mood(profile: UserProfile, language: Language) -> str:
    if profile.mood is Mood.OTHER:
        return profile.effective_mood
    if language is Language.EN:
        return profile.mood.value
    return mood_label(profile.mood, language)


def build_welcome_message(
    profile: UserProfile, language: Language = Language.EN
) -> ChatMessage:
    """The greeting that opens every chat session."""
    return ChatMessage(
        id=WELCOME_MESSAGE_ID,
        role=ChatRole.ASSISTANT,
        content=message(
            language,
            "welcome",
            name=profile.name,
            mood=_welcome_mood(profile, language),
        ),
    )
