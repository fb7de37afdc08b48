"""
Shared data models for the InnerVoice service.

This module defines the core domain models used across multiple layers
of the application (prompt building, gateway, parsing, API, CLI). Field names
are snake_case in Python and camelCase on the wire.
"""

from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

WELCOME_MESSAGE_ID = "welcome"


class CamelModel(BaseModel):
    """Base model serializing to camelCase while accepting either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Mood(str, Enum):
    """Mood tags a user can pick from."""

    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    EXCITED = "excited"
    CONFUSED = "confused"
    LONELY = "lonely"
    GRATEFUL = "grateful"
    ANGRY = "angry"
    HOPEFUL = "hopeful"
    OTHER = "other"


class Language(str, Enum):
    """Supported display languages."""

    EN = "en"
    TR = "tr"


class ChatRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class UserProfile(CamelModel):
    """What the user tells us about themselves."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True
    )

    name: str = Field(..., min_length=1, max_length=50, description="First name")
    surname: str = Field(..., min_length=1, max_length=50, description="Last name")
    date_of_birth: date = Field(..., description="Calendar date of birth")
    mood: Mood = Field(..., description="Selected mood tag")
    custom_mood: str | None = Field(
        None,
        validate_default=True,
        description="Free-text mood, required when mood is 'other'",
    )

    @field_validator("custom_mood")
    @classmethod
    def _require_custom_mood_for_other(
        cls, value: str | None, info: ValidationInfo
    ) -> str | None:
        if info.data.get("mood") is Mood.OTHER and not (value or "").strip():
            raise ValueError('Please specify your mood when selecting "Other"')
        return value

    @property
    def effective_mood(self) -> str:
        """The mood tag, or the custom description when the tag is 'other'."""
        if self.mood is Mood.OTHER and self.custom_mood:
            return self.custom_mood.strip()
        return self.mood.value

    def age(self, today: date | None = None) -> int:
        """Approximate age as the difference between calendar years."""
        today = today or date.today()
        return today.year - self.date_of_birth.year


class ChatMessage(CamelModel):
    """A single message in a chat transcript."""

    id: str = Field(..., description="Identifier, unique within a session")
    role: ChatRole
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class GeneratedQuote(CamelModel):
    text: str
    author: str


class GeneratedLetter(CamelModel):
    content: str


class InnerVoiceResponse(CamelModel):
    """Result of the one-shot generation flow."""

    quote: GeneratedQuote
    letter: GeneratedLetter
