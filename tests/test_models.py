"""
Tests for the InnerVoice domain models.

These tests verify profile validation, in particular the rule that a custom
mood is required exactly when the mood is "other".
"""

from datetime import date

import pytest
from pydantic import ValidationError

from innervoice.models import ChatMessage, ChatRole, Mood, UserProfile


def make_profile(**overrides) -> UserProfile:
    data = {
        "name": "Ada",
        "surname": "Lovelace",
        "dateOfBirth": "1990-12-10",
        "mood": "hopeful",
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


class TestUserProfile:
    """Validation and derived values of UserProfile."""

    def test_parses_camel_case_payload(self):
        profile = make_profile()
        assert profile.name == "Ada"
        assert profile.date_of_birth == date(1990, 12, 10)
        assert profile.mood is Mood.HOPEFUL
        assert profile.custom_mood is None

    @pytest.mark.parametrize("custom_mood", [None, "", "   ", "\n\t"])
    def test_other_mood_requires_custom_mood(self, custom_mood):
        with pytest.raises(ValidationError) as exc_info:
            make_profile(mood="other", customMood=custom_mood)

        locations = [error["loc"] for error in exc_info.value.errors()]
        assert ("customMood",) in locations

    def test_other_mood_uses_custom_mood(self):
        profile = make_profile(mood="other", customMood="  a bit nostalgic ")
        assert profile.effective_mood == "a bit nostalgic"

    def test_custom_mood_ignored_for_regular_moods(self):
        profile = make_profile(mood="sad", customMood="   ")
        assert profile.effective_mood == "sad"

        profile = make_profile(mood="sad", customMood="overjoyed")
        assert profile.effective_mood == "sad"

    def test_unknown_mood_is_rejected(self):
        with pytest.raises(ValidationError):
            make_profile(mood="melancholic")

    @pytest.mark.parametrize("field", ["name", "surname"])
    def test_names_are_required_and_bounded(self, field):
        with pytest.raises(ValidationError):
            make_profile(**{field: "   "})
        with pytest.raises(ValidationError):
            make_profile(**{field: "x" * 51})

    def test_age_is_difference_of_calendar_years(self):
        profile = make_profile(dateOfBirth="1990-12-31")
        assert profile.age(date(2024, 1, 1)) == 34


class TestChatMessage:
    def test_timestamp_defaults_to_now(self):
        message = ChatMessage(id="m1", role=ChatRole.USER, content="hi")
        assert message.timestamp is not None

    def test_serializes_camel_case(self):
        message = ChatMessage(id="m1", role="assistant", content="hello")
        dumped = message.model_dump(mode="json", by_alias=True)
        assert dumped["role"] == "assistant"
        assert set(dumped) == {"id", "role", "content", "timestamp"}
