"""
Tests for parsing model output into quotes and letters.
"""

from innervoice.parser import (
    FALLBACK_AUTHOR,
    LETTER_SALVAGE,
    QUOTE_SALVAGE,
    RegexSalvage,
    assemble_letter,
    assemble_quote,
    parse_structured,
    strip_fences,
)


class TestParseStructured:
    """Strict parsing with fence stripping and regex salvage."""

    def test_plain_json(self):
        assert parse_structured('{"letter": "Hi"}') == {"letter": "Hi"}

    def test_fenced_json(self):
        raw = '```json\n{"quote":"Be bold","author":"Seneca"}\n```'
        assert parse_structured(raw) == {"quote": "Be bold", "author": "Seneca"}

    def test_fence_prefix_is_case_insensitive(self):
        raw = '```JSON\n{"letter": "Hi"}```'
        assert parse_structured(raw) == {"letter": "Hi"}

    def test_salvages_letter_after_prose(self):
        raw = r'Here you go: {"letter": "Dear X,\nStay strong.\nYour Inner Voice"}'
        assert parse_structured(raw) == {
            "letter": "Dear X,\nStay strong.\nYour Inner Voice"
        }

    def test_salvages_quote_with_escaped_quotes(self):
        raw = r'Sure! {"quote": "Say \"yes\" to life", "author": "Seneca",}'
        assert parse_structured(raw) == {
            "quote": 'Say "yes" to life',
            "author": "Seneca",
        }

    def test_salvage_keeps_escaped_backslashes(self):
        raw = r'Note: {"letter": "Path C:\\new folder\nsee you"}'
        assert parse_structured(raw) == {"letter": "Path C:\\new folder\nsee you"}

    def test_unparseable_returns_none(self):
        assert parse_structured("Just some words of wisdom.") is None

    def test_non_object_json_is_not_accepted(self):
        assert parse_structured('["a", "b"]') is None


class TestRegexSalvage:
    def test_requires_every_field(self):
        assert QUOTE_SALVAGE.extract('{"quote": "Only a quote"}') is None

    def test_custom_strategy(self):
        strategy = RegexSalvage(fields=("reply",))
        assert strategy.extract('oops {"reply": "ok\\nthen"') == {"reply": "ok\nthen"}

    def test_letter_strategy_ignores_quotes(self):
        assert LETTER_SALVAGE.extract('{"quote": "a", "author": "b"}') is None


class TestAssembly:
    """Best-effort assembly of the final quote and letter."""

    def test_quote_from_fenced_json(self):
        quote = assemble_quote('```json\n{"quote":"Be bold","author":"Seneca"}\n```')
        assert quote.text == "Be bold"
        assert quote.author == "Seneca"

    def test_quote_falls_back_to_raw_text(self):
        quote = assemble_quote("```\nThe only way out is through.\n```")
        assert quote.text == "The only way out is through."
        assert quote.author == FALLBACK_AUTHOR

    def test_quote_with_non_string_author_falls_back(self):
        raw = '{"quote": "Be bold", "author": 42}'
        quote = assemble_quote(raw)
        assert quote.text == raw
        assert quote.author == FALLBACK_AUTHOR

    def test_letter_from_salvage(self):
        raw = r'Here you go: {"letter": "Dear X,\nStay strong.\nYour Inner Voice"}'
        letter = assemble_letter(raw)
        assert letter.content == "Dear X,\nStay strong.\nYour Inner Voice"

    def test_letter_with_windows_path(self):
        letter = assemble_letter(r'Note: {"letter": "Path C:\\new folder"}')
        assert letter.content == "Path C:\\new folder"

    def test_letter_falls_back_to_raw_text(self):
        letter = assemble_letter("  Dear Ada,\n\nYou are doing fine.  ")
        assert letter.content == "Dear Ada,\n\nYou are doing fine."

    def test_empty_output(self):
        assert assemble_letter("").content == ""
        assert assemble_quote("").author == FALLBACK_AUTHOR


def test_strip_fences_leaves_plain_text():
    assert strip_fences("  hello  ") == "hello"
