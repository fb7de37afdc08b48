"""
Robust parsing of LLM response text.

Models are asked for strict JSON but often wrap it in markdown fences, add a
preamble, or return something that is almost JSON. Parsing happens in two
phases:

  1. Strict parse -- strip ```json fences and ``json.loads`` the rest.
  2. Salvage -- run each ``RegexSalvage`` strategy in turn and take the first
     that finds all of its fields.

Nothing in this module raises: when both phases fail, the assemblers fall
back to the cleaned raw text.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from .models import GeneratedLetter, GeneratedQuote

logger = logging.getLogger(__name__)

FALLBACK_AUTHOR = "Historical Figure"

_LEADING_FENCE = re.compile(r"^```json\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")
_ANY_FENCE = re.compile(r"```json|```", re.IGNORECASE)


def strip_fences(text: str) -> str:
    """Remove a leading ```json and a trailing ``` fence."""
    cleaned = _LEADING_FENCE.sub("", text.strip())
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def _clean_text(text: str) -> str:
    return _ANY_FENCE.sub("", text).strip()


_ESCAPE = re.compile(r'\\(["n\\])')
_UNESCAPED = {'"': '"', "n": "\n", "\\": "\\"}


def _unescape(value: str) -> str:
    return _ESCAPE.sub(lambda match: _UNESCAPED[match.group(1)], value)


@dataclass(frozen=True)
class RegexSalvage:
    """
    Pulls a fixed set of string fields out of near-JSON text.

    ``extract`` returns ``None`` unless every field is found.
    """

    fields: tuple[str, ...]
    _patterns: dict[str, re.Pattern[str]] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        patterns = {
            name: re.compile(rf'"{re.escape(name)}"\s*:\s*"((?:[^"\\]|\\.)*)"', re.DOTALL)
            for name in self.fields
        }
        object.__setattr__(self, "_patterns", patterns)

    def extract(self, text: str) -> dict[str, str] | None:
        found: dict[str, str] = {}
        for name, pattern in self._patterns.items():
            match = pattern.search(text)
            if match is None:
                return None
            found[name] = _unescape(match.group(1))
        return found


QUOTE_SALVAGE = RegexSalvage(fields=("quote", "author"))
LETTER_SALVAGE = RegexSalvage(fields=("letter",))

SALVAGE_STRATEGIES: tuple[RegexSalvage, ...] = (QUOTE_SALVAGE, LETTER_SALVAGE)


def parse_structured(
    raw: str, strategies: tuple[RegexSalvage, ...] = SALVAGE_STRATEGIES
) -> dict[str, Any] | None:
    """
    Parse a JSON object out of model output.

    Returns:
        The parsed mapping, or None when the text is unparseable.
    """
    cleaned = strip_fences(raw)

    try:
        obj = json.loads(cleaned)
        if isinstance(obj, dict):
            return obj
    except ValueError:
        pass

    for strategy in strategies:
        salvaged = strategy.extract(cleaned)
        if salvaged is not None:
            logger.info("Salvaged %s from non-JSON model output", list(salvaged))
            return salvaged

    return None


def assemble_quote(raw: str) -> GeneratedQuote:
    data = parse_structured(raw)
    if data and isinstance(data.get("quote"), str) and isinstance(data.get("author"), str):
        return GeneratedQuote(text=data["quote"], author=data["author"])

    logger.warning("Quote response was not structured; using raw text")
    return GeneratedQuote(text=_clean_text(raw), author=FALLBACK_AUTHOR)


def assemble_letter(raw: str) -> GeneratedLetter:
    data = parse_structured(raw)
    if data and isinstance(data.get("letter"), str):
        return GeneratedLetter(content=data["letter"])

    logger.warning("Letter response was not structured; using raw text")
    return GeneratedLetter(content=_clean_text(raw))
