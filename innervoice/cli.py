"""
Command-line interface tools for the InnerVoice service.
"""

import asyncio
import json
from collections.abc import Coroutine
from datetime import date
from typing import Any

import httpx
import typer

from .models import (
    WELCOME_MESSAGE_ID,
    ChatMessage,
    ChatRole,
    InnerVoiceResponse,
    Language,
    Mood,
)

DEFAULT_BASE_URL = "http://localhost:8000"

# Generation waits on two provider calls, each with retries
REQUEST_TIMEOUT = 120.0

app = typer.Typer(help="InnerVoice CLI tools")


# MARK: - CLI Entry Points


def cli_generate() -> None:
    """Entry point for innervoice-generate CLI command."""
    typer.run(generate)


def cli_chat() -> None:
    """Entry point for innervoice-chat CLI command."""
    typer.run(chat)


# MARK: - Commands


@app.command()
def generate(
    name: str = typer.Argument(..., help="Your first name"),
    surname: str = typer.Argument(..., help="Your last name"),
    date_of_birth: str = typer.Argument(..., help="Date of birth (YYYY-MM-DD)"),
    mood: Mood = typer.Argument(..., help="How you are feeling"),
    custom_mood: str | None = typer.Option(
        None, "--custom-mood", "-c", help="Describe your mood when it is 'other'"
    ),
    language: Language = typer.Option(Language.EN, "--language", "-l"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the InnerVoice service"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output raw JSON"),
) -> None:
    """Generate a quote and a letter from your inner voice."""
    payload = _profile_payload(name, surname, date_of_birth, mood, custom_mood)
    payload["language"] = language.value

    async def _generate() -> None:
        async with _client() as client:
            response = await client.post(f"{base_url}/api/generate", json=payload)
            _raise_for_error(response)
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            print(format_response(InnerVoiceResponse.model_validate(result)))

    _run_with_error_handling(_generate(), base_url)


@app.command()
def chat(
    message: str = typer.Argument(..., help="What you want to say"),
    name: str = typer.Option(..., "--name", help="Your first name"),
    surname: str = typer.Option(..., "--surname", help="Your last name"),
    date_of_birth: str = typer.Option(
        ..., "--dob", help="Date of birth (YYYY-MM-DD)"
    ),
    mood: Mood = typer.Option(..., "--mood", help="How you are feeling"),
    custom_mood: str | None = typer.Option(None, "--custom-mood", "-c"),
    language: Language = typer.Option(Language.EN, "--language", "-l"),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the InnerVoice service"
    ),
) -> None:
    """Send one message to your inner voice and print the reply."""
    profile = _profile_payload(name, surname, date_of_birth, mood, custom_mood)

    async def _chat() -> None:
        async with _client() as client:
            welcome = await client.post(
                f"{base_url}/api/chat/welcome",
                json={**profile, "language": language.value},
            )
            _raise_for_error(welcome)
            greeting = ChatMessage.model_validate(welcome.json())
            print(format_message(greeting))

            response = await client.post(
                f"{base_url}/api/chat",
                json={
                    "message": message,
                    "userContext": profile,
                    "messageHistory": [greeting.model_dump(mode="json", by_alias=True)],
                    "language": language.value,
                },
            )
            _raise_for_error(response)
            reply = ChatMessage(
                id="reply", role=ChatRole.ASSISTANT, content=response.json()["response"]
            )
            print(format_message(ChatMessage(id="you", role=ChatRole.USER, content=message)))
            print(format_message(reply))

    _run_with_error_handling(_chat(), base_url)


# MARK: - Formatting


def format_response(response: InnerVoiceResponse) -> str:
    """Render a generated quote and letter for the terminal."""
    return (
        f'"{response.quote.text}"\n'
        f"    - {response.quote.author}\n\n"
        f"{response.letter.content}"
    )


def format_message(message: ChatMessage) -> str:
    speaker = "you" if message.role is ChatRole.USER else "inner voice"
    if message.id == WELCOME_MESSAGE_ID:
        speaker = "inner voice (welcome)"
    return f"{speaker} > {message.content}"


# MARK: - Private Helpers


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=REQUEST_TIMEOUT)


def _profile_payload(
    name: str,
    surname: str,
    date_of_birth: str,
    mood: Mood,
    custom_mood: str | None,
) -> dict[str, Any]:
    try:
        dob = date.fromisoformat(date_of_birth)
    except ValueError:
        raise typer.BadParameter(f"Invalid date of birth: {date_of_birth}") from None

    payload: dict[str, Any] = {
        "name": name,
        "surname": surname,
        "dateOfBirth": dob.isoformat(),
        "mood": mood.value,
    }
    if custom_mood:
        payload["customMood"] = custom_mood
    return payload


def _raise_for_error(response: httpx.Response) -> None:
    """Print the service's error message before raising for the status."""
    if response.is_success:
        return
    try:
        body = response.json()
    except ValueError:
        body = {}
    detail = body.get("message") or body.get("error") if isinstance(body, dict) else None
    if detail:
        print(f"Error: {detail}")
    response.raise_for_status()


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
