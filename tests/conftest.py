import pytest

PROVIDER_ENV_VARS = (
    "OPENROUTER_API_KEY",
    "OPENROUTER_BASE_URL",
    "OPENROUTER_MODEL_QUOTE",
    "OPENROUTER_MODEL_LETTER",
    "APP_URL",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """Keep real provider settings from leaking into tests."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
