"""
Tests for generation.config and generation.gpt_client helpers.
"""

import asyncio

import httpx
import openai
import pytest

from generation.config import MODE_COMBINED, MODE_SPLIT, Settings, load_settings
from generation.gpt_client import GPTClient, provider_error_message

ENV_VARS = [
    "OPENAI_API_KEY", "GPT_MODEL", "GPT_MAX_TOKENS", "GPT_TEMPERATURE",
    "ALLOWED_ORIGIN", "DOCUMENT_MODE", "PORT", "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings()
    assert settings.openai_api_key is None
    assert settings.gpt_model == "gpt-4o-mini"
    assert settings.max_tokens == 4000
    assert settings.document_mode == MODE_SPLIT
    assert settings.port == 3000
    assert settings.log_level == "INFO"


def test_values_from_environment(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("GPT_MODEL", "gpt-4o")
    clean_env.setenv("GPT_MAX_TOKENS", "2500")
    clean_env.setenv("GPT_TEMPERATURE", "0.2")
    clean_env.setenv("ALLOWED_ORIGIN", "https://notes.example.org")
    clean_env.setenv("DOCUMENT_MODE", " Combined ")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = load_settings()
    assert settings.openai_api_key == "sk-test"
    assert settings.gpt_model == "gpt-4o"
    assert settings.max_tokens == 2500
    assert settings.temperature == pytest.approx(0.2)
    assert settings.allowed_origin == "https://notes.example.org"
    assert settings.document_mode == MODE_COMBINED
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"


def test_invalid_document_mode(clean_env):
    clean_env.setenv("DOCUMENT_MODE", "zip")
    with pytest.raises(ValueError):
        load_settings()


def test_settings_are_immutable():
    settings = Settings()
    with pytest.raises(Exception):
        settings.max_tokens = 10


def test_client_without_key_fails_on_use():
    client = GPTClient(api_key=None)
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        asyncio.run(client.complete("hello", max_tokens=10))


def _api_error(body):
    return openai.APIError(
        "Error code: 400",
        request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"),
        body=body,
    )


def test_provider_message_from_nested_error_body():
    error = _api_error({"error": {"message": "Rate limit reached"}})
    assert provider_error_message(error) == "Rate limit reached"


def test_provider_message_from_flat_body():
    assert provider_error_message(_api_error({"message": "Bad request"})) == "Bad request"


def test_provider_message_falls_back_to_exception_message():
    assert provider_error_message(_api_error(None)) == "Error code: 400"


def test_non_provider_error_has_no_message():
    assert provider_error_message(ValueError("boom")) is None
