"""
OpenAI GPT client for the study pack generator.

Wraps AsyncOpenAI behind a small object with one coroutine, complete(), so
the orchestrator receives it as a dependency and tests can pass a fake with
the same method.

Model: gpt-4o-mini  (override with GPT_MODEL env var, e.g. "gpt-4o")
"""

from typing import Optional

import openai
from openai import AsyncOpenAI

SYSTEM_PROMPT = "You are a helpful assistant for students. Output only what is asked."


class GPTClient:
    """Chat Completions client bound to one model."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "gpt-4o-mini",
        temperature: float = 0.7,
        system: str = SYSTEM_PROMPT,
    ):
        self._api_key = api_key
        self._client: Optional[AsyncOpenAI] = None
        self.model = model
        self.temperature = temperature
        self.system = system

    def _get_client(self) -> AsyncOpenAI:
        # Created on first use so the app can start without a key configured
        if self._client is None:
            if not self._api_key:
                raise RuntimeError(
                    "OPENAI_API_KEY is not set. Add it to your .env file."
                )
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def complete(self, prompt: str, max_tokens: int) -> str:
        """
        Send one user prompt and return the assistant message text.

        Args:
            prompt:     User-turn message
            max_tokens: Upper bound on generated tokens

        Returns:
            Raw string content of the model response ("" if none)
        """
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": self.system},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self):
        if self._client is not None:
            await self._client.close()
            self._client = None


def provider_error_message(exc: BaseException) -> Optional[str]:
    """
    Pull the provider's own error message out of an OpenAI exception.

    Returns None for anything that is not an API error, or when the error body
    carries no message.
    """
    if not isinstance(exc, openai.APIError):
        return None
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        nested = body.get("error")
        if isinstance(nested, dict) and nested.get("message"):
            return str(nested["message"])
        if body.get("message"):
            return str(body["message"])
    return getattr(exc, "message", None) or None
