"""Google Gemini implementation of the language-model interface.

Uses the Google Gen AI SDK (google-genai) async surface. There is no retry or
timeout handling beyond the SDK defaults: any failure is raised as LLMError
and surfaces to the caller once.
"""

from __future__ import annotations

import logging

from google import genai
from google.genai import types

from app.llm.base import BaseLanguageModel, ChatMessage, LLMError
from app.utils.redaction import redact_secrets

logger = logging.getLogger("app.llm.gemini")


class GeminiClient(BaseLanguageModel):
    """Thin async wrapper around genai.Client."""
    name = "gemini"

    def __init__(self, api_key: str | None, model: str) -> None:
        self.model = model
        self._api_key = api_key
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        """Lazily build the SDK client so a missing key only fails model calls."""
        if self._client is None:
            if not self._api_key:
                raise LLMError("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self._api_key)
            logger.info("Gemini client initialized for model %s", self.model)
        return self._client

    async def generate_text(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.aio.models.generate_content(model=self.model, contents=prompt)
        except Exception as exc:
            logger.error("Gemini generate_content failed: %s", redact_secrets(str(exc)))
            raise LLMError("Language model request failed") from exc
        return _response_text(response)

    async def chat(self, history: list[ChatMessage]) -> str:
        if not history:
            raise ValueError("Chat history must contain at least one message")
        client = self._get_client()
        *earlier, latest = history
        session = client.aio.chats.create(
            model=self.model,
            history=[
                types.Content(role=message.role, parts=[types.Part(text=message.content)])
                for message in earlier
            ],
        )
        try:
            response = await session.send_message(latest.content)
        except Exception as exc:
            logger.error("Gemini chat failed: %s", redact_secrets(str(exc)))
            raise LLMError("Language model request failed") from exc
        return _response_text(response)


def _response_text(response: types.GenerateContentResponse) -> str:
    text = response.text
    if not text:
        logger.error("Gemini returned an empty response")
        raise LLMError("Language model returned an empty response")
    return text
