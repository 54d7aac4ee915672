"""Language-model clients used by the recommendation engine."""

from __future__ import annotations

from app.core.config import settings
from app.llm.base import BaseLanguageModel, ChatMessage, LLMError
from app.llm.gemini_client import GeminiClient

_CLIENT: BaseLanguageModel | None = None


def get_llm_client() -> BaseLanguageModel:
    """Return the process-wide model client, built from settings on first use."""
    global _CLIENT
    if _CLIENT is None:
        _CLIENT = GeminiClient(api_key=settings.gemini_api_key, model=settings.gemini_model)
    return _CLIENT


__all__ = ["BaseLanguageModel", "ChatMessage", "GeminiClient", "LLMError", "get_llm_client"]
