from __future__ import annotations

import logging
from types import SimpleNamespace

import pytest

from app.llm.base import ChatMessage, LLMError
from app.llm.gemini_client import GeminiClient

LEAKED_KEY = "AIzaSyA1234567890abcdefghijklmnop"


class FakeModels:
    def __init__(self, text: str | None = None, error: Exception | None = None) -> None:
        self.text = text
        self.error = error
        self.calls: list[dict] = []

    async def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


class FakeChat:
    def __init__(self, history) -> None:
        self.history = history
        self.sent: list[str] = []

    async def send_message(self, message: str):
        self.sent.append(message)
        return SimpleNamespace(text="Sounds like a plan!")


class FakeChats:
    def __init__(self) -> None:
        self.created: list[FakeChat] = []

    def create(self, *, model: str, history):
        chat = FakeChat(history)
        self.created.append(chat)
        return chat


def _client_with(models: FakeModels | None = None, chats: FakeChats | None = None) -> GeminiClient:
    client = GeminiClient(api_key="test-key", model="gemini-test")
    client._client = SimpleNamespace(aio=SimpleNamespace(models=models or FakeModels(), chats=chats or FakeChats()))
    return client


@pytest.mark.asyncio
async def test_missing_api_key_raises_llm_error():
    client = GeminiClient(api_key=None, model="gemini-test")
    with pytest.raises(LLMError):
        await client.generate_text("hello")


@pytest.mark.asyncio
async def test_generate_json_parses_fenced_response():
    models = FakeModels(text='```json\n{"recommendations": []}\n```')
    client = _client_with(models=models)

    assert await client.generate_json("Recommend food") == {"recommendations": []}
    assert models.calls[0]["model"] == "gemini-test"
    assert "valid JSON only" in models.calls[0]["contents"]


@pytest.mark.asyncio
async def test_empty_response_raises_llm_error():
    client = _client_with(models=FakeModels(text=""))
    with pytest.raises(LLMError):
        await client.generate_text("hello")


@pytest.mark.asyncio
async def test_sdk_errors_are_wrapped_and_redacted(caplog):
    error = RuntimeError(f"403 for https://generativelanguage.googleapis.com/v1?key={LEAKED_KEY}")
    client = _client_with(models=FakeModels(error=error))
    caplog.set_level(logging.ERROR, logger="app.llm.gemini")

    with pytest.raises(LLMError):
        await client.generate_text("hello")
    assert LEAKED_KEY not in caplog.text
    assert "key=***" in caplog.text


@pytest.mark.asyncio
async def test_chat_replays_history_and_sends_latest_message():
    chats = FakeChats()
    client = _client_with(chats=chats)
    history = [
        ChatMessage(role="user", content="persona"),
        ChatMessage(role="model", content="Hi!"),
        ChatMessage(role="user", content="Where should I run?"),
    ]

    assert await client.chat(history) == "Sounds like a plan!"
    chat = chats.created[0]
    assert [content.role for content in chat.history] == ["user", "model"]
    assert chat.history[0].parts[0].text == "persona"
    assert chat.sent == ["Where should I run?"]
