"""Shared helpers for API tests."""

from __future__ import annotations

import json
from typing import Any

from httpx import AsyncClient

from app.llm.base import BaseLanguageModel, ChatMessage

DEFAULT_RECOMMENDATIONS = {
    "recommendations": [
        {"name": "Kimchi stew", "reason": "You love Korean food", "score": 0.93},
        {"name": "Dolsot bibimbap", "reason": "A hot take on your favourite", "score": 0.88, "details": "Ask for extra gochujang"},
        {"name": "Naengmyeon", "reason": "Something cold for a change", "score": 0.71},
    ]
}


class StubLanguageModel(BaseLanguageModel):
    """Returns canned text and remembers every prompt it was given."""
    name = "stub"

    def __init__(self, response: str | None = None, reply: str = "Try the new ramen place nearby!") -> None:
        self.response = response if response is not None else fenced_json(DEFAULT_RECOMMENDATIONS)
        self.reply = reply
        self.prompts: list[str] = []
        self.chats: list[list[ChatMessage]] = []

    @property
    def calls(self) -> int:
        return len(self.prompts) + len(self.chats)

    async def generate_text(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.response

    async def chat(self, history: list[ChatMessage]) -> str:
        self.chats.append(list(history))
        return self.reply


def fenced_json(payload: Any) -> str:
    return f"Here you go:\n```json\n{json.dumps(payload)}\n```"


async def create_profile(client: AsyncClient, **overrides: Any) -> dict[str, Any]:
    """Create the active profile through the API and return its data."""
    payload: dict[str, Any] = {"name": "Alice", "location": "Seoul", "preferences": {"food": ["korean"]}}
    payload.update(overrides)
    response = await client.post("/api/profile", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def create_record(client: AsyncClient, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {"type": "food", "title": "Bibimbap", "rating": 5}
    payload.update(overrides)
    response = await client.post("/api/records", json=payload)
    assert response.status_code == 200, response.text
    return response.json()["data"]
