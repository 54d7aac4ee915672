"""Language-model interface and JSON payload extraction."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Literal

JSON_ONLY_INSTRUCTION = (
    "Respond with valid JSON only. Do not add any explanation or text outside the JSON object."
)

_FENCED_JSON_RE = re.compile(r"```json\s*\n?([\s\S]*?)\n?```", re.IGNORECASE)
_FENCED_ANY_RE = re.compile(r"```[\w+-]*[ \t]*\n?([\s\S]*?)\n?```")


class LLMError(Exception):
    """Raised when the language model is unavailable or returns unusable output."""


@dataclass(slots=True)
class ChatMessage:
    """One turn of a chat transcript."""
    role: Literal["user", "model"]
    content: str


def extract_json_payload(text: str) -> str:
    """Return the body of the first fenced code block, preferring ```json, else the raw text."""
    match = _FENCED_JSON_RE.search(text) or _FENCED_ANY_RE.search(text)
    if match and match.group(1).strip():
        return match.group(1).strip()
    return text.strip()


def _reject_constant(name: str) -> Any:
    raise LLMError(f"Language model response contains a non-JSON constant: {name}")


def parse_json_payload(text: str) -> Any:
    """Parse model output as strict JSON without attempting any repair.

    ``NaN`` and ``Infinity`` are rejected even though ``json.loads`` accepts them.
    """
    payload = extract_json_payload(text)
    try:
        return json.loads(payload, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise LLMError("Could not parse the language model response as JSON") from exc


class BaseLanguageModel:
    """Abstract language-model interface used by the recommendation engine."""
    name: str = "base"

    async def generate_text(self, prompt: str) -> str:
        """Return the model's text completion for a single prompt."""
        raise NotImplementedError

    async def chat(self, history: list[ChatMessage]) -> str:
        """Replay history and return the reply to its final user message."""
        raise NotImplementedError

    async def generate_json(self, prompt: str) -> Any:
        """Ask for a JSON-only answer and parse it."""
        text = await self.generate_text(f"{prompt}\n\n{JSON_ONLY_INSTRUCTION}")
        return parse_json_payload(text)
