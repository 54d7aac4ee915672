"""Small text helpers shared by the API and the console client."""

from __future__ import annotations

import re

_TAG_SPLIT_RE = re.compile(r"[,，、\s]+")


def parse_tags(text: str) -> list[str]:
    """Split free text on commas or whitespace into tags, dropping leading '#'."""
    tags = (part.strip().lstrip("#") for part in _TAG_SPLIT_RE.split(text or ""))
    return [tag for tag in tags if tag]


def clean_tags(values: list[str] | None) -> list[str]:
    """Trim tags, drop blanks, and remove duplicates keeping first occurrence."""
    seen: dict[str, None] = {}
    for value in values or []:
        cleaned = value.strip()
        if cleaned and cleaned not in seen:
            seen[cleaned] = None
    return list(seen)


def format_match_score(score: float) -> str:
    """Render a model score in [0, 1] as a percentage string."""
    return f"{round(score * 100)}%"
