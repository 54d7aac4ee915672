"""Datetime helpers for display in the console client."""

from __future__ import annotations

from datetime import datetime, timezone


def format_relative_time(value: datetime, now: datetime | None = None) -> str:
    """Render a timestamp as "just now", "5m ago", ... falling back to the ISO date after a week."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = (now - value).total_seconds()
    minutes = int(seconds // 60)
    hours = int(seconds // 3600)
    days = int(seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days < 7:
        return f"{days}d ago"
    return value.date().isoformat()
