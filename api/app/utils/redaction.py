"""Mask credentials before upstream errors reach the logs."""

from __future__ import annotations

import re

# Database URLs may carry user:password.
_URL_USERINFO_RE = re.compile(r"([a-z][a-z0-9+.-]*://)([^@/]+)@", re.IGNORECASE)
# Gemini REST calls pass the API key as ?key=...
_QUERY_KEY_RE = re.compile(r"(?i)\b(key|api_key|access_token)=([^&\s]+)")
_BEARER_RE = re.compile(r"(?i)(bearer\s+)([A-Za-z0-9._~-]+)")
_GOOGLE_KEY_RE = re.compile(r"AIza[0-9A-Za-z_-]{20,}")


def redact_secrets(text: str) -> str:
    """Replace API keys, bearer tokens and URL credentials with ``***``."""
    if not text:
        return text
    redacted = _URL_USERINFO_RE.sub(r"\1***@", text)
    redacted = _QUERY_KEY_RE.sub(r"\1=***", redacted)
    redacted = _BEARER_RE.sub(r"\1***", redacted)
    return _GOOGLE_KEY_RE.sub("***", redacted)
