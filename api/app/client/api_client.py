"""Thin synchronous wrapper over the HTTP API, one method per endpoint."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.core.config import settings

logger = logging.getLogger("app.client")

DEFAULT_TIMEOUT = 60.0


class ApiError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.reason_phrase


def friendly_error(exc: Exception) -> str:
    """Turn a client failure into a message with a hint on how to fix it."""
    if isinstance(exc, ApiError):
        if exc.status_code == 404:
            return f"{exc.message} (Hint: set up your profile first with `profile set`.)"
        if exc.status_code == 503:
            return f"{exc.message} (Hint: check GEMINI_API_KEY on the server.)"
        if exc.status_code == 422:
            return "The request was rejected as invalid. Check the values you entered."
        return exc.message
    if isinstance(exc, httpx.ConnectError):
        return f"Cannot reach the API at {settings.api_base_url}. Is the server running?"
    if isinstance(exc, httpx.TimeoutException):
        return "The API took too long to respond. Try again in a moment."
    return str(exc)


class LifeAgentClient:
    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.api_base_url,
            transport=transport,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LifeAgentClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self._client.request(method, path, **kwargs)
        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return response.json()

    # Profile
    def get_profile(self) -> dict[str, Any]:
        return self._request("GET", "/api/profile")

    def update_profile(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/profile", json=data)

    def update_preferences(self, data: dict[str, list[str]]) -> dict[str, Any]:
        return self._request("PATCH", "/api/profile/preferences", json=data)

    def update_routines(self, data: dict[str, str | None]) -> dict[str, Any]:
        return self._request("PATCH", "/api/profile/routines", json=data)

    # Recommendations
    def get_recommendations(
        self,
        rec_type: str,
        *,
        context: str | None = None,
        location: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": rec_type}
        if context:
            payload["context"] = context
        if location:
            payload["location"] = location
        if limit is not None:
            payload["limit"] = limit
        return self._request("POST", "/api/recommendations", json=payload)

    def get_history(self, rec_type: str | None = None) -> dict[str, Any]:
        params = {"type": rec_type} if rec_type else None
        return self._request("GET", "/api/recommendations/history", params=params)

    def send_feedback(self, recommendation_id: str, liked: bool, reason: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"liked": liked}
        if reason:
            payload["reason"] = reason
        return self._request("POST", f"/api/recommendations/{recommendation_id}/feedback", json=payload)

    def analyze_feedback(self, recommendation_id: str, liked: bool, reason: str | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"liked": liked}
        if reason:
            payload["reason"] = reason
        return self._request(
            "POST", f"/api/recommendations/{recommendation_id}/feedback/analysis", json=payload
        )

    def get_feedback_stats(self) -> dict[str, Any]:
        return self._request("GET", "/api/recommendations/feedback/stats")

    def analyze_patterns(self) -> dict[str, Any]:
        return self._request("POST", "/api/recommendations/analysis")

    def chat(self, message: str) -> str:
        return self._request("POST", "/api/chat", json={"message": message})["reply"]

    # Records
    def get_records(
        self, *, rec_type: str | None = None, limit: int | None = None, offset: int | None = None
    ) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if rec_type:
            params["type"] = rec_type
        if limit:
            params["limit"] = limit
        if offset:
            params["offset"] = offset
        return self._request("GET", "/api/records", params=params)

    def get_record(self, record_id: str) -> dict[str, Any]:
        return self._request("GET", f"/api/records/{record_id}")

    def create_record(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("POST", "/api/records", json=data)

    def update_record(self, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._request("PATCH", f"/api/records/{record_id}", json=data)

    def delete_record(self, record_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/api/records/{record_id}")

    def get_stats(self) -> dict[str, Any]:
        return self._request("GET", "/api/records/stats/summary")
