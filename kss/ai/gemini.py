"""Minimal async client for the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import Any

import httpx

from kss.constants.defaults import GEMINI_MODEL_DEFAULT
from kss.constants.timeouts import GEMINI_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

API_KEY_ENV = "GEMINI_API_KEY"
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)


class ExplainError(RuntimeError):
    """The AI request failed or returned an unusable response."""


class NoCandidatesError(ExplainError):
    """The AI response carried no candidate text."""

    def __init__(self) -> None:
        super().__init__(
            "AI returned no candidates. This might be due to Safety Settings or an invalid prompt"
        )


def api_key_from_env(environ: Mapping[str, str] | None = None) -> str:
    env = os.environ if environ is None else environ
    return env.get(API_KEY_ENV, "")


def build_request_body(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "safetySettings": [
            {"category": category, "threshold": "BLOCK_NONE"}
            for category in SAFETY_CATEGORIES
        ],
    }


def extract_text(payload: Any) -> str:
    """Return ``candidates[0].content.parts[0].text`` or raise NoCandidatesError."""
    if not isinstance(payload, dict):
        raise ExplainError("Error decoding AI response: unexpected payload")
    candidates = payload.get("candidates") or []
    if not candidates:
        raise NoCandidatesError()
    if not isinstance(candidates, list) or not isinstance(candidates[0], dict):
        raise ExplainError("Error decoding AI response: malformed candidate")
    content = candidates[0].get("content") or {}
    if not isinstance(content, dict):
        raise ExplainError("Error decoding AI response: malformed content")
    parts = content.get("parts") or []
    if not parts:
        raise NoCandidatesError()
    if not isinstance(parts, list) or not isinstance(parts[0], dict):
        raise ExplainError("Error decoding AI response: malformed content parts")
    return str(parts[0].get("text") or "")


class GeminiClient:
    """Sends one prompt per call and returns the first candidate's text."""

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL_DEFAULT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self._http_client = http_client

    async def explain(self, prompt: str) -> str:
        url = GEMINI_URL.format(model=self.model)
        if self._http_client is not None:
            return await self._post(self._http_client, url, prompt)
        async with httpx.AsyncClient(timeout=GEMINI_REQUEST_TIMEOUT) as client:
            return await self._post(client, url, prompt)

    async def _post(self, client: httpx.AsyncClient, url: str, prompt: str) -> str:
        logger.debug("Requesting explanation from %s", self.model)
        try:
            response = await client.post(
                url,
                params={"key": self.api_key},
                json=build_request_body(prompt),
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ExplainError(f"Error calling AI API: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise ExplainError(f"Error decoding AI response: {exc}") from exc
        return extract_text(payload)


__all__ = [
    "API_KEY_ENV",
    "ExplainError",
    "GeminiClient",
    "NoCandidatesError",
    "api_key_from_env",
    "build_request_body",
    "extract_text",
]
