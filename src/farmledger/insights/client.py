"""Gemini API client for farm insights.

REST reference:
https://ai.google.dev/api/generate-content
"""

import logging
import os
from typing import Optional, Protocol

import requests

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"

RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "warnings": {"type": "ARRAY", "items": {"type": "STRING"}},
        "recommendations": {"type": "ARRAY", "items": {"type": "STRING"}},
    },
    "required": ["summary", "warnings", "recommendations"],
}


class InsightsError(Exception):
    """The advisor could not produce a usable reply."""


class InsightsClient(Protocol):
    """Anything that turns a prompt into raw JSON text."""

    def generate(self, prompt: str) -> str:
        ...


class GeminiClient:
    """Calls the hosted Gemini model and returns the JSON text it produced."""

    BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the client.

        Args:
            api_key: API key. If None, checks GEMINI_API_KEY then API_KEY.
            model: Model name. If None, checks FARMLEDGER_AI_MODEL.
            timeout: Request timeout in seconds
            session: Optional requests session (for connection reuse)
        """
        if api_key is None:
            api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        if model is None:
            model = os.environ.get("FARMLEDGER_AI_MODEL", DEFAULT_MODEL)

        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

        if not self.api_key:
            logger.warning("Gemini API key not configured. Insights will use the fallback reply.")

    def generate(self, prompt: str) -> str:
        """Send ``prompt`` and return the model's JSON text.

        Raises:
            InsightsError: On missing credentials, HTTP or network failure, or
                a reply without text
        """
        if not self.api_key:
            raise InsightsError("Gemini API key is not configured")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
            },
        }
        url = f"{self.BASE_URL}/{self.model}:generateContent"

        try:
            response = self.session.post(
                url,
                json=payload,
                headers={"x-goog-api-key": self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            raise InsightsError(f"Gemini request failed: {e}") from e
        except ValueError as e:
            raise InsightsError(f"Gemini returned invalid JSON: {e}") from e

        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts if isinstance(part, dict))
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise InsightsError(f"Unexpected Gemini response shape: {e}") from e

        if not text.strip():
            raise InsightsError("Gemini returned an empty reply")
        return text
