"""Gemini API adapter - HTTP client for text generation."""

import logging

import requests

API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-flash"

logger = logging.getLogger(__name__)


class GeminiError(RuntimeError):
    """Raised when a Gemini request fails."""

    pass


class GeminiService:
    """
    Gemini REST adapter.

    Implements LLMService protocol. When a response schema is given the
    model is asked for JSON matching it. No business logic - just I/O.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        system_instruction: str = "",
        response_schema: dict | None = None,
        timeout: int = 60,
        session: requests.Session | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.system_instruction = system_instruction
        self.response_schema = response_schema
        self.timeout = timeout
        self._session = session or requests.Session()

    def _build_payload(self, prompt: str) -> dict:
        payload: dict = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        if self.system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": self.system_instruction}]}
        if self.response_schema:
            payload["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": self.response_schema,
            }
        return payload

    def generate(self, prompt: str) -> str:
        """Generate text from a prompt. Returns complete response."""
        if not self.api_key:
            raise GeminiError("Gemini API key is not configured")

        try:
            resp = self._session.post(
                f"{API_BASE}/models/{self.model}:generateContent",
                headers={"x-goog-api-key": self.api_key},
                json=self._build_payload(prompt),
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise GeminiError(f"Gemini request timed out after {self.timeout}s")
        except requests.RequestException as e:
            raise GeminiError(f"Gemini request failed: {e}")

        if resp.status_code != 200:
            logger.error(f"Gemini API error {resp.status_code}: {resp.text}")
            raise GeminiError(f"Gemini API error {resp.status_code}: {resp.text}")

        return self._extract_text(resp.json())

    @staticmethod
    def _extract_text(data) -> str:
        if not isinstance(data, dict):
            raise GeminiError("Unexpected Gemini response")

        candidates = data.get("candidates") or []
        if not isinstance(candidates, list):
            raise GeminiError("Unexpected Gemini response")
        if not candidates:
            raise GeminiError("No response from Gemini")

        candidate = candidates[0]
        content = candidate.get("content") if isinstance(candidate, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not all(isinstance(p, dict) for p in parts):
            raise GeminiError("Unexpected Gemini response")

        text = "".join(str(p.get("text", "")) for p in parts)
        if not text:
            raise GeminiError("No response from Gemini")
        return text
