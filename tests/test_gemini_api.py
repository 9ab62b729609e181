"""Tests for the Gemini API adapter."""

from unittest.mock import MagicMock

import pytest
import requests

from studyrank.adapters.gemini_api import API_BASE, GeminiError, GeminiService


def _response(status_code: int = 200, payload: dict | None = None, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload or {}
    resp.text = text
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def service(session):
    return GeminiService(
        api_key="secret",
        model="gemini-test",
        system_instruction="Be brief.",
        response_schema={"type": "OBJECT"},
        timeout=5,
        session=session,
    )


class TestGeminiService:
    def test_generate_posts_prompt(self, service, session):
        session.post.return_value = _response(
            payload={"candidates": [{"content": {"parts": [{"text": '{"a": '}, {"text": "1}"}]}}]}
        )

        assert service.generate("hello") == '{"a": 1}'

        args, kwargs = session.post.call_args
        assert args[0] == f"{API_BASE}/models/gemini-test:generateContent"
        assert kwargs["headers"] == {"x-goog-api-key": "secret"}
        assert kwargs["timeout"] == 5
        payload = kwargs["json"]
        assert payload["contents"][0]["parts"][0]["text"] == "hello"
        assert payload["systemInstruction"]["parts"][0]["text"] == "Be brief."
        assert payload["generationConfig"]["responseMimeType"] == "application/json"
        assert payload["generationConfig"]["responseSchema"] == {"type": "OBJECT"}

    def test_plain_payload_without_schema(self, session):
        service = GeminiService(api_key="secret", session=session)
        payload = service._build_payload("hi")
        assert "generationConfig" not in payload
        assert "systemInstruction" not in payload

    def test_missing_key(self, session):
        service = GeminiService(api_key="", session=session)
        with pytest.raises(GeminiError, match="not configured"):
            service.generate("hello")
        session.post.assert_not_called()

    def test_http_error(self, service, session):
        session.post.return_value = _response(status_code=403, text="forbidden")
        with pytest.raises(GeminiError, match="403"):
            service.generate("hello")

    def test_timeout(self, service, session):
        session.post.side_effect = requests.Timeout()
        with pytest.raises(GeminiError, match="timed out"):
            service.generate("hello")

    def test_connection_error(self, service, session):
        session.post.side_effect = requests.ConnectionError("down")
        with pytest.raises(GeminiError, match="request failed"):
            service.generate("hello")

    def test_no_candidates(self, service, session):
        session.post.return_value = _response(payload={"candidates": []})
        with pytest.raises(GeminiError, match="No response"):
            service.generate("hello")

    def test_empty_text(self, service, session):
        session.post.return_value = _response(payload={"candidates": [{"content": {"parts": []}}]})
        with pytest.raises(GeminiError, match="No response"):
            service.generate("hello")

    @pytest.mark.parametrize(
        "payload",
        [
            [],
            {"candidates": {"text": "x"}},
            {"candidates": ["not a dict"]},
            {"candidates": [{"content": "plain"}]},
            {"candidates": [{"content": {"parts": ["x"]}}]},
        ],
    )
    def test_unexpected_response_shape(self, service, session, payload):
        resp = _response()
        resp.json.return_value = payload
        session.post.return_value = resp
        with pytest.raises(GeminiError, match="Unexpected Gemini response"):
            service.generate("hello")

    def test_error_is_runtime_error(self):
        assert issubclass(GeminiError, RuntimeError)
