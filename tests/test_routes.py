"""Tests for the /api routes and the application factory."""
import io
import logging

import pytest
import requests

from main import create_app
from chat_relay.core import config
from chat_relay.core.errors import ConfigurationError, ProviderFailure, ProviderTimeout
from chat_relay.services.gemini_client import GeminiClient


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.get_json()
    assert data["status"] == "ok"
    assert data["model"] == "gemini-test"


def test_index_page(client):
    """GET / serves the chat page."""
    response = client.get("/")
    assert response.status_code == 200
    assert b"chat-form" in response.data
    response.close()


def test_missing_api_key_is_fatal(monkeypatch):
    """Without a key the factory refuses to build the app."""
    monkeypatch.setattr(config, "GEMINI_API_KEY", "")
    with pytest.raises(ConfigurationError):
        create_app()


def test_chat_messages(client, fake_client):
    """A chat history is relayed as one content per message."""
    messages = [
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
        {"role": "user", "content": "What is base64?"},
    ]
    response = client.post("/api/chat", json={"messages": messages})
    assert response.status_code == 200
    assert response.get_json() == {"result": "fake answer"}

    payload = fake_client.payloads[0]
    assert [c.role for c in payload.contents] == ["user", "model", "user"]
    assert [c.parts[0].text for c in payload.contents] == ["Hi", "Hello!", "What is base64?"]


def test_chat_empty_messages(client, fake_client):
    """Empty messages array is rejected before the provider is called."""
    response = client.post("/api/chat", json={"messages": []})
    assert response.status_code == 400
    assert "messages" in response.get_json()["error"]
    assert fake_client.payloads == []


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"messages": "hello"},
        {"messages": [{"role": "user"}]},
        {"messages": [{"role": "user", "content": "   "}]},
        {"messages": [{"role": "robot", "content": "hi"}]},
        {"messages": ["hi"]},
    ],
)
def test_chat_invalid_messages(client, body):
    response = client.post("/api/chat", json=body)
    assert response.status_code == 400
    assert "error" in response.get_json()


def test_chat_multipart_prompt_only(client, fake_client):
    response = client.post("/api/chat", data={"prompt": "Tell me a joke"})
    assert response.status_code == 200

    payload = fake_client.payloads[0]
    assert len(payload.contents) == 1
    assert payload.contents[0].parts[0].text == "Tell me a joke"
    assert payload.attachments == []


def test_chat_multipart_with_file(client, fake_client):
    data = {"prompt": "", "file": (io.BytesIO(b"%PDF-1.4 test"), "notes.pdf", "application/pdf")}
    response = client.post("/api/chat", data=data, content_type="multipart/form-data")
    assert response.status_code == 200

    parts = fake_client.payloads[0].contents[0].parts
    assert parts[0].text == config.DEFAULT_FILE_PROMPT
    assert parts[1].attachment.mime_type == "application/pdf"
    assert parts[1].attachment.data == b"%PDF-1.4 test"


def test_chat_multipart_empty(client):
    """Neither prompt nor file."""
    response = client.post("/api/chat", data={}, content_type="multipart/form-data")
    assert response.status_code == 400


def test_chat_provider_failure(client, fake_client):
    """Provider errors become a generic 500; details stay in the log."""
    fake_client.error = ProviderFailure("Gemini returned HTTP 403: API key not valid")
    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert response.status_code == 500
    error = response.get_json()["error"]
    assert error == ProviderFailure.public_message
    assert "403" not in error


def test_chat_provider_timeout(client, fake_client):
    fake_client.error = ProviderTimeout("Gemini did not respond within 60s")
    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert response.status_code == 500


def test_chat_unexpected_error(client, fake_client):
    fake_client.error = requests.exceptions.ConnectionError("boom")
    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert response.status_code == 500
    assert response.get_json()["error"] == ProviderFailure.public_message


def test_chat_unrecognized_response_not_leaked(client, fake_client):
    """A reply without text yields 500 and never echoes the raw reply."""
    fake_client.reply = {"promptFeedback": {"blockReason": "SAFETY", "secret": "internal-detail"}}
    response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})
    assert response.status_code == 500
    assert b"internal-detail" not in response.data


def test_malformed_setting_is_fatal(monkeypatch):
    monkeypatch.setattr(config, "GEMINI_API_KEY", "env-key")
    monkeypatch.setattr(config, "GEMINI_TEMPERATURE", "hot")
    with pytest.raises(ConfigurationError):
        create_app()


def test_chat_multipart_empty_file_field(client, fake_client):
    """Browsers send an empty file part when nothing was picked; that means no file."""
    data = {"prompt": "hello", "file": (io.BytesIO(b""), "")}
    response = client.post("/api/chat", data=data, content_type="multipart/form-data")
    assert response.status_code == 200

    payload = fake_client.payloads[0]
    assert payload.attachments == []
    assert payload.contents[0].parts[0].text == "hello"


def test_provider_failure_logged_with_traceback(client, fake_client, caplog):
    fake_client.error = ProviderFailure("Gemini returned HTTP 403: API key not valid")
    with caplog.at_level(logging.INFO):
        response = client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert response.get_json() == {"error": ProviderFailure.public_message}
    records = [r for r in caplog.records if r.name == "chat_relay.api.responses"]
    assert len(records) == 1
    assert records[0].levelno == logging.ERROR
    assert records[0].exc_info is not None
    assert "HTTP 403: API key not valid" in records[0].getMessage()


class RejectingSession:
    """requests-like session whose provider rejects the call."""

    def post(self, url, json=None, headers=None, timeout=None):
        resp = requests.Response()
        resp.status_code = 403
        resp._content = b'{"error": {"code": 403, "message": "Permission denied"}}'
        resp.encoding = "utf-8"
        return resp

    def close(self):
        pass


def test_api_key_never_logged(caplog):
    secret = "AIza-secret-test-key-123"
    gemini_client = GeminiClient(api_key=secret, model="gemini-test", session=RejectingSession())
    app = create_app(gemini_client=gemini_client)

    with caplog.at_level(logging.DEBUG):
        with app.test_client() as client:
            client.post("/generate-text", json={"prompt": "hello"})
            client.post("/api/chat", json={"messages": [{"role": "user", "content": "Hi"}]})

    assert "Permission denied" in caplog.text
    assert secret not in caplog.text
    for record in caplog.records:
        if record.exc_info:
            assert secret not in str(record.exc_info[1])
