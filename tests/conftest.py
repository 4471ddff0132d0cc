"""Shared fixtures: a fake Gemini client injected into the app factory."""
import pytest

from main import create_app


def gemini_reply(text):
    """Raw REST reply shape."""
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


class FakeGeminiClient:
    """Stands in for GeminiClient; records every payload it is asked to send."""

    model = "gemini-test"

    def __init__(self, reply=None, error=None):
        self.reply = reply if reply is not None else gemini_reply("fake answer")
        self.error = error
        self.payloads = []

    def generate(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.reply

    def close(self):
        pass


@pytest.fixture
def fake_client():
    return FakeGeminiClient()


@pytest.fixture
def app(fake_client):
    app = create_app(gemini_client=fake_client)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    with app.test_client() as client:
        yield client
