import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from aad_group_removal.config import ActionSettings


class FakeResponse:
    def __init__(self, status=200, json_body=None, text_body="", reason=None):
        self.status = status
        self.reason = reason or {200: "OK", 204: "No Content", 401: "Unauthorized", 403: "Forbidden",
                                 404: "Not Found", 429: "Too Many Requests"}.get(status, "Error")
        self._json = json_body
        self._text = text_body

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def json(self):
        return self._json

    async def text(self):
        return self._text


class FakeSession:
    """Replays queued responses and records every request made."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.requests = []
        self.closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    def _next(self, method, url, **kwargs):
        self.requests.append({"method": method, "url": str(url), **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected {method} {url}")
        return self.responses.pop(0)

    def get(self, url, **kwargs):
        return self._next("GET", url, **kwargs)

    def delete(self, url, **kwargs):
        return self._next("DELETE", url, **kwargs)

    def post(self, url, **kwargs):
        return self._next("POST", url, **kwargs)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def settings():
    return ActionSettings(
        environment={"ADDRESS": "https://graph.microsoft.com/"},
        secrets={"BEARER_AUTH_TOKEN": "test-token-123456"},
    )


@pytest.fixture
def make_response():
    return FakeResponse
