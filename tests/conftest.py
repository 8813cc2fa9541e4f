import httpx
import pytest

from helperkit.config import Config


class Recorder:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, status_code: int = 200, content: bytes = b"ok", headers=None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content, headers=self.headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in Config.ENV_MAPPINGS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "http:\n"
        "  user_agent: helperkit-tests/1.0\n"
        "  timeout: null\n"
        "  follow_redirects: true\n"
        "  max_redirects: 10\n"
    )
    return Config(str(path))


@pytest.fixture
def recorder():
    return Recorder(content=b"response body")
