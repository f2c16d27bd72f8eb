from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest

from wgapi.api.wg_api import WGAPIClient


class _FakeResponse:
    def __init__(self, text: str = '{"status": "ok"}', status_code: int = 200) -> None:
        self.text = text
        self.content = text.encode("utf-8")
        self.status_code = status_code


class _FakeSession:
    def __init__(self, response: _FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response or _FakeResponse()
        self.error = error
        self.calls: list[dict] = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> dict:
        return self.calls[-1]

    def sent_params(self) -> dict[str, str]:
        call = self.last
        query = call["data"] if call["method"] == "POST" else urlsplit(call["url"]).query
        return {key: values[0] for key, values in parse_qs(query).items()}


@pytest.fixture
def fake_session() -> _FakeSession:
    return _FakeSession()


@pytest.fixture
def client(fake_session) -> WGAPIClient:
    api = WGAPIClient("K1", "na")
    api.session = fake_session
    return api


@pytest.fixture
def make_response():
    return _FakeResponse


@pytest.fixture
def make_session():
    return _FakeSession
