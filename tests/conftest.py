import io
import time
import urllib.error

import pytest

QUAKE_BODY = (
    '{"features":[{"properties":{"title":"M 7.1 - offshore",'
    '"time":1393290141440,"tsunami":1}}]}'
)


class FakeResponse:
    """Stands in for the object returned by OpenerDirector.open()"""

    def __init__(self, body: bytes = b"", status: int = 200, read_error=None):
        self.body = body
        self.status = status
        self.read_error = read_error
        self.close_count = 0

    def getheaders(self):
        return [("Content-Type", "application/json")]

    def read(self):
        if self.read_error is not None:
            raise self.read_error
        return self.body

    def close(self):
        self.close_count += 1


class CountingHTTPError(urllib.error.HTTPError):
    def __init__(self, url: str, code: int):
        super().__init__(url, code, "error", None, io.BytesIO(b"bad request"))  # type: ignore[arg-type]
        self.close_count = 0

    def close(self):
        self.close_count += 1
        super().close()


class FakeOpener:
    """Records the request and replays a canned response or exception"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.timeouts = []

    def open(self, req, timeout=None):
        self.requests.append(req)
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return self.response


class FakeFetcher:
    def __init__(self, body: str = "", error=None, gate=None):
        self.body = body
        self.error = error
        self.gate = gate
        self.calls = 0

    def fetch(self) -> str:
        self.calls += 1
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.body


@pytest.fixture
def utc(monkeypatch):
    """Pin the local timezone to UTC"""
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
