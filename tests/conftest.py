"""
Shared test fixtures for lf-cli.

HTTP is faked with a scripted session object standing in for
requests.Session; retry sleeps are recorded instead of slept.
"""

import json
from typing import Any, Dict, List, Optional

import pytest

from langfuse_cli.api import Client, Credentials, RetryPolicy, Transport
from langfuse_cli.observability import close_all_loggers

HOST = "https://langfuse.example.com"


class FakeResponse:
    """Minimal requests.Response look-alike"""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
    ):
        self.status_code = status_code
        self._body = body
        if text is not None:
            self.text = text
            self.headers = headers or {"Content-Type": "text/plain"}
        else:
            self.text = json.dumps(body) if body is not None else ""
            self.headers = headers or {"Content-Type": "application/json; charset=utf-8"}

    def json(self):
        if self._body is None:
            return json.loads(self.text)
        return self._body


class FakeSession:
    """
    Scripted stand-in for requests.Session

    Each request pops the next scripted item: a FakeResponse is returned,
    an exception instance is raised.
    """

    def __init__(self, script: Optional[List[Any]] = None):
        self.script = list(script or [])
        self.calls: List[Dict[str, Any]] = []
        self.headers: Dict[str, str] = {}
        self.auth = None
        self.closed = False

    def queue(self, *items: Any) -> "FakeSession":
        self.script.extend(items)
        return self

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.script:
            raise AssertionError(f"Unexpected request: {method} {url}")
        item = self.script.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self):
        self.closed = True


def page(records, total_pages=None, **meta):
    """Envelope body for one page of results"""
    body = {"data": records}
    if total_pages is not None:
        body["meta"] = {"totalPages": total_pages, **meta}
    return FakeResponse(200, body)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the real config file, credentials and DEBUG flag"""
    for var in (
        "LANGFUSE_PUBLIC_KEY",
        "LANGFUSE_SECRET_KEY",
        "LANGFUSE_HOST",
        "LANGFUSE_PROFILE",
        "LANGFUSE_PROJECT_NAME",
        "LANGFUSE_LOG_FILE",
        "DEBUG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("LANGFUSE_CONFIG", str(tmp_path / "config.yml"))
    yield
    close_all_loggers()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retry_policy(sleeps):
    """Default retry policy with recorded sleeps and no jitter"""
    return RetryPolicy(sleep=sleeps.append, random=lambda: 0.0)


@pytest.fixture
def credentials():
    return Credentials(host=HOST, public_key="pk-lf-1234567890", secret_key="sk-lf-abcdefghij")


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def transport(credentials, retry_policy, session):
    return Transport(credentials, retry_policy=retry_policy, session=session, debug=False)


@pytest.fixture
def client(credentials, transport):
    return Client(credentials, transport=transport)
