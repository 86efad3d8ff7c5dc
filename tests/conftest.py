"""Shared fixtures: an in-memory stand-in for requests.Session."""

import io
import json as jsonlib

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from regpull.modules.auth import RegistryTransport


def make_response(status=200, body=b"", headers=None, json=None, url=""):
    """Build a real requests.Response over an in-memory body."""
    if json is not None:
        body = jsonlib.dumps(json).encode()
    resp = requests.Response()
    resp.status_code = status
    resp.raw = io.BytesIO(body)
    resp.headers = CaseInsensitiveDict(headers or {})
    resp.url = url
    return resp


class FakeSession:
    """Routes GETs to queued responses, keyed by URL prefix."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.closed = False

    def add(self, url, *responses):
        self.routes.setdefault(url, []).extend(responses)

    def get(self, url, headers=None, **kwargs):
        self.calls.append({"url": url, "headers": dict(headers or {}), **kwargs})
        for prefix, queue in self.routes.items():
            if url.startswith(prefix) and queue:
                resp = queue.pop(0)
                if isinstance(resp, Exception):
                    raise resp
                return resp
        raise AssertionError(f"unexpected GET {url}")

    def urls(self):
        return [c["url"] for c in self.calls]

    def close(self):
        self.closed = True


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def transport(session) -> RegistryTransport:
    return RegistryTransport(session=session, timeout=None, verify=True)
