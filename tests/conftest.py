"""Test fixtures: sample catalog entries, compatibility descriptors, fake HTTP objects."""

import json

import pytest

from plugin_repo.models import CompatibilityOpts, Plugin, RepositoryConfig

API_ROOT = "https://catalog.example.com/api/plugins"


class FakeResponse:
    """Stands in for aiohttp.ClientResponse in transport tests."""

    def __init__(self, status=200, body=b"", reason="OK", url=API_ROOT):
        self.status = status
        self.body = body if isinstance(body, bytes) else json.dumps(body).encode()
        self.reason = reason
        self.url = url

    @property
    def content(self):
        return self

    async def read(self):
        return self.body

    async def json(self, content_type=None):
        return json.loads(self.body)

    async def iter_chunked(self, size):
        for i in range(0, len(self.body), size):
            yield self.body[i : i + size]


class FakeRequestContext:
    """Async context manager returned by the fake `session.get`."""

    def __init__(self, response):
        self.response = response

    async def __aenter__(self):
        return self.response

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeSession:
    """
    Records GET calls and replays queued outcomes. Each outcome is either a
    FakeResponse or an exception to raise from `get`.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []
        self.closed = False

    def get(self, url, headers=None, **kwargs):
        self.calls.append({"url": url, "headers": headers or {}, **kwargs})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return FakeRequestContext(outcome)

    async def close(self):
        self.closed = True


@pytest.fixture
def linux_amd64():
    return CompatibilityOpts(os="linux", arch="amd64")


@pytest.fixture
def darwin_arm64():
    return CompatibilityOpts(os="darwin", arch="arm64")


@pytest.fixture
def config():
    """Config with fast retries so tests never wait on backoff."""
    return RepositoryConfig(
        repo_url=API_ROOT, api_root=API_ROOT, max_attempts=3, base_delay=0
    )


@pytest.fixture
def foo_catalog():
    """Catalog body for plugin "foo": newest has an "any" build, oldest no arch."""
    return {
        "id": "foo",
        "versions": [
            {"version": "2.0.0", "arch": {"any": {"sha256": "abc"}}},
            {"version": "1.0.0", "arch": None},
        ],
    }


@pytest.fixture
def native_plugin():
    """A plugin whose newest version only ships a darwin build."""
    return Plugin.model_validate(
        {
            "id": "native-panel",
            "versions": [
                {
                    "version": "3.0.0",
                    "arch": {"darwin_arm64": {"sha256": "d3"}},
                },
                {
                    "version": "2.1.0",
                    "arch": {
                        "linux_amd64": {"sha256": "l21"},
                        "darwin_arm64": {"sha256": "d21"},
                    },
                },
                {
                    "version": "2.0.0",
                    "arch": {"windows_amd64": {"sha256": "w20"}},
                },
                {"version": "1.0.0", "arch": {"any": {"sha256": "a10"}}},
            ],
        }
    )
