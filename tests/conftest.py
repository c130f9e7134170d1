import os
import random
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import httpx
import pytest
import pytest_asyncio

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from point_api.client import ApiClient  # noqa: E402
from point_api.config.settings import Settings, reset_settings  # noqa: E402

BASE_URL = "https://api.test.point.study"


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    # Add custom markers for test organization
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line("markers", "auth: mark test as testing authentication")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate every test from POINT_API_* variables and stray .env files."""
    for name in list(os.environ):
        if name.upper().startswith("POINT_API_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


class ScriptedHandler:
    """``httpx.MockTransport`` handler replaying queued outcomes.

    Each outcome is an ``httpx.Response``, an exception to raise, or a
    callable taking the request and returning either of those. When the
    queue is empty ``default`` is used; every request is recorded.
    """

    def __init__(self, outcomes: Optional[List[Any]] = None, default: Optional[Callable] = None):
        self.outcomes = list(outcomes or [])
        self.default = default or (lambda request: httpx.Response(200, json={}))
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        outcome = self.outcomes.pop(0) if self.outcomes else self.default
        if callable(outcome):
            outcome = outcome(request)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


class RecordingSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records durations."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def handler():
    """Scripted HTTP handler answering ``{}`` with 200 by default."""
    return ScriptedHandler()


@pytest.fixture
def fake_sleep():
    """Recording sleep so retry tests run instantly."""
    return RecordingSleep()


@pytest_asyncio.fixture
async def make_client(handler, fake_sleep):
    """Factory building an :class:`ApiClient` wired to the scripted handler."""
    created: List[ApiClient] = []

    def _make(
        token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        on_token_update: Optional[Callable] = None,
        on_token_error: Optional[Callable] = None,
        url: str = BASE_URL,
        **settings_overrides: Any,
    ) -> ApiClient:
        client = ApiClient(
            url,
            token=token,
            refresh_token=refresh_token,
            on_token_update=on_token_update,
            on_token_error=on_token_error,
            settings=Settings(**settings_overrides),
            transport=httpx.MockTransport(handler),
            sleep=fake_sleep,
            rng=random.Random(1234),
        )
        created.append(client)
        return client

    yield _make

    for client in created:
        await client.aclose()
