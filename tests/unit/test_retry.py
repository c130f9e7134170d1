"""Unit tests for the transport retrier.

Covers backoff computation, URL joining, header merging and the
retry loop against ``httpx.MockTransport``.
"""

import json
import logging
import random

import httpx
import pytest

from point_api.session import TokenSession
from point_api.utils.http.retry import TransportRetrier, compute_backoff

BASE_URL = "https://api.test.point.study"


class FixedRandom:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value


@pytest.fixture
def session():
    return TokenSession(BASE_URL)


@pytest.fixture
def make_retrier(handler, fake_sleep, session):
    def _make(session=session, **kwargs):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return TransportRetrier(
            client,
            session,
            sleep=fake_sleep,
            rng=random.Random(7),
            **kwargs,
        )

    return _make


@pytest.mark.unit
class TestComputeBackoff:
    def test_duration_within_linear_window(self):
        rng = random.Random(42)
        for attempt in range(1, 4):
            for _ in range(50):
                delay = compute_backoff(attempt, rng=rng)
                assert attempt <= delay <= attempt + 0.999

    def test_uses_rng_for_jitter(self):
        assert compute_backoff(2, rng=FixedRandom(250)) == pytest.approx(2.25)

    def test_custom_base_and_jitter(self):
        delay = compute_backoff(3, base_ms=10, jitter_ms=5, rng=FixedRandom(4))
        assert delay == pytest.approx(0.034)

    def test_rejects_attempt_zero(self):
        with pytest.raises(ValueError):
            compute_backoff(0)


@pytest.mark.unit
class TestBuildUrl:
    @pytest.mark.parametrize("endpoint", ["users", "/users", "//users"])
    def test_strip_mode_collapses_leading_slashes(self, make_retrier, endpoint):
        assert make_retrier().build_url(endpoint) == f"{BASE_URL}/users"

    def test_strip_mode_ignores_trailing_slash_on_base(self, make_retrier):
        retrier = make_retrier(session=TokenSession(BASE_URL + "/"))
        assert retrier.build_url("/users/me") == f"{BASE_URL}/users/me"

    def test_verbatim_mode_keeps_path(self, make_retrier):
        retrier = make_retrier(strip_leading_slash=False)
        assert retrier.build_url("//x") == f"{BASE_URL}//x"
        assert retrier.build_url("/x") == f"{BASE_URL}/x"
        assert retrier.build_url("x") == f"{BASE_URL}/x"

    def test_query_string_is_preserved(self, make_retrier):
        assert make_retrier().build_url("/users?_limit=2") == f"{BASE_URL}/users?_limit=2"


@pytest.mark.unit
class TestMergeHeaders:
    def test_bearer_overrides_caller_authorization(self, make_retrier, session):
        session.access_token = "abc"

        merged = make_retrier().merge_headers(
            {"authorization": "Bearer stale", "X-Trace": "1"}
        )

        assert merged == {"X-Trace": "1", "Authorization": "Bearer abc"}

    def test_no_auth_keeps_caller_headers(self, make_retrier, session):
        session.access_token = "abc"

        merged = make_retrier().merge_headers(
            {"Content-Type": "application/json"}, no_auth=True
        )

        assert merged == {"Content-Type": "application/json"}

    def test_without_token_nothing_is_added(self, make_retrier):
        assert make_retrier().merge_headers(None) == {}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_gives_up_after_four_transport_failures(make_retrier, handler, fake_sleep):
    handler.outcomes.extend(httpx.ConnectError("refused") for _ in range(4))
    retrier = make_retrier()

    response = await retrier.request("/users")
    await retrier.client.aclose()

    assert response is None
    assert len(handler.requests) == 4
    assert len(fake_sleep.calls) == 3
    for attempt, delay in enumerate(fake_sleep.calls, start=1):
        assert attempt <= delay <= attempt + 0.999


@pytest.mark.unit
@pytest.mark.asyncio
async def test_first_response_is_returned_whatever_its_status(
    make_retrier, handler, fake_sleep
):
    handler.outcomes.extend(
        [httpx.ReadTimeout("slow"), httpx.Response(503, json={"e": 1})]
    )
    retrier = make_retrier()

    response = await retrier.request("/users")
    await retrier.client.aclose()

    assert response.status_code == 503
    assert len(handler.requests) == 2
    assert len(fake_sleep.calls) == 1
    assert 1 <= fake_sleep.calls[0] <= 1.999


@pytest.mark.unit
@pytest.mark.asyncio
async def test_success_on_first_attempt_does_not_sleep(make_retrier, handler, fake_sleep):
    handler.outcomes.append(httpx.Response(200, json={"ok": True}))
    retrier = make_retrier()

    response = await retrier.request("users", {"method": "post", "json": {"a": 1}})
    await retrier.client.aclose()

    assert response.json() == {"ok": True}
    assert fake_sleep.calls == []
    assert handler.requests[0].method == "POST"
    assert json.loads(handler.requests[0].content) == {"a": 1}


@pytest.mark.unit
@pytest.mark.asyncio
async def test_each_attempt_reads_current_token(make_retrier, handler, session):
    session.access_token = "old"

    def fail_and_rotate(request):
        session.access_token = "new"
        return httpx.ConnectError("reset")

    handler.outcomes.extend([fail_and_rotate, httpx.Response(200)])
    retrier = make_retrier()

    await retrier.request("/users/me")
    await retrier.client.aclose()

    assert handler.requests[0].headers["Authorization"] == "Bearer old"
    assert handler.requests[1].headers["Authorization"] == "Bearer new"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_single_attempt_configuration_never_sleeps(make_retrier, handler, fake_sleep):
    handler.outcomes.append(httpx.ConnectError("refused"))
    retrier = make_retrier(max_attempts=1)

    assert await retrier.request("/users") is None
    await retrier.client.aclose()
    assert fake_sleep.calls == []


@pytest.mark.unit
def test_rejects_zero_attempts(make_retrier):
    with pytest.raises(ValueError):
        make_retrier(max_attempts=0)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_succeeds_on_last_attempt_after_three_failures(make_retrier, handler, fake_sleep):
    handler.outcomes.extend(
        [
            httpx.ConnectError("refused"),
            httpx.ReadTimeout("slow"),
            httpx.ConnectError("reset"),
            httpx.Response(200, json={"ok": True}),
        ]
    )
    retrier = make_retrier()

    response = await retrier.request("/users")
    await retrier.client.aclose()

    assert response.status_code == 200
    assert len(handler.requests) == 4
    assert len(fake_sleep.calls) == 3
    for attempt, delay in enumerate(fake_sleep.calls, start=1):
        assert attempt <= delay <= attempt + 0.999


class EmptyClient:
    """HTTP client stand-in that never produces a response."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = 0

    async def request(self, method, url, **kwargs):
        self.calls += 1
        return self.responses.pop(0) if self.responses else None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_response_counts_as_transport_failure(session, fake_sleep):
    client = EmptyClient([None, None, httpx.Response(204)])
    retrier = TransportRetrier(client, session, sleep=fake_sleep, rng=random.Random(1))

    response = await retrier.request("/users")

    assert response.status_code == 204
    assert client.calls == 3
    assert len(fake_sleep.calls) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_backoff_sleep_is_logged(make_retrier, handler, fake_sleep, caplog):
    handler.outcomes.extend([httpx.ConnectError("refused"), httpx.Response(200)])
    retrier = make_retrier()

    with caplog.at_level(logging.WARNING, logger="point_api.utils.http.retry"):
        await retrier.request("/users")
    await retrier.client.aclose()

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == [
        f"sleep {fake_sleep.calls[0]:.3f}s before attempt 2/4 for GET /users (ConnectError)"
    ]
