"""End-to-end user lifecycle against an in-memory fake of the service.

The fake speaks the service's HTTP conventions (bearer auth, refresh via
``POST /login``, list envelopes) so the whole client stack runs unmodified
on top of ``httpx.MockTransport``.
"""

import json
import random
from unittest.mock import MagicMock

import httpx
import pytest

from point_api import ApiClient, Settings
from point_api.example_flow import run_flow


class FakePointService:
    """Minimal stateful stand-in for the Point API."""

    def __init__(self):
        self.users = {}
        self.valid_tokens = set()
        self.refresh_tokens = {}
        self.counter = 0
        self.calls = []

    def issue(self):
        self.counter += 1
        token = f"access-{self.counter}"
        self.valid_tokens.add(token)
        return token

    def expire_all(self):
        self.valid_tokens.clear()

    def authorized(self, request):
        header = request.headers.get("Authorization", "")
        return header.startswith("Bearer ") and header[7:] in self.valid_tokens

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else {}
        key = (request.method, request.url.path)
        self.calls.append(key)

        if key == ("POST", "/register"):
            if any(u["email"] == body["email"] for u in self.users.values()):
                return httpx.Response(409, json={"message": "User already exists"})
            user_id = len(self.users) + 1
            self.users[user_id] = {"id": user_id, "login": body["login"], **body}
            return httpx.Response(200, json={"id": user_id, "login": body["login"]})

        if key == ("POST", "/register/check"):
            ok = body.get("code") == "1234"
            return httpx.Response(200 if ok else 400, json={"ok": ok})

        if key == ("POST", "/login"):
            if "refresh" in body:
                user_id = self.refresh_tokens.get(body["refresh"])
                if user_id is None:
                    return httpx.Response(401, json={"message": "bad refresh"})
                return httpx.Response(200, json={"token": self.issue()})
            user = next(
                (u for u in self.users.values() if u["email"] == body.get("email")), None
            )
            if user is None or user["password"] != body.get("password"):
                return httpx.Response(401, json={"message": "bad credentials"})
            refresh = f"refresh-{user['id']}"
            self.refresh_tokens[refresh] = user["id"]
            return httpx.Response(
                200,
                json={"id": user["id"], "token": self.issue(), "refresh": refresh},
            )

        if key == ("POST", "/login/refresh"):
            user_id = self.refresh_tokens.get(body.get("refresh"))
            if user_id is None:
                return httpx.Response(401, json={"message": "bad refresh"})
            return httpx.Response(200, json={"token": self.issue()})

        if not self.authorized(request):
            return httpx.Response(401, json={"message": "token expired"})

        if key == ("GET", "/users"):
            rows = [{"id": u["id"], "login": u["login"]} for u in self.users.values()]
            limit = int(request.url.params.get("_limit", len(rows)))
            return httpx.Response(200, json={"total": len(rows), "data": rows[:limit]})

        if key == ("GET", "/users/me"):
            return httpx.Response(200, json={"id": 1})

        if request.url.path.startswith("/users/"):
            user_id = int(request.url.path.rsplit("/", 1)[1])
            if user_id not in self.users:
                return httpx.Response(404, json={"message": "not found"})
            if request.method == "DELETE":
                del self.users[user_id]
                return httpx.Response(200, json={"deleted": user_id})
            user = self.users[user_id]
            return httpx.Response(200, json={"total": 1, "data": [{"id": user_id, "login": user["login"]}]})

        return httpx.Response(404, json={"message": "no route"})


@pytest.fixture
def service():
    return FakePointService()


@pytest.fixture
def client_for(service, fake_sleep):
    def _make(**kwargs):
        return ApiClient(
            "https://api.test.point.study",
            settings=Settings(),
            transport=httpx.MockTransport(service),
            sleep=fake_sleep,
            rng=random.Random(0),
            **kwargs,
        )

    return _make


@pytest.mark.integration
@pytest.mark.asyncio
async def test_example_flow_runs_to_completion(service, client_for, capsys):
    async with client_for() as client:
        await run_flow(client, "me@example.com", "me", "pw", ask=lambda prompt: "1234\n")

    assert ("DELETE", "/users/1") in service.calls
    assert service.users == {}
    # Duplicate registration is reported, not raised
    assert service.calls.count(("POST", "/register")) == 2
    out = capsys.readouterr().out
    assert "User already exists" in out
    assert "not found" in out


@pytest.mark.integration
@pytest.mark.asyncio
async def test_expired_session_is_renewed_transparently(service, client_for):
    tokens = []
    on_error = MagicMock()

    async with client_for(on_token_update=tokens.append, on_token_error=on_error) as client:
        await client.register_new_user({"email": "a@b.c", "login": "a", "password": "pw"})
        await client.login({"email": "a@b.c", "password": "pw"})

        service.expire_all()
        page = await client.get_users({"_limit": 1})

    assert page == {"total": 1, "data": [{"id": 1, "login": "a"}]}
    assert tokens == ["access-1", "access-2"]
    assert client.token == "access-2"
    assert client.refresh_token == "refresh-1"
    on_error.assert_not_called()
    assert service.calls[-3:] == [("GET", "/users"), ("POST", "/login"), ("GET", "/users")]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_revoked_refresh_token_reports_error(service, client_for):
    on_error = MagicMock()

    async with client_for(on_token_error=on_error) as client:
        await client.register_new_user({"email": "a@b.c", "login": "a", "password": "pw"})
        await client.login({"email": "a@b.c", "password": "pw"})

        service.expire_all()
        service.refresh_tokens.clear()
        result = await client.get_me_in_users()

    assert result == {"message": "token expired"}
    on_error.assert_called_once_with()
