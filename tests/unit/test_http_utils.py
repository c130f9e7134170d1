"""Unit tests for HTTP utilities.

This module tests the httpx client factory, the response helpers and
the structured exceptions they raise.
"""

import json

import httpx
import pytest

from point_api.exceptions import APIError, ConfigurationError, PointAPIError, ResponseDecodeError
from point_api.utils.http import (
    create_http_client,
    create_limits,
    create_timeout,
    is_success,
    parse_json_body,
    raise_for_status,
)


def test_create_timeout_defaults():
    """Test timeout creation with default values."""
    timeout = create_timeout()
    assert timeout.connect == 5.0
    assert timeout.read == 30.0
    assert timeout.write == 10.0
    assert timeout.pool == 5.0


def test_create_limits_defaults():
    """Test limits creation with default values."""
    limits = create_limits()
    assert limits.max_keepalive_connections == 10
    assert limits.max_connections == 20
    assert limits.keepalive_expiry == 30.0


@pytest.mark.asyncio
async def test_create_http_client_applies_timeout():
    client = create_http_client(2.0)
    try:
        assert client.timeout.read == 2.0
        assert client.timeout.connect == 2.0
        assert client.follow_redirects is True
    finally:
        await client.aclose()


def test_parse_json_body_handles_missing_and_empty():
    assert parse_json_body(None) is None
    assert parse_json_body(httpx.Response(204)) is None
    assert parse_json_body(httpx.Response(200, text="  \n")) is None
    assert parse_json_body(httpx.Response(200, json=[1, 2])) == [1, 2]


def test_parse_json_body_truncates_long_bodies():
    with pytest.raises(ResponseDecodeError) as exc_info:
        parse_json_body(httpx.Response(500, text="x" * 2000))

    error = exc_info.value
    assert isinstance(error, APIError)
    assert len(error.response_body) == 503
    assert error.details["status_code"] == 500


def test_is_success():
    assert is_success(httpx.Response(201))
    assert not is_success(httpx.Response(302))
    assert not is_success(None)


def test_raise_for_status():
    ok = httpx.Response(200)
    assert raise_for_status(ok) is ok

    with pytest.raises(APIError) as exc_info:
        raise_for_status(httpx.Response(404, text="missing"))
    assert exc_info.value.status_code == 404
    assert exc_info.value.response_body == "missing"

    with pytest.raises(APIError, match="unreachable"):
        raise_for_status(None)


def test_error_serialization():
    error = ConfigurationError("bad url", setting="url")

    assert isinstance(error, PointAPIError)
    assert error.to_dict() == {
        "error": "CONFIGURATION_ERROR",
        "message": "bad url",
        "details": {"setting": "url"},
    }
    assert json.loads(error.to_json())["error"] == "CONFIGURATION_ERROR"


def test_base_error_defaults_code_to_class_name():
    assert PointAPIError("boom").code == "PointAPIError"
