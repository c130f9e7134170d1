"""Response helpers shared by the verb helpers and resource methods.

The pipeline hands back ``Optional[httpx.Response]``; these helpers turn
that into parsed JSON and let callers classify or raise on statuses
without the core ever raising on its own.
"""

import json
import logging
from typing import Any, Optional

import httpx

from ...exceptions import APIError, ResponseDecodeError

logger = logging.getLogger(__name__)


def parse_json_body(response: Optional[httpx.Response]) -> Any:
    """Return the parsed JSON body of ``response``.

    :param response: Final response of a logical call, or None when the
        transport gave up
    :type response: Optional[httpx.Response]
    :return: Parsed JSON, or None for a missing response or empty body
    :rtype: Any
    :raises ResponseDecodeError: If the body is not valid JSON
    """
    if response is None:
        return None
    if not response.content or not response.content.strip():
        return None
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning(
            "Response with status %d is not JSON", response.status_code
        )
        raise ResponseDecodeError(
            f"Response body is not valid JSON: {e}",
            status_code=response.status_code,
            response_body=response.text,
        ) from e


def is_success(response: Optional[httpx.Response]) -> bool:
    """Check if the response indicates success (2xx status code).

    :param response: Response to check
    :type response: Optional[httpx.Response]
    :return: True if a response exists and its status is in 200-299
    :rtype: bool
    """
    return response is not None and 200 <= response.status_code < 300


def raise_for_status(response: Optional[httpx.Response]) -> httpx.Response:
    """Raise :class:`APIError` for a missing or non-2xx response.

    Opt-in for callers that prefer exceptions over inspecting data.

    :param response: Response returned by the pipeline
    :type response: Optional[httpx.Response]
    :return: The response, when successful
    :rtype: httpx.Response
    :raises APIError: If the service was unreachable or returned an error
    """
    if response is None:
        raise APIError("Service unreachable after retries")
    if not is_success(response):
        raise APIError(
            f"Request failed with status {response.status_code}",
            status_code=response.status_code,
            response_body=response.text,
        )
    return response
