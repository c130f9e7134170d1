"""Structured exception classes for the Point API client.

Transport failures and non-2xx responses are returned to callers as data
(``None`` or a response carrying the status). The exceptions below cover
the remaining cases: invalid construction, undecodable bodies, and
callers that opt in to raising on error statuses.
"""

import json
from typing import Any, Dict, Optional


class PointAPIError(Exception):
    """Base exception for all Point API client errors.

    :param message: Human-readable error message
    :param code: Optional error code for programmatic handling
    :param details: Optional dictionary containing additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with message, code, and details."""
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format.

        :return: Dictionary containing error code, message, and details
        """
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Convert exception to JSON string.

        :return: JSON-encoded string representation of the exception
        """
        return json.dumps(self.to_dict())


class ConfigurationError(PointAPIError):
    """Raised when the client is constructed with invalid settings.

    :param message: Description of the configuration error
    :param setting: Optional name of the problematic setting
    """

    def __init__(self, message: str, setting: Optional[str] = None):
        """Initialize configuration error with message and optional setting."""
        details = {}
        if setting:
            details["setting"] = setting
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class APIError(PointAPIError):
    """Raised for error responses when a caller asks for it explicitly.

    The request pipeline never raises this itself; see
    :func:`point_api.utils.http.request.raise_for_status`.

    :param message: Description of the API error
    :param status_code: Optional HTTP status code from the API response
    :param response_body: Optional response body from the failed request
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        """Initialize API error with message and optional response details."""
        details: Dict[str, Any] = {}
        if status_code:
            details["status_code"] = status_code
        if response_body:
            details["response_body"] = response_body
        super().__init__(message=message, code="API_ERROR", details=details)
        self.status_code = status_code
        self.response_body = response_body


class ResponseDecodeError(APIError):
    """Raised when a response body is present but is not valid JSON.

    :param message: Description of the decoding failure
    :param status_code: HTTP status code of the undecodable response
    :param response_body: Raw body text, truncated for readability
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ):
        """Initialize decode error with message and response details."""
        if response_body and len(response_body) > 500:
            response_body = response_body[:500] + "..."
        super().__init__(
            message=message, status_code=status_code, response_body=response_body
        )
        self.code = "RESPONSE_DECODE_ERROR"
