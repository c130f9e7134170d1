"""Credential redaction and secure logging setup.

The client handles bearer tokens, refresh tokens and passwords on every
call. This module keeps them out of log output:

- Pattern-based redaction of JWTs and ``Bearer`` credentials in strings
- Header and payload sanitization for request/response logging
- A logging formatter that applies redaction to every record
"""

import copy
import logging
import re
import sys
from typing import Any, Dict, Iterable, Optional

# Patterns for sensitive data detection
SENSITIVE_PATTERNS = {
    "jwt_token": re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+"),
    "bearer_token": re.compile(r"(?<=Bearer\s)[A-Za-z0-9._~+/=-]+", re.IGNORECASE),
    "basic_auth": re.compile(r"(?<=Basic\s)[A-Za-z0-9+/=]+", re.IGNORECASE),
}

# Headers that should never be logged
SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "set-cookie",
    "x-access-token",
    "x-refresh-token",
}

# Payload keys whose values are always redacted
SENSITIVE_KEYS = {"password", "token", "refresh", "secret", "code"}

# =============================================================================
# String and Payload Sanitization
# =============================================================================


def sanitize_string(value: str) -> str:
    """Redact credentials embedded in a string.

    Only the credential itself is replaced, so the surrounding message
    stays readable.

    :param value: String to sanitize
    :type value: str
    :return: String with tokens replaced by ``<name:REDACTED>``
    :rtype: str
    """
    if not value:
        return value
    for pattern_name, pattern in SENSITIVE_PATTERNS.items():
        value = pattern.sub(f"<{pattern_name}:REDACTED>", value)
    return value


def sanitize_headers(headers: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Sanitize HTTP headers for logging.

    :param headers: Mapping of HTTP headers
    :type headers: Optional[Dict[str, Any]]
    :return: Copy with sensitive headers redacted
    :rtype: Optional[Dict[str, Any]]
    """
    if not headers:
        return headers
    sanitized = dict(headers)
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            if isinstance(value, str) and len(value) > 0:
                sanitized[key] = f"<REDACTED:length={len(value)}>"
            else:
                sanitized[key] = "<REDACTED>"
        elif isinstance(value, str):
            sanitized[key] = sanitize_string(value)
    return sanitized


def safe_log_dict(
    data: Any, sanitize_keys: Optional[Iterable[str]] = None
) -> Any:
    """Create a copy of a JSON-like payload that is safe to log.

    Keys matching any of :data:`SENSITIVE_KEYS` (substring, case
    insensitive) are replaced, string values are passed through
    :func:`sanitize_string`.

    :param data: Payload to sanitize (dict, list or scalar)
    :type data: Any
    :param sanitize_keys: Additional keys to sanitize beyond defaults
    :type sanitize_keys: Optional[Iterable[str]]
    :return: Sanitized deep copy
    :rtype: Any
    """
    if not data:
        return data
    keys = set(SENSITIVE_KEYS)
    if sanitize_keys:
        keys.update(k.lower() for k in sanitize_keys)

    def _sanitize(obj: Any) -> Any:
        if isinstance(obj, dict):
            out = {}
            for key, value in obj.items():
                if isinstance(key, str) and any(s in key.lower() for s in keys):
                    out[key] = "<REDACTED>"
                else:
                    out[key] = _sanitize(value)
            return out
        if isinstance(obj, list):
            return [_sanitize(item) for item in obj]
        if isinstance(obj, str):
            return sanitize_string(obj)
        return obj

    return _sanitize(copy.deepcopy(data))


# =============================================================================
# Secure Logging Setup
# =============================================================================


class SanitizingFormatter(logging.Formatter):
    """Formatter that redacts credentials from every log record."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record after merging and sanitizing its arguments.

        :param record: Log record to format
        :type record: logging.LogRecord
        :return: Sanitized log line
        :rtype: str
        """
        record = logging.makeLogRecord(record.__dict__)
        record.msg = sanitize_string(record.getMessage())
        record.args = None
        return super().format(record)


# Global flag to track if logging has been set up
_LOGGING_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Route ``point_api`` logs through a sanitizing stdout handler.

    Safe to call repeatedly; only the first call installs the handler.

    :param level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    :type level: str
    """
    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        logging.getLogger(__name__).debug(
            "Logging already configured, skipping duplicate setup"
        )
        return

    formatter = SanitizingFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    package_logger = logging.getLogger("point_api")
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, level.upper()))

    # httpx logs full request lines including query strings
    logging.getLogger("httpx").setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
