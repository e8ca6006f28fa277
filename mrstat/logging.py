"""
mrstat logging utilities.

All progress output (request start/finish, byte counts, warnings) goes through
the ``mrstat`` logger hierarchy so it lands on stderr while the report itself is
written to stdout. API tokens are never logged.
"""

import logging
import re
from typing import Any

# Create package loggers
_mrstat_logger = logging.getLogger("mrstat")
_http_logger = logging.getLogger("mrstat.http")

# Milliseconds since the logging module was loaded, i.e. roughly since program start
DEFAULT_FORMAT = "[%(relativeCreated)5dms] %(message)s"

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Authorization header values
    (re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+", re.IGNORECASE), r"\1[REDACTED]"),
    # GitLab personal/project access tokens
    (re.compile(r"glpat-[A-Za-z0-9_-]{8,}"), "[TOKEN_REDACTED]"),
    # private_token query parameter
    (re.compile(r"(private_token=)[^&\s]+", re.IGNORECASE), r"\1[REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key|api_token)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_SENSITIVE_KEYS = {"authorization", "api_token", "private_token", "token", "secret", "password"}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure mrstat logging.

    Args:
        level: Default log level for all mrstat loggers (default: INFO)
        http_level: Log level for request/response lines (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: elapsed milliseconds + message)

    Example:
        ```python
        import logging
        from mrstat.logging import configure_logging

        # Show status codes and timings of every request
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = DEFAULT_FORMAT

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _mrstat_logger.setLevel(level)
    _mrstat_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get an mrstat logger.

    Args:
        name: Logger name suffix (e.g., "http", "config"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _mrstat_logger
    return logging.getLogger(f"mrstat.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask sensitive data in a string.

    Replaces bearer tokens, access tokens and ``key=value`` secrets with
    redacted placeholders.

    Args:
        text: Text that may contain sensitive data

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary (headers, config) that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: authorization, api_token, token, ...)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
) -> None:
    """
    Log the start of an HTTP request.

    The request line goes out at INFO; headers (masked) only at DEBUG.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request path relative to the project base URL
        headers: Request headers (optional)
    """
    _http_logger.info("%s - requesting...", mask_sensitive_data(url))

    if headers and _http_logger.isEnabledFor(logging.DEBUG):
        _http_logger.debug("%s %s | headers=%s", method, mask_sensitive_data(url), safe_log_dict(headers))


def log_http_response(
    status_code: int,
    url: str,
    size: int,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log the completion of an HTTP request.

    Args:
        status_code: HTTP status code
        url: Request path relative to the project base URL
        size: Response body size in bytes
        elapsed_ms: Request duration in milliseconds (optional)
    """
    safe_url = mask_sensitive_data(url)
    _http_logger.info("%s - received %d bytes.", safe_url, size)

    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {safe_url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


# Export public API
__all__ = [
    "DEFAULT_FORMAT",
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
]
