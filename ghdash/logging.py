"""
ghdash logging utilities.

Provides configurable logging for HTTP requests/responses and cache activity.
Ensures the API token never reaches a log record.
"""

import logging
import re
from typing import Any

# Package loggers
_sdk_logger = logging.getLogger("ghdash")
_http_logger = logging.getLogger("ghdash.http")
_cache_logger = logging.getLogger("ghdash.cache")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # Bearer credentials in header dumps
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-.]+"), "Bearer [REDACTED]"),
    # GitHub token formats (classic, fine-grained, app/oauth)
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # key=value / "key": "value" pairs
    (re.compile(r"(secret|token|password|authorization)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = frozenset({"authorization", "token", "secret", "password"})


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    cache_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure ghdash logging.

    Args:
        level: Default log level for all ghdash loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        cache_level: Log level for cache hit/miss logging (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from ghdash.logging import configure_logging

        # Trace every request made to the API
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _sdk_logger.setLevel(level)
    _sdk_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _cache_logger.setLevel(cache_level if cache_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a ghdash logger.

    Args:
        name: Logger name suffix (e.g., "http", "cache"). If None, returns the package logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _sdk_logger
    return logging.getLogger(f"ghdash.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask tokens and credentials in a string.

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
        data: Dictionary that may contain sensitive values
        sensitive_keys: Keys to mask (default: authorization, token, secret, password)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    keys = _DEFAULT_SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if any(sk in key_lower for sk in keys):
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
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST)
        url: Request URL
        headers: Request headers (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {url}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
    rate_remaining: int | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
        rate_remaining: Remaining API quota reported by the response (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {url}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    if rate_remaining is not None:
        log_parts.append(f"rate_remaining={rate_remaining}")

    _http_logger.debug(" | ".join(log_parts))


def log_cache_operation(operation: str, key: str, detail: str | None = None) -> None:
    """
    Log a cache operation (hit, miss, set, evict, clear) at DEBUG level.

    Args:
        operation: Operation name
        key: Logical cache key
        detail: Extra context (optional)
    """
    if not _cache_logger.isEnabledFor(logging.DEBUG):
        return

    message = f"{operation}: {key}"
    if detail:
        message = f"{message} | {detail}"

    _cache_logger.debug(message)


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_cache_operation",
]
