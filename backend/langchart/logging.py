"""
Logging helpers for the language chart service.

All loggers live under the ``langchart`` namespace. Tokens are masked before
anything derived from configuration or upstream errors is written out.
"""

import logging
import re

_root_logger = logging.getLogger("langchart")
_http_logger = logging.getLogger("langchart.http")
_github_logger = logging.getLogger("langchart.github")

_SENSITIVE_PATTERNS = [
    # GitHub token formats (classic, fine-grained, app installation)
    (re.compile(r"\b(ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{20,}\b"), "[TOKEN_REDACTED]"),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), "[TOKEN_REDACTED]"),
    # Authorization headers
    (re.compile(r"(Authorization['\"]?\s*[:=]\s*['\"]?)(token|Bearer)\s+[^\s'\"]+", re.IGNORECASE), r"\1\2 [REDACTED]"),
    (re.compile(r"(token|secret|password)(['\"]?\s*[:=]\s*['\"])[^'\"]+(['\"])", re.IGNORECASE), r"\1\2[REDACTED]\3"),
]

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: int | str = logging.INFO,
    http_level: int | str | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure the ``langchart`` loggers.

    Args:
        level: Level for every package logger (default: INFO)
        http_level: Level for per-request logging (default: same as level)
        handler: Handler to attach (default: StreamHandler to stderr)
        format_string: Custom format string

    Calling this more than once replaces the previously attached handler.
    """
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    if handler is None:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    for existing in list(_root_logger.handlers):
        _root_logger.removeHandler(existing)
    _root_logger.addHandler(handler)
    _root_logger.setLevel(level)

    _http_logger.setLevel(http_level if http_level is not None else level)
    _github_logger.setLevel(level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or the ``langchart.<name>`` child."""
    if name is None:
        return _root_logger
    return logging.getLogger(f"langchart.{name}")


def mask_sensitive_data(text: str) -> str:
    """Replace tokens and authorization values in ``text`` with placeholders."""
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def log_request(method: str, path: str, status_code: int, elapsed_ms: float) -> None:
    """Log one handled HTTP request at INFO."""
    if not _http_logger.isEnabledFor(logging.INFO):
        return
    _http_logger.info(
        "%s %s -> %d (%.1fms)", method, mask_sensitive_data(path), status_code, elapsed_ms
    )
