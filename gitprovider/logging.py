"""
Git provider logging utilities.

Loggers live under the ``gitprovider`` tree:

* ``gitprovider.http``: one DEBUG line per request and per response
* ``gitprovider.reconcile``: reconcile state transitions

Nothing logged through these helpers carries credentials; tokens,
Authorization headers and private keys are replaced with placeholders.
"""

import logging
import re
from typing import Any

ROOT_LOGGER_NAME = "gitprovider"

_root = logging.getLogger(ROOT_LOGGER_NAME)
_http = logging.getLogger(f"{ROOT_LOGGER_NAME}.http")
_reconcile = logging.getLogger(f"{ROOT_LOGGER_NAME}.reconcile")

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

REDACTED = "[REDACTED]"
TOKEN_REDACTED = "[TOKEN_REDACTED]"

# Applied in order; private keys first so key bodies never reach the token rules.
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"-----BEGIN[^-]*PRIVATE KEY-----.*?-----END[^-]*PRIVATE KEY-----", re.DOTALL),
        "[PRIVATE_KEY_REDACTED]",
    ),
    (
        re.compile(r"(authorization['\"]?\s*[:=]\s*['\"]?)(bearer|token|basic)\s+[^'\"\s,}]+", re.IGNORECASE),
        rf"\1\2 {REDACTED}",
    ),
    # GitHub classic (ghp_, gho_, ...) and fine-grained tokens, GitLab PATs.
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), TOKEN_REDACTED),
    (re.compile(r"\bgithub_pat_[A-Za-z0-9_]{20,}\b"), TOKEN_REDACTED),
    (re.compile(r"\bglpat-[A-Za-z0-9_\-]{20,}\b"), TOKEN_REDACTED),
    (
        re.compile(r"(password|secret|token|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE),
        rf"\1: {REDACTED}",
    ),
]

# Dict keys whose values are never logged, matched as lowercase substrings.
SENSITIVE_KEYS = frozenset({"authorization", "token", "password", "secret", "private_key", "api_key"})

_TOKEN_PREVIEW = 4

# Reconcile states that wrote to the backend.
_ACTION_STATES = frozenset({"created", "updated"})


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    reconcile_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Attach a handler to the ``gitprovider`` logger and set its levels.

    Args:
        level: Level of the ``gitprovider`` logger
        http_level: Level of ``gitprovider.http``, defaults to level
        reconcile_level: Level of ``gitprovider.reconcile``, defaults to level
        handler: Where records go, a stderr StreamHandler by default
        format_string: Record format, DEFAULT_FORMAT by default

    Example:
        ```python
        import logging
        from gitprovider.logging import configure_logging

        # Show every request, and why reconcile did or didn't write
        configure_logging(http_level=logging.DEBUG, reconcile_level=logging.DEBUG)
        ```
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    _root.setLevel(level)
    _root.addHandler(handler)
    for child, child_level in ((_http, http_level), (_reconcile, reconcile_level)):
        child.setLevel(level if child_level is None else child_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``gitprovider`` or, given a suffix such as "github", ``gitprovider.<name>``."""
    if not name:
        return _root
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def mask_sensitive_data(text: str) -> str:
    """Replace tokens, authorization headers and private keys in text with placeholders."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def redact_token(token: str) -> str:
    """
    Shorten a token for safe logging.

    Tokens long enough to stay secret keep a four character preview
    ("ghp_..."); shorter ones are replaced entirely.
    """
    if len(token) > _TOKEN_PREVIEW * 4:
        return token[:_TOKEN_PREVIEW] + "..."
    return TOKEN_REDACTED


def _is_sensitive(key: Any, sensitive_keys: frozenset[str] | set[str]) -> bool:
    lowered = str(key).lower()
    return any(fragment in lowered for fragment in sensitive_keys)


def _scrub(value: Any, sensitive_keys: frozenset[str] | set[str]) -> Any:
    if isinstance(value, dict):
        return safe_log_dict(value, sensitive_keys)
    if isinstance(value, list):
        return [_scrub(item, sensitive_keys) for item in value]
    return value


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: frozenset[str] | set[str] | None = None
) -> dict[str, Any]:
    """
    Return a copy of data with the values of sensitive keys replaced.

    Nested dicts, and dicts inside lists, are scrubbed too. data is left
    untouched.
    """
    keys = SENSITIVE_KEYS if sensitive_keys is None else sensitive_keys
    return {k: REDACTED if _is_sensitive(k, keys) else _scrub(v, keys) for k, v in data.items()}


def _describe_body(body: Any) -> str | None:
    if isinstance(body, dict):
        return f"body={safe_log_dict(body)}"
    if body:
        return f"body={mask_sensitive_data(str(body))}"
    return None


def log_http_request(method: str, url: str, headers: dict[str, str] | None = None, body: Any = None) -> None:
    """Log an outgoing request on ``gitprovider.http`` at DEBUG."""
    if not _http.isEnabledFor(logging.DEBUG):
        return
    parts = [f"{method} {url}"]
    if headers:
        parts.append(f"headers={safe_log_dict(headers)}")
    described = _describe_body(body)
    if described:
        parts.append(described)
    _http.debug(" | ".join(parts))


def log_http_response(status_code: int, url: str, body: Any = None, elapsed_ms: float | None = None) -> None:
    """Log a received response on ``gitprovider.http`` at DEBUG."""
    if not _http.isEnabledFor(logging.DEBUG):
        return
    parts = [f"{status_code} {url}"]
    if elapsed_ms is not None:
        parts.append(f"took {elapsed_ms:.1f}ms")
    described = _describe_body(body)
    if described:
        parts.append(described)
    _http.debug(" | ".join(parts))


def log_reconcile_transition(kind: str, ref: Any, state: str, detail: str | None = None) -> None:
    """
    Log a reconcile state transition on ``gitprovider.reconcile``.

    Transitions that wrote to the backend (created, updated) are logged at
    INFO, everything else at DEBUG.

    Args:
        kind: Resource kind, e.g. "repository" or "deploy key"
        ref: The reference (or name) of the reconciled resource
        state: The state entered
        detail: Extra context, e.g. the error that failed the call
    """
    level = logging.INFO if state in _ACTION_STATES else logging.DEBUG
    if not _reconcile.isEnabledFor(level):
        return
    if detail:
        _reconcile.log(level, "%s %s: %s (%s)", kind, ref, state, mask_sensitive_data(detail))
    else:
        _reconcile.log(level, "%s %s: %s", kind, ref, state)


__all__ = [
    "configure_logging",
    "get_logger",
    "log_http_request",
    "log_http_response",
    "log_reconcile_transition",
    "mask_sensitive_data",
    "redact_token",
    "safe_log_dict",
]
