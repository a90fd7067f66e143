"""Translation of GitHub error responses into gitprovider exceptions."""

from datetime import datetime, timezone
from typing import Any

import httpx

from gitprovider.exceptions import (
    AlreadyExistsError,
    GitProviderError,
    HTTPError,
    InvalidCredentialsError,
    NotFoundError,
    RateLimitError,
    ValidationError,
    ValidationErrorItem,
)

# GitHub answers 422 with this validation message when a repository (or key)
# name is taken. There is no dedicated error code for it.
ALREADY_EXISTS_MAGIC_STRING = "name already exists on this account"
RATE_LIMIT_DOC_URL = "https://docs.github.com/rest/overview/resources-in-the-rest-api#rate-limiting"


def _int_header(response: httpx.Response, name: str) -> int | None:
    value = response.headers.get(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _validation_items(data: dict[str, Any]) -> list[ValidationErrorItem]:
    items = []
    for raw in data.get("errors") or []:
        if isinstance(raw, dict):
            items.append(ValidationErrorItem(
                resource=raw.get("resource", ""),
                field=raw.get("field", ""),
                code=raw.get("code", ""),
                message=raw.get("message", ""),
            ))
        elif isinstance(raw, str):
            items.append(ValidationErrorItem(message=raw))
    return items


def _is_rate_limited(response: httpx.Response) -> bool:
    if response.status_code == 429:
        return True
    return response.status_code == 403 and response.headers.get("X-RateLimit-Remaining") == "0"


def handle_http_error(response: httpx.Response) -> GitProviderError:
    """
    Map a GitHub error response onto the gitprovider error taxonomy.

    The HTTPError carrying the response is kept as ``__cause__`` of the
    NotFoundError and AlreadyExistsError kinds.
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    status_code = response.status_code
    message = data.get("message") or f"HTTP {status_code}"
    documentation_url = data.get("documentation_url")
    error_message = f"{response.request.method} {response.request.url}: {status_code} {message}"
    items = _validation_items(data)

    if _is_rate_limited(response):
        reset = _int_header(response, "X-RateLimit-Reset")
        return RateLimitError(
            message,
            response,
            limit=_int_header(response, "X-RateLimit-Limit"),
            remaining=_int_header(response, "X-RateLimit-Remaining"),
            reset=datetime.fromtimestamp(reset, tz=timezone.utc) if reset is not None else None,
            retry_after=_int_header(response, "Retry-After"),
            documentation_url=documentation_url or RATE_LIMIT_DOC_URL,
        )

    if status_code in (401, 403):
        return InvalidCredentialsError(message, response, error_message, documentation_url)

    http_error = HTTPError(message, response, error_message, documentation_url)

    if status_code == 404:
        not_found = NotFoundError(f"{NotFoundError.default_message}: {error_message}")
        not_found.__cause__ = http_error
        return not_found

    if status_code == 409 or any(item.message == ALREADY_EXISTS_MAGIC_STRING for item in items):
        exists = AlreadyExistsError(f"{AlreadyExistsError.default_message}: {error_message}")
        exists.__cause__ = http_error
        return exists

    if status_code == 422:
        return ValidationError(message, response, errors=items, documentation_url=documentation_url)

    return http_error
