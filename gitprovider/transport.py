"""
HTTP transport for git provider adapters.

Handles HTTP communication with the provider API: authentication, the
transport chain, automatic retry of idempotent requests, request logging and
translation of error responses into typed exceptions.
"""

import itertools
import random
import ssl
import time
from collections.abc import Callable, Generator
from dataclasses import dataclass, field
from typing import Any

import httpx

from gitprovider.cache import CachingTransport
from gitprovider.exceptions import (
    AlreadyExistsError,
    GitProviderError,
    HTTPError,
    InvalidCredentialsError,
    InvalidTransportChainReturnError,
    NotFoundError,
    RateLimitError,
    TransportError,
    ValidationError,
)
from gitprovider.logging import log_http_request, log_http_response

ErrorHandler = Callable[[httpx.Response], GitProviderError]


@dataclass
class RetryConfig:
    """
    When and how long HTTPTransport waits before resending a request.

    Only methods in retry_methods are resent. A failed POST, PATCH, PUT or
    DELETE surfaces on the first attempt, so no write reaches the backend
    twice.
    """

    max_retries: int = 3
    backoff_factor: float = 2.0
    retry_on: list[int] = field(default_factory=lambda: [429, 500, 502, 503])
    retry_methods: list[str] = field(default_factory=lambda: ["GET", "HEAD"])
    # Use the server's Retry-After seconds instead of the computed backoff.
    respect_retry_after: bool = True
    # Upper bound of a computed wait, in seconds.
    max_backoff: float = 60.0
    # Relative spread of the wait; 0.1 waits between 90% and 110% of it.
    jitter: float = 0.1

    def backoff(self, attempt: int) -> float:
        """Seconds to wait before retry number attempt (0-indexed)."""
        wait = self.backoff_factor ** attempt
        spread = wait * self.jitter
        return min(wait + random.uniform(-spread, spread), self.max_backoff)


class TokenAuth(httpx.Auth):
    """Adds an OAuth2 bearer token to every request."""

    def __init__(self, token: str) -> None:
        self._token = token

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self._token}"
        yield request


def build_transport_chain(
    pre_chain_hook: Callable[[httpx.BaseTransport | None], httpx.BaseTransport] | None = None,
    post_chain_hook: Callable[[httpx.BaseTransport | None], httpx.BaseTransport] | None = None,
    ca_bundle: bytes | None = None,
    enable_conditional_requests: bool = False,
) -> httpx.BaseTransport:
    """
    Build the transport chain used by a provider client.

    The chain looks as follows:
        API <-> post-chain hook (or httpx.HTTPTransport) <-> ETag cache <-> pre-chain hook <-> httpx.Client

    Raises:
        InvalidTransportChainReturnError: If a hook returns None
    """
    transport: httpx.BaseTransport | None
    if post_chain_hook is not None:
        transport = post_chain_hook(None)
        if transport is None:
            raise InvalidTransportChainReturnError()
    elif ca_bundle is not None:
        ssl_context = ssl.create_default_context(cadata=ca_bundle.decode())
        transport = httpx.HTTPTransport(verify=ssl_context)
    else:
        transport = httpx.HTTPTransport()

    if enable_conditional_requests:
        transport = CachingTransport(transport)

    if pre_chain_hook is not None:
        transport = pre_chain_hook(transport)
        if transport is None:
            raise InvalidTransportChainReturnError()

    return transport


def parse_error_response(response: httpx.Response) -> GitProviderError:
    """
    Translate an error response into a typed exception.

    This is the provider-neutral mapping; adapters pass their own handler to
    HTTPTransport when they know more about their backend's error bodies.
    """
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    message = data.get("message") or f"HTTP {response.status_code}"
    error_message = f"{response.request.method} {response.request.url}: {response.status_code} {message}"
    documentation_url = data.get("documentation_url")
    status_code = response.status_code

    http_error: HTTPError
    if status_code in (401, 403):
        http_error = InvalidCredentialsError(message, response, error_message, documentation_url)
    elif status_code == 429:
        retry_after = _parse_int(response.headers.get("Retry-After"))
        http_error = RateLimitError(message, response, retry_after=retry_after, documentation_url=documentation_url)
    elif status_code == 422:
        http_error = ValidationError(message, response, documentation_url=documentation_url)
    else:
        http_error = HTTPError(message, response, error_message, documentation_url)

    if status_code == 404:
        error: GitProviderError = NotFoundError(message)
    elif status_code == 409:
        error = AlreadyExistsError(message)
    else:
        return http_error
    error.__cause__ = http_error
    return error


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class HTTPTransport:
    """
    HTTP transport layer with authentication and retry logic.

    Handles:
    - Bearer token authentication
    - Exponential backoff with jitter for retries of idempotent requests
    - Retry-After header respect for rate limiting
    - Error response parsing into typed exceptions
    - Request/response logging with credentials masked
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        transport: httpx.BaseTransport | None = None,
        timeout: float = 30.0,
        retry_config: RetryConfig | None = None,
        headers: dict[str, str] | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            base_url: Base URL for API requests (e.g., "https://api.github.com")
            token: OAuth2 / personal access token (optional, anonymous if None)
            transport: The httpx transport chain (see build_transport_chain)
            timeout: Request timeout in seconds
            retry_config: Configuration for retry behavior
            headers: Extra headers sent with every request
            error_handler: Translates error responses into typed exceptions
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_config = retry_config or RetryConfig()
        self.error_handler = error_handler or parse_error_response

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            auth=TokenAuth(token) if token else None,
            headers={"Content-Type": "application/json", **(headers or {})},
        )

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client."""
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """
        Make a request, retrying idempotent requests on retryable errors.

        Args:
            method: HTTP method
            path: API path or absolute URL (e.g. a pagination link)
            params: Query parameters
            body: JSON request body
            headers: Extra headers for this request only

        Returns:
            The successful (< 400) response

        Raises:
            GitProviderError: On API errors, translated by the error handler
            TransportError: If no response could be obtained
        """
        def make_request() -> httpx.Response:
            log_http_request(method, path, body=body)
            start = time.monotonic()
            response = self._client.request(method, path, params=params, json=body, headers=headers)
            log_http_response(
                response.status_code,
                str(response.request.url),
                elapsed_ms=(time.monotonic() - start) * 1000,
            )
            return response

        return self._execute_with_retry(method, make_request)

    def request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: Any = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make a request and return the parsed JSON body (None for empty bodies)."""
        response = self.request(method, path, params=params, body=body, headers=headers)
        if not response.content:
            return None
        return response.json()

    def _execute_with_retry(
        self, method: str, request_fn: Callable[[], httpx.Response]
    ) -> httpx.Response:
        """
        Send a request, resending it while the failure is retryable.

        Raises:
            TransportError: If no response was obtained and the request can't be resent
            GitProviderError: The translated error response otherwise
        """
        for attempt in itertools.count():
            try:
                response = request_fn()
            except httpx.RequestError as e:
                if not self._may_resend(method, attempt):
                    raise TransportError(str(e)) from e
                time.sleep(self._get_backoff_time(attempt, None))
                continue

            if response.status_code < 400:
                return response
            if not self._should_retry(method, response.status_code, attempt):
                raise self.error_handler(response)
            time.sleep(self._get_backoff_time(attempt, response.headers.get("Retry-After")))

    def _may_resend(self, method: str, attempt: int) -> bool:
        config = self.retry_config
        return attempt < config.max_retries and method.upper() in config.retry_methods

    def _should_retry(self, method: str, status_code: int, attempt: int) -> bool:
        return status_code in self.retry_config.retry_on and self._may_resend(method, attempt)

    def _get_backoff_time(self, attempt: int, retry_after: str | None) -> float:
        """Seconds to wait before retry number attempt, honoring Retry-After when allowed."""
        if retry_after and self.retry_config.respect_retry_after:
            try:
                return float(retry_after)
            except ValueError:
                # HTTP-date form, use the computed backoff.
                pass
        return self.retry_config.backoff(attempt)
