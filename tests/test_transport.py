"""
Property-based tests for HTTP transport retry behavior and the transport chain.
"""

import httpx
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gitprovider.cache import CachingTransport
from gitprovider.exceptions import (
    AlreadyExistsError,
    HTTPError,
    InvalidCredentialsError,
    InvalidTransportChainReturnError,
    NotFoundError,
    RateLimitError,
    TransportError,
    is_a,
)
from gitprovider.transport import HTTPTransport, RetryConfig, build_transport_chain

# Test strategies
backoff_factor_strategy = st.floats(min_value=1.1, max_value=5.0)
attempt_strategy = st.integers(min_value=0, max_value=5)
retry_after_strategy = st.integers(min_value=1, max_value=120)


def make_transport(handler=None, **kwargs) -> HTTPTransport:
    mock = httpx.MockTransport(handler or (lambda request: httpx.Response(200, json={})))
    return HTTPTransport(base_url="https://api.example.com", token="test-token", transport=mock, **kwargs)


@pytest.fixture
def no_sleep(monkeypatch: pytest.MonkeyPatch) -> list[float]:
    sleeps: list[float] = []
    monkeypatch.setattr("gitprovider.transport.time.sleep", sleeps.append)
    return sleeps


@given(
    backoff_factor=backoff_factor_strategy,
    attempt=attempt_strategy,
)
@settings(max_examples=100)
def test_exponential_backoff_timing(backoff_factor: float, attempt: int) -> None:
    """
    Property: Exponential backoff timing

    For any retry configuration with backoff_factor B and attempt number N,
    the wait time before attempt N SHALL be approximately B^N seconds (with jitter).
    """
    config = RetryConfig(
        backoff_factor=backoff_factor,
        jitter=0.1,  # ±10% jitter
        max_backoff=10000.0,  # High max to not interfere with test
    )
    transport = make_transport(retry_config=config)

    expected_base = backoff_factor ** attempt
    actual = transport._get_backoff_time(attempt, None)

    assert expected_base * 0.9 <= actual <= expected_base * 1.1, (
        f"Backoff time {actual} not in expected range for attempt {attempt} with factor {backoff_factor}"
    )


@given(attempt=st.integers(min_value=0, max_value=20))
@settings(max_examples=100)
def test_backoff_is_capped(attempt: int) -> None:
    """
    Property: Backoff never exceeds max_backoff

    For any attempt number, the wait time SHALL NOT exceed max_backoff.
    """
    transport = make_transport(retry_config=RetryConfig(max_backoff=10.0))

    assert transport._get_backoff_time(attempt, None) <= 10.0


@given(retry_after=retry_after_strategy)
@settings(max_examples=100)
def test_retry_after_header_respected(retry_after: int) -> None:
    """
    Property: Retry-After header respected

    For any response with a Retry-After header value of T seconds, the
    transport SHALL wait exactly T seconds before retrying.
    """
    transport = make_transport(retry_config=RetryConfig(respect_retry_after=True))

    assert transport._get_backoff_time(0, str(retry_after)) == float(retry_after)


@given(
    status_code=st.sampled_from([400, 401, 403, 404, 409, 422]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100)
def test_no_retry_on_non_retryable_errors(status_code: int, attempt: int) -> None:
    """
    Property: No retry on non-retryable errors

    For any response with a client error status other than 429, the
    transport SHALL NOT retry the request.
    """
    transport = make_transport()

    assert not transport._should_retry("GET", status_code, attempt)


@given(
    status_code=st.sampled_from([429, 500, 502, 503]),
    attempt=st.integers(min_value=0, max_value=2),
)
@settings(max_examples=100)
def test_retry_on_retryable_errors(status_code: int, attempt: int) -> None:
    """
    Property: Retry on retryable errors

    For any idempotent request answered with 429, 500, 502 or 503, the
    transport SHALL retry while attempts remain.
    """
    transport = make_transport(retry_config=RetryConfig(max_retries=3))

    assert transport._should_retry("GET", status_code, attempt)
    assert not transport._should_retry("GET", status_code, 3)


@given(
    method=st.sampled_from(["POST", "PUT", "PATCH", "DELETE"]),
    status_code=st.sampled_from([429, 500, 502, 503]),
)
@settings(max_examples=100)
def test_writes_are_never_retried(method: str, status_code: int) -> None:
    """
    Property: Writes are never retried

    For any non-idempotent method, the transport SHALL NOT retry, whatever
    the status code.
    """
    transport = make_transport()

    assert not transport._should_retry(method, status_code, 0)


class TestRequests:
    def test_bearer_token_and_headers(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"ok": True})

        transport = make_transport(handler, headers={"Accept": "application/vnd.github+json"})
        assert transport.request_json("GET", "/user", params={"a": "1"}) == {"ok": True}

        request = seen[0]
        assert request.headers["Authorization"] == "Bearer test-token"
        assert request.headers["Accept"] == "application/vnd.github+json"
        assert request.url == "https://api.example.com/user?a=1"

    def test_empty_body(self) -> None:
        transport = make_transport(lambda request: httpx.Response(204))
        assert transport.request_json("DELETE", "/x") is None

    def test_retries_then_succeeds(self, no_sleep: list[float]) -> None:
        responses = iter([httpx.Response(503), httpx.Response(502), httpx.Response(200, json=[1])])
        transport = make_transport(lambda request: next(responses))

        assert transport.request_json("GET", "/items") == [1]
        assert len(no_sleep) == 2

    def test_gives_up_after_max_retries(self, no_sleep: list[float]) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, json={"message": "boom"})

        transport = make_transport(handler, retry_config=RetryConfig(max_retries=2))
        with pytest.raises(HTTPError) as exc_info:
            transport.request("GET", "/items")

        assert len(calls) == 3
        assert exc_info.value.status_code == 500

    def test_post_is_not_retried(self, no_sleep: list[float]) -> None:
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503)

        transport = make_transport(handler)
        with pytest.raises(HTTPError):
            transport.request("POST", "/items", body={"a": 1})

        assert len(calls) == 1
        assert no_sleep == []

    def test_network_error(self, no_sleep: list[float]) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        transport = make_transport(handler, retry_config=RetryConfig(max_retries=1))
        with pytest.raises(TransportError) as exc_info:
            transport.request("GET", "/items")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert len(no_sleep) == 1


class TestDefaultErrorHandler:
    @pytest.mark.parametrize(
        ("status_code", "kind"),
        [
            (401, InvalidCredentialsError),
            (403, InvalidCredentialsError),
            (404, NotFoundError),
            (409, AlreadyExistsError),
            (400, HTTPError),
        ],
    )
    def test_status_mapping(self, status_code: int, kind: type) -> None:
        transport = make_transport(lambda request: httpx.Response(status_code, json={"message": "nope"}))

        with pytest.raises(kind) as exc_info:
            transport.request("POST", "/items")
        assert is_a(exc_info.value, HTTPError)

    def test_rate_limit(self, no_sleep: list[float]) -> None:
        transport = make_transport(
            lambda request: httpx.Response(429, headers={"Retry-After": "7"}),
            retry_config=RetryConfig(max_retries=0),
        )

        with pytest.raises(RateLimitError) as exc_info:
            transport.request("GET", "/items")
        assert exc_info.value.retry_after == 7


class TestTransportChain:
    def test_default(self) -> None:
        assert isinstance(build_transport_chain(), httpx.HTTPTransport)

    def test_hooks_wrap_in_order(self) -> None:
        base = httpx.MockTransport(lambda request: httpx.Response(200))
        seen = []

        def post_hook(transport):
            seen.append(("post", transport))
            return base

        def pre_hook(transport):
            seen.append(("pre", transport))
            return transport

        chain = build_transport_chain(pre_hook, post_hook, enable_conditional_requests=True)

        assert seen[0] == ("post", None)
        assert seen[1][0] == "pre"
        assert isinstance(seen[1][1], CachingTransport)
        assert isinstance(chain, CachingTransport)

    def test_post_hook_returning_none(self) -> None:
        with pytest.raises(InvalidTransportChainReturnError):
            build_transport_chain(post_chain_hook=lambda transport: None)

    def test_pre_hook_returning_none(self) -> None:
        with pytest.raises(InvalidTransportChainReturnError):
            build_transport_chain(pre_chain_hook=lambda transport: None)
