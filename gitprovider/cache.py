"""
Conditional-request caching for the transport chain.

GET responses carrying an ETag are kept in memory. Later GETs of the same URL
send If-None-Match, and a 304 Not Modified answer is turned back into the
cached response. With GitHub, 304 answers don't count against the rate limit.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass

import httpx

from gitprovider.exceptions import InvalidArgumentError
from gitprovider.logging import get_logger

logger = get_logger("http")

# Not carried over to rebuilt responses, as read() has already decoded the body.
_ENCODING_HEADERS = {"content-encoding", "content-length", "transfer-encoding"}

DEFAULT_MAX_ENTRIES = 1024


@dataclass
class CachedResponse:
    """A cached response body and the validator it was served with."""

    etag: str
    status_code: int
    headers: list[tuple[str, str]]
    content: bytes


def _decoded_headers(headers: httpx.Headers) -> list[tuple[str, str]]:
    return [(k, v) for k, v in headers.multi_items() if k.lower() not in _ENCODING_HEADERS]


class CachingTransport(httpx.BaseTransport):
    """
    Wraps a transport, revalidating cached GET responses with ETags.

    At most max_entries responses are kept; the least recently used entry
    is evicted first.
    """

    def __init__(self, transport: httpx.BaseTransport, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise InvalidArgumentError(f"max_entries must be at least 1, got {max_entries}")
        self._transport = transport
        self.max_entries = max_entries
        self._cache: OrderedDict[tuple[str, str], CachedResponse] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._cache)

    def _key(self, request: httpx.Request) -> tuple[str, str]:
        # Responses differ per credential, so the Authorization value is part of the key.
        return str(request.url), request.headers.get("Authorization", "")

    def _lookup(self, key: tuple[str, str]) -> CachedResponse | None:
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
            return cached

    def _store(self, key: tuple[str, str], entry: CachedResponse) -> None:
        with self._lock:
            self._cache[key] = entry
            self._cache.move_to_end(key)
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if request.method != "GET":
            return self._transport.handle_request(request)

        key = self._key(request)
        cached = self._lookup(key)
        if cached is not None:
            request.headers["If-None-Match"] = cached.etag

        response = self._transport.handle_request(request)

        if response.status_code == 304 and cached is not None:
            response.close()
            logger.debug("Cache hit (304) for %s", request.url)
            return httpx.Response(
                status_code=cached.status_code,
                headers=cached.headers,
                content=cached.content,
                request=request,
            )

        etag = response.headers.get("ETag")
        if response.status_code == 200 and etag:
            content = response.read()
            self._store(key, CachedResponse(
                etag=etag,
                status_code=response.status_code,
                headers=_decoded_headers(response.headers),
                content=content,
            ))
            # The body has been consumed; hand out a fresh response.
            return httpx.Response(
                status_code=response.status_code,
                headers=_decoded_headers(response.headers),
                content=content,
                request=request,
            )

        return response

    def clear(self) -> None:
        """Drop every cached response."""
        with self._lock:
            self._cache.clear()

    def close(self) -> None:
        self._transport.close()
