"""Git provider exception classes.

Every adapter normalizes its native errors onto these classes at its boundary.
The original error is always kept as ``__cause__`` (``raise ... from err``), so
callers can check the kind with ``isinstance`` and still reach the HTTP context
with :func:`is_a` / :func:`find`.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    import httpx

E = TypeVar("E", bound=BaseException)


class GitProviderError(Exception):
    """Base exception for all git provider errors."""

    code = "GIT_PROVIDER_ERROR"
    default_message = "git provider error"

    def __init__(self, message: str | None = None, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code is not None:
            self.code = code
        super().__init__(f"[{self.code}] {self.message}")


class ConfigurationError(GitProviderError):
    """Raised when client configuration is invalid or missing."""

    code = "CONFIGURATION_ERROR"
    default_message = "invalid client configuration"


class NoProviderSupportError(GitProviderError):
    """The provider doesn't support the requested feature."""

    code = "NO_PROVIDER_SUPPORT"
    default_message = "no provider support for this feature"


class DomainUnsupportedError(GitProviderError):
    """A client was asked to handle a ref for a domain it isn't configured for."""

    code = "DOMAIN_UNSUPPORTED"
    default_message = "the client doesn't support handling requests for this domain"


class NotTopLevelOrganizationError(GitProviderError):
    """A top-level organization was required, but a sub-organization was given."""

    code = "NOT_TOP_LEVEL_ORGANIZATION"
    default_message = "expected top-level organization, received sub-organization instead"


class InvalidArgumentError(GitProviderError):
    code = "INVALID_ARGUMENT"
    default_message = "invalid argument specified"


class UnexpectedEventError(GitProviderError):
    code = "UNEXPECTED_EVENT"
    default_message = "an unexpected error occurred"


class AlreadyExistsError(GitProviderError):
    """Raised by create() if the resource already exists.

    Use reconcile() to create a resource idempotently.
    """

    code = "ALREADY_EXISTS"
    default_message = (
        "resource already exists, cannot create object. "
        "Use reconcile() to create it idempotently"
    )


class NotFoundError(GitProviderError):
    """Raised by get() and update() if the resource doesn't exist."""

    code = "NOT_FOUND"
    default_message = "the requested resource was not found"


class InvalidServerDataError(GitProviderError):
    """The server returned an object that is missing required fields."""

    code = "INVALID_SERVER_DATA"
    default_message = "got invalid data from server, don't know how to handle"


class URLUnsupportedSchemeError(GitProviderError):
    code = "URL_UNSUPPORTED_SCHEME"
    default_message = "unsupported URL scheme, only HTTPS supported"


class URLUnsupportedPartsError(GitProviderError):
    code = "URL_UNSUPPORTED_PARTS"
    default_message = "URL cannot have fragments, query values nor user information"


class URLInvalidError(GitProviderError):
    code = "URL_INVALID"
    default_message = "invalid organization, user or repository URL"


class URLMissingRepoNameError(GitProviderError):
    code = "URL_MISSING_REPO_NAME"
    default_message = "missing repository name"


class InvalidClientOptionsError(GitProviderError):
    """Mutually exclusive or duplicate options were given to a client."""

    code = "INVALID_CLIENT_OPTIONS"
    default_message = "invalid options given to the client"


class DestructiveCallDisallowedError(GitProviderError):
    """A destructive call was made on a client without destructive calls enabled."""

    code = "DESTRUCTIVE_CALL_DISALLOWED"
    default_message = "destructive call was blocked, disallowed by client"


class InvalidTransportChainReturnError(GitProviderError):
    code = "INVALID_TRANSPORT_CHAIN_RETURN"
    default_message = "the return value of a transport chain hook must not be None"


class HTTPError(GitProviderError):
    """A non-2xx response that carries the HTTP context of the failure."""

    code = "HTTP_ERROR"

    def __init__(
        self,
        message: str | None = None,
        response: "httpx.Response | None" = None,
        error_message: str | None = None,
        documentation_url: str | None = None,
        code: str | None = None,
    ) -> None:
        self.response = response
        self.error_message = error_message or message or ""
        self.documentation_url = documentation_url
        super().__init__(message, code)

    @property
    def status_code(self) -> int | None:
        if self.response is None:
            return None
        return self.response.status_code


class TransportError(HTTPError):
    """The request never produced a response (connection error, timeout)."""

    code = "TRANSPORT_ERROR"


class InvalidCredentialsError(HTTPError):
    """The credentials were rejected (401 Unauthorized or 403 Forbidden).

    This does not mean "logged in, but no access to this resource"; providers
    answer that case with 404 Not Found.
    """

    code = "INVALID_CREDENTIALS"


class RateLimitError(HTTPError):
    """Raised when the client is rate limited."""

    code = "RATE_LIMITED"

    def __init__(
        self,
        message: str | None = None,
        response: "httpx.Response | None" = None,
        limit: int | None = None,
        remaining: int | None = None,
        reset: datetime | None = None,
        retry_after: int | None = None,
        documentation_url: str | None = None,
    ) -> None:
        super().__init__(message, response, documentation_url=documentation_url)
        self.limit = limit
        self.remaining = remaining
        self.reset = reset
        self.retry_after = retry_after


@dataclass
class ValidationErrorItem:
    """A single invalid field in a request rejected by the server."""

    resource: str = ""
    field: str = ""
    code: str = ""
    message: str = ""


class ValidationError(HTTPError):
    """Server-side validation of the request failed."""

    code = "VALIDATION_FAILED"

    def __init__(
        self,
        message: str | None = None,
        response: "httpx.Response | None" = None,
        errors: list[ValidationErrorItem] | None = None,
        documentation_url: str | None = None,
    ) -> None:
        super().__init__(message, response, documentation_url=documentation_url)
        self.errors = errors or []


class MultiError(GitProviderError):
    """Holds several errors raised at once.

    Each error keeps its own cause chain. Use :func:`is_a` to check whether
    any of the sub-errors is of a given kind.
    """

    code = "MULTIPLE_ERRORS"

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))


def iter_chain(err: BaseException) -> Iterator[BaseException]:
    """Yield err, its causes and, for MultiErrors, every sub-error chain."""
    seen: set[int] = set()
    stack = [err]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if isinstance(current, MultiError):
            stack.extend(reversed(current.errors))
        if current.__cause__ is not None:
            stack.append(current.__cause__)


def find(err: BaseException, kind: type[E]) -> E | None:
    """Return the first error of the given kind in err's chain, or None."""
    for e in iter_chain(err):
        if isinstance(e, kind):
            return e
    return None


def is_a(err: BaseException | None, kind: type[BaseException]) -> bool:
    """Check whether err, or anything it wraps, is of the given kind."""
    if err is None:
        return False
    return find(err, kind) is not None
