"""Helpers shared by the GitHub resource clients."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from gitprovider.enums import RepositoryPermission
from gitprovider.exceptions import (
    DestructiveCallDisallowedError,
    DomainUnsupportedError,
    InvalidArgumentError,
    InvalidServerDataError,
    NoProviderSupportError,
)
from gitprovider.pagination import Page, all_pages
from gitprovider.refs import (
    IdentityRef,
    IdentityType,
    OrganizationRef,
    OrgRepositoryRef,
    UserRef,
    UserRepositoryRef,
)
from gitprovider.transport import HTTPTransport
from gitprovider.validation import Validator, validate_targets

# Maximum page size of the GitHub REST API.
PER_PAGE = 100

_PERMISSION_PRIORITY = {
    RepositoryPermission.PULL: 1,
    RepositoryPermission.TRIAGE: 2,
    RepositoryPermission.PUSH: 3,
    RepositoryPermission.MAINTAIN: 4,
    RepositoryPermission.ADMIN: 5,
}


@dataclass
class ClientContext:
    """State shared by the GitHub client and every resource it hands out."""

    transport: HTTPTransport
    domain: str
    destructive_actions: bool = False

    def require_destructive_actions(self, what: str) -> None:
        if not self.destructive_actions:
            raise DestructiveCallDisallowedError(
                f"cannot {what}: {DestructiveCallDisallowedError.default_message}"
            )


def list_all(transport: HTTPTransport, path: str, params: dict[str, Any] | None = None) -> list[Any]:
    """GET every page of a list endpoint, following the Link rel="next" header."""

    def fetch(next_url: str | None) -> Page[Any]:
        if next_url is None:
            response = transport.request("GET", path, params={"per_page": PER_PAGE, **(params or {})})
        else:
            # The next link already carries the query parameters.
            response = transport.request("GET", next_url)
        return Page(response.json() or [], response.links.get("next", {}).get("url"))

    return all_pages(fetch)


def validate_api_object(name: str, check: Callable[[Validator], None]) -> None:
    """
    Validate an object received from GitHub.

    Raises:
        InvalidServerDataError: If check registered any error; the field errors are its cause
    """
    validator = Validator(name)
    check(validator)
    err = validator.error()
    if err is not None:
        raise InvalidServerDataError(f"{InvalidServerDataError.default_message}: {err}") from err


def validate_identity_fields(ref: IdentityRef, expected_domain: str) -> None:
    if ref.get_domain() != expected_domain:
        raise DomainUnsupportedError(f"domain {ref.get_domain()!r} not supported by this client")
    identity_type = ref.get_type()
    if identity_type in (IdentityType.ORGANIZATION, IdentityType.USER):
        return
    if identity_type == IdentityType.SUBORGANIZATION:
        raise NoProviderSupportError("github doesn't support sub-organizations")
    raise InvalidArgumentError(f"invalid identity type: {identity_type}")


def validate_organization_ref(ref: OrganizationRef, expected_domain: str) -> None:
    validate_targets("OrganizationRef", ref)
    validate_identity_fields(ref, expected_domain)


def validate_user_ref(ref: UserRef, expected_domain: str) -> None:
    validate_targets("UserRef", ref)
    validate_identity_fields(ref, expected_domain)


def validate_org_repository_ref(ref: OrgRepositoryRef, expected_domain: str) -> None:
    validate_targets("OrgRepositoryRef", ref)
    validate_identity_fields(ref, expected_domain)


def validate_user_repository_ref(ref: UserRepositoryRef, expected_domain: str) -> None:
    validate_targets("UserRepositoryRef", ref)
    validate_identity_fields(ref, expected_domain)


def permission_from_map(permissions: dict[str, bool]) -> RepositoryPermission | None:
    """Return the highest permission set to true in a GitHub permissions map."""
    permission = None
    last_priority = 0
    for key, granted in permissions.items():
        if not granted:
            continue
        try:
            candidate = RepositoryPermission(key)
        except ValueError:
            continue
        priority = _PERMISSION_PRIORITY[candidate]
        if priority > last_priority:
            permission = candidate
            last_priority = priority
    return permission
