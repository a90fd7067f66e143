"""References to users, organizations and repositories in a Git provider.

Refs are immutable and compared structurally. They are either built directly
or parsed from canonical HTTPS URLs, e.g.::

    ref = parse_org_repository_url("https://gitlab.com/fluxcd/engineering/frontend.git")
    assert ref.organization == "fluxcd"
    assert ref.sub_organizations == ("engineering",)
    assert ref.repository_name == "frontend"
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union
from urllib.parse import urlsplit

from gitprovider.enums import TransportType
from gitprovider.exceptions import (
    URLInvalidError,
    URLMissingRepoNameError,
    URLUnsupportedPartsError,
    URLUnsupportedSchemeError,
)
from gitprovider.validation import Validator


class IdentityType(str, Enum):
    USER = "user"
    ORGANIZATION = "organization"
    SUBORGANIZATION = "suborganization"


@dataclass(frozen=True)
class UserRef:
    """A user account in a Git provider."""

    # e.g. "github.com" or "self-hosted-gitlab.com:6443"
    domain: str
    user_login: str

    def get_domain(self) -> str:
        return self.domain

    def get_identity(self) -> str:
        return self.user_login

    def get_type(self) -> IdentityType:
        return IdentityType.USER

    def __str__(self) -> str:
        return f"https://{self.get_domain()}/{self.get_identity()}"

    def validate_fields(self, validator: Validator) -> None:
        if not self.domain:
            validator.required("Domain")
        if not self.user_login:
            validator.required("UserLogin")


@dataclass(frozen=True)
class OrganizationRef:
    """A top-level organization, or a sub-organization (GitLab subgroup) of it."""

    domain: str
    organization: str
    sub_organizations: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept lists, but store a tuple so the ref stays hashable.
        object.__setattr__(self, "sub_organizations", tuple(self.sub_organizations))

    def get_domain(self) -> str:
        return self.domain

    def get_identity(self) -> str:
        return "/".join([self.organization, *self.sub_organizations])

    def get_type(self) -> IdentityType:
        if self.sub_organizations:
            return IdentityType.SUBORGANIZATION
        return IdentityType.ORGANIZATION

    def __str__(self) -> str:
        return f"https://{self.get_domain()}/{self.get_identity()}"

    def validate_fields(self, validator: Validator) -> None:
        if not self.domain:
            validator.required("Domain")
        if not self.organization:
            validator.required("Organization")


@dataclass(frozen=True)
class OrgRepositoryRef(OrganizationRef):
    """A repository owned by an organization."""

    # Keyword-only, as sub_organizations comes before it.
    repository_name: str = field(default="", kw_only=True)

    def organization_ref(self) -> OrganizationRef:
        return OrganizationRef(self.domain, self.organization, self.sub_organizations)

    def get_repository(self) -> str:
        return self.repository_name

    def get_clone_url(self, transport: TransportType | str) -> str:
        return get_clone_url(self, transport)

    def __str__(self) -> str:
        return f"{super().__str__()}/{self.repository_name}"

    def validate_fields(self, validator: Validator) -> None:
        super().validate_fields(validator)
        if not self.repository_name:
            validator.required("RepositoryName")


@dataclass(frozen=True)
class UserRepositoryRef(UserRef):
    """A repository owned by a user account."""

    repository_name: str = ""

    def user_ref(self) -> UserRef:
        return UserRef(self.domain, self.user_login)

    def get_repository(self) -> str:
        return self.repository_name

    def get_clone_url(self, transport: TransportType | str) -> str:
        return get_clone_url(self, transport)

    def __str__(self) -> str:
        return f"{super().__str__()}/{self.repository_name}"

    def validate_fields(self, validator: Validator) -> None:
        super().validate_fields(validator)
        if not self.repository_name:
            validator.required("RepositoryName")


IdentityRef = Union[UserRef, OrganizationRef]
RepositoryRef = Union[OrgRepositoryRef, UserRepositoryRef]


def get_clone_url(ref: RepositoryRef, transport: TransportType | str) -> str:
    """
    Return the URL to clone a repository with, for the given transport type.

    An empty string is returned for unknown transport types.
    """
    domain, identity, repo = ref.get_domain(), ref.get_identity(), ref.get_repository()
    if transport == TransportType.HTTPS:
        return f"{ref}.git"
    if transport == TransportType.GIT:
        return f"git@{domain}:{identity}/{repo}.git"
    if transport == TransportType.SSH:
        return f"ssh://git@{domain}/{identity}/{repo}"
    return ""


def _parse_url(url: str) -> tuple[str, list[str]]:
    if not url:
        raise URLInvalidError("url cannot be empty")
    try:
        u = urlsplit(url)
        # Accessing the port validates it.
        u.port
    except ValueError as e:
        raise URLInvalidError(f"{URLInvalidError.default_message}: {url}") from e
    if u.scheme != "https":
        raise URLUnsupportedSchemeError(f"{URLUnsupportedSchemeError.default_message}: {url}")
    # Extra parts would break a parse/format round-trip.
    if u.fragment or u.query or u.username is not None or u.password is not None:
        raise URLUnsupportedPartsError(f"{URLUnsupportedPartsError.default_message}: {url}")
    if not u.netloc:
        raise URLInvalidError(f"{URLInvalidError.default_message}: {url}")

    parts = u.path.strip("/").split("/") if u.path else [""]
    # At least one part is guaranteed after this check.
    if any(not p for p in parts):
        raise URLInvalidError(f"{URLInvalidError.default_message}: {url}")
    return u.netloc, parts


def parse_organization_url(url: str) -> OrganizationRef:
    """Parse an HTTPS URL pointing to an organization; extra path parts are sub-organizations."""
    domain, parts = _parse_url(url)
    return OrganizationRef(domain=domain, organization=parts[0], sub_organizations=tuple(parts[1:]))


def _to_user_ref(org: OrganizationRef, url: str) -> UserRef:
    if org.sub_organizations:
        raise URLInvalidError(f"{URLInvalidError.default_message}: {url}")
    return UserRef(domain=org.domain, user_login=org.organization)


def parse_user_url(url: str) -> UserRef:
    return _to_user_ref(parse_organization_url(url), url)


def _parse_repository_url(url: str) -> tuple[OrganizationRef, str]:
    org = parse_organization_url(url)
    # The repository is the last "sub-organization" of the path.
    if not org.sub_organizations:
        raise URLMissingRepoNameError(f"{URLMissingRepoNameError.default_message}: {url}")
    repo_name = org.sub_organizations[-1].removesuffix(".git")
    return OrganizationRef(org.domain, org.organization, org.sub_organizations[:-1]), repo_name


def parse_org_repository_url(url: str) -> OrgRepositoryRef:
    """Parse an HTTPS clone URL into an OrgRepositoryRef."""
    org, repo_name = _parse_repository_url(url)
    return OrgRepositoryRef(
        domain=org.domain,
        organization=org.organization,
        sub_organizations=org.sub_organizations,
        repository_name=repo_name,
    )


def parse_user_repository_url(url: str) -> UserRepositoryRef:
    """Parse an HTTPS clone URL into a UserRepositoryRef."""
    org, repo_name = _parse_repository_url(url)
    user = _to_user_ref(org, url)
    return UserRepositoryRef(domain=user.domain, user_login=user.user_login, repository_name=repo_name)
