"""Enumerations shared by all providers."""

from enum import Enum
from typing import Any

from gitprovider.validation import FieldEnumInvalidError


class TransportType(str, Enum):
    """Transport used when cloning a repository."""

    # https://<domain>/<org>/[<sub-orgs...>/]<repo>.git
    HTTPS = "https"
    # git@<domain>:<org>/[<sub-orgs...>/]<repo>.git
    GIT = "git"
    # ssh://git@<domain>/<org>/[<sub-orgs...>/]<repo>
    SSH = "ssh"


class RepositoryVisibility(str, Enum):
    """Visibility of a repository."""

    PUBLIC = "public"
    # Accessible within the owning organization.
    INTERNAL = "internal"
    # Only accessible by explicitly added teams and members.
    PRIVATE = "private"


class RepositoryPermission(str, Enum):
    """Access level of a team or person on a repository.

    GitLab names these guest, reporter, developer, maintainer and owner.
    """

    PULL = "pull"
    TRIAGE = "triage"
    PUSH = "push"
    MAINTAIN = "maintain"
    ADMIN = "admin"


class LicenseTemplate(str, Enum):
    """License template used when auto-initializing a repository."""

    APACHE2 = "apache-2.0"
    MIT = "mit"
    GPL3 = "gpl-3.0"


class MergeMethod(str, Enum):
    """How a pull request is merged."""

    MERGE = "merge"
    SQUASH = "squash"


def _validate_enum(enum_cls: type[Enum], value: Any) -> None:
    raw = value.value if isinstance(value, Enum) else value
    if raw not in [member.value for member in enum_cls]:
        raise FieldEnumInvalidError(value=value)


def validate_repository_visibility(value: Any) -> None:
    _validate_enum(RepositoryVisibility, value)


def validate_repository_permission(value: Any) -> None:
    _validate_enum(RepositoryPermission, value)


def validate_license_template(value: Any) -> None:
    _validate_enum(LicenseTemplate, value)


def validate_merge_method(value: Any) -> None:
    _validate_enum(MergeMethod, value)
