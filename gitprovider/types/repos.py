"""Repository-related info types."""

from dataclasses import dataclass

from gitprovider.enums import (
    RepositoryPermission,
    RepositoryVisibility,
    validate_repository_permission,
    validate_repository_visibility,
)
from gitprovider.types.base import InfoRequest
from gitprovider.validation import Validator

DEFAULT_REPOSITORY_VISIBILITY = RepositoryVisibility.PRIVATE
DEFAULT_REPOSITORY_PERMISSION = RepositoryPermission.PULL
DEFAULT_BRANCH_NAME = "main"
DEFAULT_DEPLOY_KEY_READ_ONLY = True


@dataclass
class RepositoryInfo(InfoRequest):
    """Desired state of a repository."""

    # No default at create time.
    description: str | None = None
    # Default at create time: "main".
    default_branch: str | None = None
    # Default at create time: private.
    visibility: RepositoryVisibility | str | None = None

    def default(self) -> None:
        if self.visibility is None:
            self.visibility = DEFAULT_REPOSITORY_VISIBILITY
        if self.default_branch is None:
            self.default_branch = DEFAULT_BRANCH_NAME

    def validate_info(self) -> None:
        validator = Validator("Repository")
        if self.visibility is not None:
            with validator.collect(self.visibility, "Visibility"):
                validate_repository_visibility(self.visibility)
        validator.raise_for_errors()


@dataclass
class TeamAccessInfo(InfoRequest):
    """A team's access to a repository."""

    # May contain slashes (GitLab subgroups).
    name: str = ""
    # Default: pull.
    permission: RepositoryPermission | str | None = None

    def default(self) -> None:
        if self.permission is None:
            self.permission = DEFAULT_REPOSITORY_PERMISSION

    def validate_info(self) -> None:
        validator = Validator("TeamAccess")
        if not self.name:
            validator.required("Name")
        if self.permission is not None:
            with validator.collect(self.permission, "Permission"):
                validate_repository_permission(self.permission)
        validator.raise_for_errors()


@dataclass
class DeployKeyInfo(InfoRequest):
    """A deploy key (e.g. an SSH public key) granting access to one repository."""

    # What the key is for.
    name: str = ""
    # The public part of the key.
    key: bytes = b""
    # Default: True.
    read_only: bool | None = None

    def default(self) -> None:
        if self.read_only is None:
            self.read_only = DEFAULT_DEPLOY_KEY_READ_ONLY

    def validate_info(self) -> None:
        validator = Validator("DeployKey")
        if not self.name:
            validator.required("Name")
        if not self.key:
            validator.required("Key")
        validator.raise_for_errors()
