"""Resource objects returned by provider clients.

A resource pairs the backend-native object (``api_object()``) with the
provider-neutral projection returned by ``get()``. The projection is derived
from the native object on every call, so after ``set()`` it reflects the
queued desired state until ``update()`` writes it to the backend.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from gitprovider.refs import OrganizationRef, RepositoryRef
from gitprovider.types import (
    CommitInfo,
    DeployKeyInfo,
    OrganizationInfo,
    PullRequestInfo,
    RepositoryInfo,
    TeamAccessInfo,
    TeamInfo,
)

if TYPE_CHECKING:
    from gitprovider.client import (
        BranchClient,
        CommitClient,
        DeployKeyClient,
        FileClient,
        PullRequestClient,
        TeamAccessClient,
        TeamsClient,
        TreeClient,
    )


class Object(ABC):
    @abstractmethod
    def api_object(self) -> Any:
        """Return the underlying, backend-specific object."""


class Organization(Object):
    """A top-level organization or sub-organization."""

    @abstractmethod
    def organization(self) -> OrganizationRef: ...

    @abstractmethod
    def get(self) -> OrganizationInfo: ...

    @property
    @abstractmethod
    def teams(self) -> "TeamsClient":
        """Access to the teams of this organization."""


class Team(Object):
    @abstractmethod
    def organization(self) -> OrganizationRef: ...

    @abstractmethod
    def get(self) -> TeamInfo: ...


class UserRepository(Object):
    """A repository owned by a user account (or, as OrgRepository, an organization)."""

    @abstractmethod
    def repository(self) -> RepositoryRef: ...

    @abstractmethod
    def get(self) -> RepositoryInfo: ...

    @abstractmethod
    def set(self, info: RepositoryInfo) -> None:
        """
        Queue info as the desired state; nothing is sent to the backend.

        Raises:
            FieldValidationError / MultiError: If info is invalid
        """

    @abstractmethod
    def update(self) -> None:
        """Write the queued state to the backend."""

    @abstractmethod
    def reconcile(self) -> bool:
        """
        Make the backend match the queued state, creating the repository if absent.

        Returns:
            Whether an action was taken
        """

    @abstractmethod
    def delete(self) -> None:
        """
        Delete the repository.

        Raises:
            DestructiveCallDisallowedError: Unless the client allows destructive calls
        """

    @property
    @abstractmethod
    def deploy_keys(self) -> "DeployKeyClient": ...

    @property
    @abstractmethod
    def commits(self) -> "CommitClient": ...

    @property
    @abstractmethod
    def branches(self) -> "BranchClient": ...

    @property
    @abstractmethod
    def pull_requests(self) -> "PullRequestClient": ...

    @property
    @abstractmethod
    def files(self) -> "FileClient": ...

    @property
    @abstractmethod
    def trees(self) -> "TreeClient": ...


class OrgRepository(UserRepository):
    @property
    @abstractmethod
    def team_access(self) -> "TeamAccessClient": ...


class DeployKey(Object):
    @abstractmethod
    def repository(self) -> RepositoryRef: ...

    @abstractmethod
    def get(self) -> DeployKeyInfo: ...

    @abstractmethod
    def set(self, info: DeployKeyInfo) -> None: ...

    @abstractmethod
    def update(self) -> None: ...

    @abstractmethod
    def reconcile(self) -> bool: ...

    @abstractmethod
    def delete(self) -> None: ...


class TeamAccess(Object):
    """A team's permission on a repository."""

    @abstractmethod
    def repository(self) -> RepositoryRef: ...

    @abstractmethod
    def get(self) -> TeamAccessInfo: ...

    @abstractmethod
    def set(self, info: TeamAccessInfo) -> None: ...

    @abstractmethod
    def update(self) -> None: ...

    @abstractmethod
    def reconcile(self) -> bool: ...

    @abstractmethod
    def delete(self) -> None: ...


class Commit(Object):
    @abstractmethod
    def get(self) -> CommitInfo: ...


class PullRequest(Object):
    @abstractmethod
    def get(self) -> PullRequestInfo: ...
