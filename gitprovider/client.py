"""
The provider-neutral client interface.

Adapters (e.g. gitprovider.github) implement these classes. Unsupported
operations raise NoProviderSupportError.

Example:
    ```python
    from gitprovider import OrgRepositoryRef, RepositoryInfo
    from gitprovider.github import GitHubClient

    client = GitHubClient.from_env()
    ref = OrgRepositoryRef("github.com", "fluxcd", repository_name="flux2")
    repo, action_taken = client.org_repositories.reconcile(
        ref, RepositoryInfo(description="Open and extensible continuous delivery")
    )
    ```
"""

from abc import ABC, abstractmethod
from typing import Any

from gitprovider.enums import MergeMethod
from gitprovider.options import EditOptions, FilesGetOptions, RepositoryCreateOptions
from gitprovider.refs import OrganizationRef, OrgRepositoryRef, UserRef, UserRepositoryRef
from gitprovider.resources import (
    Commit,
    DeployKey,
    Organization,
    OrgRepository,
    PullRequest,
    Team,
    TeamAccess,
    UserRepository,
)
from gitprovider.types import (
    CommitFile,
    DeployKeyInfo,
    RepositoryInfo,
    TeamAccessInfo,
    TreeEntry,
    TreeInfo,
)


class OrganizationsClient(ABC):
    @abstractmethod
    def get(self, ref: OrganizationRef) -> Organization:
        """
        Get a specific organization the user has access to.

        Raises:
            NotFoundError: If the organization doesn't exist
        """

    @abstractmethod
    def children(self, ref: OrganizationRef) -> list[Organization]:
        """List the direct sub-organizations of ref."""

    # Kept last, as it shadows the builtin list in the class body.
    @abstractmethod
    def list(self) -> list[Organization]:
        """List all top-level organizations the user has access to (fully paginated)."""


class OrgRepositoriesClient(ABC):
    @abstractmethod
    def get(self, ref: OrgRepositoryRef) -> OrgRepository:
        """
        Raises:
            NotFoundError: If the repository doesn't exist
        """

    @abstractmethod
    def list(self, ref: OrganizationRef) -> list[OrgRepository]: ...

    @abstractmethod
    def create(
        self, ref: OrgRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> OrgRepository:
        """
        Create a repository in the organization.

        Raises:
            AlreadyExistsError: If the repository already exists
        """

    @abstractmethod
    def reconcile(
        self, ref: OrgRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> tuple[OrgRepository, bool]:
        """Make sure the repository exists with the given state; returns (resource, action_taken)."""


class UserRepositoriesClient(ABC):
    @abstractmethod
    def get(self, ref: UserRepositoryRef) -> UserRepository: ...

    @abstractmethod
    def list(self, ref: UserRef) -> list[UserRepository]: ...

    @abstractmethod
    def create(
        self, ref: UserRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> UserRepository: ...

    @abstractmethod
    def reconcile(
        self, ref: UserRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> tuple[UserRepository, bool]: ...


class TeamsClient(ABC):
    """Teams of one organization."""

    @abstractmethod
    def get(self, name: str) -> Team: ...

    @abstractmethod
    def list(self) -> list[Team]: ...


class TeamAccessClient(ABC):
    """Team permissions on one repository."""

    @abstractmethod
    def get(self, name: str) -> TeamAccess: ...

    @abstractmethod
    def list(self) -> list[TeamAccess]: ...

    @abstractmethod
    def create(self, info: TeamAccessInfo) -> TeamAccess: ...

    @abstractmethod
    def reconcile(self, info: TeamAccessInfo) -> tuple[TeamAccess, bool]: ...


class DeployKeyClient(ABC):
    """Deploy keys of one repository."""

    @abstractmethod
    def get(self, name: str) -> DeployKey: ...

    @abstractmethod
    def list(self) -> list[DeployKey]: ...

    @abstractmethod
    def create(self, info: DeployKeyInfo) -> DeployKey: ...

    @abstractmethod
    def reconcile(self, info: DeployKeyInfo) -> tuple[DeployKey, bool]: ...


class CommitClient(ABC):
    @abstractmethod
    def list_page(self, branch: str, per_page: int, page: int) -> list[Commit]:
        """List one page of the commits on branch, newest first."""

    @abstractmethod
    def create(self, branch: str, message: str, files: list[CommitFile]) -> Commit:
        """Commit files on top of the head of branch."""


class BranchClient(ABC):
    @abstractmethod
    def create(self, branch: str, sha: str) -> None:
        """Create branch pointing at the commit sha."""


class PullRequestClient(ABC):
    @abstractmethod
    def list(self) -> list[PullRequest]: ...

    @abstractmethod
    def create(self, title: str, branch: str, base_branch: str, description: str) -> PullRequest: ...

    @abstractmethod
    def get(self, number: int) -> PullRequest: ...

    @abstractmethod
    def merge(self, number: int, merge_method: MergeMethod | str, message: str) -> None: ...

    @abstractmethod
    def edit(self, number: int, opts: EditOptions) -> PullRequest: ...


class FileClient(ABC):
    @abstractmethod
    def get(self, path: str, branch: str, *opts: FilesGetOptions) -> list[CommitFile]:
        """Get the files in the directory path on branch."""


class TreeClient(ABC):
    @abstractmethod
    def create(self, tree: TreeInfo) -> TreeInfo:
        """Create a tree; tree.sha is the base tree to build on, if set."""

    @abstractmethod
    def get(self, sha: str, recursive: bool = False) -> TreeInfo: ...

    @abstractmethod
    def list(self, sha: str, path: str = "", recursive: bool = False) -> list[TreeEntry]:
        """List the files (blobs) of a tree, optionally only those under path."""


class Client(ABC):
    """A client for one Git provider, bound to one domain."""

    @abstractmethod
    def supported_domain(self) -> str:
        """The domain this client handles, e.g. "github.com"."""

    @abstractmethod
    def provider_id(self) -> str:
        """The provider ID, e.g. "github"."""

    @abstractmethod
    def raw(self) -> Any:
        """The underlying HTTP client."""

    @property
    @abstractmethod
    def organizations(self) -> OrganizationsClient: ...

    @property
    @abstractmethod
    def org_repositories(self) -> OrgRepositoriesClient: ...

    @property
    @abstractmethod
    def user_repositories(self) -> UserRepositoriesClient: ...
