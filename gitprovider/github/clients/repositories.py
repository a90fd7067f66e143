"""GitHub organization and user repositories."""

from typing import Any

from gitprovider.client import OrgRepositoriesClient, UserRepositoriesClient
from gitprovider.enums import RepositoryVisibility, validate_repository_visibility
from gitprovider.github.clients.commits import GitHubBranchClient, GitHubCommitClient
from gitprovider.github.clients.deploy_keys import GitHubDeployKeyClient
from gitprovider.github.clients.files import GitHubFileClient, GitHubTreeClient
from gitprovider.github.clients.pulls import GitHubPullRequestClient
from gitprovider.github.clients.team_access import GitHubTeamAccessClient
from gitprovider.github.util import (
    ClientContext,
    list_all,
    validate_api_object,
    validate_org_repository_ref,
    validate_organization_ref,
    validate_user_ref,
    validate_user_repository_ref,
)
from gitprovider.options import RepositoryCreateOptions, make_repository_create_options
from gitprovider.reconcile import reconcile
from gitprovider.refs import (
    OrganizationRef,
    OrgRepositoryRef,
    RepositoryRef,
    UserRef,
    UserRepositoryRef,
)
from gitprovider.resources import OrgRepository, UserRepository
from gitprovider.types import RepositoryInfo, validate_and_default_info

# Fields of a GitHub repository that are desired state and sent back on
# update. Everything else (id, owner, timestamps, counters, urls, ...) is
# status set by the server.
REPOSITORY_SPEC_FIELDS = (
    "name",
    "description",
    "homepage",
    "private",
    "visibility",
    "default_branch",
    "has_issues",
    "has_projects",
    "has_wiki",
    "is_template",
    "allow_squash_merge",
    "allow_merge_commit",
    "allow_rebase_merge",
    "delete_branch_on_merge",
    "archived",
)


def validate_repository_api(api_obj: dict[str, Any]) -> None:
    def check(validator):
        if not api_obj.get("name"):
            validator.required("Name")
        visibility = api_obj.get("visibility")
        if visibility is not None:
            with validator.collect(visibility, "Visibility"):
                validate_repository_visibility(visibility)

    validate_api_object("GitHub.Repository", check)


def repository_from_api(api_obj: dict[str, Any]) -> RepositoryInfo:
    info = RepositoryInfo(
        description=api_obj.get("description"),
        default_branch=api_obj.get("default_branch"),
    )
    if api_obj.get("visibility") is not None:
        info.visibility = RepositoryVisibility(api_obj["visibility"])
    elif api_obj.get("private") is not None:
        info.visibility = RepositoryVisibility.PRIVATE if api_obj["private"] else RepositoryVisibility.PUBLIC
    return info


def repository_info_to_api(info: RepositoryInfo, api_obj: dict[str, Any]) -> None:
    """Copy the set fields of info into api_obj."""
    if info.description is not None:
        api_obj["description"] = info.description
    if info.default_branch is not None:
        api_obj["default_branch"] = info.default_branch
    if info.visibility is not None:
        visibility = RepositoryVisibility(info.visibility)
        api_obj["visibility"] = visibility.value
        api_obj["private"] = visibility != RepositoryVisibility.PUBLIC


def repository_spec(api_obj: dict[str, Any]) -> dict[str, Any]:
    return {k: api_obj[k] for k in REPOSITORY_SPEC_FIELDS if k in api_obj}


def get_repository(ctx: ClientContext, ref: RepositoryRef) -> dict[str, Any]:
    api_obj = ctx.transport.request_json("GET", f"/repos/{ref.get_identity()}/{ref.get_repository()}")
    validate_repository_api(api_obj)
    return api_obj


def create_repository(
    ctx: ClientContext,
    ref: RepositoryRef,
    info: RepositoryInfo,
    *opts: RepositoryCreateOptions,
) -> dict[str, Any]:
    """
    Create the repository ref points to.

    Raises:
        FieldValidationError / MultiError: If info or the options are invalid
        AlreadyExistsError: If the repository exists
    """
    info = validate_and_default_info(info)
    options = make_repository_create_options(*opts)

    data: dict[str, Any] = {"name": ref.get_repository()}
    repository_info_to_api(info, data)
    if options.auto_init is not None:
        data["auto_init"] = options.auto_init
    if options.license_template is not None:
        data["license_template"] = getattr(options.license_template, "value", options.license_template)

    if isinstance(ref, OrgRepositoryRef):
        path = f"/orgs/{ref.organization}/repos"
    else:
        # Repositories can only be created for the authenticated user.
        path = "/user/repos"

    api_obj = ctx.transport.request_json("POST", path, body=data)
    validate_repository_api(api_obj)
    return api_obj


class GitHubUserRepository(UserRepository):
    def __init__(self, ctx: ClientContext, api_obj: dict[str, Any], ref: RepositoryRef) -> None:
        self._ctx = ctx
        self._api_obj = api_obj
        self._ref = ref

        self._deploy_keys = GitHubDeployKeyClient(ctx, ref)
        self._commits = GitHubCommitClient(ctx, ref)
        self._branches = GitHubBranchClient(ctx, ref)
        self._pull_requests = GitHubPullRequestClient(ctx, ref)
        self._files = GitHubFileClient(ctx, ref)
        self._trees = GitHubTreeClient(ctx, ref)

    def get(self) -> RepositoryInfo:
        return repository_from_api(self._api_obj)

    def set(self, info: RepositoryInfo) -> None:
        info.validate_info()
        repository_info_to_api(info, self._api_obj)

    def api_object(self) -> dict[str, Any]:
        return self._api_obj

    def repository(self) -> RepositoryRef:
        return self._ref

    def update(self) -> None:
        api_obj = self._ctx.transport.request_json(
            "PATCH",
            f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}",
            body=repository_spec(self._api_obj),
        )
        validate_repository_api(api_obj)
        self._api_obj = api_obj

    def reconcile(self) -> bool:
        """Create the repository from the queued state, or bring it in line with it."""
        result = reconcile(
            self.get(),
            get=lambda: type(self)(self._ctx, get_repository(self._ctx, self._ref), self._ref),
            create=lambda info: type(self)(self._ctx, create_repository(self._ctx, self._ref, info), self._ref),
            kind="repository",
            ref=self._ref,
        )
        self._api_obj = result.resource.api_object()
        return result.action_taken

    def delete(self) -> None:
        self._ctx.require_destructive_actions("delete repository")
        self._ctx.transport.request("DELETE", f"/repos/{self._ref.get_identity()}/{self._ref.get_repository()}")

    @property
    def deploy_keys(self) -> GitHubDeployKeyClient:
        return self._deploy_keys

    @property
    def commits(self) -> GitHubCommitClient:
        return self._commits

    @property
    def branches(self) -> GitHubBranchClient:
        return self._branches

    @property
    def pull_requests(self) -> GitHubPullRequestClient:
        return self._pull_requests

    @property
    def files(self) -> GitHubFileClient:
        return self._files

    @property
    def trees(self) -> GitHubTreeClient:
        return self._trees


class GitHubOrgRepository(GitHubUserRepository, OrgRepository):
    def __init__(self, ctx: ClientContext, api_obj: dict[str, Any], ref: RepositoryRef) -> None:
        super().__init__(ctx, api_obj, ref)
        self._team_access = GitHubTeamAccessClient(ctx, ref)

    @property
    def team_access(self) -> GitHubTeamAccessClient:
        return self._team_access


class GitHubOrgRepositoriesClient(OrgRepositoriesClient):
    def __init__(self, ctx: ClientContext) -> None:
        self._ctx = ctx

    def get(self, ref: OrgRepositoryRef) -> GitHubOrgRepository:
        """
        Raises:
            NotFoundError: If the repository doesn't exist
            DomainUnsupportedError: If ref's domain isn't the client's
        """
        validate_org_repository_ref(ref, self._ctx.domain)
        return GitHubOrgRepository(self._ctx, get_repository(self._ctx, ref), ref)

    def create(
        self, ref: OrgRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> GitHubOrgRepository:
        validate_org_repository_ref(ref, self._ctx.domain)
        return GitHubOrgRepository(self._ctx, create_repository(self._ctx, ref, info, *opts), ref)

    def reconcile(
        self, ref: OrgRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> tuple[GitHubOrgRepository, bool]:
        result = reconcile(
            info,
            get=lambda: self.get(ref),
            create=lambda desired: self.create(ref, desired, *opts),
            kind="repository",
            ref=ref,
        )
        return result.resource, result.action_taken

    def list(self, ref: OrganizationRef) -> list[GitHubOrgRepository]:
        validate_organization_ref(ref, self._ctx.domain)

        repos = []
        for api_obj in list_all(self._ctx.transport, f"/orgs/{ref.organization}/repos"):
            validate_repository_api(api_obj)
            repo_ref = OrgRepositoryRef(
                domain=ref.domain,
                organization=ref.organization,
                sub_organizations=ref.sub_organizations,
                repository_name=api_obj["name"],
            )
            repos.append(GitHubOrgRepository(self._ctx, api_obj, repo_ref))
        return repos


class GitHubUserRepositoriesClient(UserRepositoriesClient):
    def __init__(self, ctx: ClientContext) -> None:
        self._ctx = ctx

    def get(self, ref: UserRepositoryRef) -> GitHubUserRepository:
        validate_user_repository_ref(ref, self._ctx.domain)
        return GitHubUserRepository(self._ctx, get_repository(self._ctx, ref), ref)

    def create(
        self, ref: UserRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> GitHubUserRepository:
        """
        Create a repository for the authenticated user; ref.user_login must be that user.

        Raises:
            AlreadyExistsError: If the repository exists
        """
        validate_user_repository_ref(ref, self._ctx.domain)
        return GitHubUserRepository(self._ctx, create_repository(self._ctx, ref, info, *opts), ref)

    def reconcile(
        self, ref: UserRepositoryRef, info: RepositoryInfo, *opts: RepositoryCreateOptions
    ) -> tuple[GitHubUserRepository, bool]:
        result = reconcile(
            info,
            get=lambda: self.get(ref),
            create=lambda desired: self.create(ref, desired, *opts),
            kind="repository",
            ref=ref,
        )
        return result.resource, result.action_taken

    def list(self, ref: UserRef) -> list[GitHubUserRepository]:
        validate_user_ref(ref, self._ctx.domain)

        repos = []
        for api_obj in list_all(self._ctx.transport, f"/users/{ref.user_login}/repos"):
            validate_repository_api(api_obj)
            repo_ref = UserRepositoryRef(domain=ref.domain, user_login=ref.user_login, repository_name=api_obj["name"])
            repos.append(GitHubUserRepository(self._ctx, api_obj, repo_ref))
        return repos
