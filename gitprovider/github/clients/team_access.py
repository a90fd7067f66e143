"""GitHub team permissions on organization repositories."""

from gitprovider.client import TeamAccessClient
from gitprovider.exceptions import InvalidArgumentError, NoProviderSupportError
from gitprovider.github.util import ClientContext, list_all, permission_from_map
from gitprovider.reconcile import reconcile
from gitprovider.refs import IdentityType, RepositoryRef
from gitprovider.resources import TeamAccess
from gitprovider.types import TeamAccessInfo, validate_and_default_info

# Makes GitHub answer with the repository, including the team's permissions on it.
_REPOSITORY_MEDIA_TYPE = "application/vnd.github.v3.repository+json"


class GitHubTeamAccess(TeamAccess):
    """A team's access to a repository. GitHub has no object for it, so api_object() is None."""

    def __init__(self, client: "GitHubTeamAccessClient", info: TeamAccessInfo) -> None:
        self._client = client
        self._info = info

    def get(self) -> TeamAccessInfo:
        return self._info

    def set(self, info: TeamAccessInfo) -> None:
        info.validate_info()
        self._info = info

    def api_object(self) -> None:
        return None

    def repository(self) -> RepositoryRef:
        return self._client.ref

    def update(self) -> None:
        # Adding a team that already has access replaces its permission.
        self.set(self._client.create(self._info).get())

    def delete(self) -> None:
        self._client.remove(self._info.name)

    def reconcile(self) -> bool:
        result = reconcile(
            self._info,
            get=lambda: self._client.get(self._info.name),
            create=self._client.create,
            kind="team access",
            ref=self._info.name,
        )
        self._info = result.resource.get()
        return result.action_taken


class GitHubTeamAccessClient(TeamAccessClient):
    """Team access to one GitHub organization repository."""

    def __init__(self, ctx: ClientContext, ref: RepositoryRef) -> None:
        self._ctx = ctx
        self.ref = ref

    def _team_path(self, team_name: str) -> str:
        owner = self.ref.get_identity()
        return f"/orgs/{owner}/teams/{team_name}/repos/{owner}/{self.ref.get_repository()}"

    def _disallow_user_account(self) -> None:
        identity_type = self.ref.get_type()
        if identity_type == IdentityType.ORGANIZATION:
            return
        if identity_type == IdentityType.SUBORGANIZATION:
            raise NoProviderSupportError("suborganizations aren't supported by GitHub")
        if identity_type == IdentityType.USER:
            raise InvalidArgumentError("cannot manage teams for a personal repository")
        raise InvalidArgumentError(f"unrecognized repository ref type {identity_type!r}")

    def get(self, name: str) -> GitHubTeamAccess:
        """
        Get the access the team has to this repository.

        Raises:
            NotFoundError: If the team has no access
        """
        self._disallow_user_account()

        api_obj = self._ctx.transport.request_json(
            "GET", self._team_path(name), headers={"Accept": _REPOSITORY_MEDIA_TYPE}
        )
        info = TeamAccessInfo(name=name)
        if api_obj and api_obj.get("permissions"):
            info.permission = permission_from_map(api_obj["permissions"])
        return GitHubTeamAccess(self, info)

    def create(self, info: TeamAccessInfo) -> GitHubTeamAccess:
        """Give a team access to this repository, with the permission defaulting to pull."""
        self._disallow_user_account()
        info = validate_and_default_info(info)

        permission = getattr(info.permission, "value", info.permission)
        self._ctx.transport.request("PUT", self._team_path(info.name), body={"permission": permission})
        return GitHubTeamAccess(self, info)

    def reconcile(self, info: TeamAccessInfo) -> tuple[GitHubTeamAccess, bool]:
        self._disallow_user_account()
        result = reconcile(
            info,
            get=lambda: self.get(info.name),
            create=self.create,
            kind="team access",
            ref=f"{self.ref}/{info.name}",
        )
        return result.resource, result.action_taken

    def remove(self, name: str) -> None:
        self._disallow_user_account()
        self._ctx.transport.request("DELETE", self._team_path(name))

    def list(self) -> list[GitHubTeamAccess]:
        self._disallow_user_account()

        path = f"/repos/{self.ref.get_identity()}/{self.ref.get_repository()}/teams"
        return [self.get(team["slug"]) for team in list_all(self._ctx.transport, path) if team.get("slug")]
