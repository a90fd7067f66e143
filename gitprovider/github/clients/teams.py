"""GitHub organization teams."""

from typing import Any

from gitprovider.client import TeamsClient
from gitprovider.exceptions import InvalidServerDataError
from gitprovider.github.util import ClientContext, list_all
from gitprovider.refs import OrganizationRef
from gitprovider.resources import Team
from gitprovider.types import TeamInfo


class GitHubTeam(Team):
    def __init__(self, users: list[dict[str, Any]], info: TeamInfo, ref: OrganizationRef) -> None:
        self._users = users
        self._info = info
        self._ref = ref

    def get(self) -> TeamInfo:
        return self._info

    def api_object(self) -> list[dict[str, Any]]:
        return self._users

    def organization(self) -> OrganizationRef:
        return self._ref


class GitHubTeamsClient(TeamsClient):
    """Teams of one GitHub organization."""

    def __init__(self, ctx: ClientContext, ref: OrganizationRef) -> None:
        self._ctx = ctx
        self._ref = ref

    def get(self, name: str) -> GitHubTeam:
        """
        Get a team and its members.

        Args:
            name: The team slug

        Raises:
            NotFoundError: If the team doesn't exist
        """
        users = list_all(self._ctx.transport, f"/orgs/{self._ref.organization}/teams/{name}/members")

        logins = []
        for user in users:
            if not user.get("login"):
                raise InvalidServerDataError(f"didn't expect login to be empty for user: {user}")
            logins.append(user["login"])

        return GitHubTeam(users, TeamInfo(name=name, members=logins), self._ref)

    def list(self) -> list[GitHubTeam]:
        teams = list_all(self._ctx.transport, f"/orgs/{self._ref.organization}/teams")

        result = []
        for team in teams:
            if not team.get("slug"):
                raise InvalidServerDataError(f"didn't expect slug to be empty for team: {team}")
            result.append(self.get(team["slug"]))
        return result
