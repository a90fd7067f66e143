"""GitHub resource clients."""

from gitprovider.github.clients.commits import GitHubBranchClient, GitHubCommit, GitHubCommitClient
from gitprovider.github.clients.deploy_keys import GitHubDeployKey, GitHubDeployKeyClient
from gitprovider.github.clients.files import GitHubFileClient, GitHubTreeClient
from gitprovider.github.clients.organizations import GitHubOrganization, GitHubOrganizationsClient
from gitprovider.github.clients.pulls import GitHubPullRequest, GitHubPullRequestClient
from gitprovider.github.clients.repositories import (
    GitHubOrgRepositoriesClient,
    GitHubOrgRepository,
    GitHubUserRepositoriesClient,
    GitHubUserRepository,
)
from gitprovider.github.clients.team_access import GitHubTeamAccess, GitHubTeamAccessClient
from gitprovider.github.clients.teams import GitHubTeam, GitHubTeamsClient

__all__ = [
    "GitHubBranchClient",
    "GitHubCommit",
    "GitHubCommitClient",
    "GitHubDeployKey",
    "GitHubDeployKeyClient",
    "GitHubFileClient",
    "GitHubTreeClient",
    "GitHubOrganization",
    "GitHubOrganizationsClient",
    "GitHubPullRequest",
    "GitHubPullRequestClient",
    "GitHubOrgRepositoriesClient",
    "GitHubOrgRepository",
    "GitHubUserRepositoriesClient",
    "GitHubUserRepository",
    "GitHubTeamAccess",
    "GitHubTeamAccessClient",
    "GitHubTeam",
    "GitHubTeamsClient",
]
