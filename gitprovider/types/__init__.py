"""Git provider type definitions.

This module exports the info types shared by all providers.
"""

from gitprovider.types.base import InfoRequest, validate_and_default_info
from gitprovider.types.commits import CommitFile, CommitInfo
from gitprovider.types.organizations import OrganizationInfo, TeamInfo
from gitprovider.types.pulls import PullRequestInfo
from gitprovider.types.repos import DeployKeyInfo, RepositoryInfo, TeamAccessInfo
from gitprovider.types.trees import TreeEntry, TreeInfo

__all__ = [
    # Desired-state contract
    "InfoRequest",
    "validate_and_default_info",
    # Desired-state types
    "RepositoryInfo",
    "TeamAccessInfo",
    "DeployKeyInfo",
    # Read-only types
    "OrganizationInfo",
    "TeamInfo",
    "CommitInfo",
    "CommitFile",
    "PullRequestInfo",
    "TreeEntry",
    "TreeInfo",
]
