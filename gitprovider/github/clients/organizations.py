"""GitHub organizations."""

from typing import Any

from gitprovider.client import OrganizationsClient
from gitprovider.exceptions import NoProviderSupportError
from gitprovider.github.clients.teams import GitHubTeamsClient
from gitprovider.github.util import (
    ClientContext,
    list_all,
    validate_api_object,
    validate_organization_ref,
)
from gitprovider.refs import OrganizationRef
from gitprovider.resources import Organization
from gitprovider.types import OrganizationInfo


def validate_organization_api(api_obj: dict[str, Any]) -> None:
    def check(validator):
        if not api_obj.get("login"):
            validator.required("Login")

    validate_api_object("GitHub.Organization", check)


def organization_from_api(api_obj: dict[str, Any]) -> OrganizationInfo:
    return OrganizationInfo(name=api_obj.get("name"), description=api_obj.get("description"))


class GitHubOrganization(Organization):
    def __init__(self, ctx: ClientContext, api_obj: dict[str, Any], ref: OrganizationRef) -> None:
        self._api_obj = api_obj
        self._ref = ref
        self._teams = GitHubTeamsClient(ctx, ref)

    def get(self) -> OrganizationInfo:
        return organization_from_api(self._api_obj)

    def api_object(self) -> dict[str, Any]:
        return self._api_obj

    def organization(self) -> OrganizationRef:
        return self._ref

    @property
    def teams(self) -> GitHubTeamsClient:
        return self._teams


class GitHubOrganizationsClient(OrganizationsClient):
    def __init__(self, ctx: ClientContext) -> None:
        self._ctx = ctx

    def get(self, ref: OrganizationRef) -> GitHubOrganization:
        """
        Get an organization.

        Raises:
            NotFoundError: If the organization doesn't exist
            NoProviderSupportError: If ref is a sub-organization
            DomainUnsupportedError: If ref's domain isn't the client's
        """
        validate_organization_ref(ref, self._ctx.domain)

        api_obj = self._ctx.transport.request_json("GET", f"/orgs/{ref.organization}")
        validate_organization_api(api_obj)
        return GitHubOrganization(self._ctx, api_obj, ref)

    def children(self, ref: OrganizationRef) -> list[GitHubOrganization]:
        raise NoProviderSupportError("github doesn't support sub-organizations")

    def list(self) -> list[GitHubOrganization]:
        """List the organizations the authenticated user is a member of."""
        orgs = []
        for api_obj in list_all(self._ctx.transport, "/user/orgs"):
            validate_organization_api(api_obj)
            ref = OrganizationRef(domain=self._ctx.domain, organization=api_obj["login"])
            orgs.append(GitHubOrganization(self._ctx, api_obj, ref))
        return orgs
