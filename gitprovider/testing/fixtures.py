"""
Pytest fixtures for gitprovider testing.

Provides common fixtures for testing applications that reconcile Git
provider resources.
"""

from collections.abc import Callable, Generator
from typing import Any

import httpx
import pytest

from gitprovider.enums import RepositoryPermission, RepositoryVisibility
from gitprovider.github.client import GitHubClient
from gitprovider.options import ClientOptions, with_oauth2_token, with_post_chain_transport_hook
from gitprovider.refs import OrganizationRef, OrgRepositoryRef, UserRef, UserRepositoryRef
from gitprovider.testing.fake import FakeClient
from gitprovider.testing.keys import SSHKeyPair, generate_ssh_key_pair
from gitprovider.types import DeployKeyInfo, RepositoryInfo, TeamAccessInfo

FAKE_ORG = "fake-org"
FAKE_USER = "fake-user"
FAKE_TEAM = "fake-team"


# ============================================================================
# Fake Client Fixtures
# ============================================================================


@pytest.fixture
def fake_client() -> Generator[FakeClient, None, None]:
    """
    Provide an empty FakeClient.

    Example:
        ```python
        def test_my_feature(fake_client):
            org = fake_client.add_organization("acme")
            ensure_repositories(fake_client, org)
            assert fake_client.was_called("repositories.create")
        ```
    """
    client = FakeClient()
    yield client
    client.reset()


@pytest.fixture
def fake_org(fake_client: FakeClient) -> OrganizationRef:
    """Provide an organization registered in fake_client, with one team."""
    ref = fake_client.add_organization(FAKE_ORG, display_name="Fake Org", description="An organization for tests")
    fake_client.add_team(ref, FAKE_TEAM, ["alice", "bob"])
    return ref


@pytest.fixture
def fake_org_repository_ref(fake_org: OrganizationRef) -> OrgRepositoryRef:
    """Provide a ref to a (not yet created) repository in fake_org."""
    return OrgRepositoryRef(fake_org.domain, fake_org.organization, repository_name="fake-repo")


@pytest.fixture
def fake_user_repository_ref(fake_client: FakeClient) -> UserRepositoryRef:
    """Provide a ref to a (not yet created) repository of a user."""
    return UserRepositoryRef(fake_client.domain, FAKE_USER, repository_name="fake-repo")


@pytest.fixture
def fake_user_ref(fake_client: FakeClient) -> UserRef:
    return UserRef(fake_client.domain, FAKE_USER)


# ============================================================================
# Key Fixtures
# ============================================================================


@pytest.fixture
def ssh_key_pair() -> SSHKeyPair:
    """
    Provide a generated Ed25519 SSH key pair.

    Example:
        ```python
        def test_deploy_key(ssh_key_pair):
            assert ssh_key_pair.public_key.startswith(b"ssh-ed25519 ")
        ```
    """
    return generate_ssh_key_pair()


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_repository_info() -> RepositoryInfo:
    """Provide a fully set RepositoryInfo."""
    return RepositoryInfo(
        description="A repository for tests",
        default_branch="main",
        visibility=RepositoryVisibility.PRIVATE,
    )


@pytest.fixture
def sample_deploy_key_info(ssh_key_pair: SSHKeyPair) -> DeployKeyInfo:
    """Provide a DeployKeyInfo for a freshly generated key."""
    return DeployKeyInfo(name="test-deploy-key", key=ssh_key_pair.public_key, read_only=True)


@pytest.fixture
def sample_team_access_info() -> TeamAccessInfo:
    return TeamAccessInfo(name=FAKE_TEAM, permission=RepositoryPermission.PUSH)


# ============================================================================
# GitHub Client Fixtures
# ============================================================================


@pytest.fixture
def github_client_factory() -> Generator[Callable[..., GitHubClient], None, None]:
    """
    Provide a factory for GitHub clients that talk to an httpx mock handler.

    Example:
        ```python
        def test_get_org(github_client_factory):
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, json={"login": "fluxcd"})

            client = github_client_factory(handler)
            client.organizations.get(OrganizationRef("github.com", "fluxcd"))
        ```
    """
    clients: list[GitHubClient] = []

    def factory(handler: Callable[[httpx.Request], Any], *opts: ClientOptions) -> GitHubClient:
        client = GitHubClient(
            with_oauth2_token("test-token"),
            with_post_chain_transport_hook(lambda _: httpx.MockTransport(handler)),
            *opts,
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
