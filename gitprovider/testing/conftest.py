"""
Pytest plugin for gitprovider testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitprovider.testing.conftest"]

Or import the fixtures directly:

    from gitprovider.testing.fixtures import fake_client, fake_org
"""

# Re-export all fixtures for pytest auto-discovery
from gitprovider.testing.fixtures import (
    fake_client,
    fake_org,
    fake_org_repository_ref,
    fake_user_ref,
    fake_user_repository_ref,
    github_client_factory,
    sample_deploy_key_info,
    sample_repository_info,
    sample_team_access_info,
    ssh_key_pair,
)

__all__ = [
    "fake_client",
    "fake_org",
    "fake_org_repository_ref",
    "fake_user_ref",
    "fake_user_repository_ref",
    "github_client_factory",
    "ssh_key_pair",
    "sample_repository_info",
    "sample_deploy_key_info",
    "sample_team_access_info",
]
