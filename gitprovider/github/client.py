"""
GitHub client.

Provides the entry point for talking to github.com or a GitHub Enterprise
Server through the provider-neutral interface.
"""

import os
from typing import Any

import httpx

from gitprovider.client import Client
from gitprovider.exceptions import ConfigurationError
from gitprovider.github.clients import (
    GitHubOrganizationsClient,
    GitHubOrgRepositoriesClient,
    GitHubUserRepositoriesClient,
)
from gitprovider.github.errors import handle_http_error
from gitprovider.github.util import ClientContext
from gitprovider.options import (
    ClientOptions,
    make_client_options,
    with_destructive_api_calls,
    with_domain,
    with_oauth2_token,
    with_timeout,
)
from gitprovider.transport import HTTPTransport, build_transport_chain

DEFAULT_DOMAIN = "github.com"
PROVIDER_ID = "github"

_TRUTHY = ("true", "1", "yes")


def api_base_url(domain: str) -> str:
    """Return the REST API root for github.com or a GitHub Enterprise Server domain."""
    if domain == DEFAULT_DOMAIN:
        return "https://api.github.com"
    if "://" not in domain:
        domain = f"https://{domain}"
    return f"{domain.rstrip('/')}/api/v3"


class GitHubClient(Client):
    """
    Client for the GitHub REST API.

    Example:
        ```python
        from gitprovider import OrganizationRef, with_oauth2_token
        from gitprovider.github import GitHubClient

        with GitHubClient(with_oauth2_token(token)) as client:
            org = client.organizations.get(OrganizationRef("github.com", "fluxcd"))
            print(org.get().name)
        ```
    """

    DEFAULT_TIMEOUT = 30.0

    def __init__(self, *opts: ClientOptions) -> None:
        """
        Initialize the GitHub client.

        Args:
            opts: Client options, e.g. with_oauth2_token(...), with_domain(...)

        Raises:
            InvalidClientOptionsError: If an option is given twice, or the domain is empty
            InvalidTransportChainReturnError: If a transport hook returned None
        """
        options = make_client_options(*opts)
        self._domain = options.domain or DEFAULT_DOMAIN

        transport_chain = build_transport_chain(
            pre_chain_hook=options.pre_chain_transport_hook,
            post_chain_hook=options.post_chain_transport_hook,
            ca_bundle=options.ca_bundle,
            enable_conditional_requests=bool(options.enable_conditional_requests),
        )
        self._transport = HTTPTransport(
            base_url=api_base_url(self._domain),
            token=options.token,
            transport=transport_chain,
            timeout=options.timeout if options.timeout is not None else self.DEFAULT_TIMEOUT,
            retry_config=options.retry_config,
            headers={"Accept": "application/vnd.github+json", "X-GitHub-Api-Version": "2022-11-28"},
            error_handler=handle_http_error,
        )
        self._ctx = ClientContext(
            transport=self._transport,
            domain=self._domain,
            destructive_actions=bool(options.enable_destructive_api_calls),
        )

        self._organizations = GitHubOrganizationsClient(self._ctx)
        self._org_repositories = GitHubOrgRepositoriesClient(self._ctx)
        self._user_repositories = GitHubUserRepositoriesClient(self._ctx)

    @classmethod
    def from_env(cls, *opts: ClientOptions) -> "GitHubClient":
        """
        Create a client from environment variables.

        Environment variables:
            GITHUB_TOKEN: Personal access or OAuth2 token (required)
            GITPROVIDER_DOMAIN: GitHub Enterprise domain (optional, default: github.com)
            GITPROVIDER_DESTRUCTIVE_CALLS: "true", "1" or "yes" to allow destructive calls (optional)
            GITPROVIDER_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Args:
            opts: Additional options; these may not repeat an option set from the environment

        Raises:
            ConfigurationError: If GITHUB_TOKEN is missing or a variable is malformed
        """
        token = os.environ.get("GITHUB_TOKEN")
        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable not set")

        env_opts = [with_oauth2_token(token)]

        domain = os.environ.get("GITPROVIDER_DOMAIN")
        if domain:
            env_opts.append(with_domain(domain))

        destructive = os.environ.get("GITPROVIDER_DESTRUCTIVE_CALLS")
        if destructive:
            env_opts.append(with_destructive_api_calls(destructive.lower() in _TRUTHY))

        timeout = os.environ.get("GITPROVIDER_TIMEOUT")
        if timeout:
            try:
                env_opts.append(with_timeout(float(timeout)))
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GITPROVIDER_TIMEOUT: {timeout}. Must be a number of seconds"
                ) from None

        return cls(*env_opts, *opts)

    def supported_domain(self) -> str:
        return self._domain

    def provider_id(self) -> str:
        return PROVIDER_ID

    def raw(self) -> httpx.Client:
        return self._transport.client

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    @property
    def organizations(self) -> GitHubOrganizationsClient:
        return self._organizations

    @property
    def org_repositories(self) -> GitHubOrgRepositoriesClient:
        return self._org_repositories

    @property
    def user_repositories(self) -> GitHubUserRepositoriesClient:
        return self._user_repositories

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


def new_client(*opts: ClientOptions) -> GitHubClient:
    """Create a GitHub client; see GitHubClient."""
    return GitHubClient(*opts)
