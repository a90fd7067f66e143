"""GitHub adapter for gitprovider."""

from gitprovider.github.client import DEFAULT_DOMAIN, PROVIDER_ID, GitHubClient, api_base_url, new_client
from gitprovider.github.errors import ALREADY_EXISTS_MAGIC_STRING, handle_http_error

__all__ = [
    "DEFAULT_DOMAIN",
    "PROVIDER_ID",
    "GitHubClient",
    "api_base_url",
    "new_client",
    "ALREADY_EXISTS_MAGIC_STRING",
    "handle_http_error",
]
