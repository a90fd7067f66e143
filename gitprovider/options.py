"""Options for clients and for resource operations.

Options are small dataclasses where None means "not set". Several partial
option objects are merged into one, e.g.::

    opts = make_client_options(
        with_oauth2_token(token),
        with_destructive_api_calls(True),
    )
"""

from collections.abc import Callable
from dataclasses import dataclass, fields

import httpx

from gitprovider.enums import LicenseTemplate, validate_license_template
from gitprovider.exceptions import InvalidClientOptionsError
from gitprovider.transport import RetryConfig
from gitprovider.validation import Validator

# Returns a higher-level "out" transport wrapping the "in" transport. "in" may
# be None, in which case a default httpx.HTTPTransport should be used. "out"
# must never be None.
ChainableTransportFunc = Callable[[httpx.BaseTransport | None], httpx.BaseTransport]


@dataclass
class RepositoryCreateOptions:
    """Optional settings used when creating (or reconciling) a repository."""

    # Initialize the repository with a README (and license) in the first commit.
    # Default: None, which means "don't".
    auto_init: bool | None = None
    # License to add when auto_init is True.
    license_template: LicenseTemplate | str | None = None

    def apply_to(self, target: "RepositoryCreateOptions") -> None:
        if self.auto_init is not None:
            target.auto_init = self.auto_init
        if self.license_template is not None:
            target.license_template = self.license_template

    def validate_options(self) -> None:
        validator = Validator("RepositoryCreateOptions")
        if self.license_template is not None:
            with validator.collect(self.license_template, "LicenseTemplate"):
                validate_license_template(self.license_template)
        validator.raise_for_errors()


# Reconciling a repository may create it, so it takes the same options.
RepositoryReconcileOptions = RepositoryCreateOptions


def make_repository_create_options(*opts: RepositoryCreateOptions) -> RepositoryCreateOptions:
    """
    Merge the given options; later options win.

    Raises:
        FieldEnumInvalidError: If the license template isn't a known value
    """
    target = RepositoryCreateOptions()
    for opt in opts:
        opt.apply_to(target)
    target.validate_options()
    return target


@dataclass
class FilesGetOptions:
    """Options for FileClient.get()."""

    # Also return files in sub-directories.
    recursive: bool = False


@dataclass
class EditOptions:
    """Fields to change on a pull request; None leaves a field as is."""

    title: str | None = None


@dataclass
class ClientOptions:
    """Construction-time options for a provider client."""

    # Target domain; the provider's default domain is used when unset.
    domain: str | None = None
    # Allow destructive calls such as deleting a repository. Default: False.
    enable_destructive_api_calls: bool | None = None
    # Wraps the provider-specific transport (auth, caching). The chain is:
    # API <-> post-chain <-> provider-specific <-> pre-chain <-> httpx.Client
    pre_chain_transport_hook: ChainableTransportFunc | None = None
    # The last transport before the API; always called with None.
    post_chain_transport_hook: ChainableTransportFunc | None = None
    # PEM encoded CA certificates to trust.
    ca_bundle: bytes | None = None
    # Cache GET responses and revalidate them with ETags.
    enable_conditional_requests: bool | None = None
    # OAuth2 / personal access token.
    token: str | None = None
    # Request timeout in seconds.
    timeout: float | None = None
    retry_config: RetryConfig | None = None

    def apply_to(self, target: "ClientOptions") -> None:
        """
        Copy the set fields of this object into target.

        Raises:
            InvalidClientOptionsError: If a field is set in both, or domain is empty
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if getattr(target, f.name) is not None:
                raise InvalidClientOptionsError(f"option {f.name} already configured")
            if f.name == "domain" and not value:
                raise InvalidClientOptionsError("option domain cannot be an empty string")
            setattr(target, f.name, value)


def make_client_options(*opts: ClientOptions) -> ClientOptions:
    target = ClientOptions()
    for opt in opts:
        opt.apply_to(target)
    return target


def with_domain(domain: str) -> ClientOptions:
    return ClientOptions(domain=domain)


def with_destructive_api_calls(enabled: bool) -> ClientOptions:
    return ClientOptions(enable_destructive_api_calls=enabled)


def with_pre_chain_transport_hook(hook: ChainableTransportFunc) -> ClientOptions:
    return ClientOptions(pre_chain_transport_hook=hook)


def with_post_chain_transport_hook(hook: ChainableTransportFunc) -> ClientOptions:
    return ClientOptions(post_chain_transport_hook=hook)


def with_ca_bundle(ca_bundle: bytes) -> ClientOptions:
    return ClientOptions(ca_bundle=ca_bundle)


def with_conditional_requests(enabled: bool) -> ClientOptions:
    return ClientOptions(enable_conditional_requests=enabled)


def with_oauth2_token(token: str) -> ClientOptions:
    return ClientOptions(token=token)


def with_timeout(timeout: float) -> ClientOptions:
    return ClientOptions(timeout=timeout)


def with_retry_config(retry_config: RetryConfig) -> ClientOptions:
    return ClientOptions(retry_config=retry_config)
