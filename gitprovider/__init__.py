"""gitprovider - a provider-neutral client for Git hosting services."""

from gitprovider.client import (
    BranchClient,
    Client,
    CommitClient,
    DeployKeyClient,
    FileClient,
    OrganizationsClient,
    OrgRepositoriesClient,
    PullRequestClient,
    TeamAccessClient,
    TeamsClient,
    TreeClient,
    UserRepositoriesClient,
)
from gitprovider.enums import (
    LicenseTemplate,
    MergeMethod,
    RepositoryPermission,
    RepositoryVisibility,
    TransportType,
)
from gitprovider.exceptions import (
    AlreadyExistsError,
    ConfigurationError,
    DestructiveCallDisallowedError,
    DomainUnsupportedError,
    GitProviderError,
    HTTPError,
    InvalidArgumentError,
    InvalidClientOptionsError,
    InvalidCredentialsError,
    InvalidServerDataError,
    InvalidTransportChainReturnError,
    MultiError,
    NoProviderSupportError,
    NotFoundError,
    NotTopLevelOrganizationError,
    RateLimitError,
    TransportError,
    UnexpectedEventError,
    URLInvalidError,
    URLMissingRepoNameError,
    URLUnsupportedPartsError,
    URLUnsupportedSchemeError,
    ValidationError,
    is_a,
)
from gitprovider.logging import configure_logging, get_logger
from gitprovider.options import (
    ClientOptions,
    EditOptions,
    FilesGetOptions,
    RepositoryCreateOptions,
    RepositoryReconcileOptions,
    make_client_options,
    make_repository_create_options,
    with_ca_bundle,
    with_conditional_requests,
    with_destructive_api_calls,
    with_domain,
    with_oauth2_token,
    with_post_chain_transport_hook,
    with_pre_chain_transport_hook,
    with_retry_config,
    with_timeout,
)
from gitprovider.pagination import Page, all_pages
from gitprovider.reconcile import ReconcileResult, ReconcileState
from gitprovider.refs import (
    IdentityType,
    OrganizationRef,
    OrgRepositoryRef,
    UserRef,
    UserRepositoryRef,
    get_clone_url,
    parse_org_repository_url,
    parse_organization_url,
    parse_user_repository_url,
    parse_user_url,
)
from gitprovider.transport import HTTPTransport, RetryConfig
from gitprovider.types import (
    CommitFile,
    CommitInfo,
    DeployKeyInfo,
    InfoRequest,
    OrganizationInfo,
    PullRequestInfo,
    RepositoryInfo,
    TeamAccessInfo,
    TeamInfo,
    TreeEntry,
    TreeInfo,
    validate_and_default_info,
)
from gitprovider.validation import (
    FieldEnumInvalidError,
    FieldInvalidError,
    FieldRequiredError,
    FieldValidationError,
    Validator,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "Client",
    "OrganizationsClient",
    "OrgRepositoriesClient",
    "UserRepositoriesClient",
    "TeamsClient",
    "TeamAccessClient",
    "DeployKeyClient",
    "CommitClient",
    "BranchClient",
    "PullRequestClient",
    "FileClient",
    "TreeClient",
    # Refs
    "IdentityType",
    "UserRef",
    "OrganizationRef",
    "OrgRepositoryRef",
    "UserRepositoryRef",
    "get_clone_url",
    "parse_organization_url",
    "parse_user_url",
    "parse_org_repository_url",
    "parse_user_repository_url",
    # Types
    "InfoRequest",
    "validate_and_default_info",
    "RepositoryInfo",
    "TeamAccessInfo",
    "DeployKeyInfo",
    "OrganizationInfo",
    "TeamInfo",
    "CommitInfo",
    "CommitFile",
    "PullRequestInfo",
    "TreeEntry",
    "TreeInfo",
    # Enums
    "TransportType",
    "RepositoryVisibility",
    "RepositoryPermission",
    "LicenseTemplate",
    "MergeMethod",
    # Options
    "ClientOptions",
    "RepositoryCreateOptions",
    "RepositoryReconcileOptions",
    "FilesGetOptions",
    "EditOptions",
    "make_client_options",
    "make_repository_create_options",
    "with_domain",
    "with_destructive_api_calls",
    "with_pre_chain_transport_hook",
    "with_post_chain_transport_hook",
    "with_ca_bundle",
    "with_conditional_requests",
    "with_oauth2_token",
    "with_timeout",
    "with_retry_config",
    # Reconcile and pagination
    "ReconcileResult",
    "ReconcileState",
    "Page",
    "all_pages",
    # Exceptions
    "GitProviderError",
    "ConfigurationError",
    "NoProviderSupportError",
    "DomainUnsupportedError",
    "NotTopLevelOrganizationError",
    "InvalidArgumentError",
    "UnexpectedEventError",
    "AlreadyExistsError",
    "NotFoundError",
    "InvalidServerDataError",
    "URLUnsupportedSchemeError",
    "URLUnsupportedPartsError",
    "URLInvalidError",
    "URLMissingRepoNameError",
    "InvalidClientOptionsError",
    "DestructiveCallDisallowedError",
    "InvalidTransportChainReturnError",
    "HTTPError",
    "TransportError",
    "InvalidCredentialsError",
    "RateLimitError",
    "ValidationError",
    "MultiError",
    "is_a",
    # Validation
    "Validator",
    "FieldValidationError",
    "FieldRequiredError",
    "FieldInvalidError",
    "FieldEnumInvalidError",
    # Transport
    "HTTPTransport",
    "RetryConfig",
    # Logging
    "configure_logging",
    "get_logger",
]
