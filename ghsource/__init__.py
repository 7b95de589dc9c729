"""ghsource - policy-checked, commit-cached GitHub package sources."""

from ghsource.client import PackageSourceClient
from ghsource.config import SourceSettings, use_proxy
from ghsource.exceptions import (
    AuthenticationError,
    AuthorizationError,
    AuthScopeError,
    BadRefTypeError,
    ConfigurationError,
    GhSourceError,
    GistNotFoundError,
    GistPublishError,
    HTTPStatusError,
    ManifestError,
    NotFoundError,
    PackageFetchError,
    RateLimitedError,
    ServerError,
    TransportError,
    ValidationError,
)
from ghsource.identifiers import (
    canonicalize,
    is_github_id,
    normalize_repo_id,
    parse_identifier,
    parse_repo_url,
)
from ghsource.logging import configure_logging, get_logger
from ghsource.policy import PolicyConfig, classify, repo_icon_url, repo_status
from ghsource.types import (
    GitRepo,
    PackageManifest,
    PackageSnapshot,
    RefObject,
    RefsSnapshot,
    RepoIdentifier,
    RepoStatus,
    Unparsable,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Main client
    "PackageSourceClient",
    # Configuration
    "SourceSettings",
    "use_proxy",
    # Identifiers
    "parse_identifier",
    "parse_repo_url",
    "canonicalize",
    "normalize_repo_id",
    "is_github_id",
    # Policy
    "PolicyConfig",
    "classify",
    "repo_status",
    "repo_icon_url",
    # Types
    "RepoIdentifier",
    "Unparsable",
    "RefObject",
    "RefsSnapshot",
    "PackageSnapshot",
    "PackageManifest",
    "GitRepo",
    "RepoStatus",
    # Exceptions
    "GhSourceError",
    "ConfigurationError",
    "TransportError",
    "HTTPStatusError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "RateLimitedError",
    "ValidationError",
    "ServerError",
    "BadRefTypeError",
    "ManifestError",
    "PackageFetchError",
    "GistNotFoundError",
    "AuthScopeError",
    "GistPublishError",
    # Logging
    "configure_logging",
    "get_logger",
]
