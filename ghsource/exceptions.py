"""ghsource exception classes."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ghsource.types.packages import PackageSnapshot


class GhSourceError(Exception):
    """Base exception for all ghsource errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GhSourceError):
    """Raised when settings or environment configuration are invalid."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(GhSourceError):
    """Raised when a request fails before any HTTP response is received."""

    pass


class HTTPStatusError(TransportError):
    """Raised for any HTTP response with an error status."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class AuthenticationError(HTTPStatusError):
    """Raised when the token is missing or rejected (401)."""

    pass


class AuthorizationError(HTTPStatusError):
    """Raised when access is denied (403)."""

    pass


class NotFoundError(HTTPStatusError):
    """Raised when a resource is not found (404)."""

    pass


class RateLimitedError(HTTPStatusError):
    """Raised when rate limited (429)."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, request_id)
        self.retry_after = retry_after


class ValidationError(HTTPStatusError):
    """Raised on other client errors (4xx)."""

    pass


class ServerError(HTTPStatusError):
    """Raised on server errors (5xx)."""

    pass


class BadRefTypeError(GhSourceError):
    """Raised when a ref points at something other than a commit or a tag of a commit."""

    def __init__(self, ref_type: str | None, second_order: bool = False) -> None:
        message = f"Bad type {ref_type}"
        if second_order:
            message = f"Bad type (2nd order) {ref_type}"
        super().__init__("BAD_REF_TYPE", message)
        self.ref_type = ref_type
        self.second_order = second_order


class ManifestError(GhSourceError):
    """Raised when a package manifest cannot be parsed."""

    def __init__(self, message: str) -> None:
        super().__init__("BAD_MANIFEST", message)


class PackageFetchError(GhSourceError):
    """
    Raised when a package download fails partway.

    ``snapshot`` is the working snapshot at the time of failure. Its ``sha``
    is always empty, so it never claims a commit it does not fully back.
    """

    def __init__(self, message: str, snapshot: "PackageSnapshot") -> None:
        super().__init__("PACKAGE_FETCH_FAILED", message)
        self.snapshot = snapshot


class GistNotFoundError(GhSourceError):
    """Raised when the gist to update does not exist."""

    def __init__(self, gist_id: str) -> None:
        super().__init__("GIST_NOT_FOUND", f"Gist {gist_id} not found")
        self.gist_id = gist_id
        self.status_code = 404


class AuthScopeError(GhSourceError):
    """Raised when gist creation returns 404, which means the token lacks the gist scope."""

    def __init__(self, body: str) -> None:
        super().__init__(
            "AUTH_SCOPE",
            "Make sure to add the ``gist`` scope to your token. " + body,
        )
        self.body = body


class GistPublishError(GhSourceError):
    """Raised for any other failed gist request; ``body`` is the raw response text."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__("GIST_PUBLISH_FAILED", body)
        self.status_code = status_code
        self.body = body
