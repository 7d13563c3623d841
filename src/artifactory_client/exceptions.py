"""
Exception classes raised by artifactory_client.

Every public operation either returns its result or raises one of these.
Nothing is retried and nothing is swallowed.
"""
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    import httpx

    from .models import ErrorResponse


class ArtifactoryError(Exception):
    """Base exception for all artifactory_client errors.

    Catch this to handle every failure raised by the client with a single
    except clause.
    """
    pass


class ConfigError(ArtifactoryError, ValueError):
    """Raised when client configuration is invalid."""
    pass


class RequestBuildError(ArtifactoryError, ValueError):
    """Raised when an outgoing request cannot be built.

    Covers bad path joins, unreadable upload sources and bodies that cannot
    be marshalled to JSON.
    """
    pass


class InvalidPathError(RequestBuildError):
    """Raised when a path resolves outside of the configured base URL."""

    def __init__(self, path: str, base_url: str):
        super().__init__(f"Path '{path}' resolves outside of base URL '{base_url}'")
        self.path = path
        self.base_url = base_url


class TransportError(ArtifactoryError):
    """Raised when the request never produced an HTTP response.

    Wraps network, DNS, TLS and timeout failures from httpx. The httpx
    exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, request: Optional["httpx.Request"] = None):
        super().__init__(message)
        self.request = request


class HTTPStatusError(ArtifactoryError):
    """Raised for any non-2xx response.

    The live response is kept so callers can still inspect status and headers.
    ``error_response`` holds the parsed ``{"errors": [...]}`` envelope when the
    body contained one, otherwise ``None`` and ``body`` has the raw text.
    """

    def __init__(
        self,
        response: "httpx.Response",
        error_response: Optional["ErrorResponse"] = None,
        body: str = "",
    ):
        self.response = response
        self.status_code = response.status_code
        self.error_response = error_response
        self.body = body
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        request = self.response.request
        msg = f"{request.method} {request.url}: {self.status_code} {self.response.reason_phrase}"
        if self.error_response and self.error_response.errors:
            details = "; ".join(
                f"{e.status}: {e.message}" for e in self.error_response.errors
            )
            return f"{msg} [{details}]"
        if self.body:
            return f"{msg} {self.body}"
        return msg


class DecodeError(ArtifactoryError):
    """Raised when a response body is not valid JSON or does not fit the target type.

    ``response`` is the 2xx response whose body failed to decode, set by the
    client so status and headers stay available.
    """

    def __init__(
        self,
        message: str,
        body: str = "",
        cause: Optional[Exception] = None,
        response: Optional["httpx.Response"] = None,
    ):
        super().__init__(message)
        self.body = body
        self.cause = cause
        self.response = response
