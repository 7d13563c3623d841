"""
Artifactory Client - async typed client for the Artifactory REST API.

Example
-------
>>> from artifactory_client import AuthConfig, create_client
>>>
>>> auth = AuthConfig(type="basic", username="admin", password="password")
>>> async with create_client("http://localhost:8081/artifactory", auth=auth) as rt:
...     await rt.v1.system.ping()
...     results, _ = await rt.v1.artifacts.search_files("libs-local", "*.zip")
...     with open("/tmp/out.zip", "wb") as fh:
...         await rt.v1.artifacts.download_file_contents("libs-local", "a/b.zip", fh)
"""

__version__ = "0.1.0"

from .artifactory import Artifactory, create_client, from_config
from .config import AuthConfig, ClientConfig, TimeoutConfig
from .core import Client, Decoder, JsonDecoder, OneOrManyDecoder, TextDecoder
from .exceptions import (
    ArtifactoryError,
    ConfigError,
    DecodeError,
    HTTPStatusError,
    InvalidPathError,
    RequestBuildError,
    TransportError,
)
from .models import ErrorDetail, ErrorResponse
from .transport import (
    ApiKeyAuthHandler,
    AuthHandler,
    BasicAuthHandler,
    BearerAuthHandler,
    create_auth_handler,
    create_http_client,
)
from .types import AuthType, DiagnosticsEvent, EventHook, HttpMethod

__all__ = [
    "Artifactory", "create_client", "from_config",
    "AuthConfig", "ClientConfig", "TimeoutConfig",
    "Client", "Decoder", "JsonDecoder", "OneOrManyDecoder", "TextDecoder",
    "ArtifactoryError", "ConfigError", "DecodeError", "HTTPStatusError",
    "InvalidPathError", "RequestBuildError", "TransportError",
    "ErrorDetail", "ErrorResponse",
    "AuthHandler", "ApiKeyAuthHandler", "BasicAuthHandler", "BearerAuthHandler",
    "create_auth_handler", "create_http_client",
    "AuthType", "DiagnosticsEvent", "EventHook", "HttpMethod",
]
