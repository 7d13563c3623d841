"""
Transport: auth handlers and the configured httpx client.

A single static credential is attached to every outgoing request. There is no
retry or refresh logic; expired or invalid credentials come back from the
server as 401/403.
"""
import base64
import logging
from abc import ABC, abstractmethod
from typing import Dict, Generator, Optional

import httpx

from .config import AuthConfig, ClientConfig, normalize_timeout
from .types import RequestContext

logger = logging.getLogger(__name__)
LOG_PREFIX = "[artifactory:transport]"

API_KEY_HEADER = "X-JFrog-Art-Api"


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 4 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 4:
        return "*" * len(val)
    return val[:4] + "*" * (len(val) - 4)


class AuthHandler(ABC):
    """Auth handler interface."""

    @abstractmethod
    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...


class BasicAuthHandler(AuthHandler):
    """HTTP basic auth handler."""

    def __init__(self, username: str, password: str):
        credentials = f"{username}:{password}".encode("utf-8")
        self._username = username
        self._value = "Basic " + base64.b64encode(credentials).decode("ascii")

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        logger.debug(
            f"{LOG_PREFIX} BasicAuthHandler.get_header: username={_mask_value(self._username)}"
        )
        return {"Authorization": self._value}


class ApiKeyAuthHandler(AuthHandler):
    """Artifactory API key handler (``X-JFrog-Art-Api``)."""

    def __init__(self, api_key: str):
        self._api_key = api_key

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        if not self._api_key:
            return None
        logger.debug(
            f"{LOG_PREFIX} ApiKeyAuthHandler.get_header: api_key={_mask_value(self._api_key)}"
        )
        return {API_KEY_HEADER: self._api_key}


class BearerAuthHandler(AuthHandler):
    """Bearer token auth handler."""

    def __init__(self, token: str):
        self._token = token

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        if not self._token:
            return None
        logger.debug(
            f"{LOG_PREFIX} BearerAuthHandler.get_header: token={_mask_value(self._token)}"
        )
        return {"Authorization": f"Bearer {self._token}"}


def create_auth_handler(config: AuthConfig) -> AuthHandler:
    """Create auth handler from config."""
    t = config.type
    logger.debug(
        f"{LOG_PREFIX} create_auth_handler: type={t}, username={_mask_value(config.username)}"
    )

    if t == "basic":
        return BasicAuthHandler(config.username or "", config.password.get_secret_value())

    if t == "api_key":
        return ApiKeyAuthHandler(config.api_key.get_secret_value())

    if t == "bearer":
        return BearerAuthHandler(config.token.get_secret_value())

    raise ValueError(f"Unsupported auth type: {t}")


class HandlerAuth(httpx.Auth):
    """Adapts an AuthHandler to httpx so every request carries the credential."""

    def __init__(self, handler: AuthHandler):
        self.handler = handler

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        context: RequestContext = {
            "method": request.method,
            "url": str(request.url),
            "headers": dict(request.headers),
        }
        auth_headers = self.handler.get_header(context)
        if auth_headers:
            request.headers.update(auth_headers)
        yield request


def create_http_client(config: ClientConfig) -> httpx.AsyncClient:
    """Create the httpx client used by Client, with auth, timeouts and TLS settings."""
    timeout = normalize_timeout(config.timeout)
    auth = HandlerAuth(create_auth_handler(config.auth)) if config.auth else None

    headers = {"User-Agent": config.user_agent}
    headers.update(config.headers)

    return httpx.AsyncClient(
        auth=auth,
        timeout=httpx.Timeout(
            connect=timeout.connect,
            read=timeout.read,
            write=timeout.write,
            pool=timeout.pool,
        ),
        headers=headers,
        verify=config.verify_ssl,
        follow_redirects=True,
    )
