"""
Entry point bundling every API group behind one shared Client.
"""
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from .config import AuthConfig, ClientConfig
from .core.client import Client
from .exceptions import ConfigError
from .types import EventHook
from .v1 import V1
from .v2 import V2


class Artifactory:
    """Container for all the API methods.

    >>> async with create_client("https://example.com/artifactory", auth=auth) as rt:
    ...     info, _ = await rt.v1.artifacts.file_info("libs-release", "org/foo/1.0/foo.jar")
    """

    def __init__(self, client: Client):
        self.client = client
        self.v1 = V1(client)
        self.v2 = V2(client)

    async def close(self) -> None:
        await self.client.close()

    async def __aenter__(self) -> "Artifactory":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def create_client(
    base_url: str,
    auth: Optional[AuthConfig] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    on_event: Optional[EventHook] = None,
    logger: Optional[logging.Logger] = None,
    **config: Any,
) -> Artifactory:
    """Create an Artifactory container for ``base_url``.

    Extra keyword arguments are ClientConfig fields (``timeout``, ``headers``,
    ``verify_ssl``, ``chunk_size``...). Observability is wired through
    ``on_event`` and ``logger``; no global logging state is touched.

    Raises:
        ConfigError: when the base URL or any config value is invalid
    """
    try:
        client_config = ClientConfig(base_url=base_url, auth=auth, **config)
    except ValidationError as e:
        raise ConfigError(str(e)) from e
    return from_config(client_config, http_client=http_client, on_event=on_event, logger=logger)


def from_config(
    config: ClientConfig,
    http_client: Optional[httpx.AsyncClient] = None,
    on_event: Optional[EventHook] = None,
    logger: Optional[logging.Logger] = None,
) -> Artifactory:
    """Create an Artifactory container from an existing ClientConfig."""
    client = Client(config, http_client=http_client, on_event=on_event, logger=logger)
    return Artifactory(client)
