"""
System API endpoints.
"""
from typing import Tuple

import httpx

from ..core.service import Service
from .mediatypes import MEDIA_TYPE_JSON, MEDIA_TYPE_PLAIN
from .models import VersionInfo


class SystemService(Service):
    """Health and version information of the Artifactory instance."""

    async def ping(self) -> Tuple[str, httpx.Response]:
        """Sends a ping request. A healthy instance answers ``OK``."""
        req = self.client.new_request("GET", "api/system/ping", headers={"Accept": MEDIA_TYPE_PLAIN})
        return await self.client.do_json(req, str)

    async def get_version(self) -> Tuple[VersionInfo, httpx.Response]:
        """Version, revision and enabled add-ons of the instance."""
        req = self.client.new_request("GET", "api/system/version", headers={"Accept": MEDIA_TYPE_JSON})
        return await self.client.do_json(req, VersionInfo)
