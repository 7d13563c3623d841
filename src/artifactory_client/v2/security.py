"""
v2 Security API: permission targets.
"""
from typing import Dict, List, Optional, Tuple

import httpx
from pydantic import Field

from ..core.service import DiscardSink, Service, join_path
from ..exceptions import HTTPStatusError
from ..models import ApiModel

PERMISSIONS_PATH = "api/v2/security/permissions"


class PermissionActions(ApiModel):
    """Maps user/group names to the actions granted (read, write, annotate...)."""
    users: Optional[Dict[str, List[str]]] = None
    groups: Optional[Dict[str, List[str]]] = None


class Permission(ApiModel):
    include_patterns: Optional[List[str]] = Field(default=None, alias="include-patterns")
    exclude_patterns: Optional[List[str]] = Field(default=None, alias="exclude-patterns")
    repositories: Optional[List[str]] = None
    actions: Optional[PermissionActions] = None


class PermissionTarget(ApiModel):
    name: Optional[str] = None
    repo: Optional[Permission] = None
    build: Optional[Permission] = None


class PermissionTargetRef(ApiModel):
    name: Optional[str] = None
    uri: Optional[str] = None


class SecurityService(Service):
    """Permission target management. Requires an admin user."""

    async def list_permission_targets(self) -> Tuple[List[PermissionTargetRef], httpx.Response]:
        req = self.client.new_request("GET", PERMISSIONS_PATH)
        return await self.client.do_json(req, List[PermissionTargetRef])

    async def get_permission_target(self, name: str) -> Tuple[PermissionTarget, httpx.Response]:
        req = self.client.new_request("GET", join_path(PERMISSIONS_PATH, name))
        return await self.client.do_json(req, PermissionTarget)

    async def has_permission_target(self, name: str) -> bool:
        """True when the permission target exists, False on 404."""
        req = self.client.new_request("HEAD", join_path(PERMISSIONS_PATH, name))
        try:
            await self.client.do(req, DiscardSink())
        except HTTPStatusError as e:
            if e.status_code == 404:
                return False
            raise
        return True

    async def create_permission_target(self, name: str, target: PermissionTarget) -> httpx.Response:
        req = self.client.new_json_encoded_request("POST", join_path(PERMISSIONS_PATH, name), target)
        return await self.client.do(req, DiscardSink())

    async def update_permission_target(self, name: str, target: PermissionTarget) -> httpx.Response:
        req = self.client.new_json_encoded_request("PUT", join_path(PERMISSIONS_PATH, name), target)
        return await self.client.do(req, DiscardSink())

    async def delete_permission_target(self, name: str) -> httpx.Response:
        req = self.client.new_request("DELETE", join_path(PERMISSIONS_PATH, name))
        return await self.client.do(req, DiscardSink())
