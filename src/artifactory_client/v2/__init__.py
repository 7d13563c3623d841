"""
Artifactory v2 REST API.
"""
from ..core.client import Client
from .security import (
    Permission,
    PermissionActions,
    PermissionTarget,
    PermissionTargetRef,
    SecurityService,
)


class V2:
    """Container for the v2 API groups, all sharing one Client."""

    def __init__(self, client: Client):
        self.client = client
        self.security = SecurityService(client)


__all__ = [
    "V2",
    "SecurityService",
    "Permission", "PermissionActions", "PermissionTarget", "PermissionTargetRef",
]
