"""
Artifactory v1 REST API.
"""
from ..core.client import Client
from .artifacts import ArtifactService
from .models import (
    AqlProperty,
    AqlRange,
    AqlResult,
    AqlSearchResults,
    ArtifactoryProperty,
    Checksums,
    FileInfo,
    ReplicationConfig,
    SingleReplicationConfig,
    VersionInfo,
)
from .system import SystemService


class V1:
    """Container for the v1 API groups, all sharing one Client."""

    def __init__(self, client: Client):
        self.client = client
        self.artifacts = ArtifactService(client)
        self.system = SystemService(client)


__all__ = [
    "V1",
    "ArtifactService", "SystemService",
    "AqlProperty", "AqlRange", "AqlResult", "AqlSearchResults",
    "ArtifactoryProperty", "Checksums", "FileInfo",
    "ReplicationConfig", "SingleReplicationConfig", "VersionInfo",
]
