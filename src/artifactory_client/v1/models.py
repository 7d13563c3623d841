"""
Models for the v1 artifact, search, replication and system endpoints.

Fields mirror the JSON schema of the API and are all optional: partial
responses are normal (an AQL query only returns the fields it includes).
"""
from dataclasses import dataclass
from typing import List, Optional

from pydantic import Field, field_serializer

from ..models import ApiModel


class Checksums(ApiModel):
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None


class FileInfo(ApiModel):
    """Storage metadata of a single file."""
    repo: Optional[str] = None
    path: Optional[str] = None
    created: Optional[str] = None
    created_by: Optional[str] = None
    last_modified: Optional[str] = None
    modified_by: Optional[str] = None
    last_updated: Optional[str] = None
    download_uri: Optional[str] = None
    mime_type: Optional[str] = None
    # Sent by the server as a JSON string
    size: Optional[int] = None
    checksums: Optional[Checksums] = None
    original_checksums: Optional[Checksums] = None
    uri: Optional[str] = None

    @field_serializer("size")
    def _size_as_string(self, size: Optional[int]) -> Optional[str]:
        return None if size is None else str(size)


class AqlProperty(ApiModel):
    key: Optional[str] = None
    value: Optional[str] = None


class AqlResult(ApiModel):
    repo: Optional[str] = None
    path: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    size: Optional[int] = None
    created: Optional[str] = None
    modified: Optional[str] = None
    actual_md5: Optional[str] = Field(default=None, alias="actual_md5")
    actual_sha1: Optional[str] = Field(default=None, alias="actual_sha1")
    properties: Optional[List[AqlProperty]] = None


class AqlRange(ApiModel):
    start_pos: Optional[int] = Field(default=None, alias="start_pos")
    end_pos: Optional[int] = Field(default=None, alias="end_pos")
    total: Optional[int] = None
    limit: Optional[int] = None


class AqlSearchResults(ApiModel):
    results: Optional[List[AqlResult]] = None
    range: Optional[AqlRange] = None


@dataclass(frozen=True)
class ArtifactoryProperty:
    """A ``;name=value`` property attached to an artifact at upload time."""
    name: str
    value: str


class SingleReplicationConfig(ApiModel):
    """One replication target as returned by ``api/replications/{repo}``."""
    repo_key: Optional[str] = None
    url: Optional[str] = None
    socket_timeout_millis: Optional[int] = None
    username: Optional[str] = None
    password: Optional[str] = None
    enabled: Optional[bool] = None
    sync_deletes: Optional[bool] = None
    sync_properties: Optional[bool] = None
    sync_statistics: Optional[bool] = None
    path_prefix: Optional[str] = None
    # Only filled when reading; writes go through ReplicationConfig
    cron_exp: Optional[str] = None
    enable_event_replication: Optional[bool] = None


class ReplicationConfig(ApiModel):
    """Multi-push replication config of a repository.

    Maps directly onto the replication screen of the UI and is preferred over
    SingleReplicationConfig. ``repo_key`` is taken from the URL and never sent.
    """
    repo_key: Optional[str] = Field(default=None, exclude=True)
    cron_exp: Optional[str] = None
    enable_event_replication: Optional[bool] = None
    replications: Optional[List[SingleReplicationConfig]] = None


class VersionInfo(ApiModel):
    version: Optional[str] = None
    revision: Optional[str] = None
    addons: Optional[List[str]] = None
    license: Optional[str] = None
