"""
Artifact API endpoints: storage info, download/upload, AQL search and
repository replication configuration.
"""
import asyncio
import hashlib
import logging
from pathlib import Path
from typing import Any, List, Sequence, Tuple, Union

import httpx

from ..core.decoder import OneOrManyDecoder
from ..core.service import DiscardSink, Service, join_path
from ..exceptions import RequestBuildError
from .mediatypes import (
    MEDIA_TYPE_FILE_INFO,
    MEDIA_TYPE_PLAIN,
    MEDIA_TYPE_REPLICATION_CONFIG,
)
from .models import (
    AqlSearchResults,
    ArtifactoryProperty,
    FileInfo,
    ReplicationConfig,
    SingleReplicationConfig,
)

logger = logging.getLogger(__name__)
LOG_PREFIX = "[artifactory:artifacts]"

CHECKSUM_MD5_HEADER = "X-Checksum-MD5"

SEARCH_TEMPLATE = (
    'items.find({{"repo": "{repo}","path": {{"$ne": "."}},"$or": '
    '[{{"$and":[{{"path": {{"$match": "*"}},"name": {{"$match": "{pattern}"}}}}]}}]}})'
    '.include("name","repo","path","actual_md5","actual_sha1","size","type","property")'
)


def with_properties(path: str, properties: Sequence[ArtifactoryProperty]) -> str:
    """Append ``;name=value`` matrix segments to ``path`` in the given order.

    Values are not escaped; characters that break matrix syntax are the
    caller's problem.
    """
    return path + "".join(f";{p.name}={p.value}" for p in properties)


def md5_hex(content: bytes) -> str:
    return hashlib.md5(content).hexdigest()


class ArtifactService(Service):
    """Exposes the Artifact API endpoints of Artifactory."""

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    async def file_info(self, repo_key: str, file_path: str) -> Tuple[FileInfo, httpx.Response]:
        """Return the metadata of the given file.

        Supported by local, local-cached and virtual repositories.
        Security: requires a privileged user (can be anonymous).
        """
        path = join_path("api/storage", repo_key, file_path)
        req = self.client.new_request("GET", path, headers={"Accept": MEDIA_TYPE_FILE_INFO})
        logger.debug(f"{LOG_PREFIX} Storage API [{req.url}]")
        return await self.client.do_json(req, FileInfo)

    async def download_file_contents(self, repo_key: str, file_path: str, target: Any) -> httpx.Response:
        """Stream the specified file into ``target`` (anything with ``write``).

        The file is never held in memory as a whole. Supported by local,
        local-cached and virtual repositories.

        Raises:
            RequestBuildError: ``target`` is None; raised before any request is sent
        """
        if target is None:
            raise RequestBuildError("target is not allowed to be None")

        req = self.client.new_request("GET", join_path(repo_key, file_path))
        logger.debug(f"{LOG_PREFIX} Downloading API [{req.url}]")
        return await self.client.do(req, target)

    async def upload_file_contents(
        self,
        repo_key: str,
        file_path: str,
        mime_type: str,
        local_file: Union[str, Path],
        properties: Sequence[ArtifactoryProperty] = (),
    ) -> httpx.Response:
        """Deploy a local file to ``repo_key``/``file_path``.

        The file is read once; its MD5 is sent as ``X-Checksum-MD5``.
        ``properties`` become matrix parameters on the target path. The
        checksum the server stores is not compared afterwards.
        """
        try:
            content = await asyncio.to_thread(Path(local_file).read_bytes)
        except OSError as e:
            raise RequestBuildError(f"reading file content [{local_file}]: {e}") from e

        path = with_properties(join_path(repo_key, file_path), properties)
        req = self.client.new_request(
            "PUT",
            path,
            content,
            headers={"Content-Type": mime_type, CHECKSUM_MD5_HEADER: md5_hex(content)},
        )
        logger.debug(f"{LOG_PREFIX} Uploading API [{req.url}] ({len(content)} bytes)")
        return await self.client.do(req, DiscardSink())

    # -------------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------------

    async def search_files(self, repo_key: str, pattern: str) -> Tuple[AqlSearchResults, httpx.Response]:
        """Find files in ``repo_key`` whose name matches ``pattern`` (AQL ``$match``)."""
        return await self.search_by_aql(SEARCH_TEMPLATE.format(repo=repo_key, pattern=pattern))

    async def search_by_aql(self, query: str) -> Tuple[AqlSearchResults, httpx.Response]:
        """Run a raw AQL query.

        No matches give an empty ``results`` list, not an error.
        """
        req = self.client.new_request(
            "POST", "api/search/aql", query, headers={"Content-Type": MEDIA_TYPE_PLAIN}
        )
        logger.debug(f"{LOG_PREFIX} AQL API [{req.url}] query [{query}]")
        results, resp = await self.client.do_json(req, AqlSearchResults)
        if results.results is None:
            results.results = []
        return results, resp

    # -------------------------------------------------------------------------
    # Replication
    # -------------------------------------------------------------------------

    async def set_repository_replication_config(
        self, repo_key: str, config: ReplicationConfig
    ) -> httpx.Response:
        """Create or replace a local multi-push replication configuration.

        Requires an enterprise license and a privileged user.
        """
        req = self.client.new_json_encoded_request(
            "PUT", join_path("api/replications/multiple", repo_key), config
        )
        return await self.client.do(req, DiscardSink())

    async def update_repository_replication_config(
        self, repo_key: str, config: ReplicationConfig
    ) -> httpx.Response:
        """Update a local multi-push replication configuration."""
        req = self.client.new_json_encoded_request(
            "POST", join_path("api/replications/multiple", repo_key), config
        )
        return await self.client.do(req, DiscardSink())

    async def set_single_repository_replication_config(
        self, repo_key: str, config: SingleReplicationConfig
    ) -> httpx.Response:
        """Add or replace the replication configuration of a repository.

        Requires Artifactory Pro and an admin user.
        """
        req = self.client.new_json_encoded_request(
            "PUT", join_path("api/replications", repo_key), config
        )
        return await self.client.do(req, DiscardSink())

    async def update_single_repository_replication_config(
        self, repo_key: str, config: SingleReplicationConfig
    ) -> httpx.Response:
        req = self.client.new_json_encoded_request(
            "POST", join_path("api/replications", repo_key), config
        )
        return await self.client.do(req, DiscardSink())

    async def delete_repository_replication_config(self, repo_key: str) -> httpx.Response:
        req = self.client.new_request("DELETE", join_path("api/replications", repo_key))
        return await self.client.do(req, DiscardSink())

    async def get_repository_replication_config(
        self, repo_key: str
    ) -> Tuple[ReplicationConfig, httpx.Response]:
        """Return the replication configuration of ``repo_key``.

        The endpoint answers with a bare object for one replication and an
        array for several; both come back as the same ReplicationConfig.
        """
        replications, resp = await self._get_replication_configs(repo_key)

        config = ReplicationConfig()
        if replications:
            config.replications = []
        for replication in replications:
            config.repo_key = replication.repo_key
            config.cron_exp = replication.cron_exp
            config.enable_event_replication = replication.enable_event_replication
            config.replications.append(replication)
        return config, resp

    async def _get_replication_configs(
        self, repo_key: str
    ) -> Tuple[List[SingleReplicationConfig], httpx.Response]:
        req = self.client.new_request(
            "GET",
            join_path("api/replications", repo_key),
            headers={"Accept": MEDIA_TYPE_REPLICATION_CONFIG},
        )
        return await self.client.do_json(req, OneOrManyDecoder(SingleReplicationConfig))
