"""
Tests for replication configuration endpoints.
"""
import json

import pytest
import respx

from artifactory_client import Client, HTTPStatusError
from artifactory_client.v1 import V1, ReplicationConfig, SingleReplicationConfig
from artifactory_client.v1.mediatypes import MEDIA_TYPE_REPLICATION_CONFIG

from .conftest import BASE_URL

REPLICATION = {
    "repoKey": "libs-local",
    "url": "https://mirror.example.com/artifactory/libs-local",
    "socketTimeoutMillis": 15000,
    "username": "replicator",
    "enabled": True,
    "syncDeletes": False,
    "syncProperties": True,
    "syncStatistics": False,
    "pathPrefix": "",
    "cronExp": "0 0 12 * * ?",
    "enableEventReplication": True,
}


async def _get_config(config, payload):
    async with Client(config) as client:
        with respx.mock() as mock:
            route = mock.get(BASE_URL + "api/replications/libs-local").respond(200, json=payload)
            result, resp = await V1(client).artifacts.get_repository_replication_config("libs-local")
            assert route.calls.last.request.headers["Accept"] == MEDIA_TYPE_REPLICATION_CONFIG
    return result, resp


@pytest.mark.asyncio
async def test_get_single_object_and_one_element_array_are_identical(config):
    from_object, _ = await _get_config(config, REPLICATION)
    from_array, _ = await _get_config(config, [REPLICATION])

    assert from_object == from_array
    assert from_object.repo_key == "libs-local"
    assert from_object.cron_exp == "0 0 12 * * ?"
    assert from_object.enable_event_replication is True
    assert len(from_object.replications) == 1
    assert from_object.replications[0].socket_timeout_millis == 15000
    assert from_object.replications[0].sync_deletes is False
    assert from_object.replications[0].password is None


@pytest.mark.asyncio
async def test_get_multiple_replications(config):
    second = dict(REPLICATION, url="https://dr.example.com/artifactory/libs-local", enabled=False)
    result, resp = await _get_config(config, [REPLICATION, second])

    assert resp.status_code == 200
    assert [r.url for r in result.replications] == [REPLICATION["url"], second["url"]]
    assert result.replications[1].enabled is False


@pytest.mark.asyncio
async def test_get_empty_array(config):
    result, _ = await _get_config(config, [])
    assert result.replications is None
    assert result.repo_key is None


@pytest.mark.asyncio
async def test_get_not_found(config):
    async with Client(config) as client:
        with respx.mock() as mock:
            mock.get(BASE_URL + "api/replications/nope").respond(
                404, json={"errors": [{"status": 404, "message": "Could not find replication"}]}
            )
            with pytest.raises(HTTPStatusError) as exc:
                await V1(client).artifacts.get_repository_replication_config("nope")
    assert exc.value.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("method_name, http_method, path", [
    ("set_repository_replication_config", "PUT", "api/replications/multiple/libs-local"),
    ("update_repository_replication_config", "POST", "api/replications/multiple/libs-local"),
])
async def test_multi_replication_writes(config, method_name, http_method, path):
    repl = ReplicationConfig(
        repo_key="libs-local",
        cron_exp="0 0 12 * * ?",
        enable_event_replication=False,
        replications=[SingleReplicationConfig(url="https://mirror", username="u", password="p", enabled=True)],
    )
    async with Client(config) as client:
        with respx.mock() as mock:
            route = mock.route(method=http_method, url=BASE_URL + path).respond(201)
            resp = await getattr(V1(client).artifacts, method_name)("libs-local", repl)
            sent = route.calls.last.request

    assert resp.status_code == 201
    assert sent.headers["Content-Type"] == "application/json"
    assert json.loads(sent.content) == {
        "cronExp": "0 0 12 * * ?",
        "enableEventReplication": False,
        "replications": [{"url": "https://mirror", "username": "u", "password": "p", "enabled": True}],
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("method_name, http_method", [
    ("set_single_repository_replication_config", "PUT"),
    ("update_single_repository_replication_config", "POST"),
])
async def test_single_replication_writes(config, method_name, http_method):
    repl = SingleReplicationConfig(url="https://mirror", cron_exp="0 0 * * * ?", sync_deletes=False)
    async with Client(config) as client:
        with respx.mock() as mock:
            route = mock.route(method=http_method, url=BASE_URL + "api/replications/libs-local").respond(200)
            await getattr(V1(client).artifacts, method_name)("libs-local", repl)
            sent = route.calls.last.request

    assert json.loads(sent.content) == {"url": "https://mirror", "cronExp": "0 0 * * * ?", "syncDeletes": False}


@pytest.mark.asyncio
async def test_delete_replication(config):
    async with Client(config) as client:
        with respx.mock() as mock:
            route = mock.delete(BASE_URL + "api/replications/libs-local").respond(200)
            resp = await V1(client).artifacts.delete_repository_replication_config("libs-local")
    assert route.called
    assert resp.status_code == 200
