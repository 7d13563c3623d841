"""
Tests for the v2 SecurityService.
"""
import json

import pytest
import respx

from artifactory_client import Client, HTTPStatusError
from artifactory_client.v2 import V2, Permission, PermissionActions, PermissionTarget

from .conftest import BASE_URL

PERMISSIONS = BASE_URL + "api/v2/security/permissions"

TARGET = {
    "name": "java-developers",
    "repo": {
        "include-patterns": ["**"],
        "exclude-patterns": [],
        "repositories": ["libs-release-local"],
        "actions": {"users": {"bob": ["read", "write"]}, "groups": {"java": ["read"]}},
    },
}


@pytest.mark.asyncio
async def test_list_permission_targets(config):
    payload = [{"name": "java-developers", "uri": PERMISSIONS + "/java-developers"}]
    async with Client(config) as client:
        with respx.mock() as mock:
            mock.get(PERMISSIONS).respond(200, json=payload)
            refs, _ = await V2(client).security.list_permission_targets()
    assert [r.name for r in refs] == ["java-developers"]


@pytest.mark.asyncio
async def test_get_permission_target(config):
    async with Client(config) as client:
        with respx.mock() as mock:
            mock.get(PERMISSIONS + "/java-developers").respond(200, json=TARGET)
            target, _ = await V2(client).security.get_permission_target("java-developers")

    assert target.repo.include_patterns == ["**"]
    assert target.repo.exclude_patterns == []
    assert target.repo.actions.users == {"bob": ["read", "write"]}
    assert target.build is None


@pytest.mark.asyncio
async def test_create_permission_target_payload(config):
    target = PermissionTarget(
        name="java-developers",
        repo=Permission(
            include_patterns=["**"],
            repositories=["libs-release-local"],
            actions=PermissionActions(users={"bob": ["read"]}),
        ),
    )
    async with Client(config) as client:
        with respx.mock() as mock:
            route = mock.post(PERMISSIONS + "/java-developers").respond(201)
            await V2(client).security.create_permission_target("java-developers", target)
            sent = json.loads(route.calls.last.request.content)

    assert sent == {
        "name": "java-developers",
        "repo": {
            "include-patterns": ["**"],
            "repositories": ["libs-release-local"],
            "actions": {"users": {"bob": ["read"]}},
        },
    }


@pytest.mark.asyncio
async def test_update_and_delete_permission_target(config):
    async with Client(config) as client:
        security = V2(client).security
        with respx.mock() as mock:
            put = mock.put(PERMISSIONS + "/java-developers").respond(200)
            delete = mock.delete(PERMISSIONS + "/java-developers").respond(204)
            await security.update_permission_target("java-developers", PermissionTarget(name="java-developers"))
            resp = await security.delete_permission_target("java-developers")
    assert put.called
    assert delete.called
    assert resp.status_code == 204


@pytest.mark.asyncio
async def test_has_permission_target(config):
    async with Client(config) as client:
        security = V2(client).security
        with respx.mock() as mock:
            mock.head(PERMISSIONS + "/exists").respond(200)
            mock.head(PERMISSIONS + "/missing").respond(404)
            mock.head(PERMISSIONS + "/denied").respond(403)

            assert await security.has_permission_target("exists") is True
            assert await security.has_permission_target("missing") is False
            with pytest.raises(HTTPStatusError):
                await security.has_permission_target("denied")
