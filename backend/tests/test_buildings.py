"""Tests for building endpoints."""

import pytest
from httpx import AsyncClient

BUILDING = {"name": "Science Building", "code": "SB", "address": "1 Campus Road"}


async def create_building(client: AsyncClient, headers: dict, **overrides) -> dict:
    response = await client.post("/api/buildings", json={**BUILDING, **overrides}, headers=headers)
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_requires_auth(client: AsyncClient):
    response = await client.get("/api/buildings")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_and_list(client: AsyncClient, auth_headers: dict):
    created = await create_building(client, auth_headers)
    assert created["code"] == "SB"
    assert created["address"] == "1 Campus Road"

    response = await client.get("/api/buildings", headers=auth_headers)
    assert response.status_code == 200
    assert [b["id"] for b in response.json()] == [created["id"]]


@pytest.mark.asyncio
async def test_list_is_newest_first(client: AsyncClient, auth_headers: dict):
    first = await create_building(client, auth_headers, code="A")
    second = await create_building(client, auth_headers, code="B")

    response = await client.get("/api/buildings", headers=auth_headers)
    assert [b["id"] for b in response.json()] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_duplicate_code_conflicts(client: AsyncClient, auth_headers: dict):
    await create_building(client, auth_headers)
    response = await client.post("/api/buildings", json=BUILDING, headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["detail"] == (
        'Building code "SB" already exists. Please use a different code.'
    )


@pytest.mark.asyncio
async def test_missing_name_is_rejected(client: AsyncClient, auth_headers: dict):
    response = await client.post("/api/buildings", json={"code": "SB"}, headers=auth_headers)
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_detail_includes_rooms(client: AsyncClient, auth_headers: dict):
    building = await create_building(client, auth_headers)
    await client.post(
        "/api/rooms",
        json={"name": "Lab", "room_code": "S307", "building_id": building["id"]},
        headers=auth_headers,
    )

    response = await client.get(f"/api/buildings/{building['id']}", headers=auth_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["code"] == "SB"
    assert [r["room_code"] for r in data["rooms"]] == ["S307"]
    assert data["rooms"][0]["latest_reading"] is None


@pytest.mark.asyncio
async def test_get_missing(client: AsyncClient, auth_headers: dict):
    response = await client.get("/api/buildings/nope", headers=auth_headers)
    assert response.status_code == 404
    assert response.json()["detail"] == "Building not found"


@pytest.mark.asyncio
async def test_update(client: AsyncClient, auth_headers: dict):
    building = await create_building(client, auth_headers)
    response = await client.patch(
        f"/api/buildings/{building['id']}",
        json={"name": "Sciences"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Sciences"
    # Fields not sent are left alone
    assert data["address"] == "1 Campus Road"


@pytest.mark.asyncio
async def test_other_users_building_is_not_found(
    client: AsyncClient, auth_headers: dict, sign_in
):
    building = await create_building(client, auth_headers)
    other = await sign_in("grace@example.com")

    assert (await client.get("/api/buildings", headers=other)).json() == []
    for method in ("get", "delete"):
        response = await getattr(client, method)(f"/api/buildings/{building['id']}", headers=other)
        assert response.status_code == 404
    response = await client.patch(
        f"/api/buildings/{building['id']}", json={"name": "Mine"}, headers=other
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_removes_rooms_and_readings(client: AsyncClient, auth_headers: dict):
    building = await create_building(client, auth_headers)
    room = (
        await client.post(
            "/api/rooms",
            json={
                "name": "Lab",
                "room_code": "S307",
                "building_id": building["id"],
                "sensor_id": "sensor_001",
            },
            headers=auth_headers,
        )
    ).json()
    await client.post(
        "/api/sensor-data",
        json={"sensor_id": "sensor_001", "temperature": 22, "humidity": 45, "co2": 650},
    )

    response = await client.delete(f"/api/buildings/{building['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    assert (await client.get(f"/api/rooms/{room['id']}", headers=auth_headers)).status_code == 404
    # The sensor is free again
    response = await client.post(
        "/api/sensor-data",
        json={"sensor_id": "sensor_001", "temperature": 22, "humidity": 45, "co2": 650},
    )
    assert response.status_code == 404
