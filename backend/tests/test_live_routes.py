"""Tests for live feed and dashboard endpoints."""

import pytest
from httpx import AsyncClient

from airsense.sensors import calculate_air_quality

PAYLOAD = {
    "airsense/tempDS": 22.0,
    "airsense/tempDHT": 22.6,
    "airsense/humidity": 45,
    "airsense/co2": 430,
}


async def setup_rooms(client: AsyncClient, headers: dict) -> dict:
    """Science building with a live room, a stored-only room and an unmonitored room."""
    building = (
        await client.post(
            "/api/buildings", json={"name": "Science", "code": "SB"}, headers=headers
        )
    ).json()
    rooms = {}
    for code, sensor in (("S307", "sensor_001"), ("S210", "sensor_002"), ("S101", None)):
        response = await client.post(
            "/api/rooms",
            json={
                "name": f"Room {code}",
                "room_code": code,
                "building_id": building["id"],
                "sensor_id": sensor,
            },
            headers=headers,
        )
        rooms[code] = response.json()
    return rooms


async def dashboard(client: AsyncClient, headers: dict) -> dict:
    response = await client.get("/api/dashboard/rooms", headers=headers)
    assert response.status_code == 200
    return {room["room_code"]: room for room in response.json()}


class TestLiveStatus:
    @pytest.mark.asyncio
    async def test_idle_feed(self, client: AsyncClient):
        response = await client.get("/api/live")
        assert response.status_code == 200
        data = response.json()
        assert data["state"] == "idle"
        assert data["connected"] is False
        assert data["reading"] is None
        assert data["air_quality"] is None

    @pytest.mark.asyncio
    async def test_connected_feed_with_reading(
        self, client: AsyncClient, live_feed, gateway, wait_for
    ):
        gateway.socket.push_json(PAYLOAD)
        await wait_for(lambda: live_feed.reading is not None)

        data = (await client.get("/api/live")).json()
        expected = calculate_air_quality(22.0, 45, 2000)
        assert data["state"] == "connected"
        assert data["connected"] is True
        assert data["sensor_id"] == "sensor_001"
        assert data["reading"] == {
            "temperature": 22.0,
            "humidity": 45,
            "co2": 2000,
            "raw_co2": 430,
            "is_valid": True,
        }
        assert data["air_quality"]["score"] == expected.score

    @pytest.mark.asyncio
    async def test_invalid_reading_has_no_air_quality(
        self, client: AsyncClient, live_feed, gateway, wait_for
    ):
        gateway.socket.push_json({**PAYLOAD, "airsense/co2": -999})
        await wait_for(lambda: live_feed.reading is not None)

        data = (await client.get("/api/live")).json()
        assert data["reading"]["co2"] is None
        assert data["reading"]["is_valid"] is False
        assert data["air_quality"] is None

    @pytest.mark.asyncio
    async def test_controls_require_auth(self, client: AsyncClient, live_feed):
        assert (await client.post("/api/live/disconnect")).status_code == 401
        assert (await client.post("/api/live/reconnect")).status_code == 401
        assert live_feed.is_connected

    @pytest.mark.asyncio
    async def test_disconnect_and_reconnect(
        self, client: AsyncClient, auth_headers: dict, live_feed, gateway
    ):
        response = await client.post("/api/live/disconnect", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["state"] == "manually_disconnected"
        assert response.json()["connected"] is False

        response = await client.post("/api/live/reconnect", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["state"] == "connected"
        assert gateway.attempts == 2


class TestDashboard:
    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/dashboard/rooms")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_live_stored_and_empty_rooms(
        self, client: AsyncClient, auth_headers: dict, live_feed, gateway, wait_for
    ):
        await setup_rooms(client, auth_headers)
        for sensor_id in ("sensor_001", "sensor_002"):
            await client.post(
                "/api/sensor-data",
                json={"sensor_id": sensor_id, "temperature": 21, "humidity": 50, "co2": 600},
            )
        gateway.socket.push_json(PAYLOAD)
        await wait_for(lambda: live_feed.reading is not None)

        rooms = await dashboard(client, auth_headers)

        live = rooms["S307"]["display"]
        assert live["source"] == "live"
        assert live["is_live"] is True
        assert live["co2"] == 2000
        assert live["quality_score"] == calculate_air_quality(22.0, 45, 2000).score
        assert rooms["S307"]["building_code"] == "SB"

        stored = rooms["S210"]["display"]
        assert stored["source"] == "stored"
        assert stored["co2"] == 600
        assert stored["quality_level"] == "good"
        assert stored["color"] == "#BCF4A8"

        empty = rooms["S101"]["display"]
        assert empty["source"] == "none"
        assert empty["quality_score"] is None
        assert empty["label"] == "No Data"
        assert empty["color"] == "#F8F8F8"

    @pytest.mark.asyncio
    async def test_falls_back_to_stored_when_feed_disconnects(
        self, client: AsyncClient, auth_headers: dict, live_feed, gateway, wait_for
    ):
        await setup_rooms(client, auth_headers)
        await client.post(
            "/api/sensor-data",
            json={"sensor_id": "sensor_001", "temperature": 21, "humidity": 50, "co2": 600},
        )
        gateway.socket.push_json(PAYLOAD)
        await wait_for(lambda: live_feed.reading is not None)
        assert (await dashboard(client, auth_headers))["S307"]["display"]["source"] == "live"

        await live_feed.disconnect()

        display = (await dashboard(client, auth_headers))["S307"]["display"]
        assert display["source"] == "stored"
        assert display["co2"] == 600

    @pytest.mark.asyncio
    async def test_live_room_without_stored_reading(
        self, client: AsyncClient, auth_headers: dict, live_feed
    ):
        await setup_rooms(client, auth_headers)
        # Connected, but nothing received yet
        display = (await dashboard(client, auth_headers))["S307"]["display"]
        assert display["source"] == "none"
