"""Pydantic schemas for the live feed and the dashboard."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from airsense.schemas.readings import AirQualityOut


class LiveReadingOut(BaseModel):
    """Latest gateway reading. Channels that are not working are null."""

    model_config = ConfigDict(from_attributes=True)

    temperature: float | None
    humidity: int | None
    co2: int | None
    raw_co2: float | None
    is_valid: bool


class LiveStatus(BaseModel):
    state: Literal["idle", "connecting", "connected", "disconnected", "manually_disconnected"]
    connected: bool
    error: str | None
    sensor_id: str | None
    reading: LiveReadingOut | None
    air_quality: AirQualityOut | None


class RoomDisplayOut(BaseModel):
    """What the dashboard shows for a room: live data, the last stored reading, or nothing."""

    model_config = ConfigDict(from_attributes=True)

    source: Literal["live", "stored", "none"]
    is_live: bool
    temperature: float | None
    humidity: float | None
    co2: int | None
    quality_score: int | None
    quality_level: Literal["good", "moderate", "poor"] | None
    recommendations: list[str] | None
    color: str
    label: str


class DashboardRoom(BaseModel):
    id: str
    name: str
    room_code: str
    building_id: str
    building_code: str
    sensor_id: str | None
    display: RoomDisplayOut
