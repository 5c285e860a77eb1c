"""Pydantic schemas for buildings and rooms."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from airsense.schemas.readings import SensorReadingOut


class BuildingCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    code: str = Field(..., min_length=1, max_length=50)
    address: str | None = None


class BuildingUpdate(BaseModel):
    """Building code is fixed after creation."""

    name: str | None = Field(None, min_length=1, max_length=100)
    address: str | None = None


class BuildingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    code: str
    address: str | None
    user_id: str
    created_at: datetime
    updated_at: datetime


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    room_code: str = Field(..., min_length=1, max_length=50)
    building_id: str
    sensor_id: str | None = None


class RoomUpdate(BaseModel):
    """Only fields present in the request are changed; sensor_id may be set to null."""

    name: str | None = Field(None, min_length=1, max_length=100)
    sensor_id: str | None = None


class RoomOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    room_code: str
    building_id: str
    sensor_id: str | None
    user_id: str
    created_at: datetime
    updated_at: datetime


class RoomWithLatestReading(RoomOut):
    latest_reading: SensorReadingOut | None = None


class BuildingDetail(BuildingOut):
    rooms: list[RoomWithLatestReading]


class DeleteResponse(BaseModel):
    success: bool = True
