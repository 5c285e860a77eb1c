"""Pydantic schemas for API request/response models."""

from airsense.schemas.auth import LoginRequest, SignupRequest, TokenResponse, UserOut
from airsense.schemas.building import (
    BuildingCreate,
    BuildingDetail,
    BuildingOut,
    BuildingUpdate,
    DeleteResponse,
    RoomCreate,
    RoomOut,
    RoomUpdate,
    RoomWithLatestReading,
)
from airsense.schemas.live import DashboardRoom, LiveReadingOut, LiveStatus, RoomDisplayOut
from airsense.schemas.readings import AirQualityOut, IngestResponse, SensorReadingOut

__all__ = [
    # Auth schemas
    "LoginRequest",
    "SignupRequest",
    "TokenResponse",
    "UserOut",
    # Building and room schemas
    "BuildingCreate",
    "BuildingDetail",
    "BuildingOut",
    "BuildingUpdate",
    "DeleteResponse",
    "RoomCreate",
    "RoomOut",
    "RoomUpdate",
    "RoomWithLatestReading",
    # Reading schemas
    "AirQualityOut",
    "IngestResponse",
    "SensorReadingOut",
    # Live feed and dashboard schemas
    "DashboardRoom",
    "LiveReadingOut",
    "LiveStatus",
    "RoomDisplayOut",
]
