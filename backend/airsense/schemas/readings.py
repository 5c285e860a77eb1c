"""Pydantic schemas for sensor readings, ingestion and air quality."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict


class AirQualityOut(BaseModel):
    """Computed air quality. The first recommendation is the main tip."""

    model_config = ConfigDict(from_attributes=True)

    score: int
    level: Literal["good", "moderate", "poor"]
    recommendations: list[str]


class SensorReadingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    room_id: str
    sensor_id: str
    temperature: float
    humidity: float
    co2: int
    quality_score: int | None
    quality_level: Literal["good", "moderate", "poor"] | None
    recommendations: list[str] | None
    created_at: datetime


class IngestResponse(BaseModel):
    success: bool = True
    reading: SensorReadingOut
    air_quality: AirQualityOut
