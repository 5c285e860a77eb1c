"""Readings service layer: ingests sensor submissions and fetches latest readings."""

import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.models import Room, SensorReading
from airsense.schemas.readings import SensorReadingOut
from airsense.sensors import AirQualityResult, calculate_air_quality

__all__ = [
    "IngestValidationError",
    "SensorSubmission",
    "get_latest_reading",
    "get_latest_readings",
    "ingest_reading",
    "parse_submission",
]

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("sensor_id", "temperature", "humidity", "co2")

# co2 is stored in a 64-bit INTEGER column
CO2_MIN = -(2**63)
CO2_MAX = 2**63 - 1


class IngestValidationError(ValueError):
    """Submission with missing or non-numeric fields."""


@dataclass(frozen=True)
class SensorSubmission:
    """A validated reading posted by a gateway."""

    sensor_id: str
    temperature: float
    humidity: float
    co2: int


def _to_float(value: Any) -> float | None:
    """Numbers and numeric strings are accepted; anything else is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_submission(body: Mapping[str, Any]) -> SensorSubmission:
    """Validate a raw ingestion body.

    CO2 is truncated to an integer ppm value.
    """
    sensor_id = body.get("sensor_id")
    if not sensor_id or any(body.get(name) is None for name in REQUIRED_FIELDS[1:]):
        raise IngestValidationError(
            "Missing required fields: sensor_id, temperature, humidity, co2"
        )

    temperature = _to_float(body["temperature"])
    humidity = _to_float(body["humidity"])
    co2 = _to_float(body["co2"])
    if temperature is None or humidity is None or co2 is None:
        raise IngestValidationError("Invalid data types for temperature, humidity, or co2")
    if not CO2_MIN <= co2 <= CO2_MAX:
        raise IngestValidationError(f"co2 is out of range: {body['co2']!r}")

    return SensorSubmission(
        sensor_id=str(sensor_id),
        temperature=temperature,
        humidity=humidity,
        co2=int(co2),
    )


async def get_room_by_sensor(session: AsyncSession, sensor_id: str) -> Room | None:
    result = await session.execute(select(Room).where(Room.sensor_id == sensor_id))
    return result.scalar_one_or_none()


async def ingest_reading(
    session: AsyncSession,
    submission: SensorSubmission,
) -> tuple[SensorReading, AirQualityResult] | None:
    """
    Store a new reading for the room the sensor is assigned to.

    Air quality is computed here and stored with the reading. Returns None when
    no room has this sensor.
    """
    room = await get_room_by_sensor(session, submission.sensor_id)
    if not room:
        return None

    air_quality = calculate_air_quality(
        submission.temperature, submission.humidity, submission.co2
    )

    reading = SensorReading(
        room_id=room.id,
        sensor_id=submission.sensor_id,
        temperature=submission.temperature,
        humidity=submission.humidity,
        co2=submission.co2,
        quality_score=air_quality.score,
        quality_level=air_quality.level,
        recommendations=list(air_quality.recommendations),
    )
    session.add(reading)
    await session.commit()

    logger.info(
        f"Stored reading for {submission.sensor_id} in room {room.room_code}: "
        f"score={air_quality.score} ({air_quality.level})"
    )
    return reading, air_quality


async def get_latest_readings(
    session: AsyncSession,
    room_ids: list[str],
) -> dict[str, SensorReadingOut]:
    """Get the latest reading for multiple rooms in one query.

    Returns dict mapping room_id -> reading; rooms without readings are absent.
    """
    if not room_ids:
        return {}

    # Use a window function to rank readings per room, newest first
    subq = (
        select(
            SensorReading.id,
            func.row_number()
            .over(partition_by=SensorReading.room_id, order_by=SensorReading.created_at.desc())
            .label("rn"),
        )
        .where(SensorReading.room_id.in_(room_ids))
        .subquery()
    )

    result = await session.execute(
        select(SensorReading).join(subq, SensorReading.id == subq.c.id).where(subq.c.rn == 1)
    )
    return {r.room_id: SensorReadingOut.model_validate(r) for r in result.scalars()}


async def get_latest_reading(session: AsyncSession, room_id: str) -> SensorReadingOut | None:
    """Latest reading of a single room."""
    result = await session.execute(
        select(SensorReading)
        .where(SensorReading.room_id == room_id)
        .order_by(SensorReading.created_at.desc())
        .limit(1)
    )
    reading = result.scalar_one_or_none()
    return SensorReadingOut.model_validate(reading) if reading else None
