"""Sensor data ingestion routes, used by the gateway (Node-RED)."""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.database import get_db
from airsense.dependencies import require_ingest_key
from airsense.schemas import AirQualityOut, IngestResponse, SensorReadingOut
from airsense.services import IngestValidationError, ingest_reading, parse_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sensor-data", tags=["sensor-data"])


@router.get("")
async def describe_ingestion() -> dict[str, Any]:
    """Usage of the ingestion endpoint."""
    return {
        "message": "AirSense Sensor Data API",
        "usage": "POST sensor data with: { sensor_id, temperature, humidity, co2 }",
        "example": {
            "sensor_id": "sensor_001",
            "temperature": 22.5,
            "humidity": 45,
            "co2": 650,
        },
    }


@router.post(
    "",
    response_model=IngestResponse,
    dependencies=[Depends(require_ingest_key)],
)
async def post_sensor_data(
    body: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(get_db),
) -> IngestResponse:
    """Store a reading for the room the sensor is assigned to and return its air quality."""
    try:
        submission = parse_submission(body)
    except IngestValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = await ingest_reading(session, submission)
    except SQLAlchemyError:
        logger.exception(f"Failed to save reading for {submission.sensor_id}")
        raise HTTPException(status_code=500, detail="Failed to save sensor reading")

    if not result:
        raise HTTPException(
            status_code=404,
            detail=f"No room found with sensor_id: {submission.sensor_id}",
        )

    reading, air_quality = result
    return IngestResponse(
        reading=SensorReadingOut.model_validate(reading),
        air_quality=AirQualityOut.model_validate(air_quality),
    )
