"""Sensor data processing: unit conversion, scoring and the live gateway feed."""

from airsense.sensors.conversion import (
    SENSOR_NOT_WORKING,
    MalformedPayloadError,
    ProcessedSensorData,
    convert_raw_co2_to_ppm,
    process_sensor_payload,
)
from airsense.sensors.live_feed import FeedState, LiveFeedClient
from airsense.sensors.scoring import (
    AirQualityResult,
    QualityLevel,
    calculate_air_quality,
    quality_color,
    quality_label,
)

__all__ = [
    # Conversion
    "SENSOR_NOT_WORKING",
    "MalformedPayloadError",
    "ProcessedSensorData",
    "convert_raw_co2_to_ppm",
    "process_sensor_payload",
    # Scoring
    "AirQualityResult",
    "QualityLevel",
    "calculate_air_quality",
    "quality_color",
    "quality_label",
    # Live feed
    "FeedState",
    "LiveFeedClient",
]
