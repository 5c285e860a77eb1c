"""Display service layer: decides whether a room shows live or stored data."""

from dataclasses import dataclass
from typing import Literal

from airsense.schemas.readings import SensorReadingOut
from airsense.sensors import (
    AirQualityResult,
    ProcessedSensorData,
    calculate_air_quality,
    quality_color,
    quality_label,
)

__all__ = ["RoomDisplay", "live_air_quality", "resolve_room_display"]

# Used in place of a missing live humidity channel
FALLBACK_HUMIDITY = 50

DisplaySource = Literal["live", "stored", "none"]


@dataclass(frozen=True)
class RoomDisplay:
    """What to show for a room on this refresh."""

    source: DisplaySource
    temperature: float | None = None
    humidity: float | None = None
    co2: int | None = None
    quality_score: int | None = None
    quality_level: str | None = None
    recommendations: list[str] | None = None

    @property
    def is_live(self) -> bool:
        return self.source == "live"

    @property
    def color(self) -> str:
        return quality_color(self.quality_level)

    @property
    def label(self) -> str:
        return quality_label(self.quality_level)


def live_air_quality(reading: ProcessedSensorData) -> AirQualityResult | None:
    """Score a live reading; None if it is not valid."""
    if not reading.is_valid:
        return None
    humidity = reading.humidity if reading.humidity is not None else FALLBACK_HUMIDITY
    return calculate_air_quality(reading.temperature, humidity, reading.co2)


def resolve_room_display(
    room_sensor_id: str | None,
    latest_reading: SensorReadingOut | None,
    live_reading: ProcessedSensorData | None,
    live_connected: bool,
    live_sensor_id: str | None,
    *,
    recompute_stored: bool = False,
) -> RoomDisplay:
    """
    Pick the data a room displays.

    Live data wins when the room's sensor is the one on the live feed, the feed
    is connected and its reading is valid; its quality is scored on the spot.
    Otherwise the latest stored reading is shown with the quality stored at
    ingestion (or rescored when ``recompute_stored`` is set). Nothing is cached:
    call this on every refresh.
    """
    if (
        room_sensor_id is not None
        and room_sensor_id == live_sensor_id
        and live_connected
        and live_reading is not None
        and live_reading.is_valid
    ):
        air_quality = live_air_quality(live_reading)
        return RoomDisplay(
            source="live",
            temperature=live_reading.temperature,
            humidity=live_reading.humidity,
            co2=live_reading.co2,
            quality_score=air_quality.score,
            quality_level=air_quality.level,
            recommendations=air_quality.recommendations,
        )

    if latest_reading is None:
        return RoomDisplay(source="none")

    if recompute_stored:
        air_quality = calculate_air_quality(
            latest_reading.temperature, latest_reading.humidity, latest_reading.co2
        )
        score, level, recommendations = (
            air_quality.score,
            air_quality.level,
            air_quality.recommendations,
        )
    else:
        score = latest_reading.quality_score
        level = latest_reading.quality_level
        recommendations = latest_reading.recommendations

    return RoomDisplay(
        source="stored",
        temperature=latest_reading.temperature,
        humidity=latest_reading.humidity,
        co2=latest_reading.co2,
        quality_score=score,
        quality_level=level,
        recommendations=recommendations,
    )
