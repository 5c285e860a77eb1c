"""Air quality scoring from temperature, humidity and CO2."""

from dataclasses import dataclass, field
from typing import Literal

from airsense.sensors._rounding import round_half_up, round_to_tenth

__all__ = [
    "AirQualityResult",
    "QualityLevel",
    "calculate_air_quality",
    "quality_color",
    "quality_label",
]

QualityLevel = Literal["good", "moderate", "poor"]

CO2_WEIGHT = 0.4
TEMPERATURE_WEIGHT = 0.3
HUMIDITY_WEIGHT = 0.3

GOOD_SCORE = 70
MODERATE_SCORE = 40


@dataclass(frozen=True)
class ComfortBand:
    """Outer limits and optimal range for a comfort parameter."""

    min: float
    optimal_min: float
    optimal_max: float
    max: float
    # Points lost per unit beyond the outer limits
    penalty: float


@dataclass(frozen=True)
class AirQualityResult:
    """Score (0-100), level and ordered recommendations. The first is the main tip."""

    score: int
    level: QualityLevel
    recommendations: list[str] = field(default_factory=list)


CO2_GOOD = 800
CO2_MODERATE = 1200
# Above CO2_MODERATE the score drops from 60 to 0 over this many ppm
CO2_POOR_SPAN = 800

TEMPERATURE = ComfortBand(min=18, optimal_min=20, optimal_max=24, max=26, penalty=10)
HUMIDITY = ComfortBand(min=30, optimal_min=40, optimal_max=60, max=70, penalty=2)

FALLBACK_RECOMMENDATIONS: dict[str, str] = {
    "good": "Air quality is excellent! This is a great space for focused work or study sessions",
    "moderate": "Air quality is acceptable but could be improved. Consider taking a short break",
    "poor": "Air quality needs immediate attention. Take action to improve conditions",
}

QUALITY_COLORS = {"good": "#BCF4A8", "moderate": "#FFAF76", "poor": "#F25E5E"}
QUALITY_LABELS = {"good": "Good", "moderate": "Moderate", "poor": "Poor"}


def _format_number(value: float) -> str:
    # 45.0 -> "45", 45.5 -> "45.5"
    return str(int(value)) if float(value).is_integer() else str(value)


def _co2_score(co2: float) -> float:
    if co2 <= CO2_GOOD:
        return 100
    if co2 <= CO2_MODERATE:
        return 100 - (co2 - CO2_GOOD) / (CO2_MODERATE - CO2_GOOD) * 40
    return max(0, 60 - (co2 - CO2_MODERATE) / CO2_POOR_SPAN * 60)


def _co2_recommendations(co2: float) -> list[str]:
    if co2 > CO2_MODERATE:
        return [
            f"CO₂ is too high ({_format_number(co2)} ppm). "
            "Open windows immediately to improve ventilation",
            "Consider using mechanical ventilation if available",
        ]
    if co2 > CO2_GOOD:
        return [
            f"CO₂ is slightly elevated ({_format_number(co2)} ppm). "
            "Opening a window would help improve air quality"
        ]
    return []


def _band_score(value: float, band: ComfortBand) -> tuple[float, Literal["low", "high"] | None]:
    """Sub-score for a comfort band, plus which outer limit was crossed, if any."""
    if value < band.min:
        return max(0, 50 - (band.min - value) * band.penalty), "low"
    if value > band.max:
        return max(0, 50 - (value - band.max) * band.penalty), "high"
    if value < band.optimal_min:
        return 50 + (value - band.min) / (band.optimal_min - band.min) * 50, None
    if value > band.optimal_max:
        return 50 + (band.max - value) / (band.max - band.optimal_max) * 50, None
    return 100, None


def _level_for(score: int) -> QualityLevel:
    if score >= GOOD_SCORE:
        return "good"
    if score >= MODERATE_SCORE:
        return "moderate"
    return "poor"


def calculate_air_quality(temperature: float, humidity: float, co2: float) -> AirQualityResult:
    """
    Score indoor air from 0 to 100 (100 is perfect) and suggest improvements.

    Weighted: CO2 40%, temperature 30%, humidity 30%. Recommendations are
    ordered CO2, temperature, humidity; when none apply a single message for
    the overall level is given instead.
    """
    recommendations = _co2_recommendations(co2)
    co2_score = _co2_score(co2)

    temp_score, temp_limit = _band_score(temperature, TEMPERATURE)
    shown_temperature = round_to_tenth(temperature)
    if temp_limit == "low":
        recommendations.append(
            f"Temperature is too cold ({shown_temperature:.1f}°C). Turn on heating for better comfort"
        )
    elif temp_limit == "high":
        recommendations.append(
            f"Temperature is too warm ({shown_temperature:.1f}°C). "
            "Open windows or adjust air conditioning"
        )

    humidity_score, humidity_limit = _band_score(humidity, HUMIDITY)
    if humidity_limit == "low":
        recommendations.append(
            f"Humidity is too low ({_format_number(humidity)}%). "
            "Use a humidifier or place water containers in the room"
        )
    elif humidity_limit == "high":
        recommendations.append(
            f"Humidity is too high ({_format_number(humidity)}%). "
            "Use a dehumidifier or open windows to increase airflow"
        )

    score = round_half_up(
        co2_score * CO2_WEIGHT
        + temp_score * TEMPERATURE_WEIGHT
        + humidity_score * HUMIDITY_WEIGHT
    )
    level = _level_for(score)

    if not recommendations:
        recommendations.append(FALLBACK_RECOMMENDATIONS[level])

    return AirQualityResult(score=score, level=level, recommendations=recommendations)


def quality_color(level: str | None) -> str:
    """Dashboard color for a quality level."""
    return QUALITY_COLORS.get(level, "#F8F8F8")


def quality_label(level: str | None) -> str:
    """Badge text for a quality level."""
    return QUALITY_LABELS.get(level, "No Data")
