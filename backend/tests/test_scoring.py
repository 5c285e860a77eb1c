"""Tests for the air quality score."""

import pytest

from airsense.sensors import calculate_air_quality, quality_color, quality_label

EXCELLENT = "Air quality is excellent! This is a great space for focused work or study sessions"


def test_ideal_conditions():
    result = calculate_air_quality(21, 50, 500)
    assert result.score == 100
    assert result.level == "good"
    assert result.recommendations == [EXCELLENT]


def test_high_co2_gives_two_recommendations_first():
    result = calculate_air_quality(22, 50, 1500)
    # co2 sub-score 37.5 -> 0.4 * 37.5 + 30 + 30
    assert result.score == 75
    assert result.level == "good"
    assert result.recommendations == [
        "CO₂ is too high (1500 ppm). Open windows immediately to improve ventilation",
        "Consider using mechanical ventilation if available",
    ]


def test_slightly_elevated_co2():
    result = calculate_air_quality(22, 50, 1000)
    assert result.score == 92
    assert result.recommendations == [
        "CO₂ is slightly elevated (1000 ppm). Opening a window would help improve air quality"
    ]


def test_cold_and_dry():
    result = calculate_air_quality(15, 25, 400)
    assert result.score == 58
    assert result.level == "moderate"
    assert result.recommendations == [
        "Temperature is too cold (15.0°C). Turn on heating for better comfort",
        "Humidity is too low (25%). Use a humidifier or place water containers in the room",
    ]


def test_warm_and_humid():
    result = calculate_air_quality(26.5, 71, 600)
    # temp 50 - 0.5 * 10 = 45, humidity 50 - 1 * 2 = 48
    assert result.score == 68
    assert result.level == "moderate"
    assert result.recommendations == [
        "Temperature is too warm (26.5°C). Open windows or adjust air conditioning",
        "Humidity is too high (71%). Use a dehumidifier or open windows to increase airflow",
    ]


def test_temperature_in_message_rounds_halves_up():
    result = calculate_air_quality(17.25, 50, 400)
    assert result.recommendations == [
        "Temperature is too cold (17.3°C). Turn on heating for better comfort"
    ]


def test_poor_conditions_skip_generic_message():
    result = calculate_air_quality(10, 90, 3000)
    assert result.score == 3
    assert result.level == "poor"
    assert len(result.recommendations) == 4
    assert result.recommendations[0].startswith("CO₂ is too high (3000 ppm)")


def test_recommendation_order_is_co2_temperature_humidity():
    result = calculate_air_quality(30, 20, 900)
    assert result.recommendations[0].startswith("CO₂")
    assert result.recommendations[1].startswith("Temperature")
    assert result.recommendations[2].startswith("Humidity")


@pytest.mark.parametrize("co2, score", [(800, 100), (1200, 84), (2000, 60)])
def test_co2_band_boundaries(co2, score):
    assert calculate_air_quality(22, 50, co2).score == score


@pytest.mark.parametrize("temperature", [18, 26])
def test_temperature_outer_bounds_are_not_penalized(temperature):
    result = calculate_air_quality(temperature, 50, 400)
    # ramp value 50 at both bounds: 40 + 15 + 30
    assert result.score == 85
    assert result.recommendations == [EXCELLENT]


@pytest.mark.parametrize("temperature", [20, 24])
def test_temperature_optimal_bounds(temperature):
    assert calculate_air_quality(temperature, 50, 400).score == 100


@pytest.mark.parametrize("humidity", [30, 70])
def test_humidity_outer_bounds_are_not_penalized(humidity):
    result = calculate_air_quality(22, humidity, 400)
    assert result.score == 85
    assert result.recommendations == [EXCELLENT]


@pytest.mark.parametrize("humidity", [40, 60])
def test_humidity_optimal_bounds(humidity):
    assert calculate_air_quality(22, humidity, 400).score == 100


def test_score_of_seventy_is_good():
    result = calculate_air_quality(18, 30, 800)
    assert result.score == 70
    assert result.level == "good"


def test_fractional_humidity_in_message():
    result = calculate_air_quality(22, 25.5, 400)
    assert "Humidity is too low (25.5%)" in result.recommendations[0]


def test_quality_color_and_label():
    assert quality_color("good") == "#BCF4A8"
    assert quality_color("moderate") == "#FFAF76"
    assert quality_color("poor") == "#F25E5E"
    assert quality_color(None) == "#F8F8F8"
    assert quality_label("moderate") == "Moderate"
    assert quality_label(None) == "No Data"
