"""Raw gateway data → physical units.

The gateway is a micro:bit with an MG811 CO2 sensor on its 10-bit ADC, a DHT
temperature/humidity sensor and a DS18B20 temperature probe. Channels that are
not working report -999.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from airsense.sensors._rounding import round_half_up, round_to_tenth

__all__ = [
    "SENSOR_NOT_WORKING",
    "MalformedPayloadError",
    "ProcessedSensorData",
    "convert_raw_co2_to_ppm",
    "process_sensor_payload",
]

SENSOR_NOT_WORKING = -999

ADC_MIN = 0
ADC_MAX = 1023

FRESH_AIR_PPM = 400
MAX_PPM = 10000

# (adc, ppm) reference points for the MG811, ordered by adc
CO2_CALIBRATION: tuple[tuple[int, int], ...] = (
    (310, 400),  # fresh air, lower bound
    (350, 400),  # fresh air, upper bound
    (370, 1000),
    (430, 2000),
    (530, 5000),
)

# Gateway channel names
CHANNEL_TEMP_DHT = "airsense/tempDHT"
CHANNEL_TEMP_DS = "airsense/tempDS"
CHANNEL_HUMIDITY = "airsense/humidity"
CHANNEL_CO2 = "airsense/co2"


class MalformedPayloadError(ValueError):
    """Gateway message that is not a mapping of numeric channels."""


@dataclass(frozen=True)
class ProcessedSensorData:
    """One normalized gateway reading. Missing channels are None."""

    temperature: float | None
    humidity: int | None
    co2: int | None  # ppm
    raw_co2: float | None  # raw ADC value
    is_valid: bool


def convert_raw_co2_to_ppm(raw_adc: float) -> int:
    """Convert a raw MG811 ADC reading (0-1023) to an estimated CO2 ppm.

    Returns SENSOR_NOT_WORKING for the sentinel or anything outside the ADC
    range. Below the calibrated range the air is assumed fresh; above it the
    last segment's slope is extrapolated and capped at MAX_PPM.
    """
    if raw_adc == SENSOR_NOT_WORKING or raw_adc < ADC_MIN or raw_adc > ADC_MAX:
        return SENSOR_NOT_WORKING

    first_adc, _ = CO2_CALIBRATION[0]
    if raw_adc < first_adc:
        return FRESH_AIR_PPM

    last_adc, last_ppm = CO2_CALIBRATION[-1]
    if raw_adc > last_adc:
        prev_adc, prev_ppm = CO2_CALIBRATION[-2]
        slope = (last_ppm - prev_ppm) / (last_adc - prev_adc)
        extrapolated = last_ppm + slope * (raw_adc - last_adc)
        return min(round_half_up(extrapolated), MAX_PPM)

    for (adc1, ppm1), (adc2, ppm2) in zip(CO2_CALIBRATION, CO2_CALIBRATION[1:]):
        if adc1 <= raw_adc <= adc2:
            slope = (ppm2 - ppm1) / (adc2 - adc1)
            return round_half_up(ppm1 + slope * (raw_adc - adc1))

    # Unreachable: the table covers [first_adc, last_adc] without gaps
    return FRESH_AIR_PPM


def _channel(payload: Mapping[str, Any], name: str) -> float | None:
    """Read a numeric channel; absent and -999 both mean missing.

    NaN, infinities and numbers too large for a float are malformed.
    """
    value = payload.get(name)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedPayloadError(f"Channel {name} is not numeric: {value!r}")
    try:
        finite = math.isfinite(float(value))
    except OverflowError:
        finite = False
    if not finite:
        raise MalformedPayloadError(f"Channel {name} is not a finite number: {value!r}")
    if value == SENSOR_NOT_WORKING:
        return None
    return value


def process_sensor_payload(payload: Mapping[str, Any]) -> ProcessedSensorData:
    """Normalize one gateway message.

    The DS18B20 probe is the primary temperature source, the DHT sensor the
    fallback. A reading is valid when temperature and CO2 are both present;
    humidity may be missing.
    """
    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(f"Expected an object, got {type(payload).__name__}")

    temp_ds = _channel(payload, CHANNEL_TEMP_DS)
    temp_dht = _channel(payload, CHANNEL_TEMP_DHT)
    temperature = temp_ds if temp_ds is not None else temp_dht

    humidity = _channel(payload, CHANNEL_HUMIDITY)

    raw_co2 = _channel(payload, CHANNEL_CO2)
    co2_ppm = convert_raw_co2_to_ppm(raw_co2 if raw_co2 is not None else SENSOR_NOT_WORKING)
    co2 = co2_ppm if co2_ppm != SENSOR_NOT_WORKING else None

    return ProcessedSensorData(
        temperature=round_to_tenth(float(temperature)) if temperature is not None else None,
        humidity=round_half_up(humidity) if humidity is not None else None,
        co2=co2,
        raw_co2=raw_co2,
        is_valid=temperature is not None and co2 is not None,
    )
