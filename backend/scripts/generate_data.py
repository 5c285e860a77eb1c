#!/usr/bin/env python3
"""Generate 24 hours of sensor readings for every room with a sensor."""

import asyncio
import random
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from airsense.database import async_session, utcnow
from airsense.models import Room, SensorReading
from airsense.sensors import calculate_air_quality

# Fixed seed for reproducibility
RANDOM_SEED = 42

# Time configuration
HOURS_TO_GENERATE = 24
INTERVAL_MINUTES = 15

# (temperature, humidity, co2) baselines per sensor; unknown sensors use DEFAULT_BASELINE
BASELINES = {
    "sensor_001": (21.5, 45.0, 650),
    "sensor_002": (23.0, 38.0, 900),
    "sensor_003": (19.5, 55.0, 500),
}
DEFAULT_BASELINE = (22.0, 50.0, 600)


def generate_room_readings(
    room: Room,
    start_time: datetime,
    end_time: datetime,
) -> list[SensorReading]:
    """Generate readings for one room, CO2 building up during occupied hours."""
    readings = []
    base_temp, base_humidity, base_co2 = BASELINES.get(room.sensor_id, DEFAULT_BASELINE)
    current_time = start_time

    while current_time <= end_time:
        hour = current_time.hour

        # Occupied rooms (8am-6pm) get warmer and stuffier
        occupied = 8 <= hour <= 18
        temperature = base_temp + (1.5 if occupied else -1.0) + random.uniform(-0.3, 0.3)
        humidity = base_humidity + random.uniform(-3, 3)
        co2 = base_co2 + (random.uniform(200, 700) if occupied else random.uniform(-150, 0))

        temperature = round(temperature, 1)
        humidity = round(humidity, 1)
        co2 = int(co2)
        air_quality = calculate_air_quality(temperature, humidity, co2)

        readings.append(
            SensorReading(
                room_id=room.id,
                sensor_id=room.sensor_id,
                temperature=temperature,
                humidity=humidity,
                co2=co2,
                quality_score=air_quality.score,
                quality_level=air_quality.level,
                recommendations=air_quality.recommendations,
                created_at=current_time,
            )
        )
        current_time += timedelta(minutes=INTERVAL_MINUTES)

    return readings


async def generate_all_data() -> None:
    """Generate HOURS_TO_GENERATE hours of readings."""
    random.seed(RANDOM_SEED)

    end_time = utcnow().replace(second=0, microsecond=0)
    start_time = end_time - timedelta(hours=HOURS_TO_GENERATE)

    print(f"Generating data from {start_time} to {end_time}")

    async with async_session() as session:
        # Check if data already exists
        result = await session.execute(select(SensorReading).limit(1))
        if result.scalar_one_or_none():
            print("Data already exists. Run with --reset to regenerate.")
            return

        result = await session.execute(select(Room).where(Room.sensor_id.is_not(None)))
        rooms = result.scalars().all()

        total_readings = 0
        for room in rooms:
            readings = generate_room_readings(room, start_time, end_time)
            session.add_all(readings)
            total_readings += len(readings)

        await session.commit()
        print(f"Generated {total_readings} readings for {len(rooms)} rooms.")


async def clear_readings() -> None:
    """Clear all reading data."""
    async with async_session() as session:
        await session.execute(SensorReading.__table__.delete())
        await session.commit()
    print("Cleared all readings.")


async def reset_and_generate() -> None:
    """Clear existing data and regenerate."""
    await clear_readings()
    await generate_all_data()


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "--reset":
        asyncio.run(reset_and_generate())
    else:
        asyncio.run(generate_all_data())
