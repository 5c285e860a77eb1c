#!/usr/bin/env python3
"""Seed a demo account with buildings and rooms."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import select

from airsense.database import async_session
from airsense.models import Building, Room, User
from airsense.services.auth_service import hash_password

DEMO_EMAIL = "demo@airsense.local"
DEMO_PASSWORD = "airsense-demo"

BUILDINGS = [
    {"name": "Science Building", "code": "SB", "address": "Campus Road 1"},
    {"name": "Library", "code": "LIB", "address": "Campus Road 5"},
]

# Room sensor ids match the gateway; sensor_001 is the live feed
ROOMS = [
    {"name": "Group Room 1", "room_code": "S307", "building": "SB", "sensor_id": "sensor_001"},
    {"name": "Lab 2", "room_code": "S210", "building": "SB", "sensor_id": "sensor_002"},
    {"name": "Reading Room", "room_code": "L101", "building": "LIB", "sensor_id": "sensor_003"},
    {"name": "Study Cell 4", "room_code": "L204", "building": "LIB", "sensor_id": None},
]


async def seed_demo() -> None:
    """Seed the demo user, buildings and rooms (idempotent)."""
    async with async_session() as session:
        result = await session.execute(select(User).where(User.email == DEMO_EMAIL))
        user = result.scalar_one_or_none()
        if user:
            print("Demo user already seeded, skipping.")
            return

        user = User(email=DEMO_EMAIL, name="Demo User", password_hash=hash_password(DEMO_PASSWORD))
        session.add(user)
        await session.flush()

        buildings: dict[str, Building] = {}
        for building_data in BUILDINGS:
            building = Building(user_id=user.id, **building_data)
            session.add(building)
            buildings[building.code] = building
        await session.flush()

        for room_data in ROOMS:
            data = dict(room_data)
            building = buildings[data.pop("building")]
            session.add(Room(building_id=building.id, user_id=user.id, **data))

        await session.commit()
        print(f"Seeded demo user {DEMO_EMAIL} / {DEMO_PASSWORD}")
        print(f"Seeded {len(BUILDINGS)} buildings and {len(ROOMS)} rooms.")


if __name__ == "__main__":
    asyncio.run(seed_demo())
