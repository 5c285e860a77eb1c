#!/usr/bin/env python3
"""One-shot database setup: init tables, seed demo data, generate readings."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from scripts.generate_data import generate_all_data
from scripts.init_db import init_db
from scripts.seed_demo import seed_demo


async def setup_all() -> None:
    """Run all setup steps."""
    print("=== Setting up AirSense database ===")
    print()

    print("Step 1: Creating tables...")
    await init_db()
    print()

    print("Step 2: Seeding demo user, buildings and rooms...")
    await seed_demo()
    print()

    print("Step 3: Generating sensor readings (24h)...")
    await generate_all_data()
    print()

    print("=== Setup complete! ===")
    print("Start the server with: uvicorn airsense.main:app --reload --port 8000")


if __name__ == "__main__":
    asyncio.run(setup_all())
