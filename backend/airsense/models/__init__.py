"""SQLAlchemy models."""

from airsense.models.building import Building
from airsense.models.readings import SensorReading
from airsense.models.room import Room
from airsense.models.user import User, UserSession

__all__ = [
    "User",
    "UserSession",
    "Building",
    "Room",
    "SensorReading",
]
