"""Sensor reading model."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from airsense.database import Base, new_id, utcnow


class SensorReading(Base):
    """One accepted sensor submission with the air quality computed at ingestion.

    Rows are never updated; the latest reading of a room is the newest by created_at.
    """

    __tablename__ = "sensor_readings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    room_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False
    )
    sensor_id: Mapped[str] = mapped_column(String(50), nullable=False)
    temperature: Mapped[float] = mapped_column(Float, nullable=False)
    humidity: Mapped[float] = mapped_column(Float, nullable=False)
    co2: Mapped[int] = mapped_column(Integer, nullable=False)
    quality_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    quality_level: Mapped[str | None] = mapped_column(String(20), nullable=True)
    recommendations: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    room: Mapped["Room"] = relationship(back_populates="readings")

    __table_args__ = (Index("ix_sensor_readings_room_time", "room_id", "created_at"),)


# Import here to avoid circular imports
from airsense.models.room import Room  # noqa: E402, F401
