"""Room model."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from airsense.database import Base, new_id, utcnow


class Room(Base):
    """Room in a building, optionally monitored by one sensor."""

    __tablename__ = "rooms"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    room_code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    building_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Gateway sensor identifier, e.g. "sensor_001"
    sensor_id: Mapped[str | None] = mapped_column(String(50), unique=True, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    building: Mapped["Building"] = relationship(back_populates="rooms")
    readings: Mapped[list["SensorReading"]] = relationship(
        back_populates="room", cascade="all, delete-orphan", passive_deletes=True
    )


# Import here to avoid circular imports
from airsense.models.building import Building  # noqa: E402, F401
from airsense.models.readings import SensorReading  # noqa: E402, F401
