"""Room service layer: owner-scoped CRUD over rooms."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.exceptions import DuplicateValueError
from airsense.models import Building, Room
from airsense.schemas import RoomCreate, RoomUpdate, RoomWithLatestReading
from airsense.services.building_service import get_building
from airsense.services.readings_service import get_latest_reading, get_latest_readings

__all__ = [
    "create_room",
    "delete_room",
    "get_room",
    "get_room_with_reading",
    "list_rooms",
    "list_rooms_with_buildings",
    "update_room",
]

logger = logging.getLogger(__name__)


async def _find_conflict(
    session: AsyncSession,
    room_code: str | None,
    sensor_id: str | None,
    exclude_id: str | None = None,
) -> DuplicateValueError | None:
    """Work out which unique column a failed insert/update collided on."""
    if room_code:
        query = select(Room.id).where(Room.room_code == room_code)
        if exclude_id:
            query = query.where(Room.id != exclude_id)
        if (await session.execute(query)).first():
            return DuplicateValueError(
                "room_code",
                room_code,
                f'Room code "{room_code}" already exists. Please use a different code.',
            )
    if sensor_id:
        query = select(Room.id).where(Room.sensor_id == sensor_id)
        if exclude_id:
            query = query.where(Room.id != exclude_id)
        if (await session.execute(query)).first():
            return DuplicateValueError(
                "sensor_id",
                sensor_id,
                f'Sensor "{sensor_id}" is already assigned to another room.',
            )
    return None


async def list_rooms(session: AsyncSession, user_id: str) -> list[RoomWithLatestReading]:
    """All rooms of a user with their latest readings, newest first."""
    result = await session.execute(
        select(Room).where(Room.user_id == user_id).order_by(Room.created_at.desc())
    )
    rooms = list(result.scalars())
    latest = await get_latest_readings(session, [r.id for r in rooms])
    return [
        RoomWithLatestReading.model_validate(room).model_copy(
            update={"latest_reading": latest.get(room.id)}
        )
        for room in rooms
    ]


async def list_rooms_with_buildings(
    session: AsyncSession, user_id: str
) -> list[tuple[Room, Building]]:
    """All rooms of a user paired with their building, newest first."""
    result = await session.execute(
        select(Room, Building)
        .join(Building, Room.building_id == Building.id)
        .where(Room.user_id == user_id)
        .order_by(Room.created_at.desc())
    )
    return [(row[0], row[1]) for row in result.all()]


async def get_room(session: AsyncSession, user_id: str, room_id: str) -> Room | None:
    """A room owned by the user. Missing and foreign rooms both give None."""
    result = await session.execute(
        select(Room).where(Room.id == room_id).where(Room.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_room_with_reading(
    session: AsyncSession, user_id: str, room_id: str
) -> RoomWithLatestReading | None:
    room = await get_room(session, user_id, room_id)
    if not room:
        return None
    latest = await get_latest_reading(session, room.id)
    return RoomWithLatestReading.model_validate(room).model_copy(
        update={"latest_reading": latest}
    )


async def create_room(session: AsyncSession, user_id: str, data: RoomCreate) -> Room | None:
    """Create a room in one of the user's buildings.

    Returns None if the building does not exist or belongs to someone else.
    Raises DuplicateValueError for a taken room code or sensor id.
    """
    building = await get_building(session, user_id, data.building_id)
    if not building:
        return None

    room = Room(
        name=data.name,
        room_code=data.room_code,
        building_id=building.id,
        sensor_id=data.sensor_id or None,
        user_id=user_id,
    )
    session.add(room)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        conflict = await _find_conflict(session, data.room_code, data.sensor_id or None)
        if conflict:
            raise conflict
        raise

    logger.info(f"Created room {room.room_code} in building {building.code}")
    return room


async def update_room(
    session: AsyncSession, user_id: str, room_id: str, data: RoomUpdate
) -> Room | None:
    """Rename a room or (re)assign its sensor. Only fields sent are changed."""
    room = await get_room(session, user_id, room_id)
    if not room:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is not None:
        room.name = changes["name"]
    if "sensor_id" in changes:
        room.sensor_id = changes["sensor_id"] or None

    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        conflict = await _find_conflict(
            session, None, changes.get("sensor_id") or None, exclude_id=room_id
        )
        if conflict:
            raise conflict
        raise

    await session.refresh(room)
    return room


async def delete_room(session: AsyncSession, user_id: str, room_id: str) -> bool:
    """Delete a room and its readings."""
    room = await get_room(session, user_id, room_id)
    if not room:
        return False

    await session.delete(room)
    await session.commit()
    logger.info(f"Deleted room {room_id}")
    return True
