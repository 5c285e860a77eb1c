"""Building service layer: owner-scoped CRUD over buildings."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.exceptions import DuplicateValueError
from airsense.models import Building, Room
from airsense.schemas import BuildingCreate, BuildingDetail, BuildingUpdate, RoomWithLatestReading
from airsense.services.readings_service import get_latest_readings

__all__ = [
    "create_building",
    "delete_building",
    "get_building",
    "get_building_detail",
    "list_buildings",
    "update_building",
]

logger = logging.getLogger(__name__)


def _duplicate_code(code: str) -> DuplicateValueError:
    return DuplicateValueError(
        "code", code, f'Building code "{code}" already exists. Please use a different code.'
    )


async def list_buildings(session: AsyncSession, user_id: str) -> list[Building]:
    """All buildings of a user, newest first."""
    result = await session.execute(
        select(Building).where(Building.user_id == user_id).order_by(Building.created_at.desc())
    )
    return list(result.scalars())


async def get_building(session: AsyncSession, user_id: str, building_id: str) -> Building | None:
    """A building owned by the user. Missing and foreign buildings both give None."""
    result = await session.execute(
        select(Building).where(Building.id == building_id).where(Building.user_id == user_id)
    )
    return result.scalar_one_or_none()


async def get_building_detail(
    session: AsyncSession, user_id: str, building_id: str
) -> BuildingDetail | None:
    """A building with its rooms, each with its latest reading."""
    building = await get_building(session, user_id, building_id)
    if not building:
        return None

    result = await session.execute(
        select(Room).where(Room.building_id == building.id).order_by(Room.created_at.desc())
    )
    rooms = list(result.scalars())
    latest = await get_latest_readings(session, [r.id for r in rooms])

    return BuildingDetail(
        id=building.id,
        name=building.name,
        code=building.code,
        address=building.address,
        user_id=building.user_id,
        created_at=building.created_at,
        updated_at=building.updated_at,
        rooms=[
            RoomWithLatestReading.model_validate(room).model_copy(
                update={"latest_reading": latest.get(room.id)}
            )
            for room in rooms
        ],
    )


async def create_building(session: AsyncSession, user_id: str, data: BuildingCreate) -> Building:
    """Create a building. Raises DuplicateValueError if the code is taken."""
    building = Building(
        name=data.name,
        code=data.code,
        address=data.address or None,
        user_id=user_id,
    )
    session.add(building)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise _duplicate_code(data.code)

    logger.info(f"Created building {building.code} ({building.id})")
    return building


async def update_building(
    session: AsyncSession, user_id: str, building_id: str, data: BuildingUpdate
) -> Building | None:
    """Rename a building or change its address."""
    building = await get_building(session, user_id, building_id)
    if not building:
        return None

    changes = data.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] is not None:
        building.name = changes["name"]
    if "address" in changes:
        building.address = changes["address"] or None

    await session.commit()
    await session.refresh(building)
    return building


async def delete_building(session: AsyncSession, user_id: str, building_id: str) -> bool:
    """Delete a building together with its rooms and their readings."""
    building = await get_building(session, user_id, building_id)
    if not building:
        return False

    await session.delete(building)
    await session.commit()
    logger.info(f"Deleted building {building_id}")
    return True
