"""Building API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.database import get_db
from airsense.dependencies import get_current_user
from airsense.exceptions import DuplicateValueError
from airsense.models import Building, User
from airsense.schemas import (
    BuildingCreate,
    BuildingDetail,
    BuildingOut,
    BuildingUpdate,
    DeleteResponse,
)
from airsense.services import (
    create_building,
    delete_building,
    get_building_detail,
    list_buildings,
    update_building,
)

router = APIRouter(prefix="/api/buildings", tags=["buildings"])


@router.get("", response_model=list[BuildingOut])
async def get_buildings(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[Building]:
    """Get the current user's buildings, newest first."""
    return await list_buildings(session, user.id)


@router.post("", response_model=BuildingOut, status_code=201)
async def post_building(
    data: BuildingCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Building:
    """Create a building."""
    try:
        return await create_building(session, user.id, data)
    except DuplicateValueError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.get("/{building_id}", response_model=BuildingDetail)
async def get_building(
    building_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> BuildingDetail:
    """Get a building with its rooms and their latest readings."""
    building = await get_building_detail(session, user.id, building_id)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.patch("/{building_id}", response_model=BuildingOut)
async def patch_building(
    building_id: str,
    data: BuildingUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Building:
    """Update a building's name or address."""
    building = await update_building(session, user.id, building_id, data)
    if not building:
        raise HTTPException(status_code=404, detail="Building not found")
    return building


@router.delete("/{building_id}", response_model=DeleteResponse)
async def remove_building(
    building_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Delete a building and all of its rooms."""
    if not await delete_building(session, user.id, building_id):
        raise HTTPException(status_code=404, detail="Building not found")
    return DeleteResponse()
