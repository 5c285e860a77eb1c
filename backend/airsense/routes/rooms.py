"""Room API routes."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.database import get_db
from airsense.dependencies import get_current_user
from airsense.exceptions import DuplicateValueError
from airsense.models import Room, User
from airsense.schemas import (
    DeleteResponse,
    RoomCreate,
    RoomOut,
    RoomUpdate,
    RoomWithLatestReading,
)
from airsense.services import (
    create_room,
    delete_room,
    get_room_with_reading,
    list_rooms,
    update_room,
)

router = APIRouter(prefix="/api/rooms", tags=["rooms"])


@router.get("", response_model=list[RoomWithLatestReading])
async def get_rooms(
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[RoomWithLatestReading]:
    """Get the current user's rooms with their latest readings."""
    return await list_rooms(session, user.id)


@router.post("", response_model=RoomOut, status_code=201)
async def post_room(
    data: RoomCreate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Room:
    """Create a room in one of the current user's buildings."""
    try:
        room = await create_room(session, user.id, data)
    except DuplicateValueError as e:
        raise HTTPException(status_code=409, detail=e.message)
    if not room:
        raise HTTPException(status_code=404, detail="Building not found")
    return room


@router.get("/{room_id}", response_model=RoomWithLatestReading)
async def get_room(
    room_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> RoomWithLatestReading:
    """Get a room with its latest reading."""
    room = await get_room_with_reading(session, user.id, room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.patch("/{room_id}", response_model=RoomOut)
async def patch_room(
    room_id: str,
    data: RoomUpdate,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> Room:
    """Rename a room or change its sensor."""
    try:
        room = await update_room(session, user.id, room_id, data)
    except DuplicateValueError as e:
        raise HTTPException(status_code=409, detail=e.message)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room


@router.delete("/{room_id}", response_model=DeleteResponse)
async def remove_room(
    room_id: str,
    user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Delete a room and its readings."""
    if not await delete_room(session, user.id, room_id):
        raise HTTPException(status_code=404, detail="Room not found")
    return DeleteResponse()
