"""Dashboard API routes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.database import get_db
from airsense.dependencies import get_current_user, get_live_feed
from airsense.models import User
from airsense.schemas import DashboardRoom, RoomDisplayOut
from airsense.sensors import LiveFeedClient
from airsense.services import get_latest_readings, list_rooms_with_buildings, resolve_room_display

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get("/rooms", response_model=list[DashboardRoom])
async def get_dashboard_rooms(
    user: User = Depends(get_current_user),
    feed: LiveFeedClient = Depends(get_live_feed),
    session: AsyncSession = Depends(get_db),
) -> list[DashboardRoom]:
    """The current user's rooms with live data where available, else the last stored reading."""
    rows = await list_rooms_with_buildings(session, user.id)
    latest = await get_latest_readings(session, [room.id for room, _ in rows])

    # Snapshot the feed once so every room sees the same live state
    live_reading = feed.reading
    live_connected = feed.is_connected

    dashboard = []
    for room, building in rows:
        display = resolve_room_display(
            room.sensor_id,
            latest.get(room.id),
            live_reading,
            live_connected,
            feed.sensor_id,
        )
        dashboard.append(
            DashboardRoom(
                id=room.id,
                name=room.name,
                room_code=room.room_code,
                building_id=building.id,
                building_code=building.code,
                sensor_id=room.sensor_id,
                display=RoomDisplayOut.model_validate(display),
            )
        )
    return dashboard
