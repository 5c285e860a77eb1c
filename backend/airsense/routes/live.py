"""Live feed API routes."""

from fastapi import APIRouter, Depends

from airsense.dependencies import get_current_user, get_live_feed
from airsense.schemas import AirQualityOut, LiveReadingOut, LiveStatus
from airsense.sensors import LiveFeedClient
from airsense.services import live_air_quality

router = APIRouter(prefix="/api/live", tags=["live"])


def _status(feed: LiveFeedClient) -> LiveStatus:
    reading = feed.reading
    air_quality = live_air_quality(reading) if reading else None
    return LiveStatus(
        state=feed.state.value,
        connected=feed.is_connected,
        error=feed.error,
        sensor_id=feed.sensor_id,
        reading=LiveReadingOut.model_validate(reading) if reading else None,
        air_quality=AirQualityOut.model_validate(air_quality) if air_quality else None,
    )


@router.get("", response_model=LiveStatus)
async def get_live_status(feed: LiveFeedClient = Depends(get_live_feed)) -> LiveStatus:
    """Connection state and latest reading of the gateway feed."""
    return _status(feed)


@router.post("/reconnect", response_model=LiveStatus, dependencies=[Depends(get_current_user)])
async def reconnect_live_feed(feed: LiveFeedClient = Depends(get_live_feed)) -> LiveStatus:
    """Reconnect with a fresh retry budget."""
    await feed.reconnect()
    return _status(feed)


@router.post("/disconnect", response_model=LiveStatus, dependencies=[Depends(get_current_user)])
async def disconnect_live_feed(feed: LiveFeedClient = Depends(get_live_feed)) -> LiveStatus:
    """Close the gateway connection without retrying."""
    await feed.disconnect()
    return _status(feed)
