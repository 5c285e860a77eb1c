"""Service layer modules."""

from airsense.services.auth_service import (
    authenticate,
    create_user,
    end_session,
    get_session_for_token,
    hash_password,
    start_session,
    verify_password,
)
from airsense.services.building_service import (
    create_building,
    delete_building,
    get_building_detail,
    list_buildings,
    update_building,
)
from airsense.services.display_service import (
    RoomDisplay,
    live_air_quality,
    resolve_room_display,
)
from airsense.services.readings_service import (
    IngestValidationError,
    get_latest_readings,
    ingest_reading,
    parse_submission,
)
from airsense.services.room_service import (
    create_room,
    delete_room,
    get_room_with_reading,
    list_rooms,
    list_rooms_with_buildings,
    update_room,
)

__all__ = [
    "authenticate",
    "create_user",
    "end_session",
    "get_session_for_token",
    "hash_password",
    "start_session",
    "verify_password",
    "create_building",
    "delete_building",
    "get_building_detail",
    "list_buildings",
    "update_building",
    "RoomDisplay",
    "live_air_quality",
    "resolve_room_display",
    "IngestValidationError",
    "get_latest_readings",
    "ingest_reading",
    "parse_submission",
    "create_room",
    "delete_room",
    "get_room_with_reading",
    "list_rooms",
    "list_rooms_with_buildings",
    "update_room",
]
