"""FastAPI dependencies shared by the routers."""

import hmac

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import INGEST_API_KEY
from airsense.database import get_db
from airsense.models import User, UserSession
from airsense.sensors import LiveFeedClient
from airsense.services import get_session_for_token

# auto_error=False so a missing header gives our 401 instead of a 403
bearer = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    session: AsyncSession = Depends(get_db),
) -> tuple[UserSession, User]:
    """The signed-in session and its user, or 401."""
    if credentials is None:
        raise _unauthorized()
    found = await get_session_for_token(session, credentials.credentials)
    if not found:
        raise _unauthorized()
    return found


async def get_current_user(
    current: tuple[UserSession, User] = Depends(get_current_session),
) -> User:
    return current[1]


def get_live_feed(request: Request) -> LiveFeedClient:
    """The application's live feed client."""
    return request.app.state.live_feed


async def require_ingest_key(x_api_key: str | None = Header(None)) -> None:
    """Gateways must send INGEST_API_KEY in X-API-Key when one is configured."""
    if INGEST_API_KEY is None:
        return
    if x_api_key is None or not hmac.compare_digest(x_api_key, INGEST_API_KEY):
        raise _unauthorized()
