"""Auth API routes."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.database import get_db
from airsense.dependencies import get_current_session, get_current_user
from airsense.exceptions import DuplicateValueError
from airsense.models import User, UserSession
from airsense.schemas import DeleteResponse, LoginRequest, SignupRequest, TokenResponse, UserOut
from airsense.services import authenticate, create_user, end_session, start_session

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(data: SignupRequest, session: AsyncSession = Depends(get_db)) -> User:
    """Register a new account."""
    try:
        return await create_user(session, data)
    except DuplicateValueError as e:
        raise HTTPException(status_code=409, detail=e.message)


@router.post("/login", response_model=TokenResponse)
async def login(data: LoginRequest, session: AsyncSession = Depends(get_db)) -> TokenResponse:
    """Sign in with email and password."""
    user = await authenticate(session, data.email, data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    token = await start_session(session, user)
    return TokenResponse(access_token=token, user=UserOut.model_validate(user))


@router.post("/logout", response_model=DeleteResponse)
async def logout(
    current: tuple[UserSession, User] = Depends(get_current_session),
    session: AsyncSession = Depends(get_db),
) -> DeleteResponse:
    """Sign out; the token stops working."""
    await end_session(session, current[0].id)
    return DeleteResponse()


@router.get("/me", response_model=UserOut)
async def me(user: User = Depends(get_current_user)) -> User:
    """The signed-in user."""
    return user
