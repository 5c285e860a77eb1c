"""Auth service layer: accounts, password hashing and login sessions.

A login creates a UserSession row and returns a JWT carrying the user id and
session id. Tokens are only accepted while their session row exists, so
signing out (deleting the row) revokes the token.
"""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta

import jwt
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from airsense.config import ACCESS_TOKEN_EXPIRE_HOURS, SECRET_KEY
from airsense.database import utcnow
from airsense.exceptions import DuplicateValueError
from airsense.models import User, UserSession
from airsense.schemas import SignupRequest

__all__ = [
    "authenticate",
    "create_user",
    "end_session",
    "get_session_for_token",
    "hash_password",
    "start_session",
    "verify_password",
]

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
PBKDF2_ITERATIONS = 200_000


def hash_password(password: str) -> str:
    """Salted PBKDF2-SHA256, stored as ``salt$digest``."""
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt), PBKDF2_ITERATIONS
    ).hex()
    return f"{salt}${digest}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    salt, _, expected = password_hash.partition("$")
    try:
        salt_bytes = bytes.fromhex(salt)
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt_bytes, PBKDF2_ITERATIONS).hex()
    return hmac.compare_digest(digest, expected)


async def create_user(session: AsyncSession, data: SignupRequest) -> User:
    """Register a new account. Raises DuplicateValueError if the email is taken."""
    email = data.email.strip().lower()
    user = User(email=email, name=data.name, password_hash=hash_password(data.password))
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise DuplicateValueError("email", email, f'Email "{email}" is already registered')

    logger.info(f"Registered user {user.id}")
    return user


async def authenticate(session: AsyncSession, email: str, password: str) -> User | None:
    """Return the user for valid credentials, None otherwise."""
    result = await session.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalar_one_or_none()
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def create_access_token(user_id: str, session_id: str, expires_at: datetime) -> str:
    payload = {
        "sub": user_id,
        "sid": session_id,
        "exp": expires_at,
        "iat": utcnow(),
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


async def start_session(session: AsyncSession, user: User) -> str:
    """Sign the user in and return an access token for the new session."""
    expires_at = utcnow() + timedelta(hours=ACCESS_TOKEN_EXPIRE_HOURS)
    login = UserSession(user_id=user.id, expires_at=expires_at)
    session.add(login)
    await session.commit()

    logger.info(f"User {user.id} signed in (session {login.id})")
    return create_access_token(user.id, login.id, expires_at)


async def get_session_for_token(
    session: AsyncSession, token: str
) -> tuple[UserSession, User] | None:
    """Resolve a bearer token to its live session and user."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.InvalidTokenError as e:
        logger.debug(f"Rejected token: {e}")
        return None

    user_id = payload.get("sub")
    session_id = payload.get("sid")
    if not user_id or not session_id:
        return None

    result = await session.execute(
        select(UserSession, User)
        .join(User, UserSession.user_id == User.id)
        .where(UserSession.id == session_id)
        .where(UserSession.user_id == user_id)
        .where(UserSession.expires_at > utcnow())
    )
    row = result.one_or_none()
    if not row:
        return None
    return row[0], row[1]


async def end_session(session: AsyncSession, session_id: str) -> None:
    """Sign out: delete the session so its token stops working."""
    await session.execute(delete(UserSession).where(UserSession.id == session_id))
    await session.commit()
    logger.info(f"Session {session_id} ended")
