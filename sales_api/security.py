"""Password hashing and bearer token helpers."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional
from uuid import UUID

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import check_password_hash, generate_password_hash

from sales_api.database.database import get_db
from sales_api.database.record_store import RecordStore
from sales_api.exceptions.api_exception import UnauthorizedError
from sales_api.models.user import User
from sales_api.settings import settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    """Sign a token identifying ``subject`` (the user id)."""
    now = datetime.now(timezone.utc)
    lifetime = timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        UnauthorizedError: If the token is expired or invalid
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
):
    """Dependency resolving the bearer token to an existing user."""
    if credentials is None:
        raise UnauthorizedError("Not authenticated")

    claims = decode_access_token(credentials.credentials)
    try:
        user_id = UUID(claims["sub"])
    except (KeyError, ValueError):
        raise UnauthorizedError("Invalid token")

    user = await RecordStore(db, User).find_by_id(user_id)
    if user is None:
        logger.warning("Token presented for unknown user %s", user_id)
        raise UnauthorizedError("User no longer exists")
    return user
