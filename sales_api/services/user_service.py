"""User service module.

Registration stores the e-mail lower-cased and the password hashed.
Login verifies the password, issues a signed token and keeps the last
issued token on the user row.
"""
import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.record_store import RecordStore
from sales_api.exceptions.api_exception import UnauthorizedError, UserAlreadyExistsError
from sales_api.models.user import User
from sales_api.schemas.user import LoginResponse, UserCredentials, UserResponse
from sales_api.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)


def _store(db: AsyncSession) -> RecordStore[User]:
    return RecordStore(db, User, already_exists=UserAlreadyExistsError)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    return await _store(db).find_one(email=email.lower())


async def get_user_by_id(db: AsyncSession, user_id: UUID) -> Optional[User]:
    return await _store(db).find_by_id(user_id)


async def register_user(db: AsyncSession, credentials: UserCredentials) -> UserResponse:
    """
    Register a new user.

    Raises:
        UserAlreadyExistsError: If the e-mail is already registered
    """
    email = credentials.email.lower()
    logger.info("Registering user %s", email)
    if await get_user_by_email(db, email) is not None:
        raise UserAlreadyExistsError()

    user = await _store(db).create({
        "email": email,
        "password_hash": hash_password(credentials.password),
    })
    return UserResponse.model_validate(user)


async def login_user(db: AsyncSession, credentials: UserCredentials) -> LoginResponse:
    """
    Check credentials and issue a bearer token.

    Raises:
        UnauthorizedError: If the e-mail is unknown or the password is wrong
    """
    user = await get_user_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info("Rejected login for %s", credentials.email)
        raise UnauthorizedError()

    token = create_access_token(str(user.id))
    await _store(db).find_one_and_update({"id": user.id}, {"jwt_authorization": token})
    logger.info("User %s logged in", user.email)
    return LoginResponse(id=user.id, email=user.email, token=token)
