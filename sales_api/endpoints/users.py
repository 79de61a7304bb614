"""User registration and login endpoints module."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.endpoints.responses import ERROR_RESPONSES, envelope
from sales_api.schemas.common import ApiResponse
from sales_api.schemas.user import LoginResponse, UserCredentials, UserResponse
from sales_api.services import user_service

router = APIRouter(prefix="/user", tags=["user"], responses=ERROR_RESPONSES)


@router.post("/register", response_model=ApiResponse[UserResponse])
async def register(
    credentials: UserCredentials,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Register a user (code 40 when the e-mail is taken)."""
    return envelope(response, await user_service.register_user(db, credentials))


@router.post("/login", response_model=ApiResponse[LoginResponse])
async def login(
    credentials: UserCredentials,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """
    Log in and obtain a bearer token.

    Send the returned **token** as `Authorization: Bearer <token>` on every
    country, market and transaction request.
    """
    return envelope(response, await user_service.login_user(db, credentials))
