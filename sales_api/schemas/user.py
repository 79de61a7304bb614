"""User schemas module for registration and login."""
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCredentials(BaseModel):
    """E-mail and password sent on register and login."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=256, description="User e-mail")
    password: str = Field(..., min_length=1, description="Plain text password")

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.strip().lower()


class UserResponse(BaseModel):
    """Registered user."""

    id: UUID
    email: str

    class Config:
        from_attributes = True


class LoginResponse(UserResponse):
    """Authenticated user with a bearer token."""

    token: str = Field(..., description="JWT to send as 'Authorization: Bearer <token>'")
