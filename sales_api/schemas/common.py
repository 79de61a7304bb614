"""Response envelope schemas shared by every endpoint."""
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

SUCCESS_MESSAGE = "Request successful"


class ApiResponse(BaseModel, Generic[T]):
    """Successful response wrapping the payload."""

    success: bool = Field(True, description="Always true for successful requests")
    data: Optional[T] = Field(None, description="Payload, null when the resource does not exist")
    message: str = Field(SUCCESS_MESSAGE, description="Human-readable result")


class ErrorResponse(BaseModel):
    """Failed response with a stable internal error code."""

    success: bool = Field(False, description="Always false for failed requests")
    code: int = Field(..., description="Internal error code")
    message: str = Field(..., description="Human-readable error message")
