"""Country schemas module for CRUD operations."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

ISO_CODE_PATTERN = r"^[a-zA-Z]+$"
NAME_PATTERN = r"^[a-zA-Z][a-zA-Z ]*$"


def _normalize_iso_code(value: Optional[str]) -> Optional[str]:
    return value.strip().upper() if value is not None else None


class CountryCreate(BaseModel):
    """Schema for creating a country."""

    iso_code: str = Field(
        ..., alias="isoCode", pattern=ISO_CODE_PATTERN, max_length=8,
        description="ISO code, stored upper-cased",
    )
    name: str = Field(..., pattern=NAME_PATTERN, max_length=128, description="Display name")

    @field_validator("iso_code")
    @classmethod
    def upper_iso_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_iso_code(value)

    class Config:
        populate_by_name = True


class CountryUpdate(BaseModel):
    """Schema for updating a country (all fields optional)."""

    iso_code: Optional[str] = Field(
        None, alias="isoCode", pattern=ISO_CODE_PATTERN, max_length=8
    )
    name: Optional[str] = Field(None, pattern=NAME_PATTERN, max_length=128)

    @field_validator("iso_code")
    @classmethod
    def upper_iso_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_iso_code(value)

    class Config:
        populate_by_name = True


class CountryResponse(BaseModel):
    """Schema for country response."""

    id: UUID = Field(..., description="Country ID")
    iso_code: str = Field(..., alias="isoCode", description="ISO code")
    name: str = Field(..., description="Display name")

    class Config:
        from_attributes = True
        populate_by_name = True
