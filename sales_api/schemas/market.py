"""Market schemas module for CRUD operations."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


def _normalize_market_code(value: Optional[str]) -> Optional[str]:
    return value.strip().upper() if value is not None else None


class MarketCreate(BaseModel):
    """Schema for creating a market.

    Unknown or repeated country codes are accepted here and dropped by the
    registry before the market is stored.
    """

    market_code: str = Field(
        ..., alias="marketCode", min_length=1, max_length=32,
        description="Market code, stored upper-cased",
    )
    name: str = Field(..., min_length=1, max_length=128, description="Display name")
    country_iso_codes: list[str] = Field(
        default_factory=list,
        alias="countryIsoCodes",
        description="ISO codes of the countries in the market",
    )

    @field_validator("market_code")
    @classmethod
    def upper_market_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_market_code(value)

    class Config:
        populate_by_name = True


class MarketUpdate(BaseModel):
    """Schema for updating a market (all fields optional)."""

    market_code: Optional[str] = Field(None, alias="marketCode", min_length=1, max_length=32)
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    country_iso_codes: Optional[list[str]] = Field(None, alias="countryIsoCodes")

    @field_validator("market_code")
    @classmethod
    def upper_market_code(cls, value: Optional[str]) -> Optional[str]:
        return _normalize_market_code(value)

    class Config:
        populate_by_name = True


class MarketResponse(BaseModel):
    """Schema for market response."""

    id: UUID = Field(..., description="Market ID")
    market_code: str = Field(..., alias="marketCode", description="Market code")
    name: str = Field(..., description="Display name")
    country_iso_codes: list[str] = Field(
        default_factory=list, alias="countryIsoCodes", description="Member country codes"
    )

    class Config:
        from_attributes = True
        populate_by_name = True
