"""Transaction schemas module for CRUD and summary operations."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from sales_api.models.transaction import TransactionCode

# dd/mm/yyyy or dd-mm-yyyy, leading zeros optional
DATE_PATTERN = r"^(0?[1-9]|[12]\d|3[01])[/-](0?[1-9]|1[012])[/-]\d{4}$"


class TransactionCreate(BaseModel):
    """Schema for creating a transaction."""

    transaction_date: Optional[str] = Field(
        None, alias="transactionDate", pattern=DATE_PATTERN,
        description="Transaction date (dd/mm/yyyy), defaults to today",
    )
    product_reference: str = Field(
        ..., alias="productReference", min_length=1, max_length=128,
        description="Product reference",
    )
    country_iso_code: str = Field(
        ..., alias="countryIsoCode", min_length=1, max_length=8,
        description="ISO code of an existing country",
    )
    transaction_code: TransactionCode = Field(
        ..., alias="transactionCode", description="0 = sale, 1 = returned"
    )
    unit: int = Field(..., description="Units sold or returned")

    class Config:
        populate_by_name = True


class TransactionUpdate(BaseModel):
    """Schema for updating a transaction (all fields optional)."""

    transaction_date: Optional[str] = Field(None, alias="transactionDate", pattern=DATE_PATTERN)
    product_reference: Optional[str] = Field(
        None, alias="productReference", min_length=1, max_length=128
    )
    country_iso_code: Optional[str] = Field(
        None, alias="countryIsoCode", min_length=1, max_length=8
    )
    transaction_code: Optional[TransactionCode] = Field(None, alias="transactionCode")
    unit: Optional[int] = None

    class Config:
        populate_by_name = True


class TransactionResponse(BaseModel):
    """Schema for transaction response."""

    id: UUID = Field(..., description="Transaction ID")
    transaction_date: str = Field(..., alias="transactionDate")
    product_reference: str = Field(..., alias="productReference")
    country_iso_code: str = Field(..., alias="countryIsoCode")
    transaction_code: int = Field(..., alias="transactionCode")
    unit: int = Field(..., description="Units sold or returned")

    class Config:
        from_attributes = True
        populate_by_name = True


class TransactionFilter(BaseModel):
    """Optional filters for the transaction summary."""

    date_from: Optional[str] = Field(None, alias="dateFrom", pattern=DATE_PATTERN)
    date_to: Optional[str] = Field(None, alias="dateTo", pattern=DATE_PATTERN)
    market_code: Optional[str] = Field(None, alias="marketCode")
    country_iso_code: Optional[str] = Field(None, alias="countryIsoCode")

    class Config:
        populate_by_name = True


class TransactionSummary(BaseModel):
    """Filtered transactions with sale and return unit totals."""

    transactions: list[TransactionResponse] = Field(
        default_factory=list, description="Matching transactions, oldest date first"
    )
    sales_total: int = Field(0, alias="salesTotal", description="Units sold")
    returns_total: int = Field(0, alias="returnsTotal", description="Units returned")

    class Config:
        populate_by_name = True
