"""Transaction CRUD and summary endpoints module."""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.endpoints.responses import ERROR_RESPONSES, envelope
from sales_api.schemas.common import ApiResponse
from sales_api.schemas.transaction import (
    DATE_PATTERN,
    TransactionCreate,
    TransactionFilter,
    TransactionResponse,
    TransactionSummary,
    TransactionUpdate,
)
from sales_api.security import get_current_user
from sales_api.services import transaction_service

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    dependencies=[Depends(get_current_user)],
    responses=ERROR_RESPONSES,
)


@router.get("/summary", response_model=ApiResponse[TransactionSummary])
async def get_transaction_summary(
    response: Response,
    date_from: Optional[str] = Query(
        default=None,
        alias="dateFrom",
        pattern=DATE_PATTERN,
        description="Inclusive lower bound (dd/mm/yyyy)",
    ),
    date_to: Optional[str] = Query(
        default=None,
        alias="dateTo",
        pattern=DATE_PATTERN,
        description="Inclusive upper bound (dd/mm/yyyy), defaults to today",
    ),
    market_code: Optional[str] = Query(
        default=None,
        alias="marketCode",
        description="Restrict to the market's countries",
    ),
    country_iso_code: Optional[str] = Query(
        default=None,
        alias="countryIsoCode",
        description="Restrict to one country, overrides marketCode",
    ),
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """
    Get filtered transactions with sale and return totals.

    Returns:
    - **transactions**: Matching transactions ordered by date
    - **salesTotal**: Units sold across the matches
    - **returnsTotal**: Units returned across the matches

    Unknown market or country codes are ignored rather than rejected.
    """
    filters = TransactionFilter(
        date_from=date_from,
        date_to=date_to,
        market_code=market_code,
        country_iso_code=country_iso_code,
    )
    return envelope(response, await transaction_service.get_transaction_summary(db, filters))


@router.get("", response_model=ApiResponse[list[TransactionResponse]])
async def list_transactions(
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """List all transactions ordered by date."""
    return envelope(response, await transaction_service.get_all_transactions(db))


@router.post("/create", response_model=ApiResponse[TransactionResponse])
async def create_transaction(
    transaction: TransactionCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """
    Create a transaction.

    Fails with code 422 when **countryIsoCode** is not a registered country.
    """
    return envelope(response, await transaction_service.create_transaction(db, transaction))


@router.get("/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def get_transaction(
    transaction_id: UUID,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Get a single transaction by ID (202 with null data when missing)."""
    return envelope(response, await transaction_service.get_transaction(db, transaction_id))


@router.put("/update/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def update_transaction(
    transaction_id: UUID,
    update: TransactionUpdate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Update the provided fields of a transaction."""
    return envelope(
        response, await transaction_service.update_transaction(db, transaction_id, update)
    )


@router.delete("/delete/{transaction_id}", response_model=ApiResponse[TransactionResponse])
async def delete_transaction(
    transaction_id: UUID,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Soft delete a transaction."""
    return envelope(response, await transaction_service.delete_transaction(db, transaction_id))
