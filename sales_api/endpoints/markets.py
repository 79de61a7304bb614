"""Market CRUD endpoints module."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.endpoints.responses import ERROR_RESPONSES, envelope
from sales_api.schemas.common import ApiResponse
from sales_api.schemas.market import MarketCreate, MarketResponse, MarketUpdate
from sales_api.security import get_current_user
from sales_api.services import market_service

router = APIRouter(
    prefix="/markets",
    tags=["markets"],
    dependencies=[Depends(get_current_user)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[list[MarketResponse]])
async def list_markets(
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """List all markets ordered by market code."""
    return envelope(response, await market_service.get_all_markets(db))


@router.post("/create", response_model=ApiResponse[MarketResponse])
async def create_market(
    market: MarketCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """
    Create a market.

    Country codes that are not registered, and repeated codes, are
    dropped from **countryIsoCodes** before the market is stored.
    """
    return envelope(response, await market_service.create_market(db, market))


@router.get("/{market_code}", response_model=ApiResponse[MarketResponse])
async def get_market(
    market_code: str,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Get a market by code (202 with null data when missing)."""
    return envelope(response, await market_service.get_market(db, market_code))


@router.put("/update/{market_code}", response_model=ApiResponse[MarketResponse])
async def update_market(
    market_code: str,
    update: MarketUpdate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Update the provided fields of a market."""
    return envelope(response, await market_service.update_market(db, market_code, update))


@router.delete("/delete/{market_code}", response_model=ApiResponse[MarketResponse])
async def delete_market(
    market_code: str,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Soft delete a market."""
    return envelope(response, await market_service.delete_market(db, market_code))
