"""Country CRUD endpoints module."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.database import get_db
from sales_api.endpoints.responses import ERROR_RESPONSES, envelope
from sales_api.schemas.common import ApiResponse
from sales_api.schemas.country import CountryCreate, CountryResponse, CountryUpdate
from sales_api.security import get_current_user
from sales_api.services import country_service

router = APIRouter(
    prefix="/countries",
    tags=["countries"],
    dependencies=[Depends(get_current_user)],
    responses=ERROR_RESPONSES,
)


@router.get("", response_model=ApiResponse[list[CountryResponse]])
async def list_countries(
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """List all countries ordered by ISO code."""
    return envelope(response, await country_service.get_all_countries(db))


@router.post("/create", response_model=ApiResponse[CountryResponse])
async def create_country(
    country: CountryCreate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """
    Create a country.

    Fails with code 43 when the ISO code is already registered.
    """
    return envelope(response, await country_service.create_country(db, country))


@router.get("/{iso_code}", response_model=ApiResponse[CountryResponse])
async def get_country(
    iso_code: str,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Get a country by ISO code (202 with null data when missing)."""
    return envelope(response, await country_service.get_country(db, iso_code))


@router.put("/update/{iso_code}", response_model=ApiResponse[CountryResponse])
async def update_country(
    iso_code: str,
    update: CountryUpdate,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Update the provided fields of a country."""
    return envelope(response, await country_service.update_country(db, iso_code, update))


@router.delete("/delete/{iso_code}", response_model=ApiResponse[CountryResponse])
async def delete_country(
    iso_code: str,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> ApiResponse:
    """Soft delete a country."""
    return envelope(response, await country_service.delete_country(db, iso_code))
