"""Market service module."""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.record_store import RecordStore
from sales_api.exceptions.api_exception import AlreadyExistsError
from sales_api.models.market import Market
from sales_api.schemas.market import MarketCreate, MarketResponse, MarketUpdate
from sales_api.services.country_service import sanitize_country_iso_codes

logger = logging.getLogger(__name__)


def _store(db: AsyncSession) -> RecordStore[Market]:
    return RecordStore(db, Market)


def _to_response(market: Optional[Market]) -> Optional[MarketResponse]:
    return MarketResponse.model_validate(market) if market is not None else None


async def get_market_by_code(db: AsyncSession, market_code: str) -> Optional[Market]:
    """Exact lookup of a non-deleted market."""
    return await _store(db).find_one(market_code=market_code)


async def create_market(db: AsyncSession, market: MarketCreate) -> MarketResponse:
    """
    Create a market.

    The country code list is sanitized first: codes missing from the
    registry and repeated codes are dropped, never rejected.

    Raises:
        AlreadyExistsError: If the market code is already in use
    """
    logger.info("Creating market %s", market.market_code)
    if await get_market_by_code(db, market.market_code) is not None:
        raise AlreadyExistsError()

    fields = market.model_dump()
    fields["country_iso_codes"] = await sanitize_country_iso_codes(db, market.country_iso_codes)

    created = await _store(db).create(fields)
    return _to_response(created)


async def get_all_markets(db: AsyncSession) -> list[MarketResponse]:
    markets = await _store(db).find_all(Market.market_code)
    return [_to_response(market) for market in markets]


async def get_market(db: AsyncSession, market_code: str) -> Optional[MarketResponse]:
    return _to_response(await get_market_by_code(db, market_code))


async def update_market(
    db: AsyncSession, market_code: str, update: MarketUpdate
) -> Optional[MarketResponse]:
    """Apply the provided fields; a new country list is sanitized like on create."""
    logger.info("Updating market %s", market_code)
    fields = update.model_dump(exclude_unset=True, exclude_none=True)
    if "country_iso_codes" in fields:
        fields["country_iso_codes"] = await sanitize_country_iso_codes(
            db, fields["country_iso_codes"]
        )

    updated = await _store(db).find_one_and_update({"market_code": market_code}, fields)
    return _to_response(updated)


async def delete_market(db: AsyncSession, market_code: str) -> Optional[MarketResponse]:
    logger.info("Deleting market %s", market_code)
    return _to_response(await _store(db).find_one_and_delete({"market_code": market_code}))
