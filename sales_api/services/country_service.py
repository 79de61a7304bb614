"""Country registry service module.

Owns the country master data and is the single authority on whether a
country ISO code exists. Markets and transactions validate their country
references through the helpers below:

- markets sanitize their code list with ``sanitize_country_iso_codes``
  (unknown and repeated codes are dropped silently)
- transactions call ``validate_country_iso_code`` with
  ``raise_if_invalid=True`` (unknown codes reject the write)
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.database.record_store import RecordStore
from sales_api.exceptions.api_exception import (
    AlreadyExistsError,
    RESOURCE_NOT_FOUND_MESSAGE,
    ValidationFailedError,
)
from sales_api.models.country import Country
from sales_api.schemas.country import CountryCreate, CountryResponse, CountryUpdate

logger = logging.getLogger(__name__)


def _store(db: AsyncSession) -> RecordStore[Country]:
    return RecordStore(db, Country)


def _to_response(country: Optional[Country]) -> Optional[CountryResponse]:
    return CountryResponse.model_validate(country) if country is not None else None


async def get_country_by_iso_code(db: AsyncSession, iso_code: str) -> Optional[Country]:
    """Exact lookup of a non-deleted country."""
    return await _store(db).find_one(iso_code=iso_code)


async def country_exists(db: AsyncSession, iso_code: str) -> bool:
    return await get_country_by_iso_code(db, iso_code) is not None


async def validate_country_iso_code(
    db: AsyncSession,
    iso_code: str,
    raise_if_invalid: bool = False,
) -> Optional[str]:
    """
    Check that a country with this ISO code exists.

    Args:
        db: Database session
        iso_code: Code to check, compared exactly
        raise_if_invalid: Raise instead of returning None for unknown codes

    Returns:
        The code unchanged when it exists, otherwise None

    Raises:
        ValidationFailedError: If the code is unknown and raise_if_invalid is set
    """
    if await country_exists(db, iso_code):
        return iso_code

    logger.debug("Country %r not found (raise_if_invalid=%s)", iso_code, raise_if_invalid)
    if raise_if_invalid:
        raise ValidationFailedError(f"{RESOURCE_NOT_FOUND_MESSAGE}: countryIsoCode")
    return None


async def sanitize_country_iso_codes(db: AsyncSession, iso_codes: Iterable[str]) -> list[str]:
    """
    Keep only existing country codes, without duplicates.

    Order of first appearance is preserved. An empty input performs no
    lookups.
    """
    valid_codes: list[str] = []
    for iso_code in iso_codes:
        if iso_code in valid_codes:
            continue
        if await validate_country_iso_code(db, iso_code):
            valid_codes.append(iso_code)

    logger.debug("Sanitized country codes: %s", valid_codes)
    return valid_codes


async def create_country(db: AsyncSession, country: CountryCreate) -> CountryResponse:
    """Create a country, rejecting an ISO code already in use."""
    logger.info("Creating country %s", country.iso_code)
    if await country_exists(db, country.iso_code):
        raise AlreadyExistsError()

    created = await _store(db).create(country.model_dump())
    return _to_response(created)


async def get_all_countries(db: AsyncSession) -> list[CountryResponse]:
    countries = await _store(db).find_all(Country.iso_code)
    return [_to_response(country) for country in countries]


async def get_country(db: AsyncSession, iso_code: str) -> Optional[CountryResponse]:
    return _to_response(await get_country_by_iso_code(db, iso_code))


async def update_country(
    db: AsyncSession, iso_code: str, update: CountryUpdate
) -> Optional[CountryResponse]:
    """Apply the provided fields; None when no such country exists."""
    logger.info("Updating country %s", iso_code)
    updated = await _store(db).find_one_and_update(
        {"iso_code": iso_code}, update.model_dump(exclude_unset=True, exclude_none=True)
    )
    return _to_response(updated)


async def delete_country(db: AsyncSession, iso_code: str) -> Optional[CountryResponse]:
    logger.info("Deleting country %s", iso_code)
    return _to_response(await _store(db).find_one_and_delete({"iso_code": iso_code}))
