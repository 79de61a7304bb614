"""Transaction service module.

Provides transaction CRUD and the transaction summary: a filtered listing
together with the total units sold and returned.

Summary filters:
- dateFrom / dateTo bound ``transaction_date``; dateTo defaults to today.
  Dates are stored as text, so the bounds compare lexically.
- marketCode narrows to the market's countries; an unknown market is ignored.
- countryIsoCode narrows to one country and takes precedence over the
  market; an unknown country is ignored.
"""
import logging
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from sales_api.database.record_store import RecordStore
from sales_api.models.transaction import Transaction, TransactionCode, today_string
from sales_api.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionResponse,
    TransactionSummary,
    TransactionUpdate,
)
from sales_api.services.country_service import validate_country_iso_code
from sales_api.services.market_service import get_market_by_code

logger = logging.getLogger(__name__)


def _store(db: AsyncSession) -> RecordStore[Transaction]:
    return RecordStore(db, Transaction)


def _to_response(transaction: Optional[Transaction]) -> Optional[TransactionResponse]:
    return TransactionResponse.model_validate(transaction) if transaction is not None else None


def _units_total(code: TransactionCode) -> ColumnElement:
    """Sum of units for one transaction code across the whole result set."""
    units = case((Transaction.transaction_code == int(code), Transaction.unit), else_=0)
    return func.coalesce(func.sum(units).over(), 0)


async def _country_condition(
    db: AsyncSession, filters: TransactionFilter
) -> Optional[ColumnElement]:
    """Resolve the market and country filters into one country condition."""
    condition = None

    if filters.market_code:
        market = await get_market_by_code(db, filters.market_code)
        if market is not None:
            condition = Transaction.country_iso_code.in_(market.country_iso_codes)
        else:
            logger.info("Ignoring unknown market filter %r", filters.market_code)

    if filters.country_iso_code:
        country_iso_code = await validate_country_iso_code(db, filters.country_iso_code)
        if country_iso_code is not None:
            condition = Transaction.country_iso_code == country_iso_code
        else:
            logger.info("Ignoring unknown country filter %r", filters.country_iso_code)

    return condition


async def build_summary_conditions(
    db: AsyncSession, filters: TransactionFilter
) -> list[ColumnElement]:
    """
    Build the WHERE conditions for a transaction summary.

    Args:
        db: Database session, used to resolve the market and country filters
        filters: Requested filters, all optional

    Returns:
        Conditions to combine with AND
    """
    date_to = filters.date_to or today_string()
    conditions = [Transaction.transaction_date <= date_to]
    if filters.date_from:
        conditions.append(Transaction.transaction_date >= filters.date_from)

    country_condition = await _country_condition(db, filters)
    if country_condition is not None:
        conditions.append(country_condition)

    return conditions


async def get_transaction_summary(
    db: AsyncSession, filters: TransactionFilter
) -> TransactionSummary:
    """
    List matching transactions with their sale and return unit totals.

    Listing and totals come back from a single query: the totals are
    window sums over the filtered rows, so they repeat on every row and
    default to zero when nothing matches.
    """
    logger.info("Transaction summary requested: %s", filters.model_dump(exclude_none=True))
    conditions = await build_summary_conditions(db, filters)

    query = (
        _store(db)
        .select_active()
        .add_columns(
            _units_total(TransactionCode.SALE).label("sales_total"),
            _units_total(TransactionCode.RETURNED).label("returns_total"),
        )
        .where(*conditions)
        .order_by(Transaction.transaction_date)
    )
    result = await db.execute(query)
    rows = result.all()

    if not rows:
        return TransactionSummary()

    return TransactionSummary(
        transactions=[_to_response(row[0]) for row in rows],
        sales_total=int(rows[0].sales_total),
        returns_total=int(rows[0].returns_total),
    )


def _prepare_fields(fields: dict[str, Any]) -> dict[str, Any]:
    if fields.get("transaction_code") is not None:
        fields["transaction_code"] = int(fields["transaction_code"])
    return fields


async def create_transaction(
    db: AsyncSession, transaction: TransactionCreate
) -> TransactionResponse:
    """
    Create a transaction.

    Raises:
        ValidationFailedError: If the country ISO code is not registered
    """
    logger.info("Creating transaction for country %s", transaction.country_iso_code)
    await validate_country_iso_code(db, transaction.country_iso_code, raise_if_invalid=True)

    # transaction_date left unset falls back to today on the model
    fields = _prepare_fields(transaction.model_dump(exclude_none=True))
    created = await _store(db).create(fields)
    return _to_response(created)


async def get_all_transactions(db: AsyncSession) -> list[TransactionResponse]:
    transactions = await _store(db).find_all(Transaction.transaction_date)
    return [_to_response(transaction) for transaction in transactions]


async def get_transaction(db: AsyncSession, transaction_id: UUID) -> Optional[TransactionResponse]:
    return _to_response(await _store(db).find_by_id(transaction_id))


async def update_transaction(
    db: AsyncSession, transaction_id: UUID, update: TransactionUpdate
) -> Optional[TransactionResponse]:
    """Apply the provided fields; a new country code must be registered."""
    logger.info("Updating transaction %s", transaction_id)
    fields = _prepare_fields(update.model_dump(exclude_unset=True, exclude_none=True))
    if "country_iso_code" in fields:
        await validate_country_iso_code(db, fields["country_iso_code"], raise_if_invalid=True)

    updated = await _store(db).find_one_and_update({"id": transaction_id}, fields)
    return _to_response(updated)


async def delete_transaction(db: AsyncSession, transaction_id: UUID) -> Optional[TransactionResponse]:
    logger.info("Deleting transaction %s", transaction_id)
    return _to_response(await _store(db).find_one_and_delete({"id": transaction_id}))
