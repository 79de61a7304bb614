"""Tests for transaction service."""
import pytest
from sqlalchemy.dialects import sqlite

from sales_api.exceptions.api_exception import ValidationFailedError
from sales_api.models.transaction import TransactionCode
from sales_api.schemas.market import MarketCreate
from sales_api.schemas.transaction import TransactionCreate, TransactionFilter, TransactionUpdate
from sales_api.services import transaction_service
from sales_api.services.market_service import create_market
from sales_api.services.transaction_service import (
    build_summary_conditions,
    create_transaction,
    delete_transaction,
    get_all_transactions,
    get_transaction,
    get_transaction_summary,
    update_transaction,
)


def _compile(conditions) -> list[str]:
    return [
        str(c.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))
        for c in conditions
    ]


@pytest.mark.asyncio
class TestBuildSummaryConditions:
    """Tests for summary filter resolution."""

    async def test_date_to_defaults_to_today(self, db_session, monkeypatch):
        monkeypatch.setattr(transaction_service, "today_string", lambda: "19/10/2026")
        conditions = _compile(await build_summary_conditions(db_session, TransactionFilter()))
        assert conditions == ["transactions.transaction_date <= '19/10/2026'"]

    async def test_market_expands_to_country_set(self, db_session, sample_markets):
        filters = TransactionFilter(dateTo="28/02/2022", marketCode="M-EUR")
        conditions = _compile(await build_summary_conditions(db_session, filters))
        assert conditions[-1].startswith("transactions.country_iso_code IN")
        for iso_code in ("ESP", "FR", "GB", "IT"):
            assert f"'{iso_code}'" in conditions[-1]

    async def test_country_overrides_market(self, db_session, sample_markets):
        filters = TransactionFilter(dateTo="28/02/2022", marketCode="M-EUR", countryIsoCode="ESP")
        conditions = _compile(await build_summary_conditions(db_session, filters))
        assert conditions[-1] == "transactions.country_iso_code = 'ESP'"
        assert len(conditions) == 2

    async def test_unknown_market_adds_no_condition(self, db_session, sample_markets):
        with_market = await build_summary_conditions(
            db_session, TransactionFilter(dateTo="28/02/2022", marketCode="M-XX")
        )
        without_market = await build_summary_conditions(
            db_session, TransactionFilter(dateTo="28/02/2022")
        )
        assert _compile(with_market) == _compile(without_market)


@pytest.mark.asyncio
class TestGetTransactionSummary:
    """Integration tests for get_transaction_summary."""

    async def test_no_transactions_gives_zero_totals(self, db_session):
        result = await get_transaction_summary(db_session, TransactionFilter())
        assert result.transactions == []
        assert result.sales_total == 0
        assert result.returns_total == 0

    async def test_totals_split_sales_and_returns(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateFrom="20/02/2022", dateTo="28/02/2022")
        )
        assert len(result.transactions) == 5
        assert result.sales_total == 115
        assert result.returns_total == 3

    async def test_listing_ordered_by_date(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022")
        )
        dates = [t.transaction_date for t in result.transactions]
        assert dates == sorted(dates)

    async def test_only_sales_gives_zero_returns(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022", countryIsoCode="FR")
        )
        assert result.returns_total == 0
        assert result.sales_total == sum(t.unit for t in result.transactions) == 5

    async def test_market_filter(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022", marketCode="M-EUR")
        )
        assert {t.country_iso_code for t in result.transactions} == {"ESP", "FR", "IT"}
        assert result.sales_total == 15
        assert result.returns_total == 3

    async def test_country_filter_wins_over_market(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session,
            TransactionFilter(dateTo="28/02/2022", marketCode="M-EUR", countryIsoCode="ESP"),
        )
        assert {t.country_iso_code for t in result.transactions} == {"ESP"}
        assert result.sales_total == 10
        assert result.returns_total == 2

    async def test_unknown_market_behaves_like_no_market(self, db_session, sample_transactions):
        unknown = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022", marketCode="M-XX")
        )
        unfiltered = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022")
        )
        assert unknown == unfiltered

    async def test_unknown_country_is_ignored(self, db_session, sample_transactions):
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022", countryIsoCode="XX")
        )
        assert len(result.transactions) == 5

    async def test_date_bounds_compare_stored_strings(self, db_session, sample_transactions):
        # "25/02/2022" sorts after "01/03/2022" as text even though it is earlier
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateFrom="22/02/2022", dateTo="01/03/2022")
        )
        assert result.transactions == []

    async def test_deleted_transactions_are_excluded(self, db_session, sample_transactions):
        await delete_transaction(db_session, sample_transactions[-1].id)
        result = await get_transaction_summary(
            db_session, TransactionFilter(dateTo="28/02/2022", countryIsoCode="USA")
        )
        assert result.transactions == []
        assert result.sales_total == 0

    async def test_american_market_scenario(self, db_session, sample_countries, monkeypatch):
        monkeypatch.setattr(transaction_service, "today_string", lambda: "28/02/2022")

        market = await create_market(
            db_session,
            MarketCreate(marketCode="M-NA", name="North America", countryIsoCodes=["USA", "CA"]),
        )
        assert market.country_iso_codes == ["USA"]

        created = await create_transaction(
            db_session,
            TransactionCreate(
                countryIsoCode="USA",
                transactionCode=TransactionCode.SALE,
                unit=100,
                transactionDate="25/02/2022",
                productReference="443",
            ),
        )

        result = await get_transaction_summary(
            db_session, TransactionFilter(dateFrom="24/02/2022", marketCode="M-NA")
        )
        assert [t.id for t in result.transactions] == [created.id]
        assert result.sales_total == 100
        assert result.returns_total == 0


@pytest.mark.asyncio
class TestTransactionCrud:
    """Tests for transaction CRUD operations."""

    async def test_unknown_country_rejects_create(self, db_session, sample_countries):
        with pytest.raises(ValidationFailedError):
            await create_transaction(
                db_session,
                TransactionCreate(countryIsoCode="CA", transactionCode=0, unit=1,
                                  productReference="P-1"),
            )
        assert await get_all_transactions(db_session) == []

    async def test_date_defaults_to_today(self, db_session, sample_countries):
        created = await create_transaction(
            db_session,
            TransactionCreate(countryIsoCode="ESP", transactionCode=1, unit=3,
                              productReference="P-9"),
        )
        assert created.transaction_date == transaction_service.today_string()
        assert created.transaction_code == TransactionCode.RETURNED

    async def test_get_all_sorted_by_date(self, db_session, sample_transactions):
        transactions = await get_all_transactions(db_session)
        assert [t.transaction_date for t in transactions] == [
            "21/02/2022", "22/02/2022", "23/02/2022", "24/02/2022", "25/02/2022",
        ]

    async def test_update_changes_only_provided_fields(self, db_session, sample_transactions):
        target = sample_transactions[0]
        updated = await update_transaction(db_session, target.id, TransactionUpdate(unit=42))
        assert updated.unit == 42
        assert updated.country_iso_code == "ESP"
        assert updated.transaction_date == "21/02/2022"

    async def test_update_to_unknown_country_fails(self, db_session, sample_transactions):
        with pytest.raises(ValidationFailedError):
            await update_transaction(
                db_session, sample_transactions[0].id, TransactionUpdate(countryIsoCode="CA")
            )
        unchanged = await get_transaction(db_session, sample_transactions[0].id)
        assert unchanged.country_iso_code == "ESP"

    async def test_delete_then_get_returns_none(self, db_session, sample_transactions):
        target = sample_transactions[1]
        deleted = await delete_transaction(db_session, target.id)
        assert deleted.id == target.id
        assert await get_transaction(db_session, target.id) is None
