"""Pytest fixtures for async SQLite test database."""
import os

# Must be set before sales_api.database creates its engine
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-of-at-least-32-bytes")

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from sales_api.app import app
from sales_api.database.database import Base, get_db
from sales_api.models.country import Country
from sales_api.models.market import Market
from sales_api.models.transaction import Transaction, TransactionCode
from sales_api.models.user import User  # noqa: F401  (registers the users table)
from sales_api.schemas.user import UserCredentials
from sales_api.services.user_service import login_user, register_user


@pytest_asyncio.fixture
async def db_session():
    """Create an in-memory SQLite async session for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def sample_countries(db_session):
    """Register the countries used across the tests."""
    countries = [
        Country(iso_code="ESP", name="Spain"),
        Country(iso_code="FR", name="France"),
        Country(iso_code="GB", name="United Kingdom"),
        Country(iso_code="IT", name="Italy"),
        Country(iso_code="USA", name="United States"),
    ]
    db_session.add_all(countries)
    await db_session.commit()
    return countries


@pytest_asyncio.fixture
async def sample_markets(db_session, sample_countries):
    """European and American markets."""
    markets = [
        Market(market_code="M-EUR", name="European market", country_iso_codes=["ESP", "FR", "GB", "IT"]),
        Market(market_code="M-AM", name="American market", country_iso_codes=["USA"]),
    ]
    db_session.add_all(markets)
    await db_session.commit()
    return markets


@pytest_asyncio.fixture
async def sample_transactions(db_session, sample_markets):
    """Sales and returns spread over countries and February 2022."""
    sale = int(TransactionCode.SALE)
    returned = int(TransactionCode.RETURNED)
    transactions = [
        # Spain: 10 sold, 2 returned
        Transaction(transaction_date="21/02/2022", product_reference="P-1",
                    country_iso_code="ESP", transaction_code=sale, unit=10),
        Transaction(transaction_date="22/02/2022", product_reference="P-1",
                    country_iso_code="ESP", transaction_code=returned, unit=2),
        # France: 5 sold
        Transaction(transaction_date="23/02/2022", product_reference="P-2",
                    country_iso_code="FR", transaction_code=sale, unit=5),
        # Italy: 1 returned
        Transaction(transaction_date="24/02/2022", product_reference="P-2",
                    country_iso_code="IT", transaction_code=returned, unit=1),
        # United States: 100 sold
        Transaction(transaction_date="25/02/2022", product_reference="443",
                    country_iso_code="USA", transaction_code=sale, unit=100),
    ]
    db_session.add_all(transactions)
    await db_session.commit()
    return transactions


@pytest_asyncio.fixture
async def client(db_session):
    """HTTP client bound to the app, sharing the test session."""

    async def _get_test_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def auth_headers(db_session):
    """Bearer header for a freshly registered user."""
    credentials = UserCredentials(email="analyst@example.com", password="s3cret")
    await register_user(db_session, credentials)
    login = await login_user(db_session, credentials)
    return {"Authorization": f"Bearer {login.token}"}
