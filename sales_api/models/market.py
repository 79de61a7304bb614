"""Market model module."""
from sqlalchemy import JSON, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base
from sales_api.models.mixins import RecordMixin, SoftDeleteMixin


class Market(RecordMixin, SoftDeleteMixin, Base):
    """Market grouping a set of country ISO codes."""

    __tablename__ = "markets"
    __table_args__ = (
        Index(
            "uq_markets_market_code_active", "market_code", unique=True,
            postgresql_where=text("NOT deleted"), sqlite_where=text("NOT deleted"),
        ),
        Index(
            "uq_markets_name_active", "name", unique=True,
            postgresql_where=text("NOT deleted"), sqlite_where=text("NOT deleted"),
        ),
    )

    market_code: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    # Not constrained against countries; sanitized by the registry before writes
    country_iso_codes: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
