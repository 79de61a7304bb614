"""Country model module."""
from sqlalchemy import Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base
from sales_api.models.mixins import RecordMixin, SoftDeleteMixin


class Country(RecordMixin, SoftDeleteMixin, Base):
    """Country registry entry keyed by its ISO code."""

    __tablename__ = "countries"
    __table_args__ = (
        # Uniqueness only applies to rows that have not been soft deleted
        Index(
            "uq_countries_iso_code_active", "iso_code", unique=True,
            postgresql_where=text("NOT deleted"), sqlite_where=text("NOT deleted"),
        ),
        Index(
            "uq_countries_name_active", "name", unique=True,
            postgresql_where=text("NOT deleted"), sqlite_where=text("NOT deleted"),
        ),
    )

    iso_code: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
