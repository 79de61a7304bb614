"""Transaction model module."""
import enum
from datetime import date

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base
from sales_api.models.mixins import RecordMixin, SoftDeleteMixin
from sales_api.settings import settings


class TransactionCode(enum.IntEnum):
    """Kind of movement recorded by a transaction."""

    SALE = 0
    RETURNED = 1


def today_string() -> str:
    """Today's date in the same string format as stored transaction dates."""
    return date.today().strftime(settings.DATE_FORMAT)


class Transaction(RecordMixin, SoftDeleteMixin, Base):
    """Sale or return of a product in a given country."""

    __tablename__ = "transactions"

    # Stored as text (dd/mm/yyyy or dd-mm-yyyy); range filters compare lexically
    transaction_date: Mapped[str] = mapped_column(
        String(10), nullable=False, default=today_string, index=True
    )
    product_reference: Mapped[str] = mapped_column(String(128), nullable=False)
    country_iso_code: Mapped[str] = mapped_column(String(8), nullable=False, index=True)
    transaction_code: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    unit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
