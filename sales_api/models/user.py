"""User model module."""
from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sales_api.database.database import Base
from sales_api.models.mixins import RecordMixin


class User(RecordMixin, Base):
    """API user able to log in and obtain a bearer token."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(256), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    jwt_authorization: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
