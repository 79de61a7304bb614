"""Generic record store module.

Thin CRUD layer over an ``AsyncSession`` for a single model. Soft-deleted
rows (models with a ``deleted`` column) are excluded from every lookup and
deletes only flag the row.

Uniqueness is ultimately enforced by the database indexes: an
``IntegrityError`` raised by a write is reported as the store's
``already_exists`` error, the same error services raise from their
pre-write existence checks.
"""
import logging
from datetime import datetime
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sales_api.exceptions.api_exception import AlreadyExistsError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class RecordStore(Generic[ModelT]):
    """CRUD and query helper bound to one model and one session."""

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelT],
        already_exists: type[Exception] = AlreadyExistsError,
    ):
        self.db = db
        self.model = model
        self.already_exists = already_exists

    @property
    def soft_deletes(self) -> bool:
        return hasattr(self.model, "deleted")

    def select_active(self) -> Select:
        """Base select over the model, hiding soft-deleted rows."""
        query = select(self.model)
        if self.soft_deletes:
            query = query.where(self.model.deleted.is_(False))
        return query

    def _where(self, criteria: dict[str, Any]) -> Select:
        query = self.select_active()
        for field, value in criteria.items():
            query = query.where(getattr(self.model, field) == value)
        return query

    async def find_one(self, **criteria: Any) -> Optional[ModelT]:
        result = await self.db.execute(self._where(criteria).limit(1))
        return result.scalar_one_or_none()

    async def find_by_id(self, record_id: Any) -> Optional[ModelT]:
        return await self.find_one(id=record_id)

    async def find_all(self, *order_by: Any) -> list[ModelT]:
        result = await self.db.execute(self.select_active().order_by(*order_by))
        return list(result.scalars().all())

    async def create(self, fields: dict[str, Any]) -> ModelT:
        record = self.model(**fields)
        self.db.add(record)
        await self._commit()
        await self.db.refresh(record)
        return record

    async def find_one_and_update(
        self, criteria: dict[str, Any], fields: dict[str, Any]
    ) -> Optional[ModelT]:
        """Apply a partial update to the first matching row, or return None."""
        record = await self.find_one(**criteria)
        if record is None:
            return None

        for field, value in fields.items():
            setattr(record, field, value)

        await self._commit()
        await self.db.refresh(record)
        return record

    async def find_one_and_delete(self, criteria: dict[str, Any]) -> Optional[ModelT]:
        """Soft delete the first matching row, or return None."""
        record = await self.find_one(**criteria)
        if record is None:
            return None

        if self.soft_deletes:
            record.deleted = True
            record.deleted_at = datetime.utcnow()
        else:
            await self.db.delete(record)

        await self._commit()
        return record

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError as exc:
            await self.db.rollback()
            logger.warning(
                "Unique constraint violated on %s: %s",
                self.model.__tablename__, exc.orig,
            )
            raise self.already_exists() from exc
