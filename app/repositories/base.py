"""Base repository for database operations."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    InvalidIdError,
)
from app.monitoring import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


def parse_record_id(value: str | UUID) -> UUID:
    """
    Parse a record identifier received from a client.

    Args:
        value: Identifier as given in the path, or an already parsed UUID.

    Returns:
        UUID: The parsed identifier.

    Raises:
        InvalidIdError: If the value is not a well-formed UUID.
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(value)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidIdError from e


class BaseRepository(Generic[ModelT]):
    """
    Base repository implementing common read and write operations.

    This class provides a generic implementation of database operations
    that can be extended by specific entity repositories.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_ids(self, record_ids: Iterable[UUID | str]) -> list[ModelT]:
        """
        Get every record whose ID is in ``record_ids``.

        Malformed ids are skipped; the result order is unspecified.
        """
        ids = []
        for record_id in record_ids:
            try:
                ids.append(parse_record_id(record_id))
            except InvalidIdError:
                continue
        if not ids:
            return []
        statement = select(self.model).where(self._id_column.in_(ids))
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def get_all(self) -> list[ModelT]:
        """
        Get all records, oldest first.

        Ties on ``created_at`` are broken by primary key so the order is stable.

        Returns:
            list[ModelT]: List of records
        """
        statement = select(self.model).order_by(
            getattr(self.model, "created_at"),
            self._id_column,
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            logger.warning(f"Integrity error on {self.model.__name__}: {error_msg}")
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to save {self.model.__name__}")
            raise DatabaseConnectionError(detail="Failed to save record") from e

    async def _delete(self, record: ModelT) -> None:
        """Delete a loaded record and flush."""
        try:
            await self.session.delete(record)
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception(f"Failed to delete {self.model.__name__}")
            raise DatabaseConnectionError(detail="Failed to delete record") from e
