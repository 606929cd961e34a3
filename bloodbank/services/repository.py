from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bloodbank.utils.exceptions import (
    BloodBankError,
    ConflictError,
    NotFoundError,
    StoreError,
)
from bloodbank.utils.logging_config import get_logger

logger = get_logger(__name__)

Row = Dict[str, Any]


def driver_message(error: SQLAlchemyError) -> str:
    """The underlying DBAPI message when there is one, else SQLAlchemy's."""
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class BaseRepository:
    """
    Single-table CRUD where every operation is one parameterized statement.

    Subclasses set ``model``, ``pk_name`` and ``label``. Rows come back as
    plain dicts straight from ``RETURNING``/``SELECT`` so no ORM identity map
    sits between the caller and the table.

    Reads raise ``StoreError`` with ``read_failure_status``; writes commit
    their own transaction and raise ``StoreError`` with
    ``write_failure_status`` after rolling back.
    """

    model = None
    pk_name: str = ""
    label: str = "Data"
    not_found_template: str = "{label} with ID {id} not found."
    read_failure_status: int = 400
    write_failure_status: int = 400

    def __init__(self, db: AsyncSession):
        self.db = db

    # --- Statement builders ---

    @property
    def table(self) -> Table:
        return self.model.__table__

    @property
    def pk(self):
        return self.table.c[self.pk_name]

    def returning_columns(self) -> Sequence[Any]:
        return (self.table,)

    def select_stmt(self):
        return select(*self.returning_columns()).order_by(self.pk)

    def get_stmt(self, entity_id: int):
        return select(*self.returning_columns()).where(self.pk == entity_id)

    def lock_stmt(self, entity_id: int):
        return select(self.table).where(self.pk == entity_id).with_for_update()

    def insert_stmt(self, fields: Row):
        return insert(self.table).values(**fields).returning(*self.returning_columns())

    def update_stmt(self, entity_id: int, fields: Row):
        return (
            update(self.table)
            .where(self.pk == entity_id)
            .values(**fields)
            .returning(*self.returning_columns())
        )

    def delete_stmt(self, entity_id: int):
        return (
            delete(self.table)
            .where(self.pk == entity_id)
            .returning(*self.returning_columns())
        )

    def not_found(self, entity_id: Any) -> NotFoundError:
        return NotFoundError(
            self.not_found_template.format(label=self.label, id=entity_id)
        )

    # --- Execution helpers ---

    async def fetch_all(self, stmt, failure_message: str) -> List[Row]:
        try:
            result = await self.db.execute(stmt)
            return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            raise self._store_error(e, failure_message, self.read_failure_status)

    async def fetch_one(self, stmt, failure_message: str) -> Optional[Row]:
        try:
            result = await self.db.execute(stmt)
            row = result.mappings().first()
            return dict(row) if row is not None else None
        except SQLAlchemyError as e:
            raise self._store_error(e, failure_message, self.read_failure_status)

    @asynccontextmanager
    async def write(
        self,
        failure_message: str,
        conflict_message: Optional[str] = None,
        failure_status: Optional[int] = None,
    ) -> AsyncIterator[None]:
        """
        Transaction scope for a write. Commits on success; on any error rolls
        back and re-raises, mapping database errors to ``StoreError`` (or
        ``ConflictError`` for integrity errors when ``conflict_message`` is set).
        """
        status_code = failure_status or self.write_failure_status
        try:
            yield
            await self.db.commit()
        except BloodBankError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            if conflict_message:
                raise ConflictError(conflict_message, error=driver_message(e)) from e
            raise self._store_error(e, failure_message, status_code)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._store_error(e, failure_message, status_code)

    def _store_error(
        self, error: SQLAlchemyError, message: str, status_code: int
    ) -> StoreError:
        logger.error(
            message,
            extra={
                "extra_fields": {
                    "event_type": "store_failure",
                    "table": self.table.name,
                    "error_type": type(error).__name__,
                    "error": driver_message(error),
                }
            },
        )
        return StoreError(message, error=driver_message(error), status_code=status_code)

    # --- CRUD ---

    async def list(self) -> List[Row]:
        return await self.fetch_all(
            self.select_stmt(), f"Failed to fetch {self.label}!"
        )

    async def get_by_id(self, entity_id: int) -> Row:
        row = await self.fetch_one(
            self.get_stmt(entity_id), f"Failed to fetch {self.label}!"
        )
        if row is None:
            raise self.not_found(entity_id)
        return row

    async def create(self, fields: Row) -> Row:
        async with self.write(f"Failed to create {self.label}!"):
            result = await self.db.execute(self.insert_stmt(fields))
            row = dict(result.mappings().one())
        return row

    async def update(self, entity_id: int, fields: Row) -> Row:
        async with self.write(f"Failed to update {self.label}!"):
            result = await self.db.execute(self.update_stmt(entity_id, fields))
            row = result.mappings().first()
            if row is None:
                raise self.not_found(entity_id)
            row = dict(row)
        return row

    async def delete(self, entity_id: int) -> Row:
        async with self.write(f"Failed to delete {self.label}!"):
            result = await self.db.execute(self.delete_stmt(entity_id))
            row = result.mappings().first()
            if row is None:
                raise self.not_found(entity_id)
            row = dict(row)
        return row
