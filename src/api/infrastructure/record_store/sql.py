"""SQL implementation of the RecordStore protocol.

Stores every record as a JSON document in a single `records` table using
async SQLAlchemy. PostgreSQL (asyncpg) is the production target; SQLite
(aiosqlite) works for local runs and tests.

Each call opens its own session and commits a single row, matching the
single-record atomicity the rest of the service assumes.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import and_, delete, false, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.sql.elements import ColumnElement

from infrastructure.observability import DefaultRecordStoreProbe, RecordStoreProbe
from infrastructure.record_store.models import Base, RecordModel
from shared_kernel.record_store import (
    And,
    Contains,
    Eq,
    In,
    Or,
    Predicate,
    SortKey,
    StartsWith,
    StoreUnavailableError,
    StoredRecord,
)

_BACKEND_ERRORS = (SQLAlchemyError, OSError)


def _typed_element(field: str, sample: Any) -> ColumnElement[Any]:
    """Extract a JSON field cast to the SQL type matching a Python value."""
    element = RecordModel.fields[field]
    if isinstance(sample, bool):
        return element.as_boolean()
    if isinstance(sample, int):
        return element.as_integer()
    if isinstance(sample, float):
        return element.as_float()
    return element.as_string()


def compile_predicate(predicate: Predicate) -> ColumnElement[bool]:
    """Translate a predicate tree into a SQL boolean expression.

    Args:
        predicate: Predicate to translate

    Returns:
        SQLAlchemy boolean clause over the records table

    Raises:
        TypeError: If the predicate type is unknown
    """
    match predicate:
        case Eq(field=field, value=None):
            return RecordModel.fields[field].as_string().is_(None)
        case Eq(field=field, value=value):
            return _typed_element(field, value) == value
        case In(field=field, values=values):
            if not values:
                return false()
            return _typed_element(field, values[0]).in_(values)
        case StartsWith(field=field, prefix=prefix):
            return RecordModel.fields[field].as_string().startswith(
                prefix, autoescape=True
            )
        case Contains(field=field, substring=substring):
            return RecordModel.fields[field].as_string().contains(
                substring, autoescape=True
            )
        case And(predicates=children):
            return and_(*(compile_predicate(child) for child in children))
        case Or(predicates=children):
            return or_(*(compile_predicate(child) for child in children))
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def _order_clause(key: SortKey) -> ColumnElement[Any]:
    element = RecordModel.fields[key.field]
    typed = element.as_float() if key.numeric else element.as_string()
    return typed.desc() if key.descending else typed.asc()


class SqlRecordStore:
    """Record store backed by a relational database.

    Args:
        engine: Async SQLAlchemy engine
        probe: Optional domain probe for observability
    """

    backend = "sql"

    def __init__(
        self, engine: AsyncEngine, probe: RecordStoreProbe | None = None
    ) -> None:
        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            engine, expire_on_commit=False, class_=AsyncSession
        )
        self._probe = probe or DefaultRecordStoreProbe()

    async def create_schema(self) -> None:
        """Create the records table if it does not exist.

        Production databases are migrated with Alembic; this is for SQLite
        and throwaway databases.
        """
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except _BACKEND_ERRORS as e:
            self._probe.call_failed("create_schema", "*", e)
            raise StoreUnavailableError(f"Failed to create schema: {e}") from e
        self._probe.schema_created(self.backend)

    async def save(
        self, record_type: str, record_id: str, fields: Mapping[str, Any]
    ) -> None:
        try:
            async with self._sessionmaker() as session:
                async with session.begin():
                    model = await session.get(RecordModel, (record_type, record_id))
                    if model:
                        model.fields = dict(fields)
                    else:
                        session.add(
                            RecordModel(
                                record_type=record_type,
                                id=record_id,
                                fields=dict(fields),
                            )
                        )
        except _BACKEND_ERRORS as e:
            self._probe.call_failed("save", record_type, e)
            raise StoreUnavailableError(
                f"Failed to save {record_type} {record_id}: {e}"
            ) from e

        self._probe.record_saved(record_type, record_id)

    async def delete(self, record_type: str, record_id: str) -> bool:
        try:
            async with self._sessionmaker() as session:
                async with session.begin():
                    result = await session.execute(
                        delete(RecordModel).where(
                            RecordModel.record_type == record_type,
                            RecordModel.id == record_id,
                        )
                    )
                    existed = result.rowcount > 0
        except _BACKEND_ERRORS as e:
            self._probe.call_failed("delete", record_type, e)
            raise StoreUnavailableError(
                f"Failed to delete {record_type} {record_id}: {e}"
            ) from e

        self._probe.record_deleted(record_type, record_id, existed)
        return existed

    async def get(self, record_type: str, record_id: str) -> StoredRecord | None:
        try:
            async with self._sessionmaker() as session:
                model = await session.get(RecordModel, (record_type, record_id))
        except _BACKEND_ERRORS as e:
            self._probe.call_failed("get", record_type, e)
            raise StoreUnavailableError(
                f"Failed to get {record_type} {record_id}: {e}"
            ) from e

        if model is None:
            return None
        return StoredRecord(
            record_type=model.record_type, id=model.id, fields=dict(model.fields)
        )

    async def query(
        self,
        record_type: str,
        predicate: Predicate | None = None,
        sort: Sequence[SortKey] = (),
        limit: int | None = None,
    ) -> list[StoredRecord]:
        stmt = select(RecordModel).where(RecordModel.record_type == record_type)
        if predicate is not None:
            stmt = stmt.where(compile_predicate(predicate))
        stmt = stmt.order_by(*(_order_clause(key) for key in sort), RecordModel.id)
        if limit is not None:
            stmt = stmt.limit(limit)

        try:
            async with self._sessionmaker() as session:
                result = await session.execute(stmt)
                models = result.scalars().all()
        except _BACKEND_ERRORS as e:
            self._probe.call_failed("query", record_type, e)
            raise StoreUnavailableError(f"Failed to query {record_type}: {e}") from e

        self._probe.query_executed(record_type, len(models))
        return [
            StoredRecord(record_type=m.record_type, id=m.id, fields=dict(m.fields))
            for m in models
        ]

    async def close(self) -> None:
        await self._engine.dispose()
        self._probe.store_closed(self.backend)
