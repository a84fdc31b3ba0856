"""SQL Row Store — RowStore implementation over an SQLAlchemy AsyncSession.

Invariants:
    - Table names resolve against Base.metadata; unknown tables/columns are StoreErrors
    - Every write commits immediately: one call = one unit of work
    - Any failure rolls the session back before raising, so the next call starts clean
    - Unique-constraint violations raise UniqueViolationError (PostgreSQL SQLSTATE
      23505 or SQLite "UNIQUE constraint failed"); everything else raises StoreError
    - update/delete refuse empty filters (no accidental whole-table writes)

Design Decisions:
    - Core (Table) statements instead of ORM objects: services speak in plain
      row dicts, matching the adapter contract, and RETURNING gives back
      server-filled columns without a refresh round trip
    - Rows materialized before commit: result cursors are closed by commit
"""

import logging
from typing import Any

from sqlalchemy import MetaData, Table, delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

import namebind.models  # noqa: F401  (populates Base.metadata)
from namebind.core.errors import StoreError, UniqueViolationError
from namebind.core.store_protocols import Row
from namebind.db.base import Base

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    """Recognize a unique-constraint violation across asyncpg and sqlite."""
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = str(orig)
    return "UNIQUE constraint failed" in message or "duplicate key value" in message


class SqlRowStore:
    """Row-oriented store bound to a single AsyncSession."""

    def __init__(self, session: AsyncSession, metadata: MetaData = Base.metadata):
        self._session = session
        self._metadata = metadata

    async def select(
        self, table: str, filters: Row, limit: int | None = None,
    ) -> list[Row]:
        tbl = self._table(table, "select")
        stmt = select(tbl).where(*self._where(tbl, filters, "select"))
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute("select", table, stmt)
        return [dict(r) for r in result.mappings().all()]

    async def select_one(self, table: str, filters: Row) -> Row | None:
        rows = await self.select(table, filters, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, rows: Row | list[Row]) -> list[Row]:
        tbl = self._table(table, "insert")
        values = [rows] if isinstance(rows, dict) else list(rows)
        if not values:
            return []
        stmt = insert(tbl).values(values).returning(*tbl.c)
        result = await self._execute("insert", table, stmt)
        inserted = [dict(r) for r in result.mappings().all()]
        await self._commit("insert", table)
        return inserted

    async def update(self, table: str, patch: Row, filters: Row) -> int:
        tbl = self._table(table, "update")
        self._require_filters(table, filters, "update")
        stmt = (
            update(tbl)
            .where(*self._where(tbl, filters, "update"))
            .values(**patch)
        )
        result = await self._execute("update", table, stmt)
        await self._commit("update", table)
        return result.rowcount

    async def delete(self, table: str, filters: Row) -> int:
        tbl = self._table(table, "delete")
        self._require_filters(table, filters, "delete")
        stmt = delete(tbl).where(*self._where(tbl, filters, "delete"))
        result = await self._execute("delete", table, stmt)
        await self._commit("delete", table)
        return result.rowcount

    # ─── internals ──────────────────────────────────────────────

    def _table(self, name: str, operation: str) -> Table:
        try:
            return self._metadata.tables[name]
        except KeyError:
            raise StoreError("unknown table", operation, name)

    def _where(self, tbl: Table, filters: Row, operation: str) -> list[Any]:
        clauses = []
        for column, value in filters.items():
            if column not in tbl.c:
                raise StoreError(f"unknown column '{column}'", operation, tbl.name)
            clauses.append(tbl.c[column] == value)
        return clauses

    def _require_filters(self, table: str, filters: Row, operation: str) -> None:
        if not filters:
            raise StoreError("refusing unfiltered write", operation, table)

    async def _execute(self, operation: str, table: str, stmt):
        try:
            return await self._session.execute(stmt)
        except IntegrityError as e:
            await self._session.rollback()
            if is_unique_violation(e):
                logger.info(
                    f"Unique violation on {table}",
                    extra={"operation": operation, "error_code": "UNIQUE_VIOLATION"},
                )
                raise UniqueViolationError(table)
            logger.error(f"Integrity error on {table}: {e}")
            raise StoreError("integrity constraint violated", operation, table)
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Store {operation} on {table} failed: {e}")
            raise StoreError("database operation failed", operation, table)

    async def _commit(self, operation: str, table: str) -> None:
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if is_unique_violation(e):
                raise UniqueViolationError(table)
            raise StoreError("integrity constraint violated", operation, table)
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Commit after {operation} on {table} failed: {e}")
            raise StoreError("commit failed", operation, table)
