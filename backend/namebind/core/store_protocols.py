"""Boundary Protocols — contract between the services and the row store.

Invariants:
    - Services NEVER import the SQLAlchemy implementation — they hold a RowStore
    - Filters are equality-only: {column: value} pairs joined with AND
    - select_one returns None when no row matches (absence is not an error)
    - insert raises UniqueViolationError on unique conflicts, StoreError otherwise
    - update/delete return the number of affected rows (zero is not an error)

Design Decisions:
    - Protocol over ABC: structural subtyping lets tests wrap the store for
      failure injection without inheriting from it
    - Async in Protocol: implementations do IO; the pure rules in core/ that the
      services consult are never async
"""

from typing import Any, Protocol

Row = dict[str, Any]


class RowStore(Protocol):
    """Row-oriented persistent store — implemented by infrastructure/row_store.py."""
    async def select(
        self, table: str, filters: Row, limit: int | None = None,
    ) -> list[Row]: ...
    async def select_one(self, table: str, filters: Row) -> Row | None: ...
    async def insert(self, table: str, rows: Row | list[Row]) -> list[Row]: ...
    async def update(self, table: str, patch: Row, filters: Row) -> int: ...
    async def delete(self, table: str, filters: Row) -> int: ...
