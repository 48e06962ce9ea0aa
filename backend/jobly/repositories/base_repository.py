"""
Base Repository Pattern Implementation

Provides the abstract base repository with the statement templates shared by
every entity: filtered search, partial update and delete. Each repository is
bound to the store client it is constructed with.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from jobly.core.database import DatabaseManager, Row
from jobly.core.exceptions import NotFoundError
from jobly.repositories.columns import ColumnList
from jobly.utils.logger import get_logger, log_database_operation
from jobly.utils.sql import (
    FilterTable,
    build_set_clause,
    columns_sql,
    where_clause,
)

logger = get_logger(__name__)


def format_decimal(value: Any) -> Optional[str]:
    """Render a NUMERIC value as a plain decimal string."""
    if value is None:
        return None
    return format(Decimal(str(value)), "f")


def fold_joined(
    rows: Sequence[Row],
    owner_keys: Sequence[str],
    child_keys: Sequence[str],
    child_name: str,
) -> Dict[str, Any]:
    """
    Fold the rows of a one-to-many LEFT JOIN into one owner dict.

    The owner's fields come from the first row. Each row contributes a child
    built from ``child_keys`` unless every one of those is NULL, which is how
    the join reports an owner with no related rows.
    """
    owner = {key: rows[0][key] for key in owner_keys}
    owner[child_name] = [
        {key: row[key] for key in child_keys}
        for row in rows
        if any(row[key] is not None for key in child_keys)
    ]
    return owner


class BaseRepository(ABC):
    """Abstract base repository providing common statement templates."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @property
    @abstractmethod
    def table(self) -> str:
        """Return the table name."""
        pass

    @property
    @abstractmethod
    def key_column(self) -> str:
        """Return the column holding the entity key."""
        pass

    @property
    @abstractmethod
    def columns(self) -> ColumnList:
        """Return the selected ``(column, alias)`` pairs."""
        pass

    @property
    @abstractmethod
    def filters(self) -> FilterTable:
        """Return the recognized search criteria."""
        pass

    resource_type: str = "record"
    order_by: str = "1"
    field_overrides: Mapping[str, str] = {}
    updatable: Tuple[str, ...] = ()

    def shape(self, row: Row) -> Dict[str, Any]:
        """Convert a result row into the returned dict."""
        return dict(row)

    async def execute(self, sql: str, parameters: Sequence[Any] = ()) -> List[Row]:
        return await self.db_manager.execute(sql, parameters)

    async def search(self, criteria: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        Find all rows matching the optional search criteria.

        Raises:
            InvalidRangeError: If range criteria contradict each other
        """
        conditions = self.filters.build_filter(criteria or {})
        sql = (
            f"SELECT {columns_sql(self.columns)} FROM {self.table}"
            f"{where_clause(conditions)} ORDER BY {self.order_by}"
        )
        rows = await self.execute(sql, conditions.values)
        logger.debug("Search executed", table=self.table, filters=conditions.sql, matches=len(rows))
        return [self.shape(row) for row in rows]

    async def update(self, key: Any, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partially update the row identified by ``key``.

        Only the given fields change. Returns the updated row.

        Raises:
            InvalidUpdateError: If ``fields`` is empty or names a field
                outside ``updatable``
            NotFoundError: If no row has ``key``
        """
        set_cols, values = build_set_clause(fields, self.field_overrides, allowed=self.updatable)
        key_index = len(values) + 1

        sql = (
            f"UPDATE {self.table} SET {set_cols} "
            f"WHERE {self.key_column} = ${key_index} "
            f"RETURNING {columns_sql(self.columns)}"
        )
        rows = await self.execute(sql, [*values, key])
        if not rows:
            raise NotFoundError(self.resource_type, key)

        log_database_operation("update", self.table, record_id=key, fields=list(fields))
        return self.shape(rows[0])

    async def remove(self, key: Any) -> None:
        """
        Delete the row identified by ``key``.

        Raises:
            NotFoundError: If no row has ``key``
        """
        rows = await self.execute(
            f"DELETE FROM {self.table} WHERE {self.key_column} = $1 RETURNING {self.key_column}",
            [key],
        )
        if not rows:
            raise NotFoundError(self.resource_type, key)

        log_database_operation("delete", self.table, record_id=key)
