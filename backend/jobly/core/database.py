"""
Database Configuration and Statement Execution

Owns the async engine and exposes a single ``execute`` entry point that runs
one parameterized statement per call. Statements use ``$n`` positional
placeholders, translated here into SQLAlchemy named binds so the same SQL
text runs on PostgreSQL (asyncpg) and SQLite (aiosqlite).
"""

import re
import time
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from jobly.core.config import get_settings
from jobly.utils.logger import get_logger

# Initialize logger
logger = get_logger(__name__)

_POSITIONAL_PARAM = re.compile(r"\$(\d+)")

Row = Dict[str, Any]


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


def to_named_binds(sql: str, parameters: Sequence[Any]) -> Tuple[str, Dict[str, Any]]:
    """
    Rewrite ``$n`` placeholders as ``:pn`` binds.

    Args:
        sql: Statement text with 1-based positional placeholders
        parameters: Values, ``parameters[0]`` binds ``$1``

    Returns:
        Tuple of rewritten statement and bind mapping
    """
    statement = _POSITIONAL_PARAM.sub(lambda match: f":p{match.group(1)}", sql)
    binds = {f"p{index}": value for index, value in enumerate(parameters, start=1)}
    return statement, binds


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Database engine lifecycle and statement execution."""

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None) -> None:
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy async URL (defaults to settings.DATABASE_URL)
            echo: Echo SQL statements (defaults to settings.DEBUG)
        """
        settings = get_settings()
        self.database_url = database_url or settings.DATABASE_URL
        self._echo = settings.DEBUG if echo is None else echo
        self._slow_query_threshold = settings.SLOW_QUERY_THRESHOLD
        self._engine: Optional[AsyncEngine] = None

    @property
    def engine(self) -> AsyncEngine:
        """Get database engine."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init_database() first.")
        return self._engine

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    async def init_database(self) -> None:
        """Initialize database connections."""
        settings = get_settings()
        engine_kwargs: Dict[str, Any] = {"echo": self._echo}

        # SQLite-specific configuration
        if self.is_sqlite:
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            # PostgreSQL-specific configuration
            engine_kwargs["pool_size"] = settings.DATABASE_POOL_SIZE
            engine_kwargs["max_overflow"] = settings.DATABASE_MAX_OVERFLOW

        try:
            self._engine = create_async_engine(self.database_url, **engine_kwargs)
            if self.is_sqlite:
                event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

            await self._test_database_connection()
            logger.info("Database connection initialized", url=self._engine.url.render_as_string())
        except Exception as e:
            logger.error("Failed to initialize database", error=str(e))
            raise

    async def _test_database_connection(self) -> None:
        """Test database connection."""
        async with self.engine.begin() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_tables(self) -> None:
        """Create database tables."""
        # Register table definitions on Base.metadata
        import jobly.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop database tables."""
        import jobly.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def _adapt_parameter(self, value: Any) -> Any:
        # sqlite3 has no Decimal adapter; NUMERIC affinity converts the text back
        if self.is_sqlite and isinstance(value, Decimal):
            return str(value)
        return value

    async def execute(self, sql: str, parameters: Sequence[Any] = ()) -> List[Row]:
        """
        Execute one statement in its own transaction.

        Args:
            sql: Statement text with ``$n`` placeholders
            parameters: Positional values for the placeholders

        Returns:
            List of rows as dicts keyed by column name; empty when the
            statement returns no rows
        """
        statement, binds = to_named_binds(
            sql, [self._adapt_parameter(value) for value in parameters]
        )

        started = time.perf_counter()
        async with self.engine.begin() as conn:
            result = await conn.execute(text(statement), binds)
            rows = [dict(row) for row in result.mappings().all()] if result.returns_rows else []
        duration = time.perf_counter() - started

        if duration > self._slow_query_threshold:
            logger.warning(
                "Slow query detected",
                duration=round(duration, 3),
                statement=" ".join(sql.split())[:200],
            )
        return rows

    async def close_connections(self) -> None:
        """Close database connections."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")
