"""
Database engine, session factory and startup schema management
"""
import logging
from typing import AsyncGenerator

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from clinic_admin.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _set_sqlite_pragmas(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    if settings.SQLITE_WAL:
        cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine; SQLite connections get FK enforcement and WAL"""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["timeout"] = settings.SQLITE_BUSY_TIMEOUT_SECONDS

    new_engine = create_async_engine(
        database_url,
        echo=settings.DATABASE_ECHO,
        connect_args=connect_args,
    )

    if database_url.startswith("sqlite"):
        event.listen(new_engine.sync_engine, "connect", _set_sqlite_pragmas)

    return new_engine


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_sessionmaker(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request"""
    async with AsyncSessionLocal() as session:
        yield session


# (table, column, DDL fragment, backfill statement)
COLUMN_MIGRATIONS = [
    (
        "users",
        "status",
        "status VARCHAR(32) DEFAULT 'active' CHECK(status IN ('active', 'suspended'))",
        "UPDATE users SET status = 'active' WHERE status IS NULL",
    ),
    (
        "feedback_complaints",
        "rating",
        "rating INTEGER CHECK(rating >= 1 AND rating <= 5)",
        None,
    ),
]


def run_column_migrations(connection: Connection) -> list[str]:
    """
    Add columns missing from databases created by older releases

    Each migration probes the live table first, so running this on every
    startup is a no-op once applied.

    Returns:
        "table.column" for every column that was added
    """
    inspector = inspect(connection)
    existing_tables = set(inspector.get_table_names())
    applied = []

    for table, column, ddl, backfill in COLUMN_MIGRATIONS:
        if table not in existing_tables:
            continue

        columns = {col["name"] for col in inspector.get_columns(table)}
        if column in columns:
            continue

        logger.info(f"📝 [MIGRATION] Adding {column} column to {table} table...")
        connection.execute(text(f"ALTER TABLE {table} ADD COLUMN {ddl}"))
        if backfill:
            connection.execute(text(backfill))
        applied.append(f"{table}.{column}")
        logger.info(f"✅ [MIGRATION] {table}.{column} added")

    return applied


def _create_schema(connection: Connection) -> list[str]:
    # Import models so every table is registered on Base.metadata
    import clinic_admin.models  # noqa: F401

    Base.metadata.create_all(connection)
    return run_column_migrations(connection)


async def init_db(bind: AsyncEngine = None) -> list[str]:
    """Create missing tables and apply column migrations"""
    bind = bind or engine
    async with bind.begin() as conn:
        applied = await conn.run_sync(_create_schema)

    if applied:
        logger.info(f"Migrations applied: {', '.join(applied)}")
    else:
        logger.info("Schema up to date, no migrations needed")
    return applied


async def close_db(bind: AsyncEngine = None):
    """Dispose of the connection pool"""
    await (bind or engine).dispose()
