# DB connections

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
import structlog

from catalog.core.config import Settings
from catalog.models.catalog import Base

logger = structlog.get_logger()


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the catalog store"""
    url = make_url(settings.database_url)

    if url.get_backend_name() == "sqlite":
        engine = create_async_engine(url, echo=settings.debug)

        # SQLite only honours ON DELETE CASCADE with the pragma enabled, and
        # SAVEPOINT needs the driver's implicit BEGIN replaced by an explicit one
        @event.listens_for(engine.sync_engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine.sync_engine, "begin")
        def _on_begin(conn):
            conn.exec_driver_sql("BEGIN")

        return engine

    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create all tables (local dev and tests; production uses alembic)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_tables_created")


async def ping(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning("database_ping_failed", error=str(e))
        return False
