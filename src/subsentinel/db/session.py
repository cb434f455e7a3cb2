from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from subsentinel.config import settings


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Enforce foreign keys (and their ON DELETE actions) on SQLite connections."""

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Do not log SQL statement parameters outside development (phone numbers,
# e-mail addresses and tokens end up in bound parameters).
async_engine = create_async_engine(
    settings.database_url,
    echo=(settings.db_echo if settings.app_env.lower() == "development" else False),
    future=True,
)
if async_engine.dialect.name == "sqlite":
    enable_sqlite_foreign_keys(async_engine.sync_engine)

AsyncSessionLocal = async_sessionmaker(
    async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncIterator[AsyncSession]:
    async with AsyncSessionLocal() as session:
        yield session


async def create_tables() -> None:
    """Create missing tables directly from the models (SQLite development databases)."""
    import subsentinel.models  # noqa: F401
    from subsentinel.models.base import Base

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
