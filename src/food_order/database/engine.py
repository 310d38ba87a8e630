"""Database engine and async session factory.

SQLite (the default) needs no pool tuning.  Server databases such as the
storefront's MySQL instance get a bounded, pre-pinged pool and a connect
timeout so a dropped connection is replaced instead of failing a request.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from food_order.config import settings
from food_order.models.user import Base


def engine_options(database_url: str) -> dict[str, Any]:
    """Keyword arguments for ``create_async_engine`` based on the backend."""
    options: dict[str, Any] = {"echo": settings.database_echo}
    backend = make_url(database_url).get_backend_name()
    if backend == "sqlite":
        return options

    options.update(
        pool_size=settings.database_pool_size,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    if backend == "mysql":
        options["connect_args"] = {"connect_timeout": settings.database_connect_timeout}
    elif backend == "postgresql":
        options["connect_args"] = {"timeout": settings.database_connect_timeout}
    return options


engine = create_async_engine(settings.database_url, **engine_options(settings.database_url))

async_session_factory = async_sessionmaker(engine, expire_on_commit=False)


async def init_db() -> None:
    """Create the ``users`` table if it is missing."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db() -> None:
    """Close pooled connections on shutdown."""
    await engine.dispose()


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Per-request session: committed when the handler returns, else rolled back."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
