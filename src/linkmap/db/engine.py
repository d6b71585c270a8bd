"""Engine and sessions for the entity and junction tables."""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from linkmap.core.config import DatabaseConfig


def _engine_options(database_url: str, echo: bool, pool_size: int) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": echo}
    # aiosqlite runs on a single static connection; no pool to size.
    if not database_url.startswith("sqlite"):
        options.update(pool_size=pool_size, pool_pre_ping=True)
    return options


class DatabaseManager:
    """Backs ``PostgresEntityRepository``.

    Each repository call opens its own short session from here::

        db = DatabaseManager.from_config(Settings().database)
        await db.create_all()
        repo = PostgresEntityRepository(db)
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 5,
    ) -> None:
        self._engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, echo, pool_size)
        )
        # Rows are converted to entities after commit, so keep them loaded.
        self._sessions: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self._engine, expire_on_commit=False
        )

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> DatabaseManager:
        return cls(config.url, echo=config.echo, pool_size=config.pool_size)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def session(self) -> AsyncSession:
        return self._sessions()

    async def create_all(self) -> None:
        """Create the four entity tables and six junction tables if missing."""
        from linkmap.db.base import Base
        import linkmap.db.models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self._engine.dispose()
