"""
Storage engine binding.

A ``Database`` owns the single async engine for the local SQLite file. It is
created unopened; ``initialize()`` opens it and creates the schema, ``close()``
releases it so that a later ``initialize()`` can reopen the file.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from church_manager.exceptions import StorageError
from church_manager.models import Base

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"


def get_database_url(database_path: str) -> str:
    """
    Build the SQLAlchemy URL for a database file path.

    Args:
        database_path: Filesystem path, ``:memory:``, or a full SQLAlchemy URL

    Returns:
        Async SQLAlchemy connection URL
    """
    if "://" in database_path:
        return database_path
    return f"sqlite+aiosqlite:///{database_path}"


class Database:
    def __init__(self, database_path: str, echo: bool = False):
        self.database_path = database_path
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None
        self._lock = asyncio.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Optional[AsyncEngine]:
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        url = get_database_url(self.database_path)
        if self.database_path == MEMORY_DATABASE or url.endswith(MEMORY_DATABASE):
            return create_async_engine(url, echo=self.echo, poolclass=StaticPool)

        if "://" not in self.database_path:
            Path(self.database_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

        # One connection for the whole process; concurrent callers queue for it
        return create_async_engine(
            url,
            echo=self.echo,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=1,
            max_overflow=0,
        )

    @staticmethod
    def _create_schema(connection):
        Base.metadata.create_all(connection)
        for table in Base.metadata.sorted_tables:
            for index in table.indexes:
                index.create(connection, checkfirst=True)

    async def initialize(self):
        """Open the connection and create tables and indices if absent."""
        if self._engine is not None:
            return

        async with self._lock:
            if self._engine is not None:
                return

            engine = None
            try:
                engine = self._create_engine()
                async with engine.begin() as connection:
                    await connection.run_sync(self._create_schema)
            except (SQLAlchemyError, OSError) as e:
                if engine is not None:
                    await engine.dispose()
                logger.error(f"Failed to initialize database at {self.database_path}: {str(e)}")
                raise StorageError(f"Failed to initialize database: {str(e)}") from e

            self._engine = engine
            self._sessionmaker = async_sessionmaker(engine, expire_on_commit=False)
            logger.info(f"Database initialized at {self.database_path}")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Yield a session on the shared connection, initializing it first if needed.

        Any SQLAlchemy failure inside the block is rolled back and re-raised as
        ``StorageError``.
        """
        if self._engine is None:
            await self.initialize()

        session = self._sessionmaker()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database operation failed: {str(e)}")
            raise StorageError(str(e)) from e
        finally:
            await session.close()

    async def close(self):
        async with self._lock:
            if self._engine is None:
                return
            await self._engine.dispose()
            self._engine = None
            self._sessionmaker = None
            logger.info(f"Database connection closed for {self.database_path}")
