"""
Database connection and session management for Ticket Sales Service.
Async SQLAlchemy engine with explicit transaction control for purchases.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker, AsyncEngine

from ticket_sales.core.config import config
from ticket_sales.models.ticket import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Database manager for the ticket inventory.
    Handles connection pooling and transaction management.
    """

    def __init__(self):
        self.async_engine: Optional[AsyncEngine] = None
        self.async_session_factory: Optional[async_sessionmaker] = None
        self._initialized = False

    async def initialize(self, database_url: Optional[str] = None):
        """
        Initialize database connections.

        Args:
            database_url: Async SQLAlchemy URL; read from config when omitted
        """
        if self._initialized:
            return

        try:
            db_url = database_url or await config.get_database_url()
            db_config = await config.get_database_config()

            engine_kwargs = {"echo": db_config["echo"], "future": True}
            if db_url.startswith("sqlite"):
                # Writers wait on SQLite's lock instead of failing immediately
                engine_kwargs["connect_args"] = {"timeout": 30}
            else:
                engine_kwargs.update(
                    pool_size=db_config["pool_size"],
                    max_overflow=db_config["max_overflow"],
                    pool_timeout=db_config["pool_timeout"],
                    pool_recycle=db_config["pool_recycle"],
                    pool_pre_ping=True
                )

            self.async_engine = create_async_engine(db_url, **engine_kwargs)

            self.async_session_factory = async_sessionmaker(
                bind=self.async_engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False
            )

            self._initialized = True
            logger.info("Database manager initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database manager: {e}")
            raise

    @asynccontextmanager
    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.
        Commits on success and rolls back on exceptions.
        """
        if not self._initialized:
            raise RuntimeError("Database manager not initialized")

        session = self.async_session_factory()
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error(f"Async database session error: {e}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_async_transaction_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session inside one explicit transaction.
        The transaction commits when the block exits cleanly and rolls back
        on any exception, so all writes in the block land together or not
        at all.
        """
        if not self._initialized:
            raise RuntimeError("Database manager not initialized")

        session = self.async_session_factory()
        try:
            async with session.begin():
                yield session
        except Exception as e:
            logger.debug(f"Transaction rolled back: {e}")
            raise
        finally:
            await session.close()

    async def create_tables(self):
        """Create all database tables."""
        if not self._initialized:
            await self.initialize()

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def drop_tables(self):
        """Drop all database tables (use with caution)."""
        if not self._initialized:
            await self.initialize()

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.info("Database tables dropped successfully")

    async def health_check(self) -> bool:
        """Check database connectivity."""
        if not self._initialized:
            return False

        try:
            async with self.async_engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    async def close(self):
        """Close all database connections."""
        if self.async_engine:
            await self.async_engine.dispose()
        self.async_engine = None
        self.async_session_factory = None
        self._initialized = False
        logger.info("Database connections closed")


# Global database manager instance
db_manager = DatabaseManager()
