# database.py
import asyncio
import logging

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base

from config_sys import (
    DB_URL, DB_ECHO, DB_POOL_SIZE, DB_MAX_OVERFLOW,
    DB_INIT_MAX_RETRIES, DB_INIT_RETRY_DELAY,
)

logger = logging.getLogger(__name__)

# pool_pre_ping & pool_recycle keep dead idle connections out of the pool
engine = create_async_engine(
    DB_URL,
    echo=DB_ECHO,
    pool_size=DB_POOL_SIZE,
    max_overflow=DB_MAX_OVERFLOW,
    pool_pre_ping=True,
    pool_recycle=3600
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False  # rows stay readable after commit
)

Base = declarative_base()


class DatabaseInitError(RuntimeError):
    """Schema could not be created within the retry budget"""


async def init_database(db_engine=None, max_retries: int = DB_INIT_MAX_RETRIES,
                        retry_delay: float = DB_INIT_RETRY_DELAY):
    """
    Connect and create the bonuses table if it is missing.

    Connecting and the DDL share one retry loop, so a failed CREATE TABLE
    also uses up an attempt. Raises DatabaseInitError once every attempt
    has failed.
    """
    # Register the tables on Base.metadata
    from models import bonus_models  # noqa: F401

    db_engine = db_engine or engine
    attempt = 0

    while attempt < max_retries:
        try:
            async with db_engine.begin() as conn:
                logger.info("Connected to PostgreSQL database")
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Bonus table initialized")
            return
        except Exception as e:
            attempt += 1
            logger.error(f"Database connection failed (attempt {attempt}/{max_retries}): {str(e)}")
            if attempt >= max_retries:
                logger.critical("Max retries reached. Exiting...")
                raise DatabaseInitError(
                    f"Database initialization failed after {max_retries} attempts: {str(e)}"
                ) from e
            await asyncio.sleep(retry_delay)


async def dispose_engine():
    await engine.dispose()
    logger.info("Database engine disposed")


# Dependency
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
