from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from url_registry.core.config import settings
import logging

logger = logging.getLogger(__name__)

DB_URL_ASYNC = settings.async_database_url


def engine_connect_args(url: str) -> dict:
    """Driver options, only understood by asyncpg."""
    if not url.startswith("postgresql+asyncpg://"):
        return {}
    return {
        "server_settings": {
            "application_name": "url_registry",
        },
        "command_timeout": 60,  # Query timeout
        "timeout": 10,  # Connection timeout
    }


# Engine and session for the FastAPI application
engine = create_async_engine(
    DB_URL_ASYNC,
    future=True,
    echo=settings.db_echo,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,  # Verify connections before use (prevents stale connections)
    pool_recycle=settings.db_pool_recycle,
    pool_timeout=settings.db_pool_timeout,
    connect_args=engine_connect_args(DB_URL_ASYNC),
)
AsyncSessionLocal = sessionmaker(
    engine,
    expire_on_commit=False,
    class_=AsyncSession,
    autoflush=False
)
Base = declarative_base()

async def get_db_async():
    """Dependency for FastAPI routes - ensures proper connection lifecycle."""
    session = AsyncSessionLocal()
    try:
        yield session
    except Exception as e:
        await session.rollback()
        logger.error(f"Database session error: {e}")
        raise
    finally:
        await session.close()

async def check_connection(session: AsyncSession) -> None:
    """Trivial round trip to the database. Raises if the store is unreachable."""
    result = await session.execute(text("SELECT 1"))
    if result.scalar() != 1:
        raise RuntimeError("Unexpected response from database")
