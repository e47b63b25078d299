"""Database initialization module."""
import asyncio
import logging
from sqlalchemy.ext.asyncio import AsyncEngine
from url_registry.db.connection import engine, Base, check_connection, AsyncSessionLocal
from url_registry.db.models import UrlRecord  # noqa: F401  Import all models to register them

logger = logging.getLogger(__name__)

async def create_tables(engine: AsyncEngine):
    """Create all database tables."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("✅ Database tables created successfully")
    except Exception as e:
        logger.error(f"❌ Error creating database tables: {e}")
        raise

async def verify_connection():
    """Probe the database once so a bad connection string fails at startup."""
    logger.info("🔄 Connecting to database...")
    async with AsyncSessionLocal() as session:
        try:
            await check_connection(session)
        except Exception as e:
            logger.error(f"❌ Database connection failed: {e}")
            raise
    logger.info("✅ Database connection successful")

async def init_database():
    """Initialize the database: connectivity probe, then table creation."""
    logger.info("🔄 Initializing database...")
    await verify_connection()
    await create_tables(engine)
    logger.info("✅ Database initialization completed")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    print("🔄 Initializing database tables...")
    try:
        asyncio.run(init_database())
        print("✅ Database initialization completed successfully!")
    except Exception as e:
        print(f"❌ Database initialization failed: {e}")
        import sys
        sys.exit(1)
