from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from url_registry.core.config import settings
from url_registry.core.errors import register_error_handlers
from url_registry.routes.urls import url_router
from url_registry.routes.health import health_router
from url_registry.db.init_db import init_database
import uvicorn
import logging

# Configure logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: runs once, before the server accepts connections
    logger.info("🚀 Starting URL Registry application...")
    if not settings.testing:
        try:
            await init_database()
            logger.info("✅ Database initialized successfully")
        except Exception as e:
            logger.error(f"❌ Failed to initialize database: {e}")
            raise

    yield

    # Shutdown
    logger.info("🛑 Shutting down URL Registry application...")

app = FastAPI(
    title="URL Registry API",
    description="CRUD service for bookmarked URLs with labeled sub-URLs",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(url_router, prefix="/api", tags=["URLs"])

if __name__ == "__main__":
    uvicorn.run(app, host=settings.host or "0.0.0.0", port=settings.port)
