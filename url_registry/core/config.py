from pydantic_settings import BaseSettings
from typing import Optional, List
from dotenv import load_dotenv
import logging
import os

load_dotenv()

class Settings(BaseSettings):

    # Application
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = os.getenv("PORT", 3002)
    testing: bool = os.getenv("TESTING", False)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")  # Comma separated

    # Full connection string wins over the DB_* parts when set
    database_url: Optional[str] = os.getenv("DATABASE_URL", None)

    db_name: str = os.getenv("DB_NAME", "url_registry")
    db_host: str = os.getenv("DB_HOST", "localhost")
    db_port: int = os.getenv("DB_PORT", 5432)
    db_user: str = os.getenv("DB_USER", "postgres")
    db_password: str = os.getenv("DB_PASSWORD", "")
    db_echo: bool = os.getenv("DB_ECHO", False)

    # PostgreSQL Pool Configuration
    db_pool_size: int = os.getenv("DB_POOL_SIZE", 10) # Connections per instance
    db_max_overflow: int = os.getenv("DB_MAX_OVERFLOW", 20) # Additional connections under load
    db_pool_timeout: int = os.getenv("DB_POOL_TIMEOUT", 30) # Wait time for connection from pool
    db_pool_recycle: int = os.getenv("DB_POOL_RECYCLE", 3600) # Recycle connections after 1 hour

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def async_database_url(self) -> str:
        """Connection string for the asyncpg driver."""
        if self.database_url:
            return to_async_url(self.database_url)
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


def to_async_url(url: str) -> str:
    """
    Rewrite a plain PostgreSQL connection string to use the asyncpg driver.

    Hosted providers hand out ``postgres://`` or ``postgresql://`` URLs;
    SQLAlchemy needs the driver spelled out. URLs that already name a
    driver are returned as given; only asyncpg gets the pool connect_args.
    """
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return "postgresql+asyncpg://" + url[len(scheme):]
    return url


settings = Settings()


# Validation
def validate_pool_configuration():
    """Validate that pool configuration is reasonable."""
    errors = []

    if settings.db_pool_size > 50:
        errors.append("db_pool_size is very large (>50). Consider scaling horizontally instead.")

    if settings.db_pool_size < 1:
        errors.append("db_pool_size must be at least 1.")

    if settings.db_max_overflow < 0:
        errors.append("db_max_overflow cannot be negative.")

    if errors:
        logger = logging.getLogger(__name__)
        logger.warning("Pool configuration issues found:")
        for error in errors:
            logger.warning(f"  - {error}")

    return len(errors) == 0

# Run validation on import
if not settings.testing:
    validate_pool_configuration()
