"""
Configuration settings for Task Service.
"""
import os
from typing import Optional
from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

from .errors import ConfigurationError

# Load environment variables
load_dotenv()


class Settings:
    """Application settings"""

    def __init__(self):
        # Service information
        self.service_name: str = "task_service"
        self.service_version: str = "1.0.0"
        self.debug: bool = os.getenv("DEBUG", "False").lower() == "true"
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

        # Database connection, all three are required
        self.db_url: Optional[str] = os.getenv("DB_URL")
        self.db_user: Optional[str] = os.getenv("DB_USER")
        self.db_password: Optional[str] = os.getenv("DB_PASSWORD")

        # Connection pool
        self.db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "10"))
        self.db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "20"))
        self.db_pool_recycle: int = int(os.getenv("DB_POOL_RECYCLE", "300"))

    @property
    def database_url(self) -> URL:
        """
        Build the SQLAlchemy URL from DB_URL, DB_USER and DB_PASSWORD.

        Raises:
            ConfigurationError: if any of the three settings is missing
        """
        missing = [
            name for name, value in (
                ("DB_URL", self.db_url),
                ("DB_USER", self.db_user),
                ("DB_PASSWORD", self.db_password),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ConfigurationError(
                f"Missing database settings: {', '.join(missing)}"
            )

        try:
            url = make_url(self.db_url)
        except Exception as e:
            raise ConfigurationError(f"Invalid DB_URL: {e}") from e

        return url.set(username=self.db_user, password=self.db_password)


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
