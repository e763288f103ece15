import logging
from typing import Generator
from fastapi import Request
from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import QueuePool

from .config import Settings

logger = logging.getLogger(__name__)

# Base class for models
Base = declarative_base()


def _receive_connect(dbapi_connection, connection_record):
    """Event listener for database connections"""
    logger.info("Database connection established")


def _receive_checkout(dbapi_connection, connection_record, connection_proxy):
    """Event listener for connection checkout"""
    logger.debug("Database connection checked out from pool")


def create_engine_from_settings(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine for the configured store

    Raises:
        ConfigurationError: if DB_URL, DB_USER or DB_PASSWORD is missing
    """
    return create_engine(
        settings.database_url,
        poolclass=QueuePool,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=settings.db_pool_recycle,
        echo=settings.debug
    )


class Database:
    """
    Connection pool and session factory for the task store.

    Built once at startup and handed to whoever needs sessions; there is
    no module-level engine.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine
        )

        # Database event listeners for monitoring
        event.listen(engine, "connect", _receive_connect)
        event.listen(engine, "checkout", _receive_checkout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(create_engine_from_settings(settings))

    def session(self) -> Session:
        return self.SessionLocal()

    def init_db(self) -> bool:
        """
        Initialize database tables

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            # Import all models here to ensure they are registered
            from ..models import task  # noqa: F401

            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            return False

    def check_connection(self) -> bool:
        """
        Check database connectivity

        Returns:
            bool: True if connected, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.debug("Database connection check successful")
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database dependency for FastAPI

    Yields:
        Session: Database session bound to the application's Database
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
