"""
Task Service application.

``create_app`` builds the FastAPI application. Without an explicit
``database`` the store handle is created from settings at startup, so a
missing DB_URL, DB_USER or DB_PASSWORD fails the startup::

    uvicorn task_service.main:app
"""
import logging
import time
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.database import Database
from .core.errors import register_exception_handlers
from .routers import tasks

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    """
    Create the Task Service application.

    Args:
        settings: configuration, defaults to the environment-backed settings
        database: store handle to use instead of building one from settings
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Task Service",
        description="Microservice for task management",
        version=settings.service_version
    )
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """Log all requests with timing"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        # Skip logging for health checks to reduce noise
        if request.url.path != "/health":
            logger.info(f"{request.method} {request.url.path} - {response.status_code} ({process_time:.3f}s)")

        return response

    register_exception_handlers(app, debug=settings.debug)
    app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])

    @app.on_event("startup")
    def startup_event():
        """Connect to the store and create tables"""
        logger.info("Starting Task Service...")
        if app.state.database is None:
            app.state.database = Database.from_settings(settings)

        if app.state.database.init_db():
            logger.info("Database initialized successfully")
        else:
            logger.error("Database initialization failed")

        logger.info("Task Service startup completed")

    @app.on_event("shutdown")
    def shutdown_event():
        """Release pooled connections"""
        logger.info("Shutting down Task Service...")
        if app.state.database is not None:
            app.state.database.dispose()
        logger.info("Task Service shutdown completed")

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "running",
            "message": "Task Service is operational"
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        db_healthy = app.state.database is not None and app.state.database.check_connection()

        return {
            "service": settings.service_name,
            "version": settings.service_version,
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "timestamp": time.time()
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("task_service.main:app", host="0.0.0.0", port=8000)
