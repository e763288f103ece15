"""
Error taxonomy for Task Service and the handlers mapping it onto HTTP.
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskServiceError(Exception):
    """Base class for all Task Service errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(TaskServiceError):
    """A required input is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(TaskServiceError):
    """The requested task does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(TaskServiceError):
    """The underlying store operation failed. The transaction was rolled back."""


class ConfigurationError(TaskServiceError):
    """Required settings are missing or malformed."""


def register_exception_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach the error-to-response mapping to ``app``."""

    @app.exception_handler(ValidationError)
    @app.exception_handler(NotFoundError)
    async def client_error_handler(request: Request, exc: TaskServiceError):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected {request.method} {request.url.path}: invalid input")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": str(exc.__cause__ or exc.message) if debug else "Internal storage error"},
        )
