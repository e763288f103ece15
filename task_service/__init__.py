"""Task Service - CRUD microservice for user tasks."""

__version__ = "1.0.0"
