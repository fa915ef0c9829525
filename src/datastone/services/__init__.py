"""Services for datastone."""

from .logging_service import LoggingService, get_logging_service

__all__ = [
    "LoggingService",
    "get_logging_service",
]
