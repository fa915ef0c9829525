"""Logging service for datastone.

The library itself only emits records through loguru; this service is what
an application calls to install sinks for them.
"""

import sys
from typing import Any, Dict, List, Optional

from loguru import logger

from ..utils.config import config_manager, get_logging_config
from ..utils.path_manager import PathManager


class LoggingService:
    """Service for managing logging configuration."""

    def __init__(self):
        """Initialize the logging service."""
        self.name = "logging"
        self._configured = False
        self._handler_ids: List[int] = []

    def initialize(self, cfg: Optional[Any] = None) -> bool:
        """Initialize the logging service.

        Args:
            cfg: Configuration to apply before configuring sinks (optional)

        Returns:
            True if initialization was successful, False otherwise
        """
        try:
            if cfg is not None:
                config_manager.set_config(cfg)

            self._configure_logging(get_logging_config())
            return True
        except (ValueError, TypeError, OSError) as e:
            logger.error(f"Failed to initialize logging service: {e}")
            return False

    def shutdown(self) -> bool:
        """Shutdown the logging service.

        Returns:
            True if shutdown was successful, False otherwise
        """
        for handler_id in self._handler_ids:
            logger.remove(handler_id)
        self._handler_ids = []
        self._configured = False
        return True

    def is_initialized(self) -> bool:
        """Check if the service is initialized.

        Returns:
            True if the service is initialized, False otherwise
        """
        return self._configured

    def _configure_logging(self, cfg: Dict[str, Any]) -> None:
        """Configure logging with loguru.

        Args:
            cfg: Logging section of the configuration
        """
        log_level = str(cfg.get("level", "INFO")).upper()

        # Remove default handler if not already configured
        if not self._configured:
            logger.remove()
        else:
            self.shutdown()

        # Define log formats
        console_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )

        file_format = (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
            "{level: <8} | "
            "{name}:{function}:{line} - "
            "{message}"
        )

        # Add colorized console output
        self._handler_ids.append(logger.add(
            sys.stderr,
            level=log_level,
            format=console_format,
            colorize=True
        ))

        # Add file logging with rotation
        log_file = cfg.get("file")
        if log_file:
            PathManager.get_parent_dir(log_file)
            self._handler_ids.append(logger.add(
                log_file,
                rotation=cfg.get("rotation"),
                retention=cfg.get("retention"),
                level=log_level,
                format=file_format,
                backtrace=True,
                diagnose=False
            ))

        self._configured = True
        logger.info("Logging system configured successfully")


# Global logging service instance
_logging_service: Optional[LoggingService] = None


def get_logging_service() -> LoggingService:
    """Get the global logging service instance.

    Returns:
        LoggingService instance
    """
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService()
    return _logging_service
