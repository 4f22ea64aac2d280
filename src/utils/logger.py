"""
Structured Logger configuration for the Calendar Navigator.

This module provides a centralized logger configuration with structured JSON logging
and consistent context fields across the navigator, browser and CLI modules.

Environment-aware logging:
- In Kubernetes: Writes JSON logs to /var/log/calendar-navigator/app.log
- Locally: Writes JSON logs to stdout for interactive debugging
"""

import logging
import os
import sys
from typing import Any, Optional

from aws_lambda_powertools import Logger


class CalendarNavigatorLogger:
    """
    Centralized logger for the Calendar Navigator with structured logging.

    Wraps a Powertools Logger so every module logs with the same service name
    and JSON formatting.
    """

    LOG_FILE_PATH = "/var/log/calendar-navigator/app.log"

    def __init__(self, service_name: str = "calendar-navigator"):
        """
        Initialize the logger with service configuration.

        Args:
            service_name: Name of the service for log identification
        """
        self.service_name = service_name
        self.is_kubernetes = self._detect_kubernetes()

        self._logger = Logger(
            service=service_name,
            level=os.getenv("LOG_LEVEL", "INFO"),
            use_datetime_directive=True,
            json_default=self._custom_serializer,
        )

        self._configure_handler()

    @staticmethod
    def _detect_kubernetes() -> bool:
        """Return True when running inside a Kubernetes pod."""
        return os.getenv("KUBERNETES_SERVICE_HOST") is not None

    def _configure_handler(self) -> None:
        """
        Configure the appropriate log handler based on environment.

        In Kubernetes: Use FileHandler plus a warnings-only stderr handler
        Locally: Keep default StreamHandler (stdout)
        """
        if not self.is_kubernetes:
            return

        try:
            os.makedirs(os.path.dirname(self.LOG_FILE_PATH), exist_ok=True)

            underlying_logger = logging.getLogger(self._logger.name)
            underlying_logger.handlers.clear()

            file_handler = logging.FileHandler(self.LOG_FILE_PATH)
            file_handler.setFormatter(self._logger._get_log_formatter())
            underlying_logger.addHandler(file_handler)

            stderr_handler = logging.StreamHandler(sys.stderr)
            stderr_handler.setLevel(logging.WARNING)
            stderr_handler.setFormatter(
                logging.Formatter("%(levelname)s - %(message)s")
            )
            underlying_logger.addHandler(stderr_handler)

        except (PermissionError, OSError) as e:
            import warnings

            warnings.warn(
                f"Cannot write to {self.LOG_FILE_PATH}: {e}. "
                f"Falling back to stdout.",
                stacklevel=2,
            )

    def get_logger(self) -> Logger:
        """
        Get the configured structured Logger instance.

        Returns:
            Configured Logger instance
        """
        return self._logger

    def log_selection_start(self, target: dict[str, Any], policy: str) -> None:
        """
        Log the start of a date selection.

        Args:
            target: Target year/month/day
            policy: Navigation policy value
        """
        self._logger.info(
            "Starting date selection",
            extra={
                "operation": "selection_start",
                "target": target,
                "policy": policy,
                "service": self.service_name,
            },
        )

    def log_selection_complete(self, result: dict[str, Any]) -> None:
        """
        Log the completion of a date selection with its outcome.

        Args:
            result: Serialized selection result
        """
        self._logger.info(
            "Date selection completed",
            extra={
                "operation": "selection_complete",
                "result": result,
                "service": self.service_name,
            },
        )

    def log_browser_operation(
        self,
        operation: str,
        success: bool,
        duration_ms: Optional[float] = None,
        error: Optional[str] = None,
    ) -> None:
        """
        Log browser/Playwright operation details.

        Args:
            operation: Browser operation performed
            success: Whether operation was successful
            duration_ms: Operation duration in milliseconds
            error: Error message if operation failed
        """
        log_data = {
            "operation": "browser_operation",
            "browser_operation": operation,
            "success": success,
            "service": self.service_name,
        }

        if duration_ms is not None:
            log_data["duration_ms"] = duration_ms
        if error is not None:
            log_data["error"] = error

        if success:
            self._logger.info(
                f"Browser operation successful: {operation}", extra=log_data
            )
        else:
            self._logger.error(f"Browser operation failed: {operation}", extra=log_data)

    @staticmethod
    def _custom_serializer(obj: Any) -> Any:
        """
        Custom JSON serializer for dates, enums and Pydantic models.

        Args:
            obj: Object to serialize

        Returns:
            Serializable representation of the object
        """
        if hasattr(obj, "isoformat"):
            return obj.isoformat()
        elif hasattr(obj, "model_dump"):
            return obj.model_dump(mode="json")
        elif hasattr(obj, "value"):
            return obj.value
        elif hasattr(obj, "__dict__"):
            return obj.__dict__
        else:
            return str(obj)


# Global logger instance
navigator_logger = CalendarNavigatorLogger()


def get_logger() -> Logger:
    """
    Get the global logger instance.

    Returns:
        Configured structured Logger
    """
    return navigator_logger.get_logger()
