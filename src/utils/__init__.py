"""
Utility modules for the Calendar Navigator.

This package provides logging and metrics infrastructure using structured logging
and OpenTelemetry.
"""

from .logger import CalendarNavigatorLogger, get_logger, navigator_logger
from .metrics import CalendarNavigatorMetrics, get_metrics, navigator_metrics

__all__ = [
    "get_logger",
    "navigator_logger",
    "CalendarNavigatorLogger",
    "get_metrics",
    "navigator_metrics",
    "CalendarNavigatorMetrics",
]
