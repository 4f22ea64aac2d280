"""
OpenTelemetry metrics configuration for the Calendar Navigator.

Counters and histograms for calendar navigation steps, date selections,
navigation failures and browser operations. Metrics are exported over OTLP/HTTP
only when OTEL_EXPORTER_OTLP_ENDPOINT is configured.
"""

import logging
import os
import time
from collections.abc import Generator
from contextlib import contextmanager
from typing import Optional

from opentelemetry import metrics
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.sdk.metrics import Counter, Histogram, MeterProvider
from opentelemetry.sdk.metrics.export import (
    AggregationTemporality,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

logger = logging.getLogger(__name__)


class CalendarNavigatorMetrics:
    """
    Centralized metrics collection for the Calendar Navigator using OpenTelemetry.
    """

    def __init__(
        self, service_name: str = "calendar-navigator", service_version: str = "1.0.0"
    ):
        """
        Initialize OpenTelemetry metrics with optional OTLP exporter.

        Args:
            service_name: Name of the service for metric identification
            service_version: Version of the service
        """
        self.service_name = service_name
        self.service_version = service_version

        resource = Resource.create(
            {
                "service.name": service_name,
                "service.version": service_version,
                "service.instance.id": os.getenv("HOSTNAME", "local"),
                "deployment.environment": os.getenv("DEPLOYMENT_ENV", "local"),
            }
        )

        metric_readers = []
        otlp_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")

        if otlp_endpoint:
            try:
                otlp_exporter = OTLPMetricExporter(
                    endpoint=otlp_endpoint,
                    headers=self._parse_otlp_headers(),
                    timeout=30,
                    preferred_temporality={
                        Counter: AggregationTemporality.DELTA,
                        Histogram: AggregationTemporality.DELTA,
                    },
                )

                metric_readers.append(
                    PeriodicExportingMetricReader(
                        exporter=otlp_exporter,
                        export_interval_millis=int(
                            os.getenv("OTEL_METRIC_EXPORT_INTERVAL", "5000")
                        ),
                        export_timeout_millis=int(
                            os.getenv("OTEL_METRIC_EXPORT_TIMEOUT", "30000")
                        ),
                    )
                )
                logger.info(
                    "OpenTelemetry metrics configured",
                    extra={"endpoint": otlp_endpoint},
                )
            except Exception as e:
                logger.warning(
                    f"Failed to configure OTLP metrics exporter: {e}",
                    extra={"error": str(e), "endpoint": otlp_endpoint},
                    exc_info=True,
                )
        else:
            logger.info(
                "OTEL_EXPORTER_OTLP_ENDPOINT not configured. Metrics will be collected but not exported."
            )

        self.meter_provider = MeterProvider(
            resource=resource, metric_readers=metric_readers
        )
        metrics.set_meter_provider(self.meter_provider)
        self.metric_readers = metric_readers

        self.meter = metrics.get_meter(service_name, service_version)

        self._init_counters()
        self._init_histograms()

    def _parse_otlp_headers(self) -> dict[str, str]:
        """
        Parse OTLP headers from the OTEL_EXPORTER_OTLP_HEADERS variable.

        Returns:
            Dictionary of headers for OTLP exporter
        """
        headers_str = os.getenv("OTEL_EXPORTER_OTLP_HEADERS", "")
        headers = {}

        if headers_str:
            for header in headers_str.split(","):
                if "=" in header:
                    key, value = header.strip().split("=", 1)
                    headers[key] = value

        return headers

    def _init_counters(self) -> None:
        """Initialize counter metrics for tracking events."""
        self.navigations_counter = self.meter.create_counter(
            name="calendar_navigations_total",
            description="Total number of prev/next clicks issued to calendar widgets",
            unit="1",
        )

        self.date_selections_counter = self.meter.create_counter(
            name="date_selections_total",
            description="Total number of date selections by outcome",
            unit="1",
        )

        self.navigation_errors_counter = self.meter.create_counter(
            name="navigation_errors_total",
            description="Total number of calendar navigation errors by type",
            unit="1",
        )

        self.browser_operations_counter = self.meter.create_counter(
            name="browser_operations_total",
            description="Total number of browser operations performed",
            unit="1",
        )

    def _init_histograms(self) -> None:
        """Initialize histogram metrics for tracking distributions."""
        self.selection_duration_histogram = self.meter.create_histogram(
            name="date_selection_duration_seconds",
            description="Distribution of date selection execution times",
            unit="s",
        )

        self.browser_operation_duration_histogram = self.meter.create_histogram(
            name="browser_operation_duration_seconds",
            description="Distribution of browser operation execution times",
            unit="s",
        )

    def record_navigation(
        self, direction: str, labels: Optional[dict[str, str]] = None
    ) -> None:
        """
        Record one navigation click.

        Args:
            direction: "forward" or "backward"
            labels: Additional labels for the metric
        """
        attributes = {
            **(labels or {}),
            "service": self.service_name,
            "direction": direction,
        }
        self.navigations_counter.add(1, attributes)

    def record_date_selection(
        self, outcome: str, labels: Optional[dict[str, str]] = None
    ) -> None:
        """
        Record a finished date selection.

        Args:
            outcome: "selected", "day_not_found" or "exhausted"
            labels: Additional labels for the metric
        """
        attributes = {
            **(labels or {}),
            "service": self.service_name,
            "outcome": outcome,
        }
        self.date_selections_counter.add(1, attributes)

    def record_navigation_error(
        self, error_type: str, labels: Optional[dict[str, str]] = None
    ) -> None:
        """
        Record a navigation error by type.

        Args:
            error_type: Type of error encountered
            labels: Additional labels for the metric
        """
        attributes = {
            **(labels or {}),
            "service": self.service_name,
            "error_type": error_type,
        }
        self.navigation_errors_counter.add(1, attributes)

    def record_browser_operation(
        self,
        operation: str,
        success: bool,
        duration_seconds: float,
        labels: Optional[dict[str, str]] = None,
    ) -> None:
        """
        Record a browser operation with timing and success information.

        Args:
            operation: Browser operation performed
            success: Whether operation was successful
            duration_seconds: Operation duration in seconds
            labels: Additional labels for the metric
        """
        attributes = {
            **(labels or {}),
            "service": self.service_name,
            "operation": operation,
            "success": str(success).lower(),
        }

        self.browser_operations_counter.add(1, attributes)
        self.browser_operation_duration_histogram.record(duration_seconds, attributes)

    @contextmanager
    def time_operation(
        self, operation_name: str, labels: Optional[dict[str, str]] = None
    ) -> Generator[None, None, None]:
        """
        Context manager to time an operation and record the duration.

        Args:
            operation_name: Name of the operation being timed
            labels: Additional labels for the metric
        """
        start_time = time.time()
        try:
            yield
        finally:
            duration = time.time() - start_time
            attributes = {
                **(labels or {}),
                "service": self.service_name,
                "operation": operation_name,
            }
            self.selection_duration_histogram.record(duration, attributes)

    def shutdown(self, timeout_seconds: int = 30) -> bool:
        """
        Shutdown metrics collection and force flush all pending metrics.

        Args:
            timeout_seconds: Maximum time to wait for export completion

        Returns:
            True if shutdown succeeded, False otherwise
        """
        try:
            logger.info("Shutting down metrics provider and flushing pending metrics")

            for reader in self.metric_readers:
                reader.force_flush(timeout_millis=timeout_seconds * 1000)

            self.meter_provider.shutdown()

            logger.info("Metrics shutdown completed successfully")
            return True

        except Exception as e:
            logger.error(f"Error during metrics shutdown: {e}", exc_info=True)
            return False


# Global metrics instance
navigator_metrics = CalendarNavigatorMetrics()


def get_metrics() -> CalendarNavigatorMetrics:
    """
    Get the global metrics instance.

    Returns:
        Configured CalendarNavigatorMetrics instance
    """
    return navigator_metrics
