"""
Unit tests for the metrics infrastructure.

Tests OpenTelemetry metrics configuration, instrument definitions and metric
recording.
"""

import os
from unittest.mock import Mock, patch

import pytest

from src.utils.metrics import CalendarNavigatorMetrics, get_metrics, navigator_metrics


@pytest.fixture
def mocked_metrics():
    """Metrics instance whose meter and instruments are mocks."""
    with (
        patch("src.utils.metrics.MeterProvider"),
        patch("src.utils.metrics.metrics.set_meter_provider"),
        patch("src.utils.metrics.metrics.get_meter") as mock_get_meter,
    ):
        mock_meter = Mock()
        mock_meter.create_counter.side_effect = lambda **kwargs: Mock()
        mock_meter.create_histogram.side_effect = lambda **kwargs: Mock()
        mock_get_meter.return_value = mock_meter
        yield CalendarNavigatorMetrics()


class TestCalendarNavigatorMetrics:
    """Test cases for CalendarNavigatorMetrics class."""

    @patch("src.utils.metrics.OTLPMetricExporter")
    @patch("src.utils.metrics.PeriodicExportingMetricReader")
    @patch("src.utils.metrics.MeterProvider")
    @patch("src.utils.metrics.metrics.set_meter_provider")
    def test_init_without_endpoint(
        self, mock_set_provider, mock_meter_provider, mock_reader, mock_exporter
    ):
        with patch.dict(os.environ, {}, clear=True):
            metrics_instance = CalendarNavigatorMetrics()

        assert metrics_instance.service_name == "calendar-navigator"
        assert metrics_instance.service_version == "1.0.0"
        assert metrics_instance.metric_readers == []
        mock_exporter.assert_not_called()
        mock_set_provider.assert_called_once()

    @patch("src.utils.metrics.OTLPMetricExporter")
    @patch("src.utils.metrics.PeriodicExportingMetricReader")
    @patch("src.utils.metrics.MeterProvider")
    @patch("src.utils.metrics.metrics.set_meter_provider")
    def test_init_with_endpoint(
        self, mock_set_provider, mock_meter_provider, mock_reader, mock_exporter
    ):
        env = {"OTEL_EXPORTER_OTLP_ENDPOINT": "http://localhost:4318/v1/metrics"}
        with patch.dict(os.environ, env, clear=True):
            metrics_instance = CalendarNavigatorMetrics(
                service_name="test-service", service_version="2.0.0"
            )

        assert metrics_instance.service_name == "test-service"
        mock_exporter.assert_called_once()
        assert mock_exporter.call_args.kwargs["endpoint"] == env[
            "OTEL_EXPORTER_OTLP_ENDPOINT"
        ]
        assert len(metrics_instance.metric_readers) == 1

    def test_parse_otlp_headers_empty(self):
        with patch.dict(os.environ, {}, clear=True):
            metrics_instance = CalendarNavigatorMetrics.__new__(CalendarNavigatorMetrics)
            assert metrics_instance._parse_otlp_headers() == {}

    def test_parse_otlp_headers_multiple_headers(self):
        headers_str = "Authorization=Bearer token123,X-Scope=a=b"
        with patch.dict(os.environ, {"OTEL_EXPORTER_OTLP_HEADERS": headers_str}):
            metrics_instance = CalendarNavigatorMetrics.__new__(CalendarNavigatorMetrics)
            assert metrics_instance._parse_otlp_headers() == {
                "Authorization": "Bearer token123",
                "X-Scope": "a=b",
            }

    def test_instrument_names(self):
        with (
            patch("src.utils.metrics.MeterProvider"),
            patch("src.utils.metrics.metrics.set_meter_provider"),
            patch("src.utils.metrics.metrics.get_meter") as mock_get_meter,
        ):
            mock_meter = Mock()
            mock_get_meter.return_value = mock_meter
            CalendarNavigatorMetrics()

        counters = {c.kwargs["name"] for c in mock_meter.create_counter.call_args_list}
        histograms = {
            c.kwargs["name"] for c in mock_meter.create_histogram.call_args_list
        }
        assert counters == {
            "calendar_navigations_total",
            "date_selections_total",
            "navigation_errors_total",
            "browser_operations_total",
        }
        assert histograms == {
            "date_selection_duration_seconds",
            "browser_operation_duration_seconds",
        }

    def test_record_navigation(self, mocked_metrics):
        mocked_metrics.record_navigation("forward")

        mocked_metrics.navigations_counter.add.assert_called_once_with(
            1, {"service": "calendar-navigator", "direction": "forward"}
        )

    def test_record_date_selection(self, mocked_metrics):
        mocked_metrics.record_date_selection("day_not_found", {"widget": "jquery"})

        mocked_metrics.date_selections_counter.add.assert_called_once_with(
            1,
            {
                "widget": "jquery",
                "service": "calendar-navigator",
                "outcome": "day_not_found",
            },
        )

    def test_record_navigation_error(self, mocked_metrics):
        mocked_metrics.record_navigation_error("navigation_exhausted")

        attributes = mocked_metrics.navigation_errors_counter.add.call_args[0][1]
        assert attributes["error_type"] == "navigation_exhausted"

    def test_record_browser_operation(self, mocked_metrics):
        mocked_metrics.record_browser_operation("open_calendar", False, 0.5)

        attributes = mocked_metrics.browser_operations_counter.add.call_args[0][1]
        assert attributes["success"] == "false"
        mocked_metrics.browser_operation_duration_histogram.record.assert_called_once()

    def test_caller_labels_are_not_modified(self, mocked_metrics):
        labels = {"widget": "jquery"}

        mocked_metrics.record_navigation("backward", labels)
        mocked_metrics.record_date_selection("selected", labels)
        mocked_metrics.record_navigation_error("navigation_exhausted", labels)
        mocked_metrics.record_browser_operation("launch", True, 0.1, labels)
        with mocked_metrics.time_operation("select_date", labels):
            pass

        assert labels == {"widget": "jquery"}
        attributes = mocked_metrics.navigations_counter.add.call_args[0][1]
        assert attributes == {
            "widget": "jquery",
            "service": "calendar-navigator",
            "direction": "backward",
        }

    def test_time_operation_records_on_error(self, mocked_metrics):
        with pytest.raises(RuntimeError):
            with mocked_metrics.time_operation("select_date"):
                raise RuntimeError("boom")

        mocked_metrics.selection_duration_histogram.record.assert_called_once()
        duration, attributes = (
            mocked_metrics.selection_duration_histogram.record.call_args[0]
        )
        assert duration >= 0
        assert attributes["operation"] == "select_date"

    def test_shutdown_success(self, mocked_metrics):
        reader = Mock()
        mocked_metrics.metric_readers = [reader]

        assert mocked_metrics.shutdown(timeout_seconds=2) is True
        reader.force_flush.assert_called_once_with(timeout_millis=2000)
        mocked_metrics.meter_provider.shutdown.assert_called_once()

    def test_shutdown_failure(self, mocked_metrics):
        mocked_metrics.meter_provider.shutdown.side_effect = Exception("export failed")

        assert mocked_metrics.shutdown() is False


class TestGlobalMetrics:
    """Test cases for the global metrics instance."""

    def test_get_metrics_returns_global_instance(self):
        assert get_metrics() is navigator_metrics
        assert isinstance(navigator_metrics, CalendarNavigatorMetrics)
