"""Tests for structured retry events and logging configuration."""

import asyncio
from unittest.mock import Mock, patch

import structlog
import structlog.testing

from broker_resilience.config.defaults import RetryPolicy
from broker_resilience.errors.classification import create_classified_error
from broker_resilience.errors.taxonomy import ErrorType
from broker_resilience.logging.config import configure_logging, get_retry_logger
from broker_resilience.retry.events import StructlogRetryEvents
from broker_resilience.retry.executor import RetryExecutor


class TestStructlogRetryEvents:
    """Retry events are written as structured log entries."""

    def setup_method(self):
        self.mock_logger = Mock()
        self.mock_logger.bind.return_value = self.mock_logger
        self.patcher = patch(
            "broker_resilience.retry.events.get_retry_logger",
            return_value=self.mock_logger,
        )
        self.get_retry_logger = self.patcher.start()

    def teardown_method(self):
        self.patcher.stop()

    def test_retry_scheduled_entry(self):
        events = StructlogRetryEvents(broker="ibkr")
        error = create_classified_error("busy", ErrorType.SERVICE_UNAVAILABLE, status=503)

        events.retry_scheduled(1, 3, 512.4, error, {"method": "get_quote"})

        self.get_retry_logger.assert_called_with("broker_resilience.retry", broker="ibkr")
        self.mock_logger.bind.assert_called_with(method="get_quote")
        self.mock_logger.info.assert_called_once_with(
            "Retrying operation",
            event_type="retry_scheduled",
            attempt=1,
            max_retries=3,
            delay_ms=512,
            category="api",
            error_type="service_unavailable",
            status=503,
        )

    def test_retry_succeeded_entry(self):
        StructlogRetryEvents().retry_succeeded(2, {})

        self.mock_logger.bind.assert_not_called()
        self.mock_logger.info.assert_called_once_with(
            "Retry succeeded", event_type="retry_succeeded", attempts=2
        )

    def test_retry_failed_entry_names_original_error(self):
        original = ConnectionResetError("peer reset")
        error = create_classified_error("closed", ErrorType.CONNECTION_CLOSED, original_error=original)

        StructlogRetryEvents().retry_failed(3, 3, error, {"component": "Options"})

        kwargs = self.mock_logger.error.call_args.kwargs
        assert kwargs["event_type"] == "retry_failed"
        assert kwargs["attempts"] == 3
        assert kwargs["error"] == "peer reset"

    def test_executor_uses_structlog_events_by_default(self):
        async def no_sleep(seconds):
            return None

        class Busy(Exception):
            status = 503

        calls = []

        async def operation():
            calls.append(1)
            if len(calls) == 1:
                raise Busy("busy")
            return "done"

        executor = RetryExecutor(RetryPolicy(max_retries=1), sleep=no_sleep)
        assert asyncio.run(executor.execute_with_retry(operation, {"method": "get_chain"})) == "done"

        messages = [c.args[0] for c in self.mock_logger.info.call_args_list]
        assert messages == ["Retrying operation", "Retry succeeded"]


class TestLoggingConfig:
    """Logging configuration produces structured JSON."""

    def test_json_renderer_selected(self):
        configure_logging(level="INFO", format_json=True, include_timestamp=False)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert not any(isinstance(p, structlog.processors.TimeStamper) for p in processors)

    def test_retry_logger_binds_subsystem(self):
        with structlog.testing.capture_logs() as logs:
            get_retry_logger("tests.retry", broker="schwab").info("Retry succeeded", attempts=1)

        assert logs == [{
            "event": "Retry succeeded",
            "log_level": "info",
            "subsystem": "retry",
            "broker": "schwab",
            "attempts": 1,
        }]
