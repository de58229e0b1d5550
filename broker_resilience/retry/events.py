"""Observability events emitted by the retry executor."""

from typing import Any, Protocol

from ..errors.classification import ClassifiedError
from ..logging.config import get_retry_logger


class RetryEventSink(Protocol):
    """Receives retry lifecycle events; injected into ``RetryExecutor``."""

    def retry_scheduled(
        self,
        attempt: int,
        max_retries: int,
        delay_ms: float,
        error: ClassifiedError,
        context: dict[str, Any],
    ) -> None:
        ...

    def retry_succeeded(self, attempts: int, context: dict[str, Any]) -> None:
        ...

    def retry_failed(
        self,
        attempts: int,
        max_retries: int,
        error: ClassifiedError,
        context: dict[str, Any],
    ) -> None:
        ...


class StructlogRetryEvents:
    """Default sink writing retry events as structured log entries."""

    def __init__(self, name: str = "broker_resilience.retry", **bindings: Any):
        self.name = name
        self.bindings = bindings

    def _logger(self, context: dict[str, Any]):
        logger = get_retry_logger(self.name, **self.bindings)
        if context:
            logger = logger.bind(**context)
        return logger

    def retry_scheduled(
        self,
        attempt: int,
        max_retries: int,
        delay_ms: float,
        error: ClassifiedError,
        context: dict[str, Any],
    ) -> None:
        self._logger(context).info(
            "Retrying operation",
            event_type="retry_scheduled",
            attempt=attempt,
            max_retries=max_retries,
            delay_ms=round(delay_ms),
            category=error.category.value,
            error_type=error.error_type.value,
            status=error.status,
        )

    def retry_succeeded(self, attempts: int, context: dict[str, Any]) -> None:
        self._logger(context).info(
            "Retry succeeded",
            event_type="retry_succeeded",
            attempts=attempts,
        )

    def retry_failed(
        self,
        attempts: int,
        max_retries: int,
        error: ClassifiedError,
        context: dict[str, Any],
    ) -> None:
        self._logger(context).error(
            "Operation failed",
            event_type="retry_failed",
            attempts=attempts,
            max_retries=max_retries,
            category=error.category.value,
            error_type=error.error_type.value,
            status=error.status,
            error=str(error.original_error or error),
        )
