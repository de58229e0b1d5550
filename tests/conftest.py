"""Pytest configuration and shared fixtures."""

import random
from typing import Any

import pytest

from broker_resilience.config.defaults import RetryPolicy
from broker_resilience.errors.classification import ClassifiedError, create_classified_error
from broker_resilience.errors.taxonomy import ErrorType
from broker_resilience.retry.executor import RetryExecutor


class HTTPStatusError(Exception):
    """Stand-in for an HTTP client error carrying a status code."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class RecordingRetryEvents:
    """Retry event sink that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def retry_scheduled(self, attempt, max_retries, delay_ms, error, context) -> None:
        self.events.append(("retry_scheduled", {
            "attempt": attempt,
            "max_retries": max_retries,
            "delay_ms": delay_ms,
            "error": error,
            "context": context,
        }))

    def retry_succeeded(self, attempts, context) -> None:
        self.events.append(("retry_succeeded", {"attempts": attempts, "context": context}))

    def retry_failed(self, attempts, max_retries, error, context) -> None:
        self.events.append(("retry_failed", {
            "attempts": attempts,
            "max_retries": max_retries,
            "error": error,
            "context": context,
        }))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


class FakeSleep:
    """Records requested delays instead of suspending."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class FlakyOperation:
    """Coroutine function that raises queued errors before succeeding."""

    def __init__(self, errors: list[BaseException], result: Any = "ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self) -> Any:
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


@pytest.fixture
def events() -> RecordingRetryEvents:
    return RecordingRetryEvents()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def make_executor(events, fake_sleep):
    """Factory for executors wired to recording events and a fake sleep."""

    def _make(**policy_overrides: Any) -> RetryExecutor:
        return RetryExecutor(
            RetryPolicy(**policy_overrides),
            events=events,
            sleep=fake_sleep,
            rng=random.Random(42),
        )

    return _make


@pytest.fixture
def connection_error() -> ClassifiedError:
    return create_classified_error("Connection refused", ErrorType.CONNECTION_REFUSED)


@pytest.fixture
def market_data_error() -> ClassifiedError:
    return create_classified_error("Market data unavailable", ErrorType.MISSING_DATA)


@pytest.fixture
def options_error() -> ClassifiedError:
    return create_classified_error("Option chain failed", ErrorType.API_ERROR)


@pytest.fixture
def internal_error() -> ClassifiedError:
    return create_classified_error("Internal failure", ErrorType.CLIENT_ERROR)


@pytest.fixture
def http_status_error():
    """Exception class carrying an HTTP ``status`` attribute."""
    return HTTPStatusError


@pytest.fixture
def flaky():
    """Factory for operations that fail with queued errors, then succeed."""
    return FlakyOperation
