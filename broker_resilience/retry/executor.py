"""
Retry executor with bounded exponential backoff and jitter.

Wraps a zero-argument coroutine function and retries it while failures are
transient: a status code from the policy's retryable set, or a transport
failure that carries no status at all.
"""

import asyncio
import random
import socket
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, TypeVar

from ..config.defaults import RetryPolicy
from ..errors.classification import ClassifiedError, classify_error
from ..errors.taxonomy import ErrorCategory
from .events import RetryEventSink, StructlogRetryEvents

T = TypeVar("T")

# Raised by transports without an HTTP status
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    ConnectionError,
    TimeoutError,
    asyncio.TimeoutError,
    socket.gaierror,
)

_NETWORK_CATEGORIES = frozenset({ErrorCategory.CONNECTION, ErrorCategory.TIMEOUT})


@dataclass
class RetryState:
    """Retry bookkeeping for the current call sequence."""
    attempt_count: int = 0
    is_retrying: bool = False
    last_error: Optional[BaseException] = None

    def reset(self) -> None:
        self.attempt_count = 0
        self.is_retrying = False
        self.last_error = None


class RetryExecutor:
    """
    Execute async operations with automatic retries on transient failure.

    Attempts are strictly sequential. The delay before retry ``i`` (0-based)
    is ``min(initial_delay_ms * backoff_factor ** i, max_delay_ms)`` scaled by
    a uniform jitter from the policy's band. Non-retryable failures and
    failures after ``max_retries`` retries are re-raised unchanged.

    Usage::

        executor = RetryExecutor(RetryPolicy(max_retries=2))
        quote = await executor.execute_with_retry(
            lambda: client.get_quote("SPY"),
            {"component": "MarketData", "method": "get_quote"},
        )
    """

    def __init__(
        self,
        policy: Optional[RetryPolicy] = None,
        events: Optional[RetryEventSink] = None,
        sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.policy = policy or RetryPolicy()
        self.events = events or StructlogRetryEvents()
        self._sleep = sleep or asyncio.sleep
        self._rng = rng or random.Random()
        self._active: list[RetryState] = []
        self._settled = RetryState()

    @property
    def state(self) -> RetryState:
        """
        Snapshot of the executor's retry state.

        While call sequences are in flight, ``is_retrying`` is true if any of
        them is waiting to retry. The count comes from the sequence furthest
        into its retries and the error from the latest failing one.
        Otherwise this is the outcome of the most recently finished sequence.
        """
        if not self._active:
            settled = self._settled
            return RetryState(settled.attempt_count, settled.is_retrying, settled.last_error)

        leading = max(self._active, key=lambda state: state.attempt_count)
        last_error = next(
            (state.last_error for state in reversed(self._active) if state.last_error is not None),
            self._settled.last_error,
        )
        return RetryState(
            attempt_count=leading.attempt_count,
            is_retrying=any(state.is_retrying for state in self._active),
            last_error=last_error,
        )

    @property
    def attempt_count(self) -> int:
        return self.state.attempt_count

    @property
    def is_retrying(self) -> bool:
        return self.state.is_retrying

    @property
    def last_error(self) -> Optional[BaseException]:
        return self.state.last_error

    def reset_retry_state(self) -> None:
        """Clear retry history without making a call (manual reconnect)."""
        self._settled.reset()

    def base_delay(self, attempt: int) -> float:
        """Pre-jitter delay in milliseconds for a 0-based retry index."""
        policy = self.policy
        return min(policy.initial_delay_ms * policy.backoff_factor ** attempt, policy.max_delay_ms)

    def calculate_backoff(self, attempt: int) -> float:
        """Jittered delay in milliseconds for a 0-based retry index."""
        jitter = self._rng.uniform(self.policy.jitter_min, self.policy.jitter_max)
        return self.base_delay(attempt) * jitter

    def is_transport_failure(
        self, error: BaseException, classified: Optional[ClassifiedError] = None
    ) -> bool:
        """True for network-level failures that carry no status code."""
        if isinstance(error, TRANSPORT_ERRORS):
            return True
        if classified is None:
            classified = classify_error(error)
        if classified.status is None and classified.category in _NETWORK_CATEGORIES:
            return True
        return self.policy.retry_on_type_error and isinstance(error, TypeError)

    def should_retry(
        self, error: BaseException, attempt: int, classified: Optional[ClassifiedError] = None
    ) -> bool:
        """Decide retry eligibility for a failure after ``attempt`` retries."""
        if attempt >= self.policy.max_retries:
            return False

        if classified is None:
            classified = classify_error(error)
        if classified.status is not None and classified.status in self.policy.retryable_status_codes:
            return True

        return self.is_transport_failure(error, classified)

    async def execute_with_retry(
        self,
        operation: Callable[[], Awaitable[T]],
        context: Optional[dict[str, Any]] = None,
        state: Optional[RetryState] = None,
    ) -> T:
        """
        Run ``operation`` with the retry policy.

        Each call tracks its own ``RetryState``. The executor's ``state``
        aggregates the calls in flight, so one call finishing never clears
        another call's retrying flag.

        Args:
            operation: Zero-argument coroutine function performing the call
            context: Diagnostic fields (component, method) for retry events
            state: Caller-owned state to update instead; such calls are not
                reflected in the executor's ``state``

        Returns:
            The operation's result

        Raises:
            The operation's original exception once it is not retryable or
            retries are exhausted
        """
        context = dict(context or {})
        if state is not None:
            state.reset()
            return await self._run(operation, context, state)

        own_state = RetryState()
        self._active.append(own_state)
        try:
            return await self._run(operation, context, own_state)
        finally:
            self._active.remove(own_state)
            self._settled = own_state

    async def _run(
        self,
        operation: Callable[[], Awaitable[T]],
        context: dict[str, Any],
        state: RetryState,
    ) -> T:
        max_retries = self.policy.max_retries
        attempt = 0

        while True:
            try:
                result = await operation()
            except Exception as error:
                state.last_error = error
                classified = classify_error(error)

                if not self.should_retry(error, attempt, classified):
                    state.is_retrying = False
                    self.events.retry_failed(attempt, max_retries, classified, context)
                    raise

                delay_ms = self.calculate_backoff(attempt)
                attempt += 1
                state.attempt_count = attempt
                state.is_retrying = True
                self.events.retry_scheduled(attempt, max_retries, delay_ms, classified, context)

                await self._sleep(delay_ms / 1000.0)
                continue

            if attempt > 0:
                self.events.retry_succeeded(attempt, context)
            state.reset()
            return result
