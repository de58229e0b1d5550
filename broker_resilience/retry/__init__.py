"""Retry executor with exponential backoff."""

from .events import RetryEventSink, StructlogRetryEvents
from .executor import RetryExecutor, RetryState

__all__ = [
    "RetryEventSink",
    "RetryExecutor",
    "RetryState",
    "StructlogRetryEvents",
]
