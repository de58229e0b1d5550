"""Internal error log and active-error resolution."""

from typing import Callable, Iterable, Optional, Sequence, Union

from ..config.defaults import ErrorLogParams
from ..errors.classification import ClassifiedError

ErrorListUpdate = Union[
    Iterable[ClassifiedError],
    Callable[[Sequence[ClassifiedError]], Iterable[ClassifiedError]],
]


class ErrorHandler:
    """
    Track internally observed errors and pick the one to display.

    The log is only ever replaced as a whole, most recent entry last, and
    is capped at ``max_errors`` entries (oldest dropped first).
    """

    def __init__(self, max_errors: int = 50):
        if max_errors <= 0:
            raise ValueError("max_errors must be positive")
        self.max_errors = max_errors
        self._internal_errors: tuple[ClassifiedError, ...] = ()

    @classmethod
    def from_config(cls, params: ErrorLogParams) -> "ErrorHandler":
        return cls(max_errors=params.max_internal_errors)

    @property
    def internal_errors(self) -> tuple[ClassifiedError, ...]:
        return self._internal_errors

    def set_internal_errors(self, errors: ErrorListUpdate) -> None:
        """Replace the log with a new list, or with ``errors(previous)``."""
        if callable(errors):
            errors = errors(self._internal_errors)
        self._internal_errors = tuple(errors)[-self.max_errors:]

    def record_errors(self, *errors: ClassifiedError) -> None:
        """Append errors by replacing the log with ``previous + errors``."""
        if errors:
            self.set_internal_errors(lambda previous: (*previous, *errors))

    def clear(self) -> None:
        self._internal_errors = ()

    def get_active_error(
        self,
        primary: Optional[ClassifiedError],
        secondary: Optional[ClassifiedError],
        tertiary: Optional[ClassifiedError],
    ) -> Optional[ClassifiedError]:
        """
        Get the most relevant error to display.

        Priority is fixed: ``primary`` (connection/retry layer), then
        ``secondary`` (market data), then ``tertiary`` (options data), then
        the most recent internal error, else ``None``.
        """
        for candidate in (primary, secondary, tertiary):
            if candidate is not None:
                return candidate
        if self._internal_errors:
            return self._internal_errors[-1]
        return None
