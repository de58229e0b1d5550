"""Merge loading/fetching/error signals from independent data sources."""

from dataclasses import dataclass
from typing import Sized

from ..retry.executor import RetryState
from .error_handler import ErrorHandler


@dataclass(frozen=True)
class StatusSignals:
    """Snapshot of status inputs, supplied fresh on every combine."""
    market_data_loading: bool = False
    options_loading: bool = False
    is_retrying: bool = False
    market_data_error: bool = False
    options_error: bool = False
    internal_errors: Sized = ()
    is_market_data_fetching: bool = False
    is_options_fetching: bool = False

    @classmethod
    def from_sources(
        cls,
        retry_state: RetryState,
        error_handler: ErrorHandler,
        market_data_loading: bool = False,
        options_loading: bool = False,
        market_data_error: bool = False,
        options_error: bool = False,
        is_market_data_fetching: bool = False,
        is_options_fetching: bool = False,
    ) -> "StatusSignals":
        """Build a snapshot from a retry state, an error handler and hook flags."""
        return cls(
            market_data_loading=market_data_loading,
            options_loading=options_loading,
            is_retrying=retry_state.is_retrying,
            market_data_error=market_data_error,
            options_error=options_error,
            internal_errors=error_handler.internal_errors,
            is_market_data_fetching=is_market_data_fetching,
            is_options_fetching=is_options_fetching,
        )


@dataclass(frozen=True)
class CombinedStatus:
    """Unified status flags read by the UI."""
    is_loading: bool
    is_fetching: bool
    is_error: bool


def combine_status(signals: StatusSignals) -> CombinedStatus:
    """Reduce status signals to the three unified flags. Pure and total."""
    return CombinedStatus(
        is_loading=bool(
            signals.market_data_loading or signals.options_loading or signals.is_retrying
        ),
        is_fetching=bool(
            signals.is_market_data_fetching or signals.is_options_fetching or signals.is_retrying
        ),
        is_error=bool(
            signals.market_data_error or signals.options_error or len(signals.internal_errors) > 0
        ),
    )
