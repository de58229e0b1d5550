"""Tests for active error resolution, status combining and data refresh."""

import asyncio
import itertools

import pytest

from broker_resilience.config.defaults import ErrorLogParams
from broker_resilience.errors.taxonomy import ErrorType
from broker_resilience.retry.executor import RetryState
from broker_resilience.status import (
    CombinedStatus,
    DataRefresher,
    ErrorHandler,
    StatusSignals,
    combine_status,
)


class TestErrorHandler:
    """Test the internal error log and priority resolution."""

    def test_starts_empty(self):
        handler = ErrorHandler()
        assert handler.internal_errors == ()
        assert handler.get_active_error(None, None, None) is None

    def test_replace_whole_list(self, internal_error, options_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])
        handler.set_internal_errors([options_error])

        assert handler.internal_errors == (options_error,)

    def test_replace_with_callable(self, internal_error, options_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])
        handler.set_internal_errors(lambda previous: [*previous, options_error])

        assert handler.internal_errors == (internal_error, options_error)

    def test_log_is_bounded(self, internal_error, options_error):
        handler = ErrorHandler(max_errors=2)
        handler.record_errors(internal_error, internal_error, options_error)

        assert handler.internal_errors == (internal_error, options_error)

    def test_invalid_bound(self):
        with pytest.raises(ValueError):
            ErrorHandler(max_errors=0)

    def test_from_config(self):
        handler = ErrorHandler.from_config(ErrorLogParams(max_internal_errors=7))
        assert handler.max_errors == 7

    def test_primary_wins(self, connection_error, market_data_error, options_error, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])

        assert handler.get_active_error(connection_error, market_data_error, options_error) is connection_error

    def test_secondary_before_tertiary(self, market_data_error, options_error, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])

        assert handler.get_active_error(None, market_data_error, options_error) is market_data_error

    def test_tertiary_before_internal(self, options_error, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])

        assert handler.get_active_error(None, None, options_error) is options_error

    def test_most_recent_internal_error(self, internal_error, options_error):
        handler = ErrorHandler()
        handler.set_internal_errors([options_error, internal_error])

        assert handler.get_active_error(None, None, None) is internal_error

    def test_priority_over_all_combinations(self, connection_error, market_data_error, options_error, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])
        candidates = [connection_error, market_data_error, options_error]

        for mask in itertools.product([True, False], repeat=3):
            args = [c if present else None for c, present in zip(candidates, mask)]
            expected = next((c for c in args if c is not None), internal_error)
            assert handler.get_active_error(*args) is expected


class TestStatusCombiner:
    """Test the pure status reducer."""

    def test_retrying_only(self):
        signals = StatusSignals(
            market_data_loading=False,
            options_loading=False,
            is_retrying=True,
            market_data_error=False,
            options_error=False,
            internal_errors=[],
            is_market_data_fetching=False,
            is_options_fetching=False,
        )

        assert combine_status(signals) == CombinedStatus(is_loading=True, is_fetching=True, is_error=False)

    def test_internal_errors_only(self, internal_error):
        status = combine_status(StatusSignals(internal_errors=[internal_error]))

        assert status == CombinedStatus(is_loading=False, is_fetching=False, is_error=True)

    def test_all_false(self):
        assert combine_status(StatusSignals()) == CombinedStatus(False, False, False)

    def test_fetching_does_not_imply_loading(self):
        status = combine_status(StatusSignals(is_options_fetching=True))

        assert status.is_fetching is True
        assert status.is_loading is False

    def test_exhaustive_truth_table(self):
        for flags in itertools.product([False, True], repeat=7):
            for error_count in (0, 1, 3):
                (md_loading, opt_loading, retrying, md_error, opt_error,
                 md_fetching, opt_fetching) = flags
                signals = StatusSignals(
                    market_data_loading=md_loading,
                    options_loading=opt_loading,
                    is_retrying=retrying,
                    market_data_error=md_error,
                    options_error=opt_error,
                    internal_errors=[None] * error_count,
                    is_market_data_fetching=md_fetching,
                    is_options_fetching=opt_fetching,
                )
                status = combine_status(signals)

                assert status.is_loading == (md_loading or opt_loading or retrying)
                assert status.is_fetching == (md_fetching or opt_fetching or retrying)
                assert status.is_error == (md_error or opt_error or error_count > 0)
                assert combine_status(signals) == status

    def test_from_sources(self, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])
        state = RetryState(attempt_count=1, is_retrying=True)

        signals = StatusSignals.from_sources(state, handler, market_data_loading=True)

        assert signals.is_retrying is True
        assert signals.internal_errors == (internal_error,)
        assert combine_status(signals) == CombinedStatus(True, True, True)


class TestDataRefresher:
    """Test refreshing every source through the retry executor."""

    def test_all_sources_succeed(self, make_executor, flaky):
        handler = ErrorHandler()
        refresher = DataRefresher(make_executor(), handler, service="ibkr")
        market, options = flaky([]), flaky([])

        errors = asyncio.run(refresher.refresh_all_data(market, options))

        assert errors == []
        assert handler.internal_errors == ()
        assert market.calls == options.calls == 1

    def test_failure_in_one_source_does_not_stop_the_other(self, make_executor, flaky, http_status_error):
        handler = ErrorHandler()
        refresher = DataRefresher(
            make_executor(max_retries=1),
            handler,
            service="ibkr",
            broker_context={"connection_method": "webapi"},
        )
        market = flaky([http_status_error("denied", 403)])
        options = flaky([http_status_error("busy", 503)], result="chain")

        errors = asyncio.run(refresher.refresh_all_data(market, options))

        assert len(errors) == 1
        assert errors[0].error_type == ErrorType.PERMISSION_DENIED
        assert errors[0].context["method"] == "refresh_all_data.market_data"
        assert errors[0].context["connection_method"] == "webapi"
        assert options.calls == 2
        assert handler.internal_errors == tuple(errors)

    def test_errors_are_appended_to_existing_log(self, make_executor, flaky, internal_error):
        handler = ErrorHandler()
        handler.set_internal_errors([internal_error])
        refresher = DataRefresher(make_executor(max_retries=0), handler)

        asyncio.run(refresher.refresh_all_data(
            flaky([ValueError("bad market payload")]),
            flaky([ValueError("bad options payload")]),
        ))

        assert len(handler.internal_errors) == 3
        assert handler.internal_errors[0] is internal_error
        assert combine_status(StatusSignals(internal_errors=handler.internal_errors)).is_error is True
