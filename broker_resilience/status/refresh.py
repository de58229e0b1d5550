"""Refresh every data source through the retry executor."""

from typing import Any, Awaitable, Callable, Optional

from ..errors.broker import handle_broker_error
from ..errors.classification import ClassifiedError
from ..logging.config import get_logger
from ..retry.executor import RetryExecutor
from .error_handler import ErrorHandler

logger = get_logger(__name__)

Refetch = Callable[[], Awaitable[Any]]


class DataRefresher:
    """
    Refresh market data and options data, recording failures.

    Every source is attempted even if an earlier one fails. Failures are
    classified with the brokerage rules and appended to the error handler's
    log in a single replacement.
    """

    def __init__(
        self,
        executor: RetryExecutor,
        error_handler: ErrorHandler,
        service: str = "broker_data",
        broker_context: Optional[dict[str, Any]] = None,
    ):
        self.executor = executor
        self.error_handler = error_handler
        self.service = service
        self.broker_context = dict(broker_context or {})

    async def _refresh_source(self, name: str, refetch: Refetch) -> Optional[ClassifiedError]:
        try:
            await self.executor.execute_with_retry(
                refetch,
                {
                    "component": self.service,
                    "method": "refresh_all_data",
                    "sub_method": f"refetch_{name}",
                },
            )
        except Exception as error:
            return handle_broker_error(error, {
                **self.broker_context,
                "service": self.service,
                "method": f"refresh_all_data.{name}",
            })
        return None

    async def refresh_all_data(
        self,
        refetch_market_data: Refetch,
        refetch_options: Refetch,
    ) -> list[ClassifiedError]:
        """
        Refresh all sources with retry.

        Returns:
            Errors recorded by this refresh, in source order
        """
        logger.info("Refreshing all data sources", service=self.service)

        refresh_errors = []
        for name, refetch in (("market_data", refetch_market_data), ("options", refetch_options)):
            error = await self._refresh_source(name, refetch)
            if error is not None:
                refresh_errors.append(error)

        if refresh_errors:
            self.error_handler.record_errors(*refresh_errors)

        return refresh_errors
