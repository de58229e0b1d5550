#!/usr/bin/env python3
"""
Basic Usage Example - Broker Resilience

This script demonstrates the resilient-call layer against a simulated,
unreliable brokerage API. It shows how to:
- Build a retry policy from the broker configuration
- Refresh market data and options data with automatic retries
- Combine status signals and pick the error to display

Run: python examples/basic_usage.py
"""

import asyncio
import random
from typing import Any

from broker_resilience.config.loader import ConfigLoader
from broker_resilience.errors.presentation import action_label, present_error
from broker_resilience.logging.config import configure_logging
from broker_resilience.retry.executor import RetryExecutor
from broker_resilience.status import DataRefresher, ErrorHandler, StatusSignals, combine_status


class SimulatedBrokerError(Exception):
    """HTTP-style error raised by the simulated API."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class SimulatedBrokerAPI:
    """Fails the first few calls of each endpoint, then answers."""

    def __init__(self, failures: dict[str, list[SimulatedBrokerError]]):
        self.failures = failures

    async def _call(self, endpoint: str, payload: Any) -> Any:
        await asyncio.sleep(0.01)
        pending = self.failures.get(endpoint, [])
        if pending:
            raise pending.pop(0)
        return payload

    async def market_data(self) -> dict[str, float]:
        return await self._call("market_data", {"SPY": 512.34})

    async def option_chain(self) -> list[dict[str, Any]]:
        return await self._call("options", [{"strike": 510, "type": "call"}])


async def main() -> None:
    configure_logging(level="INFO")

    loader = ConfigLoader.create()
    policy = loader.retry_policy("ibkr", {"initial_delay_ms": 50})
    executor = RetryExecutor(policy, rng=random.Random(1))
    error_handler = ErrorHandler.from_config(loader.defaults.error_log)
    refresher = DataRefresher(executor, error_handler, service="ibkr",
                              broker_context={"connection_method": "webapi"})

    api = SimulatedBrokerAPI({
        "market_data": [SimulatedBrokerError("Service Unavailable", 503)],
        "options": [SimulatedBrokerError("Forbidden", 403)],
    })

    errors = await refresher.refresh_all_data(api.market_data, api.option_chain)
    print(f"Refresh finished with {len(errors)} error(s)")

    status = combine_status(StatusSignals.from_sources(executor.state, error_handler))
    print(f"Combined status: {status}")

    active = error_handler.get_active_error(None, None, None)
    presentation = present_error(active)
    if presentation:
        print(f"[{presentation.variant.value}] {presentation.title}: {presentation.description}")
        print(f"Button: {action_label(presentation, executor.is_retrying)}")


if __name__ == "__main__":
    asyncio.run(main())
