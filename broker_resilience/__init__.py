"""
Broker Resilience - retry, error classification and status aggregation

Resilient-call layer used by brokerage integrations (Interactive Brokers,
TD Ameritrade, Schwab). Retries transient failures with exponential backoff,
normalizes errors into a fixed taxonomy, picks the single error to show and
merges loading/fetching/error signals from independent data sources.
"""

__version__ = "0.1.0"
__author__ = "Broker Resilience Team"
