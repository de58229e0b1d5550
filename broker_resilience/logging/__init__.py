"""
Logging configuration and utilities for the broker resilience layer.
"""
from .config import configure_logging, get_logger, get_retry_logger

__all__ = ["configure_logging", "get_logger", "get_retry_logger"]
