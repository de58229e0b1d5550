"""Configuration defaults, loading and validation."""

from .defaults import DefaultConfig, RetryPolicy, get_default_config
from .loader import ConfigLoader
from .validation import ConfigurationError, ConfigValidator, ValidationError

__all__ = [
    "ConfigLoader",
    "ConfigValidator",
    "ConfigurationError",
    "DefaultConfig",
    "RetryPolicy",
    "ValidationError",
    "get_default_config",
]
