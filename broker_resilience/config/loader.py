"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import DefaultConfig, RetryPolicy, get_default_config
from .validation import ConfigurationError, ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=config_dir,
            defaults=get_default_config(),
        )

    def load_broker_config(self, broker: str) -> dict[str, Any]:
        """Load broker-specific configuration overrides."""
        brokers_file = self.config_dir / "brokers.yaml"

        if not brokers_file.exists():
            return {}

        with open(brokers_file) as f:
            brokers_config = yaml.safe_load(f) or {}

        return brokers_config.get("brokers", {}).get(broker, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        broker: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-site overrides (highest priority)
        2. Broker-specific overrides
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        broker_config = self.load_broker_config(broker)
        config = self._deep_merge(config, broker_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        errors = ConfigValidator.validate_config(config)
        if errors:
            raise ConfigurationError(errors)

        return config

    def retry_policy(
        self,
        broker: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> RetryPolicy:
        """Build the retry policy for a broker from the merged configuration."""
        retry_overrides = {"retry": overrides} if overrides else None
        retry_config = self.merge_config(broker, retry_overrides)["retry"]

        known = {f.name for f in fields(RetryPolicy)}
        return RetryPolicy(**{k: v for k, v in retry_config.items() if k in known})

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                elif isinstance(value, frozenset):
                    result[field_name] = sorted(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
