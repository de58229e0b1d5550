"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any

from .defaults import JITTER_CEILING, JITTER_FLOOR


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigurationError(ValueError):
    """Raised when a merged configuration fails validation."""

    def __init__(self, errors: list[ValidationError]):
        details = "; ".join(f"{e.field}: {e.message} (got {e.value!r})" for e in errors)
        super().__init__(f"Invalid configuration: {details}")
        self.errors = errors


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_retry_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate retry policy parameters."""
        errors = []

        # Validate max_retries
        if "max_retries" in params:
            value = params["max_retries"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="max_retries",
                    message="Must be a non-negative integer",
                    value=value
                ))

        # Validate delays
        for name in ("initial_delay_ms", "max_delay_ms"):
            if name in params:
                value = params[name]
                if not isinstance(value, (int, float)) or isinstance(value, bool) or value <= 0:
                    errors.append(ValidationError(
                        field=name,
                        message="Must be a positive number of milliseconds",
                        value=value
                    ))

        # Validate backoff_factor
        if "backoff_factor" in params:
            value = params["backoff_factor"]
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="backoff_factor",
                    message="Must be a number >= 1",
                    value=value
                ))

        # Validate retryable_status_codes
        if "retryable_status_codes" in params:
            value = params["retryable_status_codes"]
            if not isinstance(value, (list, tuple, set, frozenset)) or not all(
                isinstance(code, int) and 100 <= code <= 599 for code in value
            ):
                errors.append(ValidationError(
                    field="retryable_status_codes",
                    message="Must be a collection of HTTP status codes",
                    value=value
                ))

        # Validate jitter band
        jitter_min = params.get("jitter_min", JITTER_FLOOR)
        jitter_max = params.get("jitter_max", JITTER_CEILING)
        for name, value in (("jitter_min", jitter_min), ("jitter_max", jitter_max)):
            if not isinstance(value, (int, float)) or isinstance(value, bool) or not (
                JITTER_FLOOR <= value <= JITTER_CEILING
            ):
                errors.append(ValidationError(
                    field=name,
                    message=f"Must be a number between {JITTER_FLOOR} and {JITTER_CEILING}",
                    value=value
                ))
        if all(isinstance(v, (int, float)) for v in (jitter_min, jitter_max)) and jitter_min > jitter_max:
            errors.append(ValidationError(
                field="jitter_min",
                message="Must not exceed jitter_max",
                value=jitter_min
            ))

        # Validate retry_on_type_error
        if "retry_on_type_error" in params:
            value = params["retry_on_type_error"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="retry_on_type_error",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_error_log_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate internal error log parameters."""
        errors = []

        if "max_internal_errors" in params:
            value = params["max_internal_errors"]
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                errors.append(ValidationError(
                    field="max_internal_errors",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "retry" in config:
            errors.extend(ConfigValidator.validate_retry_params(config["retry"]))

        if "error_log" in config:
            errors.extend(ConfigValidator.validate_error_log_params(config["error_log"]))

        return errors
