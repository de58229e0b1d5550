"""Default configuration parameters for the broker resilience layer."""

from dataclasses import dataclass, field


DEFAULT_RETRYABLE_STATUS_CODES = frozenset({408, 429, 502, 503, 504})

# Jitter band limits; the jittered delay never exceeds max_delay_ms * JITTER_CEILING
JITTER_FLOOR = 0.8
JITTER_CEILING = 1.2


@dataclass(frozen=True)
class RetryPolicy:
    """Retry policy, immutable per executor instance."""
    max_retries: int = 3                             # Retries after the first attempt
    initial_delay_ms: float = 500                    # Delay before the first retry
    backoff_factor: float = 2.0                      # Multiplier per attempt
    max_delay_ms: float = 10000                      # Clamp applied before jitter
    retryable_status_codes: frozenset[int] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_STATUS_CODES
    )

    # Jitter band applied multiplicatively to the clamped delay
    jitter_min: float = JITTER_FLOOR
    jitter_max: float = JITTER_CEILING

    # Treat TypeError as a transport failure
    retry_on_type_error: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise ValueError(f"max_retries must be a non-negative integer, got {self.max_retries!r}")
        if self.initial_delay_ms <= 0:
            raise ValueError(f"initial_delay_ms must be positive, got {self.initial_delay_ms!r}")
        if self.backoff_factor < 1:
            raise ValueError(f"backoff_factor must be >= 1, got {self.backoff_factor!r}")
        if self.max_delay_ms <= 0:
            raise ValueError(f"max_delay_ms must be positive, got {self.max_delay_ms!r}")
        if not JITTER_FLOOR <= self.jitter_min <= self.jitter_max <= JITTER_CEILING:
            raise ValueError(
                f"jitter band must satisfy {JITTER_FLOOR} <= jitter_min <= jitter_max <= {JITTER_CEILING}, "
                f"got [{self.jitter_min!r}, {self.jitter_max!r}]"
            )
        # Accept any iterable of codes from YAML or call sites
        object.__setattr__(self, "retryable_status_codes", frozenset(self.retryable_status_codes))


@dataclass(frozen=True)
class ErrorLogParams:
    """Internal error log parameters."""
    max_internal_errors: int = 50      # Oldest entries are dropped past this size


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    retry: RetryPolicy
    error_log: ErrorLogParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        retry=RetryPolicy(),
        error_log=ErrorLogParams(),
    )
