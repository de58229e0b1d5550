"""
Error classification system for brokerage integrations.

This module provides the shared error taxonomy, normalization of arbitrary
exceptions into classified errors, brokerage-specific classification and
the display mapping used by the UI.
"""

from .taxonomy import (
    ERROR_MESSAGES,
    HTTP_STATUS_TO_CATEGORY,
    HTTP_STATUS_TO_ERROR_TYPE,
    RETRYABLE_ERROR_TYPES,
    ErrorCategory,
    ErrorType,
    get_error_category_from_type,
)
from .classification import (
    ClassifiedError,
    classify_error,
    create_classified_error,
    extract_status_code,
    get_user_friendly_message,
    is_retryable_error,
)
from .broker import (
    get_broker_retry_delay,
    handle_broker_error,
)
from .presentation import (
    ErrorPresentation,
    Severity,
    action_label,
    present_error,
)

__all__ = [
    # Taxonomy
    "ErrorCategory",
    "ErrorType",
    "ERROR_MESSAGES",
    "HTTP_STATUS_TO_CATEGORY",
    "HTTP_STATUS_TO_ERROR_TYPE",
    "RETRYABLE_ERROR_TYPES",
    "get_error_category_from_type",
    # Classification
    "ClassifiedError",
    "classify_error",
    "create_classified_error",
    "extract_status_code",
    "get_user_friendly_message",
    "is_retryable_error",
    # Brokerage
    "handle_broker_error",
    "get_broker_retry_delay",
    # Presentation
    "ErrorPresentation",
    "Severity",
    "action_label",
    "present_error",
]
