"""
Normalization of arbitrary exceptions into classified errors.

Everything that crosses into the retry, priority and presentation logic is
first converted into a ``ClassifiedError`` so policy code never inspects
loosely-typed attributes of foreign exceptions.
"""

import asyncio
import copy
import errno
from typing import Any, Optional

from .taxonomy import (
    ERROR_MESSAGES,
    HTTP_STATUS_TO_CATEGORY,
    HTTP_STATUS_TO_ERROR_TYPE,
    NETWORK_CODE_TO_CATEGORY,
    NETWORK_CODE_TO_ERROR_TYPE,
    RETRYABLE_ERROR_TYPES,
    ErrorCategory,
    ErrorType,
    get_error_category_from_type,
)


class ClassifiedError(Exception):
    """Error tagged with a category and type from the shared taxonomy."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        error_type: ErrorType = ErrorType.UNKNOWN,
        context: Optional[dict[str, Any]] = None,
        status: Optional[int] = None,
        retryable: Optional[bool] = None,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.error_type = error_type
        self.context = dict(context or {})
        self.status = status
        self.retryable = error_type in RETRYABLE_ERROR_TYPES if retryable is None else retryable
        self.original_error = original_error

    def __repr__(self) -> str:
        return (
            f"ClassifiedError(category={self.category.value!r}, "
            f"error_type={self.error_type.value!r}, message={self.message!r})"
        )


# Checked in order; first match wins
_MESSAGE_PATTERNS: tuple[tuple[tuple[str, ...], tuple[str, ...], ErrorType], ...] = (
    (("network",), ("offline",), ErrorType.NETWORK_OFFLINE),
    ((), ("timeout", "timed out"), ErrorType.REQUEST_TIMEOUT),
    ((), ("connection refused",), ErrorType.CONNECTION_REFUSED),
    ((), ("unauthorized", "authentication failed"), ErrorType.AUTH_INVALID),
    ((), ("token expired", "session expired"), ErrorType.AUTH_EXPIRED),
    ((), ("forbidden", "permission denied"), ErrorType.PERMISSION_DENIED),
    ((), ("rate limit", "too many requests"), ErrorType.RATE_LIMIT_EXCEEDED),
    (("not found",), ("api", "endpoint"), ErrorType.ENDPOINT_NOT_FOUND),
    ((), ("service unavailable",), ErrorType.SERVICE_UNAVAILABLE),
    (("tws",), ("connection",), ErrorType.CONNECTION_REFUSED),
    (("ibkr",), ("auth",), ErrorType.AUTH_REQUIRED),
)


def _status_from(value: Any) -> Optional[int]:
    try:
        status = int(value)
    except (TypeError, ValueError):
        return None
    return status if status > 0 else None


def extract_status_code(error: Any) -> Optional[int]:
    """Return the HTTP-like status carried by an error, if any."""
    for attr in ("status", "status_code"):
        status = _status_from(getattr(error, attr, None))
        if status is not None:
            return status

    response = getattr(error, "response", None)
    if response is not None:
        for attr in ("status", "status_code"):
            status = _status_from(getattr(response, attr, None))
            if status is not None:
                return status

    return None


def extract_network_code(error: Any) -> Optional[str]:
    """Return the symbolic socket error name (``ECONNREFUSED``...) if any."""
    code = getattr(error, "code", None)
    if isinstance(code, str) and code.isupper():
        return code

    err_no = getattr(error, "errno", None)
    if isinstance(err_no, int):
        return errno.errorcode.get(err_no)

    return None


def _classify_by_exception_class(error: Any) -> Optional[ErrorType]:
    if isinstance(error, ConnectionRefusedError):
        return ErrorType.CONNECTION_REFUSED
    if isinstance(error, (ConnectionResetError, ConnectionAbortedError, BrokenPipeError)):
        return ErrorType.CONNECTION_CLOSED
    if isinstance(error, (TimeoutError, asyncio.TimeoutError)):
        return ErrorType.REQUEST_TIMEOUT
    if isinstance(error, ConnectionError):
        return ErrorType.NETWORK_OFFLINE
    return None


def _classify_by_message(message: str) -> Optional[ErrorType]:
    if not message:
        return None

    lower_message = message.lower()
    for required, any_of, error_type in _MESSAGE_PATTERNS:
        if all(part in lower_message for part in required) and (
            not any_of or any(part in lower_message for part in any_of)
        ):
            return error_type

    return None


def _message_of(error: Any) -> str:
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return str(error) if error is not None else ""


def classify_error(
    error: Any,
    default_category: ErrorCategory = ErrorCategory.UNKNOWN,
    default_type: ErrorType = ErrorType.UNKNOWN,
    context: Optional[dict[str, Any]] = None,
) -> ClassifiedError:
    """
    Classify an error based on its properties and content.

    Status codes win over network codes, which win over the exception
    class, which wins over message patterns. An already classified error is
    returned as is, or as a copy when ``context`` adds fields. The returned
    error carries the user-friendly message for its type and keeps the input as
    ``original_error``.

    Args:
        error: Any raised value (exception or error-like object)
        default_category: Category used when nothing matches
        default_type: Type used when nothing matches
        context: Diagnostic fields merged into the error context

    Returns:
        ClassifiedError for the input
    """
    if isinstance(error, ClassifiedError):
        if not context:
            return error
        merged = copy.copy(error)
        merged.context = {**error.context, **context}
        return merged

    category: Optional[ErrorCategory] = None
    error_type: Optional[ErrorType] = None

    status = extract_status_code(error)
    network_code = extract_network_code(error) if status is None else None

    if status is not None:
        category = HTTP_STATUS_TO_CATEGORY.get(status)
        error_type = HTTP_STATUS_TO_ERROR_TYPE.get(status)
    elif network_code in NETWORK_CODE_TO_ERROR_TYPE:
        error_type = NETWORK_CODE_TO_ERROR_TYPE[network_code]
        category = NETWORK_CODE_TO_CATEGORY.get(
            network_code, get_error_category_from_type(error_type)
        )
    else:
        error_type = _classify_by_exception_class(error) or _classify_by_message(_message_of(error))
        if error_type is not None:
            category = get_error_category_from_type(error_type)

    category = category or default_category
    error_type = error_type or default_type

    merged_context: dict[str, Any] = {}
    if network_code:
        merged_context["network_code"] = network_code
    if context:
        merged_context.update(context)

    return ClassifiedError(
        ERROR_MESSAGES.get(error_type, _message_of(error) or "An error occurred"),
        category=category,
        error_type=error_type,
        context=merged_context,
        status=status,
        original_error=error if isinstance(error, BaseException) else None,
    )


def create_classified_error(
    message: str,
    error_type: ErrorType,
    status: Optional[int] = None,
    original_error: Optional[BaseException] = None,
    context: Optional[dict[str, Any]] = None,
) -> ClassifiedError:
    """Create a classified error with an explicit type and custom message."""
    return ClassifiedError(
        message,
        category=get_error_category_from_type(error_type),
        error_type=error_type,
        context=context,
        status=status,
        original_error=original_error,
    )


def is_retryable_error(error: Any) -> bool:
    """Determine if an error is retryable by its classified type."""
    return classify_error(error).retryable


def get_user_friendly_message(error: Any) -> str:
    """Extract a user-friendly message from an error."""
    return classify_error(error).message
