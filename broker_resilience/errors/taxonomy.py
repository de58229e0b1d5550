"""
Error taxonomy shared by all brokerage data providers.

Categories are coarse buckets used for display and priority decisions;
error types are the finer-grained tags inside each category.
"""

from enum import Enum


class ErrorCategory(str, Enum):
    """Common error categories across all data providers."""
    CONNECTION = "connection"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    DATA = "data"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    API = "api"
    CLIENT = "client"
    UNKNOWN = "unknown"


class ErrorType(str, Enum):
    """More specific error types within categories."""
    # Connection errors
    NETWORK_OFFLINE = "network_offline"
    CONNECTION_REFUSED = "connection_refused"
    CONNECTION_TIMEOUT = "connection_timeout"
    CONNECTION_CLOSED = "connection_closed"

    # Authentication errors
    AUTH_EXPIRED = "auth_expired"
    AUTH_INVALID = "auth_invalid"
    AUTH_MISSING = "auth_missing"
    AUTH_REQUIRED = "auth_required"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"
    ACCOUNT_DISABLED = "account_disabled"
    SUBSCRIPTION_REQUIRED = "subscription_required"
    READ_ONLY_ACCESS = "read_only_access"

    # Data errors
    INVALID_RESPONSE = "invalid_response"
    SCHEMA_VALIDATION = "schema_validation"
    MISSING_DATA = "missing_data"
    DATA_CORRUPTED = "data_corrupted"

    # Rate limiting errors
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    TOO_MANY_REQUESTS = "too_many_requests"
    QUOTA_EXCEEDED = "quota_exceeded"

    # Timeout errors
    REQUEST_TIMEOUT = "request_timeout"
    RESPONSE_TIMEOUT = "response_timeout"
    GATEWAY_TIMEOUT = "gateway_timeout"

    # API errors
    API_ERROR = "api_error"
    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    SERVICE_UNAVAILABLE = "service_unavailable"

    # Client errors
    INVALID_PARAMETERS = "invalid_parameters"
    CLIENT_ERROR = "client_error"
    ABORTED = "aborted"

    UNKNOWN = "unknown"


HTTP_STATUS_TO_CATEGORY: dict[int, ErrorCategory] = {
    400: ErrorCategory.CLIENT,
    401: ErrorCategory.AUTHENTICATION,
    403: ErrorCategory.PERMISSION,
    404: ErrorCategory.API,
    408: ErrorCategory.TIMEOUT,
    409: ErrorCategory.DATA,
    413: ErrorCategory.CLIENT,
    422: ErrorCategory.DATA,
    429: ErrorCategory.RATE_LIMIT,
    500: ErrorCategory.API,
    502: ErrorCategory.API,
    503: ErrorCategory.API,
    504: ErrorCategory.TIMEOUT,
}

HTTP_STATUS_TO_ERROR_TYPE: dict[int, ErrorType] = {
    400: ErrorType.INVALID_PARAMETERS,
    401: ErrorType.AUTH_INVALID,
    403: ErrorType.PERMISSION_DENIED,
    404: ErrorType.ENDPOINT_NOT_FOUND,
    408: ErrorType.REQUEST_TIMEOUT,
    409: ErrorType.DATA_CORRUPTED,
    413: ErrorType.QUOTA_EXCEEDED,
    422: ErrorType.SCHEMA_VALIDATION,
    429: ErrorType.RATE_LIMIT_EXCEEDED,
    500: ErrorType.API_ERROR,
    502: ErrorType.API_ERROR,
    503: ErrorType.SERVICE_UNAVAILABLE,
    504: ErrorType.GATEWAY_TIMEOUT,
}

# Symbolic socket error names as found on ``errno`` / ``code`` attributes
NETWORK_CODE_TO_ERROR_TYPE: dict[str, ErrorType] = {
    "ECONNREFUSED": ErrorType.CONNECTION_REFUSED,
    "ECONNRESET": ErrorType.CONNECTION_CLOSED,
    "ETIMEDOUT": ErrorType.CONNECTION_TIMEOUT,
    "ESOCKETTIMEDOUT": ErrorType.CONNECTION_TIMEOUT,
    "ENOTFOUND": ErrorType.ENDPOINT_NOT_FOUND,
    "ECONNABORTED": ErrorType.ABORTED,
    "ENETUNREACH": ErrorType.NETWORK_OFFLINE,
    "ENETDOWN": ErrorType.NETWORK_OFFLINE,
    "EHOSTUNREACH": ErrorType.NETWORK_OFFLINE,
}

# Network timeouts are reported under TIMEOUT even though the type is a
# connection one
NETWORK_CODE_TO_CATEGORY: dict[str, ErrorCategory] = {
    "ETIMEDOUT": ErrorCategory.TIMEOUT,
    "ESOCKETTIMEDOUT": ErrorCategory.TIMEOUT,
}

ERROR_MESSAGES: dict[ErrorType, str] = {
    ErrorType.NETWORK_OFFLINE: "Your internet connection appears to be offline.",
    ErrorType.CONNECTION_REFUSED: "The connection was refused. The server may be down or not accepting connections.",
    ErrorType.CONNECTION_TIMEOUT: "The connection timed out. Please try again later.",
    ErrorType.CONNECTION_CLOSED: "The connection was closed unexpectedly.",

    ErrorType.AUTH_EXPIRED: "Your authentication has expired. Please log in again.",
    ErrorType.AUTH_INVALID: "Invalid authentication credentials. Please check your API key or login information.",
    ErrorType.AUTH_MISSING: "Authentication credentials are missing. Please provide your API key or login information.",
    ErrorType.AUTH_REQUIRED: "Authentication is required to access this resource.",

    ErrorType.PERMISSION_DENIED: "You don't have permission to perform this action.",
    ErrorType.ACCOUNT_DISABLED: "Your account has been disabled. Please contact support.",
    ErrorType.SUBSCRIPTION_REQUIRED: "A subscription is required for this feature.",
    ErrorType.READ_ONLY_ACCESS: "You have read-only access to this resource.",

    ErrorType.INVALID_RESPONSE: "Invalid response received from the server.",
    ErrorType.SCHEMA_VALIDATION: "The data format is invalid or incomplete.",
    ErrorType.MISSING_DATA: "Required data is missing from the response.",
    ErrorType.DATA_CORRUPTED: "The data appears to be corrupted or in an unexpected format.",

    ErrorType.RATE_LIMIT_EXCEEDED: "Rate limit exceeded. Please try again later.",
    ErrorType.TOO_MANY_REQUESTS: "Too many requests. Please slow down and try again later.",
    ErrorType.QUOTA_EXCEEDED: "Your API quota has been exceeded for this time period.",

    ErrorType.REQUEST_TIMEOUT: "The request timed out. Please try again later.",
    ErrorType.RESPONSE_TIMEOUT: "The server took too long to respond. Please try again later.",
    ErrorType.GATEWAY_TIMEOUT: "The gateway timed out. Please try again later.",

    ErrorType.API_ERROR: "An API error occurred. Please try again later.",
    ErrorType.ENDPOINT_NOT_FOUND: "The requested API endpoint was not found.",
    ErrorType.METHOD_NOT_ALLOWED: "The requested method is not allowed for this endpoint.",
    ErrorType.SERVICE_UNAVAILABLE: "The service is temporarily unavailable. Please try again later.",

    ErrorType.INVALID_PARAMETERS: "Invalid parameters were provided in the request.",
    ErrorType.CLIENT_ERROR: "An error occurred in the client application.",
    ErrorType.ABORTED: "The operation was aborted.",

    ErrorType.UNKNOWN: "An unknown error occurred.",
}

RETRYABLE_ERROR_TYPES: frozenset[ErrorType] = frozenset({
    ErrorType.NETWORK_OFFLINE,
    ErrorType.CONNECTION_TIMEOUT,
    ErrorType.CONNECTION_CLOSED,
    ErrorType.RATE_LIMIT_EXCEEDED,
    ErrorType.TOO_MANY_REQUESTS,
    ErrorType.REQUEST_TIMEOUT,
    ErrorType.RESPONSE_TIMEOUT,
    ErrorType.GATEWAY_TIMEOUT,
    ErrorType.SERVICE_UNAVAILABLE,
})

_CATEGORY_MEMBERS = (
    ({ErrorType.NETWORK_OFFLINE, ErrorType.CONNECTION_REFUSED,
      ErrorType.CONNECTION_TIMEOUT, ErrorType.CONNECTION_CLOSED}, ErrorCategory.CONNECTION),
    ({ErrorType.AUTH_EXPIRED, ErrorType.AUTH_INVALID,
      ErrorType.AUTH_MISSING, ErrorType.AUTH_REQUIRED}, ErrorCategory.AUTHENTICATION),
    ({ErrorType.PERMISSION_DENIED, ErrorType.ACCOUNT_DISABLED,
      ErrorType.SUBSCRIPTION_REQUIRED, ErrorType.READ_ONLY_ACCESS}, ErrorCategory.PERMISSION),
    ({ErrorType.INVALID_RESPONSE, ErrorType.SCHEMA_VALIDATION,
      ErrorType.MISSING_DATA, ErrorType.DATA_CORRUPTED}, ErrorCategory.DATA),
    ({ErrorType.RATE_LIMIT_EXCEEDED, ErrorType.TOO_MANY_REQUESTS,
      ErrorType.QUOTA_EXCEEDED}, ErrorCategory.RATE_LIMIT),
    ({ErrorType.REQUEST_TIMEOUT, ErrorType.RESPONSE_TIMEOUT,
      ErrorType.GATEWAY_TIMEOUT}, ErrorCategory.TIMEOUT),
    ({ErrorType.API_ERROR, ErrorType.ENDPOINT_NOT_FOUND,
      ErrorType.METHOD_NOT_ALLOWED, ErrorType.SERVICE_UNAVAILABLE}, ErrorCategory.API),
    ({ErrorType.INVALID_PARAMETERS, ErrorType.CLIENT_ERROR,
      ErrorType.ABORTED}, ErrorCategory.CLIENT),
)


def get_error_category_from_type(error_type: ErrorType) -> ErrorCategory:
    """Get the error category that owns an error type."""
    for members, category in _CATEGORY_MEMBERS:
        if error_type in members:
            return category
    return ErrorCategory.UNKNOWN
