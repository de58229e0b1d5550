"""Brokerage-specific error classification and reporting."""

from typing import Any, Optional

from ..logging.config import get_error_logger
from .classification import ClassifiedError, classify_error, create_classified_error
from .taxonomy import ErrorCategory, ErrorType

# (connection method or None, method substrings or None, any-of message
# fragments, all-of message fragments, user message, error type, status)
_BROKER_RULES = (
    # TWS desktop gateway
    ("tws", None, ("not running",), ("tws",),
     "Interactive Brokers Trader Workstation (TWS) is not running. Please start TWS and try again.",
     ErrorType.CONNECTION_REFUSED, None),
    ("tws", None, ("api connections disabled",), (),
     "API connections are disabled in TWS. Please enable API connections in TWS settings.",
     ErrorType.PERMISSION_DENIED, None),
    ("tws", None, ("in use", "unavailable"), ("port",),
     "TWS port is unavailable or in use. Please check your port configuration.",
     ErrorType.CONNECTION_REFUSED, None),
    ("tws", None, ("version mismatch",), (),
     "TWS version is incompatible. Please update either TWS or this application.",
     ErrorType.CLIENT_ERROR, None),

    # Web API
    ("webapi", None, ("sso validation", "oauth"), (),
     "Authentication error with the brokerage. Please re-authorize the application.",
     ErrorType.AUTH_INVALID, None),
    ("webapi", None, ("token expired", "invalid token"), (),
     "Your brokerage session has expired. Please log in again.",
     ErrorType.AUTH_EXPIRED, None),
    ("webapi", None, ("invalid",), ("api key",),
     "Invalid API key for the brokerage. Please check your API key configuration.",
     ErrorType.AUTH_INVALID, None),
    ("webapi", None, ("too many requests", "rate limit"), (),
     "You have reached the rate limit for the brokerage API. Please try again later.",
     ErrorType.RATE_LIMIT_EXCEEDED, 429),

    # Market data
    (None, ("marketData", "getMarketData", "market_data"), ("market data subscription",), (),
     "Market data subscription required. Please check your market data subscriptions.",
     ErrorType.SUBSCRIPTION_REQUIRED, None),
    (None, ("marketData", "getMarketData", "market_data"), ("no market data permissions",), (),
     "No market data permissions. Please check your market data subscriptions.",
     ErrorType.PERMISSION_DENIED, None),
    (None, ("marketData", "getMarketData", "market_data"), ("symbol not found", "unknown symbol"), (),
     "Symbol not found. Please check the ticker symbol.",
     ErrorType.INVALID_PARAMETERS, None),

    # Option chains
    (None, ("optionChain", "getOptions", "options"), ("no options data",), (),
     "No options data available for this symbol.",
     ErrorType.MISSING_DATA, None),

    # Trade execution
    (None, ("placeTrade", "executeTrade", "place_trade", "execute_trade"),
     ("insufficient funds", "buying power"), (),
     "Insufficient funds to execute this trade.",
     ErrorType.PERMISSION_DENIED, None),
    (None, ("placeTrade", "executeTrade", "place_trade", "execute_trade"), ("invalid order",), (),
     "Invalid order parameters. Please check your trade details.",
     ErrorType.INVALID_PARAMETERS, None),
    (None, ("placeTrade", "executeTrade", "place_trade", "execute_trade"),
     ("market closed", "outside trading hours"), (),
     "Market is closed. This order will be submitted when the market opens.",
     ErrorType.API_ERROR, None),
)


def _classify_broker_error(error: Any, context: dict[str, Any]) -> Optional[ClassifiedError]:
    lower_message = str(getattr(error, "message", None) or error or "").lower()
    connection_method = context.get("connection_method")
    method = str(context.get("method", ""))

    for rule_connection, rule_methods, any_of, all_of, message, error_type, status in _BROKER_RULES:
        if rule_connection is not None and rule_connection != connection_method:
            continue
        if rule_methods is not None and not any(m in method for m in rule_methods):
            continue
        if any(part in lower_message for part in any_of) and all(
            part in lower_message for part in all_of
        ):
            return create_classified_error(
                message,
                error_type,
                status=status,
                original_error=error if isinstance(error, BaseException) else None,
                context=context,
            )

    return None


def handle_broker_error(error: Any, context: dict[str, Any]) -> ClassifiedError:
    """
    Classify and report a brokerage error.

    Brokerage-specific message rules (selected by ``connection_method`` and
    ``method`` in the context) take precedence; anything else falls back to
    the generic classifier. Never raises.

    Args:
        error: Raised value from a brokerage call
        context: Diagnostic fields; ``service`` and ``method`` are expected,
            ``connection_method`` ("tws" or "webapi") is optional

    Returns:
        ClassifiedError carrying the context
    """
    logger = get_error_logger(__name__)

    try:
        classified = _classify_broker_error(error, context) or classify_error(error, context=context)
    except Exception as handling_error:
        logger.error("Error in broker error handler", error=str(handling_error))
        return classify_error(error)

    logger.error(
        "Broker error",
        event_type="broker_error",
        service=context.get("service"),
        method=context.get("method"),
        connection_method=context.get("connection_method"),
        category=classified.category.value,
        error_type=classified.error_type.value,
        status=classified.status,
        original=str(error),
    )
    return classified


def get_broker_retry_delay(error: ClassifiedError, attempt: int) -> float:
    """Get a category-specific retry delay in milliseconds."""
    base_delay = 1000.0

    if error.error_type == ErrorType.RATE_LIMIT_EXCEEDED:
        return min(30000.0, base_delay * 2 ** (attempt + 1))

    if error.category == ErrorCategory.CONNECTION:
        return min(10000.0, base_delay * 1.5 ** attempt)

    if error.category == ErrorCategory.TIMEOUT:
        return min(15000.0, base_delay * 1.5 ** attempt)

    return min(20000.0, base_delay * 1.8 ** attempt)
