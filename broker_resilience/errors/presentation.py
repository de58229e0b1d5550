"""Display mapping for classified errors."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .classification import ClassifiedError
from .taxonomy import ErrorCategory, ErrorType


class Severity(str, Enum):
    """Alert variant used when rendering an error."""
    DESTRUCTIVE = "destructive"
    WARNING = "warning"
    INFORMATIONAL = "informational"


@dataclass(frozen=True)
class ErrorPresentation:
    """Everything the UI needs to render one error."""
    title: str
    icon: str
    variant: Severity
    description: str
    action_text: str
    error_type: Optional[ErrorType] = None


@dataclass(frozen=True)
class _CategoryStyle:
    title: str
    icon: str
    variant: Severity
    action_text: str = "Try again"


_DEFAULT_STYLE = _CategoryStyle("An error occurred", "alert-circle", Severity.DESTRUCTIVE)

CATEGORY_STYLES: dict[ErrorCategory, _CategoryStyle] = {
    ErrorCategory.CONNECTION: _CategoryStyle("Connection Error", "network", Severity.DESTRUCTIVE),
    ErrorCategory.AUTHENTICATION: _CategoryStyle("Authentication Error", "lock", Severity.DESTRUCTIVE, "Reconnect"),
    ErrorCategory.PERMISSION: _CategoryStyle("Permission Error", "file-warning", Severity.DESTRUCTIVE),
    ErrorCategory.CLIENT: _CategoryStyle("Client Error", "alert-circle", Severity.DESTRUCTIVE),
    ErrorCategory.TIMEOUT: _CategoryStyle("Timeout Error", "clock", Severity.WARNING),
    ErrorCategory.RATE_LIMIT: _CategoryStyle("Rate Limit Exceeded", "alert-triangle", Severity.WARNING, "Try again later"),
    ErrorCategory.DATA: _CategoryStyle("Data Error", "database", Severity.WARNING),
    ErrorCategory.API: _CategoryStyle("API Error", "server", Severity.WARNING),
    ErrorCategory.UNKNOWN: _DEFAULT_STYLE,
}

# Always replace the error's own message for these types
ERROR_TYPE_DESCRIPTIONS: dict[ErrorType, str] = {
    ErrorType.CONNECTION_REFUSED: (
        "Connection to Interactive Brokers was refused. "
        "Is TWS running and API connections enabled?"
    ),
    ErrorType.AUTH_EXPIRED: "Your Interactive Brokers session has expired. Please reconnect.",
    ErrorType.RATE_LIMIT_EXCEEDED: (
        "You've reached the rate limit for Interactive Brokers API. "
        "Please wait before trying again."
    ),
}


def present_error(error: Optional[BaseException]) -> Optional[ErrorPresentation]:
    """Map an error to its display tuple; ``None`` when there is nothing to show."""
    if error is None:
        return None

    if not isinstance(error, ClassifiedError):
        return ErrorPresentation(
            title=_DEFAULT_STYLE.title,
            icon=_DEFAULT_STYLE.icon,
            variant=_DEFAULT_STYLE.variant,
            description=str(error),
            action_text=_DEFAULT_STYLE.action_text,
        )

    style = CATEGORY_STYLES.get(error.category, _DEFAULT_STYLE)
    return ErrorPresentation(
        title=style.title,
        icon=style.icon,
        variant=style.variant,
        description=ERROR_TYPE_DESCRIPTIONS.get(error.error_type, error.message),
        action_text=style.action_text,
        error_type=error.error_type,
    )


def action_label(presentation: ErrorPresentation, is_retrying: bool = False) -> str:
    """Label for the retry button."""
    return "Retrying..." if is_retrying else presentation.action_text
