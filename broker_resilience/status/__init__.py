"""Status aggregation: active error resolution, combined flags, data refresh."""

from .combiner import CombinedStatus, StatusSignals, combine_status
from .error_handler import ErrorHandler
from .refresh import DataRefresher

__all__ = [
    "CombinedStatus",
    "DataRefresher",
    "ErrorHandler",
    "StatusSignals",
    "combine_status",
]
