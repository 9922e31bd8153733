"""Gateway Services"""

from .proxy import ProxyResult, UpstreamProxy
from .record_store import WorkoutRecordStore, utc_timestamp

__all__ = [
    "ProxyResult",
    "UpstreamProxy",
    "WorkoutRecordStore",
    "utc_timestamp",
]
