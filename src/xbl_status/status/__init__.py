"""Status fetching and classification."""

from xbl_status.status.fetcher import StatusFetcher, fetch_status
from xbl_status.status.models import FailureKind, FetchResult, MessageKind, NormalizedService, ServiceLevel
from xbl_status.status.wire import RawServiceStatus, StatusEnvelope

__all__ = [
    "FailureKind",
    "FetchResult",
    "MessageKind",
    "NormalizedService",
    "RawServiceStatus",
    "ServiceLevel",
    "StatusEnvelope",
    "StatusFetcher",
    "fetch_status",
]
