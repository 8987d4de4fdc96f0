"""Record providers for all supported backing stores."""

from .base import BaseRecordProvider, RecordProvider, RecordResult, RecordsResult
from .memory import InMemoryRecordProvider
from .network import NetworkRecordProvider

__all__ = [
    "RecordProvider", "BaseRecordProvider", "RecordResult", "RecordsResult",
    "NetworkRecordProvider", "InMemoryRecordProvider",
]
