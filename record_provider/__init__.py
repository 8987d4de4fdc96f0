"""
Record discovery for transaction building.

Structure:
    record_provider/
    ├── types.py          # Record, Account
    ├── errors.py         # Error values returned by providers
    ├── search.py         # Search parameters, height window resolution
    ├── ledger/           # Ledger-query client and adapter
    └── providers/        # Network-backed and in-memory providers

Usage:
    from record_provider import Account, BlockHeightSearch, NetworkRecordProvider
    from record_provider.ledger import LedgerRpcClient, RpcLedgerClient
"""

from .errors import (
    HeightResolutionError, RecordNotFoundError, RecordProviderError,
    UnsupportedOperationError, is_error, raise_for_result,
)
from .providers import BaseRecordProvider, InMemoryRecordProvider, NetworkRecordProvider, RecordProvider
from .search import (
    BlockHeightSearch, HeightWindow, NoConstraint, OpenSearch, ProgramRecordSearch,
    SearchParams, as_search_params, resolve_height_window,
)
from .types import Account, Record, CREDITS_PROGRAM, credits_to_microcredits, record_nonces

__all__ = [
    # Types
    "Account",
    "Record",
    "CREDITS_PROGRAM",
    "credits_to_microcredits",
    "record_nonces",
    # Errors
    "RecordProviderError",
    "RecordNotFoundError",
    "UnsupportedOperationError",
    "HeightResolutionError",
    "is_error",
    "raise_for_result",
    # Search
    "SearchParams",
    "NoConstraint",
    "BlockHeightSearch",
    "ProgramRecordSearch",
    "OpenSearch",
    "HeightWindow",
    "as_search_params",
    "resolve_height_window",
    # Providers
    "RecordProvider",
    "BaseRecordProvider",
    "NetworkRecordProvider",
    "InMemoryRecordProvider",
]
