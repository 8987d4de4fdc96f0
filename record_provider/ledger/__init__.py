"""Ledger-query collaborators."""

from .adapter import InsufficientRecordsError, RpcLedgerClient
from .client import LedgerClient
from .rpc_client import LedgerConnectionError, LedgerError, LedgerQueryError, LedgerRpcClient

__all__ = [
    "LedgerClient", "LedgerRpcClient", "RpcLedgerClient",
    "LedgerError", "LedgerConnectionError", "LedgerQueryError", "InsufficientRecordsError",
]
